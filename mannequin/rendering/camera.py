"""View and projection matrices for the offscreen renderer."""

from __future__ import annotations

import math

import numpy as np

from mannequin.api.render import Camera


def forward_vector(camera: Camera) -> np.ndarray:
    yaw = math.radians(camera.yaw)
    pitch = math.radians(camera.pitch)
    return np.array(
        (math.sin(yaw) * math.cos(pitch), math.sin(pitch), math.cos(yaw) * math.cos(pitch)),
        dtype=np.float64,
    )


def look_to_rh(eye: np.ndarray, forward: np.ndarray, up: np.ndarray) -> np.ndarray:
    f = forward / np.linalg.norm(forward)
    s = np.cross(f, up)
    s = s / np.linalg.norm(s)
    u = np.cross(s, f)
    view = np.eye(4, dtype=np.float64)
    view[0, 0:3] = s
    view[1, 0:3] = u
    view[2, 0:3] = -f
    view[0:3, 3] = (-np.dot(s, eye), -np.dot(u, eye), np.dot(f, eye))
    return view


def perspective_rh(fov_y_degrees: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective with a 0..1 clip depth range."""
    f = 1.0 / math.tan(math.radians(fov_y_degrees) / 2.0)
    projection = np.zeros((4, 4), dtype=np.float64)
    projection[0, 0] = f / aspect
    projection[1, 1] = f
    projection[2, 2] = far / (near - far)
    projection[2, 3] = near * far / (near - far)
    projection[3, 2] = -1.0
    return projection


def view_projection(camera: Camera, aspect: float) -> np.ndarray:
    eye = camera.position.as_array()
    view = look_to_rh(eye, forward_vector(camera), np.array((0.0, 1.0, 0.0)))
    projection = perspective_rh(camera.fov, aspect, camera.near, camera.far)
    return projection @ view
