"""4x4 affine transform helpers (row-major, column vectors: ``M @ v``)."""

from __future__ import annotations

import math

import numpy as np

from mannequin.parts.vector import Vec3


def identity() -> np.ndarray:
    return np.eye(4, dtype=np.float64)


def translation(offset: Vec3) -> np.ndarray:
    matrix = identity()
    matrix[0:3, 3] = (offset.x, offset.y, offset.z)
    return matrix


def rotation_x(radians: float) -> np.ndarray:
    c, s = math.cos(radians), math.sin(radians)
    matrix = identity()
    matrix[1, 1] = c
    matrix[1, 2] = -s
    matrix[2, 1] = s
    matrix[2, 2] = c
    return matrix


def rotation_y(radians: float) -> np.ndarray:
    c, s = math.cos(radians), math.sin(radians)
    matrix = identity()
    matrix[0, 0] = c
    matrix[0, 2] = s
    matrix[2, 0] = -s
    matrix[2, 2] = c
    return matrix


def rotation_z(radians: float) -> np.ndarray:
    c, s = math.cos(radians), math.sin(radians)
    matrix = identity()
    matrix[0, 0] = c
    matrix[0, 1] = -s
    matrix[1, 0] = s
    matrix[1, 1] = c
    return matrix


def euler_yxz(rotation_degrees: Vec3) -> np.ndarray:
    """Yaw (Y), then pitch (X), then roll (Z): ``Ry @ Rx @ Rz``."""
    return (
        rotation_y(math.radians(rotation_degrees.y))
        @ rotation_x(math.radians(rotation_degrees.x))
        @ rotation_z(math.radians(rotation_degrees.z))
    )


def pivot_rotation(rotation_degrees: Vec3, pivot: Vec3) -> np.ndarray:
    """Rotation around ``pivot``: ``T(pivot) @ R @ T(-pivot)``."""
    return translation(pivot) @ euler_yxz(rotation_degrees) @ translation(-pivot)


def transform_points(matrix: np.ndarray, points: np.ndarray) -> np.ndarray:
    """Apply an affine matrix to an ``(N, 3)`` array of points."""
    homogeneous = np.ones((points.shape[0], 4), dtype=np.float64)
    homogeneous[:, 0:3] = points
    return (homogeneous @ matrix.T)[:, 0:3]
