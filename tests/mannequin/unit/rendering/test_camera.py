from __future__ import annotations

import numpy as np

from mannequin.api.render import Camera
from mannequin.parts.vector import Vec3
from mannequin.rendering.camera import forward_vector, view_projection


def _project(matrix: np.ndarray, point: tuple[float, float, float]) -> np.ndarray:
    clip = matrix @ np.array((*point, 1.0))
    return clip[:3] / clip[3]


def test_default_camera_looks_toward_positive_z() -> None:
    np.testing.assert_allclose(forward_vector(Camera()), (0.0, 0.0, 1.0), atol=1e-12)


def test_point_on_view_axis_projects_to_center_with_unit_depth_range() -> None:
    matrix = view_projection(Camera(), 1.0)
    ndc = _project(matrix, (0.0, 16.0, 0.0))
    np.testing.assert_allclose(ndc[:2], (0.0, 0.0), atol=1e-9)
    assert 0.0 < ndc[2] < 1.0


def test_nearer_points_get_smaller_depth() -> None:
    matrix = view_projection(Camera(), 1.0)
    near = _project(matrix, (0.0, 16.0, -4.0))
    far = _project(matrix, (0.0, 16.0, 4.0))
    assert near[2] < far[2]


def test_model_right_side_appears_on_screen_left() -> None:
    matrix = view_projection(Camera(position=Vec3(0, 16, -44)), 0.6)
    assert _project(matrix, (6.0, 16.0, 0.0))[0] < 0.0
    assert _project(matrix, (0.0, 30.0, 0.0))[1] > 0.0
