from __future__ import annotations

import numpy as np

from mannequin.parts.part import Part, PartAnchorInfo
from mannequin.parts.types import PartTextureType
from mannequin.parts.uv import box_uv
from mannequin.parts.vector import Vec3


def _cube(pos=(0, 0, 0), size=(2, 2, 2)) -> Part:
    return Part.new_cube(PartTextureType.SKIN, pos, size, box_uv(0, 0, 2, 2, 2))


def test_anchor_combinators_add_to_existing_offsets() -> None:
    anchor = (
        PartAnchorInfo()
        .with_rotation_anchor(Vec3(1, 2, 3))
        .with_rotation_anchor(Vec3(1, 1, 1))
        .with_translation_anchor(Vec3(0, 4, 0))
        .with_translation_anchor(Vec3(0, -1, 2))
    )
    assert anchor.rotation_anchor == Vec3(2, 3, 4)
    assert anchor.translation_anchor == Vec3(0, 3, 2)


def test_new_rotation_anchor_position_has_zero_translation() -> None:
    anchor = PartAnchorInfo.new_rotation_anchor_position(Vec3(4, 24, 0))
    assert anchor.rotation_anchor == Vec3(4, 24, 0)
    assert anchor.translation_anchor == Vec3()


def test_rotate_applies_translation_anchor_to_position() -> None:
    part = _cube()
    part.rotate(Vec3(), PartAnchorInfo(translation_anchor=Vec3(1, 2, 3)))
    assert part.position == Vec3(1, 2, 3)
    np.testing.assert_allclose(part.rotation_matrix, np.eye(4))


def test_rotations_compose_in_call_order() -> None:
    first = _cube()
    first.rotate(Vec3(90, 0, 0))
    first.rotate(Vec3(0, 90, 0))

    second = _cube()
    second.rotate(Vec3(0, 90, 0))
    second.rotate(Vec3(90, 0, 0))

    assert not np.allclose(first.rotation_matrix, second.rotation_matrix)


def test_anchored_rotations_depend_on_order() -> None:
    shoulder = PartAnchorInfo.new_rotation_anchor_position(Vec3(4, 24, 0))
    elbow = PartAnchorInfo.new_rotation_anchor_position(Vec3(6, 18, 0))

    first = _cube()
    first.rotate(Vec3(0, 0, 30), shoulder)
    first.rotate(Vec3(-45, 0, 0), elbow)

    second = _cube()
    second.rotate(Vec3(-45, 0, 0), elbow)
    second.rotate(Vec3(0, 0, 30), shoulder)

    assert not np.allclose(first.rotation_matrix, second.rotation_matrix)


def test_later_rotation_is_applied_outside_earlier_one() -> None:
    part = _cube()
    part.rotate(Vec3(0, 0, 90))
    part.rotate(Vec3(0, 90, 0))
    # +X -> +Y under the roll, then the yaw leaves +Y alone.
    moved = part.rotation_matrix @ np.array((1.0, 0.0, 0.0, 1.0))
    np.testing.assert_allclose(moved[:3], (0.0, 1.0, 0.0), atol=1e-9)


def test_rotation_around_pivot_keeps_pivot_fixed() -> None:
    part = _cube()
    pivot = Vec3(4, 24, 0)
    part.rotate(Vec3(0, 0, 10), PartAnchorInfo.new_rotation_anchor_position(pivot))
    moved = part.rotation_matrix @ np.array((*pivot, 1.0))
    np.testing.assert_allclose(moved[:3], tuple(pivot), atol=1e-9)


def test_rotation_matrix_is_read_only_copy() -> None:
    part = _cube()
    matrix = part.rotation_matrix
    assert matrix.flags.writeable is False
    part.rotate(Vec3(0, 45, 0))
    np.testing.assert_allclose(matrix, np.eye(4))
