from __future__ import annotations

import pytest

from mannequin.parts.uv import FaceUv, UvCoordinate, box_uv


def test_flips_are_involutions() -> None:
    face = FaceUv.from_rect(8, 8, 16, 16)
    assert face.flip_horizontally().flip_horizontally() == face
    assert face.flip_vertically().flip_vertically() == face
    assert face.flip_horizontally() != face


def test_flip_horizontally_swaps_left_and_right() -> None:
    flipped = FaceUv.from_rect(0, 0, 4, 2).flip_horizontally()
    assert flipped.top_left == UvCoordinate(4, 0)
    assert flipped.bottom_right == UvCoordinate(0, 2)


def test_to_uv_normalizes_by_texture_size() -> None:
    assert UvCoordinate(32, 16).to_uv((64, 32)) == (0.5, 0.5)


def test_box_uv_matches_head_net() -> None:
    faces = box_uv(0, 0, 8, 8, 8)
    assert faces.up == FaceUv.from_rect(8, 0, 16, 8)
    assert faces.down == FaceUv.from_rect(16, 0, 24, 8)
    assert faces.east == FaceUv.from_rect(0, 8, 8, 16)
    assert faces.north == FaceUv.from_rect(8, 8, 16, 16)
    assert faces.west == FaceUv.from_rect(16, 8, 24, 16)
    assert faces.south == FaceUv.from_rect(24, 8, 32, 16)


def test_box_uv_offsets_by_origin() -> None:
    faces = box_uv(40, 16, 4, 12, 4)
    assert faces.north == FaceUv.from_rect(44, 20, 48, 32)


@pytest.mark.parametrize(
    "face",
    [
        FaceUv.from_rect(0, 0, 4, 2),
        FaceUv.from_rect(40, 16, 44, 28),
        FaceUv.from_rect(8, 8, 16, 16).flip_horizontally(),
        FaceUv.from_rect(3, 7, 3, 9),
    ],
)
def test_flips_are_involutions_for_asymmetric_faces(face: FaceUv) -> None:
    assert face.flip_horizontally().flip_horizontally() == face
    assert face.flip_vertically().flip_vertically() == face
    assert face.flip_horizontally().flip_vertically() == face.flip_vertically().flip_horizontally()
