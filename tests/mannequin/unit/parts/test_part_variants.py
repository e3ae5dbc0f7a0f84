from __future__ import annotations

import math

import pytest

from mannequin.parts.part import Part, PartKind, PartVariantError
from mannequin.parts.types import PartTextureType
from mannequin.parts.uv import FaceUv, box_uv
from mannequin.parts.vector import Vec3


def _cube() -> Part:
    return Part.new_cube(PartTextureType.SKIN, (-4, 24, -4), (8, 8, 8), box_uv(0, 0, 8, 8, 8))


def _quad() -> Part:
    return Part.new_quad(
        PartTextureType.SHADOW,
        (-8, 0, -8),
        (16, 0, 16),
        FaceUv.from_rect(0, 0, 128, 128),
        (0, 1, 0),
    )


def test_constructors_tag_variants() -> None:
    assert _cube().kind is PartKind.CUBE
    assert _cube().is_cube is True
    assert _quad().kind is PartKind.QUAD
    assert _quad().is_quad is True


def test_cube_rejects_quad_accessors() -> None:
    cube = _cube()
    with pytest.raises(PartVariantError):
        _ = cube.normal
    with pytest.raises(PartVariantError):
        _ = cube.face_uv
    with pytest.raises(PartVariantError):
        cube.normal = Vec3(0, 1, 0)


def test_quad_rejects_cube_accessors() -> None:
    quad = _quad()
    with pytest.raises(PartVariantError):
        _ = quad.face_uvs
    with pytest.raises(PartVariantError):
        quad.face_uvs = box_uv(0, 0, 1, 1, 1)


def test_variant_error_is_a_type_error() -> None:
    with pytest.raises(TypeError):
        _ = _quad().face_uvs


def test_cube_expand_keeps_center_and_grows_both_sides() -> None:
    cube = _cube()
    expanded = cube.expand_splat(0.5)
    assert expanded.size == Vec3(9, 9, 9)
    assert expanded.position == Vec3(-4.5, 23.5, -4.5)
    assert expanded.position + expanded.size / 2 == cube.position + cube.size / 2
    assert cube.size == Vec3(8, 8, 8)


def test_quad_expand_keeps_position() -> None:
    quad = _quad()
    expanded = quad.expand(Vec3(1, 0, 1))
    assert expanded.position == quad.position
    assert expanded.size == Vec3(18, 0, 18)


def test_expand_to_negative_size_is_rejected() -> None:
    with pytest.raises(ValueError):
        _cube().expand_splat(-5)


def test_construction_rejects_bad_geometry() -> None:
    with pytest.raises(ValueError):
        Part.new_cube(PartTextureType.SKIN, (0, 0, 0), (-1, 1, 1), box_uv(0, 0, 1, 1, 1))
    with pytest.raises(ValueError):
        Part.new_cube(PartTextureType.SKIN, (math.nan, 0, 0), (1, 1, 1), box_uv(0, 0, 1, 1, 1))


def test_copy_is_independent() -> None:
    cube = _cube()
    clone = cube.copy()
    assert clone == cube
    clone.rotate(Vec3(0, 90, 0))
    clone.set_texture(PartTextureType.CAPE)
    assert clone != cube
    assert cube.texture is PartTextureType.SKIN


def _raw_part(kind: PartKind, **payload) -> Part:
    return Part(
        kind=kind,
        texture=PartTextureType.SKIN,
        position=Vec3(0, 0, 0),
        size=Vec3(1, 1, 1),
        **payload,
    )


@pytest.mark.parametrize(
    ("kind", "payload"),
    [
        (PartKind.CUBE, {}),
        (PartKind.CUBE, {"face_uv": FaceUv.from_rect(0, 0, 1, 1), "normal": Vec3(0, 1, 0)}),
        (
            PartKind.CUBE,
            {"face_uvs": box_uv(0, 0, 1, 1, 1), "normal": Vec3(0, 1, 0)},
        ),
        (PartKind.QUAD, {}),
        (PartKind.QUAD, {"face_uvs": box_uv(0, 0, 1, 1, 1)}),
        (PartKind.QUAD, {"face_uv": FaceUv.from_rect(0, 0, 1, 1)}),
        (
            PartKind.QUAD,
            {
                "face_uv": FaceUv.from_rect(0, 0, 1, 1),
                "normal": Vec3(0, 1, 0),
                "face_uvs": box_uv(0, 0, 1, 1, 1),
            },
        ),
    ],
)
def test_constructor_rejects_payload_of_other_kind(kind: PartKind, payload: dict) -> None:
    with pytest.raises(PartVariantError):
        _raw_part(kind, **payload)


def test_constructor_accepts_matching_payload() -> None:
    cube = _raw_part(PartKind.CUBE, face_uvs=box_uv(0, 0, 1, 1, 1))
    quad = _raw_part(PartKind.QUAD, face_uv=FaceUv.from_rect(0, 0, 1, 1), normal=Vec3(0, 0, 1))
    assert cube.face_uvs == box_uv(0, 0, 1, 1, 1)
    assert quad.normal == Vec3(0, 0, 1)


@pytest.mark.parametrize(
    "amount",
    [Vec3(0, 1, 2), Vec3(3, 0, 0.25), Vec3(0, 0, 0), Vec3(0.5, 0.5, 0.5)],
)
def test_cube_expand_keeps_center_for_any_amount(amount: Vec3) -> None:
    cube = _cube()
    expanded = cube.expand(amount)
    assert expanded.size == cube.size + amount * 2
    assert expanded.position + expanded.size / 2 == cube.position + cube.size / 2
    assert cube.size == Vec3(8, 8, 8)
