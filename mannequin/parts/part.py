"""Declarative box/quad parts and the anchor system used to rotate them.

A ``Part`` is a closed two-variant union tagged by ``PartKind``:

- ``CUBE``: a box with six face rectangles.
- ``QUAD``: a single oriented plane with one face rectangle and a normal.

Both variants share position, size, texture and an accumulated rotation
matrix. Variant-specific accessors raise ``PartVariantError`` when used on the
other variant; a part never changes variant after construction.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import StrEnum

import numpy as np

from mannequin.parts.transform import identity, pivot_rotation
from mannequin.parts.types import BodyPartType, PartTextureType
from mannequin.parts.uv import CubeFaceUvs, FaceUv
from mannequin.parts.vector import ZERO, Vec3


class PartKind(StrEnum):
    """Part variant tag."""

    CUBE = "CUBE"
    QUAD = "QUAD"


class PartVariantError(TypeError):
    """Variant-specific accessor used on the wrong part variant."""


@dataclass(frozen=True, slots=True)
class PartAnchorInfo:
    """Rotation pivot plus pre-rotation translation for ``Part.rotate``.

    Combinators add to the existing offsets instead of replacing them, so
    anchors compose across nested rotation frames (limb inside body).
    """

    rotation_anchor: Vec3 = ZERO
    translation_anchor: Vec3 = ZERO

    def with_rotation_anchor(self, rotation_anchor: Vec3) -> PartAnchorInfo:
        return replace(self, rotation_anchor=self.rotation_anchor + rotation_anchor)

    def with_translation_anchor(self, translation_anchor: Vec3) -> PartAnchorInfo:
        return replace(self, translation_anchor=self.translation_anchor + translation_anchor)

    @classmethod
    def new_rotation_anchor_position(cls, rotation_anchor: Vec3) -> PartAnchorInfo:
        return cls(rotation_anchor=rotation_anchor, translation_anchor=ZERO)

    @classmethod
    def new_part_anchor_translate(
        cls, part_type: BodyPartType, slim_arms: bool
    ) -> PartAnchorInfo:
        """Anchor at the base position of a body part, pivoting there too."""
        from mannequin.parts.provider import compute_base_part

        position = compute_base_part(part_type, slim_arms).position
        return cls(rotation_anchor=position, translation_anchor=position)


def _require_finite(name: str, value: Vec3) -> Vec3:
    if not value.is_finite():
        raise ValueError(f"{name} must be finite: {value}")
    return value


def _require_size(value: Vec3) -> Vec3:
    _require_finite("size", value)
    if value.x < 0.0 or value.y < 0.0 or value.z < 0.0:
        raise ValueError(f"size must be non-negative: {value}")
    return value


def _require_payload(
    kind: PartKind,
    face_uvs: CubeFaceUvs | None,
    face_uv: FaceUv | None,
    normal: Vec3 | None,
) -> None:
    if kind is PartKind.CUBE:
        if face_uvs is None:
            raise PartVariantError("cube part requires face UVs")
        if face_uv is not None or normal is not None:
            raise PartVariantError("cube part cannot carry a single face UV or a normal")
    elif kind is PartKind.QUAD:
        if face_uv is None or normal is None:
            raise PartVariantError("quad part requires a face UV and a normal")
        if face_uvs is not None:
            raise PartVariantError("quad part cannot carry cube face UVs")
    else:
        raise PartVariantError(f"unknown part kind: {kind!r}")


class Part:
    """One box or plane of a character model before rendering."""

    __slots__ = (
        "_kind",
        "_texture",
        "_position",
        "_size",
        "_rotation_matrix",
        "_face_uvs",
        "_face_uv",
        "_normal",
    )

    def __init__(
        self,
        *,
        kind: PartKind,
        texture: PartTextureType,
        position: Vec3,
        size: Vec3,
        face_uvs: CubeFaceUvs | None = None,
        face_uv: FaceUv | None = None,
        normal: Vec3 | None = None,
    ) -> None:
        _require_payload(kind, face_uvs, face_uv, normal)
        self._kind = kind
        self._texture = texture
        self._position = _require_finite("position", position)
        self._size = _require_size(size)
        self._rotation_matrix = identity()
        self._face_uvs = face_uvs
        self._face_uv = face_uv
        self._normal = None if normal is None else _require_finite("normal", normal)

    @classmethod
    def new_cube(
        cls,
        texture: PartTextureType,
        pos: Sequence[float],
        size: Sequence[float],
        uvs: CubeFaceUvs,
    ) -> Part:
        """Create a box part.

        ``pos`` is the minimum corner ``[x, y, z]``; ``size`` is ``[x, y, z]``.
        ``uvs`` holds the north, south, east, west, up and down rectangles.
        """
        return cls(
            kind=PartKind.CUBE,
            texture=texture,
            position=Vec3.of(pos),
            size=Vec3.of(size),
            face_uvs=uvs,
        )

    @classmethod
    def new_quad(
        cls,
        texture: PartTextureType,
        pos: Sequence[float],
        size: Sequence[float],
        uv: FaceUv,
        normal: Sequence[float],
    ) -> Part:
        """Create a flat plane part with an explicit face normal."""
        return cls(
            kind=PartKind.QUAD,
            texture=texture,
            position=Vec3.of(pos),
            size=Vec3.of(size),
            face_uv=uv,
            normal=_require_finite("normal", Vec3.of(normal)),
        )

    @property
    def kind(self) -> PartKind:
        return self._kind

    @property
    def is_cube(self) -> bool:
        return self._kind is PartKind.CUBE

    @property
    def is_quad(self) -> bool:
        return self._kind is PartKind.QUAD

    @property
    def position(self) -> Vec3:
        return self._position

    @position.setter
    def position(self, value: Vec3) -> None:
        self._position = _require_finite("position", value)

    @property
    def size(self) -> Vec3:
        return self._size

    @size.setter
    def size(self, value: Vec3) -> None:
        self._size = _require_size(value)

    @property
    def texture(self) -> PartTextureType:
        return self._texture

    def set_texture(self, texture: PartTextureType) -> None:
        self._texture = texture

    @property
    def rotation_matrix(self) -> np.ndarray:
        """Accumulated transform (read-only copy)."""
        matrix = self._rotation_matrix.copy()
        matrix.flags.writeable = False
        return matrix

    @property
    def face_uvs(self) -> CubeFaceUvs:
        if self._kind is not PartKind.CUBE:
            raise PartVariantError(f"cannot get face UVs on a {self._kind} part")
        return self._face_uvs

    @face_uvs.setter
    def face_uvs(self, value: CubeFaceUvs) -> None:
        if self._kind is not PartKind.CUBE:
            raise PartVariantError(f"cannot set face UVs on a {self._kind} part")
        self._face_uvs = value

    @property
    def face_uv(self) -> FaceUv:
        if self._kind is not PartKind.QUAD:
            raise PartVariantError(f"cannot get a single face UV on a {self._kind} part")
        return self._face_uv

    @face_uv.setter
    def face_uv(self, value: FaceUv) -> None:
        if self._kind is not PartKind.QUAD:
            raise PartVariantError(f"cannot set a single face UV on a {self._kind} part")
        self._face_uv = value

    @property
    def normal(self) -> Vec3:
        if self._kind is not PartKind.QUAD:
            raise PartVariantError(f"cannot get normal on a {self._kind} part")
        return self._normal

    @normal.setter
    def normal(self, value: Vec3) -> None:
        if self._kind is not PartKind.QUAD:
            raise PartVariantError(f"cannot set normal on a {self._kind} part")
        self._normal = _require_finite("normal", value)

    def copy(self) -> Part:
        clone = Part.__new__(Part)
        clone._kind = self._kind
        clone._texture = self._texture
        clone._position = self._position
        clone._size = self._size
        clone._rotation_matrix = self._rotation_matrix.copy()
        clone._face_uvs = self._face_uvs
        clone._face_uv = self._face_uv
        clone._normal = self._normal
        return clone

    def expand_splat(self, amount: float) -> Part:
        return self.expand(Vec3.splat(amount))

    def expand(self, amount: Vec3) -> Part:
        """Return a copy grown by ``amount`` on every side.

        Boxes stay centered. Quads keep their position since they describe a
        single oriented plane rather than a volume.
        """
        expanded = self.copy()
        grow = amount * 2.0
        expanded.size = self._size + grow
        if self._kind is PartKind.CUBE:
            expanded.position = self._position - amount
        return expanded

    def rotate(self, rotation: Vec3, anchor: PartAnchorInfo | None = None) -> None:
        """Apply a Y-X-Z Euler rotation (degrees) around ``anchor``.

        The part is first moved by ``anchor.translation_anchor``; the new
        rotation is then applied in world space around
        ``anchor.rotation_anchor``, outside any rotation already accumulated.
        """
        anchor = anchor if anchor is not None else PartAnchorInfo()
        self.position = self._position + anchor.translation_anchor
        model_transform = pivot_rotation(rotation, anchor.rotation_anchor)
        self._rotation_matrix = model_transform @ self._rotation_matrix

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Part):
            return NotImplemented
        return (
            self._kind is other._kind
            and self._texture is other._texture
            and self._position == other._position
            and self._size == other._size
            and np.array_equal(self._rotation_matrix, other._rotation_matrix)
            and self._face_uvs == other._face_uvs
            and self._face_uv == other._face_uv
            and self._normal == other._normal
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Part(kind={self._kind}, texture={self._texture}, "
            f"position={self._position}, size={self._size})"
        )
