"""Texture-space face rectangles and box-UV layout helpers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UvCoordinate:
    """One face corner in texel units."""

    x: float
    y: float

    def to_uv(self, texture_size: tuple[int, int]) -> tuple[float, float]:
        """Normalize texel coordinates against the bound texture size."""
        width, height = texture_size
        return (self.x / float(width), self.y / float(height))


@dataclass(frozen=True, slots=True)
class FaceUv:
    """Texel rectangle of one face, stored as its four corners."""

    top_left: UvCoordinate
    top_right: UvCoordinate
    bottom_left: UvCoordinate
    bottom_right: UvCoordinate

    @classmethod
    def from_rect(cls, x1: float, y1: float, x2: float, y2: float) -> FaceUv:
        """Build an unflipped face from its top-left and bottom-right texels."""
        return cls(
            top_left=UvCoordinate(x1, y1),
            top_right=UvCoordinate(x2, y1),
            bottom_left=UvCoordinate(x1, y2),
            bottom_right=UvCoordinate(x2, y2),
        )

    def flip_horizontally(self) -> FaceUv:
        return FaceUv(
            top_left=self.top_right,
            top_right=self.top_left,
            bottom_left=self.bottom_right,
            bottom_right=self.bottom_left,
        )

    def flip_vertically(self) -> FaceUv:
        return FaceUv(
            top_left=self.bottom_left,
            top_right=self.bottom_right,
            bottom_left=self.top_left,
            bottom_right=self.top_right,
        )

    def corners(self) -> tuple[UvCoordinate, UvCoordinate, UvCoordinate, UvCoordinate]:
        """Return corners in renderer order: TL, TR, BL, BR."""
        return (self.top_left, self.top_right, self.bottom_left, self.bottom_right)


@dataclass(frozen=True, slots=True)
class CubeFaceUvs:
    """Face rectangles for all six directions of a box."""

    north: FaceUv
    south: FaceUv
    east: FaceUv
    west: FaceUv
    up: FaceUv
    down: FaceUv


def box_uv(u: int, v: int, width: int, height: int, depth: int) -> CubeFaceUvs:
    """Return the faces of a box whose UV net starts at texel ``(u, v)``.

    The net is the classic skin layout: the top row holds ``up`` then
    ``down``; the second row holds the right side, front, left side and back.
    Models face north, so the front is ``north`` and the right side is
    ``east``.
    """
    w, h, d = width, height, depth
    return CubeFaceUvs(
        up=FaceUv.from_rect(u + d, v, u + d + w, v + d),
        down=FaceUv.from_rect(u + d + w, v, u + d + 2 * w, v + d),
        east=FaceUv.from_rect(u, v + d, u + d, v + d + h),
        north=FaceUv.from_rect(u + d, v + d, u + d + w, v + d + h),
        west=FaceUv.from_rect(u + d + w, v + d, u + 2 * d + w, v + d + h),
        south=FaceUv.from_rect(u + 2 * d + w, v + d, u + 2 * d + 2 * w, v + d + h),
    )
