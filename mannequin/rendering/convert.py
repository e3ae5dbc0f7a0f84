"""Part to render primitive conversion."""

from __future__ import annotations

import numpy as np

from mannequin.parts.part import Part, PartKind
from mannequin.parts.transform import transform_points
from mannequin.parts.uv import FaceUv
from mannequin.rendering.primitives import CubePrimitive, QuadPrimitive, RenderPrimitive, UvQuad


def face_uv_coords(
    face_uv: FaceUv,
    texture_size: tuple[int, int],
    *,
    uv_epsilon: float = 0.0,
) -> UvQuad:
    """Normalize a texel rectangle and nudge each corner inward by ``uv_epsilon``."""
    top_left = face_uv.top_left.to_uv(texture_size)
    top_right = face_uv.top_right.to_uv(texture_size)
    bottom_left = face_uv.bottom_left.to_uv(texture_size)
    bottom_right = face_uv.bottom_right.to_uv(texture_size)
    e = float(uv_epsilon)
    return (
        (top_left[0] + e, top_left[1] + e),
        (top_right[0] - e, top_right[1] + e),
        (bottom_left[0] + e, bottom_left[1] - e),
        (bottom_right[0] - e, bottom_right[1] - e),
    )


def primitive_convert(
    part: Part,
    *,
    texture_size: tuple[int, int] | None = None,
    uv_epsilon: float = 0.0,
) -> RenderPrimitive:
    """Turn a part into renderer-ready vertices.

    ``texture_size`` defaults to the size of the part's texture type. The
    part's accumulated rotation matrix is applied to every vertex.
    """
    size_px = texture_size if texture_size is not None else part.texture.texture_size
    position = part.position
    size = part.size
    model_transform = part.rotation_matrix

    match part.kind:
        case PartKind.CUBE:
            uvs = part.face_uvs
            return CubePrimitive.new(
                center=position + size / 2.0,
                size=size,
                model_transform=model_transform,
                north=face_uv_coords(uvs.north, size_px, uv_epsilon=uv_epsilon),
                south=face_uv_coords(uvs.south, size_px, uv_epsilon=uv_epsilon),
                up=face_uv_coords(uvs.up, size_px, uv_epsilon=uv_epsilon),
                # Down is wound mirrored relative to up.
                down=face_uv_coords(uvs.down.flip_horizontally(), size_px, uv_epsilon=uv_epsilon),
                west=face_uv_coords(uvs.west, size_px, uv_epsilon=uv_epsilon),
                east=face_uv_coords(uvs.east, size_px, uv_epsilon=uv_epsilon),
            )
        case PartKind.QUAD:
            x_left = position.x + size.x
            x_right = position.x
            y_bottom = position.y
            y_top = position.y + size.y
            z_front = position.z + size.z
            z_back = position.z
            points = transform_points(
                model_transform,
                np.array(
                    (
                        (x_right, y_top, z_back),
                        (x_left, y_top, z_back),
                        (x_right, y_bottom, z_front),
                        (x_left, y_bottom, z_front),
                    ),
                    dtype=np.float64,
                ),
            )
            normal = part.normal
            return QuadPrimitive.from_points(
                points,
                face_uv_coords(part.face_uv, size_px, uv_epsilon=uv_epsilon),
                (normal.x, normal.y, normal.z),
            )
    raise AssertionError(f"unhandled part kind: {part.kind}")


def convert_parts(
    parts: list[Part],
    *,
    uv_epsilon: float = 0.0,
) -> list[RenderPrimitive]:
    return [primitive_convert(part, uv_epsilon=uv_epsilon) for part in parts]
