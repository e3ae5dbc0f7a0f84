"""Humanoid base part catalogue and scene part assembly."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from mannequin.parts.part import Part, PartAnchorInfo
from mannequin.parts.types import BodyPartType, PartTextureType, PlayerModel
from mannequin.parts.uv import FaceUv, box_uv
from mannequin.parts.vector import Vec3

HAT_LAYER_EXPANSION = 0.5
LAYER_EXPANSION = 0.25
CAPE_TILT_DEGREES = 10.0
SHADOW_EXTENT = 16.0

# (position, size, uv origin) of base parts; arms list the wide variant.
_BASE_BOXES: dict[BodyPartType, tuple[Vec3, Vec3, tuple[int, int]]] = {
    BodyPartType.HEAD: (Vec3(-4, 24, -4), Vec3(8, 8, 8), (0, 0)),
    BodyPartType.BODY: (Vec3(-4, 12, -2), Vec3(8, 12, 4), (16, 16)),
    BodyPartType.RIGHT_ARM: (Vec3(4, 12, -2), Vec3(4, 12, 4), (40, 16)),
    BodyPartType.LEFT_ARM: (Vec3(-8, 12, -2), Vec3(4, 12, 4), (32, 48)),
    BodyPartType.RIGHT_LEG: (Vec3(0, 0, -2), Vec3(4, 12, 4), (0, 16)),
    BodyPartType.LEFT_LEG: (Vec3(-4, 0, -2), Vec3(4, 12, 4), (16, 48)),
}

_LAYER_UV_ORIGINS: dict[BodyPartType, tuple[int, int]] = {
    BodyPartType.HEAD_LAYER: (32, 0),
    BodyPartType.BODY_LAYER: (16, 32),
    BodyPartType.RIGHT_ARM_LAYER: (40, 32),
    BodyPartType.LEFT_ARM_LAYER: (48, 48),
    BodyPartType.RIGHT_LEG_LAYER: (0, 32),
    BodyPartType.LEFT_LEG_LAYER: (0, 48),
}

# Shoulder pivots sit on the arm's inner top edge.
_SHOULDER_ANCHORS: dict[BodyPartType, Vec3] = {
    BodyPartType.RIGHT_ARM: Vec3(4, 24, 0),
    BodyPartType.LEFT_ARM: Vec3(-4, 24, 0),
}


def _arm_box(part_type: BodyPartType, slim_arms: bool) -> tuple[Vec3, Vec3]:
    position, size, _ = _BASE_BOXES[part_type]
    if not slim_arms:
        return position, size
    slim_size = Vec3(3, size.y, size.z)
    if part_type is BodyPartType.LEFT_ARM:
        # Slim left arm keeps its inner edge against the body.
        position = Vec3(position.x + 1, position.y, position.z)
    return position, slim_size


def compute_base_part(part_type: BodyPartType, slim_arms: bool) -> Part:
    """Return the unrotated box of one body part (overlays included)."""
    if part_type is BodyPartType.CAPE:
        return Part.new_cube(
            PartTextureType.CAPE,
            (-5, 8, 2),
            (10, 16, 1),
            box_uv(0, 0, 10, 16, 1),
        )

    base_type = part_type.non_layer()
    if base_type.is_arm:
        position, size = _arm_box(base_type, slim_arms)
    else:
        position, size, _ = _BASE_BOXES[base_type]

    if part_type is base_type:
        uv_origin = _BASE_BOXES[base_type][2]
    else:
        uv_origin = _LAYER_UV_ORIGINS[part_type]

    part = Part.new_cube(
        PartTextureType.SKIN,
        tuple(position),
        tuple(size),
        box_uv(uv_origin[0], uv_origin[1], int(size.x), int(size.y), int(size.z)),
    )
    if part_type.is_hat_layer:
        return part.expand_splat(HAT_LAYER_EXPANSION)
    if part_type.is_layer:
        return part.expand_splat(LAYER_EXPANSION)
    return part


def shadow_part(shadow_y_pos: float) -> Part:
    """Flat ground shadow centered under the model."""
    half = SHADOW_EXTENT / 2.0
    width, height = PartTextureType.SHADOW.texture_size
    return Part.new_quad(
        PartTextureType.SHADOW,
        (-half, shadow_y_pos, -half),
        (SHADOW_EXTENT, 0.0, SHADOW_EXTENT),
        FaceUv.from_rect(0, 0, width, height),
        (0.0, 1.0, 0.0),
    )


@dataclass(frozen=True, slots=True)
class PartProviderContext:
    """Per-scene switches deciding which parts exist and how they are posed."""

    model: PlayerModel = PlayerModel.WIDE
    has_hat_layer: bool = True
    has_layers: bool = True
    has_cape: bool = False
    arm_rotation: float = 10.0
    shadow_y_pos: float | None = None


def _is_enabled(context: PartProviderContext, part_type: BodyPartType) -> bool:
    if part_type.is_hat_layer:
        return context.has_hat_layer
    if part_type.is_layer:
        return context.has_layers
    if part_type is BodyPartType.CAPE:
        return context.has_cape
    return True


def _pose(part: Part, part_type: BodyPartType, context: PartProviderContext) -> None:
    base_type = part_type.non_layer()
    if base_type.is_arm and context.arm_rotation:
        sign = 1.0 if base_type is BodyPartType.RIGHT_ARM else -1.0
        anchor = PartAnchorInfo.new_rotation_anchor_position(_SHOULDER_ANCHORS[base_type])
        part.rotate(Vec3(0.0, 0.0, sign * context.arm_rotation), anchor)
    elif part_type is BodyPartType.CAPE:
        anchor = PartAnchorInfo.new_rotation_anchor_position(Vec3(0, 24, 2))
        part.rotate(Vec3(-CAPE_TILT_DEGREES, 0.0, 0.0), anchor)


def get_parts(context: PartProviderContext, body_parts: Iterable[BodyPartType]) -> list[Part]:
    """Build the posed parts for a scene, honoring the context switches."""
    parts: list[Part] = []
    for part_type in body_parts:
        if not _is_enabled(context, part_type):
            continue
        part = compute_base_part(part_type, context.model.is_slim)
        _pose(part, part_type, context)
        parts.append(part)
    if context.shadow_y_pos is not None:
        parts.append(shadow_part(context.shadow_y_pos))
    return parts
