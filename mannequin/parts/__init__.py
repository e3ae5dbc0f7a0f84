"""Character part model: vectors, UVs, parts and the humanoid catalogue."""

from mannequin.parts.part import Part, PartAnchorInfo, PartKind, PartVariantError
from mannequin.parts.provider import PartProviderContext, compute_base_part, get_parts
from mannequin.parts.types import BodyPartType, PartTextureType, PlayerModel
from mannequin.parts.uv import CubeFaceUvs, FaceUv, UvCoordinate, box_uv
from mannequin.parts.vector import Vec3

__all__ = [
    "BodyPartType",
    "CubeFaceUvs",
    "FaceUv",
    "Part",
    "PartAnchorInfo",
    "PartKind",
    "PartProviderContext",
    "PartTextureType",
    "PartVariantError",
    "PlayerModel",
    "UvCoordinate",
    "Vec3",
    "box_uv",
    "compute_base_part",
    "get_parts",
]
