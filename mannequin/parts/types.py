"""Body-part, texture and model enumerations."""

from __future__ import annotations

from enum import StrEnum


class PartTextureType(StrEnum):
    """Texture a part samples from."""

    SKIN = "SKIN"
    CAPE = "CAPE"
    SHADOW = "SHADOW"

    @property
    def texture_size(self) -> tuple[int, int]:
        return TEXTURE_SIZES[self]


TEXTURE_SIZES: dict[PartTextureType, tuple[int, int]] = {
    PartTextureType.SKIN: (64, 64),
    PartTextureType.CAPE: (64, 32),
    PartTextureType.SHADOW: (128, 128),
}


class PlayerModel(StrEnum):
    """Arm width variant of the humanoid model."""

    WIDE = "WIDE"
    SLIM = "SLIM"

    @property
    def display_name(self) -> str:
        return "Alex" if self is PlayerModel.SLIM else "Steve"

    @property
    def is_slim(self) -> bool:
        return self is PlayerModel.SLIM


class BodyPartType(StrEnum):
    """Every renderable piece of the humanoid model."""

    HEAD = "HEAD"
    BODY = "BODY"
    LEFT_ARM = "LEFT_ARM"
    RIGHT_ARM = "RIGHT_ARM"
    LEFT_LEG = "LEFT_LEG"
    RIGHT_LEG = "RIGHT_LEG"
    HEAD_LAYER = "HEAD_LAYER"
    BODY_LAYER = "BODY_LAYER"
    LEFT_ARM_LAYER = "LEFT_ARM_LAYER"
    RIGHT_ARM_LAYER = "RIGHT_ARM_LAYER"
    LEFT_LEG_LAYER = "LEFT_LEG_LAYER"
    RIGHT_LEG_LAYER = "RIGHT_LEG_LAYER"
    CAPE = "CAPE"

    @property
    def is_hat_layer(self) -> bool:
        return self is BodyPartType.HEAD_LAYER

    @property
    def is_layer(self) -> bool:
        """Body, arm and leg overlays. The hat is reported by ``is_hat_layer``."""
        return self in _LAYER_TO_BASE and not self.is_hat_layer

    @property
    def is_arm(self) -> bool:
        return self.non_layer() in (BodyPartType.LEFT_ARM, BodyPartType.RIGHT_ARM)

    def non_layer(self) -> BodyPartType:
        """Return the base part an overlay wraps (self for base parts)."""
        return _LAYER_TO_BASE.get(self, self)

    def layer(self) -> BodyPartType | None:
        """Return the overlay wrapping this base part, if any."""
        return _BASE_TO_LAYER.get(self)


_LAYER_TO_BASE: dict[BodyPartType, BodyPartType] = {
    BodyPartType.HEAD_LAYER: BodyPartType.HEAD,
    BodyPartType.BODY_LAYER: BodyPartType.BODY,
    BodyPartType.LEFT_ARM_LAYER: BodyPartType.LEFT_ARM,
    BodyPartType.RIGHT_ARM_LAYER: BodyPartType.RIGHT_ARM,
    BodyPartType.LEFT_LEG_LAYER: BodyPartType.LEFT_LEG,
    BodyPartType.RIGHT_LEG_LAYER: BodyPartType.RIGHT_LEG,
}
_BASE_TO_LAYER: dict[BodyPartType, BodyPartType] = {
    base: layer for layer, base in _LAYER_TO_BASE.items()
}

BASE_PARTS: tuple[BodyPartType, ...] = (
    BodyPartType.HEAD,
    BodyPartType.BODY,
    BodyPartType.LEFT_ARM,
    BodyPartType.RIGHT_ARM,
    BodyPartType.LEFT_LEG,
    BodyPartType.RIGHT_LEG,
)
