"""Part groups rendered into one atlas image stack each."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from mannequin.parts.types import BASE_PARTS, BodyPartType

_B = BodyPartType

_BASE_NO_ARMS: tuple[BodyPartType, ...] = (_B.HEAD, _B.BODY, _B.LEFT_LEG, _B.RIGHT_LEG)
_LAYERS_NO_ARMS: tuple[BodyPartType, ...] = (
    _B.HEAD_LAYER,
    _B.BODY_LAYER,
    _B.LEFT_LEG_LAYER,
    _B.RIGHT_LEG_LAYER,
)
_ARMS: tuple[BodyPartType, ...] = (_B.LEFT_ARM, _B.RIGHT_ARM)
_ARM_LAYERS: tuple[BodyPartType, ...] = (_B.LEFT_ARM_LAYER, _B.RIGHT_ARM_LAYER)


@dataclass(frozen=True, slots=True)
class PartGroupSpec:
    """Parts merged into one output; ``name`` may contain ``{model}``."""

    parts: tuple[BodyPartType, ...]
    toggle_slim: bool
    name: str

    @property
    def has_overlays(self) -> bool:
        return any(part.is_layer or part.is_hat_layer for part in self.parts)

    def output_name(self, model_name: str) -> str:
        return self.name.replace("{model}", model_name)


class PartsGroupLogic(StrEnum):
    """How body parts are split into output groups."""

    SPLIT_ARMS_FROM_BODY = "SPLIT_ARMS_FROM_BODY"
    MERGE_ARMS_WITH_BODY = "MERGE_ARMS_WITH_BODY"
    MERGE_EVERYTHING = "MERGE_EVERYTHING"

    def groups(self) -> tuple[PartGroupSpec, ...]:
        return _GROUPS[self]


_GROUPS: dict[PartsGroupLogic, tuple[PartGroupSpec, ...]] = {
    PartsGroupLogic.SPLIT_ARMS_FROM_BODY: (
        PartGroupSpec(_BASE_NO_ARMS, False, "Body.png"),
        PartGroupSpec(_LAYERS_NO_ARMS, False, "Body Layer.png"),
        PartGroupSpec(_ARMS, True, "{model}/Arms.png"),
        PartGroupSpec(_ARM_LAYERS, True, "{model}/Arms Layer.png"),
    ),
    PartsGroupLogic.MERGE_ARMS_WITH_BODY: (
        PartGroupSpec(_BASE_NO_ARMS + _ARMS, True, "{model}/Body.png"),
        PartGroupSpec(_LAYERS_NO_ARMS + _ARM_LAYERS, True, "{model}/Body Layer.png"),
    ),
    PartsGroupLogic.MERGE_EVERYTHING: (
        PartGroupSpec(BASE_PARTS, True, "{model}/Body.png"),
        PartGroupSpec(
            BASE_PARTS + _LAYERS_NO_ARMS + _ARM_LAYERS,
            True,
            "{model}/Body Layer.png",
        ),
    ),
}
