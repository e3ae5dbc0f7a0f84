"""Part-group atlas generation."""

from mannequin.generation.generator import GenerationSummary, PartsGenerator
from mannequin.generation.groups import PartGroupSpec, PartsGroupLogic
from mannequin.generation.passes import (
    RenderPassError,
    RenderPassRunner,
    RenderPassSpec,
    plan_group_passes,
)

__all__ = [
    "GenerationSummary",
    "PartGroupSpec",
    "PartsGenerator",
    "PartsGroupLogic",
    "RenderPassError",
    "RenderPassRunner",
    "RenderPassSpec",
    "plan_group_passes",
]
