"""Public contracts shared across mannequin packages."""

from mannequin.api.logging import JsonFormatter, MannequinLoggingConfig
from mannequin.api.render import (
    Camera,
    Renderer,
    RendererFactory,
    RenderSettings,
    ShaderVariant,
    SunInformation,
    ViewportSize,
)

__all__ = [
    "Camera",
    "JsonFormatter",
    "MannequinLoggingConfig",
    "RenderSettings",
    "Renderer",
    "RendererFactory",
    "ShaderVariant",
    "SunInformation",
    "ViewportSize",
]
