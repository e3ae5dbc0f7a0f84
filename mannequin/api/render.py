"""Renderer boundary contract and render settings."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

import numpy as np

from mannequin.parts.vector import Vec3

if TYPE_CHECKING:
    from mannequin.rendering.primitives import RenderPrimitive


class ShaderVariant(StrEnum):
    """Fragment output mode, fixed when a renderer pipeline is built."""

    SHADED = "SHADED"
    DEPTH_FRONT_FACE = "DEPTH_FRONT_FACE"
    DEPTH_BACK_FACE = "DEPTH_BACK_FACE"

    @property
    def packs_depth(self) -> bool:
        return self is not ShaderVariant.SHADED

    @classmethod
    def for_face(cls, back_face: bool) -> ShaderVariant:
        return cls.DEPTH_BACK_FACE if back_face else cls.DEPTH_FRONT_FACE


@dataclass(frozen=True, slots=True)
class ViewportSize:
    width: int
    height: int

    @property
    def aspect(self) -> float:
        return self.width / float(self.height)


@dataclass(frozen=True, slots=True)
class Camera:
    """Perspective camera; yaw/pitch in degrees, yaw 0 looks toward +Z."""

    position: Vec3 = Vec3(0.0, 16.0, -44.0)
    yaw: float = 0.0
    pitch: float = 0.0
    fov: float = 45.0
    near: float = 0.1
    far: float = 200.0


@dataclass(frozen=True, slots=True)
class SunInformation:
    """Directional light used for Lambert shading."""

    direction: Vec3 = Vec3(0.0, -1.0, 1.0)
    intensity: float = 0.7
    ambient: float = 0.3


@dataclass(frozen=True, slots=True)
class RenderSettings:
    camera: Camera
    sun: SunInformation
    viewport: ViewportSize


class Renderer(Protocol):
    """External rasterizer consumed by the generation pipeline."""

    def render(self, mesh: Sequence["RenderPrimitive"], texture: np.ndarray) -> np.ndarray:
        """Rasterize ``mesh`` with ``texture`` bound; return ``(H, W, 4)`` uint8 RGBA."""

    def close(self) -> None:
        """Release renderer resources."""


type RendererFactory = Callable[[ShaderVariant], Renderer]
