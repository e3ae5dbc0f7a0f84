"""Textures bound while rendering atlas passes."""

from __future__ import annotations

import numpy as np

from mannequin.parts.types import PartTextureType


def blank_texture(texture_type: PartTextureType) -> np.ndarray:
    """Fully transparent texture of the size ``texture_type`` expects."""
    width, height = texture_type.texture_size
    return np.zeros((height, width, 4), dtype=np.uint8)


def shadow_texture(*, opacity: float = 0.6) -> np.ndarray:
    """Black radial blob fading to transparent at the texture edge."""
    width, height = PartTextureType.SHADOW.texture_size
    ys, xs = np.mgrid[0:height, 0:width].astype(np.float64)
    dx = (xs + 0.5) / width * 2.0 - 1.0
    dy = (ys + 0.5) / height * 2.0 - 1.0
    falloff = np.clip(1.0 - np.sqrt(dx * dx + dy * dy), 0.0, 1.0)
    texture = np.zeros((height, width, 4), dtype=np.uint8)
    texture[..., 3] = np.round(falloff * opacity * 255.0).astype(np.uint8)
    return texture
