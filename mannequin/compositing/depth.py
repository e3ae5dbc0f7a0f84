"""Packed fragment word layout shared by the depth shader and the compositor.

Pixels are read as a little-endian 32-bit word ``r | g<<8 | b<<16 | a<<24``:

    bits  0-5   texel u
    bits  6-11  texel v
    bits 12-19  shading (green high nibble + blue low nibble)
    bits 20-31  depth   (blue high nibble + alpha)
"""

from __future__ import annotations

import numpy as np

DEPTH_SHIFT = 20
DEPTH_MASK = 0x1FFF
# The depth field occupies the top 12 bits of the word.
MAX_DEPTH = (1 << (32 - DEPTH_SHIFT)) - 1
# Smallest depth whose alpha byte is non-zero, i.e. still reads as covered.
MIN_COVERED_DEPTH = 1 << 4
SHADING_SHIFT = 12
SHADING_MASK = 0xFF
TEXEL_MASK = 0x3F


def _require_range(name: str, value: int, maximum: int) -> int:
    if not 0 <= int(value) <= maximum:
        raise ValueError(f"{name} must be within [0, {maximum}], got {value}")
    return int(value)


def pack_word(*, u: int = 0, v: int = 0, shading: int = 0, depth: int) -> int:
    u = _require_range("u", u, TEXEL_MASK)
    v = _require_range("v", v, TEXEL_MASK)
    shading = _require_range("shading", shading, SHADING_MASK)
    depth = _require_range("depth", depth, MAX_DEPTH)
    return u | (v << 6) | (shading << SHADING_SHIFT) | (depth << DEPTH_SHIFT)


def pack_fragment(
    *, u: int = 0, v: int = 0, shading: int = 0, depth: int
) -> tuple[int, int, int, int]:
    """Build the RGBA bytes the depth shader writes for one fragment."""
    word = pack_word(u=u, v=v, shading=shading, depth=depth)
    return (word & 0xFF, (word >> 8) & 0xFF, (word >> 16) & 0xFF, (word >> 24) & 0xFF)


def pixel_word(pixel: tuple[int, int, int, int] | np.ndarray) -> int:
    r, g, b, a = (int(channel) for channel in pixel)
    return r | (g << 8) | (b << 16) | (a << 24)


def decode_depth(pixel: tuple[int, int, int, int] | np.ndarray) -> int:
    return (pixel_word(pixel) >> DEPTH_SHIFT) & DEPTH_MASK


def decode_shading(pixel: tuple[int, int, int, int] | np.ndarray) -> int:
    return (pixel_word(pixel) >> SHADING_SHIFT) & SHADING_MASK


def decode_depth_array(image: np.ndarray) -> np.ndarray:
    """Decode depths of every pixel of an ``(..., 4)`` uint8 array as int32."""
    channels = image.astype(np.uint32)
    words = (
        channels[..., 0]
        | (channels[..., 1] << 8)
        | (channels[..., 2] << 16)
        | (channels[..., 3] << 24)
    )
    return ((words >> DEPTH_SHIFT) & DEPTH_MASK).astype(np.int32)
