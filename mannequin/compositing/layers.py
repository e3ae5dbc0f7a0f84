"""Merge independently rendered depth-packed passes into ordered layers.

Every pass must be an ``(H, W, 4)`` uint8 image written by a depth-packing
shader variant. Covered pixels (non-zero alpha) at the same coordinate are
ranked by decoded depth across all passes, nearest first; rank ``k`` of every
pixel goes to layer ``k``. Equal depths keep pass order.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from mannequin.compositing.depth import decode_depth_array

_UNCOVERED_KEY = np.iinfo(np.int32).max


class CompositingError(ValueError):
    """Render passes cannot be merged (missing, mismatched or malformed)."""


@dataclass(frozen=True, slots=True)
class Fragment:
    """One covered pixel of one pass."""

    pixel: tuple[int, int]
    color: tuple[int, int, int, int]
    depth: int


def stack_passes(passes: Sequence[np.ndarray]) -> np.ndarray:
    """Validate pass images and stack them into a ``(P, H, W, 4)`` array."""
    if not passes:
        raise CompositingError("no render passes to merge")
    expected: tuple[int, ...] | None = None
    for index, image in enumerate(passes):
        if not isinstance(image, np.ndarray):
            raise CompositingError(f"pass {index} is not a pixel buffer: {type(image).__name__}")
        if image.dtype != np.uint8 or image.ndim != 3 or image.shape[2] != 4:
            raise CompositingError(
                f"pass {index} must be (H, W, 4) uint8, got shape={image.shape} dtype={image.dtype}"
            )
        if expected is None:
            expected = image.shape
        elif image.shape != expected:
            raise CompositingError(
                f"pass {index} has shape {image.shape}, expected {expected}"
            )
    return np.stack(passes, axis=0)


def collect_fragments(passes: Sequence[np.ndarray]) -> dict[tuple[int, int], list[Fragment]]:
    """Group covered pixels of all passes by ``(x, y)``, each group nearest first."""
    stack = stack_passes(passes)
    grouped: dict[tuple[int, int], list[Fragment]] = {}
    for image in stack:
        ys, xs = np.nonzero(image[..., 3])
        colors = image[ys, xs]
        depths = decode_depth_array(colors)
        for x, y, color, depth in zip(xs, ys, colors, depths, strict=True):
            grouped.setdefault((int(x), int(y)), []).append(
                Fragment(
                    pixel=(int(x), int(y)),
                    color=(int(color[0]), int(color[1]), int(color[2]), int(color[3])),
                    depth=int(depth),
                )
            )
    for fragments in grouped.values():
        fragments.sort(key=lambda fragment: fragment.depth)
    return grouped


def merge_layers(passes: Sequence[np.ndarray]) -> list[np.ndarray]:
    """Return depth-ranked layers; layer count is the deepest pixel stack."""
    stack = stack_passes(passes)
    covered = stack[..., 3] != 0
    keys = np.where(covered, decode_depth_array(stack), _UNCOVERED_KEY)
    order = np.argsort(keys, axis=0, kind="stable")
    counts = covered.sum(axis=0)
    layer_count = int(counts.max()) if counts.size else 0

    _, height, width, channels = stack.shape
    layers: list[np.ndarray] = []
    for rank in range(layer_count):
        index = np.broadcast_to(order[rank][None, :, :, None], (1, height, width, channels))
        pixels = np.take_along_axis(stack, index, axis=0)[0]
        present = (counts > rank)[..., None]
        layers.append(np.where(present, pixels, 0).astype(np.uint8))
    return layers
