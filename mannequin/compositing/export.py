"""Layer image output."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import numpy as np
from PIL import Image

from mannequin.runtime.logging import get_logger

_LOG = get_logger("mannequin.compositing.export")


class LayerWriteError(OSError):
    """Writing one layer image failed."""

    def __init__(self, message: str, *, group: str, layer: int, path: Path) -> None:
        super().__init__(f"{message} (group={group} layer={layer} path={path})")
        self.group = group
        self.layer = layer
        self.path = path


def layer_paths(base_path: Path, layer_count: int) -> list[Path]:
    """Single layers keep ``base_path``; stacks get ``<stem>-<index><suffix>``."""
    if layer_count <= 1:
        return [base_path] * layer_count
    return [
        base_path.with_name(f"{base_path.stem}-{index}{base_path.suffix}")
        for index in range(layer_count)
    ]


def write_image(image: np.ndarray, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(np.ascontiguousarray(image)).save(path, format="PNG")


def write_layers(layers: Sequence[np.ndarray], base_path: Path, *, group: str) -> list[Path]:
    """Write each layer as a lossless RGBA image and return the written paths."""
    paths = layer_paths(base_path, len(layers))
    if not paths:
        _LOG.warning("group has no covered pixels, nothing written group=%s", group)
        return []
    for index, (layer, path) in enumerate(zip(layers, paths, strict=True)):
        try:
            write_image(layer, path)
        except OSError as exc:
            raise LayerWriteError(
                f"unable to write layer image: {exc}", group=group, layer=index, path=path
            ) from exc
        _LOG.debug("wrote layer group=%s layer=%d path=%s", group, index, path)
    return paths
