"""Depth-encoded layer compositing."""

from mannequin.compositing.depth import decode_depth, decode_depth_array, pack_fragment
from mannequin.compositing.export import LayerWriteError, layer_paths, write_layers
from mannequin.compositing.layers import (
    CompositingError,
    Fragment,
    collect_fragments,
    merge_layers,
)

__all__ = [
    "CompositingError",
    "Fragment",
    "LayerWriteError",
    "collect_fragments",
    "decode_depth",
    "decode_depth_array",
    "layer_paths",
    "merge_layers",
    "pack_fragment",
    "write_layers",
]
