"""Part-to-primitive conversion and offscreen rendering."""

from mannequin.rendering.convert import convert_parts, primitive_convert
from mannequin.rendering.primitives import CubePrimitive, QuadPrimitive, Vertex
from mannequin.rendering.shader import PipelineSpec, pipeline_spec
from mannequin.rendering.wgpu_renderer import OffscreenWgpuRenderer, WgpuInitError

__all__ = [
    "CubePrimitive",
    "OffscreenWgpuRenderer",
    "PipelineSpec",
    "QuadPrimitive",
    "Vertex",
    "WgpuInitError",
    "convert_parts",
    "pipeline_spec",
    "primitive_convert",
]
