"""Offscreen WGPU renderer for part meshes."""

from __future__ import annotations

import threading
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from mannequin.api.render import RenderSettings, RendererFactory, ShaderVariant
from mannequin.rendering.camera import view_projection
from mannequin.rendering.primitives import VERTEX_STRIDE_BYTES, RenderPrimitive, mesh_buffers
from mannequin.rendering.shader import PipelineSpec, pipeline_spec
from mannequin.runtime.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable
from mannequin.runtime.logging import get_logger

_LOG = get_logger("mannequin.rendering.wgpu")

_COLOR_FORMAT = "rgba8unorm"
_DEPTH_FORMAT = "depth32float"
_UNIFORM_BYTES = 96


class WgpuInitError(RuntimeError):
    """Renderer backend initialization failure with structured details."""

    def __init__(self, message: str, *, details: dict[str, object]) -> None:
        super().__init__(message)
        self.details = details


@dataclass(slots=True)
class OffscreenWgpuRenderer:
    """Renders one mesh per call into an offscreen RGBA target and reads it back.

    The pipeline (and therefore the shader variant) is fixed at construction.
    Calls are serialized: binding the texture and drawing happen under one lock.
    """

    settings: RenderSettings
    variant: ShaderVariant = ShaderVariant.SHADED
    _wgpu: object = field(init=False)
    _adapter: object = field(init=False)
    _device: object = field(init=False)
    _adapter_info: dict[str, object] = field(init=False, default_factory=dict)
    _spec: PipelineSpec = field(init=False)
    _pipeline: object = field(init=False)
    _bind_group_layout: object = field(init=False)
    _uniform_buffer: object = field(init=False)
    _sampler: object = field(init=False)
    _color_texture: object = field(init=False)
    _depth_texture: object = field(init=False)
    _part_texture: object | None = field(init=False, default=None)
    _part_texture_size: tuple[int, int] = field(init=False, default=(0, 0))
    _lock: threading.Lock = field(init=False, default_factory=threading.Lock)
    _closed: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        try:
            import wgpu
        except ImportError as exc:
            raise WgpuInitError(
                "wgpu dependency unavailable",
                details={
                    "variant": str(self.variant),
                    "exception_type": exc.__class__.__name__,
                    "exception_message": str(exc),
                },
            ) from exc
        self._wgpu = wgpu
        try:
            self._adapter = self._request_adapter()
            self._adapter_info = self._extract_adapter_info(self._adapter)
            self._device = self._adapter.request_device_sync(label="mannequin.wgpu.device")
        except Exception as exc:
            details: dict[str, object] = {
                "variant": str(self.variant),
                "adapter_info": dict(self._adapter_info),
                "exception_type": exc.__class__.__name__,
                "exception_message": str(exc),
            }
            if isinstance(exc, WgpuInitError):
                details.update(exc.details)
            raise WgpuInitError("wgpu backend initialization failed", details=details) from exc
        self._spec = pipeline_spec(self.variant)
        self._setup_pipeline()
        self._setup_targets()
        _LOG.debug(
            "wgpu renderer ready variant=%s viewport=%dx%d adapter=%s",
            self.variant,
            self.settings.viewport.width,
            self.settings.viewport.height,
            self._adapter_info.get("device", "unknown"),
        )

    def render(self, mesh: Sequence[RenderPrimitive], texture: np.ndarray) -> np.ndarray:
        if self._closed:
            raise RuntimeError("renderer is closed")
        pixels = _require_rgba_texture(texture)
        with self._lock:
            self._bind_texture(pixels)
            self._write_uniforms()
            vertices, indices = mesh_buffers(mesh)
            return self._draw(vertices, indices)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for resource in (self._color_texture, self._depth_texture, self._part_texture):
            destroy = getattr(resource, "destroy", None)
            if not callable(destroy):
                continue
            try:
                destroy()
            except RECOVERABLE_RUNTIME_ERRORS:
                log_recoverable(_LOG, "wgpu resource destroy failed")

    def _request_adapter(self) -> object:
        adapter = self._wgpu.gpu.request_adapter_sync(power_preference="high-performance")
        if adapter is None:
            raise WgpuInitError(
                "wgpu adapter request returned None",
                details={"variant": str(self.variant), "adapter_info": {}},
            )
        return adapter

    @staticmethod
    def _extract_adapter_info(adapter: object) -> dict[str, object]:
        info = getattr(adapter, "info", None)
        if isinstance(info, dict):
            return {str(key): value for key, value in info.items()}
        return {}

    def _setup_pipeline(self) -> None:
        wgpu = self._wgpu
        device = self._device
        shader = device.create_shader_module(label=f"mannequin.{self.variant}", code=self._spec.code)
        self._bind_group_layout = device.create_bind_group_layout(
            entries=[
                {
                    "binding": 0,
                    "visibility": wgpu.ShaderStage.VERTEX | wgpu.ShaderStage.FRAGMENT,
                    "buffer": {"type": wgpu.BufferBindingType.uniform},
                },
                {
                    "binding": 1,
                    "visibility": wgpu.ShaderStage.FRAGMENT,
                    "texture": {
                        "sample_type": wgpu.TextureSampleType.float,
                        "view_dimension": wgpu.TextureViewDimension.d2,
                    },
                },
                {
                    "binding": 2,
                    "visibility": wgpu.ShaderStage.FRAGMENT,
                    "sampler": {"type": wgpu.SamplerBindingType.filtering},
                },
            ]
        )
        pipeline_layout = device.create_pipeline_layout(bind_group_layouts=[self._bind_group_layout])
        color_target: dict[str, object] = {"format": _COLOR_FORMAT, "write_mask": wgpu.ColorWrite.ALL}
        if self._spec.blend:
            color_target["blend"] = {
                "color": {
                    "src_factor": "src-alpha",
                    "dst_factor": "one-minus-src-alpha",
                    "operation": "add",
                },
                "alpha": {
                    "src_factor": "one",
                    "dst_factor": "one-minus-src-alpha",
                    "operation": "add",
                },
            }
        self._pipeline = device.create_render_pipeline(
            label=f"mannequin.{self.variant}.pipeline",
            layout=pipeline_layout,
            vertex={
                "module": shader,
                "entry_point": "vs_main",
                "buffers": [
                    {
                        "array_stride": VERTEX_STRIDE_BYTES,
                        "step_mode": "vertex",
                        "attributes": [
                            {"shader_location": 0, "offset": 0, "format": "float32x3"},
                            {"shader_location": 1, "offset": 12, "format": "float32x2"},
                            {"shader_location": 2, "offset": 20, "format": "float32x3"},
                        ],
                    }
                ],
            },
            primitive={
                "topology": "triangle-list",
                "front_face": "ccw",
                "cull_mode": self._spec.cull_mode,
            },
            depth_stencil={
                "format": _DEPTH_FORMAT,
                "depth_write_enabled": True,
                "depth_compare": "less",
            },
            multisample={"count": 1},
            fragment={"module": shader, "entry_point": "fs_main", "targets": [color_target]},
        )
        self._uniform_buffer = device.create_buffer(
            size=_UNIFORM_BYTES,
            usage=wgpu.BufferUsage.UNIFORM | wgpu.BufferUsage.COPY_DST,
        )
        self._sampler = device.create_sampler(mag_filter="nearest", min_filter="nearest")

    def _setup_targets(self) -> None:
        wgpu = self._wgpu
        viewport = self.settings.viewport
        size = (viewport.width, viewport.height, 1)
        self._color_texture = self._device.create_texture(
            size=size,
            format=_COLOR_FORMAT,
            usage=wgpu.TextureUsage.RENDER_ATTACHMENT | wgpu.TextureUsage.COPY_SRC,
            dimension="2d",
            mip_level_count=1,
            sample_count=1,
        )
        self._depth_texture = self._device.create_texture(
            size=size,
            format=_DEPTH_FORMAT,
            usage=wgpu.TextureUsage.RENDER_ATTACHMENT,
            dimension="2d",
            mip_level_count=1,
            sample_count=1,
        )

    def _bind_texture(self, pixels: np.ndarray) -> None:
        height, width = int(pixels.shape[0]), int(pixels.shape[1])
        if self._part_texture is None or self._part_texture_size != (width, height):
            self._part_texture = self._device.create_texture(
                size=(width, height, 1),
                format=_COLOR_FORMAT,
                usage=self._wgpu.TextureUsage.TEXTURE_BINDING | self._wgpu.TextureUsage.COPY_DST,
                dimension="2d",
                mip_level_count=1,
                sample_count=1,
            )
            self._part_texture_size = (width, height)
        self._device.queue.write_texture(
            {"texture": self._part_texture, "mip_level": 0, "origin": (0, 0, 0)},
            np.ascontiguousarray(pixels),
            {"offset": 0, "bytes_per_row": width * 4, "rows_per_image": height},
            (width, height, 1),
        )

    def _write_uniforms(self) -> None:
        settings = self.settings
        view_proj = view_projection(settings.camera, settings.viewport.aspect)
        sun = settings.sun
        tex_w, tex_h = self._part_texture_size
        payload = np.concatenate(
            (
                # WGSL matrices are column-major.
                view_proj.T.reshape(-1),
                (sun.direction.x, sun.direction.y, sun.direction.z, 0.0),
                (sun.intensity, sun.ambient, float(tex_w), float(tex_h)),
            )
        ).astype(np.float32)
        self._device.queue.write_buffer(self._uniform_buffer, 0, payload.tobytes())

    def _draw(self, vertices: np.ndarray, indices: np.ndarray) -> np.ndarray:
        wgpu = self._wgpu
        device = self._device
        bind_group = device.create_bind_group(
            layout=self._bind_group_layout,
            entries=[
                {
                    "binding": 0,
                    "resource": {"buffer": self._uniform_buffer, "offset": 0, "size": _UNIFORM_BYTES},
                },
                {"binding": 1, "resource": self._part_texture.create_view()},
                {"binding": 2, "resource": self._sampler},
            ],
        )
        encoder = device.create_command_encoder(label="mannequin.wgpu.frame")
        render_pass = encoder.begin_render_pass(
            color_attachments=[
                {
                    "view": self._color_texture.create_view(),
                    "resolve_target": None,
                    "clear_value": (0.0, 0.0, 0.0, 0.0),
                    "load_op": "clear",
                    "store_op": "store",
                }
            ],
            depth_stencil_attachment={
                "view": self._depth_texture.create_view(),
                "depth_clear_value": 1.0,
                "depth_load_op": "clear",
                "depth_store_op": "store",
            },
        )
        if indices.size:
            vertex_buffer = device.create_buffer_with_data(
                data=vertices.tobytes(), usage=wgpu.BufferUsage.VERTEX
            )
            index_buffer = device.create_buffer_with_data(
                data=indices.tobytes(), usage=wgpu.BufferUsage.INDEX
            )
            render_pass.set_pipeline(self._pipeline)
            render_pass.set_bind_group(0, bind_group)
            render_pass.set_vertex_buffer(0, vertex_buffer)
            render_pass.set_index_buffer(index_buffer, wgpu.IndexFormat.uint32)
            render_pass.draw_indexed(int(indices.size), 1, 0, 0, 0)
        render_pass.end()
        device.queue.submit([encoder.finish()])

        viewport = self.settings.viewport
        raw = device.queue.read_texture(
            {"texture": self._color_texture, "mip_level": 0, "origin": (0, 0, 0)},
            {"offset": 0, "bytes_per_row": viewport.width * 4, "rows_per_image": viewport.height},
            (viewport.width, viewport.height, 1),
        )
        return np.frombuffer(raw, dtype=np.uint8).reshape(viewport.height, viewport.width, 4).copy()


def _require_rgba_texture(texture: np.ndarray) -> np.ndarray:
    pixels = np.asarray(texture)
    if pixels.ndim != 3 or pixels.shape[2] != 4 or pixels.dtype != np.uint8:
        raise ValueError(
            f"texture must be an (H, W, 4) uint8 array, got shape={pixels.shape} dtype={pixels.dtype}"
        )
    return pixels


def wgpu_renderer_factory(settings: RenderSettings) -> RendererFactory:
    """Return a factory creating one independent offscreen renderer per call."""

    def _create(variant: ShaderVariant) -> OffscreenWgpuRenderer:
        return OffscreenWgpuRenderer(settings=settings, variant=variant)

    return _create
