"""Render-pass planning and concurrent execution.

Passes of one group are independent: each gets its own renderer from the
factory and returns its own pixel buffer. The group only proceeds to merging
once every pass has finished; any failed pass fails the whole group.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import numpy as np

from mannequin.api.render import RendererFactory, ShaderVariant, ViewportSize
from mannequin.generation.groups import PartGroupSpec
from mannequin.generation.textures import blank_texture, shadow_texture
from mannequin.parts.provider import PartProviderContext, get_parts
from mannequin.parts.types import BodyPartType, PartTextureType, PlayerModel
from mannequin.rendering.convert import convert_parts
from mannequin.runtime.logging import get_logger

_LOG = get_logger("mannequin.generation.passes")


@dataclass(frozen=True, slots=True)
class RenderPassSpec:
    """One renderer invocation."""

    parts: tuple[BodyPartType, ...]
    model: PlayerModel
    variant: ShaderVariant
    texture: PartTextureType = PartTextureType.SKIN
    shadow_y_pos: float | None = None

    def describe(self) -> str:
        names = ",".join(str(part) for part in self.parts) or "-"
        return f"parts={names} model={self.model} variant={self.variant}"


class RenderPassError(RuntimeError):
    """A render pass failed or produced an unusable buffer."""

    def __init__(self, message: str, *, render_pass: RenderPassSpec) -> None:
        super().__init__(f"{message} ({render_pass.describe()})")
        self.render_pass = render_pass


def model_variants(spec: PartGroupSpec) -> tuple[PlayerModel, ...]:
    if spec.toggle_slim:
        return (PlayerModel.WIDE, PlayerModel.SLIM)
    return (PlayerModel.WIDE,)


def plan_group_passes(spec: PartGroupSpec, model: PlayerModel) -> list[RenderPassSpec]:
    """Expand one group into its render passes.

    Groups with overlays render every part on its own so that overlapping
    overlays stay separable, plus a back-face pass per overlay part. Groups
    without overlays render all parts in a single front-face pass.
    """
    if not spec.has_overlays:
        return [RenderPassSpec(spec.parts, model, ShaderVariant.DEPTH_FRONT_FACE)]
    passes: list[RenderPassSpec] = []
    for back_face in (False, True):
        for part in spec.parts:
            if back_face and not (part.is_layer or part.is_hat_layer):
                continue
            passes.append(RenderPassSpec((part,), model, ShaderVariant.for_face(back_face)))
    return passes


def environment_pass(shadow_y_pos: float) -> RenderPassSpec:
    """Ground shadow rendered on its own with the plain shaded variant."""
    return RenderPassSpec(
        parts=(),
        model=PlayerModel.WIDE,
        variant=ShaderVariant.SHADED,
        texture=PartTextureType.SHADOW,
        shadow_y_pos=shadow_y_pos,
    )


@dataclass(frozen=True, slots=True)
class RenderPassRunner:
    """Builds meshes for pass specs and drives renderers created per pass."""

    renderer_factory: RendererFactory
    viewport: ViewportSize
    arm_rotation: float = 10.0
    uv_epsilon: float = 0.0

    def run(self, render_pass: RenderPassSpec) -> np.ndarray:
        _LOG.debug("render pass start %s", render_pass.describe())
        context = PartProviderContext(
            model=render_pass.model,
            has_hat_layer=any(part.is_hat_layer for part in render_pass.parts),
            has_layers=any(part.is_layer for part in render_pass.parts),
            has_cape=BodyPartType.CAPE in render_pass.parts,
            arm_rotation=self.arm_rotation,
            shadow_y_pos=render_pass.shadow_y_pos,
        )
        mesh = convert_parts(get_parts(context, render_pass.parts), uv_epsilon=self.uv_epsilon)
        if render_pass.texture is PartTextureType.SHADOW:
            texture = shadow_texture()
        else:
            texture = blank_texture(render_pass.texture)
        try:
            renderer = self.renderer_factory(render_pass.variant)
        except Exception as exc:
            raise RenderPassError(f"renderer creation failed: {exc}", render_pass=render_pass) from exc
        try:
            image = renderer.render(mesh, texture)
        except Exception as exc:
            raise RenderPassError(f"render failed: {exc}", render_pass=render_pass) from exc
        finally:
            renderer.close()
        return self._require_buffer(image, render_pass)

    def run_all(self, passes: Sequence[RenderPassSpec]) -> list[np.ndarray]:
        """Run passes concurrently, one worker per pass; results keep pass order."""
        if not passes:
            return []
        with ThreadPoolExecutor(
            max_workers=len(passes), thread_name_prefix="mannequin-pass"
        ) as pool:
            futures = [pool.submit(self.run, render_pass) for render_pass in passes]
            try:
                return [future.result() for future in futures]
            except BaseException:
                for future in futures:
                    future.cancel()
                raise

    def run_depth_passes(self, passes: Sequence[RenderPassSpec]) -> list[np.ndarray]:
        """Run passes whose buffers feed layer compositing.

        Every pass must use a depth-packing variant; a shaded buffer carries
        no depth bits and would be ranked as garbage.
        """
        for render_pass in passes:
            if not render_pass.variant.packs_depth:
                raise RenderPassError(
                    f"variant {render_pass.variant} does not pack depth", render_pass=render_pass
                )
        return self.run_all(passes)

    def _require_buffer(self, image: object, render_pass: RenderPassSpec) -> np.ndarray:
        if image is None:
            raise RenderPassError("renderer returned no buffer", render_pass=render_pass)
        if not isinstance(image, np.ndarray):
            raise RenderPassError(
                f"renderer returned {type(image).__name__} instead of a pixel buffer",
                render_pass=render_pass,
            )
        expected = (self.viewport.height, self.viewport.width, 4)
        if image.shape != expected or image.dtype != np.uint8:
            raise RenderPassError(
                f"renderer returned shape={image.shape} dtype={image.dtype}, expected {expected} uint8",
                render_pass=render_pass,
            )
        return image
