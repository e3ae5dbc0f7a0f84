from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import numpy as np

from mannequin.api.render import ShaderVariant
from mannequin.compositing.depth import pack_fragment


@dataclass(slots=True)
class FakeRenderer:
    """Renderer double returning buffers computed from the submitted mesh."""

    variant: ShaderVariant
    width: int
    height: int
    produce: Callable[[ShaderVariant, int, int, int], object] | None = None
    meshes: list[int] = field(default_factory=list)
    textures: list[tuple[int, ...]] = field(default_factory=list)
    closed: bool = False

    def render(self, mesh: Sequence[object], texture: np.ndarray) -> object:
        self.meshes.append(len(mesh))
        self.textures.append(tuple(texture.shape))
        if self.produce is not None:
            return self.produce(self.variant, len(mesh), self.width, self.height)
        image = np.zeros((self.height, self.width, 4), dtype=np.uint8)
        if self.variant is ShaderVariant.SHADED:
            image[..., 3] = 255
            return image
        depth = 100 + 10 * len(mesh)
        if self.variant is ShaderVariant.DEPTH_BACK_FACE:
            depth += 1000
        image[0, 0] = pack_fragment(depth=depth)
        return image

    def close(self) -> None:
        self.closed = True


@dataclass(slots=True)
class FakeRendererFactory:
    width: int = 4
    height: int = 4
    produce: Callable[[ShaderVariant, int, int, int], object] | None = None
    created: list[FakeRenderer] = field(default_factory=list)

    def __call__(self, variant: ShaderVariant) -> FakeRenderer:
        renderer = FakeRenderer(variant, self.width, self.height, self.produce)
        self.created.append(renderer)
        return renderer
