"""Layered body-part atlas generation for humanoid skin models."""

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mannequin.generation.generator import GenerationSummary


def generate(root: str | Path | None = None) -> "GenerationSummary":
    """Generate the atlas with env-derived configuration and the wgpu renderer."""
    from mannequin.generation.generator import PartsGenerator
    from mannequin.rendering.wgpu_renderer import wgpu_renderer_factory
    from mannequin.runtime.config import load_generator_config

    config = load_generator_config()
    generator = PartsGenerator(config, wgpu_renderer_factory(config.render_settings))
    return generator.generate(Path(root if root is not None else config.output_dir))

__all__ = ["generate"]
