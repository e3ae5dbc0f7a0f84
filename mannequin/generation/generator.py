"""Atlas generation: groups -> render passes -> merged layers -> files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import orjson

from mannequin.api.render import RendererFactory
from mannequin.compositing.export import write_image, write_layers
from mannequin.compositing.layers import merge_layers
from mannequin.generation.groups import PartGroupSpec
from mannequin.generation.passes import (
    RenderPassRunner,
    environment_pass,
    model_variants,
    plan_group_passes,
)
from mannequin.parts.types import PlayerModel
from mannequin.runtime.logging import get_logger

if TYPE_CHECKING:
    from mannequin.runtime.config import GeneratorConfig

_LOG = get_logger("mannequin.generation.generator")

ENVIRONMENT_FILE_NAME = "environment_background.png"
MANIFEST_FILE_NAME = "manifest.json"


@dataclass(slots=True)
class GenerationSummary:
    """Files written by one generator run, relative to the output root."""

    root: Path
    groups: dict[str, list[str]] = field(default_factory=dict)
    environment: str | None = None

    @property
    def file_count(self) -> int:
        count = sum(len(paths) for paths in self.groups.values())
        return count + (1 if self.environment is not None else 0)

    def to_manifest(self, config: GeneratorConfig) -> dict[str, object]:
        return {
            "group_logic": str(config.group_logic),
            "viewport": [config.viewport.width, config.viewport.height],
            "groups": self.groups,
            "environment": self.environment,
        }


class PartsGenerator:
    """Renders every part group of the configured grouping into layer images."""

    def __init__(self, config: GeneratorConfig, renderer_factory: RendererFactory) -> None:
        self._config = config
        self._runner = RenderPassRunner(
            renderer_factory=renderer_factory,
            viewport=config.viewport,
            arm_rotation=config.arm_rotation,
            uv_epsilon=config.uv_epsilon,
        )

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    def generate(self, root: Path) -> GenerationSummary:
        root = Path(root)
        root.mkdir(parents=True, exist_ok=True)
        summary = GenerationSummary(root=root)
        groups = self._config.group_logic.groups()
        _LOG.info(
            "generation start logic=%s groups=%d root=%s",
            self._config.group_logic,
            len(groups),
            root,
        )
        for spec in groups:
            for model in model_variants(spec):
                name = spec.output_name(model.display_name)
                written = self.generate_group(spec, model, root)
                summary.groups[name] = [path.relative_to(root).as_posix() for path in written]

        summary.environment = self.generate_environment(root).relative_to(root).as_posix()
        manifest_path = root / MANIFEST_FILE_NAME
        manifest_path.write_bytes(
            orjson.dumps(summary.to_manifest(self._config), option=orjson.OPT_INDENT_2)
        )
        _LOG.info("generation done files=%d manifest=%s", summary.file_count, manifest_path)
        return summary

    def generate_group(self, spec: PartGroupSpec, model: PlayerModel, root: Path) -> list[Path]:
        name = spec.output_name(model.display_name)
        passes = plan_group_passes(spec, model)
        _LOG.info("group start name=%s model=%s passes=%d", name, model, len(passes))
        images = self._runner.run_depth_passes(passes)
        layers = merge_layers(images)
        written = write_layers(layers, root / name, group=name)
        _LOG.info("group done name=%s layers=%d", name, len(layers))
        return written

    def generate_environment(self, root: Path) -> Path:
        image = self._runner.run(environment_pass(self._config.shadow_y_pos))
        path = root / ENVIRONMENT_FILE_NAME
        write_image(image, path)
        _LOG.debug("wrote environment background path=%s", path)
        return path
