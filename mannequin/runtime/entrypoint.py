"""Command line entrypoint for atlas generation."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from mannequin.api.render import RendererFactory, ViewportSize
from mannequin.compositing.export import LayerWriteError
from mannequin.compositing.layers import CompositingError
from mannequin.generation.generator import PartsGenerator
from mannequin.generation.groups import PartsGroupLogic
from mannequin.generation.passes import RenderPassError
from mannequin.runtime.config import (
    GeneratorConfig,
    load_generator_config,
    parse_group_logic,
    parse_resolution,
)
from mannequin.runtime.logging import get_logger, setup_logging

_LOG = get_logger("mannequin.runtime.entrypoint")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mannequin-parts",
        description="Render layered body-part atlas images for a humanoid skin model.",
    )
    parser.add_argument("--output-dir", type=Path, default=None, help="Directory receiving the images.")
    parser.add_argument(
        "--group-logic",
        default=None,
        choices=[str(logic) for logic in PartsGroupLogic],
        type=lambda raw: str(parse_group_logic(raw) or raw),
        help="How body parts are grouped into output images.",
    )
    parser.add_argument("--viewport", default=None, help="Render size as WIDTHxHEIGHT.")
    return parser


def resolve_config(args: argparse.Namespace, base: GeneratorConfig) -> GeneratorConfig:
    """Apply command line overrides on top of env-derived configuration."""
    config = base
    if args.output_dir is not None:
        config = replace(config, output_dir=str(args.output_dir))
    if args.group_logic is not None:
        config = replace(config, group_logic=PartsGroupLogic(args.group_logic))
    if args.viewport is not None:
        resolution = parse_resolution(args.viewport)
        if resolution is None:
            raise ValueError(f"invalid viewport {args.viewport!r}, expected WIDTHxHEIGHT")
        config = replace(config, viewport=ViewportSize(width=resolution[0], height=resolution[1]))
    return config


def _default_renderer_factory(config: GeneratorConfig) -> RendererFactory:
    from mannequin.rendering.wgpu_renderer import wgpu_renderer_factory

    return wgpu_renderer_factory(config.render_settings)


def main(
    argv: Sequence[str] | None = None,
    *,
    renderer_factory: RendererFactory | None = None,
) -> int:
    setup_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = resolve_config(args, load_generator_config())
    except ValueError as exc:
        parser.error(str(exc))
    factory = renderer_factory if renderer_factory is not None else _default_renderer_factory(config)
    generator = PartsGenerator(config, factory)
    try:
        summary = generator.generate(Path(config.output_dir))
    except (RenderPassError, CompositingError, LayerWriteError) as exc:
        _LOG.error("generation failed: %s", exc)
        return 1
    print(f"output_dir={summary.root}")
    print(f"files_written={summary.file_count}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
