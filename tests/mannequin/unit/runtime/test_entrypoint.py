from __future__ import annotations

import numpy as np
import pytest

from mannequin.api.render import ViewportSize
from mannequin.generation.groups import PartsGroupLogic
from mannequin.runtime.config import load_generator_config
from mannequin.runtime.entrypoint import build_parser, main, resolve_config
from tests.mannequin.conftest import FakeRendererFactory


def test_cli_overrides_env_config(tmp_path) -> None:
    args = build_parser().parse_args(
        ["--output-dir", str(tmp_path), "--group-logic", "merge-arms-with-body", "--viewport", "8x6"]
    )
    cfg = resolve_config(args, load_generator_config(env={}))
    assert cfg.output_dir == str(tmp_path)
    assert cfg.group_logic is PartsGroupLogic.MERGE_ARMS_WITH_BODY
    assert cfg.viewport == ViewportSize(8, 6)


def test_cli_keeps_env_config_without_overrides() -> None:
    base = load_generator_config(env={"MANNEQUIN_OUTPUT_DIR": "renders"})
    assert resolve_config(build_parser().parse_args([]), base) == base


def test_cli_rejects_unknown_group_logic() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--group-logic", "everything"])


def test_main_generates_with_given_renderer(tmp_path, capsys) -> None:
    factory = FakeRendererFactory(width=4, height=4)
    code = main(
        ["--output-dir", str(tmp_path), "--viewport", "4x4", "--group-logic", "MERGE_EVERYTHING"],
        renderer_factory=factory,
    )
    assert code == 0
    assert (tmp_path / "manifest.json").is_file()
    assert "files_written=" in capsys.readouterr().out


def test_main_reports_failed_generation(tmp_path) -> None:
    factory = FakeRendererFactory(produce=lambda *_: np.zeros((1, 1, 4), dtype=np.uint8))
    code = main(["--output-dir", str(tmp_path), "--viewport", "4x4"], renderer_factory=factory)
    assert code == 1


def test_main_rejects_malformed_viewport(tmp_path) -> None:
    with pytest.raises(SystemExit):
        main(["--output-dir", str(tmp_path), "--viewport", "big"], renderer_factory=FakeRendererFactory())
