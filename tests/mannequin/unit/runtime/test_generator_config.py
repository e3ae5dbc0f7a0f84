from __future__ import annotations

import pytest

from mannequin.api.render import ViewportSize
from mannequin.generation.groups import PartsGroupLogic
from mannequin.parts.vector import Vec3
from mannequin.runtime.config import load_generator_config, parse_group_logic, parse_resolution


def test_defaults_without_env() -> None:
    cfg = load_generator_config(env={})
    assert cfg.viewport == ViewportSize(512, 832)
    assert cfg.camera.position == Vec3(0, 16, -44)
    assert cfg.arm_rotation == 10.0
    assert cfg.shadow_y_pos == 0.0
    assert cfg.uv_epsilon == 0.0
    assert cfg.group_logic is PartsGroupLogic.SPLIT_ARMS_FROM_BODY
    assert cfg.output_dir == "parts"


def test_env_values_are_parsed() -> None:
    cfg = load_generator_config(
        env={
            "MANNEQUIN_VIEWPORT": "256x416",
            "MANNEQUIN_CAMERA_POSITION": "1, 2, -30",
            "MANNEQUIN_CAMERA_YAW": "15",
            "MANNEQUIN_SUN_INTENSITY": "0.9",
            "MANNEQUIN_ARM_ROTATION": "5",
            "MANNEQUIN_UV_EPSILON": "0.001",
            "MANNEQUIN_GROUP_LOGIC": "merge-everything",
            "MANNEQUIN_OUTPUT_DIR": "renders",
        }
    )
    assert cfg.viewport == ViewportSize(256, 416)
    assert cfg.camera.position == Vec3(1, 2, -30)
    assert cfg.camera.yaw == 15.0
    assert cfg.sun.intensity == 0.9
    assert cfg.arm_rotation == 5.0
    assert cfg.uv_epsilon == 0.001
    assert cfg.group_logic is PartsGroupLogic.MERGE_EVERYTHING
    assert cfg.output_dir == "renders"
    assert cfg.render_settings.viewport == cfg.viewport


def test_malformed_values_fall_back_to_defaults() -> None:
    cfg = load_generator_config(
        env={
            "MANNEQUIN_VIEWPORT": "wide",
            "MANNEQUIN_CAMERA_POSITION": "1,2",
            "MANNEQUIN_ARM_ROTATION": "nan",
            "MANNEQUIN_SHADOW_Y": "low",
            "MANNEQUIN_GROUP_LOGIC": "everything",
            "MANNEQUIN_OUTPUT_DIR": "  ",
        }
    )
    assert cfg.viewport == ViewportSize(512, 832)
    assert cfg.camera.position == Vec3(0, 16, -44)
    assert cfg.arm_rotation == 10.0
    assert cfg.shadow_y_pos == 0.0
    assert cfg.group_logic is PartsGroupLogic.SPLIT_ARMS_FROM_BODY
    assert cfg.output_dir == "parts"


def test_ranged_values_are_clamped() -> None:
    cfg = load_generator_config(
        env={
            "MANNEQUIN_CAMERA_PITCH": "120",
            "MANNEQUIN_CAMERA_FOV": "0",
            "MANNEQUIN_SUN_AMBIENT": "3",
            "MANNEQUIN_UV_EPSILON": "-1",
        }
    )
    assert cfg.camera.pitch == 89.0
    assert cfg.camera.fov == 1.0
    assert cfg.sun.ambient == 1.0
    assert cfg.uv_epsilon == 0.0


def test_process_env_is_used_by_default(monkeypatch) -> None:
    monkeypatch.setenv("MANNEQUIN_OUTPUT_DIR", "from-env")
    assert load_generator_config().output_dir == "from-env"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("256x416", (256, 416)), (" 64 , 32 ", (64, 32)), ("10:0", (10, 1)), ("", None), ("wide", None), ("ax2", None)],
)
def test_parse_resolution(raw: str, expected) -> None:
    assert parse_resolution(raw) == expected


def test_parse_group_logic_accepts_dashed_lowercase_names() -> None:
    assert parse_group_logic("merge-arms-with-body") is PartsGroupLogic.MERGE_ARMS_WITH_BODY
    assert parse_group_logic(" SPLIT_ARMS_FROM_BODY ") is PartsGroupLogic.SPLIT_ARMS_FROM_BODY
    assert parse_group_logic("everything") is None
