"""Generator configuration sourced from environment variables."""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass

from mannequin.api.render import Camera, RenderSettings, SunInformation, ViewportSize
from mannequin.generation.groups import PartsGroupLogic
from mannequin.parts.vector import Vec3


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Immutable atlas generation configuration."""

    viewport: ViewportSize
    camera: Camera
    sun: SunInformation
    arm_rotation: float
    shadow_y_pos: float
    uv_epsilon: float
    group_logic: PartsGroupLogic
    output_dir: str

    @property
    def render_settings(self) -> RenderSettings:
        return RenderSettings(camera=self.camera, sun=self.sun, viewport=self.viewport)


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    maximum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
        if not math.isfinite(value):
            value = float(default)
    if minimum is not None:
        value = max(float(minimum), value)
    if maximum is not None:
        value = min(float(maximum), value)
    return value


def _text(name: str, default: str, *, env: Mapping[str, str] | None = None) -> str:
    raw = _raw(name, env=env)
    if raw is None:
        return str(default)
    value = raw.strip()
    return value if value else str(default)


def _vec3(name: str, default: Vec3, *, env: Mapping[str, str] | None = None) -> Vec3:
    raw = _text(name, "", env=env)
    if not raw:
        return default
    parts = [item.strip() for item in raw.split(",")]
    if len(parts) != 3:
        return default
    try:
        value = Vec3(float(parts[0]), float(parts[1]), float(parts[2]))
    except ValueError:
        return default
    return value if value.is_finite() else default


def parse_resolution(raw: str) -> tuple[int, int] | None:
    """Parse ``WIDTHxHEIGHT`` (also ``,`` or ``:`` separated); ``None`` when unparsable."""
    value = str(raw).strip().lower()
    if not value:
        return None
    normalized = value.replace(" ", "")
    for sep in ("x", ",", ":"):
        if sep in normalized:
            left, right = normalized.split(sep, 1)
            try:
                width = max(1, int(left))
                height = max(1, int(right))
            except ValueError:
                return None
            return (width, height)
    return None


def parse_group_logic(raw: str) -> PartsGroupLogic | None:
    """Match a grouping name case-insensitively, accepting dashes for underscores."""
    normalized = raw.strip().upper().replace("-", "_")
    try:
        return PartsGroupLogic(normalized)
    except ValueError:
        return None


def load_generator_config(env: Mapping[str, str] | None = None) -> GeneratorConfig:
    """Load immutable generator configuration from env vars."""
    default_camera = Camera()
    default_sun = SunInformation()
    resolution = parse_resolution(_text("MANNEQUIN_VIEWPORT", "", env=env)) or (512, 832)
    camera = Camera(
        position=_vec3("MANNEQUIN_CAMERA_POSITION", default_camera.position, env=env),
        yaw=_float("MANNEQUIN_CAMERA_YAW", default_camera.yaw, env=env),
        pitch=_float("MANNEQUIN_CAMERA_PITCH", default_camera.pitch, minimum=-89.0, maximum=89.0, env=env),
        fov=_float("MANNEQUIN_CAMERA_FOV", default_camera.fov, minimum=1.0, maximum=179.0, env=env),
    )
    sun = SunInformation(
        direction=_vec3("MANNEQUIN_SUN_DIRECTION", default_sun.direction, env=env),
        intensity=_float("MANNEQUIN_SUN_INTENSITY", default_sun.intensity, minimum=0.0, env=env),
        ambient=_float("MANNEQUIN_SUN_AMBIENT", default_sun.ambient, minimum=0.0, maximum=1.0, env=env),
    )
    group_logic = parse_group_logic(_text("MANNEQUIN_GROUP_LOGIC", "", env=env))
    return GeneratorConfig(
        viewport=ViewportSize(width=resolution[0], height=resolution[1]),
        camera=camera,
        sun=sun,
        arm_rotation=_float("MANNEQUIN_ARM_ROTATION", 10.0, env=env),
        shadow_y_pos=_float("MANNEQUIN_SHADOW_Y", 0.0, env=env),
        uv_epsilon=_float("MANNEQUIN_UV_EPSILON", 0.0, minimum=0.0, maximum=0.5, env=env),
        group_logic=group_logic or PartsGroupLogic.SPLIT_ARMS_FROM_BODY,
        output_dir=_text("MANNEQUIN_OUTPUT_DIR", "parts", env=env),
    )
