"""WGSL sources and pipeline parameters per shader variant.

The depth-packing fragment stage writes one 32-bit word per covered pixel,
stored little-endian across R, G, B, A:

    bits  0-5   texel u
    bits  6-11  texel v
    bits 12-19  shading (green high nibble + blue low nibble)
    bits 20-31  depth   (blue high nibble + alpha)

Depth is written in ``[16, 4095]`` so the alpha byte of every covered pixel is
non-zero; a cleared pixel stays ``(0, 0, 0, 0)``.
"""

from __future__ import annotations

from dataclasses import dataclass

from mannequin.api.render import ShaderVariant

_COMMON_WGSL = """
struct Uniforms {
    view_proj: mat4x4<f32>,
    sun_direction: vec4<f32>,
    // x: sun intensity, y: ambient, z: texture width, w: texture height
    light: vec4<f32>,
};

@group(0) @binding(0) var<uniform> uniforms: Uniforms;
@group(0) @binding(1) var part_texture: texture_2d<f32>;
@group(0) @binding(2) var part_sampler: sampler;

struct VsIn {
    @location(0) position: vec3<f32>,
    @location(1) uv: vec2<f32>,
    @location(2) normal: vec3<f32>,
};

struct VsOut {
    @builtin(position) clip: vec4<f32>,
    @location(0) uv: vec2<f32>,
    @location(1) normal: vec3<f32>,
};

@vertex
fn vs_main(input: VsIn) -> VsOut {
    var out: VsOut;
    out.clip = uniforms.view_proj * vec4<f32>(input.position, 1.0);
    out.uv = input.uv;
    out.normal = input.normal;
    return out;
}

fn shade(normal: vec3<f32>) -> f32 {
    let to_sun = -normalize(uniforms.sun_direction.xyz);
    let diffuse = max(dot(normalize(normal), to_sun), 0.0);
    return clamp(uniforms.light.y + diffuse * uniforms.light.x, 0.0, 1.0);
}
"""

_SHADED_FRAGMENT_WGSL = """
@fragment
fn fs_main(input: VsOut) -> @location(0) vec4<f32> {
    let texel = textureSample(part_texture, part_sampler, input.uv);
    let light = shade(input.normal);
    return vec4<f32>(texel.rgb * light, texel.a);
}
"""

_DEPTH_FRAGMENT_WGSL = """
@fragment
fn fs_main(input: VsOut) -> @location(0) vec4<f32> {
    let u = min(u32(input.uv.x * uniforms.light.z), 63u);
    let v = min(u32(input.uv.y * uniforms.light.w), 63u);
    let s = u32(round(shade(input.normal) * 255.0));
    let d = 16u + u32(clamp(input.clip.z, 0.0, 1.0) * 4079.0);
    let packed = u | (v << 6u) | (s << 12u) | (d << 20u);
    return unpack4x8unorm(packed);
}
"""


@dataclass(frozen=True, slots=True)
class PipelineSpec:
    """Everything a pipeline build needs to know about one variant."""

    variant: ShaderVariant
    code: str
    cull_mode: str
    blend: bool


def pipeline_spec(variant: ShaderVariant) -> PipelineSpec:
    match variant:
        case ShaderVariant.SHADED:
            return PipelineSpec(variant, _COMMON_WGSL + _SHADED_FRAGMENT_WGSL, "back", True)
        case ShaderVariant.DEPTH_FRONT_FACE:
            return PipelineSpec(variant, _COMMON_WGSL + _DEPTH_FRAGMENT_WGSL, "back", False)
        case ShaderVariant.DEPTH_BACK_FACE:
            return PipelineSpec(variant, _COMMON_WGSL + _DEPTH_FRAGMENT_WGSL, "front", False)
    raise ValueError(f"unknown shader variant: {variant}")
