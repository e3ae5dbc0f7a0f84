"""Renderer-facing primitives and mesh buffer builders."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from mannequin.parts.transform import transform_points
from mannequin.parts.vector import Vec3

type UvQuad = tuple[
    tuple[float, float], tuple[float, float], tuple[float, float], tuple[float, float]
]

# position(3) + uv(2) + normal(3), all float32.
VERTEX_FLOATS = 8
VERTEX_STRIDE_BYTES = VERTEX_FLOATS * 4
# Corners are stored TL, TR, BL, BR; both triangles wind counter-clockwise
# as seen from the side the normal points to.
QUAD_INDICES: tuple[int, ...] = (0, 2, 3, 0, 3, 1)


@dataclass(frozen=True, slots=True)
class Vertex:
    position: tuple[float, float, float]
    uv: tuple[float, float]


@dataclass(frozen=True, slots=True)
class QuadPrimitive:
    """Four absolute-space vertices sharing one face normal."""

    top_left: Vertex
    top_right: Vertex
    bottom_left: Vertex
    bottom_right: Vertex
    normal: tuple[float, float, float]

    @classmethod
    def from_points(
        cls,
        points: np.ndarray,
        uvs: UvQuad,
        normal: tuple[float, float, float],
    ) -> QuadPrimitive:
        """Build from a ``(4, 3)`` TL, TR, BL, BR point array."""
        vertices = [
            Vertex(position=(float(p[0]), float(p[1]), float(p[2])), uv=(float(uv[0]), float(uv[1])))
            for p, uv in zip(points, uvs, strict=True)
        ]
        return cls(vertices[0], vertices[1], vertices[2], vertices[3], normal)

    @property
    def vertices(self) -> tuple[Vertex, Vertex, Vertex, Vertex]:
        return (self.top_left, self.top_right, self.bottom_left, self.bottom_right)

    @property
    def quads(self) -> tuple[QuadPrimitive, ...]:
        return (self,)


@dataclass(frozen=True, slots=True)
class CubePrimitive:
    """Six independent face quads of a transformed box."""

    north: QuadPrimitive
    south: QuadPrimitive
    up: QuadPrimitive
    down: QuadPrimitive
    west: QuadPrimitive
    east: QuadPrimitive

    @classmethod
    def new(
        cls,
        *,
        center: Vec3,
        size: Vec3,
        model_transform: np.ndarray,
        north: UvQuad,
        south: UvQuad,
        up: UvQuad,
        down: UvQuad,
        west: UvQuad,
        east: UvQuad,
    ) -> CubePrimitive:
        x0, x1 = center.x - size.x / 2.0, center.x + size.x / 2.0
        y0, y1 = center.y - size.y / 2.0, center.y + size.y / 2.0
        z0, z1 = center.z - size.z / 2.0, center.z + size.z / 2.0
        # Corners of each face as seen from outside the box.
        corners = {
            "north": ((x1, y1, z0), (x0, y1, z0), (x1, y0, z0), (x0, y0, z0)),
            "south": ((x0, y1, z1), (x1, y1, z1), (x0, y0, z1), (x1, y0, z1)),
            "east": ((x1, y1, z1), (x1, y1, z0), (x1, y0, z1), (x1, y0, z0)),
            "west": ((x0, y1, z0), (x0, y1, z1), (x0, y0, z0), (x0, y0, z1)),
            "up": ((x1, y1, z1), (x0, y1, z1), (x1, y1, z0), (x0, y1, z0)),
            "down": ((x0, y0, z1), (x1, y0, z1), (x0, y0, z0), (x1, y0, z0)),
        }
        normals = {
            "north": (0.0, 0.0, -1.0),
            "south": (0.0, 0.0, 1.0),
            "east": (1.0, 0.0, 0.0),
            "west": (-1.0, 0.0, 0.0),
            "up": (0.0, 1.0, 0.0),
            "down": (0.0, -1.0, 0.0),
        }
        uvs = {"north": north, "south": south, "up": up, "down": down, "west": west, "east": east}
        rotation = model_transform[0:3, 0:3]
        faces: dict[str, QuadPrimitive] = {}
        for name, face_corners in corners.items():
            points = transform_points(model_transform, np.array(face_corners, dtype=np.float64))
            normal = rotation @ np.array(normals[name], dtype=np.float64)
            faces[name] = QuadPrimitive.from_points(
                points, uvs[name], (float(normal[0]), float(normal[1]), float(normal[2]))
            )
        return cls(**faces)

    @property
    def quads(self) -> tuple[QuadPrimitive, ...]:
        return (self.north, self.south, self.up, self.down, self.west, self.east)

    @property
    def vertices(self) -> tuple[Vertex, ...]:
        return tuple(vertex for quad in self.quads for vertex in quad.vertices)


type RenderPrimitive = CubePrimitive | QuadPrimitive


def mesh_buffers(mesh: Iterable[RenderPrimitive]) -> tuple[np.ndarray, np.ndarray]:
    """Flatten primitives into interleaved vertex data and triangle indices."""
    rows: list[tuple[float, ...]] = []
    indices: list[int] = []
    for primitive in mesh:
        for quad in primitive.quads:
            base = len(rows)
            for vertex in quad.vertices:
                rows.append((*vertex.position, *vertex.uv, *quad.normal))
            indices.extend(base + index for index in QUAD_INDICES)
    vertices = np.array(rows, dtype=np.float32).reshape(-1, VERTEX_FLOATS)
    return vertices, np.array(indices, dtype=np.uint32)
