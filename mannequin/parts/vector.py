"""Three-component vector used for part positions, sizes and normals.

Coordinates follow the model convention:
- +X is east / -X is west
- +Y is up / -Y is down
- +Z is south / -Z is north
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class Vec3:
    """Immutable 3D vector with component-wise arithmetic."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def splat(cls, value: float) -> Vec3:
        return cls(float(value), float(value), float(value))

    @classmethod
    def of(cls, values: tuple[float, float, float] | list[float] | Vec3) -> Vec3:
        """Build a vector from any 3-sequence."""
        if isinstance(values, Vec3):
            return values
        x, y, z = values
        return cls(float(x), float(y), float(z))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec3:
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def is_finite(self) -> bool:
        return all(math.isfinite(value) for value in self)

    def as_array(self) -> np.ndarray:
        return np.array((self.x, self.y, self.z), dtype=np.float64)


ZERO = Vec3()
