"""Three-dimensional vectors and periodic-boundary helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vector:
    """An immutable Cartesian vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def __mul__(self, factor: float) -> Vector:
        return self.scaled(factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vector:
        return Vector(self.x / divisor, self.y / divisor, self.z / divisor)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: Vector) -> float:
        """Inner product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        """Cross product ``self x other``."""
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def norm(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vector:
        """Unit vector in the same direction."""
        length = self.norm()
        if length == 0.0:
            raise ValueError("cannot normalise a zero vector")
        return self / length

    def scaled(self, factor: float) -> Vector:
        """Vector multiplied by a scalar."""
        return Vector(self.x * factor, self.y * factor, self.z * factor)

    def times(self, other: Vector) -> Vector:
        """Component-wise product."""
        return Vector(self.x * other.x, self.y * other.y, self.z * other.z)


def _wrap(value: float, length: float) -> float:
    if length <= 0.0:
        raise ValueError(f"box length must be positive, got {length}")
    half = 0.5 * length
    while True:
        if value > half:
            value -= length
        if value < -half:
            value += length
        if abs(value) <= half:
            return value


def pbc(vector: Vector, box: Vector) -> Vector:
    """Wrap ``vector`` into the periodic box centred on the origin."""
    return Vector(
        _wrap(vector.x, box.x),
        _wrap(vector.y, box.y),
        _wrap(vector.z, box.z),
    )


def cosangle_to_angle(cosangle: float) -> float:
    """Angle in degrees for a cosine, clamped to [0, 180]."""
    if cosangle <= -1.0:
        return 180.0
    if cosangle >= 1.0:
        return 0.0
    return math.degrees(math.acos(cosangle))