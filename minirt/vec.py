"""Three-component vectors used for points, directions and colours."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

from .errors import RTError


@dataclass(frozen=True)
class Vec3:
    """An immutable 3D vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, t: float) -> Vec3:
        return Vec3(self.x * t, self.y * t, self.z * t)

    def __rmul__(self, t: float) -> Vec3:
        return self * t

    def __truediv__(self, t: float) -> Vec3:
        inv = 1 / t
        return Vec3(self.x * inv, self.y * inv, self.z * inv)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def unit(self) -> Vec3:
        """Return the normalised vector; a zero vector is an error."""
        length = self.length()
        if length == 0:
            raise RTError("miniRT: Error: Devider is 0", 31)
        return Vec3(self.x / length, self.y / length, self.z / length)

    def mul(self, other: Vec3) -> Vec3:
        """Component-wise product."""
        return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)

    def min(self, other: Vec3) -> Vec3:
        return Vec3(min(self.x, other.x), min(self.y, other.y), min(self.z, other.z))

    def max(self, other: Vec3) -> Vec3:
        return Vec3(max(self.x, other.x), max(self.y, other.y), max(self.z, other.z))

    def rotate_x(self, theta: float) -> Vec3:
        c, s = math.cos(theta), math.sin(theta)
        return Vec3(self.x, self.y * c - self.z * s, self.y * s + self.z * c)

    def rotate_y(self, theta: float) -> Vec3:
        c, s = math.cos(theta), math.sin(theta)
        return Vec3(self.z * s + self.x * c, self.y, self.z * c - self.x * s)

    def rotate_z(self, theta: float) -> Vec3:
        c, s = math.cos(theta), math.sin(theta)
        return Vec3(self.x * c - self.y * s, self.x * s + self.y * c, self.z)


Point3 = Vec3
Color3 = Vec3