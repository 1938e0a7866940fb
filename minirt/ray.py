"""Rays and the record of where a ray meets a surface."""

from __future__ import annotations

from dataclasses import dataclass, field

from .vec import Color3, Point3, Vec3

EPSILON = 1e-6


@dataclass
class Ray:
    """A half-line with a unit direction."""

    orig: Point3
    dir: Vec3

    def __post_init__(self) -> None:
        self.dir = self.dir.unit()

    def at(self, t: float) -> Point3:
        return self.orig + self.dir * t


@dataclass
class HitRecord:
    """Where a ray hit a surface, the surface normal there and its colour."""

    t: float = 0.0
    p: Point3 = Vec3()
    normal: Vec3 = Vec3()
    albedo: Color3 = Vec3()
    front_face: bool = True

    def set_face_normal(self, ray: Ray) -> None:
        """Make the normal face against the incoming ray."""
        self.front_face = ray.dir.dot(self.normal) < 0
        if not self.front_face:
            self.normal = -self.normal