"""Pinhole camera with a viewport derived from its direction and field of view."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .errors import RTError
from .ray import Ray
from .vec import Point3, Vec3

_WORLD_UP = Vec3(0.0, 1.0, 0.0)


@dataclass
class Camera:
    """Camera position, viewing direction and horizontal field of view in degrees."""

    orig: Point3 = Vec3()
    normal: Vec3 = Vec3()
    fov: float = 0.0
    viewport_w: float = field(default=0.0, init=False)
    viewport_h: float = field(default=0.0, init=False)
    focal_len: float = field(default=0.0, init=False)
    horizontal: Vec3 = field(default=Vec3(), init=False)
    vertical: Vec3 = field(default=Vec3(), init=False)
    l_top: Point3 = field(default=Vec3(), init=False)
    up: Vec3 = field(default=Vec3(), init=False)
    forward: Vec3 = field(default=Vec3(), init=False)
    right: Vec3 = field(default=Vec3(), init=False)

    def update(self, aspect_ratio: float) -> None:
        """Recompute the viewport from position, direction and field of view."""
        self.viewport_w = 2.0
        self.viewport_h = self.viewport_w / aspect_ratio
        tangent = math.tan(self.fov / 360 * math.pi)
        if tangent == 0:
            raise RTError("Wrong input err", 21)
        self.focal_len = 1 / tangent
        self.horizontal = self.normal.cross(_WORLD_UP).unit() * 2.0
        self.vertical = self.horizontal.cross(self.normal).unit() * -self.viewport_h
        self.l_top = (
            self.orig - self.horizontal / 2 - self.vertical / 2 + self.normal * self.focal_len
        )
        self.up = _WORLD_UP
        self.forward = Vec3(self.normal.x, 0.0, self.normal.z).unit()
        self.right = self.horizontal.unit()

    def rotate_vertical(self, theta: float) -> None:
        """Tilt the view up or down, refusing to look straight along the up axis."""
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        candidate = (self.normal * cos_t + self.vertical * -sin_t).unit()
        if candidate.cross(_WORLD_UP).length_squared() < 0.01:
            return
        self.normal = candidate
        self.vertical = (self.vertical * -cos_t - self.normal * sin_t).unit()

    def primary_ray(self, u: float, v: float) -> Ray:
        """Ray through viewport point (u, v), both in [0, 1] from the top left."""
        target = self.l_top + self.horizontal * u + self.vertical * v
        return Ray(self.orig, target - self.orig)