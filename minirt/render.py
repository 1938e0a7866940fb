"""Phong shading, per-pixel ray tracing and supersampled rendering."""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

from .hit import hit
from .objects import Light, ObjectKind
from .ray import EPSILON, HitRecord, Ray
from .scene import Scene
from .vec import Color3, Vec3

LUMEN = 3
SHININESS = 64
SPECULAR_STRENGTH = 0.5

_BLACK = Vec3(0.0, 0.0, 0.0)
_WHITE = Vec3(1.0, 1.0, 1.0)
_SKY_LOW = Vec3(0.2, 0.2, 0.2)
_SKY_HIGH = Vec3(153.0 / 255.0, 153.0 / 255.0, 255.0 / 255.0)

Image = List[List[int]]


def reflect(v: Vec3, n: Vec3) -> Vec3:
    """Mirror ``v`` about a surface with unit normal ``n``."""
    return v - n * (v.dot(n) * 2)


def in_shadow(scene: Scene, light: Light, rec: HitRecord) -> Tuple[bool, Vec3]:
    """Tell whether an object blocks ``light`` from the hit point.

    The record's normal is turned to face the light. Returns the shadow flag
    together with the direction to the light, normalised when not shadowed.
    """
    light_dir = light.origin - rec.p
    if light_dir.dot(rec.normal) < 0.0:
        rec.normal = -rec.normal
    light_len = light_dir.length()
    light_ray = Ray(rec.p + rec.normal * EPSILON, light_dir)
    if hit(scene.objects, light_ray, 0.0, light_len) is not None:
        return True, light_dir
    return False, light_dir.unit()


def _specular(light: Light, ray: Ray, rec: HitRecord, light_dir: Vec3) -> Color3:
    view_dir = (-ray.dir).unit()
    reflect_dir = reflect(-light_dir, rec.normal)
    spec = max(view_dir.dot(reflect_dir), 0.0) ** SHININESS
    return light.light_color * SPECULAR_STRENGTH * spec


def point_light(scene: Scene, light: Light, ray: Ray, rec: HitRecord) -> Color3:
    """Diffuse plus specular contribution of one point light."""
    shadowed, light_dir = in_shadow(scene, light, rec)
    if shadowed:
        return _BLACK
    kd = max(rec.normal.dot(light_dir), 0.0)
    diffuse = light.light_color * kd
    specular = _specular(light, ray, rec, light_dir)
    return (diffuse + specular) * (light.bright_ratio * LUMEN)


def phong_lighting(scene: Scene, ray: Ray, rec: HitRecord) -> Color3:
    """Total light reaching the hit point, tinted by its albedo and clamped to 1."""
    total = _BLACK
    for obj in scene.lights:
        if obj.kind is ObjectKind.LIGHT and isinstance(obj.element, Light):
            total = total + point_light(scene, obj.element, ray, rec)
    total = total + scene.ambient
    return total.mul(rec.albedo).min(_WHITE)


def ray_color(scene: Scene, ray: Ray) -> Color3:
    """Colour seen along ``ray``: a shaded surface or the background gradient."""
    rec = hit(scene.world, ray, EPSILON, math.inf)
    if rec is not None:
        return phong_lighting(scene, ray, rec)
    t = 0.5 * (ray.dir.y + 1.0)
    return _SKY_LOW * (1.0 - t) + _SKY_HIGH * t


def to_rgb_int(color: Color3) -> int:
    """Pack a colour with components in [0, 1] into 0xRRGGBB."""
    return (
        256 * 256 * int(255.999 * color.x)
        + 256 * int(255.999 * color.y)
        + int(255.999 * color.z)
    )


def _dimensions(scene: Scene, width: Optional[int], height: Optional[int]) -> Tuple[int, int]:
    w = scene.width if width is None else width
    h = scene.height if height is None else height
    if w < 2 or h < 2:
        raise ValueError("image must be at least 2x2 pixels")
    return w, h


def render(scene: Scene, width: Optional[int] = None, height: Optional[int] = None) -> Image:
    """Trace one ray per pixel; returns rows of packed RGB values, top row first."""
    w, h = _dimensions(scene, width, height)
    camera = scene.camera
    return [
        [
            to_rgb_int(ray_color(scene, camera.primary_ray(i / (w - 1), j / (h - 1))))
            for i in range(w)
        ]
        for j in range(h)
    ]


def render_antialiased(
    scene: Scene, width: Optional[int] = None, height: Optional[int] = None
) -> Image:
    """Trace four rays per pixel on a doubled grid and average each 2x2 block."""
    w, h = _dimensions(scene, width, height)
    camera = scene.camera
    screen = [
        [
            ray_color(
                scene,
                camera.primary_ray((i / (w - 1)) / 2.0, (j / (h - 1)) / 2.0),
            )
            for i in range(2 * w)
        ]
        for j in range(2 * h)
    ]
    image: Image = []
    for top, bottom in zip(screen[0::2], screen[1::2]):
        row = []
        for x in range(w):
            block = top[2 * x] + top[2 * x + 1] + bottom[2 * x] + bottom[2 * x + 1]
            row.append(to_rgb_int(block * 0.25))
        image.append(row)
    return image