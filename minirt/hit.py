"""Ray intersection with every kind of scene primitive."""

from __future__ import annotations

import math
from typing import Iterable, Optional

from .objects import (
    Checkerboard,
    Cone,
    Cylinder,
    Disk,
    ObjectKind,
    Plane,
    Planet,
    SceneObject,
    Sphere,
)
from .ray import EPSILON, HitRecord, Ray
from .texture import Texture
from .vec import Color3, Point3, Vec3

_Y_AXIS = Vec3(0.0, 1.0, 0.0)
_WHITE = Vec3(1.0, 1.0, 1.0)


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    magnitude = math.floor(abs(value) + 0.5)
    return magnitude if value >= 0 else -magnitude


def hit(
    objects: Iterable[SceneObject],
    ray: Ray,
    tmin: float = EPSILON,
    tmax: float = math.inf,
) -> Optional[HitRecord]:
    """Return the closest intersection of ``ray`` with ``objects`` inside (tmin, tmax)."""
    closest: Optional[HitRecord] = None
    for obj in objects:
        rec = hit_object(obj, ray, tmin, tmax)
        if rec is not None:
            tmax = rec.t
            closest = rec
    return closest


def hit_object(
    obj: SceneObject, ray: Ray, tmin: float, tmax: float
) -> Optional[HitRecord]:
    """Intersect a single object; lights are never hit."""
    kind = obj.kind
    if kind in (ObjectKind.SPHERE, ObjectKind.LIGHT_BULB):
        return hit_sphere(obj, ray, tmin, tmax)
    if kind is ObjectKind.PLANE:
        return hit_plane(obj, ray, tmin, tmax)
    if kind is ObjectKind.CYLINDER:
        return hit_cylinder(obj, ray, tmin, tmax)
    if kind is ObjectKind.DISK:
        return hit_disk(obj, ray, tmin, tmax)
    if kind is ObjectKind.CONE:
        return hit_cone(obj, ray, tmin, tmax)
    if kind is ObjectKind.CHECKERBOARD:
        return hit_checkerboard(obj, ray, tmin, tmax)
    if kind in (ObjectKind.STAR, ObjectKind.PLANET):
        return hit_planet(obj, ray, tmin, tmax)
    return None


def sphere_root(
    center: Point3, radius2: float, ray: Ray, tmin: float, tmax: float
) -> Optional[float]:
    """Nearest ray parameter in range where the ray meets a sphere, or None."""
    oc = ray.orig - center
    a = ray.dir.length_squared()
    half_b = oc.dot(ray.dir)
    c = oc.length_squared() - radius2
    discriminant = half_b * half_b - a * c
    if discriminant < 0:
        return None
    sqrtd = math.sqrt(discriminant)
    root = (-half_b - sqrtd) / a
    if root < tmin or tmax < root:
        root = (-half_b + sqrtd) / a
        if root < tmin or root > tmax:
            return None
    return root


def surface_albedo(
    center: Point3, texture: Optional[Texture], point: Point3, albedo: Color3
) -> Color3:
    """Colour of a sphere at ``point``, from its texture map when it has one."""
    if texture is None:
        return albedo
    return texture.sample(point - center)


def surface_normal(
    center: Point3, radius: float, bump: Optional[Texture], point: Point3
) -> Vec3:
    """Outward normal of a sphere at ``point``, perturbed by a bump map if given."""
    if bump is None:
        return (point - center) / radius
    sampled = bump.sample(point - center)
    perturb = (sampled - Vec3(0.5, 0.5, 0.5)) * 2.0
    perturb = Vec3(perturb.x, -perturb.y, perturb.z)
    cp = (point - center).unit()
    if cp.x == 0 and cp.y == 1 and cp.z == 0:
        return perturb.rotate_x(-math.pi / 2.0)
    tangent = _Y_AXIS.cross(cp).unit()
    bitangent = cp.cross(tangent).unit()
    return (
        cp * 3.0 + cp * perturb.z + tangent * perturb.x + bitangent * perturb.y
    ).unit()


def _sphere_record(
    obj: SceneObject, center: Point3, radius: float, ray: Ray, t: float
) -> HitRecord:
    p = ray.at(t)
    rec = HitRecord(t=t, p=p, normal=surface_normal(center, radius, obj.bump, p))
    rec.set_face_normal(ray)
    rec.albedo = surface_albedo(center, obj.texture, p, obj.albedo)
    return rec


def hit_sphere(
    obj: SceneObject, ray: Ray, tmin: float, tmax: float
) -> Optional[HitRecord]:
    sp: Sphere = obj.element  # type: ignore[assignment]
    t = sphere_root(sp.center, sp.radius2, ray, tmin, tmax)
    if t is None:
        return None
    return _sphere_record(obj, sp.center, sp.radius, ray, t)


def _flat_record(ray: Ray, t: float, normal: Vec3, albedo: Color3) -> HitRecord:
    rec = HitRecord(t=t, p=ray.at(t), normal=normal)
    rec.set_face_normal(ray)
    rec.albedo = albedo
    return rec


def _plane_param(point: Point3, normal: Vec3, ray: Ray) -> Optional[float]:
    denom = normal.dot(ray.dir)
    if denom == 0:
        return None
    return (point - ray.orig).dot(normal) / denom


def hit_plane(
    obj: SceneObject, ray: Ray, tmin: float, tmax: float
) -> Optional[HitRecord]:
    pl: Plane = obj.element  # type: ignore[assignment]
    t = _plane_param(pl.point, pl.normal, ray)
    if t is None or t < tmin or tmax < t:
        return None
    return _flat_record(ray, t, pl.normal, obj.albedo)


def hit_cylinder(
    obj: SceneObject, ray: Ray, tmin: float, tmax: float
) -> Optional[HitRecord]:
    """Intersect the open side of a cylinder centred on its mid-height point."""
    cy: Cylinder = obj.element  # type: ignore[assignment]
    n = cy.normal
    sub_a = ray.dir - n * ray.dir.dot(n)
    sub_b = (ray.orig - cy.center) - n * ray.orig.dot(n) + n * cy.center.dot(n)
    a = sub_a.dot(sub_a)
    half_b = sub_a.dot(sub_b)
    c = sub_b.dot(sub_b) - cy.radius2
    discriminant = half_b * half_b - a * c
    if discriminant < 0 or a == 0:
        return None
    sqrtd = math.sqrt(discriminant)
    for root in ((-half_b - sqrtd) / a, (-half_b + sqrtd) / a):
        p = ray.at(root)
        h = (p - cy.center).dot(n)
        if tmin <= root <= tmax and abs(h) <= cy.height / 2:
            normal = (p - (cy.center + n * h)) / cy.radius
            rec = HitRecord(t=root, p=p, normal=normal, albedo=obj.albedo)
            rec.set_face_normal(ray)
            return rec
    return None


def hit_disk(
    obj: SceneObject, ray: Ray, tmin: float, tmax: float
) -> Optional[HitRecord]:
    dk: Disk = obj.element  # type: ignore[assignment]
    t = _plane_param(dk.center, dk.normal, ray)
    if t is None or t < tmin or tmax < t:
        return None
    if (ray.at(t) - dk.center).length() > dk.radius:
        return None
    return _flat_record(ray, t, dk.normal, obj.albedo)


def hit_cone(
    obj: SceneObject, ray: Ray, tmin: float, tmax: float
) -> Optional[HitRecord]:
    """Intersect a cone with its apex at ``center`` opening along its normal."""
    cn: Cone = obj.element  # type: ignore[assignment]
    n = cn.normal
    r2 = cn.radius * cn.radius
    h2 = cn.height * cn.height
    oc = ray.orig - cn.center
    n_dir = n.cross(ray.dir)
    n_oc = n.cross(oc)
    dn = n.dot(ray.dir)
    ocn = oc.dot(n)
    a = h2 * n_dir.length_squared() - r2 * dn * dn
    half_b = h2 * n_dir.dot(n_oc) - r2 * dn * ocn
    c = h2 * n_oc.length_squared() - r2 * ocn * ocn
    discriminant = half_b * half_b - a * c
    if discriminant < 0 or a == 0:
        return None
    sqrtd = math.sqrt(discriminant)
    chosen: Optional[float] = None
    for root in ((-half_b - sqrtd) / a, (-half_b + sqrtd) / a):
        height = (ray.at(root) - cn.center).dot(n)
        if tmin <= root <= tmax and 0 <= height <= cn.height:
            chosen = root
            break
    if chosen is None:
        return None
    p = ray.at(chosen)
    hp = (p - cn.center).dot(n)
    axis_point = cn.center + n * (hp + r2 * hp / h2)
    rec = HitRecord(t=chosen, p=p, normal=(p - axis_point).unit(), albedo=obj.albedo)
    rec.set_face_normal(ray)
    return rec


def checkerboard_color(board: Checkerboard, offset: Vec3, albedo: Color3) -> Color3:
    """White on odd unit squares of the board, ``albedo`` on even ones."""
    u = board.dir
    v = board.normal.cross(u)
    parity = (_round_half_away(offset.dot(u)) + _round_half_away(offset.dot(v))) % 2
    return _WHITE if parity == 1 else albedo


def hit_checkerboard(
    obj: SceneObject, ray: Ray, tmin: float, tmax: float
) -> Optional[HitRecord]:
    cb: Checkerboard = obj.element  # type: ignore[assignment]
    t = _plane_param(cb.point, cb.normal, ray)
    if t is None or t < tmin or tmax < t:
        return None
    rec = _flat_record(ray, t, cb.normal, obj.albedo)
    rec.albedo = checkerboard_color(cb, rec.p - cb.point, obj.albedo)
    return rec


def hit_planet(
    obj: SceneObject, ray: Ray, tmin: float, tmax: float
) -> Optional[HitRecord]:
    pn: Planet = obj.element  # type: ignore[assignment]
    center = pn.absolute_center()
    t = sphere_root(center, pn.radius2, ray, tmin, tmax)
    if t is None:
        return None
    return _sphere_record(obj, center, pn.radius, ray, t)