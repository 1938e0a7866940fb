"""Reading scene description files into a :class:`Scene`."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Sequence, Union

from .errors import RTError
from .objects import (
    Checkerboard,
    Cone,
    Cylinder,
    Disk,
    Light,
    ObjectKind,
    Plane,
    Planet,
    SceneObject,
    Sphere,
    find_body,
)
from .ray import Ray
from .scene import HEIGHT, WIDTH, Scene
from .texture import load_map
from .vec import Color3, Vec3

_WRONG_INPUT = "Wrong input err"
_INT_RE = re.compile(r"[\t\n\v\f\r ]*([+-]?)([0-9]*)")
_STAR_POSITION = Vec3(0.0, 30000.0, 0.0)


def _wrong(code: int) -> RTError:
    return RTError(_WRONG_INPUT, code)


def _split(text: str, sep: str) -> List[str]:
    """Split on ``sep`` and drop empty pieces."""
    return [piece for piece in text.split(sep) if piece]


def parse_number(text: str) -> float:
    """Parse a decimal number; only digits, one point and a leading minus are allowed."""
    body = text.split("\n", 1)[0]
    points = 0
    for ch in body:
        if ch == ".":
            points += 1
        elif ch != "-" and not "0" <= ch <= "9":
            raise _wrong(29)
    if points > 1 or text == ".":
        raise _wrong(29)
    sign = 1.0
    if body[:1] in ("-", "+"):
        if body[0] == "-":
            sign = -1.0
        body = body[1:]
    integer = 0.0
    rational = 0.0
    after_point = False
    for ch in body:
        if ch == ".":
            after_point = True
        elif ch in "-+":
            raise _wrong(28)
        elif not after_point:
            integer = integer * 10 + (ord(ch) - ord("0"))
        else:
            # Each fractional digit shifts the earlier ones one place further right.
            rational = rational * 0.1 + (ord(ch) - ord("0")) * 0.1
    return sign * (integer + rational)


def parse_int(text: str) -> int:
    """Parse an integer, allowing leading whitespace and a trailing newline only."""
    match = _INT_RE.match(text)
    assert match is not None
    sign, digits = match.groups()
    rest = text[match.end():]
    if rest and rest[0] != "\n":
        raise _wrong(30)
    value = int(digits) if digits else 0
    return -value if sign == "-" else value


def parse_color(text: str) -> Color3:
    """Parse ``R,G,B`` with components in 0..256 into a colour scaled by 1/255."""
    parts = _split(text, ",")
    if len(parts) != 3:
        raise _wrong(23)
    channels = []
    for part in parts:
        value = parse_int(part)
        if value < 0 or value > 256:
            raise _wrong(24)
        channels.append(float(value))
    return Vec3(*channels) / 255.0


def parse_tuple(text: str) -> Vec3:
    """Parse ``x,y,z`` into a vector."""
    parts = _split(text, ",")
    if len(parts) != 3:
        raise _wrong(25)
    return Vec3(*(parse_number(part) for part in parts))


def parse_ratio(text: str) -> float:
    """Parse a number in [0, 1]."""
    ratio = parse_number(text)
    if ratio < 0 or ratio > 1:
        raise _wrong(26)
    return ratio


def parse_normal(text: str) -> Vec3:
    """Parse a direction whose components lie in [-1, 1] and normalise it."""
    vec = parse_tuple(text)
    if any(c < -1 or c > 1 for c in vec):
        raise _wrong(27)
    return vec.unit()


def parse_positive(text: str) -> float:
    """Parse a strictly positive number."""
    value = parse_number(text)
    if value <= 0:
        raise _wrong(14)
    return value


def _ambient(scene: Scene, f: Sequence[str]) -> None:
    if len(f) != 3:
        raise _wrong(19)
    scene.amb_ratio = parse_ratio(f[1])
    scene.ambient = parse_color(f[2]) * scene.amb_ratio


def _camera(scene: Scene, f: Sequence[str]) -> None:
    if len(f) != 4:
        raise _wrong(20)
    cam = scene.camera
    cam.orig = parse_tuple(f[1])
    cam.normal = parse_normal(f[2])
    scene.init_view = Ray(cam.orig, cam.normal)
    fov = parse_number(f[3])
    if fov < 0 or fov > 180:
        raise _wrong(21)
    cam.fov = fov
    cam.update(scene.aspect_ratio)


def _point_light(origin: Vec3, ratio: float, color: Color3) -> SceneObject:
    return SceneObject(ObjectKind.LIGHT, Light(origin, ratio, color), Vec3(0.0, 0.0, 0.0))


def _light(scene: Scene, f: Sequence[str]) -> None:
    if len(f) != 4:
        raise _wrong(22)
    point = parse_tuple(f[1])
    ratio = parse_ratio(f[2])
    color = parse_color(f[3])
    scene.lights.append(_point_light(point, ratio, color))


def _sphere(scene: Scene, f: Sequence[str]) -> None:
    if len(f) not in (4, 6):
        raise _wrong(15)
    point = parse_tuple(f[1])
    radius = parse_positive(f[2]) / 2
    color = parse_color(f[3])
    obj = SceneObject(ObjectKind.SPHERE, Sphere(point, radius), color)
    if len(f) == 6:
        obj.texture = load_map(f[4])
        obj.bump = load_map(f[5])
    scene.objects.append(obj)


def _plane(scene: Scene, f: Sequence[str]) -> None:
    if len(f) != 4:
        raise _wrong(18)
    point = parse_tuple(f[1])
    normal = parse_normal(f[2])
    color = parse_color(f[3])
    scene.objects.append(SceneObject(ObjectKind.PLANE, Plane(point, normal), color))


def _cylinder(scene: Scene, f: Sequence[str]) -> None:
    if len(f) != 6:
        raise _wrong(17)
    point = parse_tuple(f[1])
    normal = parse_normal(f[2])
    radius = parse_positive(f[3]) / 2
    height = parse_positive(f[4])
    color = parse_color(f[5])
    scene.objects.append(
        SceneObject(ObjectKind.CYLINDER, Cylinder(point, normal, height, radius), color)
    )
    top = point + normal * (height / 2)
    scene.objects.append(SceneObject(ObjectKind.DISK, Disk(top, normal, radius), color))
    bottom = top + normal * -height
    scene.objects.append(SceneObject(ObjectKind.DISK, Disk(bottom, normal, radius), color))


def _disk(scene: Scene, f: Sequence[str]) -> None:
    if len(f) != 5:
        raise _wrong(16)
    point = parse_tuple(f[1])
    normal = parse_normal(f[2])
    radius = parse_positive(f[3]) / 2
    color = parse_color(f[4])
    scene.objects.append(SceneObject(ObjectKind.DISK, Disk(point, normal, radius), color))


def _checkerboard(scene: Scene, f: Sequence[str]) -> None:
    if len(f) != 5:
        raise _wrong(11)
    point = parse_tuple(f[1])
    normal = parse_normal(f[2])
    direction = parse_tuple(f[3])
    if direction.dot(normal) != 0:
        raise _wrong(12)
    color = parse_color(f[4])
    scene.objects.append(
        SceneObject(ObjectKind.CHECKERBOARD, Checkerboard(point, normal, direction), color)
    )


def _cone(scene: Scene, f: Sequence[str]) -> None:
    if len(f) != 6:
        raise _wrong(13)
    point = parse_tuple(f[1])
    normal = parse_normal(f[2])
    radius = parse_positive(f[3])
    height = parse_positive(f[4])
    color = parse_color(f[5])
    scene.objects.append(
        SceneObject(ObjectKind.CONE, Cone(point, normal, radius, height), color)
    )
    cap = point + normal * height
    scene.objects.append(SceneObject(ObjectKind.DISK, Disk(cap, normal, radius), color))


def _light_bulb(scene: Scene, f: Sequence[str]) -> None:
    # A seven-field line is accepted, but its map fields are not used.
    if len(f) not in (5, 7):
        raise _wrong(10)
    point = parse_tuple(f[1])
    radius = parse_positive(f[2]) / 2
    color = parse_color(f[4])
    scene.world.append(SceneObject(ObjectKind.LIGHT_BULB, Sphere(point, radius), color))
    scene.lights.append(_point_light(point, parse_positive(f[3]), color))


def _star(scene: Scene, f: Sequence[str]) -> None:
    if len(f) not in (5, 7):
        raise _wrong(16)
    body = Planet(
        name=f[1],
        pos=_STAR_POSITION,
        radius=0.0,
        axis=parse_normal(f[2]),
    )
    body.radius = parse_positive(f[3])
    color = parse_color(f[4])
    star = SceneObject(ObjectKind.STAR, body, color)
    if len(f) == 7:
        star.texture = load_map(f[5])
        star.bump = load_map(f[6])
    scene.world.append(star)
    scene.lights.append(_point_light(body.pos, 0.5, Vec3(1.0, 1.0, 1.0)))


def _planet(scene: Scene, f: Sequence[str]) -> None:
    if len(f) not in (8, 10):
        raise _wrong(8)
    mother = find_body(scene.world, f[2]) or find_body(scene.objects, f[2])
    axis = parse_normal(f[3])
    radius = parse_positive(f[4])
    orbit_radius = parse_positive(f[5])
    period = parse_positive(f[6])
    body = Planet(
        name=f[1],
        pos=Vec3(orbit_radius, 0.0, 0.0),
        radius=radius,
        axis=axis,
        mother=mother,
        orbit_radius=orbit_radius,
        period=period,
    )
    color = parse_color(f[7])
    obj = SceneObject(ObjectKind.PLANET, body, color)
    if len(f) == 10:
        obj.texture = load_map(f[8])
        obj.bump = load_map(f[9])
    scene.objects.append(obj)


_PARSERS: Dict[str, Callable[[Scene, Sequence[str]], None]] = {
    "A": _ambient,
    "C": _camera,
    "L": _light,
    "sp": _sphere,
    "pl": _plane,
    "cy": _cylinder,
    "cb": _checkerboard,
    "cn": _cone,
    "dk": _disk,
    "lb": _light_bulb,
    "star": _star,
    "planet": _planet,
}


def parse_line(scene: Scene, fields: Sequence[str]) -> None:
    """Add the element described by one line's space-separated fields to ``scene``."""
    if not fields:
        raise _wrong(7)
    handler = _PARSERS.get(fields[0])
    if handler is not None:
        handler(scene, fields)
    elif len(fields) == 1 and len(fields[0]) == 1:
        return
    else:
        raise _wrong(7)


def parse_scene(
    lines: Iterable[str], width: int = WIDTH, height: int = HEIGHT
) -> Scene:
    """Build a finalised scene from the lines of a scene description."""
    scene = Scene(width=width, height=height)
    for line in lines:
        parse_line(scene, _split(line, " "))
    scene.finalize()
    return scene


def _iter_lines(text: str) -> Iterator[str]:
    pieces = text.split("\n")
    for piece in pieces[:-1]:
        yield piece + "\n"
    if pieces[-1]:
        yield pieces[-1]


def load_scene(
    path: Union[str, Path], width: int = WIDTH, height: int = HEIGHT
) -> Scene:
    """Read and parse a ``.rt`` scene file."""
    name = str(path)
    dot = name.rfind(".")
    if dot < 0 or name[dot:] != ".rt":
        raise RTError("not a valid file extension!\n", 255)
    try:
        with open(name, encoding="utf-8", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise RTError("miniRT open err", 6) from exc
    return parse_scene(_iter_lines(text), width, height)