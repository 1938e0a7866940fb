"""Scene primitives, lights and celestial bodies."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union

from .vec import Vec3


class ObjectKind(enum.Enum):
    """What a scene object is; values are the scene file identifiers."""

    SPHERE = "sp"
    PLANE = "pl"
    CYLINDER = "cy"
    DISK = "dk"
    CONE = "cn"
    CHECKERBOARD = "cb"
    LIGHT_BULB = "lb"
    STAR = "star"
    PLANET = "planet"
    LIGHT = "L"


@dataclass
class Sphere:
    center: Vec3
    radius: float

    @property
    def radius2(self) -> float:
        return self.radius * self.radius


@dataclass
class Plane:
    point: Vec3
    normal: Vec3

    def __post_init__(self) -> None:
        self.normal = self.normal.unit()


@dataclass
class Cylinder:
    center: Vec3
    normal: Vec3
    height: float
    radius: float

    @property
    def radius2(self) -> float:
        return self.radius * self.radius


@dataclass
class Disk:
    center: Vec3
    normal: Vec3
    radius: float

    def __post_init__(self) -> None:
        self.normal = self.normal.unit()


@dataclass
class Cone:
    center: Vec3
    normal: Vec3
    radius: float
    height: float

    def __post_init__(self) -> None:
        self.normal = self.normal.unit()


@dataclass
class Checkerboard:
    point: Vec3
    normal: Vec3
    dir: Vec3

    def __post_init__(self) -> None:
        self.normal = self.normal.unit()
        self.dir = self.dir.unit()


@dataclass(eq=False)
class Planet:
    """A star or planet; its position is relative to its mother body."""

    name: str
    pos: Vec3
    radius: float
    axis: Vec3
    mother: Optional[Planet] = None
    orbit_radius: float = 0.0
    period: float = 0.0
    light_color: Vec3 = field(default_factory=lambda: Vec3(1, 1, 1))
    bright_ratio: float = 1.0

    @property
    def radius2(self) -> float:
        return self.radius * self.radius

    def absolute_center(self) -> Vec3:
        """Position in world space, summing the offsets of all ancestors."""
        center = self.pos
        mother = self.mother
        while mother is not None:
            center = center + mother.pos
            mother = mother.mother
        return center


@dataclass
class Light:
    origin: Vec3
    bright_ratio: float
    light_color: Vec3


Shape = Union[Sphere, Plane, Cylinder, Disk, Cone, Checkerboard, Planet, Light]


@dataclass(eq=False)
class SceneObject:
    """A shape or light placed in the scene with its surface colour and maps."""

    kind: ObjectKind
    element: Shape
    albedo: Vec3 = field(default_factory=Vec3)
    texture: Any = None
    bump: Any = None


def find_body(objects: Iterable[SceneObject], name: str) -> Optional[Planet]:
    """Return the first celestial body called ``name``, whatever its kind."""
    for obj in objects:
        if isinstance(obj.element, Planet) and obj.element.name == name:
            return obj.element
    return None


def find_planet(objects: Iterable[SceneObject], name: str) -> Optional[Planet]:
    """Return the first star or planet object called ``name``."""
    for obj in objects:
        if (
            obj.kind in (ObjectKind.STAR, ObjectKind.PLANET)
            and isinstance(obj.element, Planet)
            and obj.element.name == name
        ):
            return obj.element
    return None