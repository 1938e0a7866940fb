"""The scene: canvas size, camera, objects, lights and simulated time."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .camera import Camera
from .objects import SceneObject
from .ray import Ray
from .vec import Color3, Vec3

WIDTH = 600
HEIGHT = 400

DAY = 1
WEEK = 7
MONTH = 30
YEAR = 365

_NEXT_STEP = {DAY: WEEK, WEEK: MONTH, MONTH: YEAR, YEAR: DAY}


@dataclass(eq=False)
class Scene:
    """Everything needed to render a frame and advance the planets."""

    width: int = WIDTH
    height: int = HEIGHT
    camera: Camera = field(default_factory=Camera)
    world: List[SceneObject] = field(default_factory=list)
    objects: List[SceneObject] = field(default_factory=list)
    lights: List[SceneObject] = field(default_factory=list)
    ambient: Color3 = Vec3()
    amb_ratio: float = 0.0
    time: float = 0.0
    dt: float = DAY
    init_view: Optional[Ray] = None
    _finalized: bool = field(default=False, init=False, repr=False)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def finalize(self) -> None:
        """Append the ordinary objects after the bodies in the rendered world."""
        if not self._finalized:
            self.world = [*self.world, *self.objects]
            self._finalized = True
        self.dt = DAY

    def cycle_time_step(self) -> float:
        """Advance the time step: day, week, month, year, then day again."""
        self.dt = _NEXT_STEP.get(self.dt, self.dt)
        return self.dt