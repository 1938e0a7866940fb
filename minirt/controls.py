"""Keyboard controls: moving and turning the camera, teleports and simulated time."""

from __future__ import annotations

import enum
import math

from .objects import ObjectKind, find_planet
from .scene import Scene
from .vec import Vec3

SPEED = 30.0
TURN_ANGLE = math.pi / 18

QUIT = "quit"
ANTIALIAS = "antialias"
REDRAW = "redraw"
TIME_STEP = "time_step"
NONE = "none"


class Key(enum.IntEnum):
    """Key codes understood by the controls."""

    A = 0
    S = 1
    D = 2
    F = 3
    G = 5
    Q = 12
    W = 13
    E = 14
    NUM_1 = 18
    NUM_2 = 19
    NUM_3 = 20
    NUM_4 = 21
    NUM_6 = 22
    NUM_5 = 23
    NUM_9 = 25
    NUM_7 = 26
    NUM_8 = 28
    NUM_0 = 29
    CLOSE = 30
    OPEN = 33
    SPACE = 49
    ESC = 53
    F3 = 99
    F4 = 118
    F2 = 120
    F1 = 122
    LEFT = 123
    RIGHT = 124
    DOWN = 125
    UP = 126
    CTRL = 256


_TOWARD = {
    Key.NUM_1: ("EARTH", "SUN"),
    Key.NUM_2: ("SUN", "MERC"),
    Key.NUM_3: ("SUN", "VENUS"),
    Key.NUM_4: ("SUN", "EARTH"),
    Key.NUM_5: ("SUN", "MARS"),
    Key.NUM_6: ("SUN", "JUPITER"),
    Key.NUM_7: ("SUN", "SATURN"),
    Key.NUM_9: ("EARTH", "MOON"),
}

_MULTIVERSE = {
    Key.F1: Vec3(420000, -320000, 200000),
    Key.F2: Vec3(-320000, -200000, 280000),
    Key.F3: Vec3(400000, -200000, -120000),
    Key.F4: Vec3(-440000, -200000, -200000),
}


def is_teleport_key(keycode: int) -> bool:
    return 18 <= keycode <= 29 or keycode in (Key.G, Key.F1, Key.F2, Key.F3, Key.F4)


def is_time_key(keycode: int) -> bool:
    return keycode in (Key.OPEN, Key.CLOSE)


def is_move_key(keycode: int) -> bool:
    return Key.Q <= keycode <= Key.E or Key.A <= keycode <= Key.D


def is_rotate_key(keycode: int) -> bool:
    return Key.LEFT <= keycode <= Key.UP


def move_camera(scene: Scene, keycode: int) -> None:
    """Step the camera along its up, forward or right axis."""
    cam = scene.camera
    if keycode == Key.E:
        cam.orig = cam.orig + cam.up * SPEED
    elif keycode == Key.Q:
        cam.orig = cam.orig - cam.up * SPEED
    elif keycode == Key.S:
        cam.orig = cam.orig - cam.forward * SPEED
    elif keycode == Key.A:
        cam.orig = cam.orig - cam.right * SPEED
    elif keycode == Key.D:
        cam.orig = cam.orig + cam.right * SPEED
    elif keycode == Key.W:
        cam.orig = cam.orig + cam.forward * SPEED
    cam.update(scene.aspect_ratio)


def rotate_camera(scene: Scene, keycode: int) -> None:
    """Turn the camera left or right about the vertical axis, or tilt it."""
    cam = scene.camera
    if keycode == Key.LEFT:
        cam.normal = cam.normal.rotate_y(TURN_ANGLE)
    elif keycode == Key.RIGHT:
        cam.normal = cam.normal.rotate_y(-TURN_ANGLE)
    elif keycode == Key.UP:
        cam.rotate_vertical(TURN_ANGLE)
    elif keycode == Key.DOWN:
        cam.rotate_vertical(-TURN_ANGLE)
    cam.update(scene.aspect_ratio)


def cam_toward(scene: Scene, org_name: str, dst_name: str) -> bool:
    """Look from one body towards another, just short of the target.

    Returns False and leaves the camera alone when either body is missing.
    """
    org_body = find_planet(scene.world, org_name)
    dst_body = find_planet(scene.world, dst_name)
    if org_body is None or dst_body is None:
        return False
    org = org_body.absolute_center()
    dst = dst_body.absolute_center()
    cam = scene.camera
    cam.normal = (dst - org).unit()
    cam.orig = dst - cam.normal * (dst_body.radius * 3.0)
    cam.update(scene.aspect_ratio)
    return True


def top_view(scene: Scene) -> None:
    """Return to the view given in the scene file."""
    cam = scene.camera
    if scene.init_view is None:
        cam.normal = Vec3()
        cam.orig = Vec3()
    else:
        cam.normal = scene.init_view.dir
        cam.orig = scene.init_view.orig
    cam.update(scene.aspect_ratio)


def god_view(scene: Scene) -> None:
    """Look down on the whole system from far above."""
    cam = scene.camera
    cam.normal = Vec3(0, -1, 0.2).unit()
    cam.orig = Vec3(0, 500000, 0)
    cam.update(scene.aspect_ratio)


def multiverse(scene: Scene, keycode: int) -> None:
    """Jump to one of the fixed far-away viewpoints."""
    cam = scene.camera
    cam.normal = Vec3(-1, 0, 0)
    if keycode in _MULTIVERSE:
        cam.orig = _MULTIVERSE[Key(keycode)]
    cam.update(scene.aspect_ratio)


def teleport_camera(scene: Scene, keycode: int) -> bool:
    """Apply a teleport key; returns whether the view changed."""
    if keycode == Key.NUM_0:
        top_view(scene)
        return True
    if keycode in _TOWARD:
        org, dst = _TOWARD[Key(keycode)]
        return cam_toward(scene, org, dst)
    if keycode == Key.G:
        god_view(scene)
        return True
    if keycode == Key.NUM_8:
        return False
    multiverse(scene, keycode)
    return True


def update_planets(scene: Scene, direction: int) -> None:
    """Move every planet along its orbit by one time step in ``direction``."""
    for obj in scene.objects:
        if obj.kind is ObjectKind.PLANET:
            body = obj.element
            angle = direction * scene.dt * 2 * math.pi / body.period
            body.pos = body.pos.rotate_y(angle)


def time_shift(scene: Scene, keycode: int) -> None:
    """Step simulated time backwards or forwards."""
    direction = 1
    if keycode == Key.OPEN:
        scene.time -= scene.dt
        direction = -1
    elif keycode == Key.CLOSE:
        scene.time += scene.dt
    update_planets(scene, direction)


def handle_key(scene: Scene, keycode: int) -> str:
    """Apply a key press to the scene and say what the viewer should do next.

    Returns QUIT, ANTIALIAS, REDRAW, TIME_STEP or NONE. Any result other than
    ANTIALIAS and TIME_STEP invalidates an anti-aliased frame.
    """
    if keycode == Key.ESC:
        return QUIT
    if keycode == Key.SPACE:
        return ANTIALIAS
    if is_move_key(keycode):
        move_camera(scene, keycode)
        return REDRAW
    if is_rotate_key(keycode):
        rotate_camera(scene, keycode)
        return REDRAW
    if is_teleport_key(keycode):
        return REDRAW if teleport_camera(scene, keycode) else NONE
    if is_time_key(keycode):
        time_shift(scene, keycode)
        return REDRAW
    if keycode == Key.F:
        scene.cycle_time_step()
        return TIME_STEP
    return NONE