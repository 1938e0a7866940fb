"""Image maps wrapped around spheres for colour and bump lookups."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image

from .errors import RTError
from .vec import Color3, Vec3


def color_from_int(value: int) -> Color3:
    """Turn a packed 0xRRGGBB value into a colour with components in [0, 1]."""
    return Vec3(
        ((value // 65536) % 256) / 255.0,
        ((value // 256) % 256) / 255.0,
        (value % 256) / 255.0,
    )


def _clamped_acos(value: float) -> float:
    return math.acos(max(-1.0, min(1.0, value)))


@dataclass(frozen=True)
class Texture:
    """A rectangular image stored row by row as packed RGB integers."""

    width: int
    height: int
    pixels: Tuple[int, ...]

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("texture dimensions must be positive")
        if len(self.pixels) != self.width * self.height:
            raise ValueError("pixel count does not match texture dimensions")

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> Texture:
        """Load an image file; failure is an image creation error."""
        try:
            with Image.open(path) as image:
                rgb = image.convert("RGB")
                data = rgb.tobytes()
                width, height = rgb.size
        except OSError as exc:
            raise RTError("Img create err", 123) from exc
        channels = iter(data)
        pixels = tuple((r << 16) | (g << 8) | b for r, g, b in zip(channels, channels, channels))
        return cls(width, height, pixels)

    def pixel(self, x: int, y: int) -> int:
        """Return the packed colour at column ``x`` and row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} texture")
        return self.pixels[y * self.width + x]

    def sample(self, direction: Vec3) -> Color3:
        """Colour seen along ``direction`` from the centre of a mapped sphere."""
        cp = direction.unit()
        cp_xz = Vec3(cp.x, 0.0, cp.z).unit()
        x_theta = _clamped_acos(cp_xz.x)
        if cp.z > 0:
            x_theta = 2 * math.pi - x_theta
        y_theta = _clamped_acos(cp.y)
        x_deg = x_theta * 180 / math.pi
        y_deg = y_theta * 180 / math.pi
        coord_x = int(self.width / 360.0 * x_deg)
        coord_y = int(self.height / 180.0 * y_deg)
        coord_x = min(max(coord_x, 0), self.width - 1)
        coord_y = min(max(coord_y, 0), self.height - 1)
        return color_from_int(self.pixel(coord_x, coord_y))


def load_map(path: str) -> Optional[Texture]:
    """Load a map named in a scene file; the name ``none`` means no map."""
    name = path.split("\n", 1)[0]
    if name == "none":
        return None
    return Texture.from_path(name)