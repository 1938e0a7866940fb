"""Command line entry point: render a scene file to an image."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional, Sequence

from PIL import Image

from .controls import ANTIALIAS, QUIT, TIME_STEP, Key, handle_key
from .errors import RTError
from .parser import load_scene
from .render import render, render_antialiased
from .scene import HEIGHT, WIDTH


def _key(text: str) -> Key:
    name = text.strip().upper()
    if len(name) == 1 and name.isdigit():
        name = f"NUM_{name}"
    try:
        return Key[name]
    except KeyError as exc:
        raise argparse.ArgumentTypeError(f"unknown key: {text}") from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="minirt", description="Render a .rt scene.")
    parser.add_argument("scene", nargs="?", help="scene description file (.rt)")
    parser.add_argument("-o", "--output", help="image file to write (default: scene name .png)")
    parser.add_argument("--antialias", action="store_true", help="supersample the final frame")
    parser.add_argument(
        "--key", dest="keys", action="append", type=_key, default=[],
        help="key to press before rendering; may be repeated",
    )
    parser.add_argument("--width", type=int, default=WIDTH)
    parser.add_argument("--height", type=int, default=HEIGHT)
    return parser


def _save(pixels: List[List[int]], width: int, height: int, output: Path) -> None:
    image = Image.new("RGB", (width, height))
    image.putdata(
        [((v >> 16) & 0xFF, (v >> 8) & 0xFF, v & 0xFF) for row in pixels for v in row]
    )
    image.save(output)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.scene is None:
        print("miniRT: not enough arguments!")
        return 1
    try:
        scene = load_scene(args.scene, args.width, args.height)
        antialias = args.antialias
        for key in args.keys:
            action = handle_key(scene, key)
            if action == QUIT:
                break
            if action == ANTIALIAS:
                antialias = True
            elif action != TIME_STEP:
                antialias = False
        draw = render_antialiased if antialias else render
        pixels = draw(scene)
        output = Path(args.output) if args.output else Path(args.scene).with_suffix(".png")
        _save(pixels, scene.width, scene.height, output)
    except RTError as exc:
        print(exc.message)
        return exc.exit_code
    return 0