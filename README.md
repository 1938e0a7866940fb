# minirt

A compact ray tracer. It reads a scene description from a `.rt` file and
renders it to an image file with Phong lighting (ambient, diffuse and
specular) and hard shadows. Surfaces that no ray reaches show a grey-to-blue
background gradient.

## Installation

```
pip install .
```

## Usage

```
minirt scene.rt
```

This writes `scene.png` next to the scene file. Options:

| Option | Meaning |
|--------|---------|
| `-o`, `--output FILE` | image file to write; the format follows the file's suffix |
| `--antialias` | trace four rays per pixel and average them |
| `--width N`, `--height N` | image size (default 600×400) |
| `--key NAME` | press a key before rendering; may be repeated |

The scene file must end in `.rt`. When it cannot be opened or holds an
invalid line, the command prints the error message (for instance
`Wrong input err`) and exits with a non-zero status. Without a scene
argument it prints `miniRT: not enough arguments!` and exits with status 1.

## Scene files

Each line is a set of fields separated by spaces. Vectors are written
`x,y,z`, colours `r,g,b` (each component 0–256, scaled by 1/255), and
normals must have every component in `[-1, 1]`; they are normalised.
Numbers are plain decimals: digits, at most one point and a leading minus.
A line with a single one-character field (such as an empty line) is ignored;
any other unknown or malformed line stops parsing with an error.

| Identifier | Fields |
|------------|--------|
| `A`        | ratio (0–1), colour |
| `C`        | position, orientation, field of view (0–180) |
| `L`        | position, brightness (0–1), colour |
| `sp`       | centre, diameter, colour, optionally texture map and bump map |
| `pl`       | point, normal, colour |
| `cy`       | centre, axis, diameter, height, colour (capped by two disks) |
| `cn`       | apex, axis, radius, height, colour (capped by a disk) |
| `dk`       | centre, normal, diameter, colour |
| `cb`       | point, normal, direction (perpendicular to the normal), colour |
| `lb`       | centre, diameter, brightness, colour: a sphere that is also a point light |
| `star`     | name, axis, radius, colour, optionally texture and bump maps |
| `planet`   | name, mother body, axis, radius, orbit radius, period, colour, optionally texture and bump maps |

Map fields name image files that Pillow can read, or `none`. A star is
placed at `0,30000,0` and lights the scene in white. A planet starts at its
orbit radius along the x axis from its mother body.

## Keys

`--key` applies the same controls as `minirt.controls.handle_key`. Key names
are those of `minirt.controls.Key`; a single digit stands for `NUM_<digit>`.

- `W`, `A`, `S`, `D`, `Q`, `E`: move forward, left, back, right, down, up.
- `LEFT`, `RIGHT`: turn; `UP`, `DOWN`: tilt.
- `0`: back to the scene file's camera; `G`: view from far above;
  `F1`–`F4`: fixed distant viewpoints.
- `1`–`7`, `9`: look between bodies named `EARTH`, `SUN`, `MERC`, `VENUS`,
  `MARS`, `JUPITER`, `SATURN` and `MOON`, when the scene has them.
- `OPEN`, `CLOSE`: step the planets' orbits backward or forward by one time
  step; `F` cycles the step between a day, a week, a month and a year.
- `SPACE`: anti-alias the frame; `ESC`: ignore the keys that follow.

## Library use

```python
from minirt.parser import load_scene
from minirt.render import render, render_antialiased
from minirt.controls import Key, handle_key

scene = load_scene("scene.rt", 600, 400)
handle_key(scene, Key.W)
image = render(scene)              # rows of 0xRRGGBB integers, top row first
smooth = render_antialiased(scene)
```

Parsing errors and other fatal conditions raise `minirt.errors.RTError`,
which carries a `message` and an `exit_code`.

## What it does not do

There is no interactive window: the package renders still images to files.
Key presses are applied once, in order, before the single frame is drawn.

## Tests

```
pip install .[test]
pytest
```