import pytest
from PIL import Image

from minirt.errors import RTError
from minirt.objects import ObjectKind
from minirt.parser import (
    load_scene,
    parse_color,
    parse_int,
    parse_line,
    parse_normal,
    parse_number,
    parse_positive,
    parse_ratio,
    parse_scene,
    parse_tuple,
)
from minirt.scene import Scene
from minirt.vec import Vec3


def test_parse_number_values():
    assert parse_number("1.5") == 1.5
    assert parse_number("-3") == -3.0
    assert parse_number("42\n") == 42.0
    assert parse_number("0.5") == 0.5


def test_parse_number_fraction_digit_order():
    assert parse_number("0.25") == pytest.approx(0.52)


@pytest.mark.parametrize("text", ["+1", "1.2.3", "abc", ".", "1e5"])
def test_parse_number_invalid(text):
    with pytest.raises(RTError) as info:
        parse_number(text)
    assert info.value.exit_code == 29


@pytest.mark.parametrize("text", ["1-2", "--1"])
def test_parse_number_inner_sign(text):
    with pytest.raises(RTError) as info:
        parse_number(text)
    assert info.value.exit_code == 28


def test_parse_int():
    assert parse_int("255") == 255
    assert parse_int(" -7\n") == -7
    assert parse_int("+12") == 12
    with pytest.raises(RTError) as info:
        parse_int("12a")
    assert info.value.exit_code == 30


def test_parse_color():
    color = parse_color("255,0,255\n")
    assert tuple(color) == pytest.approx((1.0, 0.0, 1.0))
    assert parse_color("1,,2,3") == parse_color("1,2,3")


@pytest.mark.parametrize(
    "text, code",
    [("1,2", 23), ("1,2,300", 24), ("1,-2,3", 24), ("1,x,3", 30)],
)
def test_parse_color_errors(text, code):
    with pytest.raises(RTError) as info:
        parse_color(text)
    assert info.value.exit_code == code


def test_parse_tuple():
    assert parse_tuple("1,-2,3.5") == Vec3(1.0, -2.0, 3.5)
    with pytest.raises(RTError) as info:
        parse_tuple("1,2")
    assert info.value.exit_code == 25


def test_parse_ratio():
    assert parse_ratio("1") == 1.0
    assert parse_ratio("0.5") == 0.5
    with pytest.raises(RTError) as info:
        parse_ratio("1.5")
    assert info.value.exit_code == 26


def test_parse_normal():
    assert parse_normal("0,0,1") == Vec3(0.0, 0.0, 1.0)
    assert parse_normal("1,1,0").length() == pytest.approx(1.0)
    with pytest.raises(RTError) as out_of_range:
        parse_normal("0,0,2")
    assert out_of_range.value.exit_code == 27
    with pytest.raises(RTError) as zero:
        parse_normal("0,0,0")
    assert zero.value.exit_code == 31


def test_parse_positive():
    assert parse_positive("2.5") == 2.5
    with pytest.raises(RTError) as zero:
        parse_positive("0")
    assert zero.value.exit_code == 14
    with pytest.raises(RTError) as negative:
        parse_positive("-1")
    assert negative.value.exit_code == 14


BASIC = [
    "A 0.2 255,255,255\n",
    "C 0,0,-10 0,0,1 70\n",
    "L 0,10,0 0.7 255,255,255\n",
    "sp 0,0,0 4 255,0,0\n",
    "\n",
    "pl 0,-2,0 0,1,0 0,255,0\n",
    "cy 0,0,5 0,1,0 2 4 0,0,255\n",
]


def test_parse_scene_basic():
    scene = parse_scene(BASIC)
    assert scene.amb_ratio == pytest.approx(0.2)
    assert tuple(scene.ambient) == pytest.approx((0.2, 0.2, 0.2))
    assert scene.camera.fov == 70
    assert scene.init_view.orig == Vec3(0.0, 0.0, -10.0)
    assert len(scene.lights) == 1
    assert scene.lights[0].element.bright_ratio == pytest.approx(0.7)
    kinds = [obj.kind for obj in scene.objects]
    assert kinds == [
        ObjectKind.SPHERE,
        ObjectKind.PLANE,
        ObjectKind.CYLINDER,
        ObjectKind.DISK,
        ObjectKind.DISK,
    ]
    assert scene.objects[0].element.radius == 2.0
    assert scene.objects[3].element.center == Vec3(0.0, 2.0, 5.0)
    assert scene.objects[4].element.center == Vec3(0.0, -2.0, 5.0)
    assert scene.objects[3].element.radius == scene.objects[2].element.radius
    assert scene.world == scene.objects


def test_parse_scene_dimensions():
    scene = parse_scene(BASIC, 60, 40)
    assert (scene.width, scene.height) == (60, 40)
    assert scene.aspect_ratio == pytest.approx(1.5)


def test_cone_adds_cap_disk():
    scene = parse_scene(["cn 0,0,0 0,1,0 1 3 255,255,255\n"])
    cone, cap = scene.objects
    assert cone.kind is ObjectKind.CONE
    assert cap.kind is ObjectKind.DISK
    assert cap.element.center == Vec3(0.0, 3.0, 0.0)
    assert cap.element.radius == cone.element.radius


def test_checkerboard():
    scene = parse_scene(["cb 0,0,0 0,1,0 1,0,0 255,255,255\n"])
    assert scene.objects[0].kind is ObjectKind.CHECKERBOARD
    assert scene.objects[0].element.dir == Vec3(1.0, 0.0, 0.0)
    with pytest.raises(RTError) as info:
        parse_scene(["cb 0,0,0 0,1,0 1,1,0 255,255,255\n"])
    assert info.value.exit_code == 12


def test_light_bulb():
    scene = parse_scene(["lb 0,5,0 2 0.6 255,255,255\n"])
    bulb = scene.world[0]
    assert bulb.kind is ObjectKind.LIGHT_BULB
    assert bulb.element.radius == 1.0
    assert scene.lights[0].element.origin == Vec3(0.0, 5.0, 0.0)
    assert scene.lights[0].element.bright_ratio == 0.6


def test_star_and_planets():
    scene = parse_scene(
        [
            "star SUN 0,1,0 10 255,255,0\n",
            "planet EARTH SUN 0,1,0 2 100 365 0,0,255\n",
            "planet MOON EARTH 0,1,0 1 5 27 200,200,200\n",
        ]
    )
    sun, earth, moon = (obj.element for obj in scene.world)
    assert [obj.kind for obj in scene.world] == [
        ObjectKind.STAR,
        ObjectKind.PLANET,
        ObjectKind.PLANET,
    ]
    assert earth.mother is sun
    assert moon.mother is earth
    assert earth.period == 365
    assert moon.absolute_center() == moon.pos + earth.pos + sun.pos
    assert scene.lights[0].element.origin == sun.pos


def test_planet_unknown_mother():
    scene = parse_scene(["planet X NOBODY 0,1,0 1 5 27 200,200,200\n"])
    assert scene.objects[0].element.mother is None


def test_sphere_maps(tmp_path):
    image_path = tmp_path / "map.png"
    Image.new("RGB", (2, 3), (10, 20, 30)).save(image_path)
    scene = parse_scene([f"sp 0,0,0 2 255,0,0 {image_path} none\n"])
    sphere = scene.objects[0]
    assert sphere.texture.width == 2
    assert sphere.texture.height == 3
    assert sphere.bump is None


@pytest.mark.parametrize(
    "line, code",
    [
        ("sp 0,0,0 4\n", 15),
        ("xx 1\n", 7),
        ("A 0.2\n", 19),
        ("C 0,0,0 0,0,1 200\n", 21),
        ("planet A B 0,1,0\n", 8),
        ("sp 0,0,0 4 255,0,0 \n", 15),
        ("   ", 7),
    ],
)
def test_parse_scene_errors(line, code):
    with pytest.raises(RTError) as info:
        parse_scene([line])
    assert info.value.exit_code == code


def test_parse_line_plane():
    scene = Scene()
    parse_line(scene, ["pl", "0,0,0", "0,1,0", "255,255,255"])
    assert scene.objects[0].kind is ObjectKind.PLANE
    assert scene.objects[0].element.normal == Vec3(0.0, 1.0, 0.0)


def test_parse_line_ignores_single_character():
    scene = Scene()
    parse_line(scene, ["\n"])
    assert scene.objects == [] and scene.lights == []


def test_load_scene(tmp_path):
    path = tmp_path / "scene.rt"
    path.write_text("".join(BASIC), encoding="utf-8")
    scene = load_scene(path)
    assert len(scene.objects) == 5
    assert scene.camera.orig == Vec3(0.0, 0.0, -10.0)


def test_load_scene_without_trailing_newline(tmp_path):
    path = tmp_path / "scene.rt"
    path.write_text("sp 0,0,0 4 255,0,0", encoding="utf-8")
    assert load_scene(path).objects[0].element.radius == 2.0


def test_load_scene_bad_extension(tmp_path):
    path = tmp_path / "scene.txt"
    path.write_text("", encoding="utf-8")
    with pytest.raises(RTError) as info:
        load_scene(path)
    assert info.value.exit_code == 255


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(RTError) as info:
        load_scene(tmp_path / "missing.rt")
    assert info.value.exit_code == 6