import logging
import math

import numpy as np
import pytest

from softraster.camera import Camera
from softraster.config import RenderConfig
from softraster.scene import Primitive, Scene, SceneLight, SceneObject
from softraster.transform import Transform
from softraster.vector import Vec3

GREEN = (0, 255, 0)
RED = (255, 0, 0)
BLACK = (0, 0, 0)
W, H = 400, 300
# supersampled cells (360..361, 320..321): inside the near face, off its diagonal
NEAR_FACE = (180, 160)


def _pixel(pixels: np.ndarray, xy=NEAR_FACE):
    return tuple(int(c) for c in pixels[xy])


def test_render_output_shape(camera, cube_scene) -> None:
    pixels = camera.render(40, 30, cube_scene)
    assert pixels.shape == (40, 30, 3)
    assert pixels.dtype == np.uint8


def test_empty_scene_is_black(camera) -> None:
    assert not camera.render(16, 8, Scene()).any()


@pytest.mark.parametrize("size", [(0, 10), (10, 0), (-4, 4)])
def test_non_positive_canvas_is_rejected(camera, cube_scene, size) -> None:
    with pytest.raises(ValueError):
        camera.render(*size, cube_scene)


def test_cube_face_toward_camera_is_visible(camera, cube_scene) -> None:
    pixels = camera.render(W, H, cube_scene)
    assert _pixel(pixels) == GREEN
    assert _pixel(pixels, (0, 0)) == BLACK
    assert _pixel(pixels, (W - 1, H - 1)) == BLACK


def test_cube_is_centered_on_screen(camera, cube_scene) -> None:
    pixels = camera.render(W, H, cube_scene)
    # near face spans buffer x in [300, 500] -> output x in [150, 250]
    assert _pixel(pixels, (160, 150)) == GREEN
    assert _pixel(pixels, (240, 150)) == GREEN
    assert _pixel(pixels, (140, 150)) == BLACK
    assert _pixel(pixels, (260, 150)) == BLACK


def test_edges_are_antialiased(camera) -> None:
    cube = SceneObject.colored_unit_cube(Vec3(0, 0, 5))
    cube.transform.set_rot_z(0.3)
    pixels = camera.render(W, H, Scene(objects=[cube]))
    flat = pixels.reshape(-1, 3).astype(int)
    # 2x2 blocks straddling the silhouette mix green with the black background
    blended = (flat[:, 0] == 0) & (flat[:, 2] == 0) & (flat[:, 1] > 0) & (flat[:, 1] < 255)
    assert blended.any()


@pytest.mark.parametrize("near_first", [True, False])
def test_nearer_cube_occludes_farther_one(camera, near_first) -> None:
    near = SceneObject.colored_unit_cube(Vec3(0, 0, 5))
    far = SceneObject.colored_unit_cube(Vec3(0, 0, 9))
    far.transform.set_rot_y(math.pi / 2)
    objects = [near, far] if near_first else [far, near]
    pixels = camera.render(W, H, Scene(objects=objects))
    assert _pixel(pixels) == GREEN


def test_far_bound_hides_the_cube(cube_scene) -> None:
    assert not Camera(max_depth=3.0).render(W, H, cube_scene).any()


def test_near_bound_rejects_whole_triangles(cube_scene) -> None:
    # every triangle touching z=4 is rejected; only the far face (z=6) is left
    pixels = Camera(min_depth=4.5).render(W, H, cube_scene)
    assert _pixel(pixels) == RED


def _triangle_object(nearest_z: float) -> SceneObject:
    red = Vec3(*RED)
    return SceneObject([Primitive(Vec3(-1, -1, nearest_z), Vec3(1, -1, 2), Vec3(0, 1, 2),
                                  False, red, red)])


def test_vertex_at_zero_depth_draws_nothing(cube_scene) -> None:
    # a negative near bound lets z == 0 through the depth range
    cube_scene.objects.insert(0, _triangle_object(0.0))
    pixels = Camera(min_depth=-1.0).render(W, H, cube_scene)
    assert pixels.shape == (W, H, 3)
    assert _pixel(pixels) == GREEN


def test_vertex_at_tiny_depth_still_renders() -> None:
    # projects to roughly x = -4e22 in the buffer
    pixels = Camera().render(40, 30, Scene(objects=[_triangle_object(1e-20)]))
    assert pixels.shape == (40, 30, 3)


def test_camera_facing_away_sees_nothing(cube_scene) -> None:
    cam = Camera(rot=Vec3(0, math.pi, 0))
    assert not cam.render(W, H, cube_scene).any()


def test_moving_camera_moves_the_image(cube_scene) -> None:
    cam = Camera()
    cam.move_right(1.0)
    pixels = cam.render(W, H, cube_scene)
    # the cube shifts left by one face half-width (50 px at z=4)
    assert _pixel(pixels, (110, 150)) == GREEN
    assert _pixel(pixels, (240, 150)) == BLACK


def test_scene_is_not_mutated_by_render(camera, cube_scene) -> None:
    before = list(cube_scene.objects[0].primitives)
    rot = cube_scene.objects[0].transform.rot
    camera.render(40, 30, cube_scene)
    assert cube_scene.objects[0].primitives == before
    assert cube_scene.objects[0].transform.rot == rot


def test_render_is_repeatable(camera, cube_scene) -> None:
    a = camera.render(80, 60, cube_scene)
    b = camera.render(80, 60, cube_scene)
    assert np.array_equal(a, b)


# ============================================================
#  Backface culling
# ============================================================

def _far_face_object(cullable: bool) -> SceneObject:
    cube = SceneObject.colored_unit_cube(Vec3())
    faces = [Primitive(p.p1, p.p2, p.p3, cullable, p.ambient_color, p.diffuse_color)
             for p in cube.primitives[:2]]
    return SceneObject(faces, Transform(pos=Vec3(0, 0, 5)))


def test_backfacing_triangles_are_drawn_when_culling_is_off(camera) -> None:
    pixels = camera.render(W, H, Scene(objects=[_far_face_object(True)]))
    assert _pixel(pixels) == RED


def test_backfacing_cullable_triangles_are_culled(camera) -> None:
    config = RenderConfig(cull_backfaces=True)
    pixels = camera.render(W, H, Scene(objects=[_far_face_object(True)]), config)
    assert not pixels.any()


def test_non_cullable_triangles_survive_culling(camera) -> None:
    config = RenderConfig(cull_backfaces=True)
    pixels = camera.render(W, H, Scene(objects=[_far_face_object(False)]), config)
    assert _pixel(pixels) == RED


def test_culling_keeps_front_faces(camera, cube_scene) -> None:
    pixels = camera.render(W, H, cube_scene, RenderConfig(cull_backfaces=True))
    assert _pixel(pixels) == GREEN


# ============================================================
#  Shading
# ============================================================

def test_lights_are_ignored_in_ambient_mode(camera, cube_scene) -> None:
    cube_scene.lights.append(SceneLight(Vec3(0, 0, 0), Vec3(255, 255, 255), 0.5))
    pixels = camera.render(W, H, cube_scene)
    assert _pixel(pixels) == GREEN


def test_lambert_mode_shades_faces(camera, cube_scene) -> None:
    cube_scene.lights.append(SceneLight(Vec3(0, 0, 0), Vec3(255, 255, 255), 0.5))
    pixels = camera.render(W, H, cube_scene, RenderConfig(shading="lambert"))
    r, g, b = _pixel(pixels)
    assert r == 0 and b == 0
    assert 63 < g < 255


def test_lambert_mode_without_lights_keeps_ambient_term(camera, cube_scene) -> None:
    pixels = camera.render(W, H, cube_scene, RenderConfig(shading="lambert", ambient_factor=0.5))
    assert _pixel(pixels) == (0, 127, 0)


# ============================================================
#  Logging
# ============================================================

STAGES = [
    "Started Render",
    "Precomp Completed",
    "Init Buffer Completed",
    "Transform Completed",
    "Raster Completed",
    "Render Completed",
]


def test_stage_logging_when_enabled(camera, cube_scene, caplog) -> None:
    camera.render_process_logs = True
    with caplog.at_level(logging.INFO, logger="softraster.camera"):
        camera.render(20, 10, cube_scene)
    messages = [r.getMessage() for r in caplog.records if r.name == "softraster.camera"]
    assert len(messages) == len(STAGES)
    for message, stage in zip(messages, STAGES):
        assert message.startswith(stage)


def test_no_stage_logging_by_default(camera, cube_scene, caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="softraster.camera"):
        camera.render(20, 10, cube_scene)
    assert not [r for r in caplog.records if r.name == "softraster.camera"]
