"""Shared fixtures: a default camera and a single-cube scene."""

import pytest

from softraster.camera import Camera
from softraster.scene import Scene, SceneObject
from softraster.vector import Vec3


@pytest.fixture()
def camera() -> Camera:
    return Camera()


@pytest.fixture()
def cube_scene() -> Scene:
    """Unrotated cube centered at z=5; its green face (z=4) faces the camera."""
    return Scene(objects=[SceneObject.colored_unit_cube(Vec3(0, 0, 5))])
