from .vector import Vec3
from .transform import Transform
from .scene import Primitive, SceneObject, SceneLight, Scene
from .config import RenderConfig
from .framebuffer import Framebuffer, SUPERSAMPLE
from .camera import Camera

__all__ = [
    "Vec3",
    "Transform",
    "Primitive",
    "SceneObject",
    "SceneLight",
    "Scene",
    "RenderConfig",
    "Framebuffer",
    "SUPERSAMPLE",
    "Camera",
]
