from typing import Sequence

from .config import SHADING_LAMBERT, RenderConfig
from .scene import Primitive, SceneLight
from .vector import Vec3


def _clamp_color(c: Vec3) -> Vec3:
    return Vec3(*(max(0.0, min(255.0, v)) for v in c))


def lambert_color(primitive: Primitive, lights: Sequence[SceneLight],
                  ambient_factor: float) -> Vec3:
    """
    Flat diffuse color of a world-space triangle.

    Single normal for the whole triangle:
      color = ambient_factor * ambient
            + sum(diffuse * light.color / 255 * strength * max(0, N . L))
    with L the unit vector from the triangle centroid to the light.
    """
    n = primitive.normal()
    center = primitive.centroid()
    color = primitive.ambient_color * ambient_factor
    for light in lights:
        l = (light.pos - center).normalize()
        intensity = max(0.0, n.dot(l)) * light.strength
        color = color + primitive.diffuse_color.mul(light.color * (1.0 / 255.0)) * intensity
    return _clamp_color(color)


def shade(primitive: Primitive, lights: Sequence[SceneLight], config: RenderConfig) -> Primitive:
    """
    Return the primitive with the color the rasterizer should paint.

    The rasterizer always paints `ambient_color`; in lambert mode that
    field is replaced by the lit color. Ambient mode returns the input.
    """
    if config.shading != SHADING_LAMBERT:
        return primitive
    lit = lambert_color(primitive, lights, config.ambient_factor)
    return Primitive(primitive.p1, primitive.p2, primitive.p3, primitive.cullable,
                     lit, primitive.diffuse_color)
