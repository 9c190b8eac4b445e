import math

import numpy as np

from .scene import Primitive
from .vector import Vec3


# ============================================================
#  Projection
# ============================================================

def fov_coefficient(canvas_width: int, focal: float, fov: float) -> float:
    """
    Scale from view-space x/y (after the divide by z) to screen units.

      canvas_width / (focal * tan(fov / 2)),  fov in degrees

    A point on the edge of the field of view lands `canvas_width` units
    from the center, which is the half-width of the supersampled buffer.
    """
    return canvas_width / (focal * math.tan(fov * math.pi / 360.0))


def in_depth_range(primitive: Primitive, min_depth: float, max_depth: float) -> bool:
    """True only when every vertex has min_depth < z < max_depth (no clipping)."""
    return all(min_depth < v.z < max_depth for v in primitive.vertices)


def project_vertex(v: Vec3, coefficient: float,
                   canvas_width: int, canvas_height: int) -> Vec3:
    """
    Perspective divide, then map into the supersampled buffer.

      x'' = x * k / z + canvas_width
      y'' = canvas_height - y * k / z     (screen y grows downwards)

    z is kept as view-space depth for the depth test. The divide follows
    float semantics: z == 0 gives inf or nan coordinates, which the
    rasterizer skips.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        sx = np.float64(v.x) * coefficient / np.float64(v.z)
        sy = np.float64(v.y) * coefficient / np.float64(v.z)
    return Vec3(float(sx) + canvas_width, canvas_height - float(sy), v.z)


def project_primitive(primitive: Primitive, coefficient: float,
                      canvas_width: int, canvas_height: int) -> Primitive:
    p1, p2, p3 = (project_vertex(v, coefficient, canvas_width, canvas_height)
                  for v in primitive.vertices)
    return Primitive(p1, p2, p3, primitive.cullable,
                     primitive.ambient_color, primitive.diffuse_color)


# ============================================================
#  Backface culling
# ============================================================

def signed_area2(primitive: Primitive) -> float:
    """Twice the signed screen-space area, (p2 - p1) x (p3 - p1)."""
    p1, p2, p3 = primitive.vertices
    return (p2.x - p1.x) * (p3.y - p1.y) - (p2.y - p1.y) * (p3.x - p1.x)


def is_front_facing(projected: Primitive) -> bool:
    """
    Screen-space winding test on an already projected primitive.

    Counter-clockwise (outside view) triangles facing the camera come out
    with positive area once y is flipped; zero area counts as back-facing.
    """
    return signed_area2(projected) > 0.0
