import math
from typing import List, Tuple

import numpy as np
from numba import njit

from .framebuffer import Framebuffer
from .vector import Vec3


# ============================================================
#  Numba rasterizers
# ============================================================
#
# Scanline fill of triangles with one horizontal edge. Samples are visited
# at (start_x + i, start_y + j), i.e. the float grid anchored on the
# triangle's own vertices, and written to cell (int(x), int(y)).
#
# error_model="numpy": a zero barycentric denominator yields inf/nan
# instead of raising. A nan depth never passes the z-test.

@njit(cache=True, error_model="numpy")
def _barycentric(ax, ay, bx, by, cx, cy, px, py):
    """
    Barycentric weights (w1, w2, w3) of point P relative to A, B, C.

    Not guarded: a degenerate triangle gives inf/nan weights.
    """
    den = (by - cy) * (ax - cx) + (cx - bx) * (ay - cy)
    w1 = ((by - cy) * (px - cx) + (cx - bx) * (py - cy)) / den
    w2 = ((cy - ay) * (px - cx) + (ax - cx) * (py - cy)) / den
    return w1, w2, 1.0 - w1 - w2


@njit(cache=True, error_model="numpy")
def _first_in_buffer(start):
    """First value of start, start+1, start+2, ... that is >= 0."""
    # float modulo: no integer conversion, so far-off bounds cannot overflow
    if start < 0.0:
        return start % 1.0
    return start


@njit(cache=True, error_model="numpy")
def _fill_span(depth, color, y, min_x, max_x,
               ax, ay, az, bx, by, bz, cx, cy, cz,
               r, g, b):
    """Depth-tested write of samples min_x, min_x+1, ... < max_x on scanline y."""
    if not (math.isfinite(min_x) and math.isfinite(max_x)):
        return
    width = depth.shape[0]
    row = int(y)
    x = _first_in_buffer(min_x)
    while x < max_x and x < width:
        w1, w2, w3 = _barycentric(ax, ay, bx, by, cx, cy, x, y)
        z = az * w1 + bz * w2 + cz * w3
        col = int(x)
        # strict: on equal depth the earlier write is kept
        if z < depth[col, row]:
            depth[col, row] = z
            color[col, row, 0] = r
            color[col, row, 1] = g
            color[col, row, 2] = b
        x += 1.0


@njit(cache=True, error_model="numpy")
def fill_flat_top(depth, color,
                  ax, ay, az, bx, by, bz, cx, cy, cz,
                  r, g, b):
    """
    Fill a triangle whose A and B share the larger y; C is the lone vertex.

    Scanlines run from C.y up to (excluding) A.y, bounded by edges C-A and C-B.
    """
    if ay - cy == 0.0 or by - cy == 0.0:
        return
    m1 = (ax - cx) / (ay - cy)
    m2 = (bx - cx) / (by - cy)
    if not (math.isfinite(cy) and math.isfinite(ay)):
        return

    height = depth.shape[1]
    y = _first_in_buffer(cy)
    while y < ay and y < height:
        x1 = cx + m1 * (y - cy)
        x2 = cx + m2 * (y - cy)
        _fill_span(depth, color, y, min(x1, x2), max(x1, x2),
                   ax, ay, az, bx, by, bz, cx, cy, cz, r, g, b)
        y += 1.0


@njit(cache=True, error_model="numpy")
def fill_flat_bottom(depth, color,
                     ax, ay, az, bx, by, bz, cx, cy, cz,
                     r, g, b):
    """
    Fill a triangle whose B and C share the smaller y; A is the lone vertex.

    Scanlines run from C.y up to (excluding) A.y, bounded by edges A-B and A-C.
    """
    if by - ay == 0.0 or cy - ay == 0.0:
        return
    m1 = (bx - ax) / (by - ay)
    m2 = (cx - ax) / (cy - ay)
    if not (math.isfinite(cy) and math.isfinite(ay)):
        return

    height = depth.shape[1]
    y = _first_in_buffer(cy)
    while y < ay and y < height:
        x1 = ax + m1 * (y - ay)
        x2 = ax + m2 * (y - ay)
        _fill_span(depth, color, y, min(x1, x2), max(x1, x2),
                   ax, ay, az, bx, by, bz, cx, cy, cz, r, g, b)
        y += 1.0


# ============================================================
#  Triangle decomposition
# ============================================================

Triangle = Tuple[Vec3, Vec3, Vec3]


def split_triangle(p1: Vec3, p2: Vec3, p3: Vec3) -> Tuple[List[Triangle], List[Triangle]]:
    """
    Decompose a screen-space triangle into flat-top / flat-bottom parts.

    Vertices are ordered by descending y into a, b, c. Returns
    (flat_tops, flat_bottoms), each with at most one triangle:

      a.y == b.y -> flat-top (a, b, c)
      b.y == c.y -> flat-bottom (a, b, c)
      otherwise  -> d is the point of edge a-c at height b.y,
                    flat-top (b, d, c) and flat-bottom (a, b, d)
    """
    a, b, c = sorted((p1, p2, p3), key=lambda v: v.y, reverse=True)

    if a.y == b.y:
        return [(a, b, c)], []
    if b.y == c.y:
        return [], [(a, b, c)]

    dx = (c.x - a.x) / (c.y - a.y)
    dz = (c.z - a.z) / (c.y - a.y)
    d = Vec3(a.x - dx * (a.y - b.y), b.y, a.z - dz * (a.y - b.y))
    return [(b, d, c)], [(a, b, d)]


def rasterize_triangle(fb: Framebuffer, p1: Vec3, p2: Vec3, p3: Vec3, color: Vec3):
    """
    Rasterize one projected triangle into the framebuffer with a flat color.

    Vertices are in supersampled screen space, z is view-space depth.
    """
    tops, bottoms = split_triangle(p1, p2, p3)
    rgb = _floats(color)
    # plain floats, so every call reuses the same compiled specialization
    for tri in tops:
        fill_flat_top(fb.depth, fb.color, *_floats(*tri), *rgb)
    for tri in bottoms:
        fill_flat_bottom(fb.depth, fb.color, *_floats(*tri), *rgb)


def _floats(*vs: Vec3) -> Tuple[float, ...]:
    return tuple(float(c) for v in vs for c in v)


def warmup():
    """
    Pre-warm Numba (first call triggers compilation).

    Run once before the first frame so it does not stall.
    """
    depth = np.full((4, 4), 2.0, dtype=np.float64)
    color = np.zeros((4, 4, 3), dtype=np.float64)
    fill_flat_top(depth, color, 0.0, 3.0, 1.0, 3.0, 3.0, 1.0, 0.0, 0.0, 1.0, 255.0, 255.0, 255.0)
    fill_flat_bottom(depth, color, 0.0, 3.0, 1.0, 0.0, 0.0, 1.0, 3.0, 0.0, 1.0, 255.0, 255.0, 255.0)
