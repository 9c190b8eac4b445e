import logging
import math
from typing import List, Optional

import numpy as np

from .config import RenderConfig
from .framebuffer import Framebuffer
from .projection import fov_coefficient, in_depth_range, is_front_facing, project_primitive
from .raster import rasterize_triangle
from .scene import Primitive, Scene
from .shading import shade
from .transform import Transform
from .vector import Vec3

logger = logging.getLogger(__name__)


class Camera:
    """
    Viewer state and the render pipeline.

    View space: camera at the origin looking along +z, y up. Only geometry
    with min_depth < z < max_depth (per vertex) is drawn.

    Parameters:
      pos, rot   - position and per-axis rotation (radians)
      fov        - horizontal field of view in degrees
      focal      - focal length
      min_depth  - near bound
      max_depth  - far bound
    """
    def __init__(self, pos: Optional[Vec3] = None, rot: Optional[Vec3] = None,
                 fov: float = 90.0, focal: float = 1.0,
                 min_depth: float = 0.0, max_depth: float = 100.0):
        self.pos = pos if pos is not None else Vec3(0.0, 0.0, 0.0)
        self.rot = rot if rot is not None else Vec3(0.0, 0.0, 0.0)
        self.fov = fov
        self.focal = focal
        self.min_depth = min_depth
        self.max_depth = max_depth
        self.render_process_logs = False

    # ========================================================
    #  Movement (yaw-relative, in the world x/z plane)
    # ========================================================

    def move_forward(self, distance: float):
        a = self.rot.y + math.pi / 2
        self.pos = Vec3(self.pos.x + distance * math.cos(a), self.pos.y,
                        self.pos.z + distance * math.sin(a))

    def move_backward(self, distance: float):
        self.move_forward(-distance)

    def move_right(self, distance: float):
        a = self.rot.y
        self.pos = Vec3(self.pos.x + distance * math.cos(a), self.pos.y,
                        self.pos.z + distance * math.sin(a))

    def move_left(self, distance: float):
        self.move_right(-distance)

    def move_up(self, distance: float):
        self.pos = Vec3(self.pos.x, self.pos.y + distance, self.pos.z)

    def move_down(self, distance: float):
        self.move_up(-distance)

    def turn(self, pitch: float = 0.0, yaw: float = 0.0):
        """Add to rot.x / rot.y. Angles are never clamped or wrapped."""
        self.rot = Vec3(self.rot.x + pitch, self.rot.y + yaw, self.rot.z)

    # ========================================================
    #  Render pipeline
    # ========================================================

    def view_transform(self) -> Transform:
        """World -> view: translate by -pos, then rotate by rot."""
        return Transform(-self.pos, Vec3(1.0, 1.0, 1.0), self.rot)

    def fov_coefficient(self, canvas_width: int) -> float:
        return fov_coefficient(canvas_width, self.focal, self.fov)

    def in_depth_range(self, primitive: Primitive) -> bool:
        return in_depth_range(primitive, self.min_depth, self.max_depth)

    def transform_scene(self, scene: Scene, config: Optional[RenderConfig] = None) -> List[Primitive]:
        """
        View-space primitives of the whole scene, in scene order.

        Each object is posed by its own transform (rotate first), shaded in
        world space, then moved into view space (translate first). Triangles
        with any vertex outside the depth range are dropped.
        """
        config = config or RenderConfig()
        camera_transform = self.view_transform()
        primitives = []
        for obj in scene.objects:
            world = obj.transform_geometry(obj.transform, True)
            for p in world.primitives:
                view = shade(p, scene.lights, config).transform_geometry(camera_transform, False)
                if self.in_depth_range(view):
                    primitives.append(view)
        return primitives

    def render(self, canvas_width: int, canvas_height: int, scene: Scene,
               config: Optional[RenderConfig] = None) -> np.ndarray:
        """
        Render the scene from this camera.

        Returns the final pixels as uint8 array of shape
        (canvas_width, canvas_height, 3), indexed [x, y, channel]; the
        rasterization itself happens at twice that resolution.
        """
        if canvas_width <= 0 or canvas_height <= 0:
            raise ValueError(f"canvas size must be positive, got {canvas_width}x{canvas_height}")
        config = config or RenderConfig()

        self._log("Started Render")

        coefficient = self.fov_coefficient(canvas_width)

        self._log("Precomp Completed")

        fb = Framebuffer.for_canvas(canvas_width, canvas_height, self.max_depth + 1)

        self._log("Init Buffer Completed")

        primitives = self.transform_scene(scene, config)

        self._log("Transform Completed")

        drawn = 0
        for primitive in primitives:
            # projected x/y are in supersampled units: the fov coefficient
            # already maps the view edge to +-canvas_width
            projected = project_primitive(primitive, coefficient, canvas_width, canvas_height)
            if config.cull_backfaces and projected.cullable and not is_front_facing(projected):
                continue
            rasterize_triangle(fb, projected.p1, projected.p2, projected.p3,
                               projected.ambient_color)
            drawn += 1

        self._log(f"Raster Completed ({drawn}/{len(primitives)} primitives)")

        pixels = fb.downsample()

        self._log("Render Completed")
        return pixels

    def _log(self, message: str):
        if self.render_process_logs:
            logger.info(message)

    def __repr__(self):
        return (f"Camera(pos={self.pos}, rot={self.rot}, fov={self.fov}, focal={self.focal}, "
                f"min_depth={self.min_depth}, max_depth={self.max_depth})")
