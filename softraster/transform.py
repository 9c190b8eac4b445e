import math
from typing import Optional

from .vector import Vec3


class Transform:
    """
    Position, scale and per-axis rotation (radians) of an object or camera.

    The cosine/sine of every rotation angle is cached, since each vertex of
    every primitive is rotated with the same values. The angle is only
    reachable through the setters below, which recompute the matching
    cache entry together with the angle.
    """
    def __init__(self, pos: Optional[Vec3] = None,
                 scale: Optional[Vec3] = None,
                 rot: Optional[Vec3] = None):
        self.pos = pos if pos is not None else Vec3(0.0, 0.0, 0.0)
        self.scale = scale if scale is not None else Vec3(1.0, 1.0, 1.0)
        rot = rot if rot is not None else Vec3(0.0, 0.0, 0.0)
        self._rot = Vec3(0.0, 0.0, 0.0)
        self.set_rot(rot.x, rot.y, rot.z)

    @property
    def rot(self) -> Vec3:
        return self._rot

    @property
    def trig(self):
        """(cos_x, sin_x, cos_y, sin_y, cos_z, sin_z), in Vec3.rotate order."""
        return (self._cos_x, self._sin_x,
                self._cos_y, self._sin_y,
                self._cos_z, self._sin_z)

    def set_rot_x(self, rot_x: float):
        self._rot = Vec3(rot_x, self._rot.y, self._rot.z)
        self._cos_x = math.cos(rot_x)
        self._sin_x = math.sin(rot_x)

    def set_rot_y(self, rot_y: float):
        self._rot = Vec3(self._rot.x, rot_y, self._rot.z)
        self._cos_y = math.cos(rot_y)
        self._sin_y = math.sin(rot_y)

    def set_rot_z(self, rot_z: float):
        self._rot = Vec3(self._rot.x, self._rot.y, rot_z)
        self._cos_z = math.cos(rot_z)
        self._sin_z = math.sin(rot_z)

    def set_rot(self, rot_x: float, rot_y: float, rot_z: float):
        self.set_rot_x(rot_x)
        self.set_rot_y(rot_y)
        self.set_rot_z(rot_z)

    def change_rot_x(self, delta: float):
        self.set_rot_x(self._rot.x + delta)

    def change_rot_y(self, delta: float):
        self.set_rot_y(self._rot.y + delta)

    def change_rot_z(self, delta: float):
        self.set_rot_z(self._rot.z + delta)

    def rotate(self, v: Vec3) -> Vec3:
        """Rotate v by this transform's angles (Y, then X, then Z)."""
        return v.rotate(*self.trig)

    def __repr__(self):
        return f"Transform(pos={self.pos!r}, scale={self.scale!r}, rot={self._rot!r})"
