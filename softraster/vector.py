import math
from dataclasses import dataclass


# ============================================================
#  Math primitives
# ============================================================

@dataclass(frozen=True)
class Vec3:
    """
    Three floats shared by every stage of the renderer.

    The same type carries vertex positions, per-axis scales, rotation
    angles in radians and 0..255 RGB colors. It is frozen, so primitives
    and transforms can hand instances around without copying.

    `v * k` scales by a number while `v * w` is the dot product;
    the per-component product (color times light color) is `v.mul(w)`.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, o):
        return Vec3(self.x + o.x, self.y + o.y, self.z + o.z)

    def __sub__(self, o):
        return self + (-o)

    def __neg__(self):
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, o):
        if isinstance(o, Vec3):
            return self.dot(o)
        return Vec3(self.x * o, self.y * o, self.z * o)

    __rmul__ = __mul__

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, o) -> float:
        """Cosine term for shading when both sides are unit length."""
        return self.x * o.x + self.y * o.y + self.z * o.z

    def mul(self, o) -> "Vec3":
        """Per-channel product, e.g. a surface color filtered by a light color."""
        return Vec3(self.x * o.x, self.y * o.y, self.z * o.z)

    def cross(self, o) -> "Vec3":
        """
        Right-handed perpendicular of self and o.

        Face normals are (p2 - p1).cross(p3 - p1).
        """
        x = self.y * o.z - self.z * o.y
        y = self.z * o.x - self.x * o.z
        z = self.x * o.y - self.y * o.x
        return Vec3(x, y, z)

    def norm(self) -> float:
        return math.sqrt(self.dot(self))

    def normalize(self) -> "Vec3":
        """Unit vector in the same direction; a (near) zero vector maps to ZERO."""
        length = self.norm()
        if length <= 1e-12:
            return Vec3(0.0, 0.0, 0.0)
        return self * (1.0 / length)

    def rotate(self, cos_x: float, sin_x: float,
               cos_y: float, sin_y: float,
               cos_z: float, sin_z: float) -> "Vec3":
        """
        Rotate by precomputed cosines/sines, always in the order Y, X, Z.

        Each step is the plain 2D rotation of one coordinate pair:
          Y: (x, z)
          X: (y, z)
          Z: (x, y)
        """
        x, y, z = self.x, self.y, self.z

        # y axis
        x, z = x * cos_y + z * sin_y, -x * sin_y + z * cos_y
        # x axis
        y, z = y * cos_x - z * sin_x, y * sin_x + z * cos_x
        # z axis
        x, y = x * cos_z - y * sin_z, x * sin_z + y * cos_z

        return Vec3(x, y, z)

    def __str__(self):
        return f"<{self.x:f}, {self.y:f}, {self.z:f}>"


ZERO = Vec3(0.0, 0.0, 0.0)
ONE = Vec3(1.0, 1.0, 1.0)
