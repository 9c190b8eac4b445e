from dataclasses import dataclass, field
from typing import List, Tuple

from .transform import Transform
from .vector import Vec3


# ============================================================
#  Scene data model
# ============================================================

@dataclass(frozen=True)
class Primitive:
    """
    Single triangle plus its surface data.

    Colors are 0..255 vectors (not normalized). `diffuse_color` is only read
    by the optional Lambert shading; the default ambient shading paints the
    whole triangle with `ambient_color`.
    """
    p1: Vec3 = Vec3()
    p2: Vec3 = Vec3()
    p3: Vec3 = Vec3()
    cullable: bool = False
    ambient_color: Vec3 = Vec3()
    diffuse_color: Vec3 = Vec3()

    @property
    def vertices(self) -> Tuple[Vec3, Vec3, Vec3]:
        return self.p1, self.p2, self.p3

    def transform_geometry(self, transform: Transform, rotate_first: bool) -> "Primitive":
        """
        Return a new primitive with every vertex transformed.

        rotate_first=True  -> rotate(scale(v)) + pos   (object -> world)
        rotate_first=False -> rotate(scale(v) + pos)   (world -> view)

        Colors and the cullable flag are carried over unchanged.
        """
        trig = transform.trig
        if rotate_first:
            p1, p2, p3 = (v.mul(transform.scale).rotate(*trig) + transform.pos
                          for v in self.vertices)
        else:
            p1, p2, p3 = ((v.mul(transform.scale) + transform.pos).rotate(*trig)
                          for v in self.vertices)
        return Primitive(p1, p2, p3, self.cullable,
                         self.ambient_color, self.diffuse_color)

    def normal(self) -> Vec3:
        """Unit face normal from the winding p1 -> p2 -> p3."""
        return (self.p2 - self.p1).cross(self.p3 - self.p1).normalize()

    def centroid(self) -> Vec3:
        return (self.p1 + self.p2 + self.p3) * (1.0 / 3.0)


# Faces of the unit cube: (name, color, two triangles). Each triangle is
# wound counter-clockwise when seen from outside the cube.
_CUBE_FACES = (
    ("back", Vec3(255, 0, 0), (
        (Vec3(-1, -1, 1), Vec3(1, -1, 1), Vec3(1, 1, 1)),
        (Vec3(-1, -1, 1), Vec3(1, 1, 1), Vec3(-1, 1, 1)),
    )),
    ("right", Vec3(0, 0, 255), (
        (Vec3(1, -1, 1), Vec3(1, -1, -1), Vec3(1, 1, -1)),
        (Vec3(1, -1, 1), Vec3(1, 1, -1), Vec3(1, 1, 1)),
    )),
    ("front", Vec3(0, 255, 0), (
        (Vec3(1, -1, -1), Vec3(-1, -1, -1), Vec3(-1, 1, -1)),
        (Vec3(1, -1, -1), Vec3(-1, 1, -1), Vec3(1, 1, -1)),
    )),
    ("left", Vec3(255, 100, 0), (
        (Vec3(-1, -1, -1), Vec3(-1, -1, 1), Vec3(-1, 1, 1)),
        (Vec3(-1, -1, -1), Vec3(-1, 1, 1), Vec3(-1, 1, -1)),
    )),
    ("bottom", Vec3(255, 0, 255), (
        (Vec3(-1, -1, -1), Vec3(1, -1, -1), Vec3(1, -1, 1)),
        (Vec3(-1, -1, -1), Vec3(1, -1, 1), Vec3(-1, -1, 1)),
    )),
    ("top", Vec3(255, 255, 0), (
        (Vec3(-1, 1, -1), Vec3(1, 1, 1), Vec3(1, 1, -1)),
        (Vec3(-1, 1, -1), Vec3(-1, 1, 1), Vec3(1, 1, 1)),
    )),
)

CUBE_FACE_NAMES = tuple(name for name, _, _ in _CUBE_FACES)


@dataclass
class SceneObject:
    """
    One renderable body: an ordered list of primitives sharing one pose.

    `transform` is the object's local pose (object -> world). It is applied
    by the camera at render time, never baked into `primitives`.
    """
    primitives: List[Primitive] = field(default_factory=list)
    transform: Transform = field(default_factory=Transform)

    def transform_geometry(self, transform: Transform, rotate_first: bool) -> "SceneObject":
        """Transform every primitive; the result keeps a reference to self.transform."""
        return SceneObject(
            [p.transform_geometry(transform, rotate_first) for p in self.primitives],
            self.transform,
        )

    @classmethod
    def colored_unit_cube(cls, pos: Vec3) -> "SceneObject":
        """
        Cube spanning [-1, 1]^3 in object space, placed at `pos`.

        12 primitives (6 faces x 2 triangles), each face one solid color:
          back=red, right=blue, front=green, left=orange, bottom=magenta, top=yellow
        """
        primitives = [
            Primitive(a, b, c, True, color, color)
            for _, color, triangles in _CUBE_FACES
            for a, b, c in triangles
        ]
        return cls(primitives, Transform(pos, Vec3(1, 1, 1), Vec3()))


@dataclass
class SceneLight:
    """Point light. Only read when Lambert shading is enabled."""
    pos: Vec3 = Vec3()
    color: Vec3 = Vec3()
    strength: float = 0.0


@dataclass
class Scene:
    objects: List[SceneObject] = field(default_factory=list)
    lights: List[SceneLight] = field(default_factory=list)

    def primitive_count(self) -> int:
        return sum(len(o.primitives) for o in self.objects)
