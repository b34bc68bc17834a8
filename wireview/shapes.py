import math
from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional, Sequence, Tuple, Type

from .errors import SceneFormatError
from .vecmath import Mat4, Vec3, Vec4, rotate_x, rotate_y, rotate_z, translate


Edges = List[List[int]]


# ============================================================
#  Models
# ============================================================

_AXIS_ROTATIONS = {"x": rotate_x, "y": rotate_y, "z": rotate_z}


@dataclass(frozen=True)
class Animation:
    """Spin about one axis through the model center at rps revolutions per second."""
    axis: str
    rps: float

    def __post_init__(self):
        if not isinstance(self.axis, str) or self.axis not in _AXIS_ROTATIONS:
            raise SceneFormatError(f"animation axis must be one of x, y, z (got {self.axis!r})")

    def rotation_at(self, time_s: float) -> Mat4:
        return _AXIS_ROTATIONS[self.axis](2.0 * math.pi * self.rps * time_s)


@dataclass
class Model:
    """
    Wireframe geometry ready for the pipeline.

      vertices  - homogeneous points (w = 1)
      edges     - polylines of vertex indices; each consecutive pair is
                  one segment, repeat the first index to close a loop
      matrix    - local transform applied before the view transform
      animation - optional spin, pivoting on center
    """
    vertices: List[Vec4]
    edges: Edges
    matrix: Mat4 = field(default_factory=Mat4.identity)
    animation: Optional[Animation] = None
    center: Vec3 = Vec3(0.0, 0.0, 0.0)

    def transform_at(self, time_s: float = 0.0) -> Mat4:
        """Local transform at the given animation time."""
        if self.animation is None:
            return self.matrix
        c = self.center
        spin = Mat4.multiply(translate(c.x, c.y, c.z),
                             self.animation.rotation_at(time_s),
                             translate(-c.x, -c.y, -c.z))
        return spin @ self.matrix


# ============================================================
#  Shapes (tagged by scene "type")
# ============================================================

def _require_positive(shape: str, **values):
    for name, value in values.items():
        if not value > 0:
            raise SceneFormatError(f"{shape} {name} must be positive (got {value!r})")


def _require_count(shape: str, name: str, value: int, minimum: int):
    if value < minimum:
        raise SceneFormatError(f"{shape} {name} must be at least {minimum} (got {value!r})")


def _ring(center: Vec3, radius: float, y: float, sides: int) -> List[Vec4]:
    """Vertices of a circle in the xz-plane at height y."""
    ring = []
    for i in range(sides):
        a = 2.0 * math.pi * i / sides
        ring.append(Vec4(center.x + radius * math.cos(a), y, center.z + radius * math.sin(a), 1.0))
    return ring


def _closed(start: int, count: int) -> List[int]:
    return list(range(start, start + count)) + [start]


class Shape:
    """
    Base for the scene's model variants.

    Subclasses register themselves under their scene "type" tag and emit
    (vertices, edges) through to_vertex_edge_list().
    """
    type_name: ClassVar[str] = ""
    registry: ClassVar[Dict[str, Type["Shape"]]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.type_name:
            Shape.registry[cls.type_name] = cls

    center: Vec3

    def to_vertex_edge_list(self) -> Tuple[List[Vec4], Edges]:
        raise NotImplementedError


@dataclass
class GenericShape(Shape):
    type_name: ClassVar[str] = "generic"

    vertices: List[Vec4]
    edges: Edges
    center: Vec3 = Vec3(0.0, 0.0, 0.0)

    def to_vertex_edge_list(self):
        for polyline in self.edges:
            for idx in polyline:
                if not 0 <= idx < len(self.vertices):
                    raise SceneFormatError(f"edge index {idx} out of range for {len(self.vertices)} vertices")
        return list(self.vertices), [list(p) for p in self.edges]


@dataclass
class Cube(Shape):
    """Axis-aligned box; despite the name, width/height/depth may differ."""
    type_name: ClassVar[str] = "cube"

    center: Vec3
    width: float
    height: float
    depth: float

    def to_vertex_edge_list(self):
        _require_positive("cube", width=self.width, height=self.height, depth=self.depth)
        c = self.center
        hw, hh, hd = self.width / 2.0, self.height / 2.0, self.depth / 2.0
        vertices = []
        for z in (c.z + hd, c.z - hd):
            vertices += [Vec4(c.x - hw, c.y - hh, z, 1.0),
                         Vec4(c.x + hw, c.y - hh, z, 1.0),
                         Vec4(c.x + hw, c.y + hh, z, 1.0),
                         Vec4(c.x - hw, c.y + hh, z, 1.0)]
        edges = [_closed(0, 4), _closed(4, 4), [0, 4], [1, 5], [2, 6], [3, 7]]
        return vertices, edges


@dataclass
class Cylinder(Shape):
    type_name: ClassVar[str] = "cylinder"

    center: Vec3
    radius: float
    height: float
    sides: int

    def to_vertex_edge_list(self):
        _require_positive("cylinder", radius=self.radius, height=self.height)
        _require_count("cylinder", "sides", self.sides, 3)
        c, n = self.center, self.sides
        vertices = (_ring(c, self.radius, c.y + self.height / 2.0, n)
                    + _ring(c, self.radius, c.y - self.height / 2.0, n))
        edges = [_closed(0, n), _closed(n, n)]
        edges += [[i, i + n] for i in range(n)]
        return vertices, edges


@dataclass
class Cone(Shape):
    type_name: ClassVar[str] = "cone"

    center: Vec3
    radius: float
    height: float
    sides: int

    def to_vertex_edge_list(self):
        _require_positive("cone", radius=self.radius, height=self.height)
        _require_count("cone", "sides", self.sides, 3)
        c, n = self.center, self.sides
        vertices = _ring(c, self.radius, c.y - self.height / 2.0, n)
        vertices.append(Vec4(c.x, c.y + self.height / 2.0, c.z, 1.0))
        apex = n
        edges = [_closed(0, n)]
        edges += [[apex, i] for i in range(n)]
        return vertices, edges


@dataclass
class Sphere(Shape):
    """
    UV sphere: slices meridians, stacks bands between the poles.

    Vertex 0 is the north pole, vertex 1 the south pole, then
    stacks - 1 latitude rings of slices vertices each, north to south.
    """
    type_name: ClassVar[str] = "sphere"

    center: Vec3
    radius: float
    slices: int
    stacks: int

    def to_vertex_edge_list(self):
        _require_positive("sphere", radius=self.radius)
        _require_count("sphere", "slices", self.slices, 3)
        _require_count("sphere", "stacks", self.stacks, 2)
        c, r = self.center, self.radius
        vertices = [Vec4(c.x, c.y + r, c.z, 1.0), Vec4(c.x, c.y - r, c.z, 1.0)]
        for k in range(1, self.stacks):
            phi = math.pi * k / self.stacks
            vertices += _ring(c, r * math.sin(phi), c.y + r * math.cos(phi), self.slices)

        rings = self.stacks - 1
        edges = [_closed(2 + k * self.slices, self.slices) for k in range(rings)]
        for i in range(self.slices):
            meridian = [0] + [2 + k * self.slices + i for k in range(rings)] + [1]
            edges.append(meridian)
        return vertices, edges


def build_model(shape: Shape,
                matrix: Optional[Mat4] = None,
                animation: Optional[Animation] = None) -> Model:
    """Emit a shape's geometry once and wrap it for the pipeline."""
    vertices, edges = shape.to_vertex_edge_list()
    return Model(vertices=vertices,
                 edges=edges,
                 matrix=matrix if matrix is not None else Mat4.identity(),
                 animation=animation,
                 center=shape.center)


def shape_types() -> Sequence[str]:
    return sorted(Shape.registry)
