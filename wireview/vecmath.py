"""
Pure-Python vector and 4x4 matrix types for the viewing pipeline.

Matrices are row-major and act on column vectors, so in a @ b the right
operand b is applied first.
"""
import math
from dataclasses import dataclass
from typing import List, Optional


# ============================================================
#  Math primitives
# ============================================================

@dataclass(frozen=True)
class Vec3:
    """
    3D vector for positions and directions.

    Used in:
      - view parameters (PRP, SRP, VUP)
      - view-reference axes (u, v, n)
      - clipped line endpoints in the canonical view volume

    Immutable: operations return new objects.
    """
    x: float
    y: float
    z: float

    def __add__(self, o): return Vec3(self.x + o.x, self.y + o.y, self.z + o.z)
    def __sub__(self, o): return Vec3(self.x - o.x, self.y - o.y, self.z - o.z)
    def __mul__(self, k: float): return Vec3(self.x * k, self.y * k, self.z * k)
    def __rmul__(self, k: float): return self * k
    def __neg__(self): return Vec3(-self.x, -self.y, -self.z)

    def dot(self, o) -> float:
        """Scalar product; used for the view-basis checks."""
        return self.x * o.x + self.y * o.y + self.z * o.z

    def cross(self, o):
        """Right-handed cross product (u = vup x n)."""
        return Vec3(
            self.y * o.z - self.z * o.y,
            self.z * o.x - self.x * o.z,
            self.x * o.y - self.y * o.x
        )

    def norm(self) -> float:
        """Length."""
        return math.sqrt(self.dot(self))

    def normalize(self):
        """
        Unit vector with the same direction.

        A near-zero vector has no direction; the zero vector is returned
        and the caller is expected to have ruled that case out.
        """
        n = self.norm()
        if n <= 1e-12:
            return Vec3(0.0, 0.0, 0.0)
        return self * (1.0 / n)


@dataclass(frozen=True)
class Vec4:
    """Homogeneous point (x, y, z, w); scene vertices always carry w = 1."""
    x: float
    y: float
    z: float
    w: float

    def xyz(self) -> Vec3:
        """Drop w without dividing."""
        return Vec3(self.x, self.y, self.z)

    def homogenize(self) -> Vec3:
        """Homogeneous divide: (x/w, y/w, z/w)."""
        return Vec3(self.x / self.w, self.y / self.w, self.z / self.w)


class Mat4:
    """
    Row-major 4x4 matrix. It carries:
      - per-model local transforms (scene "matrix", animation)
      - the view transforms into the canonical volumes (N_par, N_per)
      - the projection matrices (M_par, M_per)
      - the viewport matrix

    Multiplication:
      - Matrix @ Matrix => Mat4 (right operand applied first)
      - Matrix * Vec4   => Vec4 (mul_vec4)
    """
    def __init__(self, m: Optional[List[List[float]]] = None):
        self.m = m if m is not None else [[0.0]*4 for _ in range(4)]

    @staticmethod
    def identity():
        """The 4x4 identity."""
        m = Mat4()
        for i in range(4):
            m.m[i][i] = 1.0
        return m

    @staticmethod
    def from_rows(rows) -> "Mat4":
        """Build from any 4x4 nested sequence of numbers."""
        if len(rows) != 4 or any(len(r) != 4 for r in rows):
            raise ValueError("Mat4 needs 4 rows of 4 values")
        return Mat4([[float(v) for v in r] for r in rows])

    @staticmethod
    def multiply(*mats: "Mat4") -> "Mat4":
        """
        Compose a chain of matrices.

        multiply(a, b, c) == a @ b @ c, so c is applied first to a
        column vector and a last.
        """
        r = Mat4.identity()
        for mat in mats:
            r = r @ mat
        return r

    def __matmul__(self, o: "Mat4") -> "Mat4":
        """self @ o: o is applied first."""
        r = Mat4()
        for i in range(4):
            for j in range(4):
                s = 0.0
                for k in range(4):
                    s += self.m[i][k] * o.m[k][j]
                r.m[i][j] = s
        return r

    def __eq__(self, o) -> bool:
        if not isinstance(o, Mat4):
            return NotImplemented
        return self.m == o.m

    def __repr__(self) -> str:
        return f"Mat4({self.m!r})"

    def mul_vec4(self, v: Vec4) -> Vec4:
        """Transform a homogeneous point (no divide by w)."""
        x = self.m[0][0]*v.x + self.m[0][1]*v.y + self.m[0][2]*v.z + self.m[0][3]*v.w
        y = self.m[1][0]*v.x + self.m[1][1]*v.y + self.m[1][2]*v.z + self.m[1][3]*v.w
        z = self.m[2][0]*v.x + self.m[2][1]*v.y + self.m[2][2]*v.z + self.m[2][3]*v.w
        w = self.m[3][0]*v.x + self.m[3][1]*v.y + self.m[3][2]*v.z + self.m[3][3]*v.w
        return Vec4(x, y, z, w)


def vec3_to_vec4(v: Vec3, w: float = 1.0) -> Vec4:
    """Lift a point (w=1) or a direction (w=0) to homogeneous form."""
    return Vec4(v.x, v.y, v.z, w)


# ============================================================
#  3D transforms
# ============================================================

def translate(tx, ty, tz) -> Mat4:
    """(x, y, z) -> (x + tx, y + ty, z + tz)"""
    m = Mat4.identity()
    m.m[0][3] = tx
    m.m[1][3] = ty
    m.m[2][3] = tz
    return m

def scale(sx, sy, sz) -> Mat4:
    """(x, y, z) -> (sx*x, sy*y, sz*z)"""
    m = Mat4.identity()
    m.m[0][0] = sx
    m.m[1][1] = sy
    m.m[2][2] = sz
    return m

def rotate_x(a) -> Mat4:
    """Right-handed rotation of a radians about +x."""
    c, s = math.cos(a), math.sin(a)
    m = Mat4.identity()
    m.m[1][1] = c
    m.m[1][2] = -s
    m.m[2][1] = s
    m.m[2][2] = c
    return m

def rotate_y(a) -> Mat4:
    """Right-handed rotation of a radians about +y."""
    c, s = math.cos(a), math.sin(a)
    m = Mat4.identity()
    m.m[0][0] = c
    m.m[0][2] = s
    m.m[2][0] = -s
    m.m[2][2] = c
    return m

def rotate_z(a) -> Mat4:
    """Right-handed rotation of a radians about +z."""
    c, s = math.cos(a), math.sin(a)
    m = Mat4.identity()
    m.m[0][0] = c
    m.m[0][1] = -s
    m.m[1][0] = s
    m.m[1][1] = c
    return m

def rotate_axis(axis: Vec3, a) -> Mat4:
    """
    Rotation by angle a (radians) about an arbitrary axis through the origin.

    Rodrigues' formula in matrix form. The axis is normalized here;
    a zero axis gives the identity.
    """
    k = axis.normalize()
    if k.norm() == 0.0:
        return Mat4.identity()
    c, s = math.cos(a), math.sin(a)
    t = 1.0 - c
    m = Mat4.identity()
    m.m[0][0] = t*k.x*k.x + c
    m.m[0][1] = t*k.x*k.y - s*k.z
    m.m[0][2] = t*k.x*k.z + s*k.y
    m.m[1][0] = t*k.x*k.y + s*k.z
    m.m[1][1] = t*k.y*k.y + c
    m.m[1][2] = t*k.y*k.z - s*k.x
    m.m[2][0] = t*k.x*k.z - s*k.y
    m.m[2][1] = t*k.y*k.z + s*k.x
    m.m[2][2] = t*k.z*k.z + c
    return m

def shear_xy(shx, shy) -> Mat4:
    """
    Shear parallel to the xy-plane.

    Applies: (x, y, z) -> (x + shx*z, y + shy*z, z)
    """
    m = Mat4.identity()
    m.m[0][2] = shx
    m.m[1][2] = shy
    return m
