import enum
import logging
from dataclasses import dataclass
from typing import Tuple

from .errors import InvalidViewConfiguration
from .vecmath import Mat4, Vec3, scale, shear_xy, translate


LOGGER = logging.getLogger(__name__)

# clip: L, R, B, T, N, F
ClipBounds = Tuple[float, float, float, float, float, float]


class ProjectionKind(enum.Enum):
    PARALLEL = "parallel"
    PERSPECTIVE = "perspective"


@dataclass(frozen=True)
class ViewParameters:
    """
    One frame's camera snapshot.

    Fields:
      prp  - projection reference point (eye)
      srp  - scene reference point (look-at target)
      vup  - view-up direction
      clip - (left, right, bottom, top, near, far) of the view volume,
             near/far measured along the negated view direction
      kind - parallel or perspective projection

    Frozen: navigation builds a new snapshot instead of mutating this one.
    """
    prp: Vec3
    srp: Vec3
    vup: Vec3
    clip: ClipBounds
    kind: ProjectionKind = ProjectionKind.PERSPECTIVE

    @property
    def z_min(self) -> float:
        """Near face of the perspective canonical volume: -near/far."""
        return -self.clip[4] / self.clip[5]

    def validate(self) -> "ViewParameters":
        """
        Check the invariants the transform builders rely on.

        Raises InvalidViewConfiguration; returns self so it can be chained.
        """
        left, right, bottom, top, near, far = self.clip
        n = self.prp - self.srp
        if n.norm() <= 1e-12:
            raise InvalidViewConfiguration("prp and srp coincide; view direction is undefined")
        if self.vup.norm() <= 1e-12:
            raise InvalidViewConfiguration("vup has zero length")
        sin_angle = self.vup.cross(n).norm() / (self.vup.norm() * n.norm())
        if sin_angle <= 1e-9:
            raise InvalidViewConfiguration("vup is parallel to the view direction")
        if not left < right:
            raise InvalidViewConfiguration(f"clip left ({left}) must be less than right ({right})")
        if not bottom < top:
            raise InvalidViewConfiguration(f"clip bottom ({bottom}) must be less than top ({top})")
        if not near < far:
            raise InvalidViewConfiguration(f"clip near ({near}) must be less than far ({far})")
        if far <= 0.0:
            raise InvalidViewConfiguration(f"clip far ({far}) must be positive")
        if self.kind is ProjectionKind.PERSPECTIVE and near <= 0.0:
            raise InvalidViewConfiguration(f"perspective clip near ({near}) must be positive")
        if near == 0.0:
            raise InvalidViewConfiguration("clip near must be non-zero")
        return self


# ============================================================
#  View reference coordinates
# ============================================================

def view_axes(prp: Vec3, srp: Vec3, vup: Vec3) -> Tuple[Vec3, Vec3, Vec3]:
    """
    View-reference axes (u, v, n).

      n = normalize(prp - srp)
      u = normalize(vup x n)
      v = n x u

    A vup parallel to n leaves u undefined (zero); see
    ViewParameters.validate().
    """
    n = (prp - srp).normalize()
    u = vup.cross(n).normalize()
    v = n.cross(u)
    return u, v, n


def _rotate_vrc(u: Vec3, v: Vec3, n: Vec3) -> Mat4:
    """Rotation whose rows are u, v, n: aligns (u, v, n) with (x, y, z)."""
    return Mat4([[u.x, u.y, u.z, 0.0],
                 [v.x, v.y, v.z, 0.0],
                 [n.x, n.y, n.z, 0.0],
                 [0.0, 0.0, 0.0, 1.0]])


def _shear_dop(clip: ClipBounds) -> Mat4:
    """
    Shear so the center of window lands on the z-axis.

    Center of window = [(L+R)/2, (T+B)/2, -near]; the PRP sits at the
    origin by now, so the direction of projection is CW itself.
    """
    left, right, bottom, top, near, _ = clip
    dop = Vec3((left + right) / 2.0, (top + bottom) / 2.0, -near)
    return shear_xy(-dop.x / dop.z, -dop.y / dop.z)


# ============================================================
#  Canonical view volume transforms
# ============================================================

def build_parallel_transform(prp: Vec3, srp: Vec3, vup: Vec3, clip: ClipBounds) -> Mat4:
    """
    N_par: world space -> parallel canonical volume.

    Bounds after the transform: x in [-1, 1], y in [-1, 1], z in [-1, 0].

    Steps (applied in this order to a point):
      1. translate PRP to origin
      2. rotate VRC so (u, v, n) align with (x, y, z)
      3. shear so CW is on the z-axis
      4. translate near clipping plane to origin
      5. scale to the canonical bounds
    """
    left, right, bottom, top, near, far = clip
    u, v, n = view_axes(prp, srp, vup)

    to_origin = translate(-prp.x, -prp.y, -prp.z)
    rotate = _rotate_vrc(u, v, n)
    shear = _shear_dop(clip)
    near_to_origin = translate(0.0, 0.0, near)
    to_canonical = scale(2.0 / (right - left),   # sx = 2 / (R - L)
                         2.0 / (top - bottom),   # sy = 2 / (T - B)
                         1.0 / far)              # sz = 1 / far

    transform = Mat4.multiply(to_canonical, near_to_origin, shear, rotate, to_origin)
    LOGGER.debug("N_par for prp=%s srp=%s: %s", prp, srp, transform)
    return transform


def build_perspective_transform(prp: Vec3, srp: Vec3, vup: Vec3, clip: ClipBounds) -> Mat4:
    """
    N_per: world space -> perspective canonical volume.

    Bounds after the transform: x in [z, -z], y in [z, -z],
    z in [-1, z_min] with z_min = -near/far.

    Steps (applied in this order to a point):
      1. translate PRP to origin
      2. rotate VRC so (u, v, n) align with (x, y, z)
      3. shear so CW is on the z-axis
      4. scale so the sheared frustum becomes the canonical pyramid
    """
    left, right, bottom, top, near, far = clip
    u, v, n = view_axes(prp, srp, vup)

    to_origin = translate(-prp.x, -prp.y, -prp.z)
    rotate = _rotate_vrc(u, v, n)
    shear = _shear_dop(clip)
    to_canonical = scale((2.0 * near) / ((right - left) * far),
                         (2.0 * near) / ((top - bottom) * far),
                         1.0 / far)

    transform = Mat4.multiply(to_canonical, shear, rotate, to_origin)
    LOGGER.debug("N_per for prp=%s srp=%s: %s", prp, srp, transform)
    return transform


def view_transform(view: ViewParameters) -> Mat4:
    """N_par or N_per for the snapshot's projection kind."""
    if view.kind is ProjectionKind.PARALLEL:
        return build_parallel_transform(view.prp, view.srp, view.vup, view.clip)
    return build_perspective_transform(view.prp, view.srp, view.vup, view.clip)


# ============================================================
#  Projections
# ============================================================

def parallel_projection() -> Mat4:
    """M_par: project a parallel image onto the z=0 plane."""
    return Mat4([[1.0, 0.0, 0.0, 0.0],
                 [0.0, 1.0, 0.0, 0.0],
                 [0.0, 0.0, 0.0, 0.0],
                 [0.0, 0.0, 0.0, 1.0]])


def perspective_projection() -> Mat4:
    """
    M_per: project a perspective image onto the z=-1 plane.

    The bottom row sets w = -z; dividing by w afterwards performs the
    foreshortening.
    """
    return Mat4([[1.0, 0.0, 0.0, 0.0],
                 [0.0, 1.0, 0.0, 0.0],
                 [0.0, 0.0, 1.0, 0.0],
                 [0.0, 0.0, -1.0, 0.0]])


def projection_matrix(kind: ProjectionKind) -> Mat4:
    if kind is ProjectionKind.PARALLEL:
        return parallel_projection()
    return perspective_projection()


def viewport(width, height) -> Mat4:
    """
    Scale the [-1, 1] image square to the framebuffer and move its
    origin to the lower-left corner: x in [0, width], y in [0, height].
    """
    return Mat4([[width / 2.0, 0.0, 0.0, width / 2.0],
                 [0.0, height / 2.0, 0.0, height / 2.0],
                 [0.0, 0.0, 1.0, 0.0],
                 [0.0, 0.0, 0.0, 1.0]])
