"""
3D Cohen-Sutherland line clipping against the canonical view volumes.

Parallel volume:     x in [-1, 1],  y in [-1, 1],  z in [-1, 0]
Perspective volume:  x in [z, -z],  y in [z, -z],  z in [-1, z_min]

Every boundary test is widened by FLOAT_EPSILON, and a clipped endpoint is
snapped exactly onto the face it was clipped against, so a point that was
just clipped is never classified outside that face again. A face is only
clipped when the other endpoint lies inside it (otherwise the segment is
rejected), so each face is clipped at most once and the loop is bounded by
MAX_CLIPS.
"""
import math
from typing import Callable, NamedTuple, Optional, Tuple

from .errors import DegenerateClip
from .view import ProjectionKind
from .vecmath import Vec3


LEFT = 32    # binary 100000
RIGHT = 16   # binary 010000
BOTTOM = 8   # binary 001000
TOP = 4      # binary 000100
FAR = 2      # binary 000010
NEAR = 1     # binary 000001

FLOAT_EPSILON = 0.000001

# Which violated face gets clipped first.
FACE_PRIORITY = (LEFT, RIGHT, BOTTOM, TOP, FAR, NEAR)

MAX_CLIPS = len(FACE_PRIORITY)


class Segment3(NamedTuple):
    """A line segment inside (or on the boundary of) a canonical volume."""
    p0: Vec3
    p1: Vec3


# ============================================================
#  Outcodes
# ============================================================

def outcode_parallel(p) -> int:
    """Outcode of p against the parallel canonical volume."""
    outcode = 0
    if p.x < (-1.0 - FLOAT_EPSILON):
        outcode |= LEFT
    elif p.x > (1.0 + FLOAT_EPSILON):
        outcode |= RIGHT
    if p.y < (-1.0 - FLOAT_EPSILON):
        outcode |= BOTTOM
    elif p.y > (1.0 + FLOAT_EPSILON):
        outcode |= TOP
    if p.z < (-1.0 - FLOAT_EPSILON):
        outcode |= FAR
    elif p.z > (0.0 + FLOAT_EPSILON):
        outcode |= NEAR
    return outcode


def outcode_perspective(p, z_min: float) -> int:
    """Outcode of p against the perspective canonical volume (a pyramid)."""
    outcode = 0
    if p.x < (p.z - FLOAT_EPSILON):
        outcode |= LEFT
    elif p.x > (-p.z + FLOAT_EPSILON):
        outcode |= RIGHT
    if p.y < (p.z - FLOAT_EPSILON):
        outcode |= BOTTOM
    elif p.y > (-p.z + FLOAT_EPSILON):
        outcode |= TOP
    if p.z < (-1.0 - FLOAT_EPSILON):
        outcode |= FAR
    elif p.z > (z_min + FLOAT_EPSILON):
        outcode |= NEAR
    return outcode


def first_face(outcode: int) -> int:
    """Highest-priority face bit set in outcode (0 if none)."""
    for face in FACE_PRIORITY:
        if outcode & face:
            return face
    return 0


# ============================================================
#  Intersections
# ============================================================

def _solve_t(num: float, den: float, face: int) -> float:
    if den == 0.0:
        # runs parallel to the plane, never crosses it
        return math.inf
    t = num / den
    if math.isnan(t):
        raise DegenerateClip(f"undefined intersection parameter for face {face:#08b}")
    return t


def _lerp(p0: Vec3, p1: Vec3, t: float) -> Vec3:
    return Vec3((1.0 - t) * p0.x + t * p1.x,
                (1.0 - t) * p0.y + t * p1.y,
                (1.0 - t) * p0.z + t * p1.z)


def crossing_parallel(p0: Vec3, p1: Vec3, face: int) -> Tuple[float, Vec3]:
    """(t, point) where the line through p0->p1 crosses a parallel-volume face."""
    if face in (LEFT, RIGHT):
        x = -1.0 if face == LEFT else 1.0
        t = _solve_t(x - p0.x, p1.x - p0.x, face)
        p = _lerp(p0, p1, t)
        return t, Vec3(x, p.y, p.z)
    if face in (BOTTOM, TOP):
        y = -1.0 if face == BOTTOM else 1.0
        t = _solve_t(y - p0.y, p1.y - p0.y, face)
        p = _lerp(p0, p1, t)
        return t, Vec3(p.x, y, p.z)
    if face in (FAR, NEAR):
        z = -1.0 if face == FAR else 0.0
        t = _solve_t(z - p0.z, p1.z - p0.z, face)
        p = _lerp(p0, p1, t)
        return t, Vec3(p.x, p.y, z)
    raise ValueError(f"unknown face {face!r}")


def crossing_perspective(p0: Vec3, p1: Vec3, face: int, z_min: float) -> Tuple[float, Vec3]:
    """
    (t, point) where the line through p0->p1 crosses a perspective-volume face.

    Planes: LEFT x=z, RIGHT x=-z, BOTTOM y=z, TOP y=-z, FAR z=-1,
    NEAR z=z_min.
    """
    dx = p1.x - p0.x
    dy = p1.y - p0.y
    dz = p1.z - p0.z
    if face == LEFT:
        t = _solve_t(p0.z - p0.x, dx - dz, face)
        p = _lerp(p0, p1, t)
        return t, Vec3(p.z, p.y, p.z)
    if face == RIGHT:
        t = _solve_t(p0.x + p0.z, -dx - dz, face)
        p = _lerp(p0, p1, t)
        return t, Vec3(-p.z, p.y, p.z)
    if face == BOTTOM:
        t = _solve_t(p0.z - p0.y, dy - dz, face)
        p = _lerp(p0, p1, t)
        return t, Vec3(p.x, p.z, p.z)
    if face == TOP:
        t = _solve_t(p0.y + p0.z, -dy - dz, face)
        p = _lerp(p0, p1, t)
        return t, Vec3(p.x, -p.z, p.z)
    if face == FAR:
        t = _solve_t(-1.0 - p0.z, dz, face)
        p = _lerp(p0, p1, t)
        return t, Vec3(p.x, p.y, -1.0)
    if face == NEAR:
        t = _solve_t(z_min - p0.z, dz, face)
        p = _lerp(p0, p1, t)
        return t, Vec3(p.x, p.y, z_min)
    raise ValueError(f"unknown face {face!r}")


# ============================================================
#  Clipping loop
# ============================================================

def _clip(p0: Vec3, p1: Vec3,
          outcode: Callable[[Vec3], int],
          crossing: Callable[[Vec3, Vec3, int], Tuple[float, Vec3]]) -> Optional[Segment3]:
    """
    Iterate until the segment is trivially accepted or rejected.

    The endpoint being clipped is always kept in p0 (the first endpoint
    when both are outside); the result is handed back in the caller's
    endpoint order. A crossing outside [0, 1] means p1 lies outside the
    same face as p0, so nothing of the segment is visible. Outcodes cannot
    show that for points behind the eye, which violate LEFT and RIGHT at
    once but only record one of them.
    """
    out0 = outcode(p0)
    out1 = outcode(p1)
    swapped = False

    for clips in range(MAX_CLIPS + 1):
        if (out0 | out1) == 0:
            return Segment3(p1, p0) if swapped else Segment3(p0, p1)
        if (out0 & out1) != 0:
            return None
        if clips == MAX_CLIPS:
            break

        if out0 == 0:
            p0, p1 = p1, p0
            out0, out1 = out1, out0
            swapped = not swapped

        t, p0 = crossing(p0, p1, first_face(out0))
        if not (-FLOAT_EPSILON <= t <= 1.0 + FLOAT_EPSILON):
            return None
        out0 = outcode(p0)
        out1 = outcode(p1)

    raise DegenerateClip(f"segment did not settle after {MAX_CLIPS} clips: {p0} -> {p1}")


def clip_line_parallel(p0, p1) -> Optional[Segment3]:
    """
    Clip a segment to the parallel canonical volume.

    Returns the (possibly shortened) segment, or None when the segment
    lies completely outside. Raises DegenerateClip on arithmetic failure.
    """
    return _clip(Vec3(p0.x, p0.y, p0.z), Vec3(p1.x, p1.y, p1.z),
                 outcode_parallel, crossing_parallel)


def clip_line_perspective(p0, p1, z_min: float) -> Optional[Segment3]:
    """
    Clip a segment to the perspective canonical volume with near face
    z = z_min. Same contract as clip_line_parallel().
    """
    return _clip(Vec3(p0.x, p0.y, p0.z), Vec3(p1.x, p1.y, p1.z),
                 lambda p: outcode_perspective(p, z_min),
                 lambda a, b, face: crossing_perspective(a, b, face, z_min))


def clip_line(p0, p1, kind: ProjectionKind, z_min: float = 0.0) -> Optional[Segment3]:
    if kind is ProjectionKind.PARALLEL:
        return clip_line_parallel(p0, p1)
    return clip_line_perspective(p0, p1, z_min)
