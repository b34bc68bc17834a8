"""
Pipeline driver: models -> canonical volume -> clip -> project -> device.

Everything here is a pure function of the view snapshot, the models, the
framebuffer size and the animation time; the only side effect is the
draw_line callback handed to draw_scene().
"""
import logging
from typing import Callable, Iterable, List, NamedTuple

from .clipping import clip_line
from .errors import DegenerateClip
from .shapes import Model
from .vecmath import Mat4, Vec4, vec3_to_vec4
from .view import ProjectionKind, ViewParameters, projection_matrix, view_transform, viewport


LOGGER = logging.getLogger(__name__)


class Segment2D(NamedTuple):
    """A device-space line segment, y growing upward from the bottom row."""
    x0: float
    y0: float
    x1: float
    y1: float


def _to_device(m: Mat4, p: Vec4):
    d = m.mul_vec4(p)
    return d.x / d.w, d.y / d.w


def project_model(model: Model,
                  transform: Mat4,
                  to_device: Mat4,
                  kind: ProjectionKind,
                  z_min: float,
                  time_s: float = 0.0) -> List[Segment2D]:
    """
    Run one model through the pipeline.

    Parameters:
      transform - N_par / N_per for the current view
      to_device - viewport @ M_par / M_per
      kind      - selects the clipper matching the canonical volume
      z_min     - near face of the perspective volume
      time_s    - animation clock, seconds since start
    """
    vm = transform @ model.transform_at(time_s)
    vertices = [vm.mul_vec4(v) for v in model.vertices]

    segments: List[Segment2D] = []
    for polyline in model.edges:
        for i0, i1 in zip(polyline, polyline[1:]):
            try:
                clipped = clip_line(vertices[i0], vertices[i1], kind, z_min)
            except DegenerateClip as exc:
                LOGGER.warning("dropping edge %d-%d: %s", i0, i1, exc)
                continue
            if clipped is None:
                continue

            # back to homogeneous points for projection
            x0, y0 = _to_device(to_device, vec3_to_vec4(clipped.p0))
            x1, y1 = _to_device(to_device, vec3_to_vec4(clipped.p1))
            segments.append(Segment2D(x0, y0, x1, y1))
    return segments


def render_scene(view: ViewParameters,
                 models: Iterable[Model],
                 width: int,
                 height: int,
                 time_s: float = 0.0) -> List[Segment2D]:
    """Device-space segments for every model, in model then edge order."""
    transform = view_transform(view)
    to_device = viewport(width, height) @ projection_matrix(view.kind)
    z_min = view.z_min if view.kind is ProjectionKind.PERSPECTIVE else 0.0

    segments: List[Segment2D] = []
    for model in models:
        segments.extend(project_model(model, transform, to_device, view.kind, z_min, time_s))
    LOGGER.debug("%s frame at t=%.3f: %d segments", view.kind.value, time_s, len(segments))
    return segments


def draw_scene(view: ViewParameters,
               models: Iterable[Model],
               width: int,
               height: int,
               draw_line: Callable[[Segment2D], None],
               time_s: float = 0.0) -> int:
    """Forward every surviving segment to draw_line; returns how many were drawn."""
    segments = render_scene(view, models, width, height, time_s)
    for seg in segments:
        draw_line(seg)
    return len(segments)
