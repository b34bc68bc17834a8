"""Wireframe viewing pipeline: canonical-volume transforms, 3D line clipping, projection."""

from .clipping import clip_line, clip_line_parallel, clip_line_perspective, outcode_parallel, outcode_perspective
from .errors import DegenerateClip, InvalidViewConfiguration, SceneFormatError, WireviewError
from .pipeline import Segment2D, draw_scene, render_scene
from .scene import Scene, load_scene, parse_scene
from .shapes import Model
from .vecmath import Mat4, Vec3, Vec4
from .view import (
    ProjectionKind,
    ViewParameters,
    build_parallel_transform,
    build_perspective_transform,
    parallel_projection,
    perspective_projection,
)

__all__ = [
    "DegenerateClip",
    "InvalidViewConfiguration",
    "Mat4",
    "Model",
    "ProjectionKind",
    "Scene",
    "SceneFormatError",
    "Segment2D",
    "Vec3",
    "Vec4",
    "ViewParameters",
    "WireviewError",
    "build_parallel_transform",
    "build_perspective_transform",
    "clip_line",
    "clip_line_parallel",
    "clip_line_perspective",
    "draw_scene",
    "load_scene",
    "outcode_parallel",
    "outcode_perspective",
    "parallel_projection",
    "parse_scene",
    "perspective_projection",
    "render_scene",
]
