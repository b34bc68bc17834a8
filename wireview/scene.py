"""
JSON scene loading.

Scene layout:

    {
      "view": {"type": "perspective" | "parallel",
               "prp": [x, y, z], "srp": [x, y, z], "vup": [x, y, z],
               "clip": [left, right, bottom, top, near, far]},
      "models": [{"type": "generic" | "cube" | "cylinder" | "cone" | "sphere", ...}]
    }

Every model may also carry "matrix" (4x4 rows) and
"animation" ({"axis": "x" | "y" | "z", "rps": float}).
"""
import json
import logging
import os
from dataclasses import dataclass, fields
from typing import Any, List, Mapping, Union

from .errors import SceneFormatError
from .shapes import Animation, GenericShape, Model, Shape, build_model, shape_types
from .vecmath import Mat4, Vec3, Vec4
from .view import ProjectionKind, ViewParameters


LOGGER = logging.getLogger(__name__)


@dataclass
class Scene:
    view: ViewParameters
    models: List[Model]


def _get(data: Mapping[str, Any], key: str, where: str):
    try:
        return data[key]
    except (KeyError, TypeError):
        raise SceneFormatError(f"{where}: missing '{key}'") from None


def _number(value, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneFormatError(f"{where}: expected a number, got {value!r}")
    return float(value)


def _list(value, where: str) -> list:
    if not isinstance(value, list):
        raise SceneFormatError(f"{where}: expected a list, got {value!r}")
    return value


def _vec3(value, where: str) -> Vec3:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise SceneFormatError(f"{where}: expected [x, y, z], got {value!r}")
    return Vec3(*(_number(v, where) for v in value))


def _vertex(value, where: str) -> Vec4:
    # scenes may list [x, y, z] or [x, y, z, w]; w is always reset to 1
    if not isinstance(value, (list, tuple)) or len(value) not in (3, 4):
        raise SceneFormatError(f"{where}: expected [x, y, z] or [x, y, z, w], got {value!r}")
    x, y, z = (_number(v, where) for v in value[:3])
    return Vec4(x, y, z, 1.0)


def parse_view(data: Mapping[str, Any]) -> ViewParameters:
    """Build and validate the camera snapshot from the scene's "view" entry."""
    kind_name = _get(data, "type", "view")
    try:
        kind = ProjectionKind(kind_name)
    except ValueError:
        raise SceneFormatError(f"view: unknown projection type {kind_name!r}") from None

    clip = _get(data, "clip", "view")
    if not isinstance(clip, (list, tuple)) or len(clip) != 6:
        raise SceneFormatError(f"view.clip: expected 6 numbers, got {clip!r}")

    view = ViewParameters(prp=_vec3(_get(data, "prp", "view"), "view.prp"),
                          srp=_vec3(_get(data, "srp", "view"), "view.srp"),
                          vup=_vec3(_get(data, "vup", "view"), "view.vup"),
                          clip=tuple(_number(v, "view.clip") for v in clip),
                          kind=kind)
    return view.validate()


def _shape_args(cls, data: Mapping[str, Any], where: str) -> dict:
    args = {}
    for f in fields(cls):
        if f.name == "center":
            args["center"] = _vec3(_get(data, "center", where), f"{where}.center")
        elif f.type in (int, "int"):
            value = _get(data, f.name, where)
            if isinstance(value, bool) or not isinstance(value, int):
                raise SceneFormatError(f"{where}.{f.name}: expected an integer, got {value!r}")
            args[f.name] = value
        else:
            args[f.name] = _number(_get(data, f.name, where), f"{where}.{f.name}")
    return args


def _centroid(vertices: List[Vec4]) -> Vec3:
    if not vertices:
        return Vec3(0.0, 0.0, 0.0)
    k = 1.0 / len(vertices)
    return Vec3(sum(v.x for v in vertices) * k,
                sum(v.y for v in vertices) * k,
                sum(v.z for v in vertices) * k)


def parse_model(data: Mapping[str, Any], index: int = 0) -> Model:
    """Build one pipeline-ready model from a scene "models" entry."""
    where = f"models[{index}]"
    type_name = _get(data, "type", where)
    cls = Shape.registry.get(type_name) if isinstance(type_name, str) else None
    if cls is None:
        raise SceneFormatError(f"{where}: unknown model type {type_name!r}, "
                               f"expected one of {', '.join(shape_types())}")

    if cls is GenericShape:
        raw = _list(_get(data, "vertices", where), f"{where}.vertices")
        vertices = [_vertex(v, f"{where}.vertices") for v in raw]
        edges = _list(_get(data, "edges", where), f"{where}.edges")
        if not all(isinstance(p, list) and all(isinstance(i, int) for i in p) for p in edges):
            raise SceneFormatError(f"{where}.edges: expected lists of vertex indices")
        center = _vec3(data["center"], f"{where}.center") if "center" in data else _centroid(vertices)
        shape = GenericShape(vertices=vertices, edges=edges, center=center)
    else:
        shape = cls(**_shape_args(cls, data, where))

    matrix = None
    if "matrix" in data:
        try:
            matrix = Mat4.from_rows(data["matrix"])
        except (TypeError, ValueError) as exc:
            raise SceneFormatError(f"{where}.matrix: {exc}") from None

    animation = None
    if "animation" in data:
        anim = data["animation"]
        animation = Animation(axis=_get(anim, "axis", f"{where}.animation"),
                              rps=_number(_get(anim, "rps", f"{where}.animation"),
                                          f"{where}.animation.rps"))

    return build_model(shape, matrix=matrix, animation=animation)


def parse_scene(data: Mapping[str, Any]) -> Scene:
    view = parse_view(_get(data, "view", "scene"))
    entries = _list(_get(data, "models", "scene"), "scene.models")
    models = [parse_model(m, i) for i, m in enumerate(entries)]
    return Scene(view=view, models=models)


def load_scene(path: Union[str, os.PathLike]) -> Scene:
    """
    Read a scene file.

    Raises SceneFormatError for malformed JSON or content,
    InvalidViewConfiguration for an unusable camera, and OSError if the
    file cannot be read.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise SceneFormatError(f"{path}: {exc}") from None
    scene = parse_scene(data)
    LOGGER.info("loaded %s: %s view, %d models", path, scene.view.kind.value, len(scene.models))
    return scene


def default_scene() -> Scene:
    """The house-shaped scene shown when no scene file is given."""
    return parse_scene({
        "view": {
            "type": "perspective",
            "prp": [44, 20, -16],
            "srp": [20, 20, -40],
            "vup": [0, 1, 0],
            "clip": [-19, 5, -10, 8, 12, 100],
        },
        "models": [
            {
                "type": "generic",
                "vertices": [
                    [0, 0, -30], [20, 0, -30], [20, 12, -30], [10, 20, -30], [0, 12, -30],
                    [0, 0, -60], [20, 0, -60], [20, 12, -60], [10, 20, -60], [0, 12, -60],
                ],
                "edges": [
                    [0, 1, 2, 3, 4, 0],
                    [5, 6, 7, 8, 9, 5],
                    [0, 5], [1, 6], [2, 7], [3, 8], [4, 9],
                ],
            }
        ],
    })
