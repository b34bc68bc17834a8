import pytest

from wireview.errors import SceneFormatError
from wireview.shapes import (
    Animation, Cone, Cube, Cylinder, GenericShape, Model, Shape, Sphere, build_model, shape_types,
)
from wireview.vecmath import Mat4, Vec3, Vec4, translate


ORIGIN = Vec3(0.0, 0.0, 0.0)


def segments(edges):
    return sum(len(p) - 1 for p in edges)


class TestShapes:
    """procedural wireframe generators"""

    def test_registry(self):
        assert shape_types() == ["cone", "cube", "cylinder", "generic", "sphere"]
        assert Shape.registry["cube"] is Cube

    def test_cube(self):
        vertices, edges = Cube(Vec3(1.0, 2.0, 3.0), 2.0, 4.0, 6.0).to_vertex_edge_list()
        assert len(vertices) == 8
        assert segments(edges) == 12
        assert min(v.x for v in vertices) == 0.0 and max(v.x for v in vertices) == 2.0
        assert min(v.y for v in vertices) == 0.0 and max(v.y for v in vertices) == 4.0
        assert min(v.z for v in vertices) == 0.0 and max(v.z for v in vertices) == 6.0
        assert all(v.w == 1.0 for v in vertices)

    def test_cylinder(self):
        vertices, edges = Cylinder(ORIGIN, 2.0, 4.0, 8).to_vertex_edge_list()
        assert len(vertices) == 16
        assert segments(edges) == 8 * 3
        assert {round(v.y, 9) for v in vertices} == {2.0, -2.0}
        for v in vertices:
            assert (v.x ** 2 + v.z ** 2) == pytest.approx(4.0)

    def test_cone(self):
        vertices, edges = Cone(ORIGIN, 1.0, 3.0, 6).to_vertex_edge_list()
        assert len(vertices) == 7
        assert vertices[-1] == Vec4(0.0, 1.5, 0.0, 1.0)
        assert segments(edges) == 6 * 2
        assert all(v.y == -1.5 for v in vertices[:-1])

    def test_sphere(self):
        vertices, edges = Sphere(Vec3(0.0, 1.0, 0.0), 2.0, 6, 4).to_vertex_edge_list()
        assert len(vertices) == 2 + 3 * 6
        assert vertices[0] == Vec4(0.0, 3.0, 0.0, 1.0)
        assert vertices[1] == Vec4(0.0, -1.0, 0.0, 1.0)
        for v in vertices:
            assert (v.x ** 2 + (v.y - 1.0) ** 2 + v.z ** 2) == pytest.approx(4.0)
        rings, meridians = edges[:3], edges[3:]
        assert len(meridians) == 6
        assert all(m[0] == 0 and m[-1] == 1 and len(m) == 5 for m in meridians)
        assert all(r[0] == r[-1] for r in rings)

    @pytest.mark.parametrize("shape", [
        Cube(ORIGIN, 0.0, 1.0, 1.0),
        Cylinder(ORIGIN, 1.0, 1.0, 2),
        Cone(ORIGIN, -1.0, 1.0, 8),
        Sphere(ORIGIN, 1.0, 8, 1),
        GenericShape([Vec4(0, 0, 0, 1)], [[0, 1]]),
    ])
    def test_invalid(self, shape):
        with pytest.raises(SceneFormatError):
            shape.to_vertex_edge_list()


class TestModel:
    """local transforms and animation"""

    def test_static_model_uses_matrix(self):
        m = translate(1.0, 2.0, 3.0)
        model = build_model(Cube(ORIGIN, 1.0, 1.0, 1.0), matrix=m)
        assert model.transform_at(0.0) is m
        assert model.transform_at(5.0) is m

    def test_default_matrix_is_identity(self):
        model = build_model(Cone(ORIGIN, 1.0, 1.0, 3))
        assert model.matrix == Mat4.identity()
        assert model.center == ORIGIN

    def test_animation_spins_about_center(self):
        model = Model(vertices=[Vec4(2.0, 0.0, 0.0, 1.0)],
                      edges=[],
                      animation=Animation("y", 0.25),
                      center=Vec3(1.0, 0.0, 0.0))
        p = model.transform_at(1.0).mul_vec4(model.vertices[0])
        assert (p.x, p.y, p.z) == pytest.approx((1.0, 0.0, -1.0))
        p = model.transform_at(0.0).mul_vec4(model.vertices[0])
        assert (p.x, p.y, p.z) == pytest.approx((2.0, 0.0, 0.0))

    def test_bad_axis(self):
        with pytest.raises(SceneFormatError):
            Animation("w", 1.0)
