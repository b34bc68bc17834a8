import math

import pytest

from wireview.vecmath import (
    Mat4, Vec3, Vec4, rotate_axis, rotate_x, rotate_y, rotate_z, scale, shear_xy, translate, vec3_to_vec4,
)


def approx_vec(v, expected):
    return (v.x, v.y, v.z) == pytest.approx(expected, abs=1e-12)


class TestVec3:
    """vector arithmetic"""

    def test_arithmetic(self):
        a = Vec3(1.0, 2.0, 3.0)
        b = Vec3(-1.0, 0.5, 2.0)
        assert a + b == Vec3(0.0, 2.5, 5.0)
        assert a - b == Vec3(2.0, 1.5, 1.0)
        assert a * 2 == Vec3(2.0, 4.0, 6.0)
        assert 2 * a == a * 2
        assert -a == Vec3(-1.0, -2.0, -3.0)
        assert a.dot(b) == pytest.approx(6.0)

    def test_cross_is_right_handed(self):
        x, y, z = Vec3(1, 0, 0), Vec3(0, 1, 0), Vec3(0, 0, 1)
        assert x.cross(y) == z
        assert y.cross(z) == x
        assert z.cross(x) == y

    def test_normalize(self):
        unit = Vec3(3.0, 0.0, 4.0).normalize()
        assert unit.norm() == pytest.approx(1.0)
        assert approx_vec(unit, (0.6, 0.0, 0.8))

    def test_normalize_zero_has_no_direction(self):
        assert Vec3(0.0, 0.0, 0.0).normalize() == Vec3(0.0, 0.0, 0.0)

    def test_homogeneous(self):
        p = Vec4(2.0, 4.0, -6.0, 2.0)
        assert p.homogenize() == Vec3(1.0, 2.0, -3.0)
        assert p.xyz() == Vec3(2.0, 4.0, -6.0)
        assert vec3_to_vec4(Vec3(1, 2, 3)) == Vec4(1, 2, 3, 1.0)


class TestMat4:
    """matrix construction and composition"""

    def test_identity(self):
        p = Vec4(1.0, -2.0, 3.0, 1.0)
        assert Mat4.identity().mul_vec4(p) == p

    def test_multiply_applies_rightmost_first(self):
        p = Vec4(1.0, 1.0, 1.0, 1.0)
        m = Mat4.multiply(translate(1.0, 0.0, 0.0), scale(2.0, 2.0, 2.0))
        assert m.mul_vec4(p) == Vec4(3.0, 2.0, 2.0, 1.0)
        assert m == translate(1.0, 0.0, 0.0) @ scale(2.0, 2.0, 2.0)
        assert Mat4.multiply() == Mat4.identity()

    def test_translate_ignores_directions(self):
        d = Vec4(1.0, 2.0, 3.0, 0.0)
        assert translate(5.0, 5.0, 5.0).mul_vec4(d) == d

    def test_rotations(self):
        q = math.pi / 2
        assert approx_vec(rotate_x(q).mul_vec4(Vec4(0, 1, 0, 1)), (0, 0, 1))
        assert approx_vec(rotate_y(q).mul_vec4(Vec4(0, 0, 1, 1)), (1, 0, 0))
        assert approx_vec(rotate_z(q).mul_vec4(Vec4(1, 0, 0, 1)), (0, 1, 0))

    def test_rotate_axis_matches_principal_axes(self):
        a = 0.7
        for axis, expected in ((Vec3(1, 0, 0), rotate_x(a)),
                               (Vec3(0, 3, 0), rotate_y(a)),
                               (Vec3(0, 0, 1), rotate_z(a))):
            m = rotate_axis(axis, a)
            for i in range(4):
                assert m.m[i] == pytest.approx(expected.m[i], abs=1e-12)

    def test_rotate_axis_zero_axis(self):
        assert rotate_axis(Vec3(0, 0, 0), 1.0) == Mat4.identity()

    def test_shear_xy(self):
        p = shear_xy(2.0, -1.0).mul_vec4(Vec4(1.0, 2.0, 3.0, 1.0))
        assert p == Vec4(7.0, -1.0, 3.0, 1.0)

    def test_from_rows(self):
        m = Mat4.from_rows([[1, 0, 0, 4], [0, 1, 0, 5], [0, 0, 1, 6], [0, 0, 0, 1]])
        assert m == translate(4.0, 5.0, 6.0)
        with pytest.raises(ValueError):
            Mat4.from_rows([[1, 0, 0], [0, 1, 0], [0, 0, 1]])
