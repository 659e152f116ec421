import numpy as np
import pytest

from holefill.core.geometry import (
    angle_between,
    newell_normal,
    polygon_signed_area,
    triangle_angles,
    triangle_area,
    triangle_normal,
    triangles_signed_areas,
)


def test_triangle_area_sign():
    assert triangle_area((0, 0), (1, 0), (0, 1)) == pytest.approx(0.5)
    assert triangle_area((0, 0), (0, 1), (1, 0)) == pytest.approx(-0.5)
    assert triangle_area((0, 0), (1, 0), (2, 0)) == 0.0


def test_triangle_angles_sum_to_180():
    angs = triangle_angles((0, 0), (1, 0), (0, 1))
    assert angs[0] == pytest.approx(90.0)
    assert angs[1] == pytest.approx(45.0)
    assert sum(angs) == pytest.approx(180.0)
    eq = triangle_angles((0, 0, 0), (1, 0, 0), (0.5, np.sqrt(3) / 2, 0))
    assert eq == pytest.approx([60.0, 60.0, 60.0])


def test_triangle_normal():
    n, area = triangle_normal((0, 0, 0), (2, 0, 0), (0, 2, 0))
    assert n == pytest.approx([0, 0, 1])
    assert area == pytest.approx(2.0)
    n, area = triangle_normal((0, 0, 0), (1, 1, 1), (2, 2, 2))
    assert not np.any(n)
    assert area == 0.0


def test_angle_between():
    assert angle_between((1, 0, 0), (0, 1, 0)) == pytest.approx(90.0)
    assert angle_between((1, 0, 0), (-1, 0, 0)) == pytest.approx(180.0)
    assert angle_between((0, 0, 0), (1, 0, 0)) == 0.0


def test_polygon_signed_area():
    square = [(0, 0), (1, 0), (1, 1), (0, 1)]
    assert polygon_signed_area(square) == pytest.approx(1.0)
    assert polygon_signed_area(square[::-1]) == pytest.approx(-1.0)
    assert polygon_signed_area(square[:2]) == 0.0


def test_newell_normal():
    ring = [(0, 0, 3), (1, 0, 3), (1, 1, 3), (0, 1, 3)]
    assert newell_normal(ring) == pytest.approx([0, 0, 1])
    assert newell_normal(ring[::-1]) == pytest.approx([0, 0, -1])
    assert not np.any(newell_normal([(0, 0, 0), (1, 0, 0), (2, 0, 0)]))


def test_triangles_signed_areas_batch():
    pts = np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=float)
    areas = triangles_signed_areas(pts, np.array([[0, 1, 2], [0, 3, 2]]))
    assert areas == pytest.approx([0.5, -0.5])
