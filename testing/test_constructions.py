import pytest
import numpy as np

from hyperbolic_illusion.base import DegenerateGeometryError
from hyperbolic_illusion.complex_plane import Complex, ZERO
from hyperbolic_illusion.constructions import (
    Circle,
    circle_through_points,
    circle_circle_intersections,
    inside_triangle,
    inside_triangle_array,
    intersect_circle_with_origin_line
)

from hyperbolic_illusion.utils.testing import *

@pytest.fixture
def triangle():
    return (Complex(0., 0.), Complex(2., 0.), Complex(0.5, 1.5))

def test_circle_through_points():
    circle = circle_through_points(Complex(1., 0.), Complex(0., 1.),
                                   Complex(-1., 0.))
    assert_circle_close(circle, Circle(ZERO, 1.))

    circle = circle_through_points(Complex(3., 2.), Complex(1., 4.),
                                   Complex(-1., 2.))
    for point in [Complex(3., 2.), Complex(1., 4.), Complex(-1., 2.)]:
        assert_on_circle(point, circle)

def test_collinear_points():
    with pytest.raises(DegenerateGeometryError):
        circle_through_points(Complex(0., 0.), Complex(1., 1.),
                              Complex(2., 2.))

def test_circle_contains():
    circle = Circle(Complex(1., 1.), 1.)
    assert circle.contains(Complex(1.5, 1.5))
    assert not circle.contains(ZERO)

def test_two_intersections():
    points = circle_circle_intersections(ZERO, 1., Complex(1., 0.), 1.)
    assert len(points) == 2

    # the first point is to the left of the ray between the centers
    assert_complex_close(points[0], Complex(0.5, np.sqrt(3) / 2))
    assert_complex_close(points[1], Complex(0.5, -np.sqrt(3) / 2))

def test_tangent_circles():
    points = circle_circle_intersections(ZERO, 1., Complex(3., 0.), 2.)
    assert len(points) == 1
    assert_complex_close(points[0], Complex(1., 0.))

def test_no_intersections():
    # identical
    assert circle_circle_intersections(Complex(1., 2.), 3.,
                                       Complex(1., 2.), 3.) == []
    # disjoint
    assert circle_circle_intersections(ZERO, 1., Complex(5., 0.), 1.) == []
    # nested
    assert circle_circle_intersections(ZERO, 5., Complex(1., 0.), 1.) == []

def test_inside_triangle(triangle):
    a, b, c = triangle
    centroid = (a + b + c) / 3

    assert inside_triangle(centroid, a, b, c)
    assert inside_triangle(a, a, b, c)
    assert not inside_triangle(Complex(10., 10.), a, b, c)
    assert not inside_triangle(Complex(1., -0.1), a, b, c)

def test_degenerate_triangle():
    a, b, c = Complex(0., 0.), Complex(1., 1.), Complex(3., 3.)
    assert not inside_triangle(Complex(1., 1.), a, b, c)
    assert not inside_triangle(Complex(0.5, 0.2), a, b, c)
    assert not np.any(inside_triangle_array(np.array([1 + 1j, 0.]), a, b, c))

def test_inside_triangle_array(triangle):
    xs, ys = np.meshgrid(np.linspace(-0.5, 2.5, 13),
                         np.linspace(-0.5, 2., 11))
    points = xs + 1j * ys

    inside = inside_triangle_array(points, *triangle)
    expected = np.array([[inside_triangle(Complex(x, y), *triangle)
                          for x, y in zip(x_row, y_row)]
                         for x_row, y_row in zip(xs, ys)])

    assert inside.shape == points.shape
    assert np.array_equal(inside, expected)

def test_circle_line_intersection():
    point = intersect_circle_with_origin_line(Complex(2., 0.), 1.,
                                              Complex(1., 0.))
    assert_complex_close(point, Complex(1., 0.))

    point = intersect_circle_with_origin_line(Complex(2., 2.), 1.,
                                              Complex(1., 1.).normalized())
    assert_complex_close(point, Complex(1., 1.) * (2. - 1 / np.sqrt(2)))

    # vertical line
    point = intersect_circle_with_origin_line(Complex(0., 2.), 1.,
                                              Complex(0., 1.))
    assert_complex_close(point, Complex(0., 1.))

def test_circle_line_miss():
    assert intersect_circle_with_origin_line(Complex(0., 5.), 1.,
                                             Complex(1., 0.)) is None
