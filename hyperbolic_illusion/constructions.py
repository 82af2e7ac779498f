"""Elementary ruler-and-compass constructions in the Euclidean plane.

These are the building blocks the tiling generator uses to fit circles
to the edges and vertices of the fundamental triangle. All of them
work on single `Complex` points, except for `inside_triangle_array`,
which is the vectorized version of `inside_triangle` used when
classifying samples.

"""

from collections import namedtuple
import math

import numpy as np

from hyperbolic_illusion.base import DegenerateGeometryError
from hyperbolic_illusion.complex_plane import Complex

#determinants, distances and discriminants below this are treated as
#zero
DEGENERACY_THRESHOLD = 1e-12

class Circle(namedtuple("Circle", ["center", "radius"])):
    """A Euclidean circle, given by a `Complex` center and a radius."""
    __slots__ = ()

    def contains(self, point):
        """Check whether a point lies (strictly) inside this circle."""
        return (point - self.center).normsq() < self.radius * self.radius

def circle_through_points(p1, p2, p3):
    """Find the unique circle passing through three points.

    Parameters
    ----------
    p1, p2, p3 : Complex
        three points in the plane

    Returns
    -------
    Circle
        the circumscribed circle of the three points

    Raises
    ------
    DegenerateGeometryError
        Raised if the points are (numerically) collinear.

    """
    a = p1.x - p2.x
    b = p1.y - p2.y
    c = p1.x - p3.x
    d = p1.y - p3.y
    e = (p1.normsq() - p2.normsq()) * 0.5
    f = (p1.normsq() - p3.normsq()) * 0.5

    det = a * d - b * c
    if abs(det) < DEGENERACY_THRESHOLD:
        raise DegenerateGeometryError(
            "Cannot fit a circle through collinear points {}, {}, {}".format(
                p1, p2, p3)
        )

    center = Complex((d * e - b * f) / det, (-c * e + a * f) / det)
    return Circle(center, (center - p1).norm())

def circle_circle_intersections(c1, r1, c2, r2):
    """Intersect two circles.

    Parameters
    ----------
    c1, c2 : Complex
        centers of the circles
    r1, r2 : float
        radii of the circles

    Returns
    -------
    list(Complex)
        Empty if the circles are disjoint, nested or coincident; a
        single point if they are tangent; otherwise the two
        intersection points, the first one lying to the left of the
        ray from c1 to c2.

    """
    offset = c2 - c1
    dist = offset.norm()

    if (dist > r1 + r2 or dist < abs(r1 - r2) or
        dist < DEGENERACY_THRESHOLD):
        return []

    # distance from c1 to the midpoint of the common chord
    along = (r1 * r1 - r2 * r2 + dist * dist) / (2 * dist)
    h_sq = max(r1 * r1 - along * along, 0.)

    midpoint = c1 + offset * (along / dist)
    perp = Complex(-offset.y, offset.x).normalized()
    h = math.sqrt(h_sq)

    i1 = midpoint + perp * h
    i2 = midpoint - perp * h

    if h < DEGENERACY_THRESHOLD:
        return [i1]

    return [i1, i2]

def _barycentric(px, py, a, b, c):
    denominator = ((b.y - c.y) * (a.x - c.x) +
                   (c.x - b.x) * (a.y - c.y))

    alpha = ((b.y - c.y) * (px - c.x) +
             (c.x - b.x) * (py - c.y)) / denominator
    beta = ((c.y - a.y) * (px - c.x) +
            (a.x - c.x) * (py - c.y)) / denominator

    return alpha, beta, 1 - alpha - beta

def _triangle_degenerate(a, b, c):
    denominator = ((b.y - c.y) * (a.x - c.x) +
                   (c.x - b.x) * (a.y - c.y))
    return abs(denominator) < DEGENERACY_THRESHOLD

def inside_triangle(point, a, b, c):
    """Check whether a point lies in the (closed) Euclidean triangle
    with vertices a, b, c.

    Points on the boundary count as inside. A degenerate triangle
    contains nothing.

    """
    if _triangle_degenerate(a, b, c):
        return False

    alpha, beta, gamma = _barycentric(point.x, point.y, a, b, c)
    return alpha >= 0 and beta >= 0 and gamma >= 0

def inside_triangle_array(points, a, b, c):
    """Vectorized version of `inside_triangle`.

    Parameters
    ----------
    points : ndarray of complex
        points to test
    a, b, c : Complex
        vertices of the triangle

    Returns
    -------
    ndarray of bool
        same shape as `points`.

    """
    points = np.asarray(points)
    if _triangle_degenerate(a, b, c):
        return np.zeros(points.shape, dtype=bool)

    alpha, beta, gamma = _barycentric(points.real, points.imag, a, b, c)
    return (alpha >= 0) & (beta >= 0) & (gamma >= 0)

def intersect_circle_with_origin_line(center, radius, direction):
    """Intersect a circle with the line through the origin in a given
    direction.

    The line is described by its normal (direction.y, -direction.x).

    Parameters
    ----------
    center : Complex
        center of the circle
    radius : float
        radius of the circle
    direction : Complex
        direction of the line

    Returns
    -------
    Complex or None
        Whichever intersection point is closer to the origin, or
        `None` if the line misses the circle.

    """
    nx = direction.y
    ny = -direction.x

    if abs(ny) > DEGENERACY_THRESHOLD:
        slope = -nx / ny

        # substitute y = slope * x into the equation of the circle
        qa = 1 + slope * slope
        qb = -2 * (center.x + slope * center.y)
        qc = center.normsq() - radius * radius

        disc = qb * qb - 4 * qa * qc
        if disc < 0:
            return None

        x1 = (-qb + math.sqrt(disc)) / (2 * qa)
        x2 = (-qb - math.sqrt(disc)) / (2 * qa)
        cand1 = Complex(x1, slope * x1)
        cand2 = Complex(x2, slope * x2)
    else:
        # the line is x = 0
        rad_term = max(radius * radius - center.x * center.x, 0.)

        cand1 = Complex(0., center.y + math.sqrt(rad_term))
        cand2 = Complex(0., center.y - math.sqrt(rad_term))

    if cand1.norm() < cand2.norm():
        return cand1
    return cand2
