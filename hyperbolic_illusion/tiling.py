r"""Compute the geometry of a regular tiling of the hyperbolic plane.

A regular tiling with Schlafli symbol {p, q} (regular p-gons, q
meeting at each vertex) is generated by reflections in the sides of a
hyperbolic triangle with angles pi/p, pi/q and pi/2. In the Poincare
disk we place this triangle so that:

- the vertex V0 (angle pi/p) is at the origin,
- the side V0V1 lies on the positive real axis,
- the side V2V0 lies on the ray at angle pi/p,
- the side V1V2 lies on a circle orthogonal to the unit circle (the
  "inversion circle"), with V1 the point of that circle closest to
  the origin.

The function `generate_tiling_params` computes this triangle together
with all of the auxiliary circles needed to draw thick edges, rounded
vertices and vertex ornaments:

```python
from hyperbolic_illusion import tiling

params = tiling.generate_tiling_params(4, 5, 0.02)
params.v1, params.thick_edge_01.radius
```

Every auxiliary circle is built in a canonical frame for one of the
triangle's edges: a Mobius transformation sending the edge to the real
axis, under which "thickening the edge by t" means taking the circle
through -1, 1 and the point (0, t).

"""

from dataclasses import dataclass, field
from functools import lru_cache
import logging
import math

from hyperbolic_illusion.base import InvalidTilingError, DegenerateGeometryError
from hyperbolic_illusion.complex_plane import Complex, versor, ZERO
from hyperbolic_illusion.constructions import (
    Circle,
    circle_through_points,
    circle_circle_intersections,
    inside_triangle,
    intersect_circle_with_origin_line
)
from hyperbolic_illusion.mobius import MobiusTransform

logger = logging.getLogger(__name__)

#shape of the triangular vertex ornaments
ORNAMENT_LENGTH_RATIO = 0.6
ORNAMENT_ANGLE_RATIO = 0.6

#distance of the ornament tip D from its vertex, relative to the edge
#thickness
ORNAMENT_SCALE = 4.

POINT_FIELDS = ("inv_cen", "ref_nrm", "v0", "v1", "v2",
                "d", "e", "d1", "e1", "d1p", "e1p", "d2", "e2")

CIRCLE_FIELDS = ("thick_edge_01", "thick_edge_12", "thick_edge_20",
                 "tri_v0_enlarged", "tri_v1_enlarged", "tri_v2_enlarged",
                 "v0_enlarged", "v2_enlarged", "c2_rot_snakes")

@dataclass(frozen=True)
class TilingDescriptor:
    """Geometric data for the fundamental triangle of a {p, q} tiling.

    Instances are produced by `generate_tiling_params`, and are never
    modified: changing p, q or the edge thickness means computing a
    new descriptor.

    """
    p: int
    q: int
    e_thickness: float

    inv_cen: Complex
    inv_rad: float
    ref_nrm: Complex

    v0: Complex
    v1: Complex
    v2: Complex

    d: Complex
    e: Complex
    d1: Complex
    e1: Complex
    d1p: Complex
    e1p: Complex
    d2: Complex
    e2: Complex

    thick_edge_01: Circle
    thick_edge_12: Circle
    thick_edge_20: Circle

    tri_v0_enlarged: Circle
    tri_v1_enlarged: Circle
    tri_v2_enlarged: Circle

    v0_enlarged: Circle
    v2_enlarged: Circle

    c2_rot_snakes: Circle

    edge_maps: dict = field(default_factory=dict, repr=False,
                            compare=False)

    @property
    def inversion_circle(self):
        return Circle(self.inv_cen, self.inv_rad)

    @property
    def vertices(self):
        return (self.v0, self.v1, self.v2)

    def ornament_triangles(self):
        """Get the vertices of the four ornament triangles: one at V0, two
        at V1 and one at V2.

        """
        return ((self.v0, self.d, self.e),
                (self.v1, self.d1, self.e1),
                (self.v1, self.d1p, self.e1p),
                (self.v2, self.d2, self.e2))

    def as_dict(self):
        """Flatten this descriptor to a mapping of named scalars and 2d
        vectors.

        Points become `[x, y]` lists, and each circle becomes a pair of
        fields `<name>_center` and `<name>_radius`. The edge transforms
        are not included.

        """
        flat = {"p": self.p, "q": self.q,
                "e_thickness": self.e_thickness,
                "inv_rad": self.inv_rad}

        for name in POINT_FIELDS:
            flat[name] = list(getattr(self, name))

        for name in CIRCLE_FIELDS:
            circle = getattr(self, name)
            flat[name + "_center"] = list(circle.center)
            flat[name + "_radius"] = circle.radius

        return flat

    @staticmethod
    def from_dict(flat):
        """Rebuild a descriptor from the output of `as_dict`.

        The edge transforms are recomputed from the vertices, but
        every stored field is kept exactly as given.

        """
        kwargs = {"p": int(flat["p"]), "q": int(flat["q"]),
                  "e_thickness": float(flat["e_thickness"]),
                  "inv_rad": float(flat["inv_rad"])}

        for name in POINT_FIELDS:
            kwargs[name] = Complex(*flat[name])

        for name in CIRCLE_FIELDS:
            kwargs[name] = Circle(Complex(*flat[name + "_center"]),
                                  float(flat[name + "_radius"]))

        kwargs["edge_maps"] = _edge_maps(
            kwargs["v0"], kwargs["v1"], kwargs["v2"],
            _unit_circle_crossings(kwargs["inv_cen"], kwargs["inv_rad"])
        )
        return TilingDescriptor(**kwargs)

def is_hyperbolic(p, q):
    """Check whether {p, q} is a tiling of the hyperbolic plane."""
    return (p - 2) * (q - 2) > 4

def ornament(tip, reference, length_ratio=ORNAMENT_LENGTH_RATIO,
             angle_ratio=ORNAMENT_ANGLE_RATIO):
    """Get the third vertex E of an ornament triangle (0, D, E).

    E lies at angle `angle_ratio` of the way from the direction of D
    to the direction of `reference`, at `length_ratio` times the
    distance of D from the origin.

    """
    theta_d = tip.arg()
    theta_e = theta_d + angle_ratio * (reference.arg() - theta_d)

    return versor(theta_e) * (length_ratio * tip.norm())

def _unit_circle_crossings(inv_cen, inv_rad):
    # endpoints of the edge V1V2 on the boundary of the disk, upper
    # one first
    crossings = circle_circle_intersections(inv_cen, inv_rad, ZERO, 1.0)
    if len(crossings) != 2:
        raise DegenerateGeometryError(
            "Inversion circle does not cross the unit circle twice"
        )

    return sorted(crossings, key=lambda pt: pt.y, reverse=True)

def _edge_maps(v0, v1, v2, crossings):
    upper, lower = crossings
    v2_dir = v2.normalized()

    return {
        "01": MobiusTransform.from_triple(Complex(-1.), v0, Complex(1.)),
        "12": MobiusTransform.from_triple(lower, v1, upper),
        "20": MobiusTransform.from_triple(v2_dir, v0, -v2_dir)
    }

def _thick_edge_circle(transform, end1, end2, thick_point):
    displaced = transform.apply(thick_point, inverted=True)
    return circle_through_points(end1, end2, displaced)

def _corner_point(circle1, circle2, triangle):
    for point in circle_circle_intersections(circle1.center, circle1.radius,
                                             circle2.center, circle2.radius):
        if inside_triangle(point, *triangle):
            return point

    raise DegenerateGeometryError(
        "Thick edge circles {} and {} do not meet inside the fundamental"
        " triangle".format(circle1, circle2)
    )

def enlarged_circle_at_point(point, transform_a, transform_b):
    """Get the circle through a point and its reflections across two
    triangle edges.

    When both edges pass through a common vertex, this is the
    hyperbolic circle about that vertex passing through `point`.

    """
    return circle_through_points(point,
                                 transform_a.reflect(point),
                                 transform_b.reflect(point))

def _origin_line_point(circle, direction):
    point = intersect_circle_with_origin_line(circle.center, circle.radius,
                                              direction)
    if point is None:
        raise DegenerateGeometryError(
            "Circle {} misses the line through the origin in direction"
            " {}".format(circle, direction)
        )
    return point

@lru_cache(maxsize=64)
def generate_tiling_params(p, q, e_thickness):
    """Compute the fundamental triangle of a {p, q} tiling, and all the
    circles needed to decorate it.

    Parameters
    ----------
    p : int
        number of sides of each tile (at least 3)
    q : int
        number of tiles meeting at each vertex (at least 3)
    e_thickness : float
        thickness of the drawn edges, measured in the canonical frame
        of each edge. Must be positive.

    Returns
    -------
    TilingDescriptor
        The (immutable) geometric data for the tiling. Results are
        cached, so repeated calls with the same arguments return the
        same object.

    Raises
    ------
    InvalidTilingError
        Raised if {p, q} is not a hyperbolic tiling, or the thickness
        is not positive.
    DegenerateGeometryError
        Raised if one of the circle constructions degenerates. This
        happens for valid tilings when the edges are too thick for the
        fundamental triangle, so that thick edges no longer meet inside
        it (from a thickness of 0.07 on {3, 7}, for instance). Small
        triangles need thin edges.

    """
    if p < 3 or q < 3 or not is_hyperbolic(p, q):
        logger.warning("Rejecting non-hyperbolic tiling {%s, %s}", p, q)
        raise InvalidTilingError(
            "{{{}, {}}} is not a tiling of the hyperbolic plane:"
            " need (p - 2)(q - 2) > 4".format(p, q)
        )

    if not e_thickness > 0:
        logger.warning("Rejecting non-positive edge thickness %s", e_thickness)
        raise InvalidTilingError(
            "Edge thickness must be positive, got {}".format(e_thickness)
        )

    logger.debug("Generating tiling parameters for {%s, %s}, thickness %s",
                 p, q, e_thickness)

    alpha = math.pi / p
    beta = math.pi / q
    ref_dir = versor(alpha)

    # Euclidean distance from the center of a tile to its vertices
    cot_q = 1 / math.tan(beta)
    tan_p = ref_dir.y / ref_dir.x
    r_side = math.sqrt((cot_q - tan_p) / (cot_q + tan_p))

    cen_x = 0.5 * (r_side * r_side + 1) / (r_side * ref_dir.x)
    inv_rad = math.sqrt(cen_x * cen_x +
                        (-2 * ref_dir.x * cen_x + r_side) * r_side)
    inv_cen = Complex(cen_x, 0.)

    v0 = ZERO
    v1 = inv_cen.normalized() * (inv_cen.norm() - inv_rad)
    v2 = intersect_circle_with_origin_line(inv_cen, inv_rad, ref_dir)
    if v2 is None:
        raise DegenerateGeometryError(
            "Inversion circle misses the ray at angle pi/{}".format(p)
        )

    triangle = (v0, v1, v2)
    crossings = _unit_circle_crossings(inv_cen, inv_rad)
    upper, lower = crossings
    edge_maps = _edge_maps(v0, v1, v2, crossings)
    map01, map12, map20 = edge_maps["01"], edge_maps["12"], edge_maps["20"]

    # thick edges
    thick_point = Complex(0., e_thickness)
    v2_dir = v2.normalized()

    thick_01 = _thick_edge_circle(map01, Complex(-1.), Complex(1.),
                                  thick_point)
    thick_12 = _thick_edge_circle(map12, upper, lower, thick_point)
    thick_20 = _thick_edge_circle(map20, v2_dir, -v2_dir, thick_point)

    # rounded corners, where two thick edges meet
    tri_v0 = enlarged_circle_at_point(
        _corner_point(thick_20, thick_01, triangle), map20, map01
    )
    tri_v1 = enlarged_circle_at_point(
        _corner_point(thick_01, thick_12, triangle), map01, map12
    )
    tri_v2 = enlarged_circle_at_point(
        _corner_point(thick_12, thick_20, triangle), map12, map20
    )

    # vertex circles for when the edge V2V0 is not thickened
    v2a = _origin_line_point(thick_12, ref_dir)
    v2b = map12.reflect(v2a)
    v2c = map20.reflect(v2b)
    v2_enlarged = circle_through_points(v2a, v2b, v2c)

    v0a = _origin_line_point(thick_01, ref_dir)
    v0b = v0a.conj()
    v0c = map20.reflect(v0b)
    v0_enlarged = circle_through_points(v0a, v0b, v0c)

    # ornaments
    d = Complex(e_thickness * ORNAMENT_SCALE, 0.)
    e = ornament(d, v2)
    d_flip = Complex(-d.x, d.y)

    map2 = MobiusTransform.from_triple(lower, v2, upper)
    e2_local = ornament(d_flip, map2.apply(v0))
    d2 = map2.apply(d_flip, inverted=True)
    e2 = map2.apply(e2_local, inverted=True)

    d1 = map12.apply(d, inverted=True)
    e1 = map12.apply(e, inverted=True)

    map1 = MobiusTransform.from_triple(Complex(-1.), v1, Complex(1.))
    d1p = map1.apply(d_flip, inverted=True)
    e1p = map1.apply(Complex(-e.x, e.y), inverted=True)

    # hyperbolic circle about V2 through V1
    v1_ref_20 = map20.reflect(v1)
    v1_ref_20_12 = map12.reflect(v1_ref_20)
    c2_rot_snakes = circle_through_points(v1, v1_ref_20, v1_ref_20_12)

    return TilingDescriptor(
        p=p, q=q, e_thickness=e_thickness,
        inv_cen=inv_cen, inv_rad=inv_rad,
        ref_nrm=Complex(ref_dir.y, -ref_dir.x),
        v0=v0, v1=v1, v2=v2,
        d=d, e=e, d1=d1, e1=e1, d1p=d1p, e1p=e1p, d2=d2, e2=e2,
        thick_edge_01=thick_01,
        thick_edge_12=thick_12,
        thick_edge_20=thick_20,
        tri_v0_enlarged=tri_v0,
        tri_v1_enlarged=tri_v1,
        tri_v2_enlarged=tri_v2,
        v0_enlarged=v0_enlarged,
        v2_enlarged=v2_enlarged,
        c2_rot_snakes=c2_rot_snakes,
        edge_maps=edge_maps
    )
