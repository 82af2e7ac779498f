r"""Work with Mobius (fractional linear) transformations of the plane.

A `MobiusTransform` stores the coefficients a, b, c, d of the map

\[ z \mapsto \frac{az + b}{cz + d}. \]

The tiling generator mostly builds transformations sending a triple
of points (two ends of a triangle edge and a vertex on that edge) to
the standard triple (-1, 0, 1). In the resulting frame the edge lies
on the real axis, so reflecting across the edge is just complex
conjugation:

```python
from hyperbolic_illusion.complex_plane import Complex
from hyperbolic_illusion.mobius import MobiusTransform

edge_frame = MobiusTransform.from_triple(Complex(-1., 0.),
                                         Complex(0.2, 0.),
                                         Complex(1., 0.))
(edge_frame @ Complex(0.2, 0.)).isclose(Complex(0., 0.))
```
    True

"""

from hyperbolic_illusion.complex_plane import Complex

class MobiusTransform:
    """Model for a fractional linear transformation z -> (az + b)/(cz + d).

    """
    def __init__(self, a, b, c, d, branch=0):
        self.a, self.b, self.c, self.d = a, b, c, d
        self.branch = branch

    def __repr__(self):
        return "MobiusTransform(a={}, b={}, c={}, d={})".format(
            self.a, self.b, self.c, self.d
        )

    def coefficients(self):
        return (self.a, self.b, self.c, self.d)

    @staticmethod
    def from_triple(p, q, r, branch=0):
        """Get the transformation taking p, q, r to -1, 0, 1.

        The coefficients are all divided by a common square root of
        2(p - r)(q - p)(q - r), which normalizes the determinant
        ad - bc to 1. There are two choices of square root, and they
        give transformations whose coefficients differ by a sign.

        Parameters
        ----------
        p, q, r : Complex
            three distinct points, sent to -1, 0, 1 respectively
        branch : 0 or 1
            which square root to use, in the order returned by
            `Complex.root`. Branch 0 is the one everything else in
            this package is built with.

        Returns
        -------
        MobiusTransform

        """
        denom = ((p - r) * (q - p) * (q - r) * 2).root(2)[branch]

        return MobiusTransform(
            (p - r) / denom,
            (-q * (p - r)) / denom,
            ((q - p) + (q - r)) / denom,
            (-p * (q - r) - r * (q - p)) / denom,
            branch=branch
        )

    def apply(self, z, inverted=False):
        """Apply this transformation, or its inverse, to a point.

        Parameters
        ----------
        z : Complex
            the point to transform
        inverted : bool
            if True, apply the inverse map (dz - b)/(a - cz) instead.

        Returns
        -------
        Complex

        """
        if inverted:
            return (self.d * z - self.b) / (self.a - self.c * z)

        return (self.a * z + self.b) / (self.d + self.c * z)

    def inv(self):
        """Get the inverse of this transformation."""
        return MobiusTransform(self.d, -self.b, -self.c, self.a,
                               branch=self.branch)

    def reflect(self, z):
        """Reflect a point across the circle this transformation sends to
        the real line.

        """
        image = self.apply(z)
        return self.apply(image.conj(), inverted=True)

    def __matmul__(self, other):
        if isinstance(other, MobiusTransform):
            return MobiusTransform(
                self.a * other.a + self.b * other.c,
                self.a * other.b + self.b * other.d,
                self.c * other.a + self.d * other.c,
                self.c * other.b + self.d * other.d
            )

        if isinstance(other, Complex):
            return self.apply(other)

        return NotImplemented

def identity():
    return MobiusTransform(Complex(1.), Complex(0.), Complex(0.), Complex(1.))
