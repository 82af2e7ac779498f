r"""Model points of the (Euclidean) plane as complex numbers.

The tiling generator works with one point at a time, so this module
provides a small immutable value type, `Complex`, rather than working
with numpy arrays. Every operation returns a new `Complex`:

```python
from hyperbolic_illusion.complex_plane import Complex, versor

z = Complex(3., 4.)
z.norm()
```
    5.0

```python
(z * versor(0.5)).arg()
```
    1.4272952180016123

Converting to and from the builtin `complex` type (and hence to numpy
arrays) is supported via `complex(z)` and `Complex.from_complex`.

"""

import math
from numbers import Real

class Complex:
    """An immutable point (x, y) of the plane, viewed as the complex
    number x + iy.

    """
    __slots__ = ("_x", "_y")

    def __init__(self, x, y=0.):
        object.__setattr__(self, "_x", float(x))
        object.__setattr__(self, "_y", float(y))

    def __setattr__(self, name, value):
        raise AttributeError("Complex numbers are immutable")

    @property
    def x(self):
        return self._x

    @property
    def y(self):
        return self._y

    @staticmethod
    def from_complex(z):
        """Build a `Complex` out of a builtin (or numpy) complex number."""
        return Complex(z.real, z.imag)

    @staticmethod
    def _coerce(other):
        if isinstance(other, Complex):
            return other
        if isinstance(other, Real):
            return Complex(other, 0.)
        if isinstance(other, complex):
            return Complex.from_complex(other)

        return None

    def __complex__(self):
        return complex(self._x, self._y)

    def __iter__(self):
        yield self._x
        yield self._y

    def __repr__(self):
        return "Complex({!r}, {!r})".format(self._x, self._y)

    def __eq__(self, other):
        other = Complex._coerce(other)
        if other is None:
            return NotImplemented

        return self._x == other._x and self._y == other._y

    def __hash__(self):
        return hash((self._x, self._y))

    def __neg__(self):
        return Complex(-self._x, -self._y)

    def __add__(self, other):
        other = Complex._coerce(other)
        if other is None:
            return NotImplemented
        return Complex(self._x + other._x, self._y + other._y)

    __radd__ = __add__

    def __sub__(self, other):
        other = Complex._coerce(other)
        if other is None:
            return NotImplemented
        return Complex(self._x - other._x, self._y - other._y)

    def __rsub__(self, other):
        other = Complex._coerce(other)
        if other is None:
            return NotImplemented
        return other - self

    def __mul__(self, other):
        if isinstance(other, Real):
            return Complex(self._x * other, self._y * other)

        other = Complex._coerce(other)
        if other is None:
            return NotImplemented

        return Complex(self._x * other._x - self._y * other._y,
                       self._x * other._y + self._y * other._x)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Real):
            return self * (1 / other)

        other = Complex._coerce(other)
        if other is None:
            return NotImplemented

        return self * other.reciprocal()

    def __rtruediv__(self, other):
        other = Complex._coerce(other)
        if other is None:
            return NotImplemented
        return other * self.reciprocal()

    def __abs__(self):
        return self.norm()

    def isclose(self, other, tol=1e-9):
        """Check whether another point is within Euclidean distance
        `tol` of this one."""
        return (self - other).norm() < tol

    def conj(self):
        return Complex(self._x, -self._y)

    def normsq(self):
        return self._x * self._x + self._y * self._y

    def norm(self):
        return math.sqrt(self.normsq())

    def arg(self):
        """Angle of this point, in the range (-pi, pi]."""
        return math.atan2(self._y, self._x)

    def normalized(self):
        """Rescale this point to have norm 1.

        Raises
        ------
        ZeroDivisionError
            Raised for the zero point.

        """
        return self / self.norm()

    def reciprocal(self):
        """Get 1/z.

        Raises
        ------
        ZeroDivisionError
            Raised for the zero point.

        """
        return self.conj() / self.normsq()

    def exp(self):
        return versor(self._y) * math.exp(self._x)

    def tanh(self):
        exp = (self * 2).exp()
        return (exp - ONE) / (exp + ONE)

    def power(self, n):
        """Raise this number to the integer power n, via polar
        coordinates."""
        return versor(n * self.arg()) * math.pow(self.norm(), n)

    def root(self, n):
        """Get all n of the n-th roots of this number.

        Parameters
        ----------
        n : int
            which roots to take. Must be positive.

        Returns
        -------
        list(Complex)
            The roots r^(1/n) * versor((theta + 2 k pi) / n) for k =
            0, ..., n - 1, where (r, theta) are the polar coordinates
            of this number and theta lies in (-pi, pi]. The order is
            significant: callers picking "a" root pick the first one.

        Raises
        ------
        ValueError
            Raised if n is not positive.

        """
        if n < 1:
            raise ValueError(
                "Cannot take {}-th roots of a complex number".format(n)
            )

        nth_root_r = math.pow(self.norm(), 1 / n)
        phi = self.arg()

        return [versor((phi + 2 * k * math.pi) / n) * nth_root_r
                for k in range(n)]

def versor(t):
    """Get the unit complex number cos(t) + i sin(t)."""
    return Complex(math.cos(t), math.sin(t))

ZERO = Complex(0., 0.)
ONE = Complex(1., 0.)
I = Complex(0., 1.)
