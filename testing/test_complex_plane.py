import cmath
import math

import pytest
import numpy as np

from hyperbolic_illusion.complex_plane import Complex, versor, ZERO, ONE, I

from hyperbolic_illusion.utils.testing import *

@pytest.fixture
def z():
    return Complex(1., 2.)

@pytest.fixture
def w():
    return Complex(3., -4.)

def test_arithmetic(z, w):
    assert z + w == Complex(4., -2.)
    assert z - w == Complex(-2., 6.)
    assert z * w == Complex(11., 2.)
    assert -z == Complex(-1., -2.)
    assert_complex_close(z / w, complex(1, 2) / complex(3, -4))

def test_real_scalars(z):
    assert z * 2 == Complex(2., 4.)
    assert 2 * z == Complex(2., 4.)
    assert z + 1 == Complex(2., 2.)
    assert 1 - z == Complex(0., -2.)
    assert_complex_close(1 / z, 1 / complex(1, 2))
    assert_complex_close(z / 2, complex(0.5, 1.))

def test_builtin_complex(z):
    assert complex(z) == complex(1, 2)
    assert Complex.from_complex(complex(1, 2)) == z
    assert z * 1j == Complex(-2., 1.)
    assert tuple(z) == (1., 2.)

def test_immutable(z):
    with pytest.raises(AttributeError):
        z.x = 5.

def test_equality_and_hash():
    assert Complex(1., 0.) == 1.
    assert Complex(1., 0.) == ONE
    assert hash(Complex(1., 2.)) == hash(Complex(1., 2.))
    assert len({Complex(1., 2.), Complex(1., 2.), I}) == 2

def test_norms(w):
    assert w.normsq() == 25.
    assert w.norm() == 5.
    assert abs(w) == 5.
    assert w.conj() == Complex(3., 4.)
    assert np.isclose(w.normalized().norm(), 1.)
    assert np.isclose(I.arg(), np.pi / 2)

def test_zero_division():
    with pytest.raises(ZeroDivisionError):
        ZERO.reciprocal()

    with pytest.raises(ZeroDivisionError):
        ZERO.normalized()

def test_transcendental(z):
    assert_complex_close(z.exp(), cmath.exp(complex(z)))
    assert_complex_close(Complex(0.3, 0.2).tanh(), cmath.tanh(0.3 + 0.2j))
    assert_complex_close(z.power(3), complex(z) ** 3)
    assert_complex_close(versor(np.pi / 3), cmath.exp(1j * np.pi / 3))

@pytest.mark.parametrize("r, n", [(8., 3), (2., 2), (5., 5), (1., 7)])
def test_roots(r, n):
    roots = Complex(r, 0.).root(n)
    assert len(roots) == n

    for root in roots:
        assert np.isclose(root.norm(), r ** (1 / n))
        assert_complex_close(root.power(n), Complex(r, 0.), tol=1e-8)

    angles = np.array([root.arg() for root in roots])
    gaps = np.mod(np.diff(angles), 2 * np.pi)
    assert np.allclose(gaps, 2 * np.pi / n)

def test_first_root():
    assert_complex_close(Complex(8., 0.).root(3)[0], Complex(2., 0.))
    assert_complex_close(Complex(-4., 0.).root(2)[0], Complex(0., 2.))

def test_bad_root():
    with pytest.raises(ValueError):
        Complex(1., 1.).root(0)
