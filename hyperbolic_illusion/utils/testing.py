import numpy as np

def assert_complex_close(z1, z2, tol=1e-9):
    assert abs(complex(z1) - complex(z2)) < tol, \
        "{} is not close to {}".format(z1, z2)

def assert_circle_close(c1, c2, tol=1e-9):
    assert_complex_close(c1.center, c2.center, tol)
    assert abs(c1.radius - c2.radius) < tol

def assert_on_circle(point, circle, tol=1e-9):
    dist = abs(complex(point) - complex(circle.center))
    assert abs(dist - circle.radius) < tol, \
        "{} is not on {}".format(point, circle)

def assert_descriptors_equivalent(d1, d2):
    flat1 = d1.as_dict()
    flat2 = d2.as_dict()

    assert flat1.keys() == flat2.keys()
    for key, value in flat1.items():
        assert np.allclose(value, flat2[key]), key
