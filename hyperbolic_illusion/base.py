class GeometryError(Exception):
    """Thrown if there's an attempt to construct a geometric object with
    numerical data that doesn't make sense for that type of object.

    """
    pass

class InvalidTilingError(GeometryError):
    """Thrown if a Schlafli symbol (p, q) does not describe a tiling of
    the hyperbolic plane, i.e. if (p - 2)(q - 2) <= 4, or if the edge
    thickness is not positive.

    """
    pass

class DegenerateGeometryError(GeometryError):
    """Thrown if a construction runs into degenerate input, e.g. a circle
    through three collinear points.

    For a valid tiling this should never happen.

    """
    pass

class SharingError(ValueError):
    """Thrown if a shared tiling state can't be decoded."""
    pass
