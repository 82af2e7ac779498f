r"""Render tilings by classifying sample points of the view.

This is the "kaleidoscopic" rendering technique: every sample point is
mapped into the Poincare disk and folded into the fundamental triangle
of the tiling by repeatedly reflecting it across the triangle's sides
(one of which is a circle inversion). Once it lands in the triangle,
we color it according to which feature of the triangle (edge, vertex,
ornament, tile interior) it lies in, using the circles computed by
`hyperbolic_illusion.tiling.generate_tiling_params`.

Every sample is independent of every other sample, so everything here
is vectorized over numpy arrays of complex numbers:

```python
from hyperbolic_illusion import render
from hyperbolic_illusion.settings import preset_settings

settings = preset_settings("hermann_grid", n_samples=2)
image = render.render(settings, 400, 400)
image.shape
```
    (400, 400, 3)

"""

from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor
from enum import IntEnum
import logging

import numpy as np
from matplotlib.colors import hsv_to_rgb

from hyperbolic_illusion.complex_plane import Complex
from hyperbolic_illusion.constructions import inside_triangle_array
from hyperbolic_illusion.models import Model

logger = logging.getLogger(__name__)

#number of pixel rows classified at once
DEFAULT_CHUNK_ROWS = 64

#colors of the rotating snakes illusion, in the order the eye sees
#them "move"
KITAOKA_COLORS = np.array([
    (0, 0, 0),
    (33, 64, 154),
    (255, 255, 255),
    (245, 208, 0)
], dtype=float) / 255

#how much darker the odd triangles are when the embedded triangles are
#shown
PARITY_SHADE = 0.8

#hue shift per polygon when polygons aren't colored with a static color
HUE_STEP = 0.125

class Feature(IntEnum):
    """Features of the tiling a sample can belong to.

    Higher values take priority over lower ones when a sample belongs
    to several features.

    """
    BACKGROUND = 0
    FILL = 1
    SNAKE = 2
    EDGE = 3
    VERTEX = 4
    ORNAMENT = 5

Reduction = namedtuple("Reduction",
                       ["z", "reflections", "inversions", "converged"])

def screen_coords(width, height, n_samples=1, rows=None):
    """Get the coordinates of sample points in a view of the given size.

    The view is scaled so that the unit disk just fits inside it, with
    y pointing up.

    Parameters
    ----------
    width, height : int
        size of the view, in pixels
    n_samples : int
        take an n_samples x n_samples grid of samples in each pixel
    rows : tuple(int, int)
        if specified, only get samples for pixel rows in the range
        [rows[0], rows[1]).

    Returns
    -------
    ndarray of complex
        array of shape (num_rows * n_samples, width * n_samples). The
        samples in each pixel are contiguous.

    """
    start, stop = (0, height) if rows is None else rows
    scale = min(width, height)

    xs = (np.arange(width * n_samples) + 0.5) / n_samples
    ys = (np.arange(start * n_samples, stop * n_samples) + 0.5) / n_samples
    x, y = np.meshgrid(xs, ys)

    return ((2 * x - width) + 1j * (height - 2 * y)) / scale

def screen_to_disk(position, size, model=Model.POINCARE):
    """Find the point of the Poincare disk under a pixel of the view.

    Parameters
    ----------
    position : tuple(float, float)
        pixel coordinates, measured from the top left of the view
    size : tuple(int, int)
        width and height of the view
    model : Model
        the model the view is showing

    Returns
    -------
    Complex or None
        the point of the disk, or `None` if the pixel lies outside
        of the model.

    """
    x, y = position
    width, height = size
    scale = min(width, height)

    view_pt = Complex((2 * x - width) / scale, (height - 2 * y) / scale)
    disk_pt = Model.get(model).to_disk(view_pt)

    if not (np.isfinite(disk_pt.x) and np.isfinite(disk_pt.y)):
        return None
    if disk_pt.normsq() >= 1:
        return None

    return disk_pt

def mobius_shift(z, offset):
    """Apply the hyperbolic translation taking `offset` to the origin."""
    m = complex(offset)
    return (z - m) / (1 - np.conj(m) * z)

def pan_offset(view_point, tiling_point):
    """Find the offset showing `tiling_point` at `view_point`.

    This is the offset `m` solving ``mobius_shift(view_point, m) ==
    tiling_point``. Both points must lie in the open unit disk.

    """
    z, w = complex(view_point), complex(tiling_point)
    c = z - w
    k = w * z
    return (c + k * np.conj(c)) / (1 - abs(k)**2)

def reduce_to_fundamental_domain(z, descriptor, n_iterations=50):
    """Fold points of the disk into the fundamental triangle.

    Each pass inverts points lying inside the inversion circle,
    reflects points lying on the wrong side of the line at angle pi/p,
    and reflects points lying below the real axis. Points stop moving
    once a pass leaves them unchanged.

    Parameters
    ----------
    z : ndarray of complex
        points of the Poincare disk
    descriptor : TilingDescriptor
        geometry of the tiling
    n_iterations : int
        maximum number of passes. Points which still move after this
        many passes are left wherever they ended up, which shows up as
        noise very close to the boundary of the disk.

    Returns
    -------
    Reduction
        named tuple with the folded points, the number of
        reflections (including inversions) applied to each point,
        the number of inversions applied to each point, and whether
        each point settled down.

    """
    z = np.array(z, dtype=complex)

    center = complex(descriptor.inv_cen)
    rad_sq = descriptor.inv_rad ** 2
    nrm = complex(descriptor.ref_nrm)

    reflections = np.zeros(z.shape, dtype=int)
    inversions = np.zeros(z.shape, dtype=int)
    active = np.isfinite(z)

    for _ in range(n_iterations):
        if not active.any():
            break

        diff = z - center
        dist_sq = diff.real**2 + diff.imag**2
        inside = active & (dist_sq < rad_sq)
        z[inside] = center + rad_sq * diff[inside] / dist_sq[inside]

        dot = z.real * nrm.real + z.imag * nrm.imag
        wrong_side = active & (dot < 0)
        z[wrong_side] -= 2 * dot[wrong_side] * nrm

        below = active & (z.imag < 0)
        z[below] = np.conj(z[below])

        inversions += inside
        reflections += inside.astype(int) + wrong_side + below
        active &= inside | wrong_side | below

    unconverged = np.count_nonzero(active)
    if unconverged:
        logger.debug("%d samples did not reach the fundamental domain"
                     " in %d iterations", unconverged, n_iterations)

    return Reduction(z, reflections, inversions, ~active)

def _in_circle(z, circle):
    return np.abs(z - complex(circle.center)) < circle.radius

def _edge_masks(z, descriptor, settings):
    if settings.precise_edges:
        return (_in_circle(z, descriptor.thick_edge_01),
                _in_circle(z, descriptor.thick_edge_12),
                _in_circle(z, descriptor.thick_edge_20))

    thickness = settings.e_thickness
    nrm = complex(descriptor.ref_nrm)
    dot = z.real * nrm.real + z.imag * nrm.imag
    circle_dist = np.abs(z - complex(descriptor.inv_cen)) - descriptor.inv_rad

    return (np.abs(z.imag) < thickness,
            np.abs(circle_dist) < thickness,
            np.abs(dot) < thickness)

def _vertex_mask(z, descriptor, settings):
    # a vertex gets a disk if drawn edges cross (rather than pass
    # straight through) there
    mask = np.zeros(z.shape, dtype=bool)

    if settings.do_v0v1 or settings.do_v2v0:
        circle = descriptor.tri_v0_enlarged
        if settings.do_v0v1 and not settings.do_v2v0:
            circle = descriptor.v0_enlarged
        mask |= _in_circle(z, circle)

    if settings.do_v0v1 and settings.do_v1v2:
        mask |= _in_circle(z, descriptor.tri_v1_enlarged)

    if settings.do_v1v2 or settings.do_v2v0:
        circle = descriptor.tri_v2_enlarged
        if settings.do_v1v2 and not settings.do_v2v0:
            circle = descriptor.v2_enlarged
        mask |= _in_circle(z, circle)

    return mask

def _ornament_mask(z, descriptor):
    mask = np.zeros(z.shape, dtype=bool)
    for triangle in descriptor.ornament_triangles():
        mask |= inside_triangle_array(z, *triangle)
    return mask

def snake_pattern(z, descriptor, settings):
    """Find the cell of the rotating snakes pattern containing each point
    of the fundamental triangle.

    Points near V0 are colored by rings centered at V0 (the "front"
    rings), and points inside the hyperbolic circle about V2 through
    V1 by rings centered at V2 (the "behind" rings). Ring radii grow
    geometrically outward from `center_cutoff`.

    Returns
    -------
    ndarray of int
        index into `KITAOKA_COLORS` for each point, or -1 for points
        outside of the rings.

    """
    z = np.asarray(z, dtype=complex)
    v2 = complex(descriptor.v2)
    near_v2 = _in_circle(z, descriptor.c2_rot_snakes)

    local = np.where(near_v2, (z - v2) / (1 - np.conj(v2) * z), z)
    radius = np.abs(local)

    sector = np.where(near_v2, np.pi / descriptor.q, np.pi / descriptor.p)
    repeats = np.where(near_v2, settings.n_repeat_per_sect_v2,
                       settings.n_repeat_per_sect_v0)
    reverse = np.where(near_v2, settings.do_back_rev, settings.do_fore_rev)

    cutoff = max(settings.center_cutoff, 1e-9)
    safe_radius = np.maximum(radius, cutoff)
    ring = np.floor(np.log(safe_radius / cutoff) /
                    np.log(1 + settings.exp_ratio_rings))

    phase = np.angle(local) / sector * repeats + ring / 2
    cell = np.floor(4 * np.mod(phase, 1.)).astype(int) % 4
    cell = np.where(reverse, 3 - cell, cell)

    in_rings = (radius >= cutoff) & (ring < settings.ring_layer_num)
    return np.where(in_rings, cell, -1)

def label_features(reduction, descriptor, settings):
    """Decide which feature of the tiling each folded point belongs to.

    Parameters
    ----------
    reduction : Reduction
        output of `reduce_to_fundamental_domain`
    descriptor : TilingDescriptor
        geometry of the tiling
    settings : RenderSettings
        which features to draw

    Returns
    -------
    ndarray of Feature values
        Ornaments take priority over vertices, vertices over edges,
        edges over the rotating snakes pattern, and the snakes over
        the polygon fill.

    """
    z = reduction.z
    features = np.full(z.shape, Feature.FILL, dtype=int)

    if settings.do_snake:
        features[snake_pattern(z, descriptor, settings) >= 0] = Feature.SNAKE

    if settings.do_edges:
        edge01, edge12, edge20 = _edge_masks(z, descriptor, settings)
        edges = np.zeros(z.shape, dtype=bool)
        if settings.do_v0v1:
            edges |= edge01
        if settings.do_v1v2:
            edges |= edge12
        if settings.do_v2v0:
            edges |= edge20
        features[edges] = Feature.EDGE

    if settings.do_verts:
        features[_vertex_mask(z, descriptor, settings)] = Feature.VERTEX

    if settings.do_orns:
        features[_ornament_mask(z, descriptor)] = Feature.ORNAMENT

    return features

def colorize(features, reduction, descriptor, settings, time=0.):
    """Turn an array of features into an array of RGB colors.

    Returns
    -------
    ndarray
        float array with shape `features.shape + (3,)`, values in [0, 1].

    """
    colors = settings.colors()
    odd_reflection = (reduction.reflections % 2 == 1)[..., np.newaxis]
    odd_inversion = (reduction.inversions % 2 == 1)[..., np.newaxis]

    rgb = np.empty(features.shape + (3,))
    rgb[...] = colors["bg"]

    if settings.do_solid_color:
        fill = np.where(odd_inversion & settings.do_inv_pol,
                        colors["inv_polygon"], colors["polygon"])
    else:
        hue = np.mod(reduction.inversions * HUE_STEP + time, 1.)
        fill = hsv_to_rgb(np.stack([hue,
                                    np.full(hue.shape, 0.6),
                                    np.ones(hue.shape)], axis=-1))

    if settings.do_parity:
        fill = np.where(odd_reflection, fill * PARITY_SHADE, fill)

    fill = np.broadcast_to(fill, rgb.shape)
    is_fill = (features == Feature.FILL)
    rgb[is_fill] = fill[is_fill]

    is_snake = (features == Feature.SNAKE)
    if is_snake.any():
        cells = snake_pattern(reduction.z[is_snake], descriptor, settings)
        rgb[is_snake] = KITAOKA_COLORS[cells]

    rgb[features == Feature.EDGE] = colors["edge"]

    vert = np.where(odd_reflection & settings.do_inv_verts,
                    colors["inv_vert"], colors["vert"])
    vert = np.broadcast_to(vert, rgb.shape)
    is_vert = (features == Feature.VERTEX) | (features == Feature.ORNAMENT)
    rgb[is_vert] = vert[is_vert]

    return rgb

def classify(z, descriptor, settings, offset=0., time=0.):
    """Color points of the Poincare disk.

    Parameters
    ----------
    z : ndarray of complex
        points of the Poincare disk. Anything outside of the open
        unit disk (or non-finite) gets the background color.
    descriptor : TilingDescriptor
        geometry of the tiling
    settings : RenderSettings
        what to draw and how
    offset : complex or Complex
        the view point at `offset` shows the origin of the tiling
    time : float
        animation time, only used for non-static polygon colors

    Returns
    -------
    ndarray
        RGB colors, of shape `z.shape + (3,)`.

    """
    z = np.asarray(z, dtype=complex)
    with np.errstate(invalid="ignore"):
        in_disk = np.isfinite(z) & (np.abs(z) < 1)

    shifted = mobius_shift(np.where(in_disk, z, 0.), offset)
    reduction = reduce_to_fundamental_domain(shifted, descriptor,
                                             settings.n_iterations)

    features = label_features(reduction, descriptor, settings)
    features[~in_disk] = Feature.BACKGROUND

    return colorize(features, reduction, descriptor, settings, time)

def render(settings, width, height, descriptor=None, offset=0., time=0.,
           chunk_rows=DEFAULT_CHUNK_ROWS, workers=None):
    """Render an image of a tiling.

    Parameters
    ----------
    settings : RenderSettings
        what to draw and how
    width, height : int
        size of the image in pixels
    descriptor : TilingDescriptor
        geometry of the tiling. If `None`, use the geometry for the
        tiling specified in `settings`.
    offset : complex or Complex
        the view point at `offset` shows the origin of the tiling
    time : float
        animation time
    chunk_rows : int
        number of pixel rows to classify at once
    workers : int
        if specified, classify chunks of rows in this many threads.

    Returns
    -------
    ndarray
        float array of shape (height, width, 3). Each pixel is the
        average of `settings.n_samples`^2 samples.

    """
    if descriptor is None:
        descriptor = settings.descriptor()

    n = max(int(settings.n_samples), 1)
    image = np.empty((height, width, 3))

    def render_rows(rows):
        start, stop = rows
        view_pts = screen_coords(width, height, n, rows=rows)
        disk_pts = settings.model.to_disk(view_pts)

        rgb = classify(disk_pts, descriptor, settings, offset, time)
        image[start:stop] = rgb.reshape(
            stop - start, n, width, n, 3
        ).mean(axis=(1, 3))

    chunks = [(start, min(start + chunk_rows, height))
              for start in range(0, height, chunk_rows)]

    logger.debug("Rendering {%s, %s} at %dx%d with %d samples per pixel",
                 descriptor.p, descriptor.q, width, height, n * n)

    if workers:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            list(pool.map(render_rows, chunks))
    else:
        for chunk in chunks:
            render_rows(chunk)

    return image
