"""Show rendered tilings in [matplotlib](https://matplotlib.org/)
figures.

The central class is `TilingDrawing`. Instantiate it with some render
settings, then draw the tiling and (optionally) the geometry it was
built from on top:

```python
from hyperbolic_illusion import drawtools
from hyperbolic_illusion.settings import preset_settings

drawing = drawtools.TilingDrawing(preset_settings("hermann_grid"))
drawing.draw_tiling()
drawing.draw_fundamental_domain()
drawing.enable_panning()

drawing.show()
```

Dragging the mouse across the figure moves the tiling by a hyperbolic
translation, and redraws it.

"""

import logging

import numpy as np

import matplotlib.pyplot as plt
from matplotlib.patches import Circle, Polygon

from hyperbolic_illusion.complex_plane import Complex
from hyperbolic_illusion.models import Model
from hyperbolic_illusion import render

logger = logging.getLogger(__name__)

#the default amount of "room" we leave outside the boundary of the
#disk
DRAW_NEIGHBORHOOD = 0.1

#resolution of the rendered image, in pixels
DEFAULT_RESOLUTION = 400

class DrawingError(Exception):
    """Thrown if we try and draw an object in a model which we haven't
    implemented yet.

    """
    pass

class TilingDrawing:
    def __init__(self, settings, figsize=8,
                 ax=None,
                 fig=None,
                 resolution=DEFAULT_RESOLUTION,
                 descriptor=None):

        if ax is None or fig is None:
            fig, ax = plt.subplots(figsize=(figsize, figsize))

        self.ax, self.fig = ax, fig

        limit = 1 + DRAW_NEIGHBORHOOD
        self.xlim = (-limit, limit)
        self.ylim = (-limit, limit)

        plt.tight_layout()
        self.ax.axis("off")
        self.ax.set_aspect("equal")
        self.ax.set_xlim(self.xlim)
        self.ax.set_ylim(self.ylim)

        self.settings = settings
        self.descriptor = descriptor
        if descriptor is None:
            self.descriptor = settings.descriptor()

        self.resolution = resolution
        self.offset = Complex(0.)
        self.time = 0.

        self.image = None
        self._drag_start = None
        self._connections = []

    def _pixel_size(self):
        # the rendered image covers the view, which is a bit bigger
        # than the disk
        return int(round(self.resolution * (1 + DRAW_NEIGHBORHOOD)))

    def _render(self):
        size = self._pixel_size()
        return render.render(self.settings, size, size,
                             descriptor=self.descriptor,
                             offset=self.offset,
                             time=self.time)

    def draw_tiling(self, **kwargs):
        """Render the tiling and show it in the figure."""
        default_kwargs = {
            "extent": (self.xlim[0], self.xlim[1],
                       self.ylim[0], self.ylim[1]),
            "origin": "upper",
            "interpolation": "nearest",
            "zorder": 0
        }
        for key, value in kwargs.items():
            default_kwargs[key] = value

        pixels = self._render()
        if self.image is None:
            self.image = self.ax.imshow(pixels, **default_kwargs)
        else:
            self.image.set_data(pixels)

        return self.image

    def _check_model(self, what):
        if self.settings.model != Model.POINCARE:
            raise DrawingError(
                "Drawing {} in model '{}' is not implemented".format(
                    what, self.settings.model.label)
            )

    def draw_fundamental_domain(self, **kwargs):
        """Outline the fundamental triangle V0 V1 V2.

        The side V1V2 is drawn as a straight segment.

        """
        self._check_model("the fundamental domain")

        default_kwargs = {
            "facecolor": "none",
            "edgecolor": "red",
            "linewidth": 1,
            "zorder": 2
        }
        for key, value in kwargs.items():
            default_kwargs[key] = value

        vertices = np.array([list(vertex) for vertex in
                             self.descriptor.vertices])
        triangle = Polygon(vertices, closed=True, **default_kwargs)
        self.ax.add_patch(triangle)
        return triangle

    def draw_circles(self, names=None, **kwargs):
        """Draw some of the construction circles of the tiling.

        Parameters
        ----------
        names : list of str
            names of `TilingDescriptor` circle fields to draw. If
            `None`, draw all of the vertex circles and the inversion
            circle.

        Returns
        -------
        list of matplotlib.patches.Circle

        """
        self._check_model("construction circles")

        if names is None:
            names = ["tri_v0_enlarged", "tri_v1_enlarged",
                     "tri_v2_enlarged", "inversion_circle"]

        default_kwargs = {
            "facecolor": "none",
            "edgecolor": "orange",
            "linewidth": 1,
            "zorder": 2
        }
        for key, value in kwargs.items():
            default_kwargs[key] = value

        patches = []
        for name in names:
            center, radius = getattr(self.descriptor, name)
            patch = Circle((center.x, center.y), radius, **default_kwargs)
            self.ax.add_patch(patch)
            patches.append(patch)

        return patches

    def set_offset(self, offset):
        """Pan the tiling so that the view point `offset` shows the
        origin of the tiling.

        """
        offset = Complex._coerce(offset)
        if offset is None or offset.normsq() >= 1:
            raise ValueError(
                "Pan offset must be a point of the open unit disk"
            )

        self.offset = offset
        if self.image is not None:
            self.draw_tiling()

    def _event_to_disk(self, event):
        if event.inaxes is not self.ax or event.xdata is None:
            return None

        # matplotlib already knows the data coordinates, so view them
        # as pixels of a square view of side 2
        position = (event.xdata + 1, 1 - event.ydata)
        return render.screen_to_disk(position, (2, 2), self.settings.model)

    def _on_press(self, event):
        self._drag_start = self._event_to_disk(event)

    def _on_release(self, event):
        self._drag_start = None

    def _on_motion(self, event):
        if self._drag_start is None:
            return

        current = self._event_to_disk(event)
        if current is None:
            # leaving the disk ends the drag
            self._drag_start = None
            return

        # the point of the tiling under the drag start should now sit
        # under the cursor
        grabbed = render.mobius_shift(complex(self._drag_start),
                                      complex(self.offset))
        moved = render.pan_offset(complex(current), grabbed)
        if abs(moved) >= 1:
            return

        logger.debug("Panning to offset %s", moved)
        self._drag_start = current
        self.set_offset(Complex.from_complex(moved))
        self.fig.canvas.draw_idle()

    def enable_panning(self):
        """Let the tiling be dragged around with the mouse."""
        canvas = self.fig.canvas
        self._connections = [
            canvas.mpl_connect("button_press_event", self._on_press),
            canvas.mpl_connect("button_release_event", self._on_release),
            canvas.mpl_connect("motion_notify_event", self._on_motion)
        ]

    def disable_panning(self):
        for cid in self._connections:
            self.fig.canvas.mpl_disconnect(cid)
        self._connections = []

    def show(self):
        plt.show()
