r"""
hyperbolic_illusion
===================

`hyperbolic_illusion` draws regular tilings of the hyperbolic plane,
decorated to produce grid-based visual illusions: the Hermann grid,
the scintillating grid, Kitaoka's primrose field and rotating snakes.

The package is built on top of [numpy](https://numpy.org) and
[matplotlib](https://matplotlib.org), and provides modules to:

- compute the fundamental triangle of a {p, q} tiling in the Poincare
  disk, along with the circles used to draw thick edges, rounded
  vertices and ornaments (`hyperbolic_illusion.tiling`)

- color every pixel of a view of the tiling, in any of eight models
  of the hyperbolic plane (`hyperbolic_illusion.render`)

- save and restore rendering settings as a URL fragment
  (`hyperbolic_illusion.sharing`)

- show the result in a matplotlib figure you can drag around
  (`hyperbolic_illusion.drawtools`)

## Example usage

To draw a Hermann grid on the {4, 5} tiling:

```python
from hyperbolic_illusion import drawtools
from hyperbolic_illusion.settings import preset_settings

settings = preset_settings("hermann_grid", n_samples=2)

figure = drawtools.TilingDrawing(settings)
figure.draw_tiling()
figure.show()
```

Dark dots should flicker at the crossings of the white grid lines.

"""

import logging

from hyperbolic_illusion.base import (
    GeometryError,
    InvalidTilingError,
    DegenerateGeometryError,
    SharingError
)

logging.getLogger(__name__).addHandler(logging.NullHandler())
