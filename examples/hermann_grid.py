import logging

from hyperbolic_illusion import drawtools
from hyperbolic_illusion.logging_config import setup_logging
from hyperbolic_illusion.settings import preset_settings

setup_logging(logging.DEBUG)

# white lines on black {4, 5} squares: grey spots appear at the
# crossings you aren't looking at
settings = preset_settings("hermann_grid", n_samples=2)

fig = drawtools.TilingDrawing(settings)
fig.draw_tiling()
fig.enable_panning()
fig.show()
