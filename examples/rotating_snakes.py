from hyperbolic_illusion import drawtools, sharing
from hyperbolic_illusion.settings import preset_settings

settings = preset_settings("rotating_snakes", n_samples=3)

# reversing the rings around the tile vertices makes neighboring
# "wheels" turn in opposite directions
settings = settings.toggled("do_back_rev", True)

print(sharing.share_url("https://example.com/", settings))

fig = drawtools.TilingDrawing(settings, resolution=600)
fig.draw_tiling()
fig.show()
