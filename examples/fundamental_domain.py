from hyperbolic_illusion import drawtools
from hyperbolic_illusion.settings import preset_settings

settings = preset_settings("scintillating_grid", n_samples=2)

fig = drawtools.TilingDrawing(settings)
fig.draw_tiling(alpha=0.6)
fig.draw_fundamental_domain()
fig.draw_circles(["thick_edge_12", "tri_v1_enlarged", "tri_v2_enlarged",
                  "c2_rot_snakes"])
fig.show()
