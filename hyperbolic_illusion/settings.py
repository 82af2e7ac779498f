"""Rendering settings for tilings, and presets for the illusions.

A `RenderSettings` object is an immutable snapshot of every option the
renderer reads apart from the tiling geometry itself: which features
to draw, colors, the model, and quality parameters. Changing a setting
means making a new snapshot:

```python
from hyperbolic_illusion.settings import RenderSettings, Preset, preset_settings

settings = preset_settings(Preset.HERMANN_GRID)
settings = settings.replace(n_samples=2)
descriptor = settings.descriptor()
```

Presets are plain functions building a complete snapshot from scratch,
so applying a preset never depends on whatever was set before.

"""

from dataclasses import dataclass, fields, replace
from enum import Enum

import numpy as np

from hyperbolic_illusion.models import Model
from hyperbolic_illusion.tiling import generate_tiling_params

#palette of colors available for every colored feature, in 0-255 RGB
COLORS = [
    (255, 255, 255),    # white
    (170, 170, 170),    # light gray
    (0, 0, 0),          # black
    (214, 39, 40),      # red
    (255, 127, 14),     # orange
    (31, 119, 180),     # blue
    (110, 110, 110),    # gray
    (44, 160, 44),      # green
    (188, 189, 34),     # olive
    (82, 43, 114)       # purple
]

def color(idx):
    """Get a palette color as an RGB triple of floats in [0, 1]."""
    return np.array(COLORS[idx], dtype=float) / 255

@dataclass(frozen=True)
class RenderSettings:
    """Everything the renderer needs to know besides the tiling
    geometry.

    """
    p: int = 4
    q: int = 5
    e_thickness: float = 0.015

    model: Model = Model.POINCARE

    do_edges: bool = True
    do_v0v1: bool = True
    do_v1v2: bool = True
    do_v2v0: bool = False
    precise_edges: bool = True

    do_verts: bool = False
    do_inv_verts: bool = False
    do_orns: bool = False

    do_solid_color: bool = True
    do_inv_pol: bool = False
    do_parity: bool = False

    do_snake: bool = False
    do_fore_rev: bool = False
    do_back_rev: bool = False
    exp_ratio_rings: float = 0.115
    ring_layer_num: int = 30
    center_cutoff: float = 0.05
    n_repeat_per_sect_v0: int = 2
    n_repeat_per_sect_v2: int = 2

    polygon_col_idx: int = 0
    inv_polygon_col_idx: int = 8
    edge_col_idx: int = 2
    vert_col_idx: int = 3
    inv_vert_col_idx: int = 9
    bg_col_idx: int = 2

    n_iterations: int = 50
    n_samples: int = 5

    def __post_init__(self):
        object.__setattr__(self, "model", Model.get(self.model))

    @staticmethod
    def field_names():
        return [f.name for f in fields(RenderSettings)]

    def replace(self, **changes):
        """Get a copy of these settings with some fields changed."""
        return replace(self, **changes)

    def descriptor(self):
        """Get the (cached) tiling geometry for these settings."""
        return generate_tiling_params(self.p, self.q, self.e_thickness)

    def with_tiling(self, p, q, e_thickness):
        """Switch to a new tiling.

        Returns
        -------
        tuple(RenderSettings, TilingDescriptor)
            The new settings and the geometry of the new tiling.

        Raises
        ------
        InvalidTilingError
            Raised if {p, q} is not hyperbolic. Nothing changes in
            this case, so callers can keep using the old settings.

        """
        descriptor = generate_tiling_params(p, q, e_thickness)
        return (self.replace(p=p, q=q, e_thickness=e_thickness),
                descriptor)

    def toggled(self, name, value):
        """Set a boolean option, along with whatever other options have to
        change with it.

        Circular vertices and ornamented vertices are mutually
        exclusive, two-colored vertices need one of them, and
        checkerboard coloring needs solid polygon colors.

        """
        changes = {name: value}

        if name == "do_verts":
            if value:
                changes["do_orns"] = False
            elif not self.do_orns:
                changes["do_inv_verts"] = False
        elif name == "do_orns":
            if value:
                changes["do_verts"] = False
            elif not self.do_verts:
                changes["do_inv_verts"] = False
        elif name == "do_solid_color" and not value:
            changes["do_inv_pol"] = False
        elif name == "do_inv_pol" and value:
            changes["do_solid_color"] = True

        return self.replace(**changes)

    def colors(self):
        """Get the palette colors for each feature, as floats."""
        return {
            "polygon": color(self.polygon_col_idx),
            "inv_polygon": color(self.inv_polygon_col_idx),
            "edge": color(self.edge_col_idx),
            "vert": color(self.vert_col_idx),
            "inv_vert": color(self.inv_vert_col_idx),
            "bg": color(self.bg_col_idx)
        }

class Preset(Enum):
    DEFAULT = "default"
    ROTATING_SNAKES = "rotating_snakes"
    PRIMROSE_FIELD = "primrose_field"
    SCINTILLATING_GRID = "scintillating_grid"
    HERMANN_GRID = "hermann_grid"

def _default(**overrides):
    return RenderSettings(**overrides)

def _rotating_snakes(**overrides):
    settings = dict(p=5, q=5, model=Model.POINCARE,
                    do_verts=False, do_orns=False, do_edges=False,
                    do_inv_pol=False, do_parity=False,
                    do_solid_color=True, do_snake=True)
    settings.update(overrides)
    return RenderSettings(**settings)

def _primrose_field(**overrides):
    settings = dict(p=4, q=6, e_thickness=0.02, model=Model.POINCARE,
                    do_verts=False, do_inv_verts=True, do_orns=True,
                    do_edges=False,
                    do_inv_pol=True, do_parity=False,
                    do_solid_color=True, do_snake=False,
                    polygon_col_idx=7, inv_polygon_col_idx=8,
                    vert_col_idx=0, inv_vert_col_idx=9)
    settings.update(overrides)
    return RenderSettings(**settings)

def _scintillating_grid(**overrides):
    settings = dict(p=3, q=7, e_thickness=0.015, model=Model.POINCARE,
                    do_verts=True, do_inv_verts=False, do_orns=False,
                    do_edges=True, do_v0v1=True, do_v1v2=False,
                    do_v2v0=True,
                    do_inv_pol=False, do_parity=False,
                    do_solid_color=True, do_snake=False,
                    edge_col_idx=6, polygon_col_idx=2, vert_col_idx=0)
    settings.update(overrides)
    return RenderSettings(**settings)

def _hermann_grid(**overrides):
    settings = dict(p=4, q=5, e_thickness=0.02, model=Model.POINCARE,
                    do_verts=False, do_inv_verts=False, do_orns=False,
                    do_edges=True, do_v0v1=True, do_v1v2=True,
                    do_v2v0=False,
                    do_inv_pol=False, do_parity=False,
                    do_solid_color=True, do_snake=False,
                    edge_col_idx=0, polygon_col_idx=2)
    settings.update(overrides)
    return RenderSettings(**settings)

_PRESETS = {
    Preset.DEFAULT: _default,
    Preset.ROTATING_SNAKES: _rotating_snakes,
    Preset.PRIMROSE_FIELD: _primrose_field,
    Preset.SCINTILLATING_GRID: _scintillating_grid,
    Preset.HERMANN_GRID: _hermann_grid
}

def preset_settings(preset, **overrides):
    """Build the settings for one of the illusion presets.

    Parameters
    ----------
    preset : Preset or str
        which preset to use
    overrides : dict
        any fields to set differently from the preset

    Returns
    -------
    RenderSettings

    """
    return _PRESETS[Preset(preset)](**overrides)
