from dataclasses import FrozenInstanceError

import pytest
import numpy as np

from hyperbolic_illusion.base import InvalidTilingError
from hyperbolic_illusion.models import Model
from hyperbolic_illusion.settings import (
    RenderSettings,
    Preset,
    preset_settings,
    color,
    COLORS
)
from hyperbolic_illusion.tiling import generate_tiling_params

@pytest.fixture
def settings():
    return RenderSettings()

def test_defaults(settings):
    assert (settings.p, settings.q) == (4, 5)
    assert settings.e_thickness == 0.015
    assert settings.model is Model.POINCARE
    assert settings.do_edges and settings.do_v0v1 and settings.do_v1v2
    assert not settings.do_v2v0
    assert settings.precise_edges
    assert not (settings.do_verts or settings.do_orns or settings.do_snake)
    assert settings.n_iterations == 50
    assert settings.n_samples == 5
    assert settings.exp_ratio_rings == 0.115
    assert settings.ring_layer_num == 30

def test_frozen(settings):
    with pytest.raises(FrozenInstanceError):
        settings.p = 7

def test_replace(settings):
    changed = settings.replace(p=7, q=3)
    assert (changed.p, changed.q) == (7, 3)
    assert (settings.p, settings.q) == (4, 5)

def test_model_lookup():
    assert RenderSettings(model="klein").model is Model.KLEIN
    assert RenderSettings(model=5).model is Model.AZIMUTHAL_EQUIDISTANT

    with pytest.raises(ValueError):
        RenderSettings(model="sphere")

def test_field_names():
    names = RenderSettings.field_names()
    assert names[:3] == ["p", "q", "e_thickness"]
    assert "n_repeat_per_sect_v2" in names
    assert len(names) == len(set(names))

def test_colors(settings):
    assert len(COLORS) == 10
    assert np.allclose(color(0), [1., 1., 1.])
    assert np.allclose(color(2), [0., 0., 0.])

    with pytest.raises(IndexError):
        color(10)

    colors = settings.colors()
    assert set(colors) == {"polygon", "inv_polygon", "edge", "vert",
                           "inv_vert", "bg"}
    assert np.allclose(colors["edge"], color(settings.edge_col_idx))

def test_descriptor(settings):
    assert settings.descriptor() is generate_tiling_params(4, 5, 0.015)

def test_with_tiling(settings):
    new_settings, descriptor = settings.with_tiling(6, 4, 0.02)
    assert (new_settings.p, new_settings.q) == (6, 4)
    assert new_settings.e_thickness == 0.02
    assert descriptor.p == 6 and descriptor.q == 4

    with pytest.raises(InvalidTilingError):
        settings.with_tiling(3, 3, 0.02)

    # nothing changed
    assert (settings.p, settings.q) == (4, 5)

def test_toggle_vertices(settings):
    with_orns = settings.replace(do_orns=True, do_inv_verts=True)

    toggled = with_orns.toggled("do_verts", True)
    assert toggled.do_verts and not toggled.do_orns
    assert toggled.do_inv_verts

    toggled = toggled.toggled("do_orns", True)
    assert toggled.do_orns and not toggled.do_verts

    # with both off, two-colored vertices make no sense
    toggled = toggled.toggled("do_orns", False)
    assert not (toggled.do_orns or toggled.do_verts or toggled.do_inv_verts)

def test_toggle_colors(settings):
    toggled = settings.replace(do_solid_color=False).toggled("do_inv_pol",
                                                             True)
    assert toggled.do_inv_pol and toggled.do_solid_color

    toggled = toggled.toggled("do_solid_color", False)
    assert not toggled.do_solid_color and not toggled.do_inv_pol

def test_toggle_plain(settings):
    toggled = settings.toggled("do_parity", True)
    assert toggled.do_parity
    assert toggled.replace(do_parity=False) == settings

def test_rotating_snakes():
    settings = preset_settings(Preset.ROTATING_SNAKES)
    assert (settings.p, settings.q) == (5, 5)
    assert settings.model is Model.POINCARE
    assert settings.do_snake and settings.do_solid_color
    assert not (settings.do_edges or settings.do_verts or settings.do_orns
                or settings.do_inv_pol)

def test_primrose_field():
    settings = preset_settings("primrose_field")
    assert (settings.p, settings.q, settings.e_thickness) == (4, 6, 0.02)
    assert settings.do_orns and settings.do_inv_verts
    assert not settings.do_verts and not settings.do_edges
    assert settings.do_inv_pol
    assert (settings.polygon_col_idx, settings.inv_polygon_col_idx,
            settings.vert_col_idx, settings.inv_vert_col_idx) == (7, 8, 0, 9)

def test_scintillating_grid():
    settings = preset_settings(Preset.SCINTILLATING_GRID)
    assert (settings.p, settings.q, settings.e_thickness) == (3, 7, 0.015)
    assert settings.do_verts and settings.do_edges
    assert settings.do_v0v1 and settings.do_v2v0 and not settings.do_v1v2
    assert (settings.edge_col_idx, settings.polygon_col_idx,
            settings.vert_col_idx) == (6, 2, 0)

def test_hermann_grid():
    settings = preset_settings(Preset.HERMANN_GRID)
    assert (settings.p, settings.q, settings.e_thickness) == (4, 5, 0.02)
    assert settings.do_v0v1 and settings.do_v1v2 and not settings.do_v2v0
    assert (settings.edge_col_idx, settings.polygon_col_idx) == (0, 2)

def test_presets_from_scratch():
    # presets never depend on what was set before
    for preset in Preset:
        assert preset_settings(preset) == preset_settings(preset.value)
        settings = preset_settings(preset)
        settings.descriptor()

    assert preset_settings(Preset.DEFAULT) == RenderSettings()

def test_preset_overrides():
    settings = preset_settings("hermann_grid", n_samples=1, p=6)
    assert settings.n_samples == 1
    assert settings.p == 6
    assert settings.edge_col_idx == 0

def test_unknown_preset():
    with pytest.raises(ValueError):
        preset_settings("op_art")
