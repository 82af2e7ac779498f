import base64
import json
import logging

import pytest

from hyperbolic_illusion.base import SharingError
from hyperbolic_illusion.models import Model
from hyperbolic_illusion import sharing
from hyperbolic_illusion.settings import preset_settings, RenderSettings
from hyperbolic_illusion.tiling import generate_tiling_params

from hyperbolic_illusion.utils.testing import *

@pytest.fixture
def settings():
    return preset_settings("primrose_field", model=Model.KLEIN)

def encode(state):
    return base64.b64encode(json.dumps(state).encode("utf-8")).decode("ascii")

def test_round_trip(settings):
    decoded_settings, descriptor = sharing.decode_state(
        sharing.encode_state(settings)
    )

    assert decoded_settings == settings
    assert decoded_settings.model is Model.KLEIN
    assert descriptor == settings.descriptor()
    assert_descriptors_equivalent(descriptor, settings.descriptor())

def test_model_stored_as_index(settings):
    state = sharing.state_dict(settings)
    assert state["model"] == 2
    assert state["inv_rad"] == settings.descriptor().inv_rad
    json.dumps(state)

def test_stored_descriptor_wins(settings):
    # stored geometry is used as-is rather than recomputed
    state = sharing.state_dict(settings)
    state["v2"] = [0.25, 0.25]

    _, descriptor = sharing.decode_state(encode(state))
    assert list(descriptor.v2) == [0.25, 0.25]
    assert descriptor.thick_edge_12 == settings.descriptor().thick_edge_12
    assert set(descriptor.edge_maps) == {"01", "12", "20"}

def test_mismatched_descriptor(settings):
    with pytest.raises(ValueError):
        sharing.encode_state(settings, generate_tiling_params(4, 6, 0.03))

def test_share_url(settings):
    url = sharing.share_url("https://example.com/tiling#old", settings)
    assert url.startswith("https://example.com/tiling#")
    assert "#old" not in url

    decoded_settings, _ = sharing.decode_state(url)
    assert decoded_settings == settings

    decoded_settings, _ = sharing.decode_state("#" + url.split("#")[1])
    assert decoded_settings == settings

def test_settings_only():
    state = {"p": 6, "q": 4, "e_thickness": 0.02, "do_snake": True}
    settings, descriptor = sharing.decode_state(encode(state))

    assert settings == RenderSettings(p=6, q=4, e_thickness=0.02,
                                      do_snake=True)
    assert descriptor is generate_tiling_params(6, 4, 0.02)

def test_unknown_keys(settings, caplog):
    state = sharing.state_dict(settings)
    state["zoom"] = 3

    with caplog.at_level(logging.WARNING):
        decoded_settings, _ = sharing.decode_state(encode(state))

    assert decoded_settings == settings
    assert "zoom" in caplog.text

def test_not_base64():
    with pytest.raises(SharingError):
        sharing.decode_state("#not base64!")

def test_not_json():
    fragment = base64.b64encode(b"{p: 4").decode("ascii")
    with pytest.raises(SharingError):
        sharing.decode_state(fragment)

def test_not_object():
    with pytest.raises(SharingError):
        sharing.decode_state(encode([4, 5]))

def test_missing_fields(settings):
    state = sharing.state_dict(settings)
    del state["v2"]
    del state["thick_edge_01_radius"]

    with pytest.raises(SharingError) as err:
        sharing.decode_state(encode(state))

    assert "v2" in str(err.value)

def test_bad_values(settings):
    state = sharing.state_dict(settings)
    state["model"] = 42
    with pytest.raises(SharingError):
        sharing.decode_state(encode(state))

    state = sharing.state_dict(settings)
    state["v1"] = [0.1, 0.2, 0.3]
    with pytest.raises(SharingError):
        sharing.decode_state(encode(state))

@pytest.mark.parametrize("key, value", [
    ("v2", [0, 0]),
    ("inv_rad", 5.0),
    ("e_thickness", -1),
    ("p", "4")
])
def test_bad_geometry(settings, key, value):
    state = sharing.state_dict(settings)
    state[key] = value
    with pytest.raises(SharingError):
        sharing.decode_state(encode(state))

@pytest.mark.parametrize("state", [
    {"p": 4, "q": 5, "e_thickness": 0},
    {"p": 3, "q": 7, "e_thickness": 0.07},
    {"p": 1, "q": -10}
])
def test_bad_settings_only(state):
    with pytest.raises(SharingError):
        sharing.decode_state(encode(state))

def test_not_hyperbolic():
    with pytest.raises(SharingError):
        sharing.decode_state(encode({"p": 3, "q": 3}))
