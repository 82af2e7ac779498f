"""Encode the state of a rendering as a shareable URL fragment.

The shared state is a single flat JSON object holding every field of
the `RenderSettings` (with the model stored as its integer index) and
every field of the `TilingDescriptor`, base64-encoded. Decoding gives
back the settings and the exact descriptor that was stored, so a
shared link renders identically even if the geometry code changes.

```python
from hyperbolic_illusion import sharing
from hyperbolic_illusion.settings import preset_settings

url = sharing.share_url("https://example.com/",
                        preset_settings("primrose_field"))
settings, descriptor = sharing.decode_state(url)
settings.p, settings.q
```
    (4, 6)

"""

import base64
import binascii
import json
import logging

from hyperbolic_illusion.base import GeometryError, SharingError
from hyperbolic_illusion.settings import RenderSettings
from hyperbolic_illusion.tiling import (
    TilingDescriptor,
    POINT_FIELDS,
    CIRCLE_FIELDS,
    is_hyperbolic
)

logger = logging.getLogger(__name__)

DESCRIPTOR_KEYS = frozenset(
    ("p", "q", "e_thickness", "inv_rad") + POINT_FIELDS +
    tuple(name + suffix for name in CIRCLE_FIELDS
          for suffix in ("_center", "_radius"))
)

def state_dict(settings, descriptor=None):
    """Flatten settings and tiling geometry into one JSON-ready dict.

    The descriptor (if given) must be the one for the tiling and edge
    thickness in `settings`, otherwise this raises `ValueError`.

    """
    if descriptor is None:
        descriptor = settings.descriptor()
    elif ((descriptor.p, descriptor.q, descriptor.e_thickness) !=
          (settings.p, settings.q, settings.e_thickness)):
        raise ValueError(
            "Descriptor for {{{}, {}}} does not match the settings for"
            " {{{}, {}}}".format(descriptor.p, descriptor.q,
                                 settings.p, settings.q)
        )

    state = descriptor.as_dict()
    for name in RenderSettings.field_names():
        state[name] = getattr(settings, name)

    state["model"] = settings.model.value
    return state

def encode_state(settings, descriptor=None):
    """Encode settings and tiling geometry as a base64 string."""
    state = json.dumps(state_dict(settings, descriptor),
                       separators=(",", ":"))
    return base64.b64encode(state.encode("utf-8")).decode("ascii")

def share_url(base, settings, descriptor=None):
    """Get a URL with the encoded state as its fragment.

    Any fragment already present in `base` is replaced.

    """
    return "{}#{}".format(base.split("#", 1)[0],
                          encode_state(settings, descriptor))

def _settings_from_state(state):
    settings_fields = set(RenderSettings.field_names())
    kwargs = {name: value for name, value in state.items()
              if name in settings_fields}

    try:
        return RenderSettings(**kwargs)
    except (ValueError, TypeError) as err:
        raise SharingError(
            "Invalid settings in shared state: {}".format(err)
        ) from err

def _descriptor_from_state(state, settings):
    present = DESCRIPTOR_KEYS.intersection(state)

    # a state with no geometry at all just gets it regenerated
    if present <= {"p", "q", "e_thickness"}:
        try:
            return settings.descriptor()
        except GeometryError as err:
            raise SharingError(
                "Invalid tiling in shared state: {}".format(err)
            ) from err

    missing = DESCRIPTOR_KEYS - present
    if missing:
        raise SharingError(
            "Shared state is missing tiling fields: {}".format(
                ", ".join(sorted(missing)))
        )

    try:
        return TilingDescriptor.from_dict(state)
    except (GeometryError, ZeroDivisionError, ValueError, TypeError) as err:
        raise SharingError(
            "Invalid tiling in shared state: {}".format(err)
        ) from err

def _check_tiling(settings):
    p, q, e_thickness = settings.p, settings.q, settings.e_thickness
    try:
        if p < 3 or q < 3 or not is_hyperbolic(p, q):
            raise SharingError(
                "Shared state has non-hyperbolic tiling {{{}, {}}}".format(
                    p, q)
            )
        if not e_thickness > 0:
            raise SharingError(
                "Shared state has non-positive edge thickness {}".format(
                    e_thickness)
            )
    except TypeError as err:
        raise SharingError(
            "Invalid tiling in shared state: {}".format(err)
        ) from err

def decode_state(fragment):
    """Decode a shared state.

    Parameters
    ----------
    fragment : str
        the encoded state, either on its own, with a leading '#', or
        as the fragment of a full URL

    Returns
    -------
    tuple(RenderSettings, TilingDescriptor)

    Raises
    ------
    SharingError
        Raised if the state can't be decoded, or doesn't describe a
        hyperbolic tiling.

    """
    if "#" in fragment:
        fragment = fragment.split("#", 1)[1]

    try:
        decoded = base64.b64decode(fragment.encode("ascii"), validate=True)
        state = json.loads(decoded.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as err:
        raise SharingError("Could not decode shared state") from err

    if not isinstance(state, dict):
        raise SharingError("Shared state must be a JSON object")

    unknown = set(state) - DESCRIPTOR_KEYS - set(RenderSettings.field_names())
    if unknown:
        logger.warning("Ignoring unknown keys in shared state: %s",
                       ", ".join(sorted(unknown)))

    settings = _settings_from_state(state)
    _check_tiling(settings)

    return settings, _descriptor_from_state(state, settings)
