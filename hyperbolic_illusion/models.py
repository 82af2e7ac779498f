"""Map the various models of the hyperbolic plane to the Poincare disk.

The renderer draws everything in the Poincare disk, so to display a
tiling in some other model we take each point of the view, interpret
it as a point in that model, and map it to the disk. All of the maps
here act elementwise on numpy arrays of complex numbers (or on single
complex numbers):

```python
import numpy as np
from hyperbolic_illusion.models import Model

Model.KLEIN.to_disk(np.array([0.6, 0.6j]))
```
    array([0.33333333+0.j        , 0.        +0.33333333j])

Points with no image in the disk come out as non-finite numbers or
land outside the unit circle.

"""

from enum import Enum

import numpy as np

from hyperbolic_illusion.complex_plane import Complex

#how far we zoom out of models which fill up the whole plane
GANS_SCALE = 10.
MAP_SCALE = 3.

class Model(Enum):
    """Enumerate the implemented models of the hyperbolic plane.

    Each model has an integer index (its value) and a handful of
    aliases. Models can be compared to strings with the == operator,
    which returns `True` if the string matches any alias (case
    insensitive).

    """
    POINCARE = 0
    HALFPLANE = 1
    KLEIN = 2
    INVERTED_POINCARE = 3
    GANS = 4
    AZIMUTHAL_EQUIDISTANT = 5
    EQUAL_AREA = 6
    BAND = 7

    # enum treats members with repeated values as aliases
    DISK = 0
    HALFSPACE = 1
    KLEINIAN = 2
    BELTRAMI_KLEIN = 2
    POINCARE_COMPLEMENT = 3
    EQUIDISTANT = 5

    def aliases(self):
        """List all of the different accepted names for this model."""
        return [name for name, member in Model.__members__.items()
                if member is self]

    def __eq__(self, other):
        if self is other:
            return True

        try:
            if other.upper() in self.aliases():
                return True
        except AttributeError:
            pass

        return False

    __hash__ = Enum.__hash__

    @property
    def label(self):
        return MODEL_LABELS[self]

    @staticmethod
    def get(model):
        """Look up a model by member, integer index, or alias name."""
        if isinstance(model, Model):
            return model

        if isinstance(model, str):
            try:
                return Model[model.upper()]
            except KeyError:
                pass
            raise ValueError("Unknown model '{}'".format(model))

        return Model(model)

    def to_disk(self, z):
        """Map points of this model to the Poincare disk.

        Parameters
        ----------
        z : complex, ndarray of complex, or Complex
            points of the view, interpreted as points in this model

        Returns
        -------
        same type as `z`
            the corresponding points of the Poincare disk

        """
        if isinstance(z, Complex):
            return Complex.from_complex(complex(self.to_disk(complex(z))))

        with np.errstate(divide="ignore", invalid="ignore"):
            return _MODEL_MAPS[self](np.asarray(z, dtype=complex))

def _halfplane(z):
    z = z + 1j
    return (z - 1j) / (z + 1j)

def _klein(z):
    return z / (1 + np.sqrt(1 - np.abs(z)**2))

def _inverted_poincare(z):
    return 1 / (z * MAP_SCALE)

def _gans(z):
    z = z * GANS_SCALE
    return z / (1 + np.sqrt(1 + np.abs(z)**2))

def _azimuthal_equidistant(z):
    z = z * MAP_SCALE
    norm = np.abs(z)

    # the origin is sent to itself
    direction = np.where(norm > 0, z / np.where(norm > 0, norm, 1.), 0.)
    return direction * np.tanh(norm * 0.5)

def _equal_area(z):
    z = z * MAP_SCALE
    return z / np.sqrt(1 + np.abs(z)**2)

_MODEL_MAPS = {
    Model.POINCARE: lambda z: z,
    Model.HALFPLANE: _halfplane,
    Model.KLEIN: _klein,
    Model.INVERTED_POINCARE: _inverted_poincare,
    Model.GANS: _gans,
    Model.AZIMUTHAL_EQUIDISTANT: _azimuthal_equidistant,
    Model.EQUAL_AREA: _equal_area,
    Model.BAND: np.tanh
}

MODEL_LABELS = {
    Model.POINCARE: "Poincaré disk",
    Model.HALFPLANE: "Upper half-plane model",
    Model.KLEIN: "Beltrami-Klein disk",
    Model.INVERTED_POINCARE: "Poincaré disk complement",
    Model.GANS: "Gans model",
    Model.AZIMUTHAL_EQUIDISTANT: "Azimuthal equidistant projection",
    Model.EQUAL_AREA: "Equal-area projection",
    Model.BAND: "Band model"
}
