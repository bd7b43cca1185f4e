# -*- coding: utf-8 -*-
"""
Phase Unwrapping Models - Inputs and results of double-wavelength unwrapping.

``PhaseImage`` bundles a wrapped phase plane with the wavelength it was
recorded at and the pixel value that represents one full phase cycle.
``DoubleWavelengthResult`` carries the coarse and fine optical path maps
and, in debug mode, every intermediate stage.

Author
------
DHML contributors

License
-------
MIT License
Copyright (c) 2026 DHML contributors
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

# Standard library
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict

# Third-party
import numpy as np

# DHML internal
from dhml.image_processing._validation import validate_plane, validate_positive

#: Default pixel value of one phase cycle (8-bit phase images), not 2*pi.
DEFAULT_PHASE_VALUE = 256.0

#: Intermediate stage labels, in computation order.
STAGE_PHASE_1 = 'Phase Image 1 (a)'
STAGE_PHASE_2 = 'Phase Image 2 (b)'
STAGE_DIFFERENCE = 'Phase Difference (c)'
STAGE_COARSE = 'Coarse Map (d)'
STAGE_ORDER = 'Round to Phase 1 (e)'
STAGE_ROUNDED = 'Round + Phase 1 (f)'
STAGE_FINE = 'Fine Map (g)'

STAGE_LABELS = (
    STAGE_PHASE_1,
    STAGE_PHASE_2,
    STAGE_DIFFERENCE,
    STAGE_COARSE,
    STAGE_ORDER,
    STAGE_ROUNDED,
    STAGE_FINE,
)

COARSE_LABEL = 'Coarse Map'
FINE_LABEL = 'Fine Map'


@dataclass
class PhaseImage:
    """A wrapped phase plane recorded at a single wavelength.

    Parameters
    ----------
    phase_image : np.ndarray
        2D wrapped phase, in pixel units where ``phase_value`` is one
        full cycle.
    wavelength : float
        Recording wavelength in nanometres.
    phase_value : float
        Pixel value corresponding to a 2*pi phase shift. Default 256.
    """

    phase_image: np.ndarray
    wavelength: float
    phase_value: float = DEFAULT_PHASE_VALUE

    def validate(self) -> None:
        """Check plane, wavelength and phase value.

        Raises
        ------
        ValidationError
            If the plane is not a finite real 2D array, or the wavelength
            or phase value is not strictly positive.
        """
        self.phase_image = validate_plane(self.phase_image, 'phase_image')
        validate_positive(self.wavelength, 'wavelength')
        validate_positive(self.phase_value, 'phase_value')

    @property
    def shape(self):
        return np.shape(self.phase_image)

    @property
    def cycles(self) -> np.ndarray:
        """Phase as a fraction of one cycle."""
        return np.asarray(self.phase_image, dtype=np.float64) / self.phase_value

    @property
    def optical_path(self) -> np.ndarray:
        """Wrapped optical path length in nanometres, within one wavelength."""
        return self.cycles * self.wavelength


@dataclass
class DoubleWavelengthResult:
    """Output of one double-wavelength unwrapping.

    Attributes
    ----------
    coarse : np.ndarray
        Coarse optical path map in nm, in ``[0, combined_wavelength)``.
    fine : np.ndarray
        Fine optical path map in nm, in ``[0, combined_wavelength)``.
    combined_wavelength : float
        Synthetic wavelength in nm.
    stages : Dict[str, np.ndarray]
        Intermediate stages keyed by ``STAGE_LABELS``; empty unless
        computed in debug mode.
    """

    coarse: np.ndarray
    fine: np.ndarray
    combined_wavelength: float
    stages: Dict[str, np.ndarray] = field(default_factory=OrderedDict)

    def outputs(self) -> Dict[str, np.ndarray]:
        """Labelled output planes: all stages in debug mode, else coarse/fine."""
        if self.stages:
            return OrderedDict((label, self.stages[label])
                               for label in STAGE_LABELS)
        return OrderedDict([(COARSE_LABEL, self.coarse),
                            (FINE_LABEL, self.fine)])
