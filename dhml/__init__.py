# -*- coding: utf-8 -*-
"""
DHML - Digital Holographic Microscopy Library.

Building blocks for analysing digital holographic microscopy data:
hologram fringe visibility and double-wavelength phase unwrapping, plus
ImageJ-compatible TIFF hyperstack IO and a ``dhml`` command line.

Dependencies
------------
numpy
scipy
tifffile

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

__version__ = "0.1.0"

from dhml.exceptions import (
    DhmlError,
    ValidationError,
)
from dhml.vocabulary import ImageModality, ProcessorCategory
from dhml.image_processing import FringeVisibility
from dhml.phase_unwrapping import (
    DoubleWavelengthCommand,
    DoubleWavelengthResult,
    DoubleWavelengthUnwrap,
    PhaseImage,
    combined_wavelength,
)

__all__ = [
    'DhmlError',
    'ValidationError',
    'ImageModality',
    'ProcessorCategory',
    'FringeVisibility',
    'PhaseImage',
    'DoubleWavelengthResult',
    'DoubleWavelengthUnwrap',
    'DoubleWavelengthCommand',
    'combined_wavelength',
]
