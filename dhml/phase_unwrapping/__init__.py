# -*- coding: utf-8 -*-
"""
Phase Unwrapping Module - Double-wavelength phase unwrapping for DHM.

Sub-modules
-----------
models.py
    ``PhaseImage`` input bundle, ``DoubleWavelengthResult``, stage labels.
double_wavelength.py
    ``DoubleWavelengthUnwrap`` per-plane operation and
    ``combined_wavelength``.
command.py
    ``DoubleWavelengthCommand`` over (T, Z) phase hyperstacks.

Usage
-----
    >>> from dhml.phase_unwrapping import DoubleWavelengthCommand
    >>> cmd = DoubleWavelengthCommand(wavelength1=633, wavelength2=532)
    >>> maps = cmd.run(phase_633, phase_532)
    >>> coarse, fine = maps['Coarse Map'], maps['Fine Map']

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

from dhml.phase_unwrapping.models import (
    COARSE_LABEL,
    DEFAULT_PHASE_VALUE,
    FINE_LABEL,
    STAGE_LABELS,
    DoubleWavelengthResult,
    PhaseImage,
)
from dhml.phase_unwrapping.double_wavelength import (
    DoubleWavelengthUnwrap,
    combined_wavelength,
)
from dhml.phase_unwrapping.command import DoubleWavelengthCommand, as_hyperstack

__all__ = [
    'PhaseImage',
    'DoubleWavelengthResult',
    'DoubleWavelengthUnwrap',
    'DoubleWavelengthCommand',
    'combined_wavelength',
    'as_hyperstack',
    'STAGE_LABELS',
    'COARSE_LABEL',
    'FINE_LABEL',
    'DEFAULT_PHASE_VALUE',
]
