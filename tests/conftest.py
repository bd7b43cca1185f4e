# -*- coding: utf-8 -*-
"""
Shared test fixtures - Synthetic holograms and wrapped phase images.

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

import numpy as np
import pytest

WAVELENGTH_1 = 633.0
WAVELENGTH_2 = 532.0
COMBINED = WAVELENGTH_1 * WAVELENGTH_2 / abs(WAVELENGTH_1 - WAVELENGTH_2)


def _wrap_phase(opl, wavelength, phase_value=256.0):
    """Wrapped phase (pixel units) of optical path *opl* at *wavelength*."""
    return np.mod(opl / wavelength, 1.0) * phase_value


@pytest.fixture
def w1():
    """Wavelength of the first phase image (nm)."""
    return WAVELENGTH_1


@pytest.fixture
def w2():
    """Wavelength of the second phase image (nm)."""
    return WAVELENGTH_2


@pytest.fixture
def combined():
    """Synthetic wavelength of ``w1`` and ``w2`` (nm)."""
    return COMBINED


@pytest.fixture
def wrap_phase():
    """Helper wrapping an optical path map into pixel phase units."""
    return _wrap_phase


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def flat_image():
    return np.full((32, 32), 50.0)


@pytest.fixture
def random_image(rng):
    return rng.uniform(0.0, 100.0, size=(40, 48))


@pytest.fixture
def fringe_image():
    """Vertical cosine fringes with a period of 4 px (values 20 to 180)."""
    cols = np.arange(64)
    row = 100.0 + 80.0 * np.cos(2 * np.pi * cols / 4.0)
    return np.tile(row, (48, 1))


@pytest.fixture
def true_opl():
    """Smooth optical path map inside the unambiguous range (nm)."""
    rows, cols = np.mgrid[0:24, 0:32]
    return 0.2 * COMBINED + 0.6 * COMBINED * (rows + cols) / (23 + 31)


@pytest.fixture
def phase_pair(true_opl):
    """Wrapped phase planes of ``true_opl`` at the two test wavelengths."""
    return (
        _wrap_phase(true_opl, WAVELENGTH_1),
        _wrap_phase(true_opl, WAVELENGTH_2),
    )
