# -*- coding: utf-8 -*-
"""
Double Wavelength Command Tests.

Tests hyperstack iteration, output labels and dtypes, progress
reporting, depth mismatch handling, and parameter validation of
``DoubleWavelengthCommand``.

Dependencies
------------
pytest

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

import logging

import numpy as np
import pytest

from dhml.exceptions import ValidationError
from dhml.phase_unwrapping import (
    COARSE_LABEL,
    FINE_LABEL,
    STAGE_LABELS,
    DoubleWavelengthCommand,
    DoubleWavelengthUnwrap,
    PhaseImage,
    as_hyperstack,
)


@pytest.fixture
def command(w1, w2):
    return DoubleWavelengthCommand(wavelength1=w1,
                                   wavelength2=w2)


@pytest.fixture
def stacks(true_opl, w1, w2, wrap_phase):
    """(T=2, Z=3) stacks built from offset copies of ``true_opl``."""
    offsets = np.arange(6, dtype=np.float64).reshape(2, 3) * 10.0
    opl = true_opl[np.newaxis, np.newaxis] + offsets[:, :, np.newaxis, np.newaxis]
    return (
        wrap_phase(opl, w1),
        wrap_phase(opl, w2),
        opl,
    )


# ---------------------------------------------------------------------------
# as_hyperstack
# ---------------------------------------------------------------------------

class TestAsHyperstack:

    def test_plane(self):
        assert as_hyperstack(np.zeros((4, 5))).shape == (1, 1, 4, 5)

    def test_z_stack(self):
        assert as_hyperstack(np.zeros((3, 4, 5))).shape == (1, 3, 4, 5)

    def test_hyperstack_unchanged(self):
        stack = np.zeros((2, 3, 4, 5))
        assert as_hyperstack(stack) is stack

    @pytest.mark.parametrize('shape', [(5,), (1, 2, 3, 4, 5)])
    def test_bad_ndim_raises(self, shape):
        with pytest.raises(ValidationError, match="phase_stack1"):
            as_hyperstack(np.zeros(shape), 'phase_stack1')


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

class TestDoubleWavelengthCommandOutputs:

    def test_labels_and_shapes(self, command, stacks):
        s1, s2, _ = stacks
        outputs = command.run(s1, s2)
        assert list(outputs) == [COARSE_LABEL, FINE_LABEL]
        for stack in outputs.values():
            assert stack.shape == (2, 3, 24, 32)
            assert stack.dtype == np.float32

    def test_fine_map_recovers_every_plane(self, command, stacks):
        s1, s2, opl = stacks
        outputs = command.run(s1, s2)
        np.testing.assert_allclose(outputs[FINE_LABEL], opl, atol=1e-3,
                                   rtol=1e-6)

    def test_matches_per_plane_unwrap(self, command, stacks, w1, w2):
        s1, s2, _ = stacks
        outputs = command.run(s1, s2)
        op = DoubleWavelengthUnwrap()
        for t in range(2):
            for z in range(3):
                result = op.unwrap(PhaseImage(s1[t, z], w1),
                                   PhaseImage(s2[t, z], w2))
                np.testing.assert_array_equal(
                    outputs[COARSE_LABEL][t, z],
                    result.coarse.astype(np.float32),
                )
                np.testing.assert_array_equal(
                    outputs[FINE_LABEL][t, z],
                    result.fine.astype(np.float32),
                )

    def test_single_plane_input(self, command, phase_pair):
        p1, p2 = phase_pair
        outputs = command.run(p1, p2)
        assert outputs[FINE_LABEL].shape == (1, 1) + p1.shape

    def test_z_stack_input(self, command, stacks):
        s1, s2, _ = stacks
        outputs = command.run(s1[0], s2[0])
        assert outputs[COARSE_LABEL].shape == (1, 3, 24, 32)

    def test_debug_outputs_all_stages(self, stacks, w1, w2):
        s1, s2, _ = stacks
        cmd = DoubleWavelengthCommand(wavelength1=w1,
                                      wavelength2=w2, debug=True)
        outputs = cmd.run(s1, s2)
        assert tuple(outputs) == STAGE_LABELS
        for stack in outputs.values():
            assert stack.shape == (2, 3, 24, 32)
            assert stack.dtype == np.float32

    def test_debug_runtime_override(self, command, stacks):
        s1, s2, _ = stacks
        assert tuple(command.run(s1, s2, debug=True)) == STAGE_LABELS
        assert list(command.run(s1, s2)) == [COARSE_LABEL, FINE_LABEL]

    def test_combined_wavelength_set_after_run(self, command, stacks, combined):
        s1, s2, _ = stacks
        assert command.combined_wavelength is None
        command.run(s1, s2)
        assert command.combined_wavelength == pytest.approx(combined)

    def test_phase_value_used(self, true_opl, w1, w2, wrap_phase):
        p1 = wrap_phase(true_opl, w1, phase_value=4096.0)
        p2 = wrap_phase(true_opl, w2, phase_value=4096.0)
        cmd = DoubleWavelengthCommand(wavelength1=w1,
                                      wavelength2=w2,
                                      phase_value=4096.0)
        outputs = cmd.run(p1, p2)
        np.testing.assert_allclose(outputs[FINE_LABEL][0, 0], true_opl,
                                   atol=1e-3, rtol=1e-6)


# ---------------------------------------------------------------------------
# Progress and depth handling
# ---------------------------------------------------------------------------

class TestDoubleWavelengthCommandIteration:

    def test_progress_per_plane(self, command, stacks):
        s1, s2, _ = stacks
        fractions = []
        command.run(s1, s2, progress_callback=fractions.append)
        assert fractions == pytest.approx([1 / 6, 2 / 6, 3 / 6,
                                           4 / 6, 5 / 6, 1.0])

    def test_no_progress_for_single_plane(self, command, phase_pair):
        p1, p2 = phase_pair
        fractions = []
        command.run(p1, p2, progress_callback=fractions.append)
        assert fractions == []

    def test_depth_mismatch_uses_common_planes(self, command, stacks, caplog):
        s1, s2, _ = stacks
        with caplog.at_level(logging.WARNING,
                             logger='dhml.phase_unwrapping.command'):
            outputs = command.run(s1, s2[:1, :2])
        assert outputs[FINE_LABEL].shape == (1, 2, 24, 32)
        assert "differ in depth" in caplog.text

    def test_iterates_frames_then_slices(self, command, stacks):
        s1, s2, opl = stacks
        outputs = command.run(s1, s2)
        # Slice offsets step by 10 nm, frame offsets by 30 nm.
        fine = outputs[FINE_LABEL].astype(np.float64)
        np.testing.assert_allclose(fine[0, 1] - fine[0, 0], 10.0, atol=1e-2)
        np.testing.assert_allclose(fine[1, 0] - fine[0, 0], 30.0, atol=1e-2)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class TestDoubleWavelengthCommandValidation:

    def test_missing_wavelength_raises(self, w1):
        with pytest.raises(TypeError, match="wavelength2"):
            DoubleWavelengthCommand(wavelength1=w1)

    def test_zero_wavelength_raises(self, w2):
        with pytest.raises(ValidationError, match="above"):
            DoubleWavelengthCommand(wavelength1=0.0, wavelength2=w2)

    def test_integer_wavelengths_accepted(self):
        cmd = DoubleWavelengthCommand(wavelength1=633, wavelength2=532)
        assert cmd.wavelength1 == 633

    def test_default_phase_value(self, command):
        assert command.phase_value == 256.0
        assert command.debug is False

    def test_equal_wavelengths_raise_on_run(self, phase_pair):
        p1, p2 = phase_pair
        cmd = DoubleWavelengthCommand(wavelength1=633.0, wavelength2=633.0)
        with pytest.raises(ValidationError, match="differ"):
            cmd.run(p1, p2)

    def test_plane_shape_mismatch_raises(self, command):
        with pytest.raises(ValidationError, match="same plane shape"):
            command.run(np.zeros((2, 8, 8)), np.zeros((2, 8, 9)))

    def test_five_dimensional_raises(self, command):
        with pytest.raises(ValidationError, match="phase_stack2"):
            command.run(np.zeros((1, 1, 8, 8)), np.zeros((1, 1, 1, 8, 8)))

    def test_empty_stack_raises(self, command):
        with pytest.raises(ValidationError, match="no planes"):
            command.run(np.zeros((0, 8, 8)), np.zeros((2, 8, 8)))

    def test_nan_plane_raises(self, command, phase_pair):
        p1, p2 = phase_pair
        p1 = p1.copy()
        p1[0, 0] = np.nan
        with pytest.raises(ValidationError, match="NaN"):
            command.run(p1, p2)
