# -*- coding: utf-8 -*-
"""
Double Wavelength Phase Unwrapping - Two-wavelength optical path recovery.

A phase image recorded at a single wavelength ``w`` only determines the
optical path length modulo ``w``. Recording the same object at a second
wavelength and taking the phase difference yields the phase at the much
longer synthetic (beat) wavelength::

    L = w1 * w2 / |w1 - w2|

which is unambiguous over ``L`` but amplifies noise by ``L / w1``. The
coarse map is then used only to pick the integer fringe order of
wavelength 1, whose own phase supplies the low-noise fine map.

Algorithm
---------
With ``phi_k`` the phase of image ``k`` in cycles:

a. ``a = phi1 * w1`` -- wrapped optical path of image 1 (nm)
b. ``b = phi2 * w2`` -- wrapped optical path of image 2 (nm)
c. ``c = wrap01(phi1 - phi2)`` (sign flipped when ``w1 > w2``)
d. ``d = c * L`` -- coarse map (nm)
e. ``e = round((d - a) / w1)`` -- fringe order of wavelength 1
f. ``f = e * w1 + a`` -- coarse map snapped to the phase of image 1
g. ``g = f mod L`` -- fine map, folded into the coarse map's range

Every fine-map pixel lies within ``w1 / 2`` of its coarse-map pixel
(modulo ``L``).

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
import logging
from collections import OrderedDict
from typing import Annotated, Any

# Third-party
import numpy as np

# DHML internal
from dhml.exceptions import ValidationError
from dhml.image_processing._validation import validate_positive
from dhml.image_processing.base import ImageProcessor
from dhml.image_processing.params import Desc
from dhml.image_processing.versioning import processor_tags, processor_version
from dhml.phase_unwrapping.models import (
    DoubleWavelengthResult,
    PhaseImage,
    STAGE_COARSE,
    STAGE_DIFFERENCE,
    STAGE_FINE,
    STAGE_ORDER,
    STAGE_PHASE_1,
    STAGE_PHASE_2,
    STAGE_ROUNDED,
)
from dhml.vocabulary import ImageModality, ProcessorCategory

logger = logging.getLogger(__name__)


def combined_wavelength(wavelength1: float, wavelength2: float) -> float:
    """Synthetic wavelength of two recording wavelengths.

    Parameters
    ----------
    wavelength1, wavelength2 : float
        Recording wavelengths (any common unit, typically nm).

    Returns
    -------
    float
        ``w1 * w2 / |w1 - w2|`` in the same unit.

    Raises
    ------
    ValidationError
        If either wavelength is not positive, or they are equal.
    """
    validate_positive(wavelength1, 'wavelength1')
    validate_positive(wavelength2, 'wavelength2')
    if wavelength1 == wavelength2:
        raise ValidationError(
            f"Wavelengths must differ to form a combined wavelength, "
            f"both are {wavelength1!r}"
        )
    w1 = float(wavelength1)
    w2 = float(wavelength2)
    return w1 * w2 / abs(w1 - w2)


def _wrap_unit(values: np.ndarray, period: float = 1.0) -> np.ndarray:
    """Wrap *values* into ``[0, period)``."""
    wrapped = np.mod(values, period)
    # np.mod of a tiny negative number rounds up to exactly `period`.
    wrapped[wrapped >= period] = 0.0
    return wrapped


@processor_version('1.0.0')
@processor_tags(
    modalities=[ImageModality.PHASE],
    category=ProcessorCategory.PHASE_UNWRAPPING,
    description='Double Wavelength Phase Unwrapping',
)
class DoubleWavelengthUnwrap(ImageProcessor):
    """Unwrap two single-wavelength phase planes into coarse and fine maps.

    Parameters
    ----------
    debug : bool
        Keep every intermediate stage in ``DoubleWavelengthResult.stages``.
        Default False. May be overridden per call.

    Examples
    --------
    >>> from dhml.phase_unwrapping import DoubleWavelengthUnwrap, PhaseImage
    >>> op = DoubleWavelengthUnwrap()
    >>> result = op.unwrap(PhaseImage(p1, 633), PhaseImage(p2, 532))
    >>> result.combined_wavelength
    3334.5...
    """

    debug: Annotated[bool, Desc('Keep intermediate stages a-g')] = False

    def unwrap(
        self,
        image1: PhaseImage,
        image2: PhaseImage,
        **kwargs: Any,
    ) -> DoubleWavelengthResult:
        """Combine two wrapped phase planes.

        Parameters
        ----------
        image1 : PhaseImage
            Phase plane providing the fine-map phase.
        image2 : PhaseImage
            Phase plane at a second wavelength.
        **kwargs
            ``debug`` overrides the instance setting.

        Returns
        -------
        DoubleWavelengthResult

        Raises
        ------
        ValidationError
            If either image is invalid, the plane shapes differ, or the
            wavelengths are equal.
        """
        params = self._resolve_params(kwargs)
        image1.validate()
        image2.validate()
        if image1.shape != image2.shape:
            raise ValidationError(
                f"Phase images must have the same shape, got "
                f"{image1.shape} and {image2.shape}"
            )

        w1 = float(image1.wavelength)
        w2 = float(image2.wavelength)
        big_l = combined_wavelength(w1, w2)
        logger.debug("Unwrapping %s planes at %.1f/%.1f nm, combined %.1f nm",
                     image1.shape, w1, w2, big_l)

        phi1 = image1.cycles
        phi2 = image2.cycles
        path1 = phi1 * w1
        path2 = phi2 * w2

        if w1 < w2:
            difference = _wrap_unit(phi1 - phi2)
        else:
            difference = _wrap_unit(phi2 - phi1)
        coarse = difference * big_l
        order = np.round((coarse - path1) / w1)
        rounded = order * w1 + path1
        fine = _wrap_unit(rounded, big_l)

        stages = OrderedDict()
        if params['debug']:
            stages[STAGE_PHASE_1] = path1
            stages[STAGE_PHASE_2] = path2
            stages[STAGE_DIFFERENCE] = difference
            stages[STAGE_COARSE] = coarse
            stages[STAGE_ORDER] = order
            stages[STAGE_ROUNDED] = rounded
            stages[STAGE_FINE] = fine

        return DoubleWavelengthResult(
            coarse=coarse,
            fine=fine,
            combined_wavelength=big_l,
            stages=stages,
        )
