# -*- coding: utf-8 -*-
"""
Fringe Visibility - Local fringe contrast of a hologram.

Computes, for every pixel, the visibility of the interference fringes in
its neighborhood::

    V = (I_max - I_min) / (I_max + I_min)

where ``I_max`` and ``I_min`` are the extrema over a square window
centered on the pixel. Windows are clipped at the image border: pixels
outside the image are ignored rather than padded. Visibility is only
meaningful for non-negative intensities, so each plane is first shifted
by its own global minimum.

A visibility close to 1 indicates high-contrast fringes; flat regions and
regions without an object beam approach 0.

Dependencies
------------
scipy

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
from typing import Annotated, Any

# Third-party
import numpy as np
from scipy.ndimage import maximum_filter, minimum_filter

# DHML internal
from dhml.image_processing._validation import validate_plane
from dhml.image_processing.base import BandwiseTransformMixin, ImageTransform
from dhml.image_processing.params import Desc, Range
from dhml.image_processing.versioning import processor_tags, processor_version
from dhml.vocabulary import ImageModality, ProcessorCategory

logger = logging.getLogger(__name__)


@processor_version('1.0.0')
@processor_tags(
    modalities=[ImageModality.HOLOGRAM, ImageModality.INTENSITY],
    category=ProcessorCategory.ANALYZE,
    description='Local fringe visibility (max - min) / (max + min)',
)
class FringeVisibility(BandwiseTransformMixin, ImageTransform):
    """Per-pixel fringe visibility of a hologram.

    Parameters
    ----------
    radius : int
        Half-width of the square neighborhood; the window is
        ``(2 * radius + 1)`` pixels on a side. Default 1 (3x3).

    Examples
    --------
    >>> from dhml.image_processing import FringeVisibility
    >>> visibility = FringeVisibility().apply(hologram)

    Stacks of holograms are processed plane by plane:

    >>> stack_visibility = FringeVisibility(radius=2).apply(holograms)
    """

    radius: Annotated[int, Range(min=1, max=50),
                      Desc('Neighborhood half-width in pixels')] = 1

    def _apply_2d(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """Compute fringe visibility of a single 2D plane.

        Parameters
        ----------
        source : np.ndarray
            Real-valued 2D hologram, shape ``(rows, cols)``.

        Returns
        -------
        np.ndarray
            Visibility in ``[0, 1]``, same shape, float64.

        Raises
        ------
        ValidationError
            If the plane is empty, complex, or contains NaN/Inf.
        """
        params = self._resolve_params(kwargs)
        size = 2 * params['radius'] + 1
        plane = validate_plane(source)

        shifted = plane - plane.min()

        # 'nearest' replicates edge pixels, which leaves the window
        # extrema identical to a border-clipped window.
        local_max = maximum_filter(shifted, size=size, mode='nearest')
        local_min = minimum_filter(shifted, size=size, mode='nearest')

        total = local_max + local_min
        visibility = np.zeros_like(shifted)
        np.divide(local_max - local_min, total, out=visibility,
                  where=total != 0)
        logger.debug("Fringe visibility on %s plane, window %d",
                     plane.shape, size)
        return visibility
