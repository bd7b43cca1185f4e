# -*- coding: utf-8 -*-
"""
Double Wavelength Command - Stack-level double-wavelength phase unwrapping.

Runs ``DoubleWavelengthUnwrap`` over every (time, z) plane of two phase
hyperstacks and gathers the per-plane outputs into labelled
``(T, Z, rows, cols)`` stacks. When the two stacks differ in depth only
the common leading frames and slices are processed.

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
from typing import Annotated, Any, Dict, Optional

# Third-party
import numpy as np

# DHML internal
from dhml.exceptions import ValidationError
from dhml.image_processing.base import ImageProcessor
from dhml.image_processing.params import Desc, Range
from dhml.image_processing.versioning import processor_tags, processor_version
from dhml.phase_unwrapping.double_wavelength import DoubleWavelengthUnwrap
from dhml.phase_unwrapping.models import DEFAULT_PHASE_VALUE, PhaseImage
from dhml.vocabulary import ImageModality, ProcessorCategory

logger = logging.getLogger(__name__)


def as_hyperstack(stack: np.ndarray, name: str = 'stack') -> np.ndarray:
    """View *stack* as a 4D ``(T, Z, rows, cols)`` array.

    2D planes become ``(1, 1, rows, cols)`` and 3D z-stacks become
    ``(1, Z, rows, cols)``.

    Raises
    ------
    ValidationError
        If *stack* has fewer than 2 or more than 4 dimensions.
    """
    stack = np.asarray(stack)
    if stack.ndim == 2:
        return stack[np.newaxis, np.newaxis]
    if stack.ndim == 3:
        return stack[np.newaxis]
    if stack.ndim == 4:
        return stack
    raise ValidationError(
        f"{name} must be 2D, 3D (Z, rows, cols) or 4D (T, Z, rows, cols), "
        f"got shape {stack.shape}"
    )


@processor_version('1.0.0')
@processor_tags(
    modalities=[ImageModality.PHASE],
    category=ProcessorCategory.STACKS,
    description='Double-wavelength unwrapping of phase hyperstacks',
)
class DoubleWavelengthCommand(ImageProcessor):
    """Double-wavelength phase unwrapping over two phase hyperstacks.

    Parameters
    ----------
    wavelength1 : float
        Wavelength of the first phase stack in nm. Required.
    wavelength2 : float
        Wavelength of the second phase stack in nm. Required.
    phase_value : float
        Pixel value corresponding to one full phase cycle. Default 256.
    debug : bool
        Output all seven intermediate stages instead of only the coarse
        and fine maps. Default False.

    Attributes
    ----------
    combined_wavelength : float or None
        Synthetic wavelength of the last run, in nm.

    Examples
    --------
    >>> cmd = DoubleWavelengthCommand(wavelength1=633, wavelength2=532)
    >>> outputs = cmd.run(stack1, stack2,
    ...                   progress_callback=lambda f: print(f"{f:.0%}"))
    >>> outputs['Fine Map'].shape
    (t, z, rows, cols)
    """

    wavelength1: Annotated[float, Range(min=0, exclusive_min=True),
                           Desc('Wavelength of phase image 1 (nm)')]
    wavelength2: Annotated[float, Range(min=0, exclusive_min=True),
                           Desc('Wavelength of phase image 2 (nm)')]
    phase_value: Annotated[float, Range(min=0, exclusive_min=True),
                           Desc('Pixel value of one full phase cycle')] = DEFAULT_PHASE_VALUE
    debug: Annotated[bool, Desc('Output intermediate stages a-g')] = False

    def __post_init__(self) -> None:
        self.combined_wavelength: Optional[float] = None

    def run(
        self,
        phase_stack1: np.ndarray,
        phase_stack2: np.ndarray,
        **kwargs: Any,
    ) -> Dict[str, np.ndarray]:
        """Unwrap every common (t, z) plane of two phase stacks.

        Parameters
        ----------
        phase_stack1 : np.ndarray
            Phase planes at ``wavelength1``: 2D, ``(Z, rows, cols)`` or
            ``(T, Z, rows, cols)``.
        phase_stack2 : np.ndarray
            Phase planes at ``wavelength2``, same plane shape.
        **kwargs
            Parameter overrides and an optional ``progress_callback``
            receiving the completed fraction after each plane. No
            progress is reported for single-plane runs.

        Returns
        -------
        Dict[str, np.ndarray]
            Ordered mapping of output label to float32
            ``(T, Z, rows, cols)`` stack.

        Raises
        ------
        ValidationError
            If the stacks have unsupported dimensionality, different
            plane shapes, or the planes are not valid phase images.
        """
        params = self._resolve_params(kwargs)
        stack1 = as_hyperstack(phase_stack1, 'phase_stack1')
        stack2 = as_hyperstack(phase_stack2, 'phase_stack2')
        if stack1.shape[2:] != stack2.shape[2:]:
            raise ValidationError(
                f"Phase stacks must have the same plane shape, got "
                f"{stack1.shape[2:]} and {stack2.shape[2:]}"
            )

        t_size = min(stack1.shape[0], stack2.shape[0])
        z_size = min(stack1.shape[1], stack2.shape[1])
        if t_size == 0 or z_size == 0:
            raise ValidationError("Phase stacks contain no planes")
        if stack1.shape[:2] != stack2.shape[:2]:
            logger.warning(
                "Phase stacks differ in depth (%s vs %s); processing the "
                "first %d frame(s) x %d slice(s)",
                stack1.shape[:2], stack2.shape[:2], t_size, z_size,
            )

        op = DoubleWavelengthUnwrap(debug=params['debug'])
        final_size = t_size * z_size
        outputs: Dict[str, np.ndarray] = OrderedDict()
        i = 0
        for t in range(t_size):
            for z in range(z_size):
                result = op.unwrap(
                    PhaseImage(stack1[t, z], params['wavelength1'],
                               params['phase_value']),
                    PhaseImage(stack2[t, z], params['wavelength2'],
                               params['phase_value']),
                )
                for label, plane in result.outputs().items():
                    if label not in outputs:
                        outputs[label] = np.empty(
                            (t_size, z_size) + plane.shape, dtype=np.float32,
                        )
                    outputs[label][t, z] = plane

                i += 1
                logger.debug("Plane t=%d z=%d done (%d/%d)",
                             t, z, i, final_size)
                if final_size > 1:
                    self._report_progress(kwargs, i / final_size)

        self.combined_wavelength = result.combined_wavelength
        return outputs
