# -*- coding: utf-8 -*-
"""
Array Validation Helpers - Shared checks for image planes fed to processors.

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

# Third-party
import numpy as np

# DHML internal
from dhml.exceptions import ValidationError


def validate_plane(plane: np.ndarray, name: str = 'source') -> np.ndarray:
    """Check that *plane* is a non-empty, finite, real-valued 2D array.

    Parameters
    ----------
    plane : np.ndarray
        Candidate image plane.
    name : str
        Name used in error messages. Default ``'source'``.

    Returns
    -------
    np.ndarray
        The plane as a float64 array.

    Raises
    ------
    ValidationError
        If the plane is not 2D, is empty, is complex, or contains
        NaN/Inf values.
    """
    plane = np.asarray(plane)
    if plane.ndim != 2:
        raise ValidationError(
            f"{name} must be a 2D array, got shape {plane.shape}"
        )
    if plane.size == 0:
        raise ValidationError(f"{name} must not be empty")
    if np.iscomplexobj(plane):
        raise ValidationError(
            f"{name} must be real-valued, got dtype {plane.dtype}"
        )
    if not np.issubdtype(plane.dtype, np.number) and plane.dtype != np.bool_:
        raise ValidationError(
            f"{name} must be numeric, got dtype {plane.dtype}"
        )
    plane = plane.astype(np.float64)
    if not np.all(np.isfinite(plane)):
        raise ValidationError(f"{name} contains NaN or Inf values")
    return plane


def validate_positive(value: float, name: str) -> None:
    """Raise ``ValidationError`` unless *value* is a finite number > 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
        raise ValidationError(
            f"{name} must be a number, got {type(value).__name__}"
        )
    if not np.isfinite(value) or value <= 0:
        raise ValidationError(f"{name} must be positive, got {value!r}")
