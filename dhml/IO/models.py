# -*- coding: utf-8 -*-
"""
IO Models - Typed metadata container for image stacks.

``StackMetadata`` stores the universal fields of a microscopy stack
(format, plane size, dtype, hyperstack dimensions) as typed attributes
and keeps everything else in ``extras``. It also supports dict-like
access (``meta['rows']``, ``'axes' in meta``, ``meta.get('unit')``).

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
from dataclasses import dataclass, field, fields as dc_fields
from typing import Any, Dict, List, Optional


@dataclass
class StackMetadata:
    """Typed metadata for stacks read by DHML readers.

    Parameters
    ----------
    format : str
        Format identifier (e.g., ``'TIFF'``, ``'ImageJ TIFF'``).
    rows : int
        Plane height in pixels.
    cols : int
        Plane width in pixels.
    dtype : str
        NumPy dtype string of the stored pixels.
    frames : int
        Number of time points (T).
    slices : int
        Number of focal planes (Z).
    channels : int
        Number of channels (C).
    axes : str, optional
        Axis order as stored in the file (e.g., ``'TZCYX'``).
    extras : Dict[str, Any]
        Format-specific metadata (ImageJ metadata, description...).

    Examples
    --------
    >>> meta = StackMetadata(format='TIFF', rows=512, cols=512,
    ...                      dtype='float32', slices=10)
    >>> meta['slices']
    10
    >>> meta.get('unit', 'pixel')
    'pixel'
    """

    format: str
    rows: int
    cols: int
    dtype: str
    frames: int = 1
    slices: int = 1
    channels: int = 1
    axes: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    @property
    def planes(self) -> int:
        """Number of (t, z) planes per channel."""
        return self.frames * self.slices

    def _field_names(self) -> List[str]:
        return [f.name for f in dc_fields(self) if f.name != 'extras']

    def __getitem__(self, key: str) -> Any:
        if key in self._field_names():
            return getattr(self, key)
        if key in self.extras:
            return self.extras[key]
        raise KeyError(key)

    def __setitem__(self, key: str, value: Any) -> None:
        if key in self._field_names():
            setattr(self, key, value)
        else:
            self.extras[key] = value

    def __contains__(self, key: str) -> bool:
        if key in self._field_names():
            return getattr(self, key) is not None
        return key in self.extras

    def get(self, key: str, default: Any = None) -> Any:
        """Get value by key with a default, like ``dict.get()``."""
        try:
            val = self[key]
        except KeyError:
            return default
        return default if val is None else val

    def to_dict(self) -> Dict[str, Any]:
        """Flatten to a dictionary; ``None`` fields are dropped."""
        result: Dict[str, Any] = {
            name: getattr(self, name)
            for name in self._field_names()
            if getattr(self, name) is not None
        }
        result.update(self.extras)
        return result
