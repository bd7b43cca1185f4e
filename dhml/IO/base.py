# -*- coding: utf-8 -*-
"""
IO Base Classes - Abstract interfaces for stack readers and writers.

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
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Tuple, Union

# Third-party
import numpy as np

# DHML internal
from dhml.IO.models import StackMetadata


def label_to_stem(label: str) -> str:
    """Turn an output label such as ``'Round + Phase 1 (f)'`` into a file stem.

    >>> label_to_stem('Round + Phase 1 (f)')
    'round_phase_1_f'
    """
    stem = re.sub(r'[^0-9a-z]+', '_', label.lower()).strip('_')
    return stem or 'output'


class ImageReader(ABC):
    """
    Abstract base class for image stack readers.

    Attributes
    ----------
    filepath : Path
        Path to the image file.
    metadata : StackMetadata
        Metadata populated by ``_load_metadata``.
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        """
        Initialize the reader and load metadata.

        Raises
        ------
        FileNotFoundError
            If the specified filepath does not exist.
        """
        self.filepath = Path(filepath)
        if not self.filepath.exists():
            raise FileNotFoundError(f"File not found: {self.filepath}")

        self.metadata: Optional[StackMetadata] = None
        self._load_metadata()

    @abstractmethod
    def _load_metadata(self) -> None:
        """Populate ``self.metadata`` from the file."""
        pass

    @abstractmethod
    def read_chip(
        self,
        row_start: int,
        row_end: int,
        col_start: int,
        col_end: int,
    ) -> np.ndarray:
        """
        Read a spatial subset of every plane.

        Parameters
        ----------
        row_start, col_start : int
            Starting indices (inclusive).
        row_end, col_end : int
            Ending indices (exclusive).

        Returns
        -------
        np.ndarray
            Chip stack, shape ``(T, Z, rows, cols)``.
        """
        pass

    def read_full(self) -> np.ndarray:
        """
        Read the entire stack as ``(T, Z, rows, cols)``.

        Subclasses may override for more efficient full reads.
        """
        return self.read_chip(0, self.metadata.rows, 0, self.metadata.cols)

    def get_shape(self) -> Tuple[int, ...]:
        """Hyperstack shape ``(T, Z, rows, cols)``."""
        m = self.metadata
        return (m.frames, m.slices, m.rows, m.cols)

    def get_dtype(self) -> np.dtype:
        """NumPy dtype of the stored pixels."""
        return np.dtype(self.metadata.dtype)

    def close(self) -> None:
        """Release resources. Default implementation does nothing."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class ImageWriter(ABC):
    """
    Abstract base class for image stack writers.

    Attributes
    ----------
    filepath : Path
        Path where the output will be written.
    metadata : StackMetadata or None
        Metadata to record alongside the pixels.
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        metadata: Optional[StackMetadata] = None,
    ) -> None:
        self.filepath = Path(filepath)
        self.metadata = metadata

    @abstractmethod
    def write(self, data: np.ndarray) -> None:
        """
        Write an array to ``self.filepath``.

        Raises
        ------
        ValidationError
            If the data shape is incompatible with the output format.
        """
        pass

    def close(self) -> None:
        """Release resources. Default implementation does nothing."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
