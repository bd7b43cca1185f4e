# -*- coding: utf-8 -*-
"""
NumPy Writer - Write result stacks to NumPy .npy and .npz formats.

Writes one array to ``.npy`` or a labelled set of arrays (for example all
unwrapping stages) to a ``.npz`` archive. A JSON sidecar next to the
output records shapes, dtypes, the full output labels and any metadata.

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
import json
from pathlib import Path
from typing import Any, Dict

# Third-party
import numpy as np

# DHML internal
from dhml.exceptions import ValidationError
from dhml.IO.base import ImageWriter, label_to_stem


class NumpyWriter(ImageWriter):
    """Write arrays to NumPy .npy and .npz formats.

    Parameters
    ----------
    filepath : str or Path
        Output file path (``.npy`` or ``.npz``).
    metadata : StackMetadata, optional
        Metadata merged into the JSON sidecar.

    Examples
    --------
    >>> from dhml.IO.numpy_io import NumpyWriter
    >>> with NumpyWriter('maps.npz') as writer:
    ...     writer.write_npz(outputs)   # {'Coarse Map': ..., 'Fine Map': ...}
    """

    def write(self, data: np.ndarray) -> None:
        """Write a single array to a .npy file with a JSON sidecar."""
        data = np.asarray(data)
        np.save(str(self.filepath), data)
        self._write_sidecar({
            'shape': list(data.shape),
            'dtype': str(data.dtype),
        })

    def write_npz(self, arrays: Dict[str, np.ndarray]) -> None:
        """Write labelled arrays to a .npz archive.

        Archive keys are file-safe stems of the labels (see
        ``label_to_stem``); the sidecar maps each key back to its label.

        Raises
        ------
        ValidationError
            If *arrays* is empty or two labels map to the same key.
        """
        if not arrays:
            raise ValidationError("write_npz requires at least one array")
        keyed: Dict[str, np.ndarray] = {}
        labels: Dict[str, str] = {}
        for label, array in arrays.items():
            key = label_to_stem(label)
            if key in keyed:
                raise ValidationError(
                    f"Labels {labels[key]!r} and {label!r} collide as {key!r}"
                )
            keyed[key] = np.asarray(array)
            labels[key] = label

        np.savez(str(self.filepath), **keyed)
        self._write_sidecar({
            'arrays': {
                key: {
                    'label': labels[key],
                    'shape': list(array.shape),
                    'dtype': str(array.dtype),
                }
                for key, array in keyed.items()
            },
        })

    def _write_sidecar(self, sidecar: Dict[str, Any]) -> None:
        if self.metadata is not None:
            sidecar['metadata'] = self.metadata.to_dict()
        sidecar_path = Path(str(self.filepath) + '.json')
        with open(sidecar_path, 'w') as f:
            json.dump(sidecar, f, indent=2, default=str)
