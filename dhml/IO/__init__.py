# -*- coding: utf-8 -*-
"""
IO Module - Reading and writing DHM image stacks.

Dependencies
------------
tifffile

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

from dhml.IO.base import ImageReader, ImageWriter, label_to_stem
from dhml.IO.models import StackMetadata
from dhml.IO.numpy_io import NumpyWriter
from dhml.IO.tiff import HyperstackReader, HyperstackWriter

__all__ = [
    'ImageReader',
    'ImageWriter',
    'StackMetadata',
    'HyperstackReader',
    'HyperstackWriter',
    'NumpyWriter',
    'label_to_stem',
]
