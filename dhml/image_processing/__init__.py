# -*- coding: utf-8 -*-
"""
Image Processing Module - Processor infrastructure and hologram transforms.

All processors inherit from ``ImageProcessor``, which provides version
checking, ``typing.Annotated`` tunable parameters and progress reporting.

Sub-modules
-----------
base.py
    ``ImageProcessor``, ``ImageTransform``, ``BandwiseTransformMixin``.
params.py
    ``Range``, ``Options``, ``Desc`` constraint markers and ``ParamSpec``.
versioning.py
    ``@processor_version`` and ``@processor_tags`` decorators.
fringe_visibility.py
    ``FringeVisibility`` -- local hologram fringe contrast.

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

from dhml.image_processing.base import (
    BandwiseTransformMixin,
    ImageProcessor,
    ImageTransform,
)
from dhml.image_processing.fringe_visibility import FringeVisibility
from dhml.image_processing.params import Desc, Options, ParamSpec, Range
from dhml.image_processing.versioning import processor_tags, processor_version

__all__ = [
    'ImageProcessor',
    'ImageTransform',
    'BandwiseTransformMixin',
    'FringeVisibility',
    'Range',
    'Options',
    'Desc',
    'ParamSpec',
    'processor_version',
    'processor_tags',
]
