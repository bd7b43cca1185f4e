# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for DHML processor tagging.

Single source of truth for the controlled vocabularies used to tag DHML
processors: the kind of image a processor consumes and the processing
category it belongs to.

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

from enum import Enum


class ImageModality(Enum):
    """Kinds of holographic microscopy imagery a processor accepts."""

    HOLOGRAM = "hologram"
    PHASE = "phase"
    AMPLITUDE = "amplitude"
    INTENSITY = "intensity"


class ProcessorCategory(Enum):
    """Processing categories for processor tagging."""

    FILTERS = "filters"
    ANALYZE = "analyze"
    PHASE_UNWRAPPING = "phase_unwrapping"
    STACKS = "stacks"
