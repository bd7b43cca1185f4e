# -*- coding: utf-8 -*-
"""
Processor Versioning and Tagging Tests.

Tests ``@processor_version``, the once-per-class missing-version
warning, ``@processor_tags`` and the tag vocabulary.

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

import warnings

import numpy as np
import pytest

from dhml.image_processing import FringeVisibility
from dhml.image_processing.base import ImageTransform
from dhml.image_processing.versioning import processor_tags, processor_version
from dhml.phase_unwrapping import DoubleWavelengthCommand, DoubleWavelengthUnwrap
from dhml.vocabulary import ImageModality, ProcessorCategory


class TestProcessorVersionDecorator:

    def test_stamps_version(self):
        @processor_version('2.1.0')
        class _Op(ImageTransform):
            def apply(self, source, **kwargs):
                return source
        assert _Op.__processor_version__ == '2.1.0'
        np.testing.assert_array_equal(_Op().apply(np.ones(2)), np.ones(2))

    def test_returns_same_class(self):
        class _Plain:
            pass
        assert processor_version('1.0')(_Plain) is _Plain

    def test_fallback_version_is_string(self):
        @processor_version()
        class _Op:
            pass
        assert isinstance(_Op.__processor_version__, str)
        assert _Op.__processor_version__

    @pytest.mark.parametrize('cls', [
        FringeVisibility, DoubleWavelengthUnwrap, DoubleWavelengthCommand,
    ])
    def test_shipped_processors_versioned(self, cls):
        assert cls.__processor_version__ == '1.0.0'


class TestMissingVersionWarning:

    def test_warns_once_for_unversioned_class(self):
        class _Unversioned(ImageTransform):
            def apply(self, source, **kwargs):
                return source

        with pytest.warns(UserWarning, match="processor version"):
            _Unversioned()
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            _Unversioned()

    def test_no_warning_for_versioned_class(self):
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            FringeVisibility()


class TestProcessorTags:

    def test_stamps_tags(self):
        @processor_tags(modalities=[ImageModality.PHASE],
                        category=ProcessorCategory.FILTERS,
                        description='demo')
        class _Op:
            pass
        assert _Op.__processor_tags__ == {
            'modalities': (ImageModality.PHASE,),
            'category': ProcessorCategory.FILTERS,
            'description': 'demo',
        }

    def test_empty_tags(self):
        @processor_tags()
        class _Op:
            pass
        assert _Op.__processor_tags__['modalities'] == ()
        assert _Op.__processor_tags__['category'] is None

    def test_bad_modality_raises(self):
        with pytest.raises(TypeError, match="ImageModality"):
            processor_tags(modalities=['phase'])

    def test_bad_category_raises(self):
        with pytest.raises(TypeError, match="ProcessorCategory"):
            processor_tags(category='stacks')

    def test_shipped_categories(self):
        assert (DoubleWavelengthUnwrap.__processor_tags__['category']
                is ProcessorCategory.PHASE_UNWRAPPING)
        assert (DoubleWavelengthCommand.__processor_tags__['category']
                is ProcessorCategory.STACKS)


class TestVocabulary:

    def test_modality_values(self):
        assert {m.value for m in ImageModality} == {
            'hologram', 'phase', 'amplitude', 'intensity',
        }

    def test_category_lookup_by_value(self):
        assert ProcessorCategory('phase_unwrapping') is \
            ProcessorCategory.PHASE_UNWRAPPING
