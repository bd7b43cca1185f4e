# -*- coding: utf-8 -*-
"""
IO Models Tests - Unit tests for the StackMetadata dataclass.

Verifies typed attribute access, dict-like access, extras handling and
serialization.

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
import pytest

# DHML internal
from dhml.IO.models import StackMetadata


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def meta():
    return StackMetadata(
        format='ImageJ TIFF', rows=64, cols=80, dtype='float32',
        frames=2, slices=5, extras={'unit': 'micron'},
    )


# ---------------------------------------------------------------------------
# Access
# ---------------------------------------------------------------------------

class TestStackMetadataAccess:

    def test_defaults(self):
        m = StackMetadata(format='TIFF', rows=4, cols=4, dtype='uint8')
        assert (m.frames, m.slices, m.channels) == (1, 1, 1)
        assert m.axes is None
        assert m.extras == {}

    def test_planes(self, meta):
        assert meta.planes == 10

    def test_getitem_field_and_extra(self, meta):
        assert meta['slices'] == 5
        assert meta['unit'] == 'micron'

    def test_getitem_missing_raises(self, meta):
        with pytest.raises(KeyError):
            meta['nope']

    def test_setitem_routes_to_field_or_extras(self, meta):
        meta['rows'] = 32
        meta['label'] = 'Fine Map'
        assert meta.rows == 32
        assert meta.extras['label'] == 'Fine Map'

    def test_contains(self, meta):
        assert 'rows' in meta
        assert 'unit' in meta
        assert 'axes' not in meta
        assert 'nope' not in meta

    def test_get_default(self, meta):
        assert meta.get('nope', 7) == 7
        assert meta.get('axes', 'YX') == 'YX'
        assert meta.get('cols') == 80


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

class TestStackMetadataSerialization:

    def test_to_dict_flattens_extras(self, meta):
        d = meta.to_dict()
        assert d['unit'] == 'micron'
        assert d['frames'] == 2
        assert 'axes' not in d
        assert 'extras' not in d

