# -*- coding: utf-8 -*-
"""
Tests for grpol.data_prep.tiler and Rectangle helpers.

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-02-06

Modified
--------
2026-03-06
"""

import numpy as np
import pytest

from grpol.data_prep import Rectangle, Tiler
from grpol.exceptions import ValidationError


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestTilerInit:
    def test_int_tile_size(self):
        t = Tiler(nrows=100, ncols=200, tile_size=32)
        assert t.tile_size == (32, 32)
        assert t.shape == (100, 200)

    def test_tuple_tile_size(self):
        assert Tiler(100, 200, tile_size=(16, 64)).tile_size == (16, 64)

    def test_non_int_dims(self):
        with pytest.raises(TypeError):
            Tiler(nrows=10.0, ncols=10, tile_size=4)

    def test_non_positive_dims(self):
        with pytest.raises(ValidationError):
            Tiler(nrows=0, ncols=10, tile_size=4)

    def test_non_positive_tile(self):
        with pytest.raises(ValidationError):
            Tiler(10, 10, tile_size=(4, 0))

    def test_bool_tile(self):
        with pytest.raises(TypeError):
            Tiler(10, 10, tile_size=True)

    def test_repr(self):
        assert repr(Tiler(10, 20, 4)) == 'Tiler(nrows=10, ncols=20, tile_size=(4, 4))'


# ---------------------------------------------------------------------------
# Tile positions
# ---------------------------------------------------------------------------

class TestTilePositions:
    def test_exact_fit(self):
        t = Tiler(8, 8, tile_size=4)
        assert len(t) == 4
        assert t.tile_positions() == [
            Rectangle(0, 0, 4, 4), Rectangle(4, 0, 4, 4),
            Rectangle(0, 4, 4, 4), Rectangle(4, 4, 4, 4),
        ]

    def test_edge_tiles_truncated(self):
        t = Tiler(nrows=100, ncols=250, tile_size=64)
        assert t.grid_shape == (2, 4)
        assert len(t) == 8
        assert t.tile_positions()[-1] == Rectangle(192, 64, 58, 36)

    def test_full_coverage_no_overlap(self):
        t = Tiler(nrows=37, ncols=53, tile_size=(10, 16))
        coverage = np.zeros(t.shape, dtype=int)
        for rect in t:
            coverage[rect.slices] += 1
        np.testing.assert_array_equal(coverage, 1)

    def test_tile_larger_than_image(self):
        assert Tiler(5, 7, tile_size=512).tile_positions() == [Rectangle(0, 0, 7, 5)]


# ---------------------------------------------------------------------------
# Rectangle
# ---------------------------------------------------------------------------

class TestRectangle:
    def test_shape_and_origin(self):
        r = Rectangle(x=3, y=5, width=10, height=4)
        assert r.shape == (4, 10)
        assert r.origin == (5, 3)
        np.testing.assert_array_equal(r.columns(), np.arange(3, 13))

    def test_slices(self):
        image = np.arange(100).reshape(10, 10)
        block = image[Rectangle(2, 1, 3, 2).slices]
        np.testing.assert_array_equal(block, [[12, 13, 14], [22, 23, 24]])

    def test_expand_interior(self):
        assert Rectangle(4, 4, 2, 2).expand(1, 2, (10, 10)) == Rectangle(3, 2, 4, 6)

    def test_expand_clamped(self):
        assert Rectangle(0, 8, 3, 2).expand(2, 2, (10, 5)) == Rectangle(0, 6, 5, 4)

    def test_within(self):
        inner = Rectangle(4, 4, 2, 2)
        outer = inner.expand(1, 1, (10, 10))
        image = np.arange(100).reshape(10, 10)
        np.testing.assert_array_equal(
            image[outer.slices][inner.within(outer)], image[inner.slices])
