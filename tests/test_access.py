"""
Tests for bounds-checked vector-group access.
"""

import numpy as np

from mulcos.access import load, load_many, store, store_many

from helpers import groups


class TestScalarAccess:
    """Test load()/store() on one vector-group."""

    def test_load_in_range(self):
        buf = groups((1, 2, 3, 4), (5, 6, 7, 8))
        np.testing.assert_array_equal(load(buf, 1, 2), [5, 6, 7, 8])

    def test_load_returns_copy(self):
        """Test mutating a loaded group does not touch the buffer."""
        buf = groups((1, 2, 3, 4))
        value = load(buf, 0, 1)
        value[:] = 0
        np.testing.assert_array_equal(buf[0], [1, 2, 3, 4])

    def test_load_at_capacity_is_zero(self):
        """Test idx == capacity is out of range."""
        buf = groups((1, 2, 3, 4), (5, 6, 7, 8))
        value = load(buf, 1, 1)
        assert value.dtype == np.float32
        np.testing.assert_array_equal(value, [0, 0, 0, 0])

    def test_load_beyond_storage_is_zero(self):
        """Test no storage access happens past capacity."""
        buf = groups((1, 2, 3, 4))
        np.testing.assert_array_equal(load(buf, 100, 1), [0, 0, 0, 0])

    def test_store_in_range(self):
        buf = groups((0, 0, 0, 0), (0, 0, 0, 0))
        store(buf, 1, 2, np.float32([1, 2, 3, 4]))
        np.testing.assert_array_equal(buf, [[0, 0, 0, 0], [1, 2, 3, 4]])

    def test_store_at_capacity_is_dropped(self):
        buf = groups((0, 0, 0, 0), (0, 0, 0, 0))
        store(buf, 1, 1, np.float32([9, 9, 9, 9]))
        np.testing.assert_array_equal(buf, np.zeros((2, 4)))

    def test_store_beyond_storage_is_dropped(self):
        buf = groups((0, 0, 0, 0))
        store(buf, 7, 1, np.float32([9, 9, 9, 9]))  # must not raise
        np.testing.assert_array_equal(buf, np.zeros((1, 4)))


class TestVectorizedAccess:
    """Test gather/scatter forms."""

    def test_load_many_masks_rows(self):
        """Test rows at or past capacity read as zeros."""
        buf = groups((1, 1, 1, 1), (2, 2, 2, 2), (3, 3, 3, 3))
        idx = np.array([0, 1, 2, 5], dtype=np.uint64)
        out = load_many(buf, idx, 2)
        np.testing.assert_array_equal(
            out, [[1, 1, 1, 1], [2, 2, 2, 2], [0, 0, 0, 0], [0, 0, 0, 0]]
        )

    def test_load_many_matches_scalar(self, rng):
        buf = rng.standard_normal((6, 4)).astype(np.float32)
        idx = np.arange(10)
        expected = np.stack([load(buf, i, 4) for i in idx])
        np.testing.assert_array_equal(load_many(buf, idx, 4), expected)

    def test_store_many_drops_rows(self):
        buf = np.zeros((3, 4), dtype=np.float32)
        idx = np.array([0, 2, 4])
        values = groups((1, 1, 1, 1), (2, 2, 2, 2), (3, 3, 3, 3))
        store_many(buf, idx, 2, values)
        np.testing.assert_array_equal(
            buf, [[1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]
        )

    def test_empty_indices(self):
        buf = groups((1, 2, 3, 4))
        idx = np.array([], dtype=np.uint64)
        assert load_many(buf, idx, 1).shape == (0, 4)
        store_many(buf, idx, 1, np.zeros((0, 4), dtype=np.float32))
        np.testing.assert_array_equal(buf, [[1, 2, 3, 4]])
