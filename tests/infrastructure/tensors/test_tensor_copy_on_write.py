"""
Unit tests for copy-on-write updates (index_map*, slice_map*, slice_zip*).

These tests validate:
- the receiver and every tensor sharing its buffer are unchanged
- results own a fresh canonical buffer in logical order
- validation happens before any copy
"""

import operator
import unittest

import numpy as np

from src.venum.domain._errors import (
    DataLengthMismatchError,
    DimensionCountMismatchError,
    IndexOutOfRangeError,
    RangeOutOfBoundsError,
)
from src.venum.infrastructure.tensor._tensor import Tensor


class TestIndexMap(unittest.TestCase):
    def test_isolation_from_shared_views(self):
        a = Tensor.new(range(6), [2, 3])
        b = a.view([3, 2])
        c = b.index_map(lambda x: x * 10, [1, 1])

        self.assertEqual(a.data().tolist(), [0, 1, 2, 3, 4, 5])
        self.assertEqual(b.data().tolist(), [0, 1, 2, 3, 4, 5])
        self.assertIsNot(c.buffer, a.buffer)
        self.assertEqual(c.sizes, (3, 2))
        self.assertEqual(c.data().tolist(), [0, 1, 2, 30, 4, 5])

    def test_strided_receiver_gets_canonical_result(self):
        t = Tensor.new(range(6), [2, 3]).transpose(0, 1)
        c = t.index_map(lambda x: -1, [0, 1])
        self.assertTrue(c.is_contiguous())
        self.assertEqual(c.offset, 0)
        self.assertEqual(c.data().tolist(), [0, -1, 1, 4, 2, 5])

    def test_index_map_dims(self):
        t = Tensor.new(range(6), [2, 3])
        c = t.index_map_dims(lambda x: 100, [1], [2])
        self.assertEqual(c.data().tolist(), [0, 1, 100, 3, 4, 5])

    def test_dtype_widens(self):
        c = Tensor([1, 2, 3]).index_map(lambda x: x + 0.5, [0])
        self.assertEqual(c.data().tolist(), [1.5, 2.0, 3.0])

    def test_text_update_leaves_other_elements_untouched(self):
        a = Tensor.new([1, 2, 3], [3])
        c = a.index_map(lambda x: "a", [0])
        self.assertEqual(c.data().tolist(), ["a", 2, 3])
        self.assertIsInstance(c.index([1]), int)
        self.assertEqual(a.data().tolist(), [1, 2, 3])

        back = c.index_map(lambda x: 9, [0])
        self.assertEqual(back.data().tolist(), [9, 2, 3])

    def test_validation(self):
        t = Tensor.new(range(6), [2, 3])
        with self.assertRaises(IndexOutOfRangeError):
            t.index_map(lambda x: x, [2, 0])
        with self.assertRaises(DimensionCountMismatchError):
            t.index_map(lambda x: x, [0])


class TestSliceMapAndZip(unittest.TestCase):
    def setUp(self) -> None:
        self.ref = np.arange(16).reshape(4, 4)
        self.t = Tensor.new(range(16), [4, 4])

    def test_slice_map(self):
        c = self.t.slice_map(lambda x: -x, [(1, 3), (1, 3)])
        expected = self.ref.copy()
        expected[1:3, 1:3] *= -1
        np.testing.assert_array_equal(c.data(), expected.ravel())
        np.testing.assert_array_equal(self.t.data(), self.ref.ravel())

    def test_slice_map_dims(self):
        c = self.t.slice_map_dims(lambda x: 0, [1], [(2, 0)])
        expected = self.ref.copy()
        expected[:, 2:] = 0
        np.testing.assert_array_equal(c.data(), expected.ravel())

    def test_slice_zip(self):
        c = self.t.slice_zip([100, 200, 300, 400], operator.add, [(0, 2), (2, 4)])
        expected = self.ref.copy()
        expected[0:2, 2:4] += np.array([[100, 200], [300, 400]])
        np.testing.assert_array_equal(c.data(), expected.ravel())

    def test_slice_zip_dims(self):
        c = self.t.slice_zip_dims([9, 9, 9, 9], lambda _, new: new, [0], [(3, 4)])
        expected = self.ref.copy()
        expected[3, :] = 9
        np.testing.assert_array_equal(c.data(), expected.ravel())

    def test_slice_zip_on_flipped_receiver(self):
        flipped = self.t.flip([1])
        c = flipped.slice_zip([-1, -2], lambda _, new: new, [(0, 1), (0, 2)])
        expected = np.flip(self.ref, 1).copy()
        expected[0, 0:2] = [-1, -2]
        np.testing.assert_array_equal(c.data(), expected.ravel())
        np.testing.assert_array_equal(flipped.data(), np.flip(self.ref, 1).ravel())

    def test_slice_zip_length_mismatch(self):
        with self.assertRaises(DataLengthMismatchError):
            self.t.slice_zip([1, 2, 3], operator.add, [(0, 2), (0, 2)])

    def test_range_validation(self):
        with self.assertRaises(RangeOutOfBoundsError):
            self.t.slice_map(lambda x: x, [(3, 2)])
        with self.assertRaises(RangeOutOfBoundsError):
            self.t.slice_zip([], operator.add, [(0, 5)])


if __name__ == "__main__":
    unittest.main()
