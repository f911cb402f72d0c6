"""
Unit tests for the Shape algebra.

Covers:
- canonical construction and contiguity
- zero-copy transforms (view, permute, transpose, flip, squeeze, unsqueeze, expand)
- element addressing, slicing and single_slice, including flipped dimensions
- padding and validation errors
"""

import unittest

from src.venum.domain._errors import (
    DataLengthMismatchError,
    DimensionCountMismatchError,
    DimensionOutOfRangeError,
    DuplicateDimensionError,
    IncompatibleExpansionError,
    IndexOutOfRangeError,
    NonContiguousError,
    RangeOutOfBoundsError,
    ReshapeMismatchError,
)
from src.venum.domain.shape import Indexer, Shape, Stride

P, N = Stride.positive, Stride.negative


def _offsets(shape):
    return [shape.element(i) for i in Indexer(shape.sizes)]


class TestShapeConstruction(unittest.TestCase):
    def test_new_derives_row_major_strides(self):
        s = Shape.new((2, 3, 4))
        self.assertEqual(s.strides, (P(12), P(4), P(1)))
        self.assertEqual(s.offset, 0)
        self.assertEqual(s.numel(), 24)
        self.assertEqual(s.ndims, 3)

    def test_new_is_contiguous(self):
        self.assertTrue(Shape.new((2, 3, 4)).is_contiguous())

    def test_mismatched_strides_rejected(self):
        with self.assertRaises(DimensionCountMismatchError):
            Shape((2, 3), (P(1),))

    def test_rank_zero(self):
        s = Shape.new(())
        self.assertEqual(s.numel(), 1)
        self.assertTrue(s.is_contiguous())
        self.assertEqual(s.element(()), 0)

    def test_inner_stride_must_be_one_for_contiguity(self):
        self.assertFalse(Shape((3,), (P(2),)).is_contiguous())

    def test_check_data_length(self):
        Shape.new((2, 3)).check_data_length(6)
        with self.assertRaises(DataLengthMismatchError) as ctx:
            Shape.new((2, 3)).check_data_length(5)
        self.assertEqual(ctx.exception.expected, 6)
        self.assertEqual(ctx.exception.actual, 5)


class TestShapeTransforms(unittest.TestCase):
    def test_view_reinterprets_contiguous_run(self):
        s = Shape.new((2, 3)).view((3, 2))
        self.assertEqual(s.sizes, (3, 2))
        self.assertEqual(s.strides, (P(2), P(1)))

    def test_view_requires_equal_numel(self):
        with self.assertRaises(ReshapeMismatchError):
            Shape.new((2, 3)).view((4,))

    def test_view_of_non_contiguous_rejected(self):
        with self.assertRaises(NonContiguousError) as ctx:
            Shape.new((2, 3)).transpose(0, 1).view((6,))
        self.assertIsInstance(ctx.exception, ReshapeMismatchError)

    def test_view_preserves_reversed_direction(self):
        s = Shape.new((6,)).flip((0,)).view((2, 3))
        self.assertEqual(s.strides, (N(3), N(1)))
        self.assertEqual(_offsets(s), [5, 4, 3, 2, 1, 0])

    def test_permute(self):
        s = Shape.new((2, 3, 4)).permute((2, 0, 1))
        self.assertEqual(s.sizes, (4, 2, 3))
        self.assertEqual(s.strides, (P(1), P(12), P(4)))
        self.assertFalse(s.is_contiguous())

    def test_permute_round_trip(self):
        s = Shape.new((2, 3, 4))
        self.assertEqual(s.permute((2, 0, 1)).permute((1, 2, 0)), s)

    def test_permute_validation(self):
        s = Shape.new((2, 3))
        with self.assertRaises(DimensionCountMismatchError):
            s.permute((0,))
        with self.assertRaises(DuplicateDimensionError):
            s.permute((0, 0))
        with self.assertRaises(DimensionOutOfRangeError):
            s.permute((0, 2))

    def test_transpose_swaps(self):
        s = Shape.new((2, 3)).transpose(0, 1)
        self.assertEqual(s.sizes, (3, 2))
        self.assertEqual(_offsets(s), [0, 3, 1, 4, 2, 5])

    def test_flip_one_dimension(self):
        s = Shape.new((2, 3)).flip((0,))
        self.assertEqual(_offsets(s), [3, 4, 5, 0, 1, 2])
        self.assertFalse(s.is_contiguous())

    def test_flip_all_stays_contiguous_and_reversed(self):
        s = Shape.new((2, 3)).flip((0, 1))
        self.assertTrue(s.is_contiguous())
        self.assertTrue(s.is_reversed())
        self.assertEqual(_offsets(s), [5, 4, 3, 2, 1, 0])

    def test_flip_last_dimension_only_is_not_contiguous(self):
        self.assertFalse(Shape.new((2, 3)).flip((1,)).is_contiguous())
        self.assertTrue(Shape.new((3,)).flip((0,)).is_contiguous())

    def test_flip_is_an_involution(self):
        s = Shape.new((2, 3, 4))
        self.assertEqual(s.flip((0, 2)).flip((0, 2)), s)

    def test_flip_duplicate_rejected(self):
        with self.assertRaises(DuplicateDimensionError):
            Shape.new((2, 3)).flip((1, 1))

    def test_squeeze(self):
        s = Shape.new((1, 3, 1)).squeeze()
        self.assertEqual(s.sizes, (3,))
        self.assertEqual(s.strides, (P(1),))

    def test_squeeze_all_ones_keeps_one_dimension(self):
        self.assertEqual(Shape.new((1, 1)).squeeze().sizes, (1,))

    def test_squeeze_rank_zero_becomes_one_dimension(self):
        s = Shape.new(()).squeeze()
        self.assertEqual(s.sizes, (1,))
        self.assertEqual(s.numel(), 1)

    def test_unsqueeze_prepends_size_one_dimensions(self):
        s = Shape.new((3,)).unsqueeze(3)
        self.assertEqual(s.sizes, (1, 1, 3))
        self.assertTrue(s.is_contiguous())
        self.assertEqual(_offsets(s), [0, 1, 2])

    def test_unsqueeze_cannot_shrink(self):
        with self.assertRaises(DimensionCountMismatchError):
            Shape.new((2, 3)).unsqueeze(1)

    def test_expand_uses_zero_strides(self):
        s = Shape.new((3, 1)).expand((3, 4))
        self.assertEqual(s.strides[1], P(0))
        self.assertEqual(_offsets(s), [0] * 4 + [1] * 4 + [2] * 4)

    def test_expand_non_unit_dimension_rejected(self):
        with self.assertRaises(IncompatibleExpansionError) as ctx:
            Shape.new((3, 1)).expand((4, 1))
        self.assertEqual(ctx.exception.dimension, 0)


class TestShapeIndexing(unittest.TestCase):
    def test_element_uses_stride_sum(self):
        self.assertEqual(Shape.new((2, 3, 4)).element((1, 2, 3)), 23)
        self.assertEqual(Shape.new((2, 3, 4)).index((0, 1, 0)), 4)

    def test_element_bounds(self):
        with self.assertRaises(IndexOutOfRangeError):
            Shape.new((5,)).element((5,))
        with self.assertRaises(DimensionCountMismatchError):
            Shape.new((2, 3)).element((1,))

    def test_index_dims_reads_unlisted_dimensions_at_zero(self):
        s = Shape.new((2, 3))
        self.assertEqual(s.index_dims((1,), (2,)), 2)
        self.assertEqual(s.index_dims((0,), (1,)), 3)

    def test_slice_positive(self):
        s = Shape.new((4, 4)).slice([(1, 3), (2, 4)])
        self.assertEqual(s.sizes, (2, 2))
        self.assertEqual(s.offset, 6)
        self.assertEqual(_offsets(s), [6, 7, 10, 11])

    def test_slice_end_zero_means_full_extent(self):
        s = Shape.new((4,)).slice([(1, 0)])
        self.assertEqual(s.sizes, (3,))
        self.assertEqual(s.offset, 1)

    def test_slice_missing_trailing_ranges_are_full(self):
        self.assertEqual(Shape.new((4, 5)).slice([(1, 2)]).sizes, (1, 5))

    def test_slice_of_flipped_dimension(self):
        s = Shape.new((4,)).flip((0,)).slice([(1, 3)])
        self.assertEqual(_offsets(s), [2, 1])

    def test_slice_bounds(self):
        with self.assertRaises(RangeOutOfBoundsError):
            Shape.new((5,)).slice([(3, 2)])
        with self.assertRaises(RangeOutOfBoundsError):
            Shape.new((5,)).slice([(0, 6)])
        with self.assertRaises(DimensionCountMismatchError):
            Shape.new((5,)).slice([(0, 1), (0, 1)])

    def test_slice_dims(self):
        s = Shape.new((3, 4)).slice_dims((1,), ((1, 3),))
        self.assertEqual(s.sizes, (3, 2))
        self.assertEqual(s.offset, 1)

    def test_single_slice_pins_dimensions(self):
        s = Shape.new((2, 3, 4)).single_slice((1, None, 2))
        self.assertEqual(s.sizes, (1, 3, 1))
        self.assertEqual(s.offset, 14)
        self.assertEqual(_offsets(s), [14, 18, 22])

    def test_single_slice_bounds(self):
        with self.assertRaises(IndexOutOfRangeError):
            Shape.new((2, 3)).single_slice((2, None))

    def test_pad(self):
        self.assertEqual(Shape.new((2, 3)).pad([(1, 1)]).sizes, (4, 3))
        self.assertEqual(Shape.new((2, 3)).pad_dims((1,), ((0, 2),)).sizes, (2, 5))

    def test_pad_rejects_negative_amounts(self):
        with self.assertRaises(ValueError):
            Shape.new((2,)).pad([(-1, 0)])


if __name__ == "__main__":
    unittest.main()
