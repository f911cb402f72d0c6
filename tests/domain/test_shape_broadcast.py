import unittest

from src.venum.domain._errors import IncompatibleBroadcastError
from src.venum.domain.shape import Shape


class TestShapeBroadcast(unittest.TestCase):
    def test_size_one_dimensions_adopt_the_other_side(self):
        self.assertEqual(Shape.broadcast((3, 1), (1, 4)), (3, 4))

    def test_shorter_operand_is_right_aligned(self):
        self.assertEqual(Shape.broadcast((5,), (2, 5)), (2, 5))
        self.assertEqual(Shape.broadcast((2, 1, 4), (3, 1)), (2, 3, 4))

    def test_equal_sizes_pass_through(self):
        self.assertEqual(Shape.broadcast((2, 3), (2, 3)), (2, 3))

    def test_rank_zero_broadcasts_to_anything(self):
        self.assertEqual(Shape.broadcast((), (2, 3)), (2, 3))

    def test_incompatible_sizes(self):
        with self.assertRaises(IncompatibleBroadcastError) as ctx:
            Shape.broadcast((3,), (4,))
        self.assertEqual(ctx.exception.lhs, (3,))
        self.assertEqual(ctx.exception.rhs, (4,))

    def test_incompatible_is_a_value_error(self):
        with self.assertRaises(ValueError):
            Shape.broadcast((2, 3), (3, 2))


if __name__ == "__main__":
    unittest.main()
