import unittest

from src.venum.domain.shape import Indexer, ReductionIndexer


class TestIndexer(unittest.TestCase):
    def test_row_major_order(self):
        self.assertEqual(
            list(Indexer((2, 3))),
            [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)],
        )

    def test_len_is_product_of_sizes(self):
        self.assertEqual(len(Indexer((2, 3, 4))), 24)

    def test_restartable(self):
        indexer = Indexer((2, 2))
        self.assertEqual(list(indexer), list(indexer))

    def test_zero_size_yields_nothing(self):
        self.assertEqual(list(Indexer((3, 0))), [])
        self.assertEqual(len(Indexer((3, 0))), 0)

    def test_rank_zero_yields_single_empty_coordinate(self):
        self.assertEqual(list(Indexer(())), [()])


class TestReductionIndexer(unittest.TestCase):
    def test_selectors_pin_kept_dimensions(self):
        self.assertEqual(
            list(ReductionIndexer((2, 3, 2), (1,))),
            [(0, None, 0), (0, None, 1), (1, None, 0), (1, None, 1)],
        )

    def test_kept_sizes(self):
        self.assertEqual(ReductionIndexer((2, 3, 4), (0, 2)).kept_sizes(), (3,))

    def test_reducing_everything_yields_one_selector(self):
        indexer = ReductionIndexer((2, 3), (0, 1))
        self.assertEqual(list(indexer), [(None, None)])
        self.assertEqual(len(indexer), 1)


if __name__ == "__main__":
    unittest.main()
