"""
Row-major coordinate generators.

`Indexer` is the single mechanism used to visit every logical coordinate of a
strided or broadcast view: materialization, the strided paths of the
elementwise operations, copy-on-write region updates and broadcasting all
iterate it. `ReductionIndexer` is its counterpart for reductions, producing
`Shape.single_slice` selectors for every combination of the kept dimensions.

Both are finite and restartable: each call to `iter()` starts over.
"""

from __future__ import annotations

from itertools import product
from typing import Iterator, Optional, Sequence, Tuple


class Indexer:
    """
    Row-major iterable over every coordinate of a size sequence.

    The most significant (first) dimension varies slowest. A size sequence
    containing a 0 yields nothing; an empty size sequence (rank 0) yields the
    single empty coordinate.

    Parameters
    ----------
    sizes : Sequence[int]
        Dimension sizes of the index space.

    Examples
    --------
    >>> list(Indexer((2, 2)))
    [(0, 0), (0, 1), (1, 0), (1, 1)]
    """

    __slots__ = ("_sizes",)

    def __init__(self, sizes: Sequence[int]) -> None:
        self._sizes = tuple(int(s) for s in sizes)

    @property
    def sizes(self) -> Tuple[int, ...]:
        return self._sizes

    def __iter__(self) -> Iterator[Tuple[int, ...]]:
        return product(*(range(s) for s in self._sizes))

    def __len__(self) -> int:
        n = 1
        for s in self._sizes:
            n *= s
        return n

    def __repr__(self) -> str:
        return f"Indexer(sizes={self._sizes})"


class ReductionIndexer:
    """
    Row-major iterable of selectors pinning every non-reduced dimension.

    Each yielded selector has one entry per dimension: ``None`` for a reduced
    dimension (kept at full extent) and a concrete coordinate for every other
    dimension. Selectors come out in row-major order of the kept dimensions,
    which is the order of the reduction's output elements.

    Parameters
    ----------
    sizes : Sequence[int]
        Dimension sizes of the tensor being reduced.
    dimensions : Sequence[int]
        Dimension ids being reduced. Assumed validated by the caller.

    Examples
    --------
    >>> list(ReductionIndexer((2, 3), (1,)))
    [(0, None), (1, None)]
    """

    __slots__ = ("_sizes", "_dimensions")

    def __init__(self, sizes: Sequence[int], dimensions: Sequence[int]) -> None:
        self._sizes = tuple(int(s) for s in sizes)
        self._dimensions = frozenset(int(d) for d in dimensions)

    def kept_sizes(self) -> Tuple[int, ...]:
        """Sizes of the dimensions that are not reduced, in order."""
        return tuple(
            s for d, s in enumerate(self._sizes) if d not in self._dimensions
        )

    def __iter__(self) -> Iterator[Tuple[Optional[int], ...]]:
        kept = [d for d in range(len(self._sizes)) if d not in self._dimensions]
        for coordinate in Indexer(self.kept_sizes()):
            selector: list = [None] * len(self._sizes)
            for d, i in zip(kept, coordinate):
                selector[d] = i
            yield tuple(selector)

    def __len__(self) -> int:
        return len(Indexer(self.kept_sizes()))
