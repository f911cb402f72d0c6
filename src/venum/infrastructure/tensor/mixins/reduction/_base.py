"""
Tensor reduction mixin.

`reduce` is the single, callback-driven reduction primitive: sums, means,
maxima and dot products are all expressed by the caller as a function over a
sub-view. The sub-views come from `single_slice`, so building them never
copies; `f` decides whether to read them with `data()`, `index`, or another
`reduce`.
"""

from __future__ import annotations

from abc import ABC
from typing import Any, Callable, Sequence

from .....domain._tensor import ITensor
from .....domain.shape import ReductionIndexer, Shape
from ..._buffer import as_buffer


class TensorMixinReduction(ABC):
    """Mixin providing `reduce`."""

    def reduce(
        self: ITensor,
        dimensions: Sequence[int],
        f: Callable[[ITensor], Any],
        keepdims: bool = False,
    ) -> "ITensor":
        """
        Collapse the listed dimensions by applying `f` to each sub-view.

        For every combination of coordinates of the kept dimensions (in
        row-major order) a view is built in which those dimensions are pinned
        to size 1 and the reduced dimensions span their full extent; `f`
        maps that view to one output element.

        Parameters
        ----------
        dimensions : Sequence[int]
            Dimensions to reduce. Order is irrelevant.
        f : Callable[[ITensor], Any]
            Receives a rank-preserving view, returns one element.
        keepdims : bool, optional
            Keep reduced dimensions as size 1 (True) or drop them (False,
            default).

        Returns
        -------
        ITensor
            Tensor of the kept sizes. Reducing every dimension without
            `keepdims` yields a 0-d tensor holding one element.

        Raises
        ------
        DimensionOutOfRangeError
            If an entry does not name a dimension.
        DuplicateDimensionError
            If an entry repeats.

        Examples
        --------
        >>> t = Tensor.arange(0, 24).view([2, 3, 4])
        >>> t.reduce([1], lambda v: sum(v.data().tolist()), keepdims=True).sizes
        (2, 1, 4)
        """
        dimensions = tuple(dimensions)
        self.shape.check_dimensions(dimensions)

        indexer = ReductionIndexer(self.sizes, dimensions)
        out = [f(self.single_slice(selector)) for selector in indexer]

        if keepdims:
            reduced = set(dimensions)
            sizes = tuple(1 if d in reduced else s for d, s in enumerate(self.sizes))
        else:
            sizes = indexer.kept_sizes()
        return type(self)._from_buffer(as_buffer(out), Shape.new(sizes))
