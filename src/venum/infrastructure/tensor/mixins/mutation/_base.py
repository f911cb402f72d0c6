"""
Copy-on-write "mutation" mixin.

Buffers are never written after creation, so every method here follows the
same recipe:

1. validate the request against the receiver's Shape,
2. take a private, logically ordered copy with `data()`,
3. overwrite the addressed positions,
4. wrap the copy in a new tensor with the canonical Shape of the receiver's
   sizes.

Tensors sharing the receiver's buffer, the receiver included, never observe
the change.
"""

from __future__ import annotations

from abc import ABC
from typing import Any, Callable, List, Sequence

from .....domain._tensor import ITensor
from .....domain.shape import Indexer, Range, Shape
from ..._buffer import as_values, scatter


def _region_positions(region: Shape) -> List[int]:
    return [region._linear(index) for index in Indexer(region.sizes)]


class TensorMixinMutation(ABC):
    """
    Mixin implementing copy-on-write updates and padding.

    Notes
    -----
    Every validation error is raised before any copy is made.
    """

    def _rewrite(self: ITensor, layout: Shape, positions: List[int], updates: List[Any]) -> "ITensor":
        data = self.data()
        return type(self)._from_buffer(scatter(data, positions, updates), layout)

    # ------------------------------------------------------------------
    # Single elements
    # ------------------------------------------------------------------
    def index_map(self: ITensor, f: Callable[[Any], Any], indices: Sequence[int]) -> "ITensor":
        """
        Return a copy in which the element at `indices` is replaced by ``f(old)``.

        Raises
        ------
        DimensionCountMismatchError
            If ``len(indices) != ndims()``.
        IndexOutOfRangeError
            If a coordinate lies outside its dimension.
        """
        layout = Shape.new(self.sizes)
        position = layout.element(indices)
        return self._rewrite(layout, [position], [f(self.index(indices))])

    def index_map_dims(
        self: ITensor,
        f: Callable[[Any], Any],
        dimensions: Sequence[int],
        indices: Sequence[int],
    ) -> "ITensor":
        """Like `index_map`, naming coordinates only for `dimensions` (others 0)."""
        layout = Shape.new(self.sizes)
        position = layout.index_dims(dimensions, indices)
        return self._rewrite(layout, [position], [f(self.index_dims(dimensions, indices))])

    # ------------------------------------------------------------------
    # Regions
    # ------------------------------------------------------------------
    def slice_map(self: ITensor, f: Callable[[Any], Any], ranges: Sequence[Range]) -> "ITensor":
        """
        Return a copy in which every element of the region `ranges` becomes ``f(old)``.

        `ranges` follows `slice` conventions (half-open, ``end == 0`` means
        "through the size", missing trailing ranges are full extent).
        """
        layout = Shape.new(self.sizes)
        positions = _region_positions(layout.slice(ranges))
        old = self.slice(ranges).data().tolist()
        return self._rewrite(layout, positions, [f(x) for x in old])

    def slice_map_dims(
        self: ITensor,
        f: Callable[[Any], Any],
        dimensions: Sequence[int],
        ranges: Sequence[Range],
    ) -> "ITensor":
        layout = Shape.new(self.sizes)
        positions = _region_positions(layout.slice_dims(dimensions, ranges))
        old = self.slice_dims(dimensions, ranges).data().tolist()
        return self._rewrite(layout, positions, [f(x) for x in old])

    def slice_zip(
        self: ITensor,
        values: Sequence[Any],
        f: Callable[[Any, Any], Any],
        ranges: Sequence[Range],
    ) -> "ITensor":
        """
        Combine the region `ranges` with `values` (row-major) as ``f(old, value)``.

        Raises
        ------
        DataLengthMismatchError
            If `values` does not hold one entry per element of the region.
        """
        layout = Shape.new(self.sizes)
        region = layout.slice(ranges)
        values = as_values(values)
        region.check_data_length(len(values))

        old = self.slice(ranges).data().tolist()
        updates = [f(a, b) for a, b in zip(old, values)]
        return self._rewrite(layout, _region_positions(region), updates)

    def slice_zip_dims(
        self: ITensor,
        values: Sequence[Any],
        f: Callable[[Any, Any], Any],
        dimensions: Sequence[int],
        ranges: Sequence[Range],
    ) -> "ITensor":
        layout = Shape.new(self.sizes)
        region = layout.slice_dims(dimensions, ranges)
        values = as_values(values)
        region.check_data_length(len(values))

        old = self.slice_dims(dimensions, ranges).data().tolist()
        updates = [f(a, b) for a, b in zip(old, values)]
        return self._rewrite(layout, _region_positions(region), updates)

    # ------------------------------------------------------------------
    # Padding
    # ------------------------------------------------------------------
    def pad(self: ITensor, constant: Any, padding: Sequence[Range]) -> "ITensor":
        """
        Surround the tensor with `constant`, ``(before, after)`` per dimension.

        Missing trailing pads are ``(0, 0)``.

        Examples
        --------
        >>> Tensor.new([1, 2], [2]).pad(0, [(1, 2)]).data().tolist()
        [0, 1, 2, 0, 0]
        """
        padding = tuple(padding)
        canvas = type(self).same(constant, self._shape.pad(padding).sizes)
        if self.numel() == 0:
            return canvas

        ranges = [(before, before + size) for size, (before, _) in zip(self.sizes, padding)]
        return canvas.slice_zip(self.data(), lambda _, new: new, ranges)

    def pad_dims(
        self: ITensor,
        constant: Any,
        dimensions: Sequence[int],
        padding: Sequence[Range],
    ) -> "ITensor":
        """Pad only the listed dimensions."""
        dimensions, padding = tuple(dimensions), tuple(padding)
        canvas = type(self).same(constant, self._shape.pad_dims(dimensions, padding).sizes)
        if self.numel() == 0:
            return canvas

        ranges = [(before, before + self.sizes[d]) for d, (before, _) in zip(dimensions, padding)]
        return canvas.slice_zip_dims(self.data(), lambda _, new: new, dimensions, ranges)
