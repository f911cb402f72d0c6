"""
Tensor shape-transform mixin.

`TensorMixinShape` exposes the Shape algebra at the tensor level. Views
(`view`, `permute`, `flip`, `slice`, `expand`, ...) only compute a new Shape
and wrap the *same* buffer, so their cost is independent of the element
count. `reshape` and `flatten` always copy into a new canonical buffer, and
`view_else_reshape` copies only when no view exists.
"""

from __future__ import annotations

import logging
from abc import ABC
from typing import Optional, Sequence

from .....domain._errors import ReshapeMismatchError
from .....domain._tensor import ITensor
from .....domain.shape import Range, Shape
from ..._buffer import freeze, log_materialization

logger = logging.getLogger(__name__)


class TensorMixinShape(ABC):
    """
    Mixin implementing zero-copy views and copying reshapes.

    Every method returns a new tensor; the receiver is never modified.
    """

    # ------------------------------------------------------------------
    # Zero-copy views
    # ------------------------------------------------------------------
    def view(self: ITensor, sizes: Sequence[int]) -> "ITensor":
        """
        Reinterpret the contiguous element run under new sizes, sharing the buffer.

        Raises
        ------
        ReshapeMismatchError
            If the element counts differ.
        NonContiguousError
            If the tensor is not contiguous.
        """
        return self._with_shape(self._shape.view(sizes))

    def ravel(self: ITensor) -> "ITensor":
        """View as one dimension of `numel()` elements (contiguous tensors only)."""
        return self.view((self.numel(),))

    def squeeze(self: ITensor) -> "ITensor":
        return self._with_shape(self._shape.squeeze())

    def unsqueeze(self: ITensor, ndims: int) -> "ITensor":
        return self._with_shape(self._shape.unsqueeze(ndims))

    def permute(self: ITensor, order: Sequence[int]) -> "ITensor":
        """
        Reorder dimensions so that ``result.sizes[i] == self.sizes[order[i]]``.

        Raises
        ------
        DimensionCountMismatchError
            If `order` does not have one entry per dimension.
        DimensionOutOfRangeError
            If an entry does not name a dimension.
        DuplicateDimensionError
            If an entry repeats.
        """
        return self._with_shape(self._shape.permute(order))

    def transpose(self: ITensor, dim_1: int, dim_2: int) -> "ITensor":
        return self._with_shape(self._shape.transpose(dim_1, dim_2))

    def expand(self: ITensor, sizes: Sequence[int]) -> "ITensor":
        """Stretch size-1 dimensions to `sizes` with zero strides."""
        return self._with_shape(self._shape.expand(sizes))

    def broadcast_to(self: ITensor, sizes: Sequence[int]) -> "ITensor":
        """
        Add leading size-1 dimensions and expand to `sizes` without copying.

        Raises
        ------
        DimensionCountMismatchError
            If `sizes` has fewer dimensions than the tensor.
        IncompatibleExpansionError
            If a dimension whose size is not 1 would have to change size.
        """
        sizes = tuple(sizes)
        return self._with_shape(self._shape.unsqueeze(len(sizes)).expand(sizes))

    def flip(self: ITensor, dimensions: Sequence[int]) -> "ITensor":
        """Reverse the logical order along each listed dimension."""
        return self._with_shape(self._shape.flip(dimensions))

    def flip_all(self: ITensor) -> "ITensor":
        return self.flip(range(self.ndims()))

    def slice(self: ITensor, ranges: Sequence[Range]) -> "ITensor":
        """
        Select a half-open ``[start, end)`` region per dimension.

        ``end == 0`` means "through the size"; missing trailing ranges keep
        their dimension whole.

        Raises
        ------
        DimensionCountMismatchError
            If more ranges than dimensions are given.
        RangeOutOfBoundsError
            If a range is inverted or leaves its dimension.
        """
        return self._with_shape(self._shape.slice(ranges))

    def slice_dims(self: ITensor, dimensions: Sequence[int], ranges: Sequence[Range]) -> "ITensor":
        return self._with_shape(self._shape.slice_dims(dimensions, ranges))

    def single_slice(self: ITensor, indices: Sequence[Optional[int]]) -> "ITensor":
        """Pin the dimensions that have an index to size 1; keep the rest whole."""
        return self._with_shape(self._shape.single_slice(indices))

    # ------------------------------------------------------------------
    # Copying reshapes
    # ------------------------------------------------------------------
    def reshape(self: ITensor, sizes: Sequence[int]) -> "ITensor":
        """
        Copy the logical elements into a new buffer shaped as `sizes`.

        Always materializes, which is what lets it succeed after permutes,
        flips and other non-contiguous views.

        Raises
        ------
        ReshapeMismatchError
            If the element counts differ.
        """
        sizes = tuple(int(s) for s in sizes)
        target = Shape.new(sizes)
        if target.numel() != self.numel():
            raise ReshapeMismatchError(self.sizes, sizes)

        data = self.data_non_contiguous()
        log_materialization("reshape", data.shape[0])
        return type(self)._from_buffer(freeze(data), target)

    def flatten(self: ITensor) -> "ITensor":
        """Copy into a new one-dimensional tensor."""
        return self.reshape((self.numel(),))

    def view_else_reshape(self: ITensor, sizes: Sequence[int]) -> "ITensor":
        """
        View under `sizes` when possible, otherwise reshape (copy).

        Element-count mismatches still raise `ReshapeMismatchError`.
        """
        try:
            return self.view(sizes)
        except ReshapeMismatchError as exc:
            if Shape.new(tuple(sizes)).numel() != self.numel():
                raise
            logger.debug("view of %s as %s impossible, reshaping: %s", self.sizes, tuple(sizes), exc)
        return self.reshape(sizes)
