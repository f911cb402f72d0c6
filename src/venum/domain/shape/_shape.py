"""
Shape: the mapping from logical coordinates to linear buffer offsets.

A `Shape` pairs an ordered sequence of dimension sizes with a parallel
sequence of `Stride` values and a base offset. It never owns element data;
it only answers "where in the flat buffer does coordinate ``index`` live":

    offset = base_offset + sum(stride[d].apply(index[d], size[d]))

Every transform (view, permute, flip, slice, expand, ...) returns a new
Shape and leaves the receiver untouched, which is what lets tensors share one
buffer across arbitrarily many views.

Design notes
------------
- Validation is uniform: every precondition failure raises one of the
  exceptions in `venum.domain._errors`; nothing is silently corrected.
- `element` validates its coordinate; `_linear` is the unchecked variant used
  by the index-generator loops, whose coordinates are valid by construction.
- Slicing a negative-direction dimension moves the base offset by
  ``(size - end) * magnitude``: the buffer order is fixed, so the first kept
  logical coordinate of a flipped dimension sits ``size - end`` steps from the
  buffer-side end of the dimension.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .._errors import (
    DimensionCountMismatchError,
    DimensionOutOfRangeError,
    DuplicateDimensionError,
    IncompatibleBroadcastError,
    IncompatibleExpansionError,
    IndexOutOfRangeError,
    NonContiguousError,
    RangeOutOfBoundsError,
    ReshapeMismatchError,
    DataLengthMismatchError,
)
from ._stride import Stride

Range = Tuple[int, int]
"""Half-open ``(start, end)`` range; ``end == 0`` means "through the size"."""


def _product(sizes: Sequence[int]) -> int:
    out = 1
    for s in sizes:
        out *= s
    return out


def _row_major_strides(sizes: Sequence[int], positive: bool = True) -> Tuple[Stride, ...]:
    """
    Derive canonical row-major strides by scanning sizes from last to first.

    The running product of the sizes seen so far becomes each dimension's
    stride magnitude.
    """
    current = 1
    strides = []
    for size in reversed(sizes):
        strides.append(Stride(current, positive))
        current *= size
    strides.reverse()
    return tuple(strides)


@dataclass(frozen=True)
class Shape:
    """
    Immutable sizes/strides/offset triple describing a strided view.

    Parameters
    ----------
    sizes : tuple[int, ...]
        Dimension sizes. Must be non-negative.
    strides : tuple[Stride, ...]
        One `Stride` per dimension.
    offset : int, optional
        Base offset into the backing buffer. Defaults to 0.

    Raises
    ------
    DimensionCountMismatchError
        If `sizes` and `strides` have different lengths.
    ValueError
        If a size or the offset is negative.
    """

    sizes: Tuple[int, ...]
    strides: Tuple[Stride, ...]
    offset: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "sizes", tuple(int(s) for s in self.sizes))
        object.__setattr__(self, "strides", tuple(self.strides))
        object.__setattr__(self, "offset", int(self.offset))

        if len(self.sizes) != len(self.strides):
            raise DimensionCountMismatchError(len(self.sizes), len(self.strides), "strides")
        if any(s < 0 for s in self.sizes):
            raise ValueError(f"Sizes must be non-negative, got {self.sizes}")
        if self.offset < 0:
            raise ValueError(f"Offset must be non-negative, got {self.offset}")

    # ------------------------------------------------------------------
    # Construction and queries
    # ------------------------------------------------------------------
    @classmethod
    def new(cls, sizes: Sequence[int], offset: int = 0) -> "Shape":
        """
        Build the canonical contiguous (row-major, forward) shape for `sizes`.

        Parameters
        ----------
        sizes : Sequence[int]
            Dimension sizes.
        offset : int, optional
            Base offset. Defaults to 0.

        Returns
        -------
        Shape
            Shape whose strides are the running products of the trailing sizes.
        """
        sizes = tuple(int(s) for s in sizes)
        return cls(sizes, _row_major_strides(sizes), offset)

    @property
    def ndims(self) -> int:
        return len(self.sizes)

    def numel(self) -> int:
        return _product(self.sizes)

    def is_contiguous(self) -> bool:
        """
        Whether the logical elements form one unbroken run of the buffer.

        Holds iff every adjacent pair satisfies
        ``stride[i] == stride[i + 1] * size[i + 1]`` (direction included) and
        the innermost stride has magnitude 1. A rank-0 shape is vacuously
        contiguous.
        """
        if not self.sizes:
            return True
        if self.strides[-1].magnitude != 1:
            return False
        for i in range(self.ndims - 1):
            if self.strides[i] != self.strides[i + 1] * self.sizes[i + 1]:
                return False
        return True

    def is_reversed(self) -> bool:
        """
        Whether the innermost dimension runs backwards through the buffer.

        For a contiguous shape this means the whole logical sequence is the
        reverse of the buffer run ``[offset, offset + numel)``.
        """
        return bool(self.strides) and not self.strides[-1].is_positive

    # ------------------------------------------------------------------
    # Zero-copy transforms
    # ------------------------------------------------------------------
    def view(self, sizes: Sequence[int]) -> "Shape":
        """
        Reinterpret the same element run under new dimension sizes.

        The direction of the source is preserved, so a reversed contiguous
        source yields a reversed view.

        Raises
        ------
        ReshapeMismatchError
            If the element counts differ.
        NonContiguousError
            If the source is not contiguous.
        """
        sizes = tuple(int(s) for s in sizes)
        if _product(sizes) != self.numel():
            raise ReshapeMismatchError(self.sizes, sizes)
        if not self.is_contiguous():
            raise NonContiguousError(self.sizes, sizes)
        return Shape(sizes, _row_major_strides(sizes, not self.is_reversed()), self.offset)

    def squeeze(self) -> "Shape":
        """
        Drop every size-1 dimension.

        If every dimension has size 1 the result is a single size-1
        dimension, never a rank-0 shape. A rank-0 shape is therefore
        promoted to sizes ``(1,)``.
        """
        if all(s == 1 for s in self.sizes):
            return Shape.new((1,), self.offset)
        kept = [(s, st) for s, st in zip(self.sizes, self.strides) if s != 1]
        return Shape(
            tuple(s for s, _ in kept), tuple(st for _, st in kept), self.offset
        )

    def unsqueeze(self, ndims: int) -> "Shape":
        """
        Pad with leading size-1 dimensions until the rank equals `ndims`.

        Raises
        ------
        DimensionCountMismatchError
            If `ndims` is smaller than the current rank.
        """
        if ndims < self.ndims:
            raise DimensionCountMismatchError(self.ndims, ndims, "requested dimensions")
        missing = ndims - self.ndims
        if missing == 0:
            return self
        lead = self.strides[0] * self.sizes[0] if self.sizes else Stride.positive(1)
        return Shape(
            (1,) * missing + self.sizes, (lead,) * missing + self.strides, self.offset
        )

    def permute(self, order: Sequence[int]) -> "Shape":
        """
        Reorder dimensions; ``result.sizes[i] == self.sizes[order[i]]``.

        Raises
        ------
        DimensionCountMismatchError
            If ``len(order) != ndims``.
        DimensionOutOfRangeError
            If an entry does not name a dimension.
        DuplicateDimensionError
            If an entry repeats.
        """
        order = tuple(order)
        self._check_count(len(order), "permutation entries")
        self._check_dimensions(order)
        return Shape(
            tuple(self.sizes[d] for d in order),
            tuple(self.strides[d] for d in order),
            self.offset,
        )

    def transpose(self, dim_1: int, dim_2: int) -> "Shape":
        """Swap two dimensions (a `permute` of two positions)."""
        self._check_dimensions((dim_1, dim_2))
        order = list(range(self.ndims))
        order[dim_1], order[dim_2] = order[dim_2], order[dim_1]
        return self.permute(order)

    def flip(self, dimensions: Sequence[int]) -> "Shape":
        """
        Invert the direction (not the magnitude) of the listed dimensions.

        Raises
        ------
        DimensionOutOfRangeError
            If an entry does not name a dimension.
        DuplicateDimensionError
            If an entry repeats.
        """
        dimensions = tuple(dimensions)
        self._check_dimensions(dimensions)
        flips = set(dimensions)
        strides = tuple(
            st.flipped() if d in flips else st for d, st in enumerate(self.strides)
        )
        return Shape(self.sizes, strides, self.offset)

    def expand(self, sizes: Sequence[int]) -> "Shape":
        """
        Stretch size-1 dimensions to the requested sizes with stride 0.

        Raises
        ------
        DimensionCountMismatchError
            If the rank of `sizes` differs from the current rank.
        IncompatibleExpansionError
            If a dimension whose size is not 1 would have to change size.
        """
        sizes = tuple(int(s) for s in sizes)
        if sizes == self.sizes:
            return self
        self._check_count(len(sizes), "expansion sizes")

        new_strides = []
        for d, (size, stride, target) in enumerate(zip(self.sizes, self.strides, sizes)):
            if target == size:
                new_strides.append(stride)
            elif size == 1:
                new_strides.append(Stride.positive(0))
            else:
                raise IncompatibleExpansionError(size, target, d)
        return Shape(sizes, tuple(new_strides), self.offset)

    @staticmethod
    def broadcast(lhs: Sequence[int], rhs: Sequence[int]) -> Tuple[int, ...]:
        """
        Compute the broadcast result sizes of two size sequences.

        The sequences are right-aligned. Equal sizes pass through, a size of 1
        adopts the other side's size, and unpaired leading dimensions of the
        longer operand pass through unchanged.

        Raises
        ------
        IncompatibleBroadcastError
            If an aligned pair differs and neither side is 1.

        Examples
        --------
        >>> Shape.broadcast((3, 1), (1, 4))
        (3, 4)
        """
        lhs, rhs = tuple(lhs), tuple(rhs)
        ndims = max(len(lhs), len(rhs))
        padded_lhs = (1,) * (ndims - len(lhs)) + lhs
        padded_rhs = (1,) * (ndims - len(rhs)) + rhs

        result = []
        for l, r in zip(padded_lhs, padded_rhs):
            if l == r or r == 1:
                result.append(l)
            elif l == 1:
                result.append(r)
            else:
                raise IncompatibleBroadcastError(lhs, rhs)
        return tuple(result)

    # ------------------------------------------------------------------
    # Indexing and region selection
    # ------------------------------------------------------------------
    def element(self, indices: Sequence[int]) -> int:
        """
        Return the buffer offset of one logical coordinate.

        Raises
        ------
        DimensionCountMismatchError
            If ``len(indices) != ndims``.
        IndexOutOfRangeError
            If a coordinate is negative or not smaller than its size.
        """
        indices = tuple(indices)
        self._check_count(len(indices), "indices")
        for d, (index, size) in enumerate(zip(indices, self.sizes)):
            if not 0 <= index < size:
                raise IndexOutOfRangeError(index, d, size)
        return self._linear(indices)

    index = element

    def _linear(self, indices: Sequence[int]) -> int:
        offset = self.offset
        for index, size, stride in zip(indices, self.sizes, self.strides):
            offset += stride.apply(index, size)
        return offset

    def index_dims(self, dimensions: Sequence[int], indices: Sequence[int]) -> int:
        """
        Return the buffer offset of a coordinate given only for some dimensions.

        Dimensions that are not listed are read at coordinate 0.
        """
        dimensions, indices = tuple(dimensions), tuple(indices)
        if len(dimensions) != len(indices):
            raise DimensionCountMismatchError(len(dimensions), len(indices))
        self._check_dimensions(dimensions)

        full = [0] * self.ndims
        for d, i in zip(dimensions, indices):
            full[d] = i
        return self.element(full)

    def slice(self, ranges: Sequence[Range]) -> "Shape":
        """
        Select a half-open ``[start, end)`` region per dimension.

        ``end == 0`` is shorthand for "through the current size", and missing
        trailing ranges are full extent. Strides are unchanged; sizes shrink to
        ``end - start`` and the base offset moves to the first kept element.

        Raises
        ------
        DimensionCountMismatchError
            If more ranges than dimensions are given.
        RangeOutOfBoundsError
            If ``start > end`` or either bound lies outside ``[0, size]``.
        """
        resolved = self._resolve_ranges(ranges)

        offset = self.offset
        sizes = []
        for (start, end), size, stride in zip(resolved, self.sizes, self.strides):
            if stride.is_positive:
                offset += start * stride.magnitude
            else:
                offset += (size - end) * stride.magnitude
            sizes.append(end - start)
        return Shape(tuple(sizes), self.strides, offset)

    def slice_dims(self, dimensions: Sequence[int], ranges: Sequence[Range]) -> "Shape":
        """Slice only the listed dimensions; all others stay at full extent."""
        dimensions, ranges = tuple(dimensions), tuple(ranges)
        if len(dimensions) != len(ranges):
            raise DimensionCountMismatchError(len(dimensions), len(ranges), "ranges")
        self._check_dimensions(dimensions)

        full: list = [(0, 0)] * self.ndims
        for d, r in zip(dimensions, ranges):
            full[d] = r
        return self.slice(full)

    def single_slice(self, indices: Sequence[Optional[int]]) -> "Shape":
        """
        Pin the dimensions that have an explicit index; keep the rest whole.

        A pinned dimension collapses to size 1 and its offset contribution is
        folded into the base offset, so the rank is preserved.

        Raises
        ------
        DimensionCountMismatchError
            If ``len(indices) != ndims``.
        IndexOutOfRangeError
            If a pinned coordinate is outside its dimension.
        """
        indices = tuple(indices)
        self._check_count(len(indices), "indices")

        offset = self.offset
        sizes = []
        for d, (index, size, stride) in enumerate(zip(indices, self.sizes, self.strides)):
            if index is None:
                sizes.append(size)
                continue
            if not 0 <= index < size:
                raise IndexOutOfRangeError(index, d, size)
            offset += stride.apply(index, size)
            sizes.append(1)
        return Shape(tuple(sizes), self.strides, offset)

    def pad(self, padding: Sequence[Range]) -> "Shape":
        """
        Return the canonical shape of the sizes grown by ``(before, after)``.

        Missing trailing pads are ``(0, 0)``.
        """
        padding = tuple(padding)
        if len(padding) > self.ndims:
            raise DimensionCountMismatchError(self.ndims, len(padding), "paddings")
        padding = padding + ((0, 0),) * (self.ndims - len(padding))

        sizes = []
        for size, (before, after) in zip(self.sizes, padding):
            if before < 0 or after < 0:
                raise ValueError(f"Padding must be non-negative, got {(before, after)}")
            sizes.append(before + size + after)
        return Shape.new(sizes)

    def pad_dims(self, dimensions: Sequence[int], padding: Sequence[Range]) -> "Shape":
        """Pad only the listed dimensions."""
        dimensions, padding = tuple(dimensions), tuple(padding)
        if len(dimensions) != len(padding):
            raise DimensionCountMismatchError(len(dimensions), len(padding), "paddings")
        self._check_dimensions(dimensions)

        full: list = [(0, 0)] * self.ndims
        for d, p in zip(dimensions, padding):
            full[d] = p
        return self.pad(full)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def check_data_length(self, length: int) -> None:
        """Raise `DataLengthMismatchError` unless ``length == numel()``."""
        if length != self.numel():
            raise DataLengthMismatchError(self.numel(), length)

    def check_dimensions(self, dimensions: Sequence[int]) -> None:
        """Raise unless every entry names a dimension and none repeats."""
        self._check_dimensions(tuple(dimensions))

    def _check_count(self, length: int, what: str) -> None:
        if length != self.ndims:
            raise DimensionCountMismatchError(self.ndims, length, what)

    def _check_dimensions(self, dimensions: Tuple[int, ...]) -> None:
        seen = set()
        for d in dimensions:
            if not 0 <= d < self.ndims:
                raise DimensionOutOfRangeError(d, self.ndims)
            if d in seen:
                raise DuplicateDimensionError(d)
            seen.add(d)

    def _resolve_ranges(self, ranges: Sequence[Range]) -> Tuple[Range, ...]:
        ranges = tuple(ranges)
        if len(ranges) > self.ndims:
            raise DimensionCountMismatchError(self.ndims, len(ranges), "ranges")

        resolved = []
        for d, size in enumerate(self.sizes):
            start, end = ranges[d] if d < len(ranges) else (0, 0)
            if end == 0:
                end = size
            if start < 0 or start > end or end > size:
                raise RangeOutOfBoundsError(start, end, d, size)
            resolved.append((start, end))
        return tuple(resolved)
