"""
Tensor memory / construction mixin.

This module defines `TensorMixinMemory`, a focused mixin that provides the
factory constructors (`new`, `same`, `zeroes`, `ones`, `arange`, `linspace`,
`eye`, ...), materialization (`to_contiguous`, `into_contiguous`) and data
access (`data`, `data_contiguous`, `data_non_contiguous`, `index`,
`index_dims`) for the concrete `Tensor`.

Design intent
-------------
- Keep buffer creation and element gathering in one place, while exposing a
  framework-style API (`Tensor.zeroes`, `Tensor.arange`, ...).
- Every factory reduces to the Tensor constructor over a generated element
  sequence, so validation happens in exactly one spot.
- `data` is declared here and implemented per layout in `_tensor_data`.

Notes
-----
- The mixin assumes the concrete class provides `_buffer`, `_shape`,
  `_from_buffer(...)` and the shape query methods.
- To avoid circular imports, new tensors are built through ``cls`` or
  ``type(self)`` rather than by importing `Tensor`.
"""

from __future__ import annotations

from abc import ABC
from typing import Any, Iterator, Optional, Sequence, Union

import numpy as np

from .....domain._errors import NonContiguousError
from .....domain._tensor import ITensor
from .....domain.shape import Indexer, Shape
from ..._buffer import as_buffer, freeze, log_materialization

Sizes = Union[int, Sequence[int]]
"""A single length or a sequence of dimension sizes."""


def _normalize_sizes(sizes: Sizes) -> tuple[int, ...]:
    if isinstance(sizes, (int, np.integer)):
        return (int(sizes),)
    return tuple(int(s) for s in sizes)


def _ascending(start: Any, end: Any, step: Any) -> Iterator[Any]:
    """Lazily yield ``start, start + step, ...`` while the value is below `end`."""
    current = start
    while current < end:
        yield current
        current = current + step


class TensorMixinMemory(ABC):
    """
    Mixin that implements tensor construction, materialization and reads.

    It provides:

    - Factory constructors: `new`, `new_1d`, `scalar`, `same`, `zeroes`,
      `ones`, `arange`, `linspace`, `eye`
    - Materialization: `to_contiguous`, `into_contiguous`
    - Data access: `data`, `data_contiguous`, `data_non_contiguous`,
      `index`, `index_dims`
    """

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------
    @classmethod
    def new(cls, data: Sequence[Any], sizes: Sizes) -> "ITensor":
        """
        Create a tensor from a flat element sequence and dimension sizes.

        Parameters
        ----------
        data : Sequence[Any]
            Elements in row-major order.
        sizes : int or Sequence[int]
            Dimension sizes.

        Returns
        -------
        ITensor
            A contiguous tensor over a new buffer.

        Raises
        ------
        DataLengthMismatchError
            If ``len(data)`` differs from the product of `sizes`.
        """
        return cls(data, _normalize_sizes(sizes))

    @classmethod
    def new_1d(cls, data: Sequence[Any]) -> "ITensor":
        """Create a one-dimensional tensor holding `data`."""
        return cls(data)

    @classmethod
    def scalar(cls, value: Any) -> "ITensor":
        """Create a tensor of sizes ``(1,)`` holding `value`."""
        return cls([value], (1,))

    @classmethod
    def same(cls, element: Any, sizes: Sizes, dtype: Optional[Any] = None) -> "ITensor":
        """
        Create a tensor with every element equal to `element`.

        Parameters
        ----------
        element : Any
            Fill value.
        sizes : int or Sequence[int]
            Dimension sizes.
        dtype : Optional[Any]
            Element dtype; inferred from `element` when omitted.

        Notes
        -----
        A non-scalar `element` (a tuple, a list, ...) is stored whole in
        every slot rather than broadcast.
        """
        sizes = _normalize_sizes(sizes)
        numel = Shape.new(sizes).numel()
        if not np.isscalar(element):
            return cls(as_buffer([element] * numel, dtype), sizes)
        return cls(np.full(numel, element, dtype=dtype), sizes)

    @classmethod
    def zeroes(cls, sizes: Sizes, dtype: Any = float) -> "ITensor":
        """Create a tensor of zeros (float by default)."""
        sizes = _normalize_sizes(sizes)
        return cls(np.zeros(Shape.new(sizes).numel(), dtype=dtype), sizes)

    @classmethod
    def ones(cls, sizes: Sizes, dtype: Any = float) -> "ITensor":
        """Create a tensor of ones (float by default)."""
        sizes = _normalize_sizes(sizes)
        return cls(np.ones(Shape.new(sizes).numel(), dtype=dtype), sizes)

    @classmethod
    def arange(cls, start: Any, end: Any, step: Any = 1) -> "ITensor":
        """
        Create a 1-D tensor of ascending values ``start, start + step, ...``.

        Values are produced by repeated addition and stop before reaching
        `end` (exclusive).

        Raises
        ------
        ValueError
            If `step` is not positive.
        """
        if not step > 0:
            raise ValueError(f"arange requires a positive step, got {step!r}")
        return cls(list(_ascending(start, end, step)))

    @classmethod
    def linspace(cls, start: Any, end: Any, num: int) -> "ITensor":
        """
        Create a 1-D tensor of `num` evenly spaced values over ``[start, end]``.

        Both ends are included when ``num > 1``; ``num == 1`` yields
        ``[start]``.

        Raises
        ------
        ValueError
            If `num` is negative.
        """
        if num < 0:
            raise ValueError(f"linspace requires a non-negative count, got {num}")
        return cls(np.linspace(start, end, num))

    @classmethod
    def eye(cls, size: int, dtype: Any = float) -> "ITensor":
        """Create a ``size x size`` identity matrix."""
        return cls(np.eye(size, dtype=dtype), (size, size))

    # ------------------------------------------------------------------
    # Materialization
    # ------------------------------------------------------------------
    def to_contiguous(self: ITensor) -> "ITensor":
        """
        Copy the logical contents into a new canonical row-major buffer.

        Always materializes, even when the tensor is already contiguous.

        Returns
        -------
        ITensor
            A tensor at offset 0 with canonical strides over a new buffer.
        """
        data = self.data_non_contiguous()
        log_materialization("to_contiguous", data.shape[0])
        return type(self)._from_buffer(freeze(data), Shape.new(self.sizes))

    def into_contiguous(self: ITensor) -> "ITensor":
        """Return `self` if contiguous, otherwise `to_contiguous()`."""
        if self.is_contiguous():
            return self
        return self.to_contiguous()

    # ------------------------------------------------------------------
    # Data access
    # ------------------------------------------------------------------
    def data(self: ITensor) -> np.ndarray:
        """
        Return the logical elements in row-major order as a new array.

        Contiguous tensors copy their buffer run directly; all others are
        gathered coordinate by coordinate (see `data_non_contiguous`).

        Returns
        -------
        np.ndarray
            A writable, caller-owned 1-D array of length `numel()`.
        """
        ...

    def data_contiguous(self: ITensor) -> np.ndarray:
        """
        Return the backing run ``[offset, offset + numel)`` without copying.

        For a reversed (all-negative) contiguous layout the run is returned
        reversed, which is still a zero-copy numpy view.

        Returns
        -------
        np.ndarray
            A read-only view into the shared buffer, in logical order.

        Raises
        ------
        NonContiguousError
            If the tensor is not contiguous.
        """
        if not self._shape.is_contiguous():
            raise NonContiguousError(self.sizes)
        start = self.offset
        run = self._buffer[start : start + self.numel()]
        return run[::-1] if self._shape.is_reversed() else run

    def data_non_contiguous(self: ITensor) -> np.ndarray:
        """
        Gather the logical elements by walking every coordinate in row-major order.

        Works for any layout: each coordinate produced by `Indexer` is read
        through the tensor's Shape.

        Returns
        -------
        np.ndarray
            A writable, caller-owned 1-D array of length `numel()`.
        """
        buffer, shape = self._buffer, self._shape
        out = np.empty(shape.numel(), dtype=buffer.dtype)
        for k, index in enumerate(Indexer(shape.sizes)):
            out[k] = buffer[shape._linear(index)]
        return out

    def index(self: ITensor, indices: Sequence[int]) -> Any:
        """
        Read one element by its full coordinate.

        Raises
        ------
        DimensionCountMismatchError
            If ``len(indices) != ndims()``.
        IndexOutOfRangeError
            If a coordinate lies outside its dimension.
        """
        return self._buffer.item(self._shape.element(indices))

    def index_dims(self: ITensor, dimensions: Sequence[int], indices: Sequence[int]) -> Any:
        """
        Read one element naming coordinates only for the listed dimensions.

        Unlisted dimensions are read at coordinate 0.
        """
        return self._buffer.item(self._shape.index_dims(dimensions, indices))
