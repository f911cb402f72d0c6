"""
Tensor interface definitions.

This module defines the domain-level interface for tensor-like objects using
structural typing. The interface captures the contract that collaborating
layers (numeric element types, compute kernels such as matrix
multiplication, display code) rely on: construction results, shape queries,
data access and the callback-driven elementwise/reduction primitives.

Notes
-----
The protocol is deliberately backend-free: element sequences are typed as
`Sequence[Any]`, so domain code never imports numpy.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Sequence, Tuple, runtime_checkable

from .shape import Shape, Stride


@runtime_checkable
class ITensor(Protocol):
    """
    Tensor interface.

    An `ITensor` is a logical N-dimensional view over a shared, immutable,
    flat element buffer. Shape transforms return new views over the same
    buffer; data-producing operations return new tensors over new buffers.

    Notes
    -----
    - Implementations never mutate a buffer that another tensor might
      observe; all "mutation" methods are copy-then-replace.
    - Elements are treated as opaque, freely copyable values; arithmetic is
      supplied by the caller through the callback parameters.
    """

    # ---------------------------------------------------------------------
    # Shape queries
    # ---------------------------------------------------------------------
    @property
    def shape(self) -> Shape:
        """
        Return the Shape describing this view.

        Returns
        -------
        Shape
            Sizes, strides and base offset of the view.
        """
        ...

    @property
    def sizes(self) -> Tuple[int, ...]:
        """Return the dimension sizes."""
        ...

    @property
    def strides(self) -> Tuple[Stride, ...]:
        """Return the per-dimension strides."""
        ...

    @property
    def offset(self) -> int:
        """Return the base offset into the backing buffer."""
        ...

    def numel(self) -> int:
        """Return the number of logical elements (product of the sizes)."""
        ...

    def ndims(self) -> int:
        """Return the number of dimensions."""
        ...

    def is_contiguous(self) -> bool:
        """
        Report whether the logical elements form one unbroken buffer run.

        Returns
        -------
        bool
            True when data can be produced by a linear scan.
        """
        ...

    # ---------------------------------------------------------------------
    # Data access
    # ---------------------------------------------------------------------
    def data(self) -> Sequence[Any]:
        """
        Return the logical elements in row-major order as a private copy.

        Returns
        -------
        Sequence[Any]
            A new, caller-owned element sequence of length `numel()`.
        """
        ...

    def index(self, indices: Sequence[int]) -> Any:
        """
        Read one element by its full coordinate.

        Raises
        ------
        DimensionCountMismatchError
            If the coordinate has the wrong length.
        IndexOutOfRangeError
            If a coordinate exceeds its dimension.
        """
        ...

    # ---------------------------------------------------------------------
    # Callback-driven primitives
    # ---------------------------------------------------------------------
    def unary_map(self, f: Callable[[Any], Any]) -> "ITensor":
        """Apply `f` to every element, producing a new tensor."""
        ...

    def zip(self, rhs: "ITensor", f: Callable[[Any, Any], Any]) -> "ITensor":
        """Combine two tensors elementwise, broadcasting when sizes differ."""
        ...

    def reduce(
        self,
        dimensions: Sequence[int],
        f: Callable[["ITensor"], Any],
        keepdims: bool = False,
    ) -> "ITensor":
        """Collapse the listed dimensions by applying `f` to each sub-view."""
        ...

    def view_else_reshape(self, sizes: Sequence[int]) -> "ITensor":
        """Reinterpret under new sizes, copying only when a view is impossible."""
        ...

    def transpose(self, dim_1: int, dim_2: int) -> "ITensor":
        """Swap two dimensions without copying."""
        ...

    def slice(self, ranges: Sequence[Tuple[int, int]]) -> "ITensor":
        """Select a half-open region per dimension without copying."""
        ...

    def single_slice(self, indices: Sequence[Optional[int]]) -> "ITensor":
        """Pin the dimensions that have an index; keep the others whole."""
        ...
