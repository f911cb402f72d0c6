"""
Concrete Tensor implementation (numpy-backed strided views).

This module provides the concrete `Tensor`, which satisfies the domain-level
`ITensor` protocol by pairing a shared, read-only, one-dimensional numpy
buffer with a `Shape`. Many tensors may reference one buffer; each sees it
through its own sizes, strides and offset.

Design notes
------------
- The class body holds only state and queries. Behaviour is contributed by
  focused mixins (memory, shape, elementwise, reduction, mutation), several
  of which dispatch on the `_state` property through the layout control-path
  registry.
- Buffers are frozen (``writeable=False``) on creation. Operations that
  "modify" a tensor always build a new buffer.
- Buffer sharing is observable through identity: ``a.buffer is b.buffer``.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence, Tuple

import numpy as np

from ...domain._layout import Layout
from ...domain._tensor import ITensor
from ...domain.shape import Shape, Stride
from .._config import get_config
from ._buffer import as_buffer


from .mixins.memory import TensorMixinMemory
from .mixins.shape import TensorMixinShape
from .mixins.elementwise import TensorMixinElementwise
from .mixins.reduction import TensorMixinReduction
from .mixins.mutation import TensorMixinMutation


class Tensor(
    TensorMixinMemory,
    TensorMixinShape,
    TensorMixinElementwise,
    TensorMixinReduction,
    TensorMixinMutation,
    ITensor,
):
    """
    N-dimensional strided view over a shared, immutable element buffer.

    Parameters
    ----------
    data : Iterable[Any]
        Elements in row-major order. numpy arrays are flattened.
    sizes : Optional[Sequence[int]], optional
        Dimension sizes. Defaults to one dimension of ``len(data)``.

    Raises
    ------
    DataLengthMismatchError
        If the number of elements differs from the product of `sizes`.

    Examples
    --------
    >>> t = Tensor([1, 2, 3, 4, 5, 6], (2, 3))
    >>> t.transpose(0, 1).data().tolist()
    [1, 4, 2, 5, 3, 6]
    """

    __hash__ = None

    def __init__(self, data: Iterable[Any], sizes: Optional[Sequence[int]] = None) -> None:
        buffer = as_buffer(data)
        if sizes is None:
            sizes = (buffer.shape[0],)

        shape = Shape.new(sizes)
        shape.check_data_length(buffer.shape[0])

        self._buffer = buffer
        self._shape = shape

    @classmethod
    def _from_buffer(cls, buffer: np.ndarray, shape: Shape) -> "Tensor":
        """Wrap an existing read-only buffer without copying or validating it."""
        tensor = cls.__new__(cls)
        tensor._buffer = buffer
        tensor._shape = shape
        return tensor

    def _with_shape(self, shape: Shape) -> "Tensor":
        """Return a view of the same buffer through `shape`."""
        return type(self)._from_buffer(self._buffer, shape)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def shape(self) -> Shape:
        return self._shape

    @property
    def sizes(self) -> Tuple[int, ...]:
        return self._shape.sizes

    @property
    def strides(self) -> Tuple[Stride, ...]:
        return self._shape.strides

    @property
    def offset(self) -> int:
        return self._shape.offset

    @property
    def buffer(self) -> np.ndarray:
        """
        Return the shared backing buffer.

        Returns
        -------
        np.ndarray
            The read-only one-dimensional array this view reads from. Views
            of one tensor return the very same object.
        """
        return self._buffer

    @property
    def dtype(self) -> np.dtype:
        return self._buffer.dtype

    @property
    def layout(self) -> Layout:
        """Memory layout of this view, independent of configuration."""
        return Layout.CONTIGUOUS if self._shape.is_contiguous() else Layout.STRIDED

    @property
    def _state(self) -> Layout:
        """
        Dispatch state for the layout control paths.

        Equals `layout`, except that every tensor reports `Layout.STRIDED`
        while the ``fast_path`` configuration flag is off.
        """
        if not get_config().fast_path:
            return Layout.STRIDED
        return self.layout

    def numel(self) -> int:
        return self._shape.numel()

    def ndims(self) -> int:
        return self._shape.ndims

    def is_contiguous(self) -> bool:
        return self._shape.is_contiguous()

    # ------------------------------------------------------------------
    # Comparison and display
    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        """
        Logical equality: same sizes and the same row-major elements.

        Layout is ignored, so a view equals its materialized copy.
        """
        if not isinstance(other, Tensor):
            return NotImplemented
        return self.sizes == other.sizes and bool(np.array_equal(self.data(), other.data()))

    def __repr__(self) -> str:
        return (
            f"Tensor(sizes={self.sizes}, strides={self.strides}, "
            f"offset={self.offset}, data={self.data().tolist()})"
        )
