"""
Layout-specific implementations of equal-size `Tensor.zip` and `Tensor.zip_array`.

Design notes
------------
- Dispatch follows the receiver's layout. The contiguous `zip` path also
  needs a contiguous right-hand side; when it is not, the pair is handed to
  the strided path, which reads both operands through their own Shapes.
- Broadcast operands always arrive here as stride-0 views and therefore take
  the strided path.
"""

from typing import Any, Callable, Sequence

from ..._buffer import as_buffer, as_values
from ..._tensor_builder import layout_path_manager

from .....domain._layout import Layout
from .....domain._tensor import ITensor
from .....domain.shape import Indexer, Shape

from ._base import TensorMixinElementwise as TME


@layout_path_manager(TME, TME._equal_zip, Layout.CONTIGUOUS)
def tensor_zip_contiguous(self: ITensor, rhs: ITensor, f: Callable[[Any, Any], Any]) -> "ITensor":
    if not rhs.is_contiguous():
        return tensor_zip_strided(self, rhs, f)

    lhs_values = self.data_contiguous().tolist()
    rhs_values = rhs.data_contiguous().tolist()
    out = [f(a, b) for a, b in zip(lhs_values, rhs_values)]
    return type(self)._from_buffer(as_buffer(out), Shape.new(self.sizes))


@layout_path_manager(TME, TME._equal_zip, Layout.STRIDED)
def tensor_zip_strided(self: ITensor, rhs: ITensor, f: Callable[[Any, Any], Any]) -> "ITensor":
    lhs_buffer, lhs_shape = self.buffer, self.shape
    rhs_buffer, rhs_shape = rhs.buffer, rhs.shape
    out = [
        f(
            lhs_buffer.item(lhs_shape._linear(index)),
            rhs_buffer.item(rhs_shape._linear(index)),
        )
        for index in Indexer(lhs_shape.sizes)
    ]
    return type(self)._from_buffer(as_buffer(out), Shape.new(self.sizes))


@layout_path_manager(TME, TME.zip_array, Layout.CONTIGUOUS)
def tensor_zip_array_contiguous(
    self: ITensor, values: Sequence[Any], f: Callable[[Any, Any], Any]
) -> "ITensor":
    values = as_values(values)
    self.shape.check_data_length(len(values))

    out = [f(a, b) for a, b in zip(self.data_contiguous().tolist(), values)]
    return type(self)._from_buffer(as_buffer(out), Shape.new(self.sizes))


@layout_path_manager(TME, TME.zip_array, Layout.STRIDED)
def tensor_zip_array_strided(
    self: ITensor, values: Sequence[Any], f: Callable[[Any, Any], Any]
) -> "ITensor":
    values = as_values(values)
    self.shape.check_data_length(len(values))

    buffer, shape = self.buffer, self.shape
    out = [
        f(buffer.item(shape._linear(index)), value)
        for index, value in zip(Indexer(shape.sizes), values)
    ]
    return type(self)._from_buffer(as_buffer(out), Shape.new(self.sizes))
