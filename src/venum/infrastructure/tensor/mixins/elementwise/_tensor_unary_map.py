"""
Layout-specific implementations of `Tensor.unary_map`.

The contiguous path maps over the buffer run in a single linear scan; the
strided path walks every coordinate with `Indexer`.
"""

from typing import Any, Callable

from ..._buffer import as_buffer
from ..._tensor_builder import layout_path_manager

from .....domain._layout import Layout
from .....domain._tensor import ITensor
from .....domain.shape import Indexer, Shape

from ._base import TensorMixinElementwise as TME


@layout_path_manager(TME, TME.unary_map, Layout.CONTIGUOUS)
def tensor_unary_map_contiguous(self: ITensor, f: Callable[[Any], Any]) -> "ITensor":
    out = [f(x) for x in self.data_contiguous().tolist()]
    return type(self)._from_buffer(as_buffer(out), Shape.new(self.sizes))


@layout_path_manager(TME, TME.unary_map, Layout.STRIDED)
def tensor_unary_map_strided(self: ITensor, f: Callable[[Any], Any]) -> "ITensor":
    buffer, shape = self.buffer, self.shape
    out = [f(buffer.item(shape._linear(index))) for index in Indexer(shape.sizes)]
    return type(self)._from_buffer(as_buffer(out), Shape.new(self.sizes))
