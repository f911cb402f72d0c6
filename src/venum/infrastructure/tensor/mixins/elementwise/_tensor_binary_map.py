"""
Layout-specific implementations of `Tensor.binary_map` (tensor op scalar).
"""

from typing import Any, Callable

from ..._buffer import as_buffer
from ..._tensor_builder import layout_path_manager

from .....domain._layout import Layout
from .....domain._tensor import ITensor
from .....domain.shape import Indexer, Shape

from ._base import TensorMixinElementwise as TME


@layout_path_manager(TME, TME.binary_map, Layout.CONTIGUOUS)
def tensor_binary_map_contiguous(
    self: ITensor, rhs: Any, f: Callable[[Any, Any], Any]
) -> "ITensor":
    out = [f(x, rhs) for x in self.data_contiguous().tolist()]
    return type(self)._from_buffer(as_buffer(out), Shape.new(self.sizes))


@layout_path_manager(TME, TME.binary_map, Layout.STRIDED)
def tensor_binary_map_strided(
    self: ITensor, rhs: Any, f: Callable[[Any, Any], Any]
) -> "ITensor":
    buffer, shape = self.buffer, self.shape
    out = [f(buffer.item(shape._linear(index)), rhs) for index in Indexer(shape.sizes)]
    return type(self)._from_buffer(as_buffer(out), Shape.new(self.sizes))
