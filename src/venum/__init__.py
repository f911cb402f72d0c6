"""
venum: strided N-dimensional tensors over shared, immutable buffers.

Shape transforms (view, permute, flip, slice, expand, ...) are zero-copy
views; elementwise operations and reductions take caller-supplied callbacks
so that element types stay opaque.

Examples
--------
>>> from venum import Tensor
>>> a = Tensor.arange(0, 6).view([2, 3])
>>> a.transpose(0, 1).sizes
(3, 2)
"""

from .domain._errors import (
    DataLengthMismatchError,
    DimensionCountMismatchError,
    DimensionOutOfRangeError,
    DuplicateDimensionError,
    IncompatibleBroadcastError,
    IncompatibleExpansionError,
    IndexOutOfRangeError,
    NonContiguousError,
    RangeOutOfBoundsError,
    ReshapeMismatchError,
    TensorError,
)
from .domain._layout import Layout
from .domain._tensor import ITensor
from .domain.shape import Indexer, ReductionIndexer, Shape, Stride
from .infrastructure import (
    Tensor,
    TensorConfig,
    config_context,
    get_config,
    set_config,
)

__all__ = [
    "Tensor",
    "ITensor",
    "Shape",
    "Stride",
    "Indexer",
    "ReductionIndexer",
    "Layout",
    "TensorConfig",
    "get_config",
    "set_config",
    "config_context",
    "TensorError",
    "DataLengthMismatchError",
    "DimensionCountMismatchError",
    "DimensionOutOfRangeError",
    "DuplicateDimensionError",
    "IncompatibleBroadcastError",
    "IncompatibleExpansionError",
    "IndexOutOfRangeError",
    "NonContiguousError",
    "RangeOutOfBoundsError",
    "ReshapeMismatchError",
]
