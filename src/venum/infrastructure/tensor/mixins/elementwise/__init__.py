"""
Tensor elementwise operation registrations.

The imported modules register layout-specific implementations for methods
declared on `TensorMixinElementwise`:

- `unary_map`   : ``f(x)`` per element
- `binary_map`  : ``f(x, scalar)`` per element
- `_equal_zip`  : ``f(x, y)`` over two tensors of equal sizes (behind `zip`)
- `zip_array`   : ``f(x, v)`` against a flat sequence

Each operation is registered via `layout_path_manager` and dispatched on the
receiver's `Layout` (contiguous or strided).

Public API
----------
Only `TensorMixinElementwise` is re-exported.
"""

from ._tensor_unary_map import *
from ._tensor_binary_map import *
from ._tensor_zip import *
from ._base import TensorMixinElementwise

__all__ = [
    TensorMixinElementwise.__name__,
]
