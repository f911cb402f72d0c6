"""
Tensor memory operation registrations.

This package aggregates layout-specific implementations of memory-related
`Tensor` operations and registers them through the layout control-path
dispatch system. The imported modules provide concrete handlers for methods
declared on `TensorMixinMemory`:

- `data` : row-major copy of the logical elements (contiguous / strided)

Public API
----------
Only `TensorMixinMemory` is re-exported as part of the public interface.
The implementation modules are imported for their side effects
(registration) and are not intended to be accessed directly.
"""

from ._tensor_data import *
from ._base import TensorMixinMemory

__all__ = [
    TensorMixinMemory.__name__,
]
