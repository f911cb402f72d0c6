"""
Tensor shape-transform mixin.

Shape transforms have a single execution strategy (they only build a new
Shape), so this package registers no control paths.

Public API
----------
Only `TensorMixinShape` is re-exported.
"""

from ._base import TensorMixinShape

__all__ = [
    TensorMixinShape.__name__,
]
