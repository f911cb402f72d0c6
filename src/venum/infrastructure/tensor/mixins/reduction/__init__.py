"""
Tensor reduction mixin.

Public API
----------
Only `TensorMixinReduction` is re-exported.
"""

from ._base import TensorMixinReduction

__all__ = [
    TensorMixinReduction.__name__,
]
