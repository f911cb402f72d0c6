"""
Copy-on-write update mixin.

Public API
----------
Only `TensorMixinMutation` is re-exported.
"""

from ._base import TensorMixinMutation

__all__ = [
    TensorMixinMutation.__name__,
]
