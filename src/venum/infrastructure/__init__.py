"""
numpy-backed infrastructure layer of venum.

Provides the concrete `Tensor` and the runtime configuration that controls
how its operations execute.
"""

from ._config import TensorConfig, config_context, get_config, set_config
from .tensor import Tensor

__all__ = [
    Tensor.__name__,
    TensorConfig.__name__,
    config_context.__name__,
    get_config.__name__,
    set_config.__name__,
]
