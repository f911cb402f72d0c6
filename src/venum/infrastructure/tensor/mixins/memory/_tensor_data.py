"""
Layout-specific implementations of `Tensor.data()`.

- `tensor_data_contiguous`: copies the buffer run ``[offset, offset + numel)``
  in one slice (reversed for an all-negative layout).
- `tensor_data_strided`: gathers every coordinate through the tensor's Shape.

Both return a private, writable array; callers may modify it freely without
affecting any tensor.
"""

import numpy as np

from ..._tensor_builder import layout_path_manager

from .....domain._layout import Layout
from .....domain._tensor import ITensor

from ._base import TensorMixinMemory as TMM


@layout_path_manager(TMM, TMM.data, Layout.CONTIGUOUS)
def tensor_data_contiguous(self: ITensor) -> np.ndarray:
    """Copy the contiguous run of the buffer."""
    return self.data_contiguous().copy()


@layout_path_manager(TMM, TMM.data, Layout.STRIDED)
def tensor_data_strided(self: ITensor) -> np.ndarray:
    """Gather the elements coordinate by coordinate."""
    return self.data_non_contiguous()
