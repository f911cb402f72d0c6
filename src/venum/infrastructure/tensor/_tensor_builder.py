"""
Tensor control-path manager for layout-specific dispatch.

This module defines the shared control-path manager used to register and
resolve layout-specific implementations of Tensor methods.

The manager is created by specializing the generic `create_path_builder`
utility with the state attribute ``"_state"``, which every Tensor exposes as
its current `Layout`. As a result, method dispatch is performed based on
whether the tensor can be scanned linearly:

    @layout_path_manager(TensorMixin, TensorMixin.op, Layout.CONTIGUOUS)
    def op_contiguous(self, ...): ...

    @layout_path_manager(TensorMixin, TensorMixin.op, Layout.STRIDED)
    def op_strided(self, ...): ...

Notes
-----
All control paths registered via this manager share a single registry, so
every mixin of the Tensor subsystem dispatches consistently.
"""

from ...domain.utils._control_path import create_path_builder

# Control-path manager that dispatches Tensor methods based on `self._state`
layout_path_manager = create_path_builder("_state")
