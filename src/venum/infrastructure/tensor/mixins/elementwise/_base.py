"""
Tensor elementwise mixin.

This module defines `TensorMixinElementwise`, the abstract surface of the
callback-driven elementwise primitives. Element types are opaque to the
tensor; callers supply the arithmetic (or comparison, or formatting) as a
Python callable.

The concrete implementations are registered per `Layout` in sibling modules:

- `_tensor_unary_map`  : `unary_map`
- `_tensor_binary_map` : `binary_map`
- `_tensor_zip`        : equal-size `zip` and `zip_array`

Broadcasting is layout independent and lives here: `zip` expands both
operands to the broadcast sizes (stride-0 views, no copy) and hands the pair
to the equal-size implementation.
"""

from __future__ import annotations

from abc import ABC
from typing import Any, Callable, Sequence

from .....domain._tensor import ITensor
from .....domain.shape import Shape


class TensorMixinElementwise(ABC):
    """
    Mixin providing `unary_map`, `binary_map`, `zip` and `zip_array`.

    Every result is a new contiguous tensor with the receiver's sizes (or the
    broadcast sizes for `zip`) over a new buffer.
    """

    def unary_map(self: ITensor, f: Callable[[Any], Any]) -> "ITensor":
        """
        Apply `f` to every element.

        Parameters
        ----------
        f : Callable[[Any], Any]
            Called once per element, in row-major logical order.

        Returns
        -------
        ITensor
            A new tensor with the receiver's sizes.
        """
        ...

    def binary_map(self: ITensor, rhs: Any, f: Callable[[Any, Any], Any]) -> "ITensor":
        """
        Combine every element with the scalar `rhs` as ``f(element, rhs)``.

        Returns
        -------
        ITensor
            A new tensor with the receiver's sizes.
        """
        ...

    def zip(self: ITensor, rhs: ITensor, f: Callable[[Any, Any], Any]) -> "ITensor":
        """
        Combine two tensors elementwise as ``f(lhs_element, rhs_element)``.

        Equal sizes pair the elements directly. Otherwise both operands are
        broadcast to the common sizes first (see `Shape.broadcast`).

        Parameters
        ----------
        rhs : ITensor
            Right-hand operand.
        f : Callable[[Any, Any], Any]
            Combining function.

        Returns
        -------
        ITensor
            A new tensor with the (broadcast) sizes.

        Raises
        ------
        IncompatibleBroadcastError
            If the sizes cannot be broadcast together.
        """
        if self.sizes == rhs.sizes:
            return self._equal_zip(rhs, f)

        sizes = Shape.broadcast(self.sizes, rhs.sizes)
        return self.broadcast_to(sizes)._equal_zip(rhs.broadcast_to(sizes), f)

    def _equal_zip(self: ITensor, rhs: ITensor, f: Callable[[Any, Any], Any]) -> "ITensor":
        """Pair the elements of two tensors of identical sizes."""
        ...

    def zip_array(self: ITensor, values: Sequence[Any], f: Callable[[Any, Any], Any]) -> "ITensor":
        """
        Combine the elements with a flat sequence given in row-major order.

        Raises
        ------
        DataLengthMismatchError
            If ``len(values) != numel()``.
        """
        ...
