"""
Per-dimension stride with an explicit direction.

A `Stride` is a non-negative step magnitude plus a direction flag. Keeping the
direction separate from the magnitude (instead of using a signed integer)
lets a flipped dimension be expressed without touching the buffer, and keeps
broadcast dimensions (magnitude 0) distinguishable from flips: two
zero-magnitude strides compare equal whatever their direction.
"""

from __future__ import annotations

import operator


class Stride:
    """
    Immutable step magnitude and direction of one tensor dimension.

    Parameters
    ----------
    magnitude : int
        Distance, in buffer elements, between neighbouring coordinates of the
        dimension. Must be non-negative; 0 marks a broadcast dimension.
    is_positive : bool, optional
        True when increasing the coordinate increases the buffer offset.
        Defaults to True.

    Raises
    ------
    ValueError
        If `magnitude` is negative.
    """

    __slots__ = ("_magnitude", "_is_positive")

    def __init__(self, magnitude: int, is_positive: bool = True) -> None:
        magnitude = int(magnitude)
        if magnitude < 0:
            raise ValueError(f"Stride magnitude must be non-negative, got {magnitude}")
        self._magnitude = magnitude
        self._is_positive = bool(is_positive)

    @classmethod
    def positive(cls, magnitude: int) -> "Stride":
        """Build a forward-running stride."""
        return cls(magnitude, True)

    @classmethod
    def negative(cls, magnitude: int) -> "Stride":
        """Build a backward-running (flipped) stride."""
        return cls(magnitude, False)

    @property
    def magnitude(self) -> int:
        return self._magnitude

    @property
    def is_positive(self) -> bool:
        return self._is_positive

    def apply(self, index: int, size: int) -> int:
        """
        Return the offset contribution of coordinate `index` in a dimension.

        Parameters
        ----------
        index : int
            Logical coordinate, ``0 <= index < size``.
        size : int
            Size of the dimension.

        Returns
        -------
        int
            ``index * magnitude`` for a positive stride, and
            ``(size - 1 - index) * magnitude`` for a negative one.
        """
        if self._is_positive:
            return index * self._magnitude
        return (size - 1 - index) * self._magnitude

    def flipped(self) -> "Stride":
        """Return the stride with the same magnitude and the opposite direction."""
        return Stride(self._magnitude, not self._is_positive)

    def __mul__(self, factor: int) -> "Stride":
        try:
            factor = operator.index(factor)
        except TypeError:
            return NotImplemented
        if factor < 0:
            raise ValueError(f"Stride can only be scaled by a non-negative factor, got {factor}")
        return Stride(self._magnitude * factor, self._is_positive)

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Stride):
            return NotImplemented
        if self._magnitude != other._magnitude:
            return False
        # broadcast strides carry no direction
        return self._magnitude == 0 or self._is_positive == other._is_positive

    def __hash__(self) -> int:
        return hash((self._magnitude, self._is_positive or self._magnitude == 0))

    def __repr__(self) -> str:
        name = "Positive" if self._is_positive else "Negative"
        return f"{name}({self._magnitude})"
