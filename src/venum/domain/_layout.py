"""
Memory layout categories used for execution-path dispatch.

A tensor's layout decides which implementation of a data-producing operation
runs: a direct linear scan of the backing buffer, or a walk over the logical
index space through the tensor's Shape.
"""

from enum import Enum


class Layout(Enum):
    """
    Enumeration of the execution layouts a tensor can report.

    Attributes
    ----------
    CONTIGUOUS : Layout
        The logical elements occupy one unbroken run of the backing buffer
        (read forwards, or backwards for an all-negative layout).
    STRIDED : Layout
        Any other layout: permuted, partially flipped, sliced, or broadcast.
        Data must be gathered coordinate by coordinate.
    """

    CONTIGUOUS = "contiguous"
    STRIDED = "strided"

    def __str__(self) -> str:
        return self.value
