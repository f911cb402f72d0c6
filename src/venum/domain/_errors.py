"""
Validation errors raised by the shape algebra and the tensor layer.

Every precondition violation in venum is reported by raising one of the
exceptions below; nothing is silently corrected and nothing is reported via
`assert`. All of them derive from `TensorError`, so callers can catch the whole
family at once, and each also derives from the closest builtin exception
(`ValueError` or `IndexError`) so generic handlers keep working.

Each exception stores the offending values as attributes, in addition to a
readable message, so callers can diagnose failures programmatically.
"""

from typing import Optional, Sequence, Tuple


class TensorError(Exception):
    """Base class for every validation failure raised by venum."""


class DataLengthMismatchError(TensorError, ValueError):
    """
    Raised when a supplied element count disagrees with a declared size product.

    Attributes
    ----------
    expected : int
        Number of elements required by the sizes (or the addressed region).
    actual : int
        Number of elements that were supplied.
    """

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Data length ({actual}) does not match size of tensor ({expected})."
        )
        self.expected = expected
        self.actual = actual


class DimensionCountMismatchError(TensorError, ValueError):
    """
    Raised when an index, range, or permutation list has the wrong length.

    Attributes
    ----------
    expected : int
        Number of entries required (usually the tensor's rank).
    actual : int
        Number of entries supplied.
    """

    def __init__(self, expected: int, actual: int, what: str = "indices") -> None:
        super().__init__(
            f"Number of {what} ({actual}) does not match the number of "
            f"dimensions ({expected})."
        )
        self.expected = expected
        self.actual = actual


class IndexOutOfRangeError(TensorError, IndexError):
    """
    Raised when a coordinate is not smaller than its dimension's size.

    Attributes
    ----------
    index : int
        The offending coordinate.
    dimension : int
        The dimension the coordinate was given for.
    size : int
        Size of that dimension.
    """

    def __init__(self, index: int, dimension: int, size: int) -> None:
        super().__init__(
            f"Index {index} is out of range for dimension {dimension} (size: {size})."
        )
        self.index = index
        self.dimension = dimension
        self.size = size


class DimensionOutOfRangeError(TensorError, IndexError):
    """
    Raised when a dimension id does not name an existing dimension.

    Attributes
    ----------
    dimension : int
        The offending dimension id.
    ndims : int
        Rank of the tensor.
    """

    def __init__(self, dimension: int, ndims: int) -> None:
        super().__init__(
            f"Dimension {dimension} does not exist in a tensor with {ndims} dimensions."
        )
        self.dimension = dimension
        self.ndims = ndims


class RangeOutOfBoundsError(TensorError, IndexError):
    """
    Raised when a half-open range is reversed or exceeds its dimension.

    Attributes
    ----------
    start, end : int
        The range as supplied (after resolving the ``end == 0`` sentinel).
    dimension : int
        The dimension the range was given for.
    size : int
        Size of that dimension.
    """

    def __init__(self, start: int, end: int, dimension: int, size: int) -> None:
        if start > end:
            message = f"Range start index {start} is greater than range end index {end}."
        else:
            message = (
                f"Range ({start}, {end}) is out of range for dimension "
                f"{dimension} (size: {size})."
            )
        super().__init__(message)
        self.start = start
        self.end = end
        self.dimension = dimension
        self.size = size


class DuplicateDimensionError(TensorError, ValueError):
    """
    Raised when a dimension id repeats in a permutation, flip, or transpose.

    Attributes
    ----------
    dimension : int
        The first dimension id found twice.
    """

    def __init__(self, dimension: int) -> None:
        super().__init__(f"Dimension {dimension} repeats.")
        self.dimension = dimension


class ReshapeMismatchError(TensorError, ValueError):
    """
    Raised when a tensor cannot be reinterpreted under the requested sizes.

    Attributes
    ----------
    sizes : tuple[int, ...]
        Sizes of the source.
    target : Optional[tuple[int, ...]]
        Requested sizes, when the failure concerns a reshape.
    """

    def __init__(
        self,
        sizes: Sequence[int],
        target: Optional[Sequence[int]],
        message: Optional[str] = None,
    ) -> None:
        sizes = tuple(sizes)
        target = None if target is None else tuple(target)
        if message is None:
            message = (
                f"{sizes} cannot be reshaped to {target}: data length "
                f"({_product(sizes)}) does not match new length ({_product(target or ())})."
            )
        super().__init__(message)
        self.sizes = sizes
        self.target = target


class NonContiguousError(ReshapeMismatchError):
    """
    Raised when an operation needs a contiguous layout and the source has none.

    This is the "layout cannot be reinterpreted without copying" flavour of
    `ReshapeMismatchError`; materialize with `to_contiguous()` (or use
    `view_else_reshape`) first.
    """

    def __init__(self, sizes: Sequence[int], target: Optional[Sequence[int]] = None) -> None:
        super().__init__(
            sizes,
            target,
            message=(
                f"Tensor with sizes {tuple(sizes)} is not contiguous and cannot "
                f"be reinterpreted without copying."
            ),
        )


class IncompatibleExpansionError(TensorError, ValueError):
    """
    Raised when `expand` is asked to stretch a dimension whose size is not 1.

    Attributes
    ----------
    size : int
        Current size of the dimension.
    target : int
        Requested size.
    dimension : int
        The dimension concerned.
    """

    def __init__(self, size: int, target: int, dimension: int) -> None:
        super().__init__(
            f"Size {size} of dimension {dimension} cannot be expanded to size {target}."
        )
        self.size = size
        self.target = target
        self.dimension = dimension


class IncompatibleBroadcastError(TensorError, ValueError):
    """
    Raised when two size sequences cannot be broadcast together.

    Attributes
    ----------
    lhs, rhs : tuple[int, ...]
        The two size sequences.
    """

    def __init__(self, lhs: Sequence[int], rhs: Sequence[int]) -> None:
        lhs, rhs = tuple(lhs), tuple(rhs)
        super().__init__(f"Shapes {lhs} and {rhs} cannot be broadcast together.")
        self.lhs = lhs
        self.rhs = rhs


def _product(sizes: Tuple[int, ...]) -> int:
    out = 1
    for s in sizes:
        out *= s
    return out
