"""
Stride/shape algebra: pure value types mapping coordinates to buffer offsets.

Nothing in this package knows about element values or numpy; it only
computes where logical coordinates live inside a flat buffer.
"""

from ._stride import Stride
from ._shape import Shape, Range
from ._indexer import Indexer, ReductionIndexer

__all__ = [
    Stride.__name__,
    Shape.__name__,
    Indexer.__name__,
    ReductionIndexer.__name__,
    "Range",
]
