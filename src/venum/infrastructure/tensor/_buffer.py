"""
Helpers for creating the immutable flat buffers that back tensors.

A backing buffer is a one-dimensional numpy array whose ``writeable`` flag is
cleared as soon as it is created. Tensors share buffers freely, so the flag
turns any accidental in-place write into an immediate error instead of a
silent change visible through other views.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

import numpy as np

from .._config import get_config

logger = logging.getLogger(__name__)


def freeze(arr: np.ndarray) -> np.ndarray:
    """Mark a freshly built, privately owned array read-only and return it."""
    arr.setflags(write=False)
    return arr


def as_buffer(values: Iterable[Any], dtype: Optional[Any] = None) -> np.ndarray:
    """
    Copy `values` into a new read-only one-dimensional buffer.

    Parameters
    ----------
    values : Iterable[Any]
        Elements in logical order. numpy arrays of any rank are flattened in
        row-major order.
    dtype : Optional[Any]
        Element dtype. Inferred by numpy when omitted.

    Returns
    -------
    np.ndarray
        A new read-only array of length ``len(values)``.

    Notes
    -----
    Elements that numpy cannot lay out as scalars (tuples, ragged sequences,
    arbitrary objects) are stored in an ``object`` array, one element per slot.
    So are mixes of text and non-text elements, which numpy would otherwise
    turn into strings.
    """
    if isinstance(values, np.ndarray):
        return freeze(np.array(values, dtype=dtype, copy=True).reshape(-1))

    values = list(values)
    try:
        arr = np.array(values, dtype=dtype)
    except (ValueError, TypeError):
        arr = None

    if (
        arr is None
        or arr.ndim != 1
        or arr.shape[0] != len(values)
        or (dtype is None and _coerced_to_text(arr, values))
    ):
        arr = np.empty(len(values), dtype=object)
        for i, v in enumerate(values):
            arr[i] = v
    return freeze(arr)


def _coerced_to_text(arr: np.ndarray, values: Sequence[Any]) -> bool:
    """Whether numpy turned non-text elements into strings or bytes."""
    if arr.dtype.kind not in "US":
        return False
    text = str if arr.dtype.kind == "U" else bytes
    return not all(isinstance(v, text) for v in values)


def as_values(values: Iterable[Any]) -> list:
    """Return `values` as a plain list of Python-level elements."""
    if isinstance(values, np.ndarray):
        return values.reshape(-1).tolist()
    return list(values)


def scatter(data: np.ndarray, positions: Sequence[int], updates: Sequence[Any]) -> np.ndarray:
    """
    Write `updates` at `positions` of the private array `data`.

    The dtype is widened when the updates do not fit the current one (for
    example floats written into an integer array). Writing text into a
    non-text array, or the reverse, switches to an ``object`` array so the
    untouched elements keep their values.

    Returns
    -------
    np.ndarray
        The updated, read-only array. May be `data` itself.
    """
    if len(positions) == 0:
        return freeze(data)

    incoming = as_buffer(updates)
    kinds = {data.dtype.kind, incoming.dtype.kind}
    if len(kinds) > 1 and kinds & {"U", "S"}:
        # promoting would stringify the untouched elements
        dtype = np.dtype(object)
    else:
        dtype = np.promote_types(data.dtype, incoming.dtype)
    out = data.astype(dtype, copy=False)
    if not out.flags.writeable:
        out = out.copy()
    out[list(positions)] = incoming
    return freeze(out)


def log_materialization(operation: str, numel: int) -> None:
    """Record that `operation` copied `numel` elements into a new buffer."""
    logger.debug("%s materialized %d elements into a new buffer", operation, numel)

    threshold = get_config().materialization_warning_threshold
    if threshold is not None and numel > threshold:
        logger.warning(
            "%s materialized %d elements (warning threshold: %d)",
            operation,
            numel,
            threshold,
        )
