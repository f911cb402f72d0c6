"""
Runtime configuration for the tensor layer.

The configuration is a frozen dataclass held at module level. It is built from
environment variables at import time and can be changed with `set_config`,
or temporarily with the `config_context` context manager.

Environment variables
---------------------
VENUM_FAST_PATH
    ``1``/``true``/``yes``/``on`` (default) or ``0``/``false``/``no``/``off``.
VENUM_MATERIALIZATION_WARNING_THRESHOLD
    Integer element count; unset or empty disables the warning.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from typing import Any, Iterator, Mapping, Optional

logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class TensorConfig:
    """
    Knobs controlling how tensors execute.

    Attributes
    ----------
    fast_path : bool
        When True (default), contiguous tensors use the linear-scan
        implementations. When False, every tensor dispatches to the strided
        index-generator implementations; results are identical, only slower.
    materialization_warning_threshold : Optional[int]
        Element count above which a materialization (`to_contiguous`,
        `reshape`, a `view_else_reshape` fallback) logs a warning. None
        disables the warning.
    """

    fast_path: bool = True
    materialization_warning_threshold: Optional[int] = None

    def __post_init__(self) -> None:
        threshold = self.materialization_warning_threshold
        if threshold is not None and threshold < 0:
            raise ValueError(
                f"materialization_warning_threshold must be non-negative, got {threshold}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TensorConfig":
        """
        Build a configuration from environment variables.

        Parameters
        ----------
        environ : Optional[Mapping[str, str]]
            Mapping to read from. Defaults to `os.environ`.

        Raises
        ------
        ValueError
            If a variable holds an unparseable value.
        """
        environ = os.environ if environ is None else environ

        fast_path = True
        raw = environ.get("VENUM_FAST_PATH", "").strip().lower()
        if raw in _FALSE:
            fast_path = False
        elif raw and raw not in _TRUE:
            raise ValueError(f"VENUM_FAST_PATH must be a boolean flag, got {raw!r}")

        threshold = None
        raw = environ.get("VENUM_MATERIALIZATION_WARNING_THRESHOLD", "").strip()
        if raw:
            try:
                threshold = int(raw)
            except ValueError:
                raise ValueError(
                    "VENUM_MATERIALIZATION_WARNING_THRESHOLD must be an integer, "
                    f"got {raw!r}"
                ) from None

        return cls(fast_path=fast_path, materialization_warning_threshold=threshold)


_current: TensorConfig = TensorConfig.from_env()


def get_config() -> TensorConfig:
    """Return the active configuration."""
    return _current


def set_config(**changes: Any) -> TensorConfig:
    """
    Replace fields of the active configuration.

    Returns
    -------
    TensorConfig
        The previous configuration, so callers can restore it.

    Raises
    ------
    TypeError
        If a keyword does not name a `TensorConfig` field.
    """
    global _current

    known = {f.name for f in fields(TensorConfig)}
    unknown = set(changes) - known
    if unknown:
        raise TypeError(f"Unknown configuration keys: {sorted(unknown)}")

    previous = _current
    _current = replace(previous, **changes)
    logger.debug("tensor configuration changed: %s", _current)
    return previous


@contextmanager
def config_context(**changes: Any) -> Iterator[TensorConfig]:
    """
    Temporarily apply configuration changes within a ``with`` block.

    Examples
    --------
    >>> with config_context(fast_path=False):
    ...     t.data()  # forced through the strided path
    """
    global _current

    previous = set_config(**changes)
    try:
        yield _current
    finally:
        _current = previous
        logger.debug("tensor configuration restored: %s", _current)
