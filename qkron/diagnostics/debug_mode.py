"""Debug-mode switch.

In debug mode the circuit engine checks every local gate matrix for
unitarity and every new state for unit norm. The initial value comes from
the ``QKRON_DEBUG`` environment variable.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator

DEBUG_ENV_VAR = "QKRON_DEBUG"

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0").strip().lower() in _TRUTHY


_debug_enabled: bool = _env_flag(DEBUG_ENV_VAR)


def is_debug_enabled() -> bool:
    """Return whether debug checks are active."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """
    Turn debug checks on or off for the whole process.

    Parameters
    ----------
    enabled:
        New debug-mode value.
    """
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Temporarily set debug mode, restoring the previous value on exit.

    Example
    -------
    >>> from qkron import Hadamard, QuantumCircuit
    >>> with debug_context():
    ...     QuantumCircuit(1).apply_gate(Hadamard(0))
    """
    global _debug_enabled
    previous = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = previous
