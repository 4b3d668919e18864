"""Diagnostics and debugging utilities for qkron."""

from .core import assert_normalized, default_atol, fidelity, state_norm
from .debug_mode import debug_context, is_debug_enabled, set_debug_enabled

__all__ = [
    "state_norm",
    "assert_normalized",
    "default_atol",
    "fidelity",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
