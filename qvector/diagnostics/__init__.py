"""Diagnostics and debugging utilities for qvector."""

from .core import (
    DEBUG_ENV_VAR,
    assert_normalized,
    debug_context,
    fidelity,
    is_debug_enabled,
    set_debug_enabled,
    state_norm,
)

__all__ = [
    "DEBUG_ENV_VAR",
    "state_norm",
    "assert_normalized",
    "fidelity",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
