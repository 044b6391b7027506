"""Numerical sanity checks for statevectors, and the debug switch that
makes backends run them after every instruction.

Debug mode starts enabled when the ``QVECTOR_DEBUG`` environment variable is
set to 1, true, yes or on.
"""

from __future__ import annotations

import math
import os
from contextlib import contextmanager
from typing import Iterator

import torch

from qvector.core.matrix import Matrix


def _as_amplitudes(state: Matrix | torch.Tensor) -> torch.Tensor:
    """Flatten a column Matrix or a tensor into a 1-D amplitude tensor."""
    if isinstance(state, Matrix):
        if state.cols != 1:
            raise ValueError(
                f"Expected a column vector, got a {state.rows}x{state.cols} matrix."
            )
        return state.to_tensor().reshape(-1)
    if state.dim() < 1:
        raise ValueError("Expected a tensor with at least 1 dimension.")
    return state.reshape(-1)


def state_norm(state: Matrix | torch.Tensor) -> float:
    """
    Euclidean norm ``sqrt(<psi|psi>)`` of a statevector.

    Parameters
    ----------
    state:
        A ``2**n x 1`` Matrix or a tensor of amplitudes.
    """
    amplitudes = _as_amplitudes(state)
    norm_sq = (amplitudes.conj() * amplitudes).sum().real
    return float(torch.sqrt(norm_sq))


def assert_normalized(state: Matrix | torch.Tensor, atol: float = 1e-9) -> None:
    """
    Check that a statevector has norm 1 within ``atol``.

    Raises
    ------
    ValueError
        If the norm is non-finite or off by more than ``atol``.
    """
    norm = state_norm(state)
    if not math.isfinite(norm):
        raise ValueError("State norm contains non-finite values.")
    if abs(norm - 1.0) > atol:
        raise ValueError(
            f"State is not normalized within tolerance {atol}. Norm found: {norm}"
        )


def fidelity(state_a: Matrix | torch.Tensor, state_b: Matrix | torch.Tensor) -> float:
    """
    Fidelity ``|<a|b>|**2`` between two pure statevectors.

    Raises
    ------
    ValueError
        If the two states have different lengths.
    """
    a = _as_amplitudes(state_a)
    b = _as_amplitudes(state_b)
    if a.shape != b.shape:
        raise ValueError("fidelity expects states of the same length.")
    inner = (a.conj() * b.to(a.device)).sum()
    return float(inner.abs() ** 2)


DEBUG_ENV_VAR = "QVECTOR_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _debug_from_env() -> bool:
    return os.environ.get(DEBUG_ENV_VAR, "").strip().lower() in _TRUTHY


class _DebugFlag:
    """Process-wide switch for the per-instruction normalization check."""

    def __init__(self) -> None:
        self.enabled = _debug_from_env()


_DEBUG = _DebugFlag()


def is_debug_enabled() -> bool:
    return _DEBUG.enabled


def set_debug_enabled(enabled: bool) -> bool:
    """Turn debug mode on or off and return the previous setting."""
    previous = _DEBUG.enabled
    _DEBUG.enabled = bool(enabled)
    return previous


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Run a block with debug mode set to ``enabled``, restoring the previous
    setting afterwards.

    Example
    -------
    >>> with debug_context():
    ...     state = StatevectorBackend().execute(circuit)
    """
    previous = set_debug_enabled(enabled)
    try:
        yield
    finally:
        set_debug_enabled(previous)
