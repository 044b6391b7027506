"""Backends that execute circuits."""

from .base import Backend
from .statevector import (
    METHODS,
    StatevectorBackend,
    apply_gate,
    expand_gate,
    expand_single_qubit_gate,
    instruction_matrix,
    measure_probs,
    zero_state,
)

__all__ = [
    "Backend",
    "StatevectorBackend",
    "METHODS",
    "zero_state",
    "instruction_matrix",
    "expand_single_qubit_gate",
    "expand_gate",
    "apply_gate",
    "measure_probs",
]
