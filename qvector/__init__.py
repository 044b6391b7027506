"""qvector - a PyTorch-backed quantum circuit statevector simulator."""

__version__ = "0.1.0"

from . import gates

# Backend
from .backend import (
    Backend,
    StatevectorBackend,
    apply_gate,
    expand_gate,
    expand_single_qubit_gate,
    instruction_matrix,
    measure_probs,
    zero_state,
)

# Circuit model
from .circuit import (
    ControlledNot,
    ControlledU,
    Custom,
    Fredkin,
    Hadamard,
    Identity,
    Instruction,
    PauliX,
    PauliY,
    PauliZ,
    Phase,
    QuantumCircuit,
    RotationX,
    RotationY,
    RotationZ,
    Swap,
    T,
    Toffoli,
    validate_instruction,
)

# Core primitives
from .core import Complex, Device, Matrix, default_device, device

# Diagnostics
from .diagnostics import (
    assert_normalized,
    debug_context,
    fidelity,
    is_debug_enabled,
    set_debug_enabled,
    state_norm,
)

# Errors
from .errors import (
    DimensionMismatchError,
    IndexOutOfBoundsError,
    InvalidQubitIndexError,
    QVectorError,
    ShapeMismatchError,
    UnsupportedInstructionError,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level
from .registers import Bra, ClassicalRegister, Ket

__all__ = [
    "__version__",
    "gates",
    # core
    "Complex",
    "Matrix",
    "Device",
    "device",
    "default_device",
    # circuit
    "QuantumCircuit",
    "validate_instruction",
    "Instruction",
    "Identity",
    "PauliX",
    "PauliY",
    "PauliZ",
    "Hadamard",
    "Phase",
    "T",
    "RotationX",
    "RotationY",
    "RotationZ",
    "ControlledNot",
    "ControlledU",
    "Swap",
    "Toffoli",
    "Fredkin",
    "Custom",
    # backend
    "Backend",
    "StatevectorBackend",
    "zero_state",
    "instruction_matrix",
    "expand_single_qubit_gate",
    "expand_gate",
    "apply_gate",
    "measure_probs",
    # registers
    "ClassicalRegister",
    "Ket",
    "Bra",
    # diagnostics
    "state_norm",
    "assert_normalized",
    "fidelity",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # errors
    "QVectorError",
    "ShapeMismatchError",
    "DimensionMismatchError",
    "IndexOutOfBoundsError",
    "InvalidQubitIndexError",
    "UnsupportedInstructionError",
    # logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
