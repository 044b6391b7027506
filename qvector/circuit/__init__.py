"""Circuit model and instruction variants."""

from .core import QuantumCircuit, validate_instruction
from .instructions import (
    ControlledNot,
    ControlledU,
    Custom,
    Fredkin,
    Hadamard,
    Identity,
    Instruction,
    ParametricInstruction,
    PauliX,
    PauliY,
    PauliZ,
    Phase,
    RotationX,
    RotationY,
    RotationZ,
    SingleQubitInstruction,
    Swap,
    T,
    Toffoli,
)

__all__ = [
    "QuantumCircuit",
    "validate_instruction",
    "Instruction",
    "SingleQubitInstruction",
    "ParametricInstruction",
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
]
