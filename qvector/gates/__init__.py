"""Quantum gate matrices."""

from .standard import (
    CNOT,
    CU,
    FREDKIN,
    RX,
    RY,
    RZ,
    SWAP,
    TOFFOLI,
    H,
    I,
    P,
    S,
    T,
    X,
    Y,
    Z,
    is_unitary,
)

__all__ = [
    "I",
    "X",
    "Y",
    "Z",
    "H",
    "P",
    "S",
    "T",
    "RX",
    "RY",
    "RZ",
    "SWAP",
    "CU",
    "CNOT",
    "TOFFOLI",
    "FREDKIN",
    "is_unitary",
]
