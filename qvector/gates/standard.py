"""Standard quantum gate matrices.

Every function returns a fresh :class:`Matrix`. Multi-qubit gates are written
for the qvector ordering convention: the first operand qubit is the most
significant bit of the gate-local basis index, so ``CNOT`` acting on
``(control, target)`` maps ``|10⟩`` to ``|11⟩``.
"""

from __future__ import annotations

import math

from qvector.core.complex import Complex
from qvector.core.device import Device
from qvector.core.matrix import Matrix

_SQRT2_INV = 1.0 / math.sqrt(2.0)


def I(device: Device | str | None = None) -> Matrix:  # noqa: E743
    """Identity gate (single-qubit)."""
    return Matrix.identity(2, device=device)


def X(device: Device | str | None = None) -> Matrix:
    """
    Pauli-X gate (bit-flip, NOT gate).

    Maps ``a|0⟩ + b|1⟩`` to ``b|0⟩ + a|1⟩``.
    """
    return Matrix.from_rows([[0, 1], [1, 0]], device=device)


def Y(device: Device | str | None = None) -> Matrix:
    """Pauli-Y gate."""
    return Matrix.from_rows(
        [[Complex.zero(), -Complex.i()], [Complex.i(), Complex.zero()]],
        device=device,
    )


def Z(device: Device | str | None = None) -> Matrix:
    """Pauli-Z gate (phase-flip)."""
    return Matrix.from_rows([[1, 0], [0, -1]], device=device)


def H(device: Device | str | None = None) -> Matrix:
    """
    Hadamard gate.

    Maps ``|0⟩`` to ``(|0⟩ + |1⟩)/√2`` and ``|1⟩`` to ``(|0⟩ - |1⟩)/√2``.
    """
    return Matrix.from_rows([[1, 1], [1, -1]], device=device) * _SQRT2_INV


def P(phi: float, device: Device | str | None = None) -> Matrix:
    """
    Phase-shift gate ``diag(1, e^{i phi})``.

    Leaves ``|0⟩`` alone and multiplies the ``|1⟩`` amplitude by ``e^{i phi}``.
    ``P(phi)`` is undone by ``P(-phi)``.
    """
    return Matrix.from_rows(
        [[Complex.one(), Complex.zero()], [Complex.zero(), Complex.from_polar(1.0, phi)]],
        device=device,
    )


def S(device: Device | str | None = None) -> Matrix:
    """S gate, ``P(pi/2)``."""
    return P(math.pi / 2.0, device=device)


def T(device: Device | str | None = None) -> Matrix:
    """T gate, ``P(pi/4)``."""
    return P(math.pi / 4.0, device=device)


def RX(theta: float, device: Device | str | None = None) -> Matrix:
    """
    Rotation about the X axis: ``RX(θ) = exp(-iθX/2)``.

    Matrix form:
        [[cos(θ/2), -i sin(θ/2)],
         [-i sin(θ/2), cos(θ/2)]]
    """
    half = float(theta) / 2.0
    cos_half = math.cos(half)
    off = Complex(0.0, -math.sin(half))
    return Matrix.from_rows([[cos_half, off], [off, cos_half]], device=device)


def RY(theta: float, device: Device | str | None = None) -> Matrix:
    """
    Rotation about the Y axis: ``RY(θ) = exp(-iθY/2)``.

    Matrix form:
        [[cos(θ/2), -sin(θ/2)],
         [sin(θ/2), cos(θ/2)]]
    """
    half = float(theta) / 2.0
    cos_half = math.cos(half)
    sin_half = math.sin(half)
    return Matrix.from_rows([[cos_half, -sin_half], [sin_half, cos_half]], device=device)


def RZ(theta: float, device: Device | str | None = None) -> Matrix:
    """
    Rotation about the Z axis: ``RZ(θ) = exp(-iθZ/2)``.

    Matrix form:
        [[exp(-iθ/2), 0],
         [0, exp(iθ/2)]]
    """
    half = float(theta) / 2.0
    return Matrix.from_rows(
        [
            [Complex.from_polar(1.0, -half), Complex.zero()],
            [Complex.zero(), Complex.from_polar(1.0, half)],
        ],
        device=device,
    )


def SWAP(device: Device | str | None = None) -> Matrix:
    """SWAP gate: exchanges ``|01⟩`` and ``|10⟩``."""
    return Matrix.from_rows(
        [
            [1, 0, 0, 0],
            [0, 0, 1, 0],
            [0, 1, 0, 0],
            [0, 0, 0, 1],
        ],
        device=device,
    )


def CU(u: Matrix, device: Device | str | None = None) -> Matrix:
    """
    Controlled-U gate for a single-qubit unitary ``u``.

    The top-left 2x2 block (control ``|0⟩``) is the identity; the bottom-right
    block (control ``|1⟩``) is ``u``:

        |00⟩ -> |00⟩
        |01⟩ -> |01⟩
        |10⟩ -> |1⟩ ⊗ u|0⟩
        |11⟩ -> |1⟩ ⊗ u|1⟩

    Raises
    ------
    ValueError
        If ``u`` is not 2x2.
    """
    if u.shape != (2, 2):
        raise ValueError(f"controlled gate must have shape (2, 2), got {u.shape}")
    gate = Matrix.identity(4, device=device)
    gate.embed(u, 2, 2)
    return gate


def CNOT(device: Device | str | None = None) -> Matrix:
    """
    Controlled-NOT gate, control first.

    | control | target | -> | control | target |
    |---------|--------|----|---------|--------|
    |    0    |   0    |    |    0    |   0    |
    |    0    |   1    |    |    0    |   1    |
    |    1    |   0    |    |    1    |   1    |
    |    1    |   1    |    |    1    |   0    |
    """
    return CU(X(device=device), device=device)


def TOFFOLI(device: Device | str | None = None) -> Matrix:
    """Toffoli (CCX) gate: flips the third qubit when the first two are ``|1⟩``."""
    gate = Matrix.identity(8, device=device)
    gate.embed(X(device=device), 6, 6)
    return gate


def FREDKIN(device: Device | str | None = None) -> Matrix:
    """Fredkin (CSWAP) gate: swaps the last two qubits when the first is ``|1⟩``."""
    gate = Matrix.identity(8, device=device)
    gate.embed(SWAP(device=device), 4, 4)
    return gate


def is_unitary(matrix: Matrix, atol: float = 1e-9) -> bool:
    """
    Check if a matrix is unitary within a given tolerance.

    A matrix U is unitary if U†U = I, where U† is the conjugate transpose.
    """
    if not matrix.is_square:
        return False
    product = matrix.hermitian_transpose().dot_product(matrix)
    return product.allclose(Matrix.identity(matrix.rows), atol=atol)


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
