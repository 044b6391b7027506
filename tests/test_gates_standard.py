"""Tests for standard gate matrices."""

import math

import pytest

from qvector.core.complex import Complex
from qvector.core.matrix import Matrix
from qvector.gates import (
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


def _basis(index: int, dim: int) -> Matrix:
    v = Matrix.zeros(dim, 1)
    v.set(index, 0, 1)
    return v


@pytest.mark.parametrize(
    "gate",
    [
        I(),
        X(),
        Y(),
        Z(),
        H(),
        S(),
        T(),
        P(0.3),
        RX(0.7),
        RY(-1.2),
        RZ(2.5),
        SWAP(),
        CNOT(),
        CU(H()),
        TOFFOLI(),
        FREDKIN(),
    ],
)
def test_gates_are_unitary(gate):
    assert is_unitary(gate)


def test_gate_shapes():
    for gate in (I(), X(), Y(), Z(), H(), T()):
        assert gate.shape == (2, 2)
    for gate in (SWAP(), CNOT()):
        assert gate.shape == (4, 4)
    for gate in (TOFFOLI(), FREDKIN()):
        assert gate.shape == (8, 8)


def test_non_unitary_detected():
    assert not is_unitary(Matrix.from_rows([[1, 1], [0, 1]]))
    assert not is_unitary(Matrix.zeros(2, 3))


def test_paulis_square_to_identity():
    for gate in (X(), Y(), Z()):
        assert gate.dot_product(gate).allclose(I())


def test_hadamard_is_self_inverse():
    assert H().dot_product(H()).allclose(I(), atol=1e-12)


def test_hadamard_maps_zero_to_plus():
    plus = H().dot_product(_basis(0, 2))
    amp = 1.0 / math.sqrt(2.0)
    assert plus.allclose(Matrix.column_vector([amp, amp]))


def test_y_entries():
    y = Y()
    assert y.get(0, 1) == Complex(0.0, -1.0)
    assert y.get(1, 0) == Complex(0.0, 1.0)


def test_phase_family():
    assert S().allclose(P(math.pi / 2))
    assert T().allclose(P(math.pi / 4))
    assert T().get(1, 1).isclose(Complex.from_polar(1.0, math.pi / 4))
    assert P(0.4).dot_product(P(-0.4)).allclose(I())


def test_rotation_at_pi_matches_pauli_up_to_phase():
    # RX(pi) = -i X
    assert RX(math.pi).allclose(X() * -1j, atol=1e-12)
    assert RY(math.pi).allclose(Y() * -1j, atol=1e-12)
    assert RZ(math.pi).allclose(Z() * -1j, atol=1e-12)


def test_cu_requires_single_qubit_gate():
    with pytest.raises(ValueError):
        CU(Matrix.identity(4))


def test_cu_blocks():
    u = RY(0.9)
    gate = CU(u)
    for i in range(2):
        for j in range(2):
            assert gate.get(i, j) == (Complex.one() if i == j else Complex.zero())
            assert gate.get(2 + i, 2 + j) == u.get(i, j)


@pytest.mark.parametrize(
    "inp,out", [(0b00, 0b00), (0b01, 0b01), (0b10, 0b11), (0b11, 0b10)]
)
def test_cnot_truth_table(inp, out):
    assert CNOT().dot_product(_basis(inp, 4)) == _basis(out, 4)


@pytest.mark.parametrize(
    "inp,out", [(0b00, 0b00), (0b01, 0b10), (0b10, 0b01), (0b11, 0b11)]
)
def test_swap_truth_table(inp, out):
    assert SWAP().dot_product(_basis(inp, 4)) == _basis(out, 4)


@pytest.mark.parametrize("inp", range(8))
def test_toffoli_truth_table(inp):
    out = inp ^ 1 if (inp & 0b110) == 0b110 else inp
    assert TOFFOLI().dot_product(_basis(inp, 8)) == _basis(out, 8)


@pytest.mark.parametrize("inp", range(8))
def test_fredkin_truth_table(inp):
    if inp & 0b100:
        a, b = (inp >> 1) & 1, inp & 1
        out = 0b100 | (b << 1) | a
    else:
        out = inp
    assert FREDKIN().dot_product(_basis(inp, 8)) == _basis(out, 8)
