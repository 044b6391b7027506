"""Tests for classical registers and bra/ket wrappers."""

import pytest

from qvector.core.complex import Complex
from qvector.core.matrix import Matrix
from qvector.errors import ShapeMismatchError
from qvector.registers import Bra, ClassicalRegister, Ket


class TestClassicalRegister:
    def test_bits_and_value(self):
        register = ClassicalRegister([1, 0, 0])
        assert register.bits == (1, 0, 0)
        assert register.width == 3
        assert register.value == 4

    def test_zeroed(self):
        register = ClassicalRegister.zeroed(4)
        assert register.bits == (0, 0, 0, 0)
        assert register.value == 0

    def test_from_value_round_trip(self):
        register = ClassicalRegister.from_value(3, 6)
        assert register.bits == (1, 1, 0)
        assert register.value == 6

    def test_from_value_overflow(self):
        with pytest.raises(ValueError):
            ClassicalRegister.from_value(2, 4)
        with pytest.raises(ValueError):
            ClassicalRegister.from_value(2, -1)

    def test_invalid_bits(self):
        with pytest.raises(ValueError):
            ClassicalRegister([0, 2])

    def test_to_ket(self):
        ket = ClassicalRegister([0, 1]).to_ket()
        assert ket.dimension == 4
        assert ket.matrix == Matrix.column_vector([0, 1, 0, 0])

    def test_to_bra(self):
        bra = ClassicalRegister([1]).to_bra()
        assert bra.matrix == Matrix.from_rows([[0, 1]])

    def test_equality_and_hash(self):
        assert ClassicalRegister([1, 0]) == ClassicalRegister.from_value(2, 2)
        assert len({ClassicalRegister([1]), ClassicalRegister([1])}) == 1
        assert repr(ClassicalRegister([1, 0, 1])) == "ClassicalRegister(101)"


class TestBraKet:
    def test_ket_requires_column(self):
        with pytest.raises(ShapeMismatchError):
            Ket(Matrix.zeros(1, 2))

    def test_bra_requires_row(self):
        with pytest.raises(ShapeMismatchError):
            Bra(Matrix.zeros(2, 1))

    def test_dual_conjugates(self):
        ket = Ket(Matrix.column_vector([1j, 0]))
        bra = ket.to_bra()
        assert bra.matrix.get(0, 0) == Complex(0.0, -1.0)
        assert bra.to_ket().matrix == ket.matrix

    def test_inner_product(self):
        plus = Ket(Matrix.column_vector([1, 1]) * (2 ** -0.5))
        zero = ClassicalRegister([0]).to_ket()
        overlap = zero.to_bra().inner(plus)
        assert overlap.isclose(Complex(2 ** -0.5, 0.0))
        assert plus.to_bra().inner(plus).isclose(Complex.one())

    def test_orthogonal_basis_states(self):
        a = ClassicalRegister([0, 1]).to_bra()
        b = ClassicalRegister([1, 0]).to_ket()
        assert a.inner(b).is_zero()
