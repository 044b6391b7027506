"""Classical registers and Dirac-notation state wrappers.

A :class:`ClassicalRegister` is a fixed-width bit vector. Its main use is to
prepare a computational basis state for a backend via :meth:`to_ket`.

Bit ``k`` of a register belongs to qubit ``k``, and qubit 0 is the most
significant bit, matching the statevector index convention: the register
``[1, 0, 0]`` has value 4 and maps to basis state ``|100⟩``.
"""

from __future__ import annotations

from typing import Iterable, Tuple

from qvector.core.complex import Complex
from qvector.core.device import Device
from qvector.core.matrix import Matrix
from qvector.errors import ShapeMismatchError


class ClassicalRegister:
    """A fixed-width vector of classical bits."""

    def __init__(self, bits: Iterable[int]) -> None:
        values = tuple(int(b) for b in bits)
        for bit in values:
            if bit not in (0, 1):
                raise ValueError(f"Register bits must be 0 or 1, got {bit}")
        self._bits: Tuple[int, ...] = values

    @classmethod
    def zeroed(cls, width: int) -> "ClassicalRegister":
        """Return an all-zero register of ``width`` bits."""
        if width < 0:
            raise ValueError(f"width must be >= 0, got {width}")
        return cls([0] * width)

    @classmethod
    def from_value(cls, width: int, value: int) -> "ClassicalRegister":
        """
        Return the ``width``-bit register holding ``value``.

        Raises
        ------
        ValueError
            If ``value`` is negative or does not fit in ``width`` bits.
        """
        if value < 0 or value >= 2**width:
            raise ValueError(
                f"value {value} does not fit in a register of width {width}"
            )
        return cls((value >> (width - 1 - k)) & 1 for k in range(width))

    @property
    def bits(self) -> Tuple[int, ...]:
        return self._bits

    @property
    def width(self) -> int:
        return len(self._bits)

    @property
    def value(self) -> int:
        """Integer value with bit 0 as the most significant bit."""
        result = 0
        for bit in self._bits:
            result = (result << 1) | bit
        return result

    def to_ket(self, device: Device | str | None = None) -> "Ket":
        """Return the basis state ``|bits⟩`` as a ``2**width x 1`` Ket."""
        state = Matrix.zeros(2**self.width, 1, device=device)
        state.set(self.value, 0, Complex.one())
        return Ket(state)

    def to_bra(self, device: Device | str | None = None) -> "Bra":
        return self.to_ket(device).to_bra()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClassicalRegister):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self) -> int:
        return hash(self._bits)

    def __repr__(self) -> str:
        return f"ClassicalRegister({''.join(str(b) for b in self._bits)})"


class Ket:
    """A column-vector state ``|psi⟩``."""

    def __init__(self, matrix: Matrix) -> None:
        if matrix.cols != 1:
            raise ShapeMismatchError(
                f"A ket must be a column vector, got {matrix.rows}x{matrix.cols}"
            )
        self.matrix = matrix

    def to_bra(self) -> "Bra":
        """Dual row vector ``⟨psi|`` (Hermitian transpose)."""
        return Bra(self.matrix.hermitian_transpose())

    @property
    def dimension(self) -> int:
        return self.matrix.rows

    def __repr__(self) -> str:
        return f"Ket(dimension={self.dimension})"


class Bra:
    """A row-vector state ``⟨psi|``."""

    def __init__(self, matrix: Matrix) -> None:
        if matrix.rows != 1:
            raise ShapeMismatchError(
                f"A bra must be a row vector, got {matrix.rows}x{matrix.cols}"
            )
        self.matrix = matrix

    def to_ket(self) -> Ket:
        """Dual column vector ``|psi⟩`` (Hermitian transpose)."""
        return Ket(self.matrix.hermitian_transpose())

    @property
    def dimension(self) -> int:
        return self.matrix.cols

    def inner(self, ket: Ket) -> Complex:
        """Inner product ``⟨self|ket⟩``."""
        return self.matrix.dot_product(ket.matrix).get(0, 0)

    def __repr__(self) -> str:
        return f"Bra(dimension={self.dimension})"


__all__ = ["ClassicalRegister", "Ket", "Bra"]
