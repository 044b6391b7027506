"""Error kinds raised by qvector.

Every error derives from :class:`QVectorError` and from the builtin exception
that best describes it, so callers can catch either.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from qvector.circuit.instructions import Instruction


class QVectorError(Exception):
    """Base class for all qvector errors."""


class ShapeMismatchError(QVectorError, ValueError):
    """Matrix data does not match its declared dimensions."""


class DimensionMismatchError(QVectorError, ValueError):
    """Two matrices have incompatible dimensions for an operation."""


class IndexOutOfBoundsError(QVectorError, IndexError):
    """A matrix element was accessed beyond the matrix extent."""


class UnsupportedInstructionError(QVectorError, NotImplementedError):
    """A backend met an instruction variant it does not implement."""


class InvalidQubitIndexError(QVectorError, ValueError):
    """
    An instruction references a qubit the circuit does not have.

    Attributes
    ----------
    instruction:
        The offending instruction (innermost, as written in its own circuit).
    qubit:
        The offending qubit index, or None when the problem is the operand
        count rather than one index.
    n_qubits:
        Width of the circuit the index was checked against.
    gate_chain:
        Names of the enclosing custom gates, outermost first. Empty when the
        instruction sits directly in the circuit being extended.
    """

    def __init__(
        self,
        instruction: "Instruction",
        qubit: Optional[int],
        n_qubits: int,
        gate_chain: Sequence[str] = (),
        reason: Optional[str] = None,
    ) -> None:
        self.instruction = instruction
        self.qubit = qubit
        self.n_qubits = n_qubits
        self.gate_chain: Tuple[str, ...] = tuple(gate_chain)

        if reason is None and qubit is not None:
            reason = (
                f"Qubit index {qubit} is out of range for this circuit "
                f"(n_qubits={n_qubits})"
            )
        elif reason is None:
            reason = "Invalid qubit operands"
        message = f"{reason} in instruction {instruction!r}"
        if self.gate_chain:
            message += f" (custom gate: {' -> '.join(self.gate_chain)})"
        super().__init__(message)


__all__ = [
    "QVectorError",
    "ShapeMismatchError",
    "DimensionMismatchError",
    "IndexOutOfBoundsError",
    "UnsupportedInstructionError",
    "InvalidQubitIndexError",
]
