"""Instruction variants: one frozen dataclass per kind of gate application.

Each instruction carries its operand qubits and any continuous parameter
directly. ``qubits`` lists operands in gate-local significance order: the
first entry is the most significant bit of the gate matrix index, so for
``ControlledNot`` it is ``(control, target)``.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, ClassVar, Sequence, Tuple

from qvector.core.matrix import Matrix

if TYPE_CHECKING:
    from qvector.circuit.core import QuantumCircuit


def _as_qubit(value: Any) -> Any:
    """
    Return ``value`` as a plain int when it is an integer index.

    Anything else (floats, bools, strings) is returned unchanged so circuit
    validation can reject it with the offending value intact.
    """
    if isinstance(value, bool):
        return value
    try:
        return operator.index(value)
    except TypeError:
        return value


@dataclass(frozen=True)
class Instruction:
    """
    Base class of every gate application.

    Subclasses define ``kind`` (the variant tag), ``qubits`` and ``remap``,
    and list their qubit fields in ``operand_fields``.
    """

    kind: ClassVar[str] = "Instruction"
    symbol: ClassVar[str] = "?"
    operand_fields: ClassVar[Tuple[str, ...]] = ()

    def __post_init__(self) -> None:
        for name in self.operand_fields:
            object.__setattr__(self, name, _as_qubit(getattr(self, name)))

    @property
    def qubits(self) -> Tuple[int, ...]:
        """Operand qubit indices, most significant first."""
        raise NotImplementedError

    @property
    def tag(self) -> str:
        """Name used for gate counts and reporting."""
        return self.kind

    @property
    def label(self) -> str:
        """Short symbol used in text diagrams."""
        return self.symbol

    def remap(self, mapping: Sequence[int]) -> "Instruction":
        """Return a copy with every operand ``q`` replaced by ``mapping[q]``."""
        raise NotImplementedError


# ----------------------------------------------------------------------
# Single-qubit instructions
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class SingleQubitInstruction(Instruction):
    operand_fields: ClassVar[Tuple[str, ...]] = ("qubit",)

    qubit: int

    @property
    def qubits(self) -> Tuple[int, ...]:
        return (self.qubit,)

    def remap(self, mapping: Sequence[int]) -> "SingleQubitInstruction":
        return replace(self, qubit=mapping[self.qubit])


@dataclass(frozen=True)
class ParametricInstruction(SingleQubitInstruction):
    """Single-qubit instruction with one angle, in radians."""

    phase: float

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "phase", float(self.phase))


@dataclass(frozen=True)
class Identity(SingleQubitInstruction):
    """Leaves the qubit untouched: ``|a⟩ -> |a⟩``."""

    kind: ClassVar[str] = "Identity"
    symbol: ClassVar[str] = "I"


@dataclass(frozen=True)
class PauliX(SingleQubitInstruction):
    """Bit flip: ``a|0⟩ + b|1⟩ -> b|0⟩ + a|1⟩``. Equal to ``RotationX(q, pi)`` up to phase."""

    kind: ClassVar[str] = "PauliX"
    symbol: ClassVar[str] = "X"


@dataclass(frozen=True)
class PauliY(SingleQubitInstruction):
    kind: ClassVar[str] = "PauliY"
    symbol: ClassVar[str] = "Y"


@dataclass(frozen=True)
class PauliZ(SingleQubitInstruction):
    kind: ClassVar[str] = "PauliZ"
    symbol: ClassVar[str] = "Z"


@dataclass(frozen=True)
class Hadamard(SingleQubitInstruction):
    """
    Hadamard gate. Takes ``|0⟩`` to ``|+⟩`` and ``|1⟩`` to ``|-⟩``; applying
    it twice restores the original state.
    """

    kind: ClassVar[str] = "Hadamard"
    symbol: ClassVar[str] = "H"


@dataclass(frozen=True)
class T(SingleQubitInstruction):
    """T gate, ``Phase(q, pi/4)``."""

    kind: ClassVar[str] = "T"
    symbol: ClassVar[str] = "T"


@dataclass(frozen=True)
class Phase(ParametricInstruction):
    """Multiplies the ``|1⟩`` amplitude by ``e^{i phase}``."""

    kind: ClassVar[str] = "Phase"
    symbol: ClassVar[str] = "P"


@dataclass(frozen=True)
class RotationX(ParametricInstruction):
    kind: ClassVar[str] = "RotationX"
    symbol: ClassVar[str] = "RX"


@dataclass(frozen=True)
class RotationY(ParametricInstruction):
    kind: ClassVar[str] = "RotationY"
    symbol: ClassVar[str] = "RY"


@dataclass(frozen=True)
class RotationZ(ParametricInstruction):
    kind: ClassVar[str] = "RotationZ"
    symbol: ClassVar[str] = "RZ"


# ----------------------------------------------------------------------
# Multi-qubit instructions
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class ControlledNot(Instruction):
    """
    Flips ``target`` when ``control`` is ``|1⟩``:
    ``|a⟩|b⟩ -> |a⟩|a XOR b⟩``.
    """

    kind: ClassVar[str] = "ControlledNot"
    symbol: ClassVar[str] = "CX"
    operand_fields: ClassVar[Tuple[str, ...]] = ("control", "target")

    control: int
    target: int

    @property
    def qubits(self) -> Tuple[int, ...]:
        return (self.control, self.target)

    def remap(self, mapping: Sequence[int]) -> "ControlledNot":
        return replace(
            self, control=mapping[self.control], target=mapping[self.target]
        )


@dataclass(frozen=True)
class ControlledU(Instruction):
    """
    Applies the single-qubit unitary ``gate`` to ``target`` when ``control``
    is ``|1⟩``.

    Raises
    ------
    ValueError
        If ``gate`` is not a 2x2 Matrix.
    """

    kind: ClassVar[str] = "ControlledU"
    symbol: ClassVar[str] = "CU"
    operand_fields: ClassVar[Tuple[str, ...]] = ("control", "target")

    gate: Matrix = field(repr=False)
    control: int
    target: int

    def __post_init__(self) -> None:
        super().__post_init__()
        if not isinstance(self.gate, Matrix) or self.gate.shape != (2, 2):
            shape = getattr(self.gate, "shape", None)
            raise ValueError(f"controlled gate must be a (2, 2) Matrix, got {shape}")

    def __hash__(self) -> int:
        return hash((self.kind, self.control, self.target))

    @property
    def qubits(self) -> Tuple[int, ...]:
        return (self.control, self.target)

    def remap(self, mapping: Sequence[int]) -> "ControlledU":
        return replace(
            self, control=mapping[self.control], target=mapping[self.target]
        )


@dataclass(frozen=True)
class Swap(Instruction):
    """Exchanges two qubits: ``|a⟩|b⟩ -> |b⟩|a⟩``. Symmetric in its operands."""

    kind: ClassVar[str] = "Swap"
    symbol: ClassVar[str] = "×"
    operand_fields: ClassVar[Tuple[str, ...]] = ("first", "second")

    first: int
    second: int

    @property
    def qubits(self) -> Tuple[int, ...]:
        return (self.first, self.second)

    def remap(self, mapping: Sequence[int]) -> "Swap":
        return replace(self, first=mapping[self.first], second=mapping[self.second])


@dataclass(frozen=True)
class Toffoli(Instruction):
    """Flips ``target`` only when both controls are ``|1⟩``."""

    kind: ClassVar[str] = "Toffoli"
    symbol: ClassVar[str] = "CCX"
    operand_fields: ClassVar[Tuple[str, ...]] = ("control1", "control2", "target")

    control1: int
    control2: int
    target: int

    @property
    def qubits(self) -> Tuple[int, ...]:
        return (self.control1, self.control2, self.target)

    def remap(self, mapping: Sequence[int]) -> "Toffoli":
        return replace(
            self,
            control1=mapping[self.control1],
            control2=mapping[self.control2],
            target=mapping[self.target],
        )


@dataclass(frozen=True)
class Fredkin(Instruction):
    """Swaps ``target1`` and ``target2`` only when ``control`` is ``|1⟩``."""

    kind: ClassVar[str] = "Fredkin"
    symbol: ClassVar[str] = "CSWAP"
    operand_fields: ClassVar[Tuple[str, ...]] = ("control", "target1", "target2")

    control: int
    target1: int
    target2: int

    @property
    def qubits(self) -> Tuple[int, ...]:
        return (self.control, self.target1, self.target2)

    def remap(self, mapping: Sequence[int]) -> "Fredkin":
        return replace(
            self,
            control=mapping[self.control],
            target1=mapping[self.target1],
            target2=mapping[self.target2],
        )


@dataclass(frozen=True)
class Custom(Instruction):
    """
    A composite gate defined by a nested circuit.

    Qubit ``k`` of ``circuit`` is wired to qubit ``input_qubits[k]`` of the
    enclosing circuit. The nested circuit is copied on construction, so later
    changes to the caller's circuit do not leak into the gate.
    """

    kind: ClassVar[str] = "Custom"

    name: str
    circuit: "QuantumCircuit"
    input_qubits: Tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "circuit", self.circuit.copy())
        object.__setattr__(
            self, "input_qubits", tuple(_as_qubit(q) for q in self.input_qubits)
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.name, self.input_qubits))

    @property
    def qubits(self) -> Tuple[int, ...]:
        return self.input_qubits

    @property
    def tag(self) -> str:
        return self.name

    @property
    def label(self) -> str:
        return self.name

    def remap(self, mapping: Sequence[int]) -> "Custom":
        return replace(self, input_qubits=tuple(mapping[q] for q in self.input_qubits))


__all__ = [
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
