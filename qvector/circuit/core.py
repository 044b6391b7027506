"""Circuit model: an ordered, validated instruction sequence."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from qvector.circuit.instructions import (
    ControlledNot,
    ControlledU,
    Custom,
    Fredkin,
    Instruction,
    Swap,
    Toffoli,
)
from qvector.errors import InvalidQubitIndexError
from qvector.logging import get_logger

if TYPE_CHECKING:
    from qvector.core.device import Device
    from qvector.core.matrix import Matrix

logger = get_logger(__name__)


def validate_instruction(
    instruction: Instruction,
    n_qubits: int,
    gate_chain: Sequence[str] = (),
) -> None:
    """
    Check every qubit an instruction touches against a circuit width.

    Custom instructions are checked twice: their ``input_qubits`` against
    ``n_qubits``, then each nested instruction against the nested circuit's
    own width, with the custom-gate name appended to ``gate_chain``.

    Raises
    ------
    TypeError
        If ``instruction`` is not an :class:`Instruction`.
    InvalidQubitIndexError
        If an index is not an integer or is out of range, an operand is
        repeated, or a custom gate wires a different number of qubits than
        its circuit declares.
    """
    if not isinstance(instruction, Instruction):
        raise TypeError(
            f"Expected an Instruction, got {type(instruction).__name__}"
        )

    seen = set()
    for q in instruction.qubits:
        if not isinstance(q, int) or isinstance(q, bool):
            raise InvalidQubitIndexError(
                instruction,
                None,
                n_qubits,
                gate_chain,
                reason=f"Qubit index {q!r} is not an integer",
            )
        if q < 0 or q >= n_qubits:
            raise InvalidQubitIndexError(instruction, q, n_qubits, gate_chain)
        if q in seen:
            raise InvalidQubitIndexError(
                instruction,
                q,
                n_qubits,
                gate_chain,
                reason=f"Qubit index {q} is used more than once",
            )
        seen.add(q)

    if isinstance(instruction, Custom):
        inner = instruction.circuit
        if len(instruction.input_qubits) != inner.n_qubits:
            raise InvalidQubitIndexError(
                instruction,
                None,
                n_qubits,
                gate_chain,
                reason=(
                    f"Custom gate {instruction.name!r} wires "
                    f"{len(instruction.input_qubits)} qubits but its circuit "
                    f"has {inner.n_qubits}"
                ),
            )
        chain = tuple(gate_chain) + (instruction.name,)
        for nested in inner.instructions:
            validate_instruction(nested, inner.n_qubits, chain)


def _inline(custom: Custom) -> Iterator[Instruction]:
    """Yield the primitive instructions of ``custom`` in enclosing indices."""
    mapping = custom.input_qubits
    for nested in custom.circuit.instructions:
        remapped = nested.remap(mapping)
        if isinstance(remapped, Custom):
            yield from _inline(remapped)
        else:
            yield remapped


class QuantumCircuit:
    """
    An ordered list of instructions over a fixed number of qubits.

    Qubit 0 is the most significant bit of a basis-state index: in a
    3-qubit circuit, index ``0b100`` is the state with qubit 0 set.

    Circuits only grow. :meth:`add` validates before appending, so a
    rejected instruction leaves the circuit exactly as it was.

    Example
    -------
    >>> circuit = QuantumCircuit(2)
    >>> _ = circuit.add(Hadamard(0)).add(ControlledNot(control=0, target=1))
    >>> state = circuit.simulate_state()
    """

    def __init__(self, n_qubits: int) -> None:
        if n_qubits <= 0:
            raise ValueError("QuantumCircuit requires n_qubits >= 1.")

        self._n_qubits = int(n_qubits)
        self._instructions: List[Instruction] = []

    @property
    def n_qubits(self) -> int:
        """Return the number of qubits in this circuit."""
        return self._n_qubits

    @property
    def instructions(self) -> Tuple[Instruction, ...]:
        """Return a read-only tuple of all instructions."""
        return tuple(self._instructions)

    def add(self, instruction: Instruction) -> "QuantumCircuit":
        """
        Validate and append an instruction.

        Returns the circuit itself so calls can be chained.

        Raises
        ------
        InvalidQubitIndexError
            If the instruction, or anything nested inside it, references a
            qubit that does not exist.
        """
        try:
            validate_instruction(instruction, self._n_qubits)
        except InvalidQubitIndexError as exc:
            logger.debug("Rejected instruction: %s", exc)
            raise

        self._instructions.append(instruction)
        return self

    def extend(self, instructions: Iterable[Instruction]) -> "QuantumCircuit":
        """Add instructions in order, stopping at the first invalid one."""
        for instruction in instructions:
            self.add(instruction)
        return self

    def copy(self) -> "QuantumCircuit":
        """Return a copy of this circuit. Instructions are immutable and shared."""
        new = QuantumCircuit(self._n_qubits)
        new._instructions.extend(self._instructions)
        return new

    def __len__(self) -> int:
        return len(self._instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(tuple(self._instructions))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QuantumCircuit):
            return NotImplemented
        return (
            self._n_qubits == other._n_qubits
            and self._instructions == other._instructions
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"QuantumCircuit(n_qubits={self._n_qubits}, "
            f"instructions={len(self._instructions)})"
        )

    def iter_primitive(self) -> Iterator[Instruction]:
        """
        Yield instructions with every Custom instruction inlined.

        Nested qubit indices are rewritten through each custom gate's
        ``input_qubits``, recursively, so every yielded instruction refers to
        this circuit's qubits.
        """
        for instruction in self._instructions:
            if isinstance(instruction, Custom):
                yield from _inline(instruction)
            else:
                yield instruction

    def flatten(self) -> "QuantumCircuit":
        """Return an equivalent circuit without Custom instructions."""
        flat = QuantumCircuit(self._n_qubits)
        flat.extend(self.iter_primitive())
        return flat

    def gate_counts(self) -> Dict[str, int]:
        """Return a mapping from instruction tag to count. Custom gates count by name."""
        counts: Dict[str, int] = {}
        for instruction in self._instructions:
            counts[instruction.tag] = counts.get(instruction.tag, 0) + 1
        return counts

    def depth(self) -> int:
        """
        Number of sequential layers if instructions on disjoint qubits run in
        parallel. A Custom instruction occupies all of its input qubits for
        one layer.
        """
        if not self._instructions:
            return 0

        qubit_layer = [0] * self._n_qubits
        max_layer = 0

        for instruction in self._instructions:
            layer = 1 + max((qubit_layer[q] for q in instruction.qubits), default=0)
            for q in instruction.qubits:
                qubit_layer[q] = layer
            max_layer = max(max_layer, layer)

        return max_layer

    def simulate_state(
        self,
        device: Optional["Device | str"] = None,
        method: str = "operator",
    ) -> "Matrix":
        """
        Run this circuit from ``|0...0⟩`` on the statevector backend.

        Returns
        -------
        state:
            ``2**n_qubits x 1`` column Matrix of amplitudes.
        """
        from qvector.backend.statevector import StatevectorBackend

        return StatevectorBackend(device=device, method=method).execute(self)

    def to_text_diagram(self) -> str:
        """
        Return a simple text diagram of the circuit.

        Each qubit is a horizontal wire and every instruction gets one
        fixed-width column. Controls are drawn as '●', NOT targets as '⊕',
        swapped qubits as '×', and custom gates as their name's first letter.
        """
        wire_segments: List[List[str]] = [[] for _ in range(self._n_qubits)]

        for instruction in self._instructions:
            for q in range(self._n_qubits):
                wire_segments[q].append("───")

            markers = _diagram_markers(instruction)
            for q, marker in zip(instruction.qubits, markers):
                wire_segments[q][-1] = f"─{marker}─"

        lines = [
            f"q{q}: " + "".join(wire_segments[q]) for q in range(self._n_qubits)
        ]
        return "\n".join(lines)


def _diagram_markers(instruction: Instruction) -> Tuple[str, ...]:
    """One single-character marker per operand qubit."""
    if isinstance(instruction, ControlledNot):
        return ("●", "⊕")
    if isinstance(instruction, ControlledU):
        return ("●", "U")
    if isinstance(instruction, Swap):
        return ("×", "×")
    if isinstance(instruction, Toffoli):
        return ("●", "●", "⊕")
    if isinstance(instruction, Fredkin):
        return ("●", "×", "×")
    marker = (instruction.label or "?")[0]
    return tuple(marker for _ in instruction.qubits)
