"""Statevector backend for pure quantum states.

The backend folds a circuit's instructions over a ``2**n x 1`` amplitude
column, starting from ``|0...0⟩``. Qubit 0 is the most significant bit of a
basis-state index throughout, so the full operator of a single-qubit gate
``G`` on qubit ``q`` is ``I(2**q) ⊗ G ⊗ I(2**(n-q-1))``.

Two application methods are provided:

- ``"operator"`` materializes the full ``2**n x 2**n`` operator of every
  instruction (tensor products with identities when the operands are
  contiguous, a bit-indexed construction otherwise) and left-multiplies it
  onto the state. Cost is ``O(4**n)`` per instruction.
- ``"contraction"`` reshapes the amplitudes into a rank-``n`` tensor and
  contracts the small gate matrix against the operand axes only. Cost is
  ``O(2**n * 2**k)`` for a ``k``-qubit gate. Results match ``"operator"``.
"""

from __future__ import annotations

from operator import index as _as_index
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Type

import torch

from qvector.backend.base import Backend
from qvector.circuit.core import QuantumCircuit
from qvector.circuit.instructions import (
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
    RotationX,
    RotationY,
    RotationZ,
    Swap,
    T,
    Toffoli,
)
from qvector.core.device import Device, resolve_device
from qvector.core.matrix import Matrix
from qvector.diagnostics import assert_normalized, is_debug_enabled
from qvector.errors import DimensionMismatchError, UnsupportedInstructionError
from qvector.gates import standard as stdgates
from qvector.logging import get_logger
from qvector.registers import ClassicalRegister, Ket

logger = get_logger(__name__)

METHODS = ("operator", "contraction")

_FIXED_GATES: Dict[Type[Instruction], Callable[..., Matrix]] = {
    Identity: stdgates.I,
    PauliX: stdgates.X,
    PauliY: stdgates.Y,
    PauliZ: stdgates.Z,
    Hadamard: stdgates.H,
    T: stdgates.T,
    ControlledNot: stdgates.CNOT,
    Swap: stdgates.SWAP,
    Toffoli: stdgates.TOFFOLI,
    Fredkin: stdgates.FREDKIN,
}

_PARAMETRIC_GATES: Dict[Type[Instruction], Callable[..., Matrix]] = {
    Phase: stdgates.P,
    RotationX: stdgates.RX,
    RotationY: stdgates.RY,
    RotationZ: stdgates.RZ,
}


def zero_state(n_qubits: int, device: Device | str | None = None) -> Matrix:
    """
    Create the ``|0...0⟩`` column vector for ``n_qubits``.

    Raises:
        ValueError: If n_qubits < 1.
    """
    if n_qubits < 1:
        raise ValueError(f"n_qubits must be >= 1, got {n_qubits}")

    state = Matrix.zeros(2**n_qubits, 1, device=device)
    state.set(0, 0, 1.0)
    return state


def instruction_matrix(
    instruction: Instruction, device: Device | str | None = None
) -> Matrix:
    """
    Return the gate-local matrix of ``instruction``.

    The matrix is ``2**k x 2**k`` for an instruction on ``k`` qubits, indexed
    with ``instruction.qubits[0]`` as the most significant bit. For a Custom
    instruction this is the product of its nested operators, built over the
    nested circuit's own width.

    Raises:
        UnsupportedInstructionError: For instruction types without a matrix.
    """
    kind = type(instruction)
    if kind in _FIXED_GATES:
        return _FIXED_GATES[kind](device=device)
    if kind in _PARAMETRIC_GATES:
        return _PARAMETRIC_GATES[kind](instruction.phase, device=device)  # type: ignore[attr-defined]
    if kind is ControlledU:
        return stdgates.CU(instruction.gate, device=device)  # type: ignore[attr-defined]
    if kind is Custom:
        inner = instruction.circuit  # type: ignore[attr-defined]
        operator = Matrix.identity(2**inner.n_qubits, device=device)
        for nested in inner.iter_primitive():
            if isinstance(nested, Identity):
                continue
            nested_op = expand_gate(
                instruction_matrix(nested, device), nested.qubits, inner.n_qubits
            )
            operator = nested_op.dot_product(operator)
        return operator

    raise UnsupportedInstructionError(
        f"Statevector backend does not support instruction {instruction!r}"
    )


def _qubit_tuple(qubits: Sequence[int]) -> Tuple[int, ...]:
    """Operands as plain ints. Floats and bools are rejected, not truncated."""
    result = []
    for q in qubits:
        if isinstance(q, bool):
            raise TypeError(f"qubit index must be an integer, got {q!r}")
        try:
            result.append(_as_index(q))
        except TypeError:
            raise TypeError(f"qubit index must be an integer, got {q!r}") from None
    return tuple(result)


def _check_operands(gate: Matrix, qubits: Sequence[int], n_qubits: int) -> None:
    k = len(qubits)
    if k == 0:
        raise ValueError("A gate must act on at least one qubit.")
    if gate.shape != (2**k, 2**k):
        raise DimensionMismatchError(
            f"A gate on {k} qubit(s) must be {2**k}x{2**k}, got "
            f"{gate.rows}x{gate.cols}"
        )
    for q in qubits:
        if q < 0 or q >= n_qubits:
            raise ValueError(f"qubit index {q} out of range [0, {n_qubits})")
    if len(set(qubits)) != k:
        raise ValueError(f"qubits must be distinct, got {tuple(qubits)}")


def expand_single_qubit_gate(gate: Matrix, qubit: int, n_qubits: int) -> Matrix:
    """
    Full-space operator ``I(2**qubit) ⊗ gate ⊗ I(2**(n_qubits-qubit-1))``.

    Raises:
        DimensionMismatchError: If ``gate`` is not 2x2.
        TypeError: If ``qubit`` is not an integer.
        ValueError: If ``qubit`` is out of range.
    """
    (qubit,) = _qubit_tuple((qubit,))
    _check_operands(gate, (qubit,), n_qubits)
    return _expand_contiguous(gate, qubit, 1, n_qubits)


def _expand_contiguous(gate: Matrix, first: int, k: int, n_qubits: int) -> Matrix:
    """Operator of a gate on qubits ``first, first+1, ..., first+k-1``."""
    dev = resolve_device(gate.device)
    operator = gate
    if first > 0:
        operator = Matrix.identity(2**first, device=dev).tensor_product(operator)
    trailing = n_qubits - first - k
    if trailing > 0:
        operator = operator.tensor_product(Matrix.identity(2**trailing, device=dev))
    if operator is gate:
        return gate.to(dev)
    return operator


def _bit_indexed_operator(gate: Matrix, qubits: Sequence[int], n_qubits: int) -> Matrix:
    """
    Build the full operator entry by entry from basis-index bits.

    Entry ``(i, j)`` is ``gate[local(i), local(j)]`` when ``i`` and ``j``
    agree on every spectator bit, and zero otherwise. ``local(x)`` gathers the
    operand bits of ``x`` in ``qubits`` order. With the fixed gate matrices
    this means: controlled gates copy the state through unless every control
    bit is 1, SWAP exchanges its two bits, Toffoli flips the target when both
    controls are 1 and Fredkin swaps its targets when the control is 1.

    All index pairs are evaluated at once with tensor indexing.
    """
    k = len(qubits)
    dim = 2**n_qubits
    torch_device = gate.device

    index = torch.arange(dim, dtype=torch.int64, device=torch_device)
    local = torch.zeros(dim, dtype=torch.int64, device=torch_device)
    operand_mask = 0
    for position, q in enumerate(qubits):
        shift = n_qubits - 1 - q
        bit = (index >> shift) & 1
        local |= bit << (k - 1 - position)
        operand_mask |= 1 << shift

    spectators = index & ((dim - 1) ^ operand_mask)
    same_spectators = spectators.unsqueeze(1) == spectators.unsqueeze(0)

    gate_tensor = gate.to_tensor()
    entries = gate_tensor[local.unsqueeze(1), local.unsqueeze(0)]
    operator = torch.where(same_spectators, entries, torch.zeros_like(entries))
    return Matrix.from_tensor(operator, device=torch_device)


def expand_gate(gate: Matrix, qubits: Sequence[int], n_qubits: int) -> Matrix:
    """
    Expand a ``k``-qubit gate acting on ``qubits`` to the full ``2**n``-dim space.

    Operands that are contiguous and ascending use the tensor-with-identity
    construction; any other placement (non-adjacent or reversed operands)
    uses the bit-indexed construction.

    Raises:
        DimensionMismatchError: If ``gate`` is not ``2**k x 2**k``.
        ValueError: If an operand is out of range or repeated.
    """
    qubits = _qubit_tuple(qubits)
    _check_operands(gate, qubits, n_qubits)

    first = qubits[0]
    if qubits == tuple(range(first, first + len(qubits))):
        return _expand_contiguous(gate, first, len(qubits), n_qubits)
    return _bit_indexed_operator(gate, qubits, n_qubits)


def apply_gate(
    state: Matrix,
    gate: Matrix,
    qubits: Sequence[int],
    n_qubits: int,
) -> Matrix:
    """
    Apply a ``k``-qubit gate directly to a statevector.

    The amplitudes are viewed as a ``[2] * n_qubits`` tensor (axis ``q`` is
    qubit ``q``), the operand axes are moved to the front in ``qubits`` order,
    the gate is contracted against them and the axes are moved back. The full
    operator is never built.

    Raises:
        DimensionMismatchError: If the state is not ``2**n_qubits x 1`` or the
            gate does not match the operand count.
        ValueError: If an operand is out of range or repeated.
    """
    qubits = _qubit_tuple(qubits)
    _check_operands(gate, qubits, n_qubits)
    if state.shape != (2**n_qubits, 1):
        raise DimensionMismatchError(
            f"state must be {2**n_qubits}x1 for {n_qubits} qubits, got "
            f"{state.rows}x{state.cols}"
        )

    k = len(qubits)
    perm: List[int] = list(qubits) + [q for q in range(n_qubits) if q not in qubits]
    inverse = [0] * n_qubits
    for axis, q in enumerate(perm):
        inverse[q] = axis

    amplitudes = state.to_tensor().reshape([2] * n_qubits)
    gathered = amplitudes.permute(perm).reshape(2**k, -1)
    updated = torch.matmul(gate.to_tensor().to(gathered.device), gathered)
    restored = updated.reshape([2] * n_qubits).permute(inverse).reshape(-1, 1)
    return Matrix.from_tensor(restored, device=restored.device)


def measure_probs(state: Matrix) -> torch.Tensor:
    """
    Probability of every computational basis state, ``|amplitude|**2``.

    Returns a real tensor of length ``state.rows``, renormalized to sum to 1.
    """
    if state.cols != 1:
        raise DimensionMismatchError(
            f"state must be a column vector, got {state.rows}x{state.cols}"
        )
    probs = state.to_tensor().reshape(-1).abs() ** 2
    total = probs.sum()
    return probs / torch.clamp(total, min=1e-12)


class StatevectorBackend(Backend):
    """
    Backend returning the final ``2**n x 1`` amplitude column.

    Args:
        device: Where amplitudes and operators live ("cpu", "cuda" or a
            Device). Defaults to the CPU.
        method: "operator" to materialize each full operator, or
            "contraction" to apply gates directly to the amplitudes.

    Example:
        >>> circuit = QuantumCircuit(1).add(PauliX(0))
        >>> StatevectorBackend().execute(circuit).tolist()
        [[Complex(real=0.0, imag=0.0)], [Complex(real=1.0, imag=0.0)]]
    """

    def __init__(
        self,
        device: Device | str | None = None,
        method: str = "operator",
    ) -> None:
        if method not in METHODS:
            raise ValueError(
                f"Unsupported method {method!r}. Supported methods: {list(METHODS)}"
            )
        self.device = resolve_device(device)
        self.method = method

    def __repr__(self) -> str:
        return f"StatevectorBackend(device={self.device.name!r}, method={self.method!r})"

    def initial_state(self, n_qubits: int, initial_state: Optional[Any] = None) -> Matrix:
        """
        Resolve the starting statevector.

        ``initial_state`` may be None (``|0...0⟩``), a ClassicalRegister, a Ket
        or a ``2**n_qubits x 1`` Matrix.

        Raises:
            DimensionMismatchError: If the supplied state has the wrong size.
            TypeError: For any other kind of value.
        """
        if initial_state is None:
            return zero_state(n_qubits, device=self.device)

        if isinstance(initial_state, ClassicalRegister):
            state = initial_state.to_ket(device=self.device).matrix
        elif isinstance(initial_state, Ket):
            state = initial_state.matrix.to(self.device)
        elif isinstance(initial_state, Matrix):
            state = initial_state.to(self.device)
        else:
            raise TypeError(
                "initial_state must be None, ClassicalRegister, Ket or Matrix, "
                f"got {type(initial_state).__name__}"
            )

        if state.shape != (2**n_qubits, 1):
            raise DimensionMismatchError(
                f"initial state must be {2**n_qubits}x1 for {n_qubits} qubits, "
                f"got {state.rows}x{state.cols}"
            )
        return state

    def operator(self, instruction: Instruction, n_qubits: int) -> Matrix:
        """Full ``2**n_qubits``-dimensional operator of one instruction."""
        gate = instruction_matrix(instruction, device=self.device)
        return expand_gate(gate, instruction.qubits, n_qubits)

    def apply(self, instruction: Instruction, state: Matrix, n_qubits: int) -> Matrix:
        """Apply one primitive instruction and return the new state."""
        if isinstance(instruction, Identity):
            return state.to(self.device)

        if self.method == "operator":
            return self.operator(instruction, n_qubits).dot_product(state)

        gate = instruction_matrix(instruction, device=self.device)
        return apply_gate(state, gate, instruction.qubits, n_qubits)

    def execute(
        self,
        circuit: QuantumCircuit,
        initial_state: Optional[Any] = None,
    ) -> Matrix:
        """
        Run ``circuit`` and return the final statevector.

        Custom instructions are inlined with their qubit indices rewritten, so
        the result equals running the flattened circuit.

        Raises:
            UnsupportedInstructionError: If the circuit holds an instruction
                type this backend cannot build a matrix for.
        """
        n_qubits = circuit.n_qubits
        state = self.initial_state(n_qubits, initial_state)

        logger.debug(
            "Executing circuit: n_qubits=%d, instructions=%d, method=%s",
            n_qubits,
            len(circuit),
            self.method,
        )

        for instruction in circuit.iter_primitive():
            if isinstance(instruction, Identity):
                continue
            logger.debug("Applying %r", instruction)
            state = self.apply(instruction, state, n_qubits)
            if is_debug_enabled():
                assert_normalized(state, atol=1e-8)

        return state


__all__ = [
    "METHODS",
    "StatevectorBackend",
    "zero_state",
    "instruction_matrix",
    "expand_single_qubit_gate",
    "expand_gate",
    "apply_gate",
    "measure_probs",
]
