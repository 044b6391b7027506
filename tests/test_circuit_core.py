"""Tests for the circuit model."""

from __future__ import annotations

import numpy as np
import pytest

from qvector.circuit import (
    ControlledNot,
    ControlledU,
    Custom,
    Fredkin,
    Hadamard,
    Identity,
    PauliX,
    PauliZ,
    Phase,
    QuantumCircuit,
    RotationY,
    Swap,
    T,
    Toffoli,
    validate_instruction,
)
from qvector.errors import InvalidQubitIndexError, QVectorError
from qvector.gates import X


def _bell_pair() -> QuantumCircuit:
    return QuantumCircuit(2).add(Hadamard(0)).add(ControlledNot(control=0, target=1))


class TestConstruction:
    def test_requires_at_least_one_qubit(self):
        with pytest.raises(ValueError):
            QuantumCircuit(0)

    def test_add_appends_in_order(self):
        circuit = _bell_pair()
        assert circuit.n_qubits == 2
        assert len(circuit) == 2
        assert circuit.instructions == (Hadamard(0), ControlledNot(0, 1))
        assert list(circuit) == list(circuit.instructions)

    def test_add_returns_circuit(self):
        circuit = QuantumCircuit(1)
        assert circuit.add(PauliX(0)) is circuit

    def test_extend(self):
        circuit = QuantumCircuit(3).extend([Hadamard(0), Toffoli(0, 1, 2)])
        assert len(circuit) == 2

    def test_instructions_snapshot_is_immutable(self):
        circuit = _bell_pair()
        snapshot = circuit.instructions
        circuit.add(PauliZ(1))
        assert len(snapshot) == 2
        assert isinstance(snapshot, tuple)

    def test_copy_is_independent(self):
        circuit = _bell_pair()
        clone = circuit.copy()
        clone.add(PauliX(0))
        assert len(circuit) == 2
        assert len(clone) == 3
        assert clone != circuit
        assert circuit.copy() == circuit


class TestValidation:
    @pytest.mark.parametrize(
        "instruction",
        [
            PauliX(2),
            PauliX(-1),
            ControlledNot(control=0, target=5),
            Swap(3, 0),
            Toffoli(0, 1, 2),
            Fredkin(2, 0, 1),
            Phase(4, 0.5),
        ],
    )
    def test_out_of_range_rejected(self, instruction):
        circuit = QuantumCircuit(2)
        with pytest.raises(InvalidQubitIndexError):
            circuit.add(instruction)

    def test_rejection_leaves_circuit_unchanged(self):
        circuit = _bell_pair()
        before = circuit.instructions
        with pytest.raises(InvalidQubitIndexError):
            circuit.add(PauliX(7))
        assert circuit.instructions == before

    def test_error_details(self):
        circuit = QuantumCircuit(2)
        bad = ControlledNot(control=0, target=3)
        with pytest.raises(InvalidQubitIndexError) as excinfo:
            circuit.add(bad)
        err = excinfo.value
        assert err.instruction == bad
        assert err.qubit == 3
        assert err.n_qubits == 2
        assert err.gate_chain == ()
        assert "out of range" in str(err)

    def test_error_hierarchy(self):
        circuit = QuantumCircuit(1)
        with pytest.raises(QVectorError):
            circuit.add(PauliX(1))
        with pytest.raises(ValueError):
            circuit.add(PauliX(1))

    def test_duplicate_operands_rejected(self):
        circuit = QuantumCircuit(3)
        with pytest.raises(InvalidQubitIndexError, match="more than once"):
            circuit.add(ControlledNot(control=1, target=1))
        with pytest.raises(InvalidQubitIndexError):
            circuit.add(Toffoli(0, 2, 0))
        assert len(circuit) == 0

    @pytest.mark.parametrize(
        "instruction",
        [
            PauliX(1.7),
            ControlledNot(control=0, target=1.5),
            Swap(0.0, 1),
            Toffoli(0, 1, "2"),
            Fredkin(True, 0, 1),
        ],
    )
    def test_non_integer_operand_rejected(self, instruction):
        circuit = QuantumCircuit(3).add(PauliX(0))
        with pytest.raises(InvalidQubitIndexError, match="not an integer"):
            circuit.add(instruction)
        assert circuit.instructions == (PauliX(0),)

    def test_fractional_operand_kept_as_given(self):
        assert PauliX(1.7).qubit == 1.7
        assert ControlledNot(0, 1.5).qubits == (0, 1.5)

    def test_integer_like_operands_normalized(self):
        instruction = ControlledNot(np.int64(0), np.int64(1))
        assert instruction.qubits == (0, 1)
        assert all(type(q) is int for q in instruction.qubits)
        QuantumCircuit(2).add(instruction)

    def test_non_instruction_rejected(self):
        with pytest.raises(TypeError):
            QuantumCircuit(1).add("H")  # type: ignore[arg-type]

    def test_extend_stops_at_first_invalid(self):
        circuit = QuantumCircuit(2)
        with pytest.raises(InvalidQubitIndexError):
            circuit.extend([Hadamard(0), PauliX(9), Hadamard(1)])
        assert circuit.instructions == (Hadamard(0),)

    def test_validate_instruction_directly(self):
        validate_instruction(Swap(0, 1), 2)
        with pytest.raises(InvalidQubitIndexError):
            validate_instruction(Swap(0, 2), 2)


class TestCustomGates:
    def test_custom_accepted(self):
        inner = _bell_pair()
        outer = QuantumCircuit(4).add(Custom("bell", inner, (3, 1)))
        assert len(outer) == 1

    def test_custom_input_qubit_out_of_range(self):
        inner = _bell_pair()
        with pytest.raises(InvalidQubitIndexError) as excinfo:
            QuantumCircuit(2).add(Custom("bell", inner, (0, 2)))
        assert excinfo.value.gate_chain == ()
        assert excinfo.value.qubit == 2

    def test_custom_arity_mismatch(self):
        inner = _bell_pair()
        with pytest.raises(InvalidQubitIndexError, match="wires 3 qubits"):
            QuantumCircuit(3).add(Custom("bell", inner, (0, 1, 2)))

    def test_custom_fractional_input_rejected(self):
        with pytest.raises(InvalidQubitIndexError, match="not an integer"):
            QuantumCircuit(3).add(Custom("bell", _bell_pair(), (0, 1.5)))

    def test_custom_duplicate_inputs(self):
        with pytest.raises(InvalidQubitIndexError):
            QuantumCircuit(3).add(Custom("bell", _bell_pair(), (1, 1)))

    def test_nested_error_reports_gate_chain(self):
        # Bypass add() so the innermost circuit holds an invalid instruction.
        inner = QuantumCircuit(1)
        inner._instructions.append(PauliX(1))
        middle = QuantumCircuit(2)
        middle._instructions.append(Custom("inner", inner, (1,)))
        outer = QuantumCircuit(3)
        with pytest.raises(InvalidQubitIndexError) as excinfo:
            outer.add(Custom("middle", middle, (0, 2)))
        err = excinfo.value
        assert err.gate_chain == ("middle", "inner")
        assert err.instruction == PauliX(1)
        assert err.n_qubits == 1
        assert "middle -> inner" in str(err)
        assert len(outer) == 0

    def test_custom_snapshots_circuit(self):
        inner = QuantumCircuit(1).add(PauliX(0))
        gate = Custom("x", inner, (0,))
        inner.add(PauliZ(0))
        assert len(gate.circuit) == 1

    def test_iter_primitive_remaps_indices(self):
        inner = QuantumCircuit(2).add(Hadamard(0)).add(ControlledNot(0, 1))
        outer = QuantumCircuit(3).add(PauliX(0)).add(Custom("bell", inner, (2, 0)))
        assert list(outer.iter_primitive()) == [
            PauliX(0),
            Hadamard(2),
            ControlledNot(control=2, target=0),
        ]

    def test_nested_inline(self):
        leaf = QuantumCircuit(2).add(Swap(0, 1))
        mid = QuantumCircuit(3).add(Custom("swap", leaf, (2, 0))).add(T(1))
        top = QuantumCircuit(4).add(Custom("mid", mid, (3, 2, 1)))
        flat = top.flatten()
        assert flat.instructions == (Swap(1, 3), T(2))
        assert flat.n_qubits == 4

    def test_controlled_u_requires_2x2(self):
        from qvector.core.matrix import Matrix

        with pytest.raises(ValueError):
            ControlledU(gate=Matrix.identity(4), control=0, target=1)


class TestAnalysis:
    def test_gate_counts(self):
        inner = _bell_pair()
        circuit = (
            QuantumCircuit(3)
            .add(Hadamard(0))
            .add(Hadamard(1))
            .add(ControlledNot(0, 2))
            .add(Custom("bell", inner, (1, 2)))
        )
        assert circuit.gate_counts() == {
            "Hadamard": 2,
            "ControlledNot": 1,
            "bell": 1,
        }

    def test_depth(self):
        circuit = QuantumCircuit(2)
        assert circuit.depth() == 0
        circuit.add(Hadamard(0)).add(Hadamard(1))
        assert circuit.depth() == 1
        circuit.add(ControlledNot(0, 1))
        assert circuit.depth() == 2
        circuit.add(PauliX(0))
        assert circuit.depth() == 3

    def test_text_diagram(self):
        circuit = _bell_pair().add(ControlledU(gate=X(), control=1, target=0))
        diagram = circuit.to_text_diagram()
        lines = diagram.splitlines()
        assert lines[0].startswith("q0: ")
        assert lines[1].startswith("q1: ")
        assert "H" in lines[0]
        assert "●" in lines[0] and "⊕" in lines[1]
        assert "U" in lines[0] and "●" in lines[1]
        assert len(lines[0]) == len(lines[1])

    def test_text_diagram_custom_uses_name(self):
        circuit = QuantumCircuit(2).add(Custom("bell", _bell_pair(), (0, 1)))
        diagram = circuit.to_text_diagram()
        assert diagram.count("b") == 2

    def test_tags_and_labels(self):
        assert Hadamard(0).tag == "Hadamard"
        assert RotationY(0, 0.1).label == "RY"
        assert Identity(0).label == "I"
        assert Custom("adder", _bell_pair(), (0, 1)).tag == "adder"

    def test_parametric_phase_coerced(self):
        assert Phase(0, 1).phase == 1.0
        assert isinstance(Phase(0, 1).phase, float)

    def test_instructions_hashable(self):
        assert len({PauliX(0), PauliX(0), PauliX(1)}) == 2
        assert hash(ControlledU(gate=X(), control=0, target=1)) is not None
