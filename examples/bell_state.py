"""Bell and GHZ states: entangle qubits with Hadamard + CNOT chains.

Prints the circuit diagram, the final amplitudes and the basis-state
probabilities for both statevector methods.
"""

from __future__ import annotations

import qvector as qv


def ghz_circuit(n_qubits: int) -> qv.QuantumCircuit:
    """H on qubit 0, then a CNOT ladder down the register."""
    circuit = qv.QuantumCircuit(n_qubits).add(qv.Hadamard(0))
    for q in range(n_qubits - 1):
        circuit.add(qv.ControlledNot(control=q, target=q + 1))
    return circuit


def main() -> None:
    for n_qubits in (2, 3):
        circuit = ghz_circuit(n_qubits)
        print(f"{n_qubits}-qubit GHZ circuit:")
        print(circuit.to_text_diagram())

        for method in qv.backend.METHODS:
            state = qv.StatevectorBackend(method=method).execute(circuit)
            probs = qv.measure_probs(state)
            print(f"  method={method}")
            for index, p in enumerate(probs.tolist()):
                if p > 1e-12:
                    bits = format(index, f"0{n_qubits}b")
                    print(f"    |{bits}> amplitude {state.get(index, 0)}  p={p:.3f}")
        print()

    print("Bell state prepared successfully")


if __name__ == "__main__":
    main()
