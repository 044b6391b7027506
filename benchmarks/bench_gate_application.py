"""Benchmark circuit execution with the operator and contraction methods."""

import time
from typing import Dict

import qvector as qv


def _layered_circuit(n_qubits: int, n_layers: int) -> qv.QuantumCircuit:
    """Hadamard layer followed by a CNOT ladder, repeated."""
    circuit = qv.QuantumCircuit(n_qubits)
    for _ in range(n_layers):
        for q in range(n_qubits):
            circuit.add(qv.Hadamard(q))
        for q in range(n_qubits - 1):
            circuit.add(qv.ControlledNot(control=q, target=q + 1))
        circuit.add(qv.Swap(0, n_qubits - 1))
    return circuit


def benchmark_execution(
    n_qubits: int,
    n_layers: int = 5,
    method: str = "operator",
    device: str = "cpu",
) -> Dict[str, float]:
    """Time one execution of a layered circuit.

    Args:
        n_qubits: Number of qubits.
        n_layers: Number of H/CNOT/SWAP layers.
        method: Statevector method ("operator" or "contraction").
        device: Device name ('cpu' or 'cuda').

    Returns:
        Dictionary with timing results.
    """
    circuit = _layered_circuit(n_qubits, n_layers)
    backend = qv.StatevectorBackend(device=device, method=method)

    # Warmup
    backend.execute(_layered_circuit(n_qubits, 1))

    start = time.perf_counter()
    backend.execute(circuit)
    total_time = time.perf_counter() - start

    n_gates = len(circuit)
    return {
        "n_qubits": n_qubits,
        "n_gates": n_gates,
        "total_time_sec": total_time,
        "time_per_gate_sec": total_time / n_gates,
    }


if __name__ == "__main__":
    print("Benchmarking circuit execution...")

    for n_qubits in (4, 6, 8, 10):
        for method in qv.backend.METHODS:
            results = benchmark_execution(n_qubits=n_qubits, method=method)
            print(
                f"{n_qubits:2d} qubits, {method:<11s} "
                f"{results['time_per_gate_sec'] * 1e6:10.1f} μs/gate"
            )
