"""Benchmark dense versus blocked gate application."""

import argparse
import time
from typing import Dict, List

import qkron as qk
from qkron.circuit import QuantumCircuit


def _layer(n_qubits: int) -> List[qk.Gate]:
    """One Hadamard per qubit followed by a controlled-X chain and an end swap."""
    gates: List[qk.Gate] = [qk.Hadamard(q) for q in range(n_qubits)]
    gates += [qk.ControlledX(q, q + 1) for q in range(n_qubits - 1)]
    if n_qubits > 1:
        gates.append(qk.Swap(0, n_qubits - 1))
    return gates


def benchmark_apply_gate(
    n_qubits: int,
    strategy: str,
    repeats: int = 5,
) -> Dict[str, float]:
    """Time ``repeats`` passes of a fixed gate layer.

    Args:
        n_qubits: Register size.
        strategy: ``"dense"`` or ``"blocked"``.
        repeats: Number of passes over the layer.

    Returns:
        Dictionary with timing results.
    """
    gates = _layer(n_qubits)
    circuit = QuantumCircuit(n_qubits, strategy=strategy)

    # Warmup
    circuit.apply_gate(gates[0])

    start = time.perf_counter()
    for _ in range(repeats):
        circuit.apply_gates(gates)
    end = time.perf_counter()

    total_time = end - start
    n_gates = repeats * len(gates)
    return {
        "n_qubits": n_qubits,
        "n_gates": n_gates,
        "total_time_sec": total_time,
        "time_per_gate_sec": total_time / n_gates,
    }


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--max-qubits", type=int, default=10)
    parser.add_argument("--repeats", type=int, default=5)
    args = parser.parse_args()

    print("Benchmarking gate application...")
    for n in range(2, args.max_qubits + 1, 2):
        for strategy in qk.circuit.STRATEGIES:
            results = benchmark_apply_gate(n, strategy, repeats=args.repeats)
            print(
                f"{n:2d} qubits  {strategy:7s}  "
                f"{results['time_per_gate_sec'] * 1e6:10.2f} us/gate"
            )
