"""Entangle the two outer qubits of a 3-qubit register.

Hadamard on qubit 0 followed by a controlled-X from qubit 0 to qubit 2 gives
(|000> + |101>) / sqrt(2); the middle qubit never changes.
"""

from __future__ import annotations

import qkron as qk


def main() -> None:
    circuit = qk.QuantumCircuit(3, sampler=qk.TorchSampler.seeded(0))
    circuit.apply_gates([qk.Hadamard(0), qk.ControlledX(0, 2)])

    print("Amplitudes:")
    for index, amplitude in enumerate(circuit.state().tolist()):
        if abs(amplitude) > 1e-12:
            bits = qk.format_bitstring(index, circuit.num_qubits)
            print(f"  |{bits}>  {amplitude.real:+.4f}{amplitude.imag:+.4f}j")

    print("\nMeasurement counts (1000 shots):")
    for index, count in circuit.sample_counts(1000).items():
        print(f"  {qk.format_bitstring(index, circuit.num_qubits)}: {count}")

    outcome = circuit.measure()
    print(f"\nCollapsed onto |{qk.format_bitstring(outcome, circuit.num_qubits)}>")


if __name__ == "__main__":
    main()
