"""Print the local matrix of every catalog gate.

Two-qubit gates are shown both on adjacent qubits and across a gap, where the
block grows to cover the qubits in between.
"""

from __future__ import annotations

import torch

import qkron as qk


def show(gate: qk.Gate) -> None:
    matrix = gate.matrix()
    label = f"{gate.name}({', '.join(str(q) for q in gate.qubits)})"
    print(f"{label}  span={gate.span}  shape={tuple(matrix.shape)}")
    print(matrix.real if not torch.any(matrix.imag) else matrix)
    print()


def main() -> None:
    torch.set_printoptions(precision=3, sci_mode=False)

    for cls in (qk.Identity, qk.PauliX, qk.PauliY, qk.PauliZ, qk.Hadamard, qk.PhaseS, qk.PhaseT):
        show(cls(0))

    for gate in (
        qk.ControlledX(0, 1),
        qk.ControlledX(1, 0),
        qk.ControlledX(0, 2),
        qk.ControlledZ(0, 1),
        qk.Swap(0, 1),
        qk.Swap(0, 2),
    ):
        show(gate)


if __name__ == "__main__":
    main()
