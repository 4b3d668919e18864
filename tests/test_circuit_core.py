"""Tests for the QuantumCircuit engine."""

from __future__ import annotations

import math

import numpy as np
import pytest
import torch

import qkron as qk
from qkron.circuit import QuantumCircuit
from qkron.diagnostics import state_norm
from qkron.errors import (
    DuplicateStateError,
    EmptyInputError,
    InvalidLengthError,
    PreconditionViolation,
)

INV_SQRT2 = 1.0 / math.sqrt(2.0)


def assert_unit_norm(circuit: QuantumCircuit) -> None:
    assert torch.allclose(
        state_norm(circuit.state()), torch.tensor(1.0, dtype=torch.float64), atol=1e-12
    )


def all_gates(n_qubits: int):
    """Every gate variant on every valid placement in an n-qubit register."""
    singles = [qk.Identity, qk.PauliX, qk.PauliY, qk.PauliZ, qk.Hadamard, qk.PhaseS, qk.PhaseT]
    doubles = [qk.ControlledX, qk.ControlledY, qk.ControlledZ, qk.Swap]
    gates = [cls(q) for cls in singles for q in range(n_qubits)]
    gates += [
        cls(c, t)
        for cls in doubles
        for c in range(n_qubits)
        for t in range(n_qubits)
        if c != t
    ]
    return gates


class TestConstruction:
    """The three constructors."""

    def test_basis_index(self):
        circuit = QuantumCircuit(3, 6)
        assert circuit.num_qubits == 3
        assert circuit.num_states == 8
        expected = torch.zeros(8, dtype=torch.complex128)
        expected[6] = 1.0
        assert torch.equal(circuit.state(), expected)

    def test_default_initial_state_is_zero(self):
        assert QuantumCircuit(2).state()[0] == 1.0

    @pytest.mark.parametrize("n,index", [(0, 0), (-1, 0), (2, 4), (2, -1)])
    def test_basis_index_out_of_range(self, n, index):
        with pytest.raises(PreconditionViolation):
            QuantumCircuit(n, index)

    def test_from_basis_set_equal_superposition(self):
        circuit = QuantumCircuit.from_basis_set([0, 3])
        assert circuit.num_qubits == 2
        expected = torch.tensor([INV_SQRT2, 0, 0, INV_SQRT2], dtype=torch.complex128)
        assert torch.allclose(circuit.state(), expected, atol=1e-12)

    @pytest.mark.parametrize(
        "indices,num_qubits",
        [([0], 1), ([1], 1), ([2], 2), ([3, 1], 2), ([4], 3), ([7, 0], 3), ([8], 4)],
    )
    def test_from_basis_set_register_size(self, indices, num_qubits):
        """num_qubits = floor(log2(max_index)) + 1, with one qubit for [0]."""
        circuit = QuantumCircuit.from_basis_set(indices)
        assert circuit.num_qubits == num_qubits
        assert circuit.num_states == 2**num_qubits

    def test_from_basis_set_accepts_any_iterable(self):
        circuit = QuantumCircuit.from_basis_set(i for i in (1, 2))
        probs = circuit.probabilities()
        assert torch.allclose(probs, torch.tensor([0.0, 0.5, 0.5, 0.0], dtype=torch.float64))

    def test_from_basis_set_empty(self):
        with pytest.raises(EmptyInputError):
            QuantumCircuit.from_basis_set([])

    def test_from_basis_set_duplicates(self):
        with pytest.raises(DuplicateStateError, match=r"\[2\]"):
            QuantumCircuit.from_basis_set([2, 0, 2])

    def test_from_basis_set_negative(self):
        with pytest.raises(PreconditionViolation):
            QuantumCircuit.from_basis_set([-1, 1])

    @pytest.mark.parametrize("indices", [[1.7, 2.9], [1.0, 1], [True, 2], ["1"]])
    def test_from_basis_set_non_integer_indices(self, indices):
        with pytest.raises(PreconditionViolation, match="basis index must be an integer"):
            QuantumCircuit.from_basis_set(indices)

    def test_from_basis_set_numpy_and_tensor_indices(self):
        expected = QuantumCircuit.from_basis_set([1, 2]).state()
        from_numpy = QuantumCircuit.from_basis_set(np.array([1, 2], dtype=np.int64))
        from_tensor = QuantumCircuit.from_basis_set(torch.tensor([1, 2]))
        assert torch.equal(from_numpy.state(), expected)
        assert torch.equal(from_tensor.state(), expected)

    def test_from_basis_set_float_tensor_rejected(self):
        with pytest.raises(PreconditionViolation):
            QuantumCircuit.from_basis_set(torch.tensor([1.0, 2.0]))

    @pytest.mark.parametrize(
        "n,index,label",
        [(2.0, 0, "num_qubits"), (True, 0, "num_qubits"), (2, 1.5, "initial_state")],
    )
    def test_non_integer_register_arguments(self, n, index, label):
        with pytest.raises(PreconditionViolation, match=f"{label} must be an integer"):
            QuantumCircuit(n, index)

    def test_numpy_integer_register_arguments(self):
        circuit = QuantumCircuit(np.int64(2), np.int32(3))
        assert circuit.num_qubits == 2
        assert circuit.state()[3] == 1.0

    def test_from_amplitudes_normalizes(self):
        circuit = QuantumCircuit.from_amplitudes([3, 4j])
        assert circuit.num_qubits == 1
        assert torch.allclose(
            circuit.state(), torch.tensor([0.6, 0.8j], dtype=torch.complex128)
        )

    def test_from_amplitudes_numpy(self, random_state):
        vec = random_state(3) * 5.0
        circuit = QuantumCircuit.from_amplitudes(vec)
        assert circuit.num_qubits == 3
        np.testing.assert_allclose(circuit.state().numpy(), vec / 5.0, atol=1e-12)

    def test_from_amplitudes_tensor_is_copied(self):
        source = torch.tensor([1.0, 0.0], dtype=torch.complex128)
        circuit = QuantumCircuit.from_amplitudes(source)
        source[0] = 0.0
        source[1] = 1.0
        assert circuit.state()[0] == 1.0

    def test_from_amplitudes_single_entry(self):
        circuit = QuantumCircuit.from_amplitudes([2.0])
        assert circuit.num_qubits == 0
        assert circuit.num_states == 1
        assert circuit.state().tolist() == [1.0 + 0.0j]

    @pytest.mark.parametrize("bad", [[], [1, 0, 0], [1] * 6, [[1, 0], [0, 1]]])
    def test_from_amplitudes_invalid_length(self, bad):
        with pytest.raises(InvalidLengthError):
            QuantumCircuit.from_amplitudes(bad)

    def test_from_amplitudes_all_zero(self):
        with pytest.raises(PreconditionViolation, match="cannot normalize"):
            QuantumCircuit.from_amplitudes([0, 0, 0, 0])

    def test_unknown_strategy(self):
        with pytest.raises(PreconditionViolation, match="strategy"):
            QuantumCircuit(1, strategy="sparse")

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            QuantumCircuit.from_basis_set([])
        with pytest.raises(ValueError):
            QuantumCircuit.from_amplitudes([1, 2, 3])


class TestState:
    def test_state_is_a_snapshot(self):
        circuit = QuantumCircuit(1)
        snapshot = circuit.state()
        snapshot[0] = 0.0
        assert circuit.state()[0] == 1.0

    def test_properties(self):
        circuit = QuantumCircuit(2, device="sv_cpu", strategy="blocked")
        assert circuit.dtype == torch.complex128
        assert circuit.device.name == "sv_cpu"
        assert circuit.strategy == "blocked"
        assert "num_qubits=2" in repr(circuit)

    def test_complex64_device(self):
        dev = qk.Device("lowp", torch.device("cpu"), torch.float32, torch.complex64)
        circuit = QuantumCircuit(2, device=dev)
        circuit.apply_gate(qk.Hadamard(1))
        assert circuit.dtype == torch.complex64


class TestApplyGate:
    """Gate application on the full register."""

    def test_hadamard_on_single_qubit(self):
        circuit = QuantumCircuit(1, 0)
        circuit.apply_gate(qk.Hadamard(0))
        expected = torch.tensor([INV_SQRT2, INV_SQRT2], dtype=torch.complex128)
        assert torch.allclose(circuit.state(), expected, atol=1e-12)

    @pytest.mark.parametrize("strategy", ["dense", "blocked"])
    def test_entangled_pair_across_gap(self, strategy):
        """H(0) then CX(0, 2) on three qubits yields (|000> + |101>)/sqrt(2)."""
        circuit = QuantumCircuit(3, 0, strategy=strategy)
        circuit.apply_gate(qk.Hadamard(0))
        circuit.apply_gate(qk.ControlledX(0, 2))
        state = circuit.state()
        nonzero = torch.nonzero(state.abs() > 1e-12).flatten().tolist()
        assert nonzero == [0b000, 0b101]
        assert torch.allclose(state[[0, 5]].abs(), torch.full((2,), INV_SQRT2, dtype=torch.float64))
        assert_unit_norm(circuit)

    def test_pauli_x_flips_most_significant_bit_for_qubit_zero(self):
        circuit = QuantumCircuit(3, 0)
        circuit.apply_gate(qk.PauliX(0))
        assert circuit.state()[0b100] == 1.0

    def test_pauli_y_on_zero(self):
        circuit = QuantumCircuit(1, 0)
        circuit.apply_gate(qk.PauliY(0))
        assert torch.allclose(circuit.state(), torch.tensor([0, 1j], dtype=torch.complex128))

    def test_phase_gates_on_one(self):
        circuit = QuantumCircuit(1, 1)
        circuit.apply_gate(qk.PhaseS(0))
        assert torch.allclose(circuit.state(), torch.tensor([0, 1j], dtype=torch.complex128))
        circuit.apply_gate(qk.PhaseT(0))
        phase = complex(math.cos(3 * math.pi / 4), math.sin(3 * math.pi / 4))
        assert torch.allclose(circuit.state(), torch.tensor([0, phase], dtype=torch.complex128))

    def test_controlled_z_phase(self):
        circuit = QuantumCircuit.from_basis_set([0b11])
        circuit.apply_gate(qk.ControlledZ(1, 0))
        assert torch.allclose(circuit.state()[3], torch.tensor(-1.0, dtype=torch.complex128))

    def test_controlled_x_reversed_direction(self):
        """CX(2, 0) flips qubit 0 when qubit 2 (least significant) is set."""
        circuit = QuantumCircuit(3, 0b001)
        circuit.apply_gate(qk.ControlledX(2, 0))
        assert circuit.state()[0b101] == 1.0

    @pytest.mark.parametrize("q", range(3))
    def test_identity_leaves_state_unchanged(self, random_state, q):
        circuit = QuantumCircuit.from_amplitudes(random_state(3))
        before = circuit.state()
        circuit.apply_gate(qk.Identity(q))
        assert torch.allclose(circuit.state(), before, atol=1e-12)

    @pytest.mark.parametrize("gate_cls", [qk.PauliX, qk.Hadamard])
    @pytest.mark.parametrize("q", range(3))
    def test_self_inverse_single_qubit_gates(self, random_state, gate_cls, q):
        circuit = QuantumCircuit.from_amplitudes(random_state(3))
        before = circuit.state()
        circuit.apply_gate(gate_cls(q))
        circuit.apply_gate(gate_cls(q))
        assert torch.allclose(circuit.state(), before, atol=1e-12)

    @pytest.mark.parametrize(
        "control,target",
        [(c, t) for c in range(4) for t in range(4) if c != t],
    )
    def test_controlled_x_twice_is_identity(self, random_state, control, target):
        circuit = QuantumCircuit.from_amplitudes(random_state(4))
        before = circuit.state()
        circuit.apply_gate(qk.ControlledX(control, target))
        circuit.apply_gate(qk.ControlledX(control, target))
        assert torch.allclose(circuit.state(), before, atol=1e-12)

    @pytest.mark.parametrize(
        "index,a,b,expected",
        [
            (0b110, 0, 2, 0b011),
            (0b110, 2, 0, 0b011),
            (0b10, 0, 1, 0b01),
            (0b1001, 1, 3, 0b1100),
            (0b1011, 0, 1, 0b0111),
        ],
    )
    def test_swap_exchanges_bits(self, index, a, b, expected):
        circuit = QuantumCircuit.from_basis_set([index])
        circuit.apply_gate(qk.Swap(a, b))
        state = circuit.state()
        assert torch.allclose(state[expected], torch.tensor(1.0, dtype=torch.complex128))
        assert torch.allclose(state.abs().sum(), torch.tensor(1.0, dtype=torch.float64))

    def test_gate_outside_register(self):
        circuit = QuantumCircuit(2)
        with pytest.raises(PreconditionViolation, match="register has 2 qubits"):
            circuit.apply_gate(qk.PauliX(2))

    def test_two_qubit_gate_outside_register_leaves_state(self):
        circuit = QuantumCircuit(3, 1)
        with pytest.raises(PreconditionViolation):
            circuit.apply_gate(qk.ControlledX(0, 3))
        assert circuit.state()[1] == 1.0

    def test_norm_preserved_after_every_gate(self, random_state):
        circuit = QuantumCircuit.from_amplitudes(random_state(3))
        for gate in all_gates(3):
            circuit.apply_gate(gate)
            assert_unit_norm(circuit)

    def test_strategies_agree_on_long_sequence(self, random_state):
        amplitudes = random_state(4)
        dense = QuantumCircuit.from_amplitudes(amplitudes, strategy="dense")
        blocked = QuantumCircuit.from_amplitudes(amplitudes, strategy="blocked")
        gates = all_gates(4)
        dense.apply_gates(gates)
        blocked.apply_gates(gates)
        assert torch.allclose(dense.state(), blocked.state(), atol=1e-10)

    def test_matches_numpy_kron_reference(self, random_state):
        amplitudes = random_state(3)
        circuit = QuantumCircuit.from_amplitudes(amplitudes)
        circuit.apply_gate(qk.Hadamard(1))
        h = qk.gate_matrix(qk.Hadamard(1)).numpy()
        expected = np.kron(np.kron(np.eye(2), h), np.eye(2)) @ amplitudes
        np.testing.assert_allclose(circuit.state().numpy(), expected, atol=1e-12)

    def test_operator_for(self):
        circuit = QuantumCircuit(3)
        op = circuit.operator_for(qk.ControlledX(1, 2))
        assert op.shape == (8, 8)
        assert qk.is_unitary(op)
        with pytest.raises(PreconditionViolation):
            circuit.operator_for(qk.PauliZ(3))


class TestCopy:
    def test_copy_is_independent(self):
        circuit = QuantumCircuit(2)
        clone = circuit.copy()
        circuit.apply_gate(qk.PauliX(0))
        assert clone.state()[0] == 1.0
        assert circuit.state()[2] == 1.0
        assert clone.sampler is circuit.sampler
        assert clone.strategy == circuit.strategy
