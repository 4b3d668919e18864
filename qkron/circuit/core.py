"""The circuit engine: a register state evolved gate by gate."""

from __future__ import annotations

import numbers
from typing import Dict, Iterable, Optional, Sequence

import numpy as np
import torch

from qkron.backend.statevector import (
    apply_blocked,
    apply_dense,
    basis_state,
    embed_operator,
    measure_probs,
    normalize,
)
from qkron.core.device import Device, resolve_device
from qkron.diagnostics import assert_normalized, is_debug_enabled
from qkron.errors import (
    DuplicateStateError,
    EmptyInputError,
    InvalidLengthError,
    PreconditionViolation,
)
from qkron.gates.catalog import Gate, gate_matrix
from qkron.gates.standard import is_unitary
from qkron.logging import get_logger
from qkron.sampling.hist import index_counts
from qkron.sampling.sampler import Sampler, TorchSampler, normalize_probs, sample_index

logger = get_logger(__name__)

STRATEGIES = ("dense", "blocked")

_APPLY = {
    "dense": apply_dense,
    "blocked": apply_blocked,
}


def _check_integer(label: str, value: object) -> int:
    # bool is Integral but never a count or basis index
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise PreconditionViolation(
            f"{label} must be an integer, got {type(value).__name__} {value!r}"
        )
    return int(value)


class QuantumCircuit:
    """
    A register of ``num_qubits`` qubits held as a dense amplitude vector.

    The state always has unit L2 norm. Gates are applied in place with
    :meth:`apply_gate`; :meth:`measure` samples a basis index and collapses
    the state onto it. Qubit 0 is the most significant bit of a basis index.

    A circuit must not be mutated from several threads at once; independent
    circuits share nothing.

    Parameters
    ----------
    num_qubits:
        Register size, at least 1.
    initial_state:
        Basis index the register starts in.
    device:
        Device, device name, torch.device, or None for the default device.
    sampler:
        Randomness used by :meth:`measure`. Defaults to a
        :class:`~qkron.sampling.TorchSampler` on torch's global generator.
    strategy:
        ``"dense"`` multiplies the fully embedded operator; ``"blocked"``
        transforms only the gate's block of the state. Both give the same
        states.
    """

    def __init__(
        self,
        num_qubits: int,
        initial_state: int = 0,
        *,
        device: Device | torch.device | str | None = None,
        sampler: Optional[Sampler] = None,
        strategy: str = "dense",
    ) -> None:
        num_qubits = _check_integer("num_qubits", num_qubits)
        initial_state = _check_integer("initial_state", initial_state)
        if num_qubits < 1:
            raise PreconditionViolation(
                f"QuantumCircuit requires num_qubits >= 1, got {num_qubits}"
            )
        qdevice = resolve_device(device)
        state = basis_state(num_qubits, initial_state, device=qdevice)
        self._setup(state, num_qubits, qdevice, sampler, strategy)
        logger.debug("new %d-qubit register in basis state %d", num_qubits, initial_state)

    def _setup(
        self,
        state: torch.Tensor,
        num_qubits: int,
        qdevice: Device,
        sampler: Optional[Sampler],
        strategy: str,
    ) -> None:
        if strategy not in STRATEGIES:
            raise PreconditionViolation(
                f"unknown strategy {strategy!r}; expected one of {STRATEGIES}"
            )
        self._num_qubits = num_qubits
        self._num_states = 1 << num_qubits
        self._device = qdevice
        self._sampler: Sampler = sampler if sampler is not None else TorchSampler()
        self._strategy = strategy
        self._set_state(state)

    @classmethod
    def _from_vector(
        cls,
        state: torch.Tensor,
        num_qubits: int,
        qdevice: Device,
        sampler: Optional[Sampler],
        strategy: str,
    ) -> "QuantumCircuit":
        circuit = cls.__new__(cls)
        circuit._setup(state, num_qubits, qdevice, sampler, strategy)
        return circuit

    @classmethod
    def from_basis_set(
        cls,
        indices: Iterable[int],
        *,
        device: Device | torch.device | str | None = None,
        sampler: Optional[Sampler] = None,
        strategy: str = "dense",
    ) -> "QuantumCircuit":
        """
        Equal real superposition of the given basis states.

        The register is just large enough to hold the largest index:
        ``num_qubits = floor(log2(max_index)) + 1`` (one qubit for ``[0]``).

        Raises
        ------
        EmptyInputError
            If ``indices`` is empty.
        DuplicateStateError
            If an index appears more than once.
        PreconditionViolation
            If an index is negative or not an integer.
        """
        if isinstance(indices, torch.Tensor):
            indices = indices.tolist()
        index_list = [_check_integer("basis index", i) for i in indices]
        if not index_list:
            raise EmptyInputError("from_basis_set requires at least one basis index")
        if len(set(index_list)) != len(index_list):
            repeated = sorted({i for i in index_list if index_list.count(i) > 1})
            raise DuplicateStateError(f"basis indices repeated: {repeated}")
        if min(index_list) < 0:
            raise PreconditionViolation(
                f"basis indices must be non-negative, got {min(index_list)}"
            )

        num_qubits = max(max(index_list).bit_length(), 1)
        qdevice = resolve_device(device)
        state = torch.zeros(
            1 << num_qubits,
            dtype=qdevice.complex_dtype,
            device=qdevice.as_torch_device(),
        )
        state[index_list] = 1.0
        logger.debug(
            "new %d-qubit register over %d basis states", num_qubits, len(index_list)
        )
        return cls._from_vector(state, num_qubits, qdevice, sampler, strategy)

    @classmethod
    def from_amplitudes(
        cls,
        amplitudes: Sequence[complex] | np.ndarray | torch.Tensor,
        *,
        device: Device | torch.device | str | None = None,
        sampler: Optional[Sampler] = None,
        strategy: str = "dense",
    ) -> "QuantumCircuit":
        """
        Register with the given amplitudes, normalized on ingestion.

        Raises
        ------
        InvalidLengthError
            If the vector is not 1-D, is empty, or its length is not a power
            of two.
        PreconditionViolation
            If every amplitude is zero.
        """
        qdevice = resolve_device(device)
        if isinstance(amplitudes, torch.Tensor):
            vector = amplitudes.detach().clone()
        else:
            vector = torch.as_tensor(np.asarray(amplitudes, dtype=np.complex128))
        vector = vector.to(dtype=qdevice.complex_dtype, device=qdevice.as_torch_device())

        if vector.dim() != 1:
            raise InvalidLengthError(
                f"amplitudes must be one-dimensional, got shape {tuple(vector.shape)}"
            )
        length = vector.shape[0]
        if length == 0 or length & (length - 1) != 0:
            raise InvalidLengthError(
                f"amplitude vector length must be a non-zero power of two, got {length}"
            )

        num_qubits = length.bit_length() - 1
        logger.debug("new %d-qubit register from %d amplitudes", num_qubits, length)
        return cls._from_vector(vector, num_qubits, qdevice, sampler, strategy)

    @property
    def num_qubits(self) -> int:
        """Number of qubits in the register."""
        return self._num_qubits

    @property
    def num_states(self) -> int:
        """Length of the state vector, ``2**num_qubits``."""
        return self._num_states

    @property
    def device(self) -> Device:
        return self._device

    @property
    def dtype(self) -> torch.dtype:
        return self._state.dtype

    @property
    def strategy(self) -> str:
        return self._strategy

    @property
    def sampler(self) -> Sampler:
        return self._sampler

    def state(self) -> torch.Tensor:
        """Return a copy of the amplitude vector."""
        return self._state.detach().clone()

    def probabilities(self) -> torch.Tensor:
        """Born-rule distribution over basis indices, summing to 1."""
        return normalize_probs(measure_probs(self._state))

    def _set_state(self, state: torch.Tensor) -> None:
        state = normalize(state)
        if is_debug_enabled():
            assert_normalized(state)
        self._state = state

    def _check_fits(self, gate: Gate) -> None:
        if gate.position + gate.span > self._num_qubits:
            raise PreconditionViolation(
                f"{gate!r} touches qubit {gate.position + gate.span - 1} but the "
                f"register has {self._num_qubits} qubits"
            )

    def operator_for(self, gate: Gate) -> torch.Tensor:
        """Return the full ``num_states x num_states`` operator of ``gate``."""
        self._check_fits(gate)
        local = gate_matrix(gate, dtype=self.dtype, device=self._state.device)
        return embed_operator(local, gate.position, self._num_qubits)

    def apply_gate(self, gate: Gate) -> None:
        """
        Apply ``gate`` to the register in place and renormalize.

        Raises
        ------
        PreconditionViolation
            If the gate touches a qubit outside the register.
        """
        self._check_fits(gate)
        local = gate_matrix(gate, dtype=self.dtype, device=self._state.device)
        if is_debug_enabled() and not is_unitary(local):
            raise PreconditionViolation(f"matrix for {gate!r} is not unitary")

        apply = _APPLY[self._strategy]
        new_state = apply(self._state, local, gate.position, self._num_qubits)
        self._set_state(new_state)
        logger.debug("applied %r (span=%d)", gate, gate.span)

    def apply_gates(self, gates: Iterable[Gate]) -> None:
        """Apply each gate in order."""
        for gate in gates:
            self.apply_gate(gate)

    def measure(self) -> int:
        """
        Measure every qubit in the computational basis.

        Draws a basis index with probability ``|amplitude|**2``, collapses the
        state onto it, and returns it.
        """
        index = sample_index(measure_probs(self._state), self._sampler)
        self._set_state(
            basis_state(self._num_qubits, index, device=self._device, dtype=self.dtype)
        )
        logger.debug("measured basis state %d", index)
        return index

    def sample_counts(self, n_shots: int) -> Dict[int, int]:
        """
        Draw ``n_shots`` outcomes from the current distribution without
        collapsing the state.

        Returns
        -------
        Dict[int, int]
            Outcome counts keyed by basis index.
        """
        if n_shots <= 0:
            raise PreconditionViolation(f"n_shots must be positive, got {n_shots}")
        probs = self.probabilities()
        draws = [sample_index(probs, self._sampler) for _ in range(n_shots)]
        return index_counts(draws)

    def copy(self) -> "QuantumCircuit":
        """Return an independent circuit with the same state and sampler."""
        return type(self)._from_vector(
            self._state.clone(),
            self._num_qubits,
            self._device,
            self._sampler,
            self._strategy,
        )

    def __repr__(self) -> str:
        return (
            f"QuantumCircuit(num_qubits={self._num_qubits}, "
            f"device={self._device.name!r}, strategy={self._strategy!r})"
        )

