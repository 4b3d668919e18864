"""Gate descriptors and the catalog that turns them into matrices.

A gate value records *which* gate acts *where*. It never holds a matrix;
:func:`gate_matrix` synthesizes one on demand over the gate's span.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Dict, Tuple, Type

import torch

from qkron.errors import PreconditionViolation
from qkron.gates import standard as stdgates


def _check_index(label: str, value: object) -> None:
    # bool is an int subclass but never a qubit index
    if isinstance(value, bool) or not isinstance(value, int):
        raise PreconditionViolation(
            f"{label} must be an int, got {type(value).__name__}"
        )
    if value < 0:
        raise PreconditionViolation(f"{label} must be non-negative, got {value}")


@dataclass(frozen=True)
class Gate:
    """Base class for all gate descriptors."""

    name: ClassVar[str] = "?"

    @property
    def qubits(self) -> Tuple[int, ...]:
        """Touched qubit indices, control first for two-qubit gates."""
        raise NotImplementedError

    @property
    def span(self) -> int:
        """Number of contiguous qubits the gate matrix acts over."""
        raise NotImplementedError

    @property
    def position(self) -> int:
        """Lowest touched qubit index, where the embedded block begins."""
        raise NotImplementedError

    def matrix(
        self,
        dtype: torch.dtype | None = None,
        device: torch.device | None = None,
    ) -> torch.Tensor:
        """Return this gate's ``(2**span, 2**span)`` unitary."""
        return gate_matrix(self, dtype=dtype, device=device)


@dataclass(frozen=True)
class SingleQubitGate(Gate):
    """A gate acting on one qubit."""

    qubit: int

    def __post_init__(self) -> None:
        _check_index("qubit", self.qubit)

    @property
    def qubits(self) -> Tuple[int, ...]:
        return (self.qubit,)

    @property
    def span(self) -> int:
        return 1

    @property
    def position(self) -> int:
        return self.qubit


@dataclass(frozen=True)
class TwoQubitGate(Gate):
    """
    A gate with a control and a target qubit.

    The pair may be given in either order and need not be adjacent; the
    matrix covers every qubit from ``min(control, target)`` to
    ``max(control, target)``.
    """

    control: int
    target: int

    def __post_init__(self) -> None:
        _check_index("control", self.control)
        _check_index("target", self.target)
        if self.control == self.target:
            raise PreconditionViolation(
                f"{type(self).__name__} requires control != target, "
                f"got {self.control} for both"
            )

    @property
    def qubits(self) -> Tuple[int, ...]:
        return (self.control, self.target)

    @property
    def span(self) -> int:
        return abs(self.control - self.target) + 1

    @property
    def position(self) -> int:
        return min(self.control, self.target)


@dataclass(frozen=True)
class Identity(SingleQubitGate):
    name: ClassVar[str] = "I"


@dataclass(frozen=True)
class PauliX(SingleQubitGate):
    name: ClassVar[str] = "X"


@dataclass(frozen=True)
class PauliY(SingleQubitGate):
    name: ClassVar[str] = "Y"


@dataclass(frozen=True)
class PauliZ(SingleQubitGate):
    name: ClassVar[str] = "Z"


@dataclass(frozen=True)
class Hadamard(SingleQubitGate):
    name: ClassVar[str] = "H"


@dataclass(frozen=True)
class PhaseS(SingleQubitGate):
    name: ClassVar[str] = "S"


@dataclass(frozen=True)
class PhaseT(SingleQubitGate):
    name: ClassVar[str] = "T"


@dataclass(frozen=True)
class ControlledX(TwoQubitGate):
    name: ClassVar[str] = "CX"


@dataclass(frozen=True)
class ControlledY(TwoQubitGate):
    name: ClassVar[str] = "CY"


@dataclass(frozen=True)
class ControlledZ(TwoQubitGate):
    name: ClassVar[str] = "CZ"


@dataclass(frozen=True)
class Swap(TwoQubitGate):
    """Exchange the states of two qubits. Symmetric in its arguments."""

    name: ClassVar[str] = "SWAP"


_SingleBuilder = Callable[..., torch.Tensor]

_SINGLE_QUBIT: Dict[Type[SingleQubitGate], _SingleBuilder] = {
    Identity: stdgates.I,
    PauliX: stdgates.X,
    PauliY: stdgates.Y,
    PauliZ: stdgates.Z,
    Hadamard: stdgates.H,
    PhaseS: stdgates.S,
    PhaseT: stdgates.T,
}

_CONTROLLED_TARGET: Dict[Type[TwoQubitGate], _SingleBuilder] = {
    ControlledY: stdgates.Y,
    ControlledZ: stdgates.Z,
}


def gate_matrix(
    gate: Gate,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Return the unitary of ``gate`` over its span.

    Single-qubit gates give a fixed (2, 2) matrix regardless of which qubit
    they name. Two-qubit gates give a (2**span, 2**span) matrix whose
    most-significant block bit is qubit ``gate.position``.

    Args:
        gate: Gate descriptor.
        dtype: Complex dtype. Defaults to torch.complex128.
        device: PyTorch device. Defaults to CPU.

    Returns:
        Complex tensor of shape ``(2**gate.span, 2**gate.span)``.

    Raises:
        TypeError: If ``gate`` is not a known gate descriptor.
    """
    kind = type(gate)
    if kind in _SINGLE_QUBIT:
        return _SINGLE_QUBIT[kind](dtype=dtype, device=device)
    if kind is ControlledX:
        return stdgates.controlled_x_matrix(
            gate.control, gate.target, dtype=dtype, device=device
        )
    if kind is Swap:
        return stdgates.swap_matrix(gate.control, gate.target, dtype=dtype, device=device)
    if kind in _CONTROLLED_TARGET:
        unitary = _CONTROLLED_TARGET[kind](dtype=dtype, device=device)
        return stdgates.controlled_matrix(
            gate.control, gate.target, unitary, dtype=dtype, device=device
        )
    raise TypeError(f"Unsupported gate type {kind.__name__}")


__all__ = [
    "Gate",
    "SingleQubitGate",
    "TwoQubitGate",
    "Identity",
    "PauliX",
    "PauliY",
    "PauliZ",
    "Hadamard",
    "PhaseS",
    "PhaseT",
    "ControlledX",
    "ControlledY",
    "ControlledZ",
    "Swap",
    "gate_matrix",
]
