"""Gate descriptors and gate matrices."""

from .catalog import (
    ControlledX,
    ControlledY,
    ControlledZ,
    Gate,
    Hadamard,
    Identity,
    PauliX,
    PauliY,
    PauliZ,
    PhaseS,
    PhaseT,
    SingleQubitGate,
    Swap,
    TwoQubitGate,
    gate_matrix,
)
from .standard import (
    H,
    I,
    S,
    T,
    X,
    Y,
    Z,
    controlled_matrix,
    controlled_x_matrix,
    is_unitary,
    permutation_matrix,
    swap_matrix,
)

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
    "I",
    "X",
    "Y",
    "Z",
    "H",
    "S",
    "T",
    "permutation_matrix",
    "controlled_x_matrix",
    "controlled_matrix",
    "swap_matrix",
    "is_unitary",
]
