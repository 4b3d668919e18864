"""qkron - dense state-vector simulation of small qubit registers with PyTorch."""

__version__ = "0.1.0"

from .backend import (
    apply_blocked,
    apply_dense,
    basis_state,
    embed_operator,
    measure_probs,
    normalize,
)
from .circuit import QuantumCircuit
from .core import Device, default_device, device
from .diagnostics import (
    assert_normalized,
    debug_context,
    fidelity,
    is_debug_enabled,
    set_debug_enabled,
    state_norm,
)
from .errors import (
    DuplicateStateError,
    EmptyInputError,
    InvalidLengthError,
    PreconditionViolation,
    QkronError,
)
from .gates import (
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
    Swap,
    controlled_matrix,
    controlled_x_matrix,
    gate_matrix,
    is_unitary,
    permutation_matrix,
    swap_matrix,
)
from .logging import configure_logging, get_logger, set_log_level
from .sampling import Sampler, TorchSampler, counts_to_probs, format_bitstring, index_counts

__all__ = [
    "__version__",
    # Engine
    "QuantumCircuit",
    # Gates
    "Gate",
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
    "permutation_matrix",
    "controlled_x_matrix",
    "controlled_matrix",
    "swap_matrix",
    "is_unitary",
    # Backend
    "basis_state",
    "normalize",
    "embed_operator",
    "apply_dense",
    "apply_blocked",
    "measure_probs",
    # Sampling
    "Sampler",
    "TorchSampler",
    "index_counts",
    "counts_to_probs",
    "format_bitstring",
    # Errors
    "QkronError",
    "EmptyInputError",
    "DuplicateStateError",
    "InvalidLengthError",
    "PreconditionViolation",
    # Device
    "Device",
    "device",
    "default_device",
    # Diagnostics
    "state_norm",
    "assert_normalized",
    "fidelity",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
