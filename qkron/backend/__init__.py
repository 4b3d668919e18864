"""Statevector backend operations."""

from .statevector import (
    apply_blocked,
    apply_dense,
    basis_state,
    dense_warn_qubits,
    embed_operator,
    measure_probs,
    normalize,
)

__all__ = [
    "basis_state",
    "normalize",
    "embed_operator",
    "apply_dense",
    "apply_blocked",
    "measure_probs",
    "dense_warn_qubits",
]
