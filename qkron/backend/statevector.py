"""Dense statevector backend.

States are complex vectors of length ``2**n_qubits``. Qubit 0 is the most
significant bit of a basis index, so the Kronecker factor for qubit 0 comes
first when an operator is embedded.

Two ways to apply a local gate matrix are provided:

- :func:`apply_dense` builds the full ``2**n x 2**n`` operator with
  :func:`embed_operator` and multiplies it onto the state.
- :func:`apply_blocked` reshapes the state to ``(left, block, right)`` and
  contracts only the block axis with ``einsum``.

Both give the same result; the blocked path never materializes the full
operator.
"""

from __future__ import annotations

import math
import os

import torch

from qkron.core.device import Device, resolve_device
from qkron.diagnostics import assert_normalized, is_debug_enabled
from qkron.errors import PreconditionViolation
from qkron.logging import get_logger

logger = get_logger(__name__)

DENSE_WARN_ENV_VAR = "QKRON_DENSE_WARN_QUBITS"


def dense_warn_qubits() -> int:
    """Register size above which building a dense operator logs a warning."""
    return int(os.getenv(DENSE_WARN_ENV_VAR, "12"))


def _check_block(position: int, span: int, n_qubits: int) -> None:
    if position < 0 or span < 1 or position + span > n_qubits:
        raise PreconditionViolation(
            f"gate block [{position}, {position + span}) does not fit in a "
            f"{n_qubits}-qubit register"
        )


def basis_state(
    n_qubits: int,
    index: int = 0,
    device: Device | torch.device | str | None = None,
    dtype: torch.dtype | None = None,
) -> torch.Tensor:
    """
    Return the computational basis state ``|index>`` on ``n_qubits`` qubits.

    Args:
        n_qubits: Number of qubits. Must be >= 0.
        index: Basis index in ``[0, 2**n_qubits)``.
        device: Device specification. Can be Device, str, torch.device, or None.
        dtype: Complex dtype. Defaults to the device's complex dtype.

    Returns:
        Complex tensor of shape ``(2**n_qubits,)``.

    Raises:
        PreconditionViolation: If ``n_qubits`` is negative or ``index`` is out
            of range.
    """
    if n_qubits < 0:
        raise PreconditionViolation(f"n_qubits must be >= 0, got {n_qubits}")
    dim = 1 << n_qubits
    if not 0 <= index < dim:
        raise PreconditionViolation(
            f"basis index {index} out of range [0, {dim}) for {n_qubits} qubits"
        )

    qdevice = resolve_device(device)
    if dtype is None:
        dtype = qdevice.complex_dtype

    state = torch.zeros(dim, dtype=dtype, device=qdevice.as_torch_device())
    state[index] = 1.0
    return state


def normalize(state: torch.Tensor) -> torch.Tensor:
    """
    Scale ``state`` to unit L2 norm.

    Raises:
        PreconditionViolation: If the norm is zero or not finite.
    """
    norm = torch.linalg.vector_norm(state)
    if not torch.isfinite(norm) or norm.item() == 0.0:
        raise PreconditionViolation(
            f"cannot normalize a state with norm {norm.item()}"
        )
    return state / norm


def embed_operator(
    local: torch.Tensor,
    position: int,
    n_qubits: int,
) -> torch.Tensor:
    """
    Embed a local gate matrix into the full register operator.

    The result is ``I (x) ... (x) I (x) local (x) I (x) ... (x) I`` with
    ``position`` identities before ``local`` and one identity for every qubit
    after the block.

    Args:
        local: Square matrix of shape ``(2**span, 2**span)``.
        position: Qubit index where the block begins.
        n_qubits: Register size.

    Returns:
        Complex tensor of shape ``(2**n_qubits, 2**n_qubits)``.
    """
    span = int(math.log2(local.shape[-1]))
    if local.shape != (1 << span, 1 << span):
        raise ValueError(f"local matrix must be square with power-of-two size, got {tuple(local.shape)}")
    _check_block(position, span, n_qubits)

    if n_qubits > dense_warn_qubits():
        logger.warning(
            "building a dense %dx%d operator for %d qubits",
            1 << n_qubits,
            1 << n_qubits,
            n_qubits,
        )

    identity = torch.eye(2, dtype=local.dtype, device=local.device)
    operator = torch.ones((1, 1), dtype=local.dtype, device=local.device)
    for _ in range(position):
        operator = torch.kron(operator, identity)
    operator = torch.kron(operator, local)
    for _ in range(position + span, n_qubits):
        operator = torch.kron(operator, identity)
    return operator


def apply_dense(
    state: torch.Tensor,
    local: torch.Tensor,
    position: int,
    n_qubits: int,
) -> torch.Tensor:
    """Apply ``local`` at ``position`` by multiplying the embedded operator."""
    operator = embed_operator(local, position, n_qubits)
    return operator @ state


def apply_blocked(
    state: torch.Tensor,
    local: torch.Tensor,
    position: int,
    n_qubits: int,
) -> torch.Tensor:
    """
    Apply ``local`` at ``position`` without building the full operator.

    The state is viewed as ``(2**position, 2**span, 2**rest)``; only the
    middle axis is transformed.
    """
    block = local.shape[-1]
    span = int(math.log2(block))
    _check_block(position, span, n_qubits)

    left = 1 << position
    right = 1 << (n_qubits - position - span)
    view = state.reshape(left, block, right).contiguous()
    transformed = torch.einsum("oi,lir->lor", local, view)
    return transformed.reshape(-1)


def measure_probs(state: torch.Tensor) -> torch.Tensor:
    """
    Born-rule probabilities ``|state[i]|**2``.

    Returns:
        Real tensor of the same length as ``state``.
    """
    if not torch.is_complex(state):
        raise ValueError(f"state must be complex dtype, got {state.dtype}")
    probs = (torch.abs(state) ** 2).contiguous()
    if is_debug_enabled():
        assert_normalized(state)
    return probs


__all__ = [
    "basis_state",
    "normalize",
    "embed_operator",
    "apply_dense",
    "apply_blocked",
    "measure_probs",
    "dense_warn_qubits",
]
