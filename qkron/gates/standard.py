"""Standard gate matrices.

Single-qubit gates are fixed 2x2 matrices. Two-qubit gates are built over the
contiguous block of qubits between their control and target, so a gate on
qubits 0 and 3 is a 16x16 matrix that leaves qubits 1 and 2 untouched.

Inside a block, qubit ``min(control, target)`` is the most significant bit of
the block-local basis index.
"""

from __future__ import annotations

import cmath
import math
from typing import Callable, Optional, Tuple

import torch

from qkron.diagnostics.core import default_atol

IndexRule = Callable[[int], int]


def _resolve(
    dtype: torch.dtype | None, device: torch.device | None
) -> Tuple[torch.dtype, torch.device]:
    if dtype is None:
        dtype = torch.complex128
    if device is None:
        device = torch.device("cpu")
    return dtype, device


def I(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    Identity gate (single-qubit).

    Args:
        dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
        device: PyTorch device. Defaults to torch.device("cpu").

    Returns:
        A (2, 2) complex tensor representing the identity gate.
    """
    dtype, device = _resolve(dtype, device)
    return torch.eye(2, dtype=dtype, device=device)


def X(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Pauli-X gate (bit flip)."""
    dtype, device = _resolve(dtype, device)
    return torch.tensor([[0.0, 1.0], [1.0, 0.0]], dtype=dtype, device=device)


def Y(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Pauli-Y gate."""
    dtype, device = _resolve(dtype, device)
    return torch.tensor([[0.0, -1.0j], [1.0j, 0.0]], dtype=dtype, device=device)


def Z(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """Pauli-Z gate (phase flip)."""
    dtype, device = _resolve(dtype, device)
    return torch.tensor([[1.0, 0.0], [0.0, -1.0]], dtype=dtype, device=device)


def H(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """
    Hadamard gate.

    Maps |0> to (|0> + |1>)/sqrt(2) and |1> to (|0> - |1>)/sqrt(2).
    """
    dtype, device = _resolve(dtype, device)
    sqrt2_inv = 1.0 / math.sqrt(2.0)
    return torch.tensor(
        [[sqrt2_inv, sqrt2_inv], [sqrt2_inv, -sqrt2_inv]], dtype=dtype, device=device
    )


def S(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """S gate (phase gate, sqrt(Z))."""
    dtype, device = _resolve(dtype, device)
    return torch.tensor([[1.0, 0.0], [0.0, 1.0j]], dtype=dtype, device=device)


def T(dtype: torch.dtype | None = None, device: torch.device | None = None) -> torch.Tensor:
    """T gate (pi/8 gate, sqrt(S))."""
    dtype, device = _resolve(dtype, device)
    exp_i_pi_4 = cmath.exp(1.0j * math.pi / 4.0)
    return torch.tensor([[1.0, 0.0], [0.0, exp_i_pi_4]], dtype=dtype, device=device)


def block_masks(control: int, target: int) -> Tuple[int, int, int]:
    """
    Locate control and target inside the block spanning both qubits.

    Args:
        control: Absolute control qubit index.
        target: Absolute target qubit index.

    Returns:
        ``(span, control_mask, target_mask)`` where each mask selects the
        qubit's bit in a block-local basis index.

    Raises:
        ValueError: If control and target coincide.
    """
    if control == target:
        raise ValueError(f"control and target must differ, got {control} for both")
    low = min(control, target)
    span = abs(control - target) + 1
    control_mask = 1 << (span - 1 - (control - low))
    target_mask = 1 << (span - 1 - (target - low))
    return span, control_mask, target_mask


def permutation_matrix(
    rule: IndexRule,
    span: int,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Build the operator that sends basis state ``|i>`` to ``|rule(i)>``.

    The result is the sum over ``i`` of the outer products ``|rule(i)><i|``
    on a ``span``-qubit block. ``rule`` must be a bijection on
    ``range(2**span)`` for the result to be unitary.

    Args:
        rule: Block-local index mapping.
        span: Number of qubits in the block.
        dtype: Complex dtype. Defaults to torch.complex128.
        device: PyTorch device. Defaults to CPU.

    Returns:
        A (2**span, 2**span) complex tensor.
    """
    dtype, device = _resolve(dtype, device)
    dim = 1 << span
    inputs = torch.arange(dim, device=device)
    outputs = torch.tensor([rule(i) for i in range(dim)], dtype=torch.long, device=device)
    matrix = torch.zeros((dim, dim), dtype=dtype, device=device)
    ones = torch.ones(dim, dtype=dtype, device=device)
    matrix.index_put_((outputs, inputs), ones, accumulate=True)
    return matrix


def controlled_x_matrix(
    control: int,
    target: int,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Controlled-X over the block spanning ``control`` and ``target``.

    Block basis states whose control bit is 0 are left alone; the others have
    their target bit flipped. Qubits strictly between the two pass through.
    For adjacent qubits with ``control < target`` this is the textbook CNOT::

        [[1, 0, 0, 0],
         [0, 1, 0, 0],
         [0, 0, 0, 1],
         [0, 0, 1, 0]]
    """
    span, control_mask, target_mask = block_masks(control, target)

    def flip_if_controlled(i: int) -> int:
        if i & control_mask == 0:
            return i
        return i ^ target_mask

    return permutation_matrix(flip_if_controlled, span, dtype=dtype, device=device)


def controlled_matrix(
    control: int,
    target: int,
    unitary: torch.Tensor,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """
    Controlled single-qubit ``unitary`` over the block spanning both qubits.

    When the control bit of a block basis index is 1, ``unitary`` mixes the
    pair of indices that differ only in the target bit; otherwise the index
    maps to itself.

    Args:
        control: Absolute control qubit index.
        target: Absolute target qubit index.
        unitary: (2, 2) matrix applied to the target.
        dtype: Complex dtype. Defaults to torch.complex128.
        device: PyTorch device. Defaults to CPU.

    Returns:
        A (2**span, 2**span) complex tensor.
    """
    if tuple(unitary.shape) != (2, 2):
        raise ValueError(f"unitary must have shape (2, 2), got {tuple(unitary.shape)}")
    dtype, device = _resolve(dtype, device)
    span, control_mask, target_mask = block_masks(control, target)
    u = unitary.to(dtype=dtype, device=device)

    dim = 1 << span
    matrix = torch.zeros((dim, dim), dtype=dtype, device=device)
    for i in range(dim):
        if i & control_mask == 0:
            matrix[i, i] = 1.0
            continue
        bit_in = 1 if i & target_mask else 0
        cleared = i & ~target_mask
        matrix[cleared, i] = u[0, bit_in]
        matrix[cleared | target_mask, i] = u[1, bit_in]
    return matrix


def swap_matrix(
    a: int,
    b: int,
    dtype: torch.dtype | None = None,
    device: torch.device | None = None,
) -> torch.Tensor:
    """SWAP over the block spanning ``a`` and ``b``, as CX(a,b) CX(b,a) CX(a,b)."""
    cx_ab = controlled_x_matrix(a, b, dtype=dtype, device=device)
    cx_ba = controlled_x_matrix(b, a, dtype=dtype, device=device)
    return cx_ab @ cx_ba @ cx_ab


def is_unitary(matrix: torch.Tensor, atol: Optional[float] = None) -> bool:
    """
    Check if a matrix is unitary within a given tolerance.

    A matrix U is unitary if U^dagger U = I.

    Args:
        matrix: Tensor of shape (..., n, n).
        atol: Absolute tolerance for the check. Defaults to a tolerance
            derived from the matrix dtype.

    Returns:
        True if the matrix is unitary (within tolerance), False otherwise.
    """
    if matrix.dim() < 2 or matrix.shape[-1] != matrix.shape[-2]:
        return False

    if atol is None:
        atol = default_atol(matrix.dtype)

    adjoint = matrix.conj().transpose(-1, -2)
    product = torch.matmul(adjoint, matrix)

    n = matrix.shape[-1]
    identity = torch.eye(n, dtype=matrix.dtype, device=matrix.device)
    if product.ndim > 2:
        identity = identity.expand(product.shape)

    diff = torch.abs(product - identity)
    return bool(torch.all(diff < atol).item())
