"""Numerical checks on register states."""

from __future__ import annotations

from typing import Optional

import torch


def default_atol(dtype: torch.dtype) -> float:
    """
    Numerical tolerance for checks on tensors of ``dtype``.

    Scales with the machine epsilon of the real part, with a floor of 1e-8,
    so single-precision registers get about 1e-4 and double precision 1e-8.
    """
    real = torch.empty((), dtype=dtype).real.dtype if dtype.is_complex else dtype
    return max(torch.finfo(real).eps * 1e3, 1e-8)


def state_norm(state: torch.Tensor) -> torch.Tensor:
    """
    L2 norm of ``state`` over its last axis.

    A single amplitude vector gives a 0-d tensor; a stack of vectors of shape
    ``(..., dim)`` gives one norm per vector.

    Raises
    ------
    ValueError
        If ``state`` is a scalar.
    """
    if state.dim() == 0:
        raise ValueError("state_norm needs at least one axis of amplitudes")
    return torch.linalg.vector_norm(state, dim=-1)


def assert_normalized(state: torch.Tensor, atol: Optional[float] = None) -> None:
    """
    Raise unless every vector in ``state`` has norm within ``atol`` of 1.

    ``atol`` defaults to :func:`default_atol` for the state's dtype.

    Raises
    ------
    ValueError
        If a norm is non-finite or off by more than ``atol``.
    """
    if atol is None:
        atol = default_atol(state.dtype)
    norms = state_norm(state)
    if not bool(torch.isfinite(norms).all()):
        raise ValueError("state has a non-finite norm")

    deviation = (norms - 1.0).abs().max().item()
    if deviation > atol:
        raise ValueError(
            f"state is not normalized: norm deviates from 1 by {deviation:.3e} "
            f"(atol={atol})"
        )


def fidelity(state_a: torch.Tensor, state_b: torch.Tensor) -> torch.Tensor:
    """Overlap ``|<a|b>|**2`` of two pure states of equal shape."""
    if state_a.shape != state_b.shape:
        raise ValueError(
            f"fidelity needs states of the same shape, got "
            f"{tuple(state_a.shape)} and {tuple(state_b.shape)}"
        )
    if state_a.dim() == 0:
        raise ValueError("fidelity needs at least one axis of amplitudes")
    overlap = torch.sum(state_a.conj() * state_b, dim=-1)
    return overlap.abs() ** 2
