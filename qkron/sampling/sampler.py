"""Randomness for measurement.

Measurement draws from a :class:`Sampler`: any callable that takes a 1-D
tensor of probabilities and returns one basis index. The circuit engine
never touches a global random generator, so tests can pass a seeded
:class:`TorchSampler` or a scripted stand-in.
"""

from __future__ import annotations

from typing import Optional, Protocol

import torch

from qkron.errors import EmptyInputError, PreconditionViolation


class Sampler(Protocol):
    """Draw one index from a probability vector that sums to 1."""

    def __call__(self, probs: torch.Tensor) -> int:
        ...


def normalize_probs(weights: torch.Tensor) -> torch.Tensor:
    """
    Rescale non-negative weights so they sum to 1.

    Squared amplitudes of a normalized state sum to 1 only up to rounding;
    dividing by the total keeps the distribution exact.

    Raises
    ------
    EmptyInputError
        If ``weights`` is empty.
    PreconditionViolation
        If ``weights`` is not 1-D, has negative or non-finite entries, or has
        zero total mass.
    """
    if weights.dim() != 1:
        raise PreconditionViolation(
            f"weights must be a 1-D tensor, got shape {tuple(weights.shape)}"
        )
    if weights.numel() == 0:
        raise EmptyInputError("cannot sample from an empty distribution")
    if not torch.all(torch.isfinite(weights)) or torch.any(weights < 0):
        raise PreconditionViolation("weights must be finite and non-negative")
    total = weights.sum()
    if total.item() <= 0:
        raise PreconditionViolation("probability distribution has zero total mass")
    return weights / total


class TorchSampler:
    """
    Sampler backed by ``torch.multinomial``.

    Parameters
    ----------
    generator:
        Optional ``torch.Generator`` for reproducible draws. ``None`` uses
        torch's default generator.
    """

    def __init__(self, generator: Optional[torch.Generator] = None) -> None:
        self.generator = generator

    @classmethod
    def seeded(cls, seed: int) -> "TorchSampler":
        """Return a sampler with a fresh CPU generator seeded with ``seed``."""
        return cls(torch.Generator().manual_seed(seed))

    def draw(self, probs: torch.Tensor, n_shots: int) -> torch.Tensor:
        """Draw ``n_shots`` indices with replacement."""
        if n_shots <= 0:
            raise PreconditionViolation(f"n_shots must be positive, got {n_shots}")
        # torch.multinomial needs a real float tensor on the generator's device
        target = self.generator.device if self.generator is not None else probs.device
        weights = probs.detach().to(dtype=torch.float64, device=target)
        return torch.multinomial(
            weights, num_samples=n_shots, replacement=True, generator=self.generator
        )

    def __call__(self, probs: torch.Tensor) -> int:
        return int(self.draw(probs, 1).item())

    def __repr__(self) -> str:
        return f"TorchSampler(generator={self.generator!r})"


def sample_index(weights: torch.Tensor, sampler: Sampler) -> int:
    """
    Normalize ``weights`` and draw one index with ``sampler``.

    Raises
    ------
    PreconditionViolation
        If the sampler returns an index outside the distribution.
    """
    probs = normalize_probs(weights)
    index = int(sampler(probs))
    if not 0 <= index < probs.numel():
        raise PreconditionViolation(
            f"sampler returned index {index} outside [0, {probs.numel()})"
        )
    return index
