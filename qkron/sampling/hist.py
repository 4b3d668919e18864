"""Tallies of measurement outcomes."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping

import torch


def index_counts(indices: torch.Tensor | Iterable[int]) -> Dict[int, int]:
    """
    Count how often each basis index occurs.

    Parameters
    ----------
    indices:
        1-D integer tensor or any iterable of ints.

    Returns
    -------
    Dict[int, int]
        Mapping from basis index to occurrences, in ascending index order.
    """
    if isinstance(indices, torch.Tensor):
        values, counts = torch.unique(indices.reshape(-1).cpu(), return_counts=True)
        return {int(v): int(c) for v, c in zip(values.tolist(), counts.tolist())}

    tally: Dict[int, int] = {}
    for i in indices:
        tally[int(i)] = tally.get(int(i), 0) + 1
    return dict(sorted(tally.items()))


def counts_to_probs(counts: Mapping[int, int]) -> Dict[int, float]:
    """
    Convert outcome counts into empirical frequencies summing to 1.0.

    Raises
    ------
    ValueError
        If the total count is not positive.
    """
    total = sum(counts.values())
    if total <= 0:
        raise ValueError("Total count must be positive.")
    return {k: v / float(total) for k, v in counts.items()}


def format_bitstring(index: int, n_qubits: int) -> str:
    """
    Render ``index`` as a bitstring with qubit 0 first (most significant).

    >>> format_bitstring(5, 3)
    '101'
    """
    if n_qubits == 0:
        return ""
    return format(index, f"0{n_qubits}b")
