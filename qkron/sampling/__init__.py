"""Sampling and outcome tallies."""

from .hist import counts_to_probs, format_bitstring, index_counts
from .sampler import Sampler, TorchSampler, normalize_probs, sample_index

__all__ = [
    "Sampler",
    "TorchSampler",
    "normalize_probs",
    "sample_index",
    "index_counts",
    "counts_to_probs",
    "format_bitstring",
]
