"""Pytest configuration and shared fixtures for qkron tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- Global seeding so the default measurement sampler is reproducible
"""

import os

import numpy as np
import pytest
import torch


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic CPU torch RNG for tests."""
    generator = torch.Generator()
    generator.manual_seed(_seed())
    return generator


@pytest.fixture(scope="function")
def random_state(rng: np.random.Generator):
    """Return a factory for random normalized statevectors as numpy arrays."""

    def make(n_qubits: int) -> np.ndarray:
        dim = 2**n_qubits
        vec = rng.normal(size=dim) + 1j * rng.normal(size=dim)
        return vec / np.linalg.norm(vec)

    return make


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Seed the global numpy and torch generators before every test."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())
