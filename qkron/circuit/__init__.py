"""The circuit engine."""

from .core import STRATEGIES, QuantumCircuit

__all__ = ["QuantumCircuit", "STRATEGIES"]
