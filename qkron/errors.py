"""Exception types raised by qkron.

Every error also subclasses ``ValueError``: they all describe a bad argument
detected before any state is mutated.
"""

from __future__ import annotations


class QkronError(Exception):
    """Base class for all qkron errors."""


class EmptyInputError(QkronError, ValueError):
    """An input collection that must be non-empty was empty."""


class DuplicateStateError(QkronError, ValueError):
    """A set of basis states contained the same index more than once."""


class InvalidLengthError(QkronError, ValueError):
    """An amplitude vector length was zero or not a power of two."""


class PreconditionViolation(QkronError, ValueError):
    """A gate or circuit argument violated a documented precondition."""


__all__ = [
    "QkronError",
    "EmptyInputError",
    "DuplicateStateError",
    "InvalidLengthError",
    "PreconditionViolation",
]
