"""Exception hierarchy shared by the cube-sphere grid modules.

Two kinds of fault exist. A :class:`PreconditionViolation` means the caller
broke a contract (odd resolution, zero vector, empty set). An
:class:`InvariantViolation` means internal bookkeeping went wrong. Neither is
meant to be caught and retried. Expected absences such as a missing neighbor at
a cube corner are returned as ``None`` instead of being raised.
"""
from __future__ import annotations


class CubeSphereError(Exception):
    """Base class for every error raised by :mod:`cubesphere`."""


class PreconditionViolation(CubeSphereError, ValueError):
    """Raised when a caller passes input that violates an operation contract."""


class InvariantViolation(CubeSphereError, RuntimeError):
    """Raised when an internal consistency check fails."""


__all__ = ["CubeSphereError", "PreconditionViolation", "InvariantViolation"]
