"""
Shared enumerations, constants and exceptions for the Newton solver.

The solver accepts only unconstrained minimization problems, so the load
contract is strict: any constraint, finite bound or non-minimize sense is
rejected up front with :class:`ConfigurationError`.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

import numpy as np

GRADIENT_TOLERANCE = 1e-5
"""Optimization stops once the gradient 2-norm is at or below this value."""


class Status(Enum):
    """Lifecycle status of a :class:`~nlconduit.solver.model.NewtonModel`."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    OPTIMAL = "optimal"
    FAILED = "failed"


class ObjectiveSense(Enum):
    """Direction of optimization requested by the caller.

    Only ``MINIMIZE`` is solvable; ``load`` rejects ``MAXIMIZE``.
    """

    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"


class NewtonConduitError(Exception):
    """Base class for every error raised by the solver."""


class ConfigurationError(NewtonConduitError, ValueError):
    """Problem data that the unconstrained Newton solver cannot accept."""


class DimensionMismatch(NewtonConduitError, ValueError):
    """A vector whose length differs from the number of variables."""

    def __init__(self, expected: int, got: int) -> None:
        super().__init__(f"Expected a vector of length {expected}, got {got}.")
        self.expected = expected
        self.got = got


class FactorizationFailure(NewtonConduitError, np.linalg.LinAlgError):
    """Cholesky factorization of the Hessian failed.

    Attributes:
        column: Column where CHOLMOD met a non-positive pivot, when known.
    """

    def __init__(self, message: str, column: Optional[int] = None) -> None:
        super().__init__(message)
        self.column = column


class EvaluatorError(NewtonConduitError, ValueError):
    """An evaluator returned data inconsistent with the loaded problem."""


class ModelNotLoadedError(NewtonConduitError, RuntimeError):
    """Operation requires a problem loaded with ``load`` first."""


__all__ = [
    "GRADIENT_TOLERANCE",
    "Status",
    "ObjectiveSense",
    "NewtonConduitError",
    "ConfigurationError",
    "DimensionMismatch",
    "FactorizationFailure",
    "EvaluatorError",
    "ModelNotLoadedError",
]
