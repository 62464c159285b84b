"""
Newton's method for unconstrained minimization over an evaluator.

The subpackage is organised leaves first: the evaluator contract
(:mod:`.oracle`), triplet assembly (:mod:`.assembly`), the sparse Cholesky
solve (:mod:`.linalg`), the iteration (:mod:`.newton`) and the problem
model (:mod:`.model`) that ties them together.
"""

from .assembly import HessianTriplets, assemble_symmetric
from .config import Solver, SolverConfig, create_model
from .core import (
    GRADIENT_TOLERANCE,
    ConfigurationError,
    DimensionMismatch,
    EvaluatorError,
    FactorizationFailure,
    ModelNotLoadedError,
    NewtonConduitError,
    ObjectiveSense,
    Status,
)
from .linalg import SparseCholesky, solve_newton_system, sparse_cholesky
from .model import Model, NewtonModel
from .newton import NewtonState, newton_iterate
from .oracle import REQUIRED_FEATURES, Evaluator, Feature
from .progress import IterationHistory, IterationInfo, LoggingProgress, ProgressCallback

__all__ = [
    # Core types
    "GRADIENT_TOLERANCE",
    "Status",
    "ObjectiveSense",
    # Errors
    "NewtonConduitError",
    "ConfigurationError",
    "DimensionMismatch",
    "EvaluatorError",
    "FactorizationFailure",
    "ModelNotLoadedError",
    # Evaluator contract
    "Feature",
    "REQUIRED_FEATURES",
    "Evaluator",
    # Linear algebra
    "HessianTriplets",
    "assemble_symmetric",
    "SparseCholesky",
    "sparse_cholesky",
    "solve_newton_system",
    # Iteration
    "NewtonState",
    "newton_iterate",
    "IterationInfo",
    "IterationHistory",
    "ProgressCallback",
    "LoggingProgress",
    # Model
    "Model",
    "NewtonModel",
    "Solver",
    "SolverConfig",
    "create_model",
]
