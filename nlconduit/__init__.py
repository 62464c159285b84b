"""Newton Conduit - a sparse Newton solver for unconstrained minimization."""

__version__ = "0.1.0"

# Evaluators
from .evaluators import (
    AutogradEvaluator,
    CallableEvaluator,
    DenseHessianEvaluator,
    approx_grad,
    approx_hessian,
    lower_triangle_structure,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Solver
from .solver import (
    GRADIENT_TOLERANCE,
    ConfigurationError,
    DimensionMismatch,
    Evaluator,
    EvaluatorError,
    FactorizationFailure,
    Feature,
    HessianTriplets,
    IterationHistory,
    IterationInfo,
    LoggingProgress,
    Model,
    ModelNotLoadedError,
    NewtonConduitError,
    NewtonModel,
    ObjectiveSense,
    ProgressCallback,
    Solver,
    SolverConfig,
    SparseCholesky,
    Status,
    assemble_symmetric,
    create_model,
    newton_iterate,
    solve_newton_system,
    sparse_cholesky,
)

__all__ = [
    # Version
    "__version__",
    # Solver
    "GRADIENT_TOLERANCE",
    "Status",
    "ObjectiveSense",
    "Feature",
    "Evaluator",
    "Model",
    "NewtonModel",
    "Solver",
    "SolverConfig",
    "create_model",
    "newton_iterate",
    "HessianTriplets",
    "assemble_symmetric",
    "SparseCholesky",
    "sparse_cholesky",
    "solve_newton_system",
    "IterationInfo",
    "IterationHistory",
    "ProgressCallback",
    "LoggingProgress",
    # Errors
    "NewtonConduitError",
    "ConfigurationError",
    "DimensionMismatch",
    "EvaluatorError",
    "FactorizationFailure",
    "ModelNotLoadedError",
    # Evaluators
    "DenseHessianEvaluator",
    "CallableEvaluator",
    "AutogradEvaluator",
    "approx_grad",
    "approx_hessian",
    "lower_triangle_structure",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
