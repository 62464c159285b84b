"""Full-step Newton iteration driven by an evaluator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..logging import get_logger
from .assembly import HessianTriplets
from .core import GRADIENT_TOLERANCE, EvaluatorError
from .linalg import solve_newton_system
from .oracle import Evaluator
from .progress import IterationInfo, ProgressCallback

logger = get_logger(__name__)

_NO_MULTIPLIERS = np.zeros(0, dtype=float)


@dataclass
class NewtonState:
    """
    Mutable state of a running iteration.

    The engine writes every new iterate here as soon as it is computed, so
    the caller can read the last iterate even if the run is interrupted by
    an exception.
    """

    x: np.ndarray
    grad_norm: float = float("inf")
    iteration: int = 0


def _gradient(evaluator: Evaluator, x: np.ndarray) -> np.ndarray:
    grad = np.asarray(evaluator.eval_gradient(x), dtype=float).reshape(-1)
    if grad.size != x.size:
        raise EvaluatorError(
            f"Evaluator returned a gradient of length {grad.size}, expected {x.size}."
        )
    return grad


def _hessian_values(evaluator: Evaluator, x: np.ndarray, nnz: int) -> np.ndarray:
    values = np.asarray(
        evaluator.eval_hessian_lagrangian(x, 1.0, _NO_MULTIPLIERS), dtype=float
    ).reshape(-1)
    if values.size != nnz:
        raise EvaluatorError(
            f"Evaluator returned {values.size} Hessian values, expected {nnz}."
        )
    return values


def newton_iterate(
    evaluator: Evaluator,
    triplets: HessianTriplets,
    state: NewtonState,
    callback: Optional[ProgressCallback] = None,
) -> NewtonState:
    """
    Run Newton's method from ``state.x`` until the gradient norm is small.

    Each iteration evaluates the Hessian of the Lagrangian with objective
    weight 1 and no constraint multipliers, assembles it, solves
    ``H step = g`` by sparse Cholesky and takes the full step
    ``x <- x - step``. There is no line search, no iteration cap and no
    divergence check: an objective that is poorly modeled by its local
    quadratic can keep this loop running indefinitely.

    Args:
        evaluator: Loaded evaluator supplying gradients and Hessian values.
        triplets: Hessian sparsity pattern captured at load time.
        state: Starting iterate; updated in place.
        callback: Receives the starting observation (iteration 0) and one
            observation after every step.

    Returns:
        ``state`` after convergence.

    Raises:
        FactorizationFailure: If a Hessian is not positive definite.
        EvaluatorError: If the evaluator returns a gradient or Hessian values
            of the wrong length.
    """
    x = np.array(state.x, dtype=float)
    grad = _gradient(evaluator, x)
    state.grad_norm = float(np.linalg.norm(grad))
    state.iteration = 0
    if callback is not None:
        callback(IterationInfo(0, state.grad_norm, x.copy()))

    while state.grad_norm > GRADIENT_TOLERANCE:
        values = _hessian_values(evaluator, x, triplets.nnz)
        hessian = triplets.assemble(values)
        step = solve_newton_system(hessian, grad)
        x = x - step
        state.x = x
        grad = _gradient(evaluator, x)
        state.grad_norm = float(np.linalg.norm(grad))
        state.iteration += 1
        if callback is not None:
            callback(IterationInfo(state.iteration, state.grad_norm, x.copy()))

    logger.debug(
        "Converged after %d iterations, |g| = %.3e.", state.iteration, state.grad_norm
    )
    return state


__all__ = ["NewtonState", "newton_iterate"]
