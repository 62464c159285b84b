"""
Problem model owning the state of one unconstrained Newton solve.

A model starts ``UNINITIALIZED``. :meth:`NewtonModel.load` wires in an
evaluator and captures its Hessian sparsity pattern, after which the model
is ``READY``. :meth:`NewtonModel.optimize` moves it to ``OPTIMAL`` or
``FAILED``; a new load or warm start puts it back to ``READY``.

Example
-------
>>> import numpy as np
>>> from nlconduit import CallableEvaluator, ObjectiveSense, create_model
>>> c = np.array([5.0, 3.0])
>>> ev = CallableEvaluator(
...     lambda x: float(np.sum((x - c) ** 2)), dim=2,
...     grad=lambda x: 2 * (x - c), hess=lambda x: 2 * np.eye(2),
... )
>>> model = create_model()
>>> inf = np.inf
>>> model.load(2, 0, [-inf, -inf], [inf, inf], [], [], ObjectiveSense.MINIMIZE, ev)
>>> model.optimize()
>>> model.get_solution()
array([5., 3.])
"""

from __future__ import annotations

import operator
import time
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple

import numpy as np

from ..logging import get_logger
from .assembly import HessianTriplets
from .core import (
    ConfigurationError,
    DimensionMismatch,
    ModelNotLoadedError,
    ObjectiveSense,
    Status,
)
from .newton import NewtonState, newton_iterate
from .oracle import REQUIRED_FEATURES, Evaluator
from .progress import IterationHistory, IterationInfo, ProgressCallback

logger = get_logger(__name__)


class Model(Protocol):
    """Capability set exposed to modeling-layer adapters."""

    @property
    def status(self) -> Status:
        ...

    def load(
        self,
        num_var: int,
        num_constr: int,
        var_lower: Sequence[float],
        var_upper: Sequence[float],
        constr_lower: Sequence[float],
        constr_upper: Sequence[float],
        sense: ObjectiveSense,
        evaluator: Evaluator,
    ) -> None:
        ...

    def set_warm_start(self, x: Sequence[float]) -> None:
        ...

    def optimize(self) -> None:
        ...

    def get_solution(self) -> np.ndarray:
        ...

    def get_objective_value(self) -> float:
        ...

    def get_constraint_duals(self) -> np.ndarray:
        ...

    def get_reduced_costs(self) -> np.ndarray:
        ...


def _as_vector(values: Optional[Sequence[float]]) -> np.ndarray:
    if values is None:
        return np.zeros(0, dtype=float)
    return np.asarray(values, dtype=float).reshape(-1)


class NewtonModel:
    """
    Unconstrained minimization model solved by full-step Newton iterations.

    Args:
        callbacks: Progress callbacks receiving every
            :class:`~nlconduit.solver.progress.IterationInfo` emitted by
            :meth:`optimize`.
    """

    def __init__(self, callbacks: Iterable[ProgressCallback] = ()) -> None:
        self._callbacks: List[ProgressCallback] = list(callbacks)
        self._status = Status.UNINITIALIZED
        self._num_var: Optional[int] = None
        self._evaluator: Optional[Evaluator] = None
        self._triplets: Optional[HessianTriplets] = None
        self._x = np.zeros(0, dtype=float)
        self._history = IterationHistory()
        self._iterations = 0
        self._solve_time = 0.0
        self._raw_status = "Problem not loaded."

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def add_callback(self, callback: ProgressCallback) -> None:
        """Attach another progress callback for subsequent ``optimize`` calls."""
        self._callbacks.append(callback)

    def load(
        self,
        num_var: int,
        num_constr: int,
        var_lower: Sequence[float],
        var_upper: Sequence[float],
        constr_lower: Sequence[float],
        constr_upper: Sequence[float],
        sense: ObjectiveSense,
        evaluator: Evaluator,
    ) -> None:
        """
        Load an unconstrained minimization problem.

        The evaluator is asked to initialize gradient and Hessian-of-
        Lagrangian support and its Hessian structure is captured once. The
        iterate is reset to the zero vector.

        Args:
            num_var: Number of variables.
            num_constr: Number of constraints; must be 0.
            var_lower: Lower variable bounds; all must be ``-inf``.
            var_upper: Upper variable bounds; all must be ``+inf``.
            constr_lower: Lower constraint bounds; must be empty.
            constr_upper: Upper constraint bounds; must be empty.
            sense: Must be ``ObjectiveSense.MINIMIZE`` (or ``"minimize"``).
            evaluator: Object implementing the
                :class:`~nlconduit.solver.oracle.Evaluator` protocol.

        Raises:
            ConfigurationError: If ``num_var`` is not a non-negative integer,
                the problem is constrained, bounded, not a
                minimization, or the evaluator lacks a required feature or
                reports an invalid Hessian structure. The model is left
                unchanged.
        """
        try:
            num_var = operator.index(num_var)
        except TypeError as exc:
            raise ConfigurationError(
                f"num_var must be an integer, got {num_var!r}."
            ) from exc
        if num_var < 0:
            raise ConfigurationError(f"num_var must be >= 0, got {num_var}.")
        if num_constr != 0:
            raise ConfigurationError(
                f"Only unconstrained problems are supported, got {num_constr} constraints."
            )
        if _as_vector(constr_lower).size or _as_vector(constr_upper).size:
            raise ConfigurationError("Constraint bounds must be empty.")

        lower = _as_vector(var_lower)
        upper = _as_vector(var_upper)
        if lower.size != num_var or upper.size != num_var:
            raise ConfigurationError(
                f"Expected {num_var} variable bounds, got {lower.size} lower and "
                f"{upper.size} upper."
            )
        if np.any(lower != -np.inf) or np.any(upper != np.inf):
            raise ConfigurationError("Variable bounds are not supported; use -inf/+inf.")

        try:
            sense = ObjectiveSense(sense)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown objective sense {sense!r}.") from exc
        if sense is not ObjectiveSense.MINIMIZE:
            raise ConfigurationError(f"Only minimization is supported, got {sense.value}.")

        features_available = getattr(evaluator, "features_available", None)
        if features_available is not None:
            available = set(features_available())
            missing = [f.value for f in REQUIRED_FEATURES if f not in available]
            if missing:
                raise ConfigurationError(f"Evaluator is missing features: {missing}.")

        evaluator.initialize(list(REQUIRED_FEATURES))
        rows, cols = evaluator.hessian_lagrangian_structure()
        try:
            triplets = HessianTriplets.from_structure(rows, cols, num_var)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid Hessian structure: {exc}") from exc

        self._num_var = num_var
        self._evaluator = evaluator
        self._triplets = triplets
        self._x = np.zeros(num_var, dtype=float)
        self._history = IterationHistory()
        self._iterations = 0
        self._solve_time = 0.0
        self._raw_status = "Problem loaded."
        self._status = Status.READY
        logger.info(
            "Loaded problem with %d variables and %d Hessian nonzeros.",
            num_var,
            triplets.nnz,
        )

    def set_warm_start(self, x: Sequence[float]) -> None:
        """
        Replace the current iterate with ``x`` and reset the status to READY.

        Raises:
            ModelNotLoadedError: If no problem has been loaded.
            DimensionMismatch: If ``len(x) != num_var``.
        """
        num_var = self._require_loaded()
        x = _as_vector(x)
        if x.size != num_var:
            raise DimensionMismatch(num_var, x.size)
        self._x = x.copy()
        self._raw_status = "Warm start set."
        self._status = Status.READY

    # ------------------------------------------------------------------
    # Solve
    # ------------------------------------------------------------------
    def optimize(self) -> None:
        """
        Run Newton's method from the current iterate.

        On convergence the status becomes ``OPTIMAL``. If the iteration is
        interrupted by any exception (most notably
        :class:`~nlconduit.solver.core.FactorizationFailure`) the status
        becomes ``FAILED``, the last computed iterate is kept and the
        exception propagates.

        Raises:
            ModelNotLoadedError: If no problem has been loaded.
            FactorizationFailure: If a Hessian is not positive definite.
        """
        self._require_loaded()
        history = IterationHistory()
        callbacks = [history, *self._callbacks]

        def emit(info: IterationInfo) -> None:
            for callback in callbacks:
                callback(info)

        state = NewtonState(x=self._x.copy())
        self._history = history
        start = time.perf_counter()
        try:
            newton_iterate(self._evaluator, self._triplets, state, emit)
        except BaseException as exc:
            self._status = Status.FAILED
            self._raw_status = f"Failed: {exc}"
            logger.warning(
                "Newton iteration failed after %d iterations: %s", state.iteration, exc
            )
            raise
        finally:
            self._x = np.array(state.x, dtype=float)
            self._iterations = state.iteration
            self._solve_time = time.perf_counter() - start

        self._status = Status.OPTIMAL
        self._raw_status = (
            f"Gradient norm {state.grad_norm:.3e} within tolerance after "
            f"{state.iteration} iterations."
        )
        logger.info(self._raw_status)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def status(self) -> Status:
        return self._status

    def get_status(self) -> Status:
        return self._status

    @property
    def num_var(self) -> int:
        return self._require_loaded()

    @property
    def evaluator(self) -> Evaluator:
        self._require_loaded()
        return self._evaluator

    @property
    def hessian_pattern(self) -> Tuple[np.ndarray, np.ndarray]:
        """Read-only row and column indices captured at load time."""
        self._require_loaded()
        return self._triplets.rows, self._triplets.cols

    @property
    def history(self) -> IterationHistory:
        return self._history

    def get_solution(self) -> np.ndarray:
        self._require_loaded()
        return self._x.copy()

    def get_objective_value(self) -> float:
        self._require_loaded()
        return float(self._evaluator.eval_objective(self._x.copy()))

    def get_constraint_duals(self) -> np.ndarray:
        return np.zeros(0, dtype=float)

    def get_reduced_costs(self) -> np.ndarray:
        return np.zeros(self._require_loaded(), dtype=float)

    def get_iteration_count(self) -> int:
        """Newton steps taken by the most recent ``optimize`` call."""
        return self._iterations

    def get_solve_time(self) -> float:
        """Wall-clock seconds spent in the most recent ``optimize`` call."""
        return self._solve_time

    def get_raw_status(self) -> str:
        return self._raw_status

    def _require_loaded(self) -> int:
        if self._num_var is None:
            raise ModelNotLoadedError("No problem loaded; call load() first.")
        return self._num_var

    def __repr__(self) -> str:
        return f"NewtonModel(num_var={self._num_var}, status={self._status.value})"


__all__ = ["Model", "NewtonModel"]
