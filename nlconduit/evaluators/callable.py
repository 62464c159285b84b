"""Evaluator wrapping plain NumPy callables."""

from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple

import numpy as np

from .base import DenseHessianEvaluator
from .utils import Array, Objective, approx_grad, approx_hessian


class CallableEvaluator(DenseHessianEvaluator):
    """
    Evaluator built from an objective and optional derivative callables.

    Missing derivatives fall back to central finite differences, which is
    convenient for small problems but too coarse for tight tolerances on
    badly scaled objectives.

    Args:
        fun: Objective ``f(x) -> float``.
        dim: Number of variables.
        grad: Gradient ``g(x) -> array``. Finite differences if None.
        hess: Hessian ``H(x)``. Either a dense ``(dim, dim)`` matrix or a
            1-D array of values aligned with ``hess_structure``. Finite
            differences if None.
        hess_structure: Lower-triangular ``(rows, cols)`` pattern. Defaults
            to the dense lower triangle.

    Example:
        >>> import numpy as np
        >>> ev = CallableEvaluator(lambda x: float(x @ x), dim=2)
        >>> ev.eval_objective(np.array([1.0, 2.0]))
        5.0
    """

    def __init__(
        self,
        fun: Objective,
        dim: int,
        grad: Optional[Callable[[Array], Array]] = None,
        hess: Optional[Callable[[Array], Array]] = None,
        hess_structure: Optional[Tuple[Sequence[int], Sequence[int]]] = None,
    ) -> None:
        super().__init__(dim, hess_structure)
        self.fun = fun
        self.grad = grad
        self.hess = hess

    def _objective(self, x: np.ndarray) -> float:
        return self.fun(x)

    def _gradient(self, x: np.ndarray) -> np.ndarray:
        if self.grad is not None:
            return self.grad(x)
        return approx_grad(self.fun, x)

    def _hessian(self, x: np.ndarray) -> np.ndarray:
        if self.hess is not None:
            return self.hess(x)
        return approx_hessian(self.fun, x)


__all__ = ["CallableEvaluator"]
