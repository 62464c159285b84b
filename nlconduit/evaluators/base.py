"""Base class for evaluators backed by a dense Hessian."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple

import numpy as np

from ..solver.oracle import Feature
from .utils import lower_triangle_structure


class DenseHessianEvaluator(ABC):
    """
    Evaluator for unconstrained objectives whose Hessian is formed densely.

    Subclasses supply the objective, gradient and dense Hessian; this class
    implements feature negotiation and reports Hessian values in triplet
    form for the dense lower triangle, or for a caller-supplied structure.

    Args:
        dim: Number of variables.
        hess_structure: Optional ``(rows, cols)`` lower-triangular pattern.
            Defaults to the full lower triangle.
    """

    def __init__(
        self,
        dim: int,
        hess_structure: Optional[Tuple[Sequence[int], Sequence[int]]] = None,
    ) -> None:
        if dim < 0:
            raise ValueError(f"dim must be >= 0, got {dim}")
        self.dim = int(dim)
        if hess_structure is None:
            rows, cols = lower_triangle_structure(self.dim)
        else:
            rows = np.asarray(hess_structure[0], dtype=np.int64).reshape(-1)
            cols = np.asarray(hess_structure[1], dtype=np.int64).reshape(-1)
            if rows.size != cols.size:
                raise ValueError("Hessian structure rows and cols differ in length.")
        self._rows = rows
        self._cols = cols
        self._features: frozenset[Feature] = frozenset()

    def features_available(self) -> Tuple[Feature, ...]:
        return (Feature.GRADIENT, Feature.HESSIAN_OF_LAGRANGIAN)

    def initialize(self, requested_features: Sequence[Feature]) -> None:
        requested = frozenset(requested_features)
        unsupported = requested.difference(self.features_available())
        if unsupported:
            names = sorted(f.value for f in unsupported)
            raise ValueError(f"{self.__class__.__name__} does not support {names}.")
        self._features = requested

    def eval_objective(self, x: np.ndarray) -> float:
        return float(self._objective(self._check_point(x)))

    def eval_gradient(self, x: np.ndarray) -> np.ndarray:
        self._check_initialized(Feature.GRADIENT)
        return np.asarray(self._gradient(self._check_point(x)), dtype=float).reshape(-1)

    def hessian_lagrangian_structure(self) -> Tuple[np.ndarray, np.ndarray]:
        self._check_initialized(Feature.HESSIAN_OF_LAGRANGIAN)
        return self._rows.copy(), self._cols.copy()

    def eval_hessian_lagrangian(
        self, x: np.ndarray, obj_weight: float, mu: np.ndarray
    ) -> np.ndarray:
        self._check_initialized(Feature.HESSIAN_OF_LAGRANGIAN)
        if np.asarray(mu).size:
            raise ValueError("Unconstrained evaluator received constraint multipliers.")
        hess = np.asarray(self._hessian(self._check_point(x)), dtype=float)
        if hess.ndim <= 1:
            values = hess.reshape(-1)
        else:
            values = hess[self._rows, self._cols]
        if values.size != self._rows.size:
            raise ValueError(
                f"Hessian values have length {values.size}, expected {self._rows.size}."
            )
        return obj_weight * values

    @abstractmethod
    def _objective(self, x: np.ndarray) -> float:
        """Objective value at ``x``."""

    @abstractmethod
    def _gradient(self, x: np.ndarray) -> np.ndarray:
        """Gradient at ``x``."""

    @abstractmethod
    def _hessian(self, x: np.ndarray) -> np.ndarray:
        """Dense ``(dim, dim)`` Hessian, values aligned with the structure, or a
        scalar when ``dim == 1``."""

    def _check_point(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=float).reshape(-1)
        if x.size != self.dim:
            raise ValueError(f"Expected a point of length {self.dim}, got {x.size}.")
        return x

    def _check_initialized(self, feature: Feature) -> None:
        if feature not in self._features:
            raise RuntimeError(
                f"{self.__class__.__name__} was not initialized with {feature.value!r}."
            )


__all__ = ["DenseHessianEvaluator"]
