"""Evaluator (oracle) contract consumed by the Newton solver."""

from __future__ import annotations

from enum import Enum
from typing import Protocol, Sequence, Tuple

import numpy as np


class Feature(Enum):
    """Derivative capabilities a solver may request from an evaluator."""

    GRADIENT = "grad"
    HESSIAN_OF_LAGRANGIAN = "hess"


REQUIRED_FEATURES: Tuple[Feature, ...] = (
    Feature.GRADIENT,
    Feature.HESSIAN_OF_LAGRANGIAN,
)


class Evaluator(Protocol):
    """
    Capability set an evaluator must provide to be loaded into a model.

    Hessian values are reported in coordinate (triplet) form for the lower
    triangle ``row >= col`` of the Hessian of the Lagrangian
    ``obj_weight * ∇²f(x) + Σ mu_i ∇²c_i(x)``. The structure is queried once
    at load time and the values returned by :meth:`eval_hessian_lagrangian`
    must stay aligned with it for the lifetime of the model. Repeated
    coordinates are allowed; their values are summed.

    An evaluator may additionally implement ``features_available()``
    returning the :class:`Feature` members it supports. When present, the
    model checks it before calling :meth:`initialize`.
    """

    def initialize(self, requested_features: Sequence[Feature]) -> None:
        ...

    def eval_objective(self, x: np.ndarray) -> float:
        ...

    def eval_gradient(self, x: np.ndarray) -> np.ndarray:
        ...

    def hessian_lagrangian_structure(self) -> Tuple[Sequence[int], Sequence[int]]:
        ...

    def eval_hessian_lagrangian(
        self, x: np.ndarray, obj_weight: float, mu: np.ndarray
    ) -> np.ndarray:
        ...


__all__ = ["Feature", "REQUIRED_FEATURES", "Evaluator"]
