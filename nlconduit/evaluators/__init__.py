"""
Reference evaluators producing the oracle interface consumed by the solver.

These adapters wrap NumPy callables (:class:`CallableEvaluator`) or torch
objectives (:class:`AutogradEvaluator`) and report the Hessian in
lower-triangular coordinate form.
"""

from .autograd import AutogradEvaluator
from .base import DenseHessianEvaluator
from .callable import CallableEvaluator
from .utils import approx_grad, approx_hessian, lower_triangle_structure

__all__ = [
    "DenseHessianEvaluator",
    "CallableEvaluator",
    "AutogradEvaluator",
    "approx_grad",
    "approx_hessian",
    "lower_triangle_structure",
]
