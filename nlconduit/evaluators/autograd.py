"""Evaluator deriving gradients and Hessians with PyTorch autograd."""

from __future__ import annotations

from typing import Callable

import numpy as np
import torch

from .base import DenseHessianEvaluator


class AutogradEvaluator(DenseHessianEvaluator):
    """
    Evaluator for an objective written with torch operations.

    The objective receives a 1-D tensor of length ``dim`` and must return a
    scalar tensor. Gradients come from ``torch.autograd.grad`` and the
    Hessian from ``torch.autograd.functional.hessian``; both are reported
    as float64 NumPy arrays.

    Args:
        fun: Objective ``f(x: torch.Tensor) -> torch.Tensor``.
        dim: Number of variables.
        dtype: Floating dtype used for evaluation. Defaults to float64.

    Example:
        >>> import torch
        >>> ev = AutogradEvaluator(lambda x: (x ** 2).sum(), dim=2)
        >>> from nlconduit.solver.oracle import Feature
        >>> ev.initialize([Feature.GRADIENT])
        >>> ev.eval_gradient([1.0, -2.0])
        array([ 2., -4.])
    """

    def __init__(
        self,
        fun: Callable[[torch.Tensor], torch.Tensor],
        dim: int,
        dtype: torch.dtype = torch.float64,
    ) -> None:
        if not dtype.is_floating_point:
            raise ValueError(f"dtype must be a floating point type, got {dtype}")
        super().__init__(dim)
        self.fun = fun
        self.dtype = dtype

    def _tensor(self, x: np.ndarray) -> torch.Tensor:
        return torch.as_tensor(np.asarray(x, dtype=float), dtype=self.dtype)

    def _objective(self, x: np.ndarray) -> float:
        with torch.no_grad():
            return float(self.fun(self._tensor(x)))

    def _gradient(self, x: np.ndarray) -> np.ndarray:
        point = self._tensor(x).requires_grad_(True)
        value = self.fun(point)
        if not value.requires_grad:
            return np.zeros(self.dim, dtype=float)
        (grad,) = torch.autograd.grad(value, point, allow_unused=True)
        if grad is None:
            return np.zeros(self.dim, dtype=float)
        return grad.detach().cpu().numpy().astype(float)

    def _hessian(self, x: np.ndarray) -> np.ndarray:
        hess = torch.autograd.functional.hessian(self.fun, self._tensor(x))
        return hess.detach().cpu().numpy().astype(float).reshape(self.dim, self.dim)


__all__ = ["AutogradEvaluator"]
