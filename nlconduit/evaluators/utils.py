"""Finite-difference derivatives and sparsity helpers for evaluators."""

from __future__ import annotations

from typing import Callable, Tuple

import numpy as np

Array = np.ndarray
Objective = Callable[[Array], float]


def lower_triangle_structure(n: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Row and column indices of the dense lower triangle of an ``n x n`` matrix.

    Entries are ordered column by column, diagonal first.
    """
    if n < 0:
        raise ValueError(f"n must be >= 0, got {n}")
    cols, rows = np.triu_indices(n)
    return rows.astype(np.int64), cols.astype(np.int64)


def approx_grad(fun: Objective, x: Array, eps: float = 1e-6) -> Array:
    """
    Central-difference gradient of ``fun`` at ``x``.

    Args:
        fun: Objective mapping a 1-D point to a scalar.
        x: Point at which to differentiate.
        eps: Step along each coordinate axis.

    Returns:
        Array of the same length as ``x``.

    Raises:
        ValueError: If ``eps`` is not positive.
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float).reshape(-1)
    steps = eps * np.eye(x.size)
    diffs = [fun(x + h) - fun(x - h) for h in steps]
    return np.asarray(diffs, dtype=float).reshape(-1) / (2.0 * eps)


def approx_hessian(fun: Objective, x: Array, eps: float = 1e-4) -> Array:
    """
    Symmetric central-difference Hessian of ``fun`` at ``x``.

    Only the lower triangle is differenced; the upper triangle is mirrored.

    Args:
        fun: Objective mapping a 1-D point to a scalar.
        x: Point at which to differentiate.
        eps: Step along each coordinate axis.

    Returns:
        Dense ``(n, n)`` array.

    Raises:
        ValueError: If ``eps`` is not positive.
    """
    if eps <= 0:
        raise ValueError("eps must be positive")
    x = np.asarray(x, dtype=float).reshape(-1)
    steps = eps * np.eye(x.size)
    f0 = fun(x)
    hess = np.empty((x.size, x.size), dtype=float)
    for i, j in zip(*lower_triangle_structure(x.size)):
        hi, hj = steps[i], steps[j]
        if i == j:
            value = (fun(x + hi) - 2.0 * f0 + fun(x - hi)) / eps**2
        else:
            value = (
                fun(x + hi + hj) - fun(x + hi - hj) - fun(x - hi + hj) + fun(x - hi - hj)
            ) / (4.0 * eps**2)
        hess[i, j] = hess[j, i] = value
    return hess


__all__ = ["Array", "Objective", "lower_triangle_structure", "approx_grad", "approx_hessian"]
