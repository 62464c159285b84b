"""
Sparse Cholesky factorization and the Newton linear solve.

The Newton system ``H step = g`` is solved under the assumption that ``H``
is symmetric positive definite. The matrix is factored with CHOLMOD as
``P H P^T = L L^T`` using a supernodal factorization, which rejects any
non-positive pivot. A rejected pivot raises :class:`FactorizationFailure`;
there is no regularization or LU fallback.

References:
    - Chen, Davis, Hager & Rajamanickam, *CHOLMOD* (ACM TOMS, 2008)
    - Nocedal & Wright, *Numerical Optimization* (2006), sec. 3.4
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import scipy.sparse as sp
from sksparse.cholmod import CholmodNotPositiveDefiniteError, Factor, cholesky

from ..logging import get_logger
from .core import FactorizationFailure

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class SparseCholesky:
    """
    Cholesky factorization of a sparse symmetric positive definite matrix.

    Attributes:
        factor: CHOLMOD factor object, or None for an empty matrix.
        n: Order of the factored matrix.
    """

    factor: Factor | None
    n: int

    def solve(self, rhs: np.ndarray) -> np.ndarray:
        """Solve ``A x = rhs`` using the stored factor."""
        b = np.asarray(rhs, dtype=float).reshape(-1)
        if b.size != self.n:
            raise ValueError(
                f"Right-hand side has length {b.size}, expected {self.n}."
            )
        if self.factor is None:
            return np.zeros(0, dtype=float)
        return np.asarray(self.factor(b), dtype=float).reshape(-1)


def sparse_cholesky(matrix: sp.spmatrix, reorder: bool = True) -> SparseCholesky:
    """
    Factor a symmetric positive definite sparse matrix.

    Args:
        matrix: Square symmetric sparse (or dense) matrix.
        reorder: Let CHOLMOD choose a fill-reducing ordering. If False the
            natural ordering is kept.

    Returns:
        The factorization.

    Raises:
        ValueError: If ``matrix`` is not square.
        FactorizationFailure: If the matrix has non-finite entries or is not
            positive definite.
    """
    csc = sp.csc_matrix(matrix, dtype=float)
    n, m = csc.shape
    if n != m:
        raise ValueError(f"Matrix must be square, got shape {csc.shape}.")
    if n == 0:
        return SparseCholesky(factor=None, n=0)
    if not np.all(np.isfinite(csc.data)):
        raise FactorizationFailure("Hessian has non-finite entries.")
    csc.sum_duplicates()
    csc.sort_indices()

    try:
        factor = cholesky(
            csc,
            mode="supernodal",
            ordering_method="default" if reorder else "natural",
        )
    except CholmodNotPositiveDefiniteError as exc:
        raise FactorizationFailure(
            f"Hessian is not positive definite: {exc}",
            column=getattr(exc, "column", None),
        ) from exc

    logger.debug("Cholesky factor of order %d.", n)
    return SparseCholesky(factor=factor, n=n)


def solve_newton_system(hessian: sp.spmatrix, grad: np.ndarray) -> np.ndarray:
    """Return ``step`` solving ``hessian @ step = grad``."""
    return sparse_cholesky(hessian).solve(grad)


__all__ = ["SparseCholesky", "sparse_cholesky", "solve_newton_system"]
