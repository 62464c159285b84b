"""
Assembly of symmetric sparse matrices from lower-triangular triplets.

Evaluators report the Hessian of the Lagrangian as coordinate triplets
covering the lower triangle only. :func:`assemble_symmetric` expands them
into the full symmetric matrix: diagonal entries are placed once,
off-diagonal entries are placed at ``(row, col)`` and mirrored to
``(col, row)``, and repeated coordinates are summed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
import scipy.sparse as sp


@dataclass(frozen=True, eq=False)
class HessianTriplets:
    """
    Fixed sparsity pattern of a Hessian in coordinate form.

    The index arrays are copied and marked read-only on construction; the
    values are supplied separately on every evaluation and must be aligned
    with ``rows``/``cols`` entry by entry.
    """

    rows: np.ndarray
    cols: np.ndarray
    n: int

    @classmethod
    def from_structure(
        cls, rows: Sequence[int], cols: Sequence[int], n: int
    ) -> "HessianTriplets":
        """
        Validate and freeze a sparsity pattern reported by an evaluator.

        Raises:
            ValueError: If the index sequences differ in length, are not
                one-dimensional, or reference an index outside ``[0, n)``.
        """
        row_arr = np.array(rows, dtype=np.int64).reshape(-1)
        col_arr = np.array(cols, dtype=np.int64).reshape(-1)
        if row_arr.shape != col_arr.shape:
            raise ValueError(
                f"Row and column index sequences differ in length: "
                f"{row_arr.size} != {col_arr.size}."
            )
        if row_arr.size and (
            min(row_arr.min(), col_arr.min()) < 0
            or max(row_arr.max(), col_arr.max()) >= n
        ):
            raise ValueError(f"Hessian structure has indices outside [0, {n}).")
        row_arr.setflags(write=False)
        col_arr.setflags(write=False)
        return cls(rows=row_arr, cols=col_arr, n=int(n))

    @property
    def nnz(self) -> int:
        return int(self.rows.size)

    def assemble(self, values: Sequence[float]) -> sp.csc_matrix:
        """Assemble the symmetric matrix for one set of Hessian values."""
        return assemble_symmetric(self.rows, self.cols, values, self.n)


def assemble_symmetric(
    rows: Sequence[int],
    cols: Sequence[int],
    values: Sequence[float],
    n: int,
) -> sp.csc_matrix:
    """
    Build a symmetric ``n x n`` CSC matrix from lower-triangular triplets.

    Args:
        rows: Row index of each triplet.
        cols: Column index of each triplet.
        values: Value of each triplet, aligned with ``rows``/``cols``.
        n: Matrix dimension.

    Returns:
        Symmetric sparse matrix with duplicates summed.

    Raises:
        ValueError: If the three sequences are not the same length or an
            index lies outside ``[0, n)``.
    """
    rows = np.asarray(rows, dtype=np.int64).reshape(-1)
    cols = np.asarray(cols, dtype=np.int64).reshape(-1)
    values = np.asarray(values, dtype=float).reshape(-1)
    if not (rows.size == cols.size == values.size):
        raise ValueError(
            f"Triplet sequences must be aligned, got {rows.size} rows, "
            f"{cols.size} cols and {values.size} values."
        )
    if rows.size and (
        min(rows.min(), cols.min()) < 0 or max(rows.max(), cols.max()) >= n
    ):
        raise ValueError(f"Triplet indices outside [0, {n}).")

    off = rows != cols
    all_rows = np.concatenate([rows, cols[off]])
    all_cols = np.concatenate([cols, rows[off]])
    all_vals = np.concatenate([values, values[off]])
    # COO -> CSC conversion sums repeated coordinates.
    return sp.coo_matrix((all_vals, (all_rows, all_cols)), shape=(n, n)).tocsc()


__all__ = ["HessianTriplets", "assemble_symmetric"]
