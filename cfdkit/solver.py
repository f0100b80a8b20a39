"""Sparse linear system solver for CSR matrices."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.linalg import splu

from .csrmat import CsrMatrix
from .lodmat import LodMatrix


class MatrixSolver:
    """Solves A x = rhs for a square sparse matrix A using sparse LU factorization."""

    def __init__(self):
        self._lu = None
        self._dim = 0

    def set_matrix(self, mat: CsrMatrix | LodMatrix) -> None:
        """Set the target matrix; it is copied and may change afterwards."""
        if isinstance(mat, LodMatrix):
            mat = mat.to_csr()
        mat.validate()
        n = mat.n_rows()
        if n == 0:
            raise ValueError("matrix has no rows")
        cols = mat.cols()
        if any(not 0 <= c < n for c in cols):
            raise ValueError("column index lies outside the square matrix")
        a = csr_matrix(
            (
                np.asarray(mat.vals(), dtype=float),
                np.asarray(cols, dtype=np.int64),
                np.asarray(mat.addr(), dtype=np.int64),
            ),
            shape=(n, n),
        )
        try:
            lu = splu(a.tocsc())
        except RuntimeError as exc:
            raise ValueError("matrix is singular") from exc
        self._lu = lu
        self._dim = n

    def solve(self, rhs: Sequence[float]) -> list[float]:
        """Solution of the system for the given right hand side."""
        if self._lu is None:
            raise RuntimeError("Matrix was not passed to the solver")
        b = np.asarray(rhs, dtype=float)
        if b.shape != (self._dim,):
            raise ValueError(f"right hand side should have {self._dim} entries, got {b.size}")
        x = self._lu.solve(b)
        if not np.all(np.isfinite(x)):
            raise ArithmeticError("Sparse matrix solver got NaN")
        return x.tolist()


def solve_slae(mat: CsrMatrix | LodMatrix, rhs: Sequence[float]) -> list[float]:
    """Solve A x = rhs once."""
    solver = MatrixSolver()
    solver.set_matrix(mat)
    return solver.solve(rhs)