"""Abstract matrix interfaces and a small dense matrix."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

import numpy as np


class Matrix(ABC):
    """Square-indexed matrix interface."""

    @abstractmethod
    def n_rows(self) -> int:
        """Number of rows."""

    @abstractmethod
    def value(self, irow: int, icol: int) -> float:
        """Value at the given row and column."""

    @abstractmethod
    def mult_vec(self, u: Sequence[float]) -> list[float]:
        """Matrix-vector product."""

    @abstractmethod
    def mult_vec_row(self, irow: int, u: Sequence[float]) -> float:
        """Product of one matrix row with a vector."""

    def diagonal(self) -> list[float]:
        """Diagonal entries."""
        return [self.value(i, i) for i in range(self.n_rows())]


class SparseMatrix(Matrix):
    """Matrix with an explicit non-zero stencil."""

    @abstractmethod
    def n_nonzeros(self) -> int:
        """Number of entries in the stencil."""

    @abstractmethod
    def is_in_stencil(self, irow: int, icol: int) -> bool:
        """Whether [irow, icol] belongs to the non-zero stencil."""


class DenseMatrix(Matrix):
    """Row-major dense matrix."""

    def __init__(self, n_rows: int, n_cols: int, values: Sequence[float] | None = None):
        if values is None:
            data = [0.0] * (n_rows * n_cols)
        else:
            data = [float(v) for v in values]
            if len(data) != n_rows * n_cols:
                raise ValueError(
                    f"expected {n_rows * n_cols} values for a {n_rows}x{n_cols} matrix, got {len(data)}"
                )
        self._nrows = n_rows
        self._ncols = n_cols
        self._data = data

    def _index(self, irow: int, icol: int) -> int:
        if not (0 <= irow < self._nrows and 0 <= icol < self._ncols):
            raise IndexError(f"entry [{irow}, {icol}] is outside a {self._nrows}x{self._ncols} matrix")
        return irow * self._ncols + icol

    def _array(self) -> np.ndarray:
        return np.array(self._data, dtype=float).reshape(self._nrows, self._ncols)

    def set_value(self, irow: int, icol: int, value: float) -> None:
        """Set the entry at [irow, icol]."""
        self._data[self._index(irow, icol)] = float(value)

    def transpose(self) -> DenseMatrix:
        """Transposed copy."""
        return DenseMatrix(self._ncols, self._nrows, self._array().T.ravel().tolist())

    def mult_mat(self, mat: DenseMatrix) -> DenseMatrix:
        """Matrix-matrix product self * mat."""
        if self.n_cols() != mat.n_rows():
            raise ValueError(
                f"cannot multiply {self._nrows}x{self._ncols} by {mat.n_rows()}x{mat.n_cols()} matrix"
            )
        product = self._array() @ mat._array()
        return DenseMatrix(self._nrows, mat.n_cols(), product.ravel().tolist())

    def inverse(self) -> DenseMatrix:
        """Inverse of a square non-singular matrix."""
        if self._nrows != self._ncols:
            raise ValueError("only square matrices can be inverted")
        n = self._nrows
        d = self._data
        if n == 1:
            if d[0] == 0:
                raise ValueError("matrix is singular")
            return DenseMatrix(1, 1, [1.0 / d[0]])
        if n == 2:
            det = d[0] * d[3] - d[1] * d[2]
            if det == 0:
                raise ValueError("matrix is singular")
            return DenseMatrix(2, 2, [d[3] / det, -d[2] / det, -d[1] / det, d[0] / det])
        try:
            inv = np.linalg.inv(self._array())
        except np.linalg.LinAlgError as exc:
            raise ValueError("matrix is singular") from exc
        return DenseMatrix(n, n, inv.ravel().tolist())

    def n_cols(self) -> int:
        return self._ncols

    def vals(self) -> list[float]:
        """Row-major copy of all entries."""
        return list(self._data)

    def n_rows(self) -> int:
        return self._nrows

    def value(self, irow: int, icol: int) -> float:
        return self._data[self._index(irow, icol)]

    def mult_vec(self, u: Sequence[float]) -> list[float]:
        if len(u) != self._ncols:
            raise ValueError(f"vector length {len(u)} does not match {self._ncols} columns")
        return (self._array() @ np.asarray(u, dtype=float)).tolist()

    def mult_vec_row(self, irow: int, u: Sequence[float]) -> float:
        if len(u) != self._ncols:
            raise ValueError(f"vector length {len(u)} does not match {self._ncols} columns")
        start = self._index(irow, 0)
        row = self._data[start:start + self._ncols]
        return sum(a * b for a, b in zip(row, u))