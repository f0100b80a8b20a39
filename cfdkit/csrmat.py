"""Compressed sparse row stencil and matrix."""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Sequence
from itertools import pairwise

from .common import INVALID_INDEX
from .matrix import SparseMatrix


class CsrStencil(SparseMatrix):
    """Compressed sparse row stencil without values."""

    def __init__(self, addr: Sequence[int] | None = None, cols: Sequence[int] | None = None):
        self._addr: list[int] = [0]
        self._cols: list[int] = []
        if addr is not None or cols is not None:
            self.set_stencil([0] if addr is None else addr, [] if cols is None else cols)

    def set_stencil(self, addr: Sequence[int], cols: Sequence[int]) -> None:
        """Fill the stencil from address and column arrays."""
        self._addr = list(addr)
        self._cols = list(cols)

    def set_stencil_from_sets(self, stencil_set: Iterable[Iterable[int]]) -> None:
        """Fill the stencil from one set of column indices per row."""
        addr = [0]
        cols: list[int] = []
        for row in stencil_set:
            cols.extend(sorted(set(row)))
            addr.append(len(cols))
        self._addr = addr
        self._cols = cols

    def addr(self) -> list[int]:
        return list(self._addr)

    def cols(self) -> list[int]:
        return list(self._cols)

    def validate(self) -> None:
        """Raise ValueError if the stencil structure is inconsistent."""
        if len(self._addr) < 1:
            raise ValueError("addr array should have more then zero entries")
        if len(self._cols) != self._addr[-1]:
            raise ValueError("cols array size should match last addr entry")
        if any(b < a for a, b in pairwise(self._addr)):
            raise ValueError("addr array should be non-decreasing")

    def _row_range(self, irow: int) -> tuple[int, int]:
        if not 0 <= irow < self.n_rows():
            raise IndexError(f"row {irow} is outside a matrix of {self.n_rows()} rows")
        return self._addr[irow], self._addr[irow + 1]

    def get_address(self, irow: int, icol: int) -> int | None:
        """Position of [irow, icol] in the columns array, or INVALID_INDEX."""
        start, end = self._row_range(irow)
        pos = bisect_left(self._cols, icol, start, end)
        if pos < end and self._cols[pos] == icol:
            return pos
        return INVALID_INDEX

    def n_rows(self) -> int:
        return len(self._addr) - 1

    def n_nonzeros(self) -> int:
        return len(self._cols)

    def is_in_stencil(self, irow: int, icol: int) -> bool:
        start, end = self._row_range(irow)
        return icol in self._cols[start:end]

    def value(self, irow: int, icol: int) -> float:
        raise TypeError("CsrStencil has no values")

    def mult_vec(self, u: Sequence[float]) -> list[float]:
        raise TypeError("CsrStencil has no values")

    def mult_vec_row(self, irow: int, u: Sequence[float]) -> float:
        raise TypeError("CsrStencil has no values")


class CsrMatrix(CsrStencil):
    """Compressed sparse row matrix."""

    def __init__(self, stencil: CsrStencil | None = None):
        super().__init__()
        self._vals: list[float] = []
        if stencil is not None:
            self.set_stencil(stencil.addr(), stencil.cols())
            self._vals = [0.0] * stencil.n_nonzeros()

    def set_values(self, vals: Iterable[float]) -> None:
        self._vals = [float(v) for v in vals]

    def vals(self) -> list[float]:
        """The live values array; changes to it change the matrix."""
        return self._vals

    def set_unit_row(self, irow: int) -> None:
        """Set unit diagonal and zero off-diagonal values in the row."""
        start, end = self._row_range(irow)
        self._vals[start:end] = [1.0 if c == irow else 0.0 for c in self._cols[start:end]]

    def validate(self) -> None:
        super().validate()
        if len(self._vals) != self.n_nonzeros():
            raise ValueError("values array should have same size as the columns arrays")

    def value(self, irow: int, icol: int) -> float:
        a = self.get_address(irow, icol)
        return 0.0 if a is INVALID_INDEX else self._vals[a]

    def _row_product(self, start: int, end: int, u: Sequence[float]) -> float:
        return sum(v * u[c] for v, c in zip(self._vals[start:end], self._cols[start:end]))

    def mult_vec(self, u: Sequence[float]) -> list[float]:
        return [self._row_product(start, end, u) for start, end in pairwise(self._addr)]

    def mult_vec_row(self, irow: int, u: Sequence[float]) -> float:
        start, end = self._row_range(irow)
        return self._row_product(start, end, u)