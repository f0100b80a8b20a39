"""List-of-dictionaries sparse matrix."""

from __future__ import annotations

from collections.abc import Sequence

from .csrmat import CsrMatrix
from .matrix import SparseMatrix


class LodMatrix(SparseMatrix):
    """Sparse matrix stored as one column->value dictionary per row."""

    def __init__(self, n_rows: int):
        self._data: list[dict[int, float]] = [{} for _ in range(n_rows)]

    def _row(self, irow: int) -> dict[int, float]:
        if not 0 <= irow < len(self._data):
            raise IndexError(f"row {irow} is outside a matrix of {len(self._data)} rows")
        return self._data[irow]

    def row(self, irow: int) -> dict[int, float]:
        """Copy of the row as a column->value dictionary ordered by column."""
        return dict(sorted(self._row(irow).items()))

    def add_value(self, irow: int, icol: int, value: float) -> None:
        """Perform matrix[irow, icol] += value."""
        r = self._row(irow)
        if icol in r:
            r[icol] += value
        else:
            r[icol] = value

    def set_value(self, irow: int, icol: int, value: float) -> None:
        """Set the entry; a zero value stays in the stencil."""
        self._row(irow)[icol] = value

    def remove_value(self, irow: int, icol: int) -> None:
        """Remove the entry from the stencil."""
        self._row(irow).pop(icol, None)

    def remove_row(self, irow: int) -> None:
        """Remove every entry of the row from the stencil."""
        self._row(irow).clear()

    def set_unit_row(self, irow: int) -> None:
        """Make the row a unit row with only the diagonal entry."""
        self._row(irow)
        self._data[irow] = {irow: 1.0}

    def to_csr(self) -> CsrMatrix:
        """Convert to the compressed sparse row format."""
        addr = [0]
        cols: list[int] = []
        vals: list[float] = []
        for r in self._data:
            for col, val in sorted(r.items()):
                cols.append(col)
                vals.append(val)
            addr.append(len(cols))
        ret = CsrMatrix()
        ret.set_stencil(addr, cols)
        ret.set_values(vals)
        ret.validate()
        return ret

    def n_rows(self) -> int:
        return len(self._data)

    def value(self, irow: int, icol: int) -> float:
        return self._row(irow).get(icol, 0.0)

    def n_nonzeros(self) -> int:
        return sum(len(r) for r in self._data)

    def is_in_stencil(self, irow: int, icol: int) -> bool:
        return icol in self._row(irow)

    def mult_vec(self, u: Sequence[float]) -> list[float]:
        return [sum(a * u[j] for j, a in r.items()) for r in self._data]

    def mult_vec_row(self, irow: int, u: Sequence[float]) -> float:
        return sum(a * u[j] for j, a in self._row(irow).items())