"""One dimensional grid with ordered points."""

from __future__ import annotations

import os
from itertools import accumulate, repeat

from . import vtk
from .common import INVALID_INDEX
from .igrid import Grid, Point, Vector


class Grid1D(Grid):
    """Regular equidistant 1d grid; cells are segments between neighbouring points."""

    def __init__(self, left: float, right: float, n_cells: int):
        if n_cells < 1:
            raise ValueError(f"a 1d grid needs at least one cell, got {n_cells}")
        h = (right - left) / n_cells
        xs = accumulate(repeat(h, n_cells), initial=float(left))
        self._points: list[Point] = [(x, 0.0, 0.0) for x in xs]

    def _check_point(self, ipoint: int) -> int:
        if not 0 <= ipoint < len(self._points):
            raise IndexError(f"point {ipoint} is outside a grid of {len(self._points)} points")
        return ipoint

    def _check_cell(self, icell: int) -> int:
        if not 0 <= icell < self.n_cells():
            raise IndexError(f"cell {icell} is outside a grid of {self.n_cells()} cells")
        return icell

    def _check_face(self, iface: int) -> int:
        if not 0 <= iface < self.n_faces():
            raise IndexError(f"face {iface} is outside a grid of {self.n_faces()} faces")
        return iface

    def dim(self) -> int:
        return 1

    def n_points(self) -> int:
        return len(self._points)

    def n_cells(self) -> int:
        return len(self._points) - 1

    def n_faces(self) -> int:
        return len(self._points)

    def point(self, ipoint: int) -> Point:
        return self._points[self._check_point(ipoint)]

    def cell_center(self, icell: int) -> Point:
        self._check_cell(icell)
        a, b = self._points[icell], self._points[icell + 1]
        return ((a[0] + b[0]) / 2.0, (a[1] + b[1]) / 2.0, (a[2] + b[2]) / 2.0)

    def cell_volume(self, icell: int) -> float:
        self._check_cell(icell)
        return self._points[icell + 1][0] - self._points[icell][0]

    def face_normal(self, iface: int) -> Vector:
        self._check_face(iface)
        return (1.0, 0.0, 0.0)

    def face_area(self, iface: int) -> float:
        self._check_face(iface)
        return 1.0

    def face_center(self, iface: int) -> Point:
        return self._points[self._check_face(iface)]

    def points(self) -> list[Point]:
        return list(self._points)

    def tab_cell_point(self, icell: int) -> list[int]:
        self._check_cell(icell)
        return [icell, icell + 1]

    def tab_face_cell(self, iface: int) -> tuple[int | None, int | None]:
        self._check_face(iface)
        if iface == 0:
            return (INVALID_INDEX, 0)
        if iface == len(self._points) - 1:
            return (iface - 1, INVALID_INDEX)
        return (iface - 1, iface)

    def tab_face_point(self, iface: int) -> list[int]:
        self._check_face(iface)
        return [iface]

    def tab_cell_face(self, icell: int) -> list[int]:
        self._check_cell(icell)
        return [icell, icell + 1]

    def save_vtk(self, fname: str | os.PathLike) -> None:
        """Save the grid as a legacy vtk unstructured grid of line cells."""
        n = self.n_cells()
        with open(fname, "w") as fs:
            vtk.append_header("Grid1", fs)
            vtk.append_points(self.points(), fs)
            fs.write(f"CELLS  {n}   {3 * n}\n")
            for icell in range(n):
                p0, p1 = self.tab_cell_point(icell)
                fs.write(f"2 {p0} {p1}\n")
            fs.write(f"CELL_TYPES  {n}\n")
            fs.writelines("3\n" for _ in range(n))