"""Structured 2d grid of rectangular cells."""

from __future__ import annotations

import os
from bisect import bisect_left, bisect_right
from collections.abc import Sequence
from enum import Enum
from itertools import accumulate, pairwise, repeat

from . import vtk
from .common import INVALID_INDEX
from .igrid import Grid, Point, Vector


class FaceType(Enum):
    """Kind of a grid face with respect to active cells."""

    INTERNAL = "internal"
    BOUNDARY = "boundary"
    DEACTIVATED = "deactivated"


def _midpoints(values: Sequence[float]) -> list[float]:
    return [(a + b) / 2 for a, b in pairwise(values)]


class RegularGrid2D(Grid):
    """Structured quadrilateral grid.

    Points and cells are indexed with x as the fast dimension:
    ipoint = ix + (nx + 1) * iy, icell = ix + nx * iy.
    Faces normal to y (x-faces) come first, then the faces normal to x (y-faces).
    """

    def __init__(self, x: Sequence[float], y: Sequence[float]):
        self._x = [float(v) for v in x]
        self._y = [float(v) for v in y]
        if not self._x or not self._y:
            raise ValueError("grid coordinates should not be empty")
        self._actnum = [True] * self.n_cells()
        self._xface_types: list[FaceType] = []
        self._yface_types: list[FaceType] = []
        self._boundary_xfaces: list[tuple[int, int]] = []
        self._boundary_yfaces: list[tuple[int, int]] = []
        self._set_face_types()

    @classmethod
    def uniform(cls, x0: float, x1: float, y0: float, y1: float, nx: int, ny: int) -> RegularGrid2D:
        """Equidistant grid with nx by ny cells on [x0, x1] x [y0, y1]."""
        if nx < 1 or ny < 1:
            raise ValueError(f"a grid needs at least one cell per direction, got {nx}x{ny}")
        hx = (x1 - x0) / nx
        hy = (y1 - y0) / ny
        return cls(
            list(accumulate(repeat(hx, nx), initial=float(x0))),
            list(accumulate(repeat(hy, ny), initial=float(y0))),
        )

    # ---- sizes

    def lx(self) -> float:
        return self._x[-1] - self._x[0]

    def ly(self) -> float:
        return self._y[-1] - self._y[0]

    def nx(self) -> int:
        """Number of cells in x direction."""
        return len(self._x) - 1

    def ny(self) -> int:
        """Number of cells in y direction."""
        return len(self._y) - 1

    def _n_xfaces(self) -> int:
        return (self.ny() + 1) * self.nx()

    # ---- derived grids

    def cell_centered_grid(self) -> RegularGrid2D:
        """Grid whose points are the centers of this grid's cells."""
        return RegularGrid2D(_midpoints(self._x), _midpoints(self._y))

    def xface_centered_grid(self) -> RegularGrid2D:
        """Grid whose points are the centers of x-faces."""
        return RegularGrid2D(_midpoints(self._x), self._y)

    def yface_centered_grid(self) -> RegularGrid2D:
        """Grid whose points are the centers of y-faces."""
        return RegularGrid2D(self._x, _midpoints(self._y))

    # ---- index conversions

    def to_linear_point_index(self, point_split_index: Sequence[int]) -> int:
        ix, iy = point_split_index
        return ix + len(self._x) * iy

    def to_split_point_index(self, ipoint: int) -> tuple[int, int]:
        return (ipoint % len(self._x), ipoint // len(self._x))

    def cell_centered_grid_index_ip_jp(self, i: int, j: int) -> int:
        """Linear index of the [i+1/2, j+1/2] cell center."""
        if not (0 <= i < len(self._x) - 1 and 0 <= j < len(self._y) - 1):
            raise IndexError(f"Invalid cell_centered_grid_index_ip_jp() arguments: i={i}, j={j}")
        return i + j * (len(self._x) - 1)

    def xface_grid_index_ip_j(self, i: int, j: int) -> int:
        """Linear index of the [i+1/2, j] x-face."""
        if not (0 <= i < len(self._x) - 1 and 0 <= j < len(self._y)):
            raise IndexError(f"Invalid xface_grid_index_ip_j() arguments: i={i}, j={j}")
        return i + j * (len(self._x) - 1)

    def yface_grid_index_i_jp(self, i: int, j: int) -> int:
        """Linear index of the [i, j+1/2] y-face."""
        if not (0 <= i < len(self._x) and 0 <= j < len(self._y) - 1):
            raise IndexError(f"Invalid yface_grid_index_i_jp() arguments: i={i}, j={j}")
        return i + j * len(self._x)

    # ---- active cells and face types

    def is_active_cell(self, icell: int) -> bool:
        self._check_cell(icell)
        return self._actnum[icell]

    def deactivate_cells(self, bot_left: Sequence[float], top_right: Sequence[float]) -> None:
        """Deactivate cells whose centers lie within the given rectangle."""
        xc = _midpoints(self._x)
        yc = _midpoints(self._y)
        i_begin = bisect_right(xc, bot_left[0])
        i_end = bisect_right(xc, top_right[0])
        j_begin = bisect_left(yc, bot_left[1])
        j_end = bisect_left(yc, top_right[1])
        for i in range(i_begin, i_end):
            for j in range(j_begin, j_end):
                self._actnum[i + j * self.nx()] = False
        self._set_face_types()

    def actnum(self) -> list[bool]:
        """Active flag for every cell."""
        return list(self._actnum)

    def xface_type(self, xface_index: int) -> FaceType:
        return self._xface_types[xface_index]

    def yface_type(self, yface_index: int) -> FaceType:
        return self._yface_types[yface_index]

    def boundary_xfaces(self) -> list[tuple[int, int]]:
        """Split [i, j] indices of boundary x-faces."""
        return list(self._boundary_xfaces)

    def boundary_yfaces(self) -> list[tuple[int, int]]:
        """Split [i, j] indices of boundary y-faces."""
        return list(self._boundary_yfaces)

    def _classify(self, active_a: bool, active_b: bool) -> FaceType:
        if active_a and active_b:
            return FaceType.INTERNAL
        if not active_a and not active_b:
            return FaceType.DEACTIVATED
        return FaceType.BOUNDARY

    def _set_face_types(self) -> None:
        nx, ny = self.nx(), self.ny()

        self._yface_types = [FaceType.INTERNAL] * ((nx + 1) * ny)
        self._boundary_yfaces = []
        for j in range(ny):
            self._yface_types[self.yface_grid_index_i_jp(0, j)] = FaceType.BOUNDARY
            self._yface_types[self.yface_grid_index_i_jp(nx, j)] = FaceType.BOUNDARY
            self._boundary_yfaces.extend([(0, j), (nx, j)])
        for i in range(1, nx):
            for j in range(ny):
                kind = self._classify(
                    self._actnum[self.cell_centered_grid_index_ip_jp(i - 1, j)],
                    self._actnum[self.cell_centered_grid_index_ip_jp(i, j)],
                )
                self._yface_types[self.yface_grid_index_i_jp(i, j)] = kind
                if kind is FaceType.BOUNDARY:
                    self._boundary_yfaces.append((i, j))

        self._xface_types = [FaceType.INTERNAL] * ((ny + 1) * nx)
        self._boundary_xfaces = []
        for i in range(nx):
            self._xface_types[self.xface_grid_index_ip_j(i, 0)] = FaceType.BOUNDARY
            self._xface_types[self.xface_grid_index_ip_j(i, ny)] = FaceType.BOUNDARY
            self._boundary_xfaces.extend([(i, 0), (i, ny)])
        for i in range(nx):
            for j in range(1, ny):
                kind = self._classify(
                    self._actnum[self.cell_centered_grid_index_ip_jp(i, j - 1)],
                    self._actnum[self.cell_centered_grid_index_ip_jp(i, j)],
                )
                self._xface_types[self.xface_grid_index_ip_j(i, j)] = kind
                if kind is FaceType.BOUNDARY:
                    self._boundary_xfaces.append((i, j))

    # ---- index helpers

    def _check_cell(self, icell: int) -> None:
        if not 0 <= icell < self.n_cells():
            raise IndexError(f"cell {icell} is outside a grid of {self.n_cells()} cells")

    def _cell_split(self, icell: int) -> tuple[int, int]:
        self._check_cell(icell)
        return icell % self.nx(), icell // self.nx()

    def _face_split(self, iface: int) -> tuple[bool, int, int]:
        """(is x-face, ix, iy) for a linear face index."""
        if not 0 <= iface < self.n_faces():
            raise IndexError(f"face {iface} is outside a grid of {self.n_faces()} faces")
        n_xfaces = self._n_xfaces()
        if iface < n_xfaces:
            return True, iface % self.nx(), iface // self.nx()
        k = iface - n_xfaces
        return False, k % (self.nx() + 1), k // (self.nx() + 1)

    # ---- Grid interface

    def dim(self) -> int:
        return 2

    def n_points(self) -> int:
        return len(self._x) * len(self._y)

    def n_cells(self) -> int:
        return (len(self._x) - 1) * (len(self._y) - 1)

    def n_faces(self) -> int:
        nx, ny = self.nx(), self.ny()
        return (nx + 1) * ny + nx * (ny + 1)

    def point(self, ipoint: int) -> Point:
        if not 0 <= ipoint < self.n_points():
            raise IndexError(f"point {ipoint} is outside a grid of {self.n_points()} points")
        ix, iy = self.to_split_point_index(ipoint)
        return (self._x[ix], self._y[iy], 0.0)

    def cell_center(self, icell: int) -> Point:
        ix, iy = self._cell_split(icell)
        return (
            0.5 * (self._x[ix] + self._x[ix + 1]),
            0.5 * (self._y[iy] + self._y[iy + 1]),
            0.0,
        )

    def cell_volume(self, icell: int) -> float:
        ix, iy = self._cell_split(icell)
        return (self._x[ix + 1] - self._x[ix]) * (self._y[iy + 1] - self._y[iy])

    def face_normal(self, iface: int) -> Vector:
        is_xface, _, _ = self._face_split(iface)
        return (0.0, 1.0, 0.0) if is_xface else (1.0, 0.0, 0.0)

    def face_area(self, iface: int) -> float:
        is_xface, ix, iy = self._face_split(iface)
        if is_xface:
            return self._x[ix + 1] - self._x[ix]
        return self._y[iy + 1] - self._y[iy]

    def face_center(self, iface: int) -> Point:
        is_xface, ix, iy = self._face_split(iface)
        if is_xface:
            return (0.5 * (self._x[ix + 1] + self._x[ix]), self._y[iy], 0.0)
        return (self._x[ix], 0.5 * (self._y[iy + 1] + self._y[iy]), 0.0)

    def points(self) -> list[Point]:
        return [(x, y, 0.0) for y in self._y for x in self._x]

    def tab_cell_point(self, icell: int) -> list[int]:
        ix, iy = self._cell_split(icell)
        nxp = len(self._x)
        return [
            ix + iy * nxp,
            ix + 1 + iy * nxp,
            ix + 1 + (iy + 1) * nxp,
            ix + (iy + 1) * nxp,
        ]

    def tab_face_cell(self, iface: int) -> tuple[int | None, int | None]:
        is_xface, ix, iy = self._face_split(iface)
        nx = self.nx()
        if is_xface:
            if iy == 0:
                return (INVALID_INDEX, iy * nx + ix)
            if iy == self.ny():
                return ((iy - 1) * nx + ix, INVALID_INDEX)
            return ((iy - 1) * nx + ix, iy * nx + ix)
        if ix == 0:
            return (INVALID_INDEX, iy * nx + ix)
        if ix == nx:
            return (iy * nx + ix - 1, INVALID_INDEX)
        return (iy * nx + ix - 1, iy * nx + ix)

    def tab_face_point(self, iface: int) -> list[int]:
        is_xface, ix, iy = self._face_split(iface)
        nxp = self.nx() + 1
        if is_xface:
            return [iy * nxp + ix + 1, iy * nxp + ix]
        return [iy * nxp + ix, (iy + 1) * nxp + ix]

    def tab_cell_face(self, icell: int) -> list[int]:
        ix, iy = self._cell_split(icell)
        nx = self.nx()
        n_xfaces = self._n_xfaces()
        return [
            iy * nx + ix,
            n_xfaces + iy * (nx + 1) + ix + 1,
            (iy + 1) * nx + ix,
            n_xfaces + iy * (nx + 1) + ix,
        ]

    def save_vtk(self, fname: str | os.PathLike) -> None:
        """Save the grid as a legacy vtk unstructured grid of quad cells."""
        n = self.n_cells()
        with open(fname, "w") as fs:
            vtk.append_header("Grid2", fs)
            vtk.append_points(self.points(), fs)
            fs.write(f"CELLS  {n}   {5 * n}\n")
            for icell in range(n):
                fs.write("4 " + " ".join(str(p) for p in self.tab_cell_point(icell)) + "\n")
            fs.write(f"CELL_TYPES  {n}\n")
            fs.writelines("9\n" for _ in range(n))