"""Unstructured 2d grid of polygonal cells."""

from __future__ import annotations

import math
import os
from collections.abc import Iterable, Sequence
from functools import cached_property
from pathlib import Path

from . import vtk
from .common import INVALID_INDEX
from .igrid import Grid, Point, Vector


def _as_point(coords: Iterable[float]) -> Point:
    values = [float(c) for c in coords]
    if not 1 <= len(values) <= 3:
        raise ValueError(f"a point has 1 to 3 coordinates, got {len(values)}")
    values.extend([0.0] * (3 - len(values)))
    return (values[0], values[1], values[2])


def _signed_triangle_area(p0: Point, p1: Point, p2: Point) -> float:
    return 0.5 * ((p1[0] - p0[0]) * (p2[1] - p0[1]) - (p1[1] - p0[1]) * (p2[0] - p0[0]))


def _edge_key(edge: tuple[int, int, int]) -> tuple[int, int]:
    a, b, _ = edge
    return (min(a, b), max(a, b))


def _assemble_faces(
    cells: Sequence[Sequence[int]],
) -> tuple[tuple[tuple[int, int], ...], tuple[tuple[int | None, int | None], ...]]:
    """Build face->point and face->cell tables from the cell->point table.

    Faces are ordered by their (lower, upper) point indices. The face points
    go from the lower to the upper index; the cell on the left of that
    direction is on the negative face side.
    """
    edges = [
        (p0, p1, icell)
        for icell, cell in enumerate(cells)
        for p0, p1 in zip((cell[-1], *cell[:-1]), cell)
    ]
    edges.sort(key=_edge_key)

    face_points: list[list[int]] = []
    face_cells: list[list[int | None]] = []
    prev_key = None
    for edge in edges:
        key = _edge_key(edge)
        p0, p1, icell = edge
        if key != prev_key:
            face_points.append([p0, p1])
            face_cells.append([icell, INVALID_INDEX])
            prev_key = key
        else:
            face_cells[-1][1] = icell

    for fp, fc in zip(face_points, face_cells):
        if fp[0] > fp[1]:
            fp.reverse()
            fc.reverse()

    return (
        tuple((a, b) for a, b in face_points),
        tuple((a, b) for a, b in face_cells),
    )


class _VtkLineReader:
    """Line and token reader over the text of a legacy vtk file."""

    def __init__(self, text: str):
        self._lines = text.splitlines()
        self._pos = 0
        self._rest: list[str] = []

    def line_by_start(self, start: str) -> str:
        if self._rest:
            candidate = " ".join(self._rest)
            self._rest = []
            if candidate.startswith(start):
                return candidate
        while self._pos < len(self._lines):
            line = self._lines[self._pos].rstrip("\r")
            self._pos += 1
            if line.startswith(start):
                return line
        raise ValueError(f"{start} line not found while reading input")

    def tokens(self, n: int) -> list[str]:
        out: list[str] = []
        while len(out) < n:
            if not self._rest:
                if self._pos >= len(self._lines):
                    raise ValueError("unexpected end of vtk data")
                self._rest = self._lines[self._pos].split()
                self._pos += 1
                continue
            take = n - len(out)
            out.extend(self._rest[:take])
            self._rest = self._rest[take:]
        return out


def _header_ints(line: str, count: int) -> list[int]:
    parts = line.split()
    try:
        return [int(v) for v in parts[1:1 + count]]
    except ValueError as exc:
        raise ValueError(f"invalid vtk section header: {line!r}") from exc


class UnstructuredGrid2D(Grid):
    """2d grid given by a point table and counter clockwise cell->point connectivity."""

    def __init__(self, points: Iterable[Iterable[float]], cell_point: Iterable[Iterable[int]]):
        self._points: tuple[Point, ...] = tuple(_as_point(p) for p in points)
        self._cells: tuple[tuple[int, ...], ...] = tuple(
            tuple(int(i) for i in cell) for cell in cell_point
        )
        if not self._cells:
            raise ValueError("no cells in grid")
        if not self._points:
            raise ValueError("no points in grid")
        n_points = len(self._points)
        for icell, cell in enumerate(self._cells):
            if len(cell) < 3:
                raise ValueError(f"cell {icell} has fewer than 3 points")
            if any(not 0 <= p < n_points for p in cell):
                raise ValueError(f"cell {icell} refers to a point outside the point table")
        self._face_points, self._face_cells = _assemble_faces(self._cells)

    @classmethod
    def from_grid(cls, grid: Grid) -> UnstructuredGrid2D:
        """Convert any 2d grid into the unstructured format."""
        if grid.dim() != 2:
            raise ValueError(f"expected a 2d grid, got a {grid.dim()}d one")
        return cls(grid.points(), [grid.tab_cell_point(i) for i in range(grid.n_cells())])

    @classmethod
    def vtk_read(cls, filename: str | os.PathLike, silent: bool = False) -> UnstructuredGrid2D:
        """Read a grid from a legacy ASCII vtk file.

        Polygon, triangle, quad and pixel cells are taken, other cell kinds are
        skipped. Clockwise cells are reversed to counter clockwise.
        """
        if not silent:
            print(f"Reading grid from {os.fspath(filename)}")
        path = Path(filename)
        if not path.is_file():
            raise FileNotFoundError(f"{os.fspath(filename)} is not found")
        reader = _VtkLineReader(path.read_text())

        line = reader.line_by_start("DATASET")
        if line[8:] != "UNSTRUCTURED_GRID":
            raise ValueError("Only unstructured grid can be read")

        (n_points,) = _header_ints(reader.line_by_start("POINTS"), 1)
        coords = [float(v) for v in reader.tokens(3 * n_points)]
        points: list[tuple[float, float]] = []
        for x, y, z in zip(coords[0::3], coords[1::3], coords[2::3]):
            if z != 0:
                raise ValueError("Z-coordinate for 2d grids should be zero")
            points.append((x, y))
        if not silent:
            print(f"-- {n_points} points")

        n_cells, n_totals = _header_ints(reader.line_by_start("CELLS"), 2)
        totals = [int(v) for v in reader.tokens(n_totals)]
        reader.line_by_start("CELL_TYPES")
        types = [int(v) for v in reader.tokens(n_cells)]

        cell_points: list[list[int]] = []
        cursor = 0
        for cell_type in types:
            if cursor >= len(totals):
                raise ValueError("cell table is shorter than declared")
            length = totals[cursor]
            ids = totals[cursor + 1:cursor + 1 + length]
            if len(ids) != length:
                raise ValueError("cell table is shorter than declared")
            if cell_type in (5, 7, 9):
                cell_points.append(list(ids))
            elif cell_type == 6:
                raise ValueError("Triangle strips are not supported")
            elif cell_type == 8:
                cell_points.append([ids[0], ids[1], ids[3], ids[2]])
            cursor += length + 1
        if not silent:
            print(f"-- {len(cell_points)} 2d cells")

        ret = cls(points, cell_points)
        bad_dir = 0
        for icell, cell in enumerate(cell_points):
            if ret.cell_volume(icell) < 0:
                bad_dir += 1
                cell[1:] = cell[:0:-1]
        if bad_dir == 0:
            return ret
        if not silent:
            print(f"-- {bad_dir} cells are reversed")
        return cls(points, cell_points)

    # ---- cached geometry

    @cached_property
    def _centers_and_volumes(self) -> tuple[tuple[Point, ...], tuple[float, ...]]:
        centers: list[Point] = []
        volumes: list[float] = []
        for cell in self._cells:
            p0 = self._points[cell[0]]
            sum_area = sum_x = sum_y = 0.0
            for i1, i2 in zip(cell[1:-1], cell[2:]):
                p1, p2 = self._points[i1], self._points[i2]
                area = _signed_triangle_area(p0, p1, p2)
                sum_x += area * (p0[0] + p1[0] + p2[0]) / 3.0
                sum_y += area * (p0[1] + p1[1] + p2[1]) / 3.0
                sum_area += area
            centers.append((sum_x / sum_area, sum_y / sum_area, 0.0))
            volumes.append(sum_area)
        return tuple(centers), tuple(volumes)

    @cached_property
    def _face_normals(self) -> tuple[Vector, ...]:
        normals: list[Vector] = []
        for a, b in self._face_points:
            p0, p1 = self._points[a], self._points[b]
            sx, sy = p1[0] - p0[0], p1[1] - p0[1]
            length = math.hypot(sx, sy)
            normals.append((sy / length, -sx / length, 0.0))
        return tuple(normals)

    @cached_property
    def _face_areas(self) -> tuple[float, ...]:
        return tuple(math.dist(self._points[a], self._points[b]) for a, b in self._face_points)

    @cached_property
    def _cell_faces(self) -> tuple[tuple[int, ...], ...]:
        table: list[list[int]] = [[] for _ in self._cells]
        for iface, cells in enumerate(self._face_cells):
            for icell in cells:
                if icell is not INVALID_INDEX:
                    table[icell].append(iface)
        return tuple(tuple(faces) for faces in table)

    # ---- index checks

    def _check_point(self, ipoint: int) -> int:
        if not 0 <= ipoint < len(self._points):
            raise IndexError(f"point {ipoint} is outside a grid of {len(self._points)} points")
        return ipoint

    def _check_cell(self, icell: int) -> int:
        if not 0 <= icell < len(self._cells):
            raise IndexError(f"cell {icell} is outside a grid of {len(self._cells)} cells")
        return icell

    def _check_face(self, iface: int) -> int:
        if not 0 <= iface < len(self._face_cells):
            raise IndexError(f"face {iface} is outside a grid of {len(self._face_cells)} faces")
        return iface

    # ---- Grid interface

    def dim(self) -> int:
        return 2

    def n_points(self) -> int:
        return len(self._points)

    def n_cells(self) -> int:
        return len(self._cells)

    def n_faces(self) -> int:
        return len(self._face_cells)

    def point(self, ipoint: int) -> Point:
        return self._points[self._check_point(ipoint)]

    def cell_center(self, icell: int) -> Point:
        return self._centers_and_volumes[0][self._check_cell(icell)]

    def cell_volume(self, icell: int) -> float:
        return self._centers_and_volumes[1][self._check_cell(icell)]

    def face_normal(self, iface: int) -> Vector:
        return self._face_normals[self._check_face(iface)]

    def face_area(self, iface: int) -> float:
        return self._face_areas[self._check_face(iface)]

    def face_center(self, iface: int) -> Point:
        a, b = self._face_points[self._check_face(iface)]
        p0, p1 = self._points[a], self._points[b]
        return tuple((c0 + c1) / 2.0 for c0, c1 in zip(p0, p1))

    def points(self) -> list[Point]:
        return list(self._points)

    def tab_cell_point(self, icell: int) -> list[int]:
        return list(self._cells[self._check_cell(icell)])

    def tab_face_cell(self, iface: int) -> tuple[int | None, int | None]:
        return self._face_cells[self._check_face(iface)]

    def tab_face_point(self, iface: int) -> list[int]:
        return list(self._face_points[self._check_face(iface)])

    def tab_cell_face(self, icell: int) -> list[int]:
        return list(self._cell_faces[self._check_cell(icell)])

    def save_vtk(self, fname: str | os.PathLike) -> None:
        """Save the grid as a legacy vtk unstructured grid of polygon cells."""
        cell_lines = [
            " ".join(str(v) for v in (len(cell), *cell)) for cell in self._cells
        ]
        n_totals = sum(len(cell) + 1 for cell in self._cells)
        n = self.n_cells()
        with open(fname, "w") as fs:
            vtk.append_header("Grid2", fs)
            vtk.append_points(self.points(), fs)
            fs.write(f"CELLS {n} {n_totals}\n")
            fs.writelines(line + "\n" for line in cell_lines)
            fs.write(f"CELL_TYPES {n}\n")
            fs.writelines("7\n" for _ in range(n))