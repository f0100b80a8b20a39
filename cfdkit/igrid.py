"""Abstract grid interface shared by all grid kinds."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .common import INVALID_INDEX

Point = tuple[float, float, float]
Vector = tuple[float, float, float]


class Grid(ABC):
    """Grid of any dimension: points, cells and faces with connectivity."""

    @abstractmethod
    def dim(self) -> int:
        """Number of geometric dimensions: 1, 2 or 3."""

    @abstractmethod
    def n_points(self) -> int:
        """Number of grid points."""

    @abstractmethod
    def n_cells(self) -> int:
        """Number of grid cells."""

    @abstractmethod
    def n_faces(self) -> int:
        """Number of grid faces."""

    @abstractmethod
    def point(self, ipoint: int) -> Point:
        """Point at the given index."""

    @abstractmethod
    def cell_center(self, icell: int) -> Point:
        """Cell center."""

    @abstractmethod
    def cell_volume(self, icell: int) -> float:
        """Cell volume."""

    @abstractmethod
    def face_normal(self, iface: int) -> Vector:
        """Unit normal of the face."""

    @abstractmethod
    def face_area(self, iface: int) -> float:
        """Face area."""

    @abstractmethod
    def face_center(self, iface: int) -> Point:
        """Face center."""

    @abstractmethod
    def points(self) -> list[Point]:
        """All grid points."""

    @abstractmethod
    def tab_cell_point(self, icell: int) -> list[int]:
        """Cell->point connectivity.

        1d grids order points by x, 2d grids counter clockwise.
        """

    @abstractmethod
    def tab_face_cell(self, iface: int) -> tuple[int | None, int | None]:
        """Cells on the negative and positive side of the face.

        The positive side lies towards the face normal. A missing cell on a
        boundary face is INVALID_INDEX.
        """

    @abstractmethod
    def tab_face_point(self, iface: int) -> list[int]:
        """Face->point connectivity."""

    @abstractmethod
    def tab_cell_face(self, icell: int) -> list[int]:
        """Cell->face connectivity."""

    def boundary_faces(self) -> list[int]:
        """Faces with a cell on one side only, in index order."""
        cached = getattr(self, "_boundary_faces_cache", None)
        if not cached:
            cached = [
                iface
                for iface in range(self.n_faces())
                if INVALID_INDEX in self.tab_face_cell(iface)
            ]
            self._boundary_faces_cache = cached
        return list(cached)

    def boundary_points(self) -> list[int]:
        """Sorted points that belong to boundary faces."""
        cached = getattr(self, "_boundary_points_cache", None)
        if not cached:
            cached = sorted(
                {ipoint for iface in self.boundary_faces() for ipoint in self.tab_face_point(iface)}
            )
            self._boundary_points_cache = cached
        return list(cached)

    @abstractmethod
    def save_vtk(self, fname) -> None:
        """Save the grid in the legacy vtk format."""