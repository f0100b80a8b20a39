"""Writers for the legacy ASCII vtk format and vtk time series files."""

from __future__ import annotations

import json
import math
import os
import shutil
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TextIO

_CELL_DATA = "CELL_DATA"
_POINT_DATA = "POINT_DATA"


def _fmt(value: float) -> str:
    return f"{float(value):g}"


def _vec3(coords: Iterable[float]) -> tuple[float, float, float]:
    values = [float(c) for c in coords]
    if not 1 <= len(values) <= 3:
        raise ValueError(f"a vector has 1 to 3 components, got {len(values)}")
    values.extend([0.0] * (3 - len(values)))
    return values[0], values[1], values[2]


def _resolve_ndata(length: int, ndata: int | None) -> int:
    if not ndata:
        return length
    if ndata < 0 or ndata > length:
        raise ValueError("data length is invalid")
    return ndata


def _scalar_block(values: Iterable[float], data_cap: str) -> str:
    lines = [f"SCALARS {data_cap} double 1", "LOOKUP_TABLE default"]
    lines.extend(_fmt(v) for v in values)
    return "\n".join(lines) + "\n"


def _vector_block(rows: Iterable[tuple[float, float, float]], data_cap: str) -> str:
    lines = [f"SCALARS {data_cap} double 3", "LOOKUP_TABLE default"]
    lines.extend(" ".join(_fmt(c) for c in row) for row in rows)
    return "\n".join(lines) + "\n"


def _read_text(fname: str | os.PathLike) -> str:
    path = Path(fname)
    return path.read_text() if path.exists() else ""


def _write_cell_string(fname: str | os.PathLike, data: str, ndata: int) -> None:
    content = _read_text(fname)
    header = "" if _CELL_DATA in content else f"{_CELL_DATA} {ndata}\n"
    point_pos = content.find(_POINT_DATA)
    if point_pos >= 0:
        content = content[:point_pos] + header + data + content[point_pos:]
    else:
        content = content + header + data
    Path(fname).write_text(content)


def _write_point_string(fname: str | os.PathLike, data: str, ndata: int) -> None:
    content = _read_text(fname)
    header = "" if _POINT_DATA in content else f"{_POINT_DATA} {ndata}\n"
    with open(fname, "a") as fs:
        fs.write(header + data)


def _component_rows(components: Sequence[Sequence[float]], ndata: int | None):
    comps = [list(c) for c in components]
    if len(comps) not in (2, 3):
        raise ValueError(f"expected 2 or 3 component arrays, got {len(comps)}")
    n = _resolve_ndata(len(comps[0]), ndata)
    if any(len(c) < n for c in comps):
        raise ValueError("data length is invalid")
    rows = [_vec3(row) for row in zip(*(c[:n] for c in comps))]
    return rows, n


def append_header(caption: str, stream: TextIO) -> None:
    """Write the vtk file header with the given caption."""
    stream.write(f"# vtk DataFile Version 3.0\n{caption}\nASCII\n")


def append_points(points: Sequence[Sequence[float]], stream: TextIO) -> None:
    """Write the dataset declaration and the point list."""
    stream.write("DATASET UNSTRUCTURED_GRID\n")
    stream.write(f"POINTS {len(points)} double\n")
    for p in points:
        stream.write(" ".join(_fmt(c) for c in _vec3(p)) + "\n")


def add_cell_data(
    data: Sequence[float], data_cap: str, fname: str | os.PathLike, ndata: int | None = None
) -> None:
    """Add scalar cell data to a saved vtk grid; ndata of None or 0 means all of data."""
    n = _resolve_ndata(len(data), ndata)
    _write_cell_string(fname, _scalar_block(list(data)[:n], data_cap), n)


def add_cell_vector(
    data: Sequence[Sequence[float]], data_cap: str, fname: str | os.PathLike, ndata: int | None = None
) -> None:
    """Add vector cell data to a saved vtk grid."""
    n = _resolve_ndata(len(data), ndata)
    _write_cell_string(fname, _vector_block([_vec3(v) for v in list(data)[:n]], data_cap), n)


def add_cell_components(
    components: Sequence[Sequence[float]], data_cap: str, fname: str | os.PathLike,
    ndata: int | None = None,
) -> None:
    """Add cell vector data given as 2 or 3 per-component arrays."""
    rows, n = _component_rows(components, ndata)
    _write_cell_string(fname, _vector_block(rows, data_cap), n)


def add_point_data(
    data: Sequence[float], data_cap: str, fname: str | os.PathLike, ndata: int | None = None
) -> None:
    """Add scalar point data to a saved vtk grid; ndata of None or 0 means all of data."""
    n = _resolve_ndata(len(data), ndata)
    _write_point_string(fname, _scalar_block(list(data)[:n], data_cap), n)


def add_point_vector(
    data: Sequence[Sequence[float]], data_cap: str, fname: str | os.PathLike, ndata: int | None = None
) -> None:
    """Add vector point data to a saved vtk grid."""
    n = _resolve_ndata(len(data), ndata)
    _write_point_string(fname, _vector_block([_vec3(v) for v in list(data)[:n]], data_cap), n)


def add_point_components(
    components: Sequence[Sequence[float]], data_cap: str, fname: str | os.PathLike,
    ndata: int | None = None,
) -> None:
    """Add point vector data given as 2 or 3 per-component arrays."""
    rows, n = _component_rows(components, ndata)
    _write_point_string(fname, _vector_block(rows, data_cap), n)


class TimeSeriesWriter:
    """Records increasing time points in a '<stem>.vtk.series' file.

    Instant data files are meant to go into the '<stem>' directory, which is
    purged when the writer is created.
    """

    def __init__(self, stem: str | os.PathLike):
        self._stem = os.fspath(stem)
        self._series_fn = self._stem + ".vtk.series"
        self._entries: list[str] = []
        self._step = 0.0
        self._step_eps = 0.0
        self._last_saved_point = -1

        stem_path = Path(self._stem)
        if stem_path.is_dir():
            shutil.rmtree(stem_path)
        stem_path.mkdir()
        self._save_series()

    def add(self, tm: float) -> str | None:
        """Record a time point and return its vtk file name.

        Returns None when the time step condition rejects the time point.
        The vtk file itself is not created.
        """
        if self._step > 0:
            index = self._time_point_index(tm)
            if index <= self._last_saved_point:
                return None
            self._last_saved_point = index

        name = f"{self._stem}/{f'{tm:.4f}'.rjust(8, '0')}.vtk"
        self._entries.append(f"    {{\"name\": {json.dumps(name)}, \"time\": {_fmt(tm)}}}")
        self._save_series()
        return name

    def set_time_step(self, tm_step: float, eps: float = 1e-6) -> None:
        """Save at most one time point per [N*tm_step - eps, (N+1)*tm_step) period.

        A zero step saves every time point.
        """
        self._step = tm_step
        self._step_eps = eps

    def _time_point_index(self, tm: float) -> int:
        index = math.floor(tm / self._step)
        next_point = index * self._step + self._step
        return index + 1 if next_point - tm < self._step_eps else index

    def _save_series(self) -> None:
        lines = ["{", '  "file-series-version" : "1.0",', '  "files" : [']
        if self._entries:
            lines.append(",\n".join(self._entries))
        lines.extend(["  ]", "}"])
        try:
            Path(self._series_fn).write_text("\n".join(lines) + "\n")
        except OSError as exc:
            raise OSError(f"Failed to open {self._series_fn} for writing") from exc