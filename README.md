# cfdkit

Building blocks for small computational fluid dynamics solvers.

- **Grids** (`cfdkit.grid1d`, `cfdkit.regular_grid2d`,
  `cfdkit.unstructured_grid2d`): `Grid1D`, `RegularGrid2D` (uniform or
  non-uniform, with cell deactivation and face types) and `UnstructuredGrid2D`
  (built from points and cell connectivity, converted from another 2D grid, or
  read from a legacy ASCII VTK file). All share the `Grid` interface from
  `cfdkit.igrid`: points, cells, faces, cell centers and volumes, face normals,
  areas and centers, and the cell/face/point connectivity tables.
- **Matrices** (`cfdkit.lodmat`, `cfdkit.csrmat`, `cfdkit.matrix`):
  `LodMatrix` (list of dictionaries, easy to assemble), `CsrMatrix` and
  `CsrStencil` (compressed sparse row), and a small `DenseMatrix`.
- **Linear solver** (`cfdkit.solver`): `MatrixSolver` and `solve_slae`, which
  solve square sparse systems by sparse LU factorization.
- **Quadratures** (`cfdkit.quadrature`): Gauss rules on the segment, the square
  and the triangle.
- **VTK output** (`cfdkit.vtk`): writing grids, attaching point and cell data,
  and time series (`.vtk.series`) with `TimeSeriesWriter`.

Points and vectors are plain `(x, y, z)` tuples of floats.

## Installation

```
pip install cfdkit
```

## Example: 1D Poisson problem

```python
import math

from cfdkit import vtk
from cfdkit.grid1d import Grid1D
from cfdkit.lodmat import LodMatrix
from cfdkit.solver import solve_slae

grid = Grid1D(0.0, 1.0, 100)
n = grid.n_points()
h = grid.point(1)[0] - grid.point(0)[0]

mat = LodMatrix(n)
mat.add_value(0, 0, 1.0)
mat.add_value(n - 1, n - 1, 1.0)
for i in range(1, n - 1):
    mat.add_value(i, i - 1, -1.0 / h**2)
    mat.add_value(i, i + 1, -1.0 / h**2)
    mat.add_value(i, i, 2.0 / h**2)

def exact(x):
    return math.sin(10 * x * x)

def rhs(x):
    return 400 * x * x * math.sin(10 * x * x) - 20 * math.cos(10 * x * x)

xs = [p[0] for p in grid.points()]
b = [exact(xs[0])] + [rhs(x) for x in xs[1:-1]] + [exact(xs[-1])]

u = solve_slae(mat.to_csr(), b)     # a LodMatrix is accepted as well

grid.save_vtk("poisson.vtk")
vtk.add_point_data(u, "numerical", "poisson.vtk")
```

`MatrixSolver` keeps the factorization, so one matrix can be solved for many
right hand sides:

```python
from cfdkit.solver import MatrixSolver

solver = MatrixSolver()
solver.set_matrix(mat)
x = solver.solve(b)
```

A singular matrix raises `ValueError`; calling `solve` before `set_matrix`
raises `RuntimeError`.

## Grids

```python
from cfdkit.regular_grid2d import RegularGrid2D
from cfdkit.unstructured_grid2d import UnstructuredGrid2D

reg = RegularGrid2D.uniform(0, 1, 1, 3, 3, 2)
reg.n_points()          # 12
reg.cell_center(4)      # (0.5, 2.5, 0.0)

nonuni = RegularGrid2D([10, 12, 15, 16], [-10, -8, -3])
ugrid = UnstructuredGrid2D.from_grid(nonuni)
ugrid.n_faces()         # 17

grid = UnstructuredGrid2D.vtk_read("mesh.vtk", silent=True)
```

`vtk_read` takes triangle, polygon, pixel and quad cells, skips other cell
kinds, rejects triangle strips and non-zero z coordinates, and turns clockwise
cells counter clockwise.

In `tab_face_cell` a missing neighbour on a boundary face is
`cfdkit.common.INVALID_INDEX` (`None`). Boundary faces and boundary points are
available on every grid through `boundary_faces()` and `boundary_points()`.

`RegularGrid2D.deactivate_cells(bot_left, top_right)` switches off the cells
whose centers lie in a rectangle; `xface_type` and `yface_type` then report each
face as a `FaceType` (`INTERNAL`, `BOUNDARY` or `DEACTIVATED`).

## Quadratures

```python
from cfdkit.quadrature import quadrature_segment_gauss, quadrature_triangle_gauss

quad = quadrature_segment_gauss(3)
quad.integrate(lambda p: p[0] ** 4)   # exact on [-1, 1]: 0.4

tri = quadrature_triangle_gauss(2)
tri.integrate(lambda p: 1.0)          # area of the reference triangle: 0.5
```

Segment rules have 1 to 6 points, square rules orders 1 to 4, triangle rules
orders 1 to 6. A function returning a sequence is integrated component by
component; `integrate_values` takes values already computed at the points.

## Time series

```python
from cfdkit.vtk import TimeSeriesWriter

writer = TimeSeriesWriter("transport")
writer.set_time_step(0.1, 1e-6)
fname = writer.add(0.0)              # "transport/000.0000.vtk"
```

`add` records the time point in `transport.vtk.series` and returns the file
name to write the data to; it returns `None` for time points that fall within
an already saved step. It does not create the vtk file itself. The stem
directory is purged when the writer is created.

## What the package does not do

cfdkit gives the pieces, not ready-made solvers: there are no finite-volume or
finite-element assemblers, no 3D grids, no point search, and no command-line
tool. Equations are assembled by the caller into a `LodMatrix` or `CsrMatrix`.
The linear solver is a direct one; it has no iteration limit or tolerance
settings.

## Running the tests

```
pip install cfdkit[test]
pytest
```