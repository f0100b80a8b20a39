import math

import pytest

from cfdkit.common import INVALID_INDEX
from cfdkit.csrmat import CsrMatrix
from cfdkit.grid1d import Grid1D
from cfdkit.lodmat import LodMatrix
from cfdkit.solver import MatrixSolver, solve_slae


def _sample_csr():
    m = CsrMatrix()
    m.set_stencil([0, 1, 3, 5], [0, 1, 2, 0, 2])
    m.set_values([1, 3, 1, 1, 3])
    return m


def test_csr_matrix_solution():
    m = _sample_csr()
    assert m.n_rows() == 3
    assert m.n_nonzeros() == 5
    solver = MatrixSolver()
    solver.set_matrix(m)
    x = solver.solve([1, 1, 1])
    assert x[0] == pytest.approx(1.0, abs=1e-5)
    assert x[1] == pytest.approx(0.333333, abs=1e-5)
    assert x[2] == pytest.approx(0.0, abs=1e-5)


def test_solve_slae_satisfies_system():
    m = _sample_csr()
    rhs = [2.0, -1.0, 4.0]
    x = solve_slae(m, rhs)
    assert m.mult_vec(x) == pytest.approx(rhs)


def test_solver_accepts_lod_matrix():
    mat = LodMatrix(2)
    mat.add_value(0, 0, 2.0)
    mat.add_value(1, 1, 4.0)
    mat.add_value(0, 1, 1.0)
    assert solve_slae(mat, [3.0, 4.0]) == pytest.approx([1.0, 1.0])


def test_solver_reuses_matrix():
    solver = MatrixSolver()
    solver.set_matrix(_sample_csr())
    assert solver.solve([1, 0, 0]) != pytest.approx(solver.solve([0, 1, 0]))
    assert _sample_csr().mult_vec(solver.solve([0, 1, 0])) == pytest.approx([0, 1, 0])


def test_solve_without_matrix():
    with pytest.raises(RuntimeError, match="Matrix was not passed"):
        MatrixSolver().solve([1.0])


def test_singular_matrix():
    mat = LodMatrix(2)
    mat.set_value(0, 0, 1.0)
    mat.set_value(1, 1, 0.0)
    with pytest.raises(ValueError, match="singular"):
        MatrixSolver().set_matrix(mat)


def test_rhs_length_mismatch():
    solver = MatrixSolver()
    solver.set_matrix(_sample_csr())
    with pytest.raises(ValueError):
        solver.solve([1.0, 2.0])


# ---- Poisson 1d, finite differences

def _exact_solution(x):
    return math.sin(10 * x * x)


def _exact_rhs(x):
    return 400 * x * x * math.sin(10 * x * x) - 20 * math.cos(10 * x * x)


def _poisson_fdm_norm2(n_cells):
    grid = Grid1D(0, 1, n_cells)
    xs = [p[0] for p in grid.points()]
    n = len(xs)
    h = xs[1] - xs[0]

    mat = LodMatrix(n)
    mat.add_value(0, 0, 1)
    mat.add_value(n - 1, n - 1, 1)
    diag = 2.0 / h / h
    nondiag = -1.0 / h / h
    for i in range(1, n - 1):
        mat.add_value(i, i - 1, nondiag)
        mat.add_value(i, i + 1, nondiag)
        mat.add_value(i, i, diag)

    rhs = [_exact_solution(xs[0])] + [_exact_rhs(x) for x in xs[1:-1]] + [_exact_solution(xs[-1])]
    solver = MatrixSolver()
    solver.set_matrix(mat.to_csr())
    u = solver.solve(rhs)

    weights = [h] * n
    weights[0] = weights[-1] = h / 2
    total = sum(w * (ui - _exact_solution(x)) ** 2 for w, ui, x in zip(weights, u, xs))
    return math.sqrt(total / (xs[-1] - xs[0]))


@pytest.mark.parametrize(
    "n_cells, expected",
    [(10, 0.179124), (100, 0.00158055), (1000, 1.57849e-05)],
)
def test_poisson_fdm(n_cells, expected):
    assert _poisson_fdm_norm2(n_cells) == pytest.approx(expected, abs=1e-6)


# ---- Poisson 1d, finite volumes

def _poisson_fvm_norm2(n_cells):
    grid = Grid1D(0, 1, n_cells)
    internal_faces = []
    dirichlet_faces = []
    for iface in range(grid.n_faces()):
        neg, pos = grid.tab_face_cell(iface)
        if neg is not INVALID_INDEX and pos is not INVALID_INDEX:
            internal_faces.append(iface)
        else:
            icell = neg if pos is INVALID_INDEX else pos
            dirichlet_faces.append((iface, icell, _exact_solution(grid.face_center(iface)[0])))

    mat = LodMatrix(grid.n_cells())
    for iface in internal_faces:
        ci, cj = grid.tab_face_cell(iface)
        h = math.dist(grid.cell_center(cj), grid.cell_center(ci))
        coef = grid.face_area(iface) / h
        mat.add_value(ci, ci, coef)
        mat.add_value(cj, cj, coef)
        mat.add_value(ci, cj, -coef)
        mat.add_value(cj, ci, -coef)

    rhs = [
        _exact_rhs(grid.cell_center(icell)[0]) * grid.cell_volume(icell)
        for icell in range(grid.n_cells())
    ]
    for iface, icell, value in dirichlet_faces:
        h = math.dist(grid.face_center(iface), grid.cell_center(icell))
        coef = grid.face_area(iface) / h
        mat.add_value(icell, icell, coef)
        rhs[icell] += value * coef

    solver = MatrixSolver()
    solver.set_matrix(mat.to_csr())
    u = solver.solve(rhs)

    norm2 = 0.0
    full_area = 0.0
    for icell, ui in enumerate(u):
        diff = ui - _exact_solution(grid.cell_center(icell)[0])
        norm2 += grid.cell_volume(icell) * diff * diff
        full_area += grid.cell_volume(icell)
    return math.sqrt(norm2 / full_area)


@pytest.mark.parametrize(
    "n_cells, expected",
    [(10, 0.106539), (100, 0.00101714), (1000, 1.01641e-05)],
)
def test_poisson_fvm(n_cells, expected):
    assert _poisson_fvm_norm2(n_cells) == pytest.approx(expected, abs=1e-6)


# ---- Transport 1d, implicit and Crank-Nicolson

def _init_solution(x):
    sigma = 0.1
    return math.exp(-x * x / sigma / sigma)


def _transport_norm(crank_nicolson):
    n_cells = 100
    grid = Grid1D(0, 1, n_cells)
    xs = [p[0] for p in grid.points()]
    n = len(xs)
    h = 1.0 / n_cells
    tau = 0.9 * (1.0 / n_cells) / 1.0
    tend = 0.5

    u = [_init_solution(x) for x in xs]
    theta = 0.5 if crank_nicolson else 1.0
    mat = LodMatrix(n)
    mat.set_value(0, 0, 1.0)
    mat.set_value(n - 1, n - 1, 1.0)
    diag = 1.0 + theta * tau / h
    nondiag = -theta * tau / h
    for i in range(1, n - 1):
        mat.set_value(i, i, diag)
        mat.set_value(i, i - 1, nondiag)
    solver = MatrixSolver()
    solver.set_matrix(mat.to_csr())

    time = 0.0
    norm = 0.0
    while time < tend - 1e-6:
        time += tau
        rhs = list(u)
        if crank_nicolson:
            for i in range(1, n - 1):
                rhs[i] -= 0.5 * tau / h * (u[i] - u[i - 1])
        rhs[0] = _init_solution(xs[0] - time)
        rhs[-1] = _init_solution(xs[-1] - time)
        u = solver.solve(rhs)

        weights = [h] * n
        weights[0] = weights[-1] = h / 2
        total = sum(
            w * (ui - _init_solution(x - time)) ** 2 for w, ui, x in zip(weights, u, xs)
        )
        norm = math.sqrt(total / (xs[-1] - xs[0]))
    return norm


def test_transport_implicit():
    assert _transport_norm(crank_nicolson=False) == pytest.approx(0.137664, abs=1e-5)


def test_transport_crank_nicolson():
    assert _transport_norm(crank_nicolson=True) == pytest.approx(0.0937748, abs=1e-5)