"""Grids, sparse matrices, a sparse linear solver, quadratures and VTK output for CFD solvers."""

__version__ = "0.1.0"