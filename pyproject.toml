[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cfdkit"
version = "0.1.0"
description = "Grids, sparse matrices, a sparse linear solver, quadratures and VTK output for finite-difference, finite-volume and finite-element solvers"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "scipy",
]
keywords = ["cfd", "finite volume", "finite element", "sparse matrix", "vtk", "grid", "quadrature"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["cfdkit"]

[tool.pytest.ini_options]
addopts = "-ra"
