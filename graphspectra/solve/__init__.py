"""Solvers for Laplacian and general sparse linear systems."""

from graphspectra.solve.exact import (
    l_orthogonal_basis,
    solve_laplacian_exact_conjugate_gradient,
)
from graphspectra.solve.iterative import (
    DEFAULT_MAX_ITERATIONS,
    ConvergenceError,
    gauss_seidel_iteration,
    jacobi_iteration,
    system_matrix,
)
from graphspectra.solve.laplacian import (
    METHODS,
    solve_laplacian,
    solve_laplacian_gauss_seidel,
    solve_laplacian_jacobi,
)

__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "METHODS",
    "ConvergenceError",
    "gauss_seidel_iteration",
    "jacobi_iteration",
    "l_orthogonal_basis",
    "solve_laplacian",
    "solve_laplacian_exact_conjugate_gradient",
    "solve_laplacian_gauss_seidel",
    "solve_laplacian_jacobi",
    "system_matrix",
]
