"""Laplacian system solvers: L x = b for the Laplacian L of a graph."""

import logging

import numpy as np

from graphspectra.graph.graph import Graph
from graphspectra.solve.exact import solve_laplacian_exact_conjugate_gradient
from graphspectra.solve.iterative import (
    gauss_seidel_iteration,
    jacobi_iteration,
)

log = logging.getLogger(__name__)

METHODS = ("auto", "jacobi", "gauss-seidel", "exact")


def solve_laplacian_jacobi(
    g: Graph, b: np.ndarray, eps: float, max_iterations: int | None = None
) -> np.ndarray:
    """Solve L x = b by Jacobi iteration with P = diag(L).

    Raises:
        ConvergenceError: If ||L x - b||_2 <= eps is not reached within
            max_iterations (default 1000).
    """
    return jacobi_iteration(g.laplacian(), b, eps, max_iterations)


def solve_laplacian_gauss_seidel(
    g: Graph, b: np.ndarray, eps: float, max_iterations: int | None = None
) -> np.ndarray:
    """Solve L x = b by Gauss-Seidel with P = lower(L).

    Raises:
        ConvergenceError: If ||L x - b||_2 <= eps is not reached within
            max_iterations (default 1000).
    """
    return gauss_seidel_iteration(g.laplacian(), b, eps, max_iterations)


def solve_laplacian(
    g: Graph,
    b: np.ndarray,
    eps: float,
    max_iterations: int | None = None,
    method: str = "auto",
) -> np.ndarray:
    """Solve the Laplacian system L x = b.

    With method="auto" the solver is chosen automatically. Gauss-Seidel is
    used: it converges for any connected graph when b is orthogonal to the
    constant vector, whereas Jacobi fails on bipartite graphs.

    Args:
        g: The graph.
        b: Dense right-hand side of length n.
        eps: Required bound on ||L x - b||_2, for every method.
        max_iterations: Budget for the iterative methods.
        method: One of "auto", "jacobi", "gauss-seidel", "exact".

    Raises:
        ConvergenceError: If an iterative method runs out of iterations or
            diverges, or if the exact residual exceeds eps.
        ValueError: For an unknown method.
    """
    if method not in METHODS:
        raise ValueError(f"Unknown method {method!r}; expected one of {METHODS}")

    if method == "auto":
        method = "gauss-seidel"
    log.debug("Solving Laplacian system with %s (n=%d)", method, len(b))

    if method == "jacobi":
        return solve_laplacian_jacobi(g, b, eps, max_iterations)
    if method == "exact":
        return solve_laplacian_exact_conjugate_gradient(g, b, eps)
    return solve_laplacian_gauss_seidel(g, b, eps, max_iterations)
