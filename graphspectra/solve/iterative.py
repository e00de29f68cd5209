"""Stationary iterative methods for sparse linear systems A x = b.

Both methods split A = P - (P - A) and iterate

    P x_{k+1} = (P - A) x_k + b

from x_0 = 0, measuring the error e_k = ||A x_k - b||_2 after every step.
Jacobi uses P = diag(A); Gauss-Seidel uses the lower triangle of A
including the diagonal. Either is guaranteed to converge when A is strictly
diagonally dominant and may converge in other cases. Running out of
iterations raises ConvergenceError rather than returning a poor estimate, as
does a residual that overflows to inf or nan.
"""

import logging
from typing import Callable

import numpy as np
import scipy.sparse
import scipy.sparse.linalg

from graphspectra.graph.graph import Graph

log = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 1000


class ConvergenceError(RuntimeError):
    """Raised when an iterative solver exhausts its iteration budget."""

    def __init__(
        self,
        message: str = "Iterative solver failed to converge.",
        iterations: int = 0,
        error: float = float("inf"),
    ) -> None:
        super().__init__(message)
        self.iterations = iterations
        self.error = error


def system_matrix(
    system: Graph | scipy.sparse.spmatrix | np.ndarray,
) -> scipy.sparse.csr_matrix:
    """The matrix of a linear system: a Graph's Laplacian, or A itself.

    Raises:
        ValueError: If the matrix is not square.
    """
    if isinstance(system, Graph):
        return system.laplacian()
    matrix = scipy.sparse.csr_matrix(system, dtype=np.float64)
    if matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"System matrix must be square, got {matrix.shape}")
    return matrix


def _check_system(
    A: scipy.sparse.csr_matrix,
    b: np.ndarray,
    eps: float,
    max_iterations: int | None,
) -> tuple[np.ndarray, int]:
    """Validate solver inputs, returning b as a flat array and the budget."""
    rhs = np.asarray(b, dtype=np.float64)
    if rhs.ndim == 2 and rhs.shape[1] == 1:
        rhs = rhs.ravel()
    if rhs.ndim != 1 or rhs.shape[0] != A.shape[0]:
        raise ValueError(
            f"Vector b of shape {np.shape(b)} does not match matrix of "
            f"shape {A.shape}"
        )
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")
    if max_iterations is None:
        max_iterations = DEFAULT_MAX_ITERATIONS
    if max_iterations < 0:
        raise ValueError(
            f"max_iterations must be non-negative, got {max_iterations}"
        )
    return rhs, max_iterations


def _iterate(
    A: scipy.sparse.csr_matrix,
    b: np.ndarray,
    eps: float,
    max_iterations: int,
    step: Callable[[np.ndarray], np.ndarray],
    method: str,
) -> np.ndarray:
    """Run step() from x = 0 until ||A x - b|| <= eps or the budget runs out."""
    x = np.zeros(A.shape[0])
    iterations = 0
    error = float("inf")

    while not error <= eps:
        if iterations >= max_iterations:
            log.warning(
                "%s did not converge: error %.4g after %d iterations "
                "(eps=%g)",
                method,
                error,
                iterations,
                eps,
            )
            raise ConvergenceError(
                f"{method} failed to converge within {max_iterations} "
                f"iterations (error {error:.4g} > eps {eps:g})",
                iterations=iterations,
                error=error,
            )
        x = step(x)
        error = float(np.linalg.norm(A @ x - b))
        iterations += 1
        log.debug("%s iteration %d: error=%.6g", method, iterations, error)

        if not np.isfinite(error):
            log.warning("%s diverged after %d iterations", method, iterations)
            raise ConvergenceError(
                f"{method} diverged after {iterations} iterations "
                f"(error is {error})",
                iterations=iterations,
                error=error,
            )

    log.info(
        "%s converged in %d iterations (error=%.4g)", method, iterations, error
    )
    return x


def _require_nonzero_diagonal(diagonal: np.ndarray, method: str) -> None:
    zero_rows = np.flatnonzero(diagonal == 0)
    if zero_rows.size:
        raise ValueError(
            f"{method} needs a non-zero diagonal; row {zero_rows[0]} is zero"
        )


def jacobi_iteration(
    A: Graph | scipy.sparse.spmatrix,
    b: np.ndarray,
    eps: float,
    max_iterations: int | None = None,
) -> np.ndarray:
    """Solve A x = b by Jacobi iteration.

    Args:
        A: Sparse matrix, or a Graph whose Laplacian is used.
        b: Dense right-hand side of length n.
        eps: Required bound on ||A x - b||_2.
        max_iterations: Iteration budget (default 1000).

    Returns:
        x with ||A x - b||_2 <= eps.

    Raises:
        ConvergenceError: If the budget is exhausted first.
        ValueError: On shape mismatch, non-positive eps, or a zero diagonal.
    """
    matrix = system_matrix(A)
    rhs, budget = _check_system(matrix, b, eps, max_iterations)

    diagonal = matrix.diagonal()
    _require_nonzero_diagonal(diagonal, "Jacobi iteration")
    off_diagonal = (matrix - scipy.sparse.diags(diagonal)).tocsr()

    def step(x: np.ndarray) -> np.ndarray:
        return (rhs - off_diagonal @ x) / diagonal

    return _iterate(matrix, rhs, eps, budget, step, "Jacobi iteration")


def gauss_seidel_iteration(
    A: Graph | scipy.sparse.spmatrix,
    b: np.ndarray,
    eps: float,
    max_iterations: int | None = None,
) -> np.ndarray:
    """Solve A x = b by the Gauss-Seidel method.

    Each iteration solves the lower-triangular system
    lower(A) x_{k+1} = b - upper(A) x_k by forward substitution, where
    upper(A) is the strictly upper-triangular part.

    Args:
        A: Sparse matrix, or a Graph whose Laplacian is used.
        b: Dense right-hand side of length n.
        eps: Required bound on ||A x - b||_2.
        max_iterations: Iteration budget (default 1000).

    Returns:
        x with ||A x - b||_2 <= eps.

    Raises:
        ConvergenceError: If the budget is exhausted first.
        ValueError: On shape mismatch, non-positive eps, or a zero diagonal.
    """
    matrix = system_matrix(A)
    rhs, budget = _check_system(matrix, b, eps, max_iterations)

    _require_nonzero_diagonal(matrix.diagonal(), "Gauss-Seidel iteration")
    lower = scipy.sparse.tril(matrix, format="csr")
    upper = scipy.sparse.triu(matrix, k=1, format="csr")

    def step(x: np.ndarray) -> np.ndarray:
        return scipy.sparse.linalg.spsolve_triangular(
            lower, rhs - upper @ x, lower=True
        )

    return _iterate(matrix, rhs, eps, budget, step, "Gauss-Seidel iteration")
