"""Exact conjugate-gradient solve of Laplacian systems.

This method is not efficient: it builds a full basis of L-orthogonal
vectors and is provided for educational and research use on small graphs.

Given vectors p_1, ..., p_m with p_i^T L p_j = 0 for i != j spanning a
complement of the null space of L, any solution of L x = b with b in the
range of L can be written x = sum_k alpha_k p_k, and multiplying
L x = b by p_k gives

    alpha_k = p_k^T b / p_k^T L p_k.
"""

import logging

import numpy as np
import scipy.sparse

from graphspectra.graph.graph import Graph
from graphspectra.solve.iterative import ConvergenceError, system_matrix

log = logging.getLogger(__name__)

# Directions whose L-norm falls below this fraction of the largest diagonal
# entry are treated as lying in the null space.
NULL_SPACE_TOLERANCE = 1e-10


def l_orthogonal_basis(
    L: scipy.sparse.spmatrix,
) -> list[tuple[np.ndarray, np.ndarray]]:
    """Gram-Schmidt over the standard basis in the L inner product.

    Args:
        L: Symmetric positive semi-definite matrix.

    Returns:
        List of (p_k, L p_k) pairs. Directions in the null space of L are
        dropped, so the list has rank(L) entries.
    """
    n = L.shape[0]
    scale = max(1.0, float(np.abs(L.diagonal()).max(initial=0.0)))
    basis: list[tuple[np.ndarray, np.ndarray]] = []

    for i in range(n):
        v = np.zeros(n)
        v[i] = 1.0
        for p, Lp in basis:
            v -= (Lp @ v) / (p @ Lp) * p
        Lv = L @ v
        if v @ Lv <= NULL_SPACE_TOLERANCE * scale:
            continue
        basis.append((v, Lv))

    log.debug("L-orthogonal basis: %d of %d directions kept", len(basis), n)
    return basis


def solve_laplacian_exact_conjugate_gradient(
    g: Graph | scipy.sparse.spmatrix,
    b: np.ndarray,
    eps: float | None = None,
) -> np.ndarray:
    """Solve L x = b exactly with an L-orthogonal basis.

    Args:
        g: Graph whose Laplacian is used, or the matrix L itself.
        b: Dense right-hand side. For a Laplacian, b must be orthogonal to
            the constant vector on each connected component for L x = b to
            have a solution.
        eps: Optional bound on ||L x - b||_2. When given, a larger
            residual raises instead of returning.

    Returns:
        A solution x of L x = b (unique up to the null space of L).

    Raises:
        ConvergenceError: If eps is given and the residual exceeds it,
            which happens when b is not in the range of L.
        ValueError: On a shape mismatch or non-positive eps.
    """
    L = system_matrix(g)
    rhs = np.asarray(b, dtype=np.float64).ravel()
    if rhs.shape[0] != L.shape[0]:
        raise ValueError(
            f"Vector b of shape {np.shape(b)} does not match matrix of "
            f"shape {L.shape}"
        )

    if eps is not None and eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")

    basis = l_orthogonal_basis(L)
    x = np.zeros(L.shape[0])
    for p, Lp in basis:
        x += (p @ rhs) / (p @ Lp) * p

    error = float(np.linalg.norm(L @ x - rhs))
    log.info("Exact conjugate gradient: residual=%.4g", error)
    if eps is not None and not error <= eps:
        raise ConvergenceError(
            f"Exact conjugate gradient residual {error:.4g} exceeds eps "
            f"{eps:g}; b is not in the range of L",
            iterations=len(basis),
            error=error,
        )
    return x
