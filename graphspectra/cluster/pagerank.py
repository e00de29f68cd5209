"""Approximate personalized PageRank by local push (Andersen, Chung & Lang 2006).

PageRank here is defined with respect to the lazy random walk
W = (I + D^{-1} A) / 2: pr(alpha, s) is the unique vector satisfying

    pr(alpha, s) = alpha * s + (1 - alpha) * pr(alpha, s) W.

The push method maintains a pair (p, r) with the invariant

    p + pr(alpha, r) = pr(alpha, s)

and repeatedly pushes mass out of vertices whose residual per unit degree is
at least epsilon. Only vertices touched by a push ever enter p or r, so the
work done is bounded by the size of the explored region rather than the size
of the graph.
"""

import logging
from collections import defaultdict, deque

import numpy as np
import scipy.sparse
import scipy.sparse.linalg

from graphspectra.graph.graph import Graph
from graphspectra.graph.local import LocalGraph

log = logging.getLogger(__name__)


def _validate_parameters(alpha: float, epsilon: float | None = None) -> None:
    if not 0 < alpha <= 1:
        raise ValueError(f"alpha must be in (0, 1], got {alpha}")
    if epsilon is not None and epsilon <= 0:
        raise ValueError(f"epsilon must be positive, got {epsilon}")


def as_column_vector(
    vector: scipy.sparse.spmatrix | np.ndarray,
) -> scipy.sparse.csc_matrix:
    """Convert a seed vector to an (n x 1) sparse column.

    Accepts a sparse matrix with exactly one column, or a dense array of
    shape (n,) or (n, 1).

    Raises:
        ValueError: If the input is not a single column.
    """
    if scipy.sparse.issparse(vector):
        if vector.ndim != 2 or vector.shape[1] != 1:
            raise ValueError(
                f"Seed vector must have exactly one column, got shape "
                f"{vector.shape}"
            )
        return scipy.sparse.csc_matrix(vector, dtype=np.float64)

    dense = np.asarray(vector, dtype=np.float64)
    if dense.ndim == 1:
        dense = dense.reshape(-1, 1)
    if dense.ndim != 2 or dense.shape[1] != 1:
        raise ValueError(
            f"Seed vector must have exactly one column, got shape "
            f"{dense.shape}"
        )
    return scipy.sparse.csc_matrix(dense)


def _column_from_dict(
    entries: dict[int, float], n: int
) -> scipy.sparse.csc_matrix:
    """Build an (n x 1) sparse column from a vertex -> value mapping."""
    vertices = sorted(v for v, value in entries.items() if value != 0)
    values = [entries[v] for v in vertices]
    return scipy.sparse.csc_matrix(
        (values, (vertices, [0] * len(vertices))), shape=(n, 1)
    )


def approximate_pagerank(
    graph: LocalGraph,
    seed_vector: scipy.sparse.spmatrix | np.ndarray,
    alpha: float,
    epsilon: float,
) -> tuple[scipy.sparse.csc_matrix, scipy.sparse.csc_matrix]:
    """Compute an approximate PageRank vector with the ACL push method.

    Vertices are pushed in FIFO order as they become eligible. The order is
    an implementation choice: any order ends with every residual below
    the threshold and the conservation invariant intact.

    A vertex u is eligible for a push while r[u] >= epsilon * d(u).
    Pushing u moves alpha * r[u] into p[u], keeps (1 - alpha) * r[u] / 2
    at u and spreads the other (1 - alpha) * r[u] / 2 over u's neighbours
    in proportion to edge weight. A vertex with degree 0 has all of its
    residual moved into p, since the lazy walk never leaves it.

    Args:
        graph: Any LocalGraph; only degree and neighbour queries are used.
        seed_vector: Starting distribution s, a single-column vector.
        alpha: Teleport (locality) parameter in (0, 1].
        epsilon: Approximation parameter; at termination every vertex
            satisfies r[u] < epsilon * d(u).

    Returns:
        (p, r) as sparse (m x 1) columns, where m is the larger of the seed
        length and one more than the highest vertex id touched.

    Raises:
        ValueError: If the seed vector is not a single column, or alpha or
            epsilon is out of range.
    """
    _validate_parameters(alpha, epsilon)
    seed = as_column_vector(seed_vector).tocoo()

    pagerank: dict[int, float] = defaultdict(float)
    residual: dict[int, float] = defaultdict(float)
    for vertex, value in zip(seed.row, seed.data):
        residual[int(vertex)] += float(value)

    degrees: dict[int, float] = {}

    def degree_of(v: int) -> float:
        if v not in degrees:
            degrees[v] = graph.degree(v)
        return degrees[v]

    def eligible(v: int) -> bool:
        d = degree_of(v)
        if d == 0:
            return residual[v] > 0
        return residual[v] >= epsilon * d

    queue = deque(v for v in list(residual) if eligible(v))
    queued = set(queue)
    pushes = 0

    while queue:
        u = queue.popleft()
        queued.discard(u)
        if not eligible(u):
            continue

        r_u = residual[u]
        d_u = degree_of(u)
        pushes += 1

        if d_u == 0:
            pagerank[u] += r_u
            residual[u] = 0.0
            continue

        pagerank[u] += alpha * r_u
        residual[u] = (1 - alpha) * r_u / 2
        spread = (1 - alpha) * r_u / (2 * d_u)

        for edge in graph.neighbors(u):
            residual[edge.v2] += spread * edge.weight
            if edge.v2 not in queued and eligible(edge.v2):
                queue.append(edge.v2)
                queued.add(edge.v2)

        if u not in queued and eligible(u):
            queue.append(u)
            queued.add(u)

    touched = set(pagerank) | set(residual)
    size = max(seed.shape[0], max(touched, default=-1) + 1)

    log.debug(
        "Approximate PageRank: alpha=%g, epsilon=%g, pushes=%d, "
        "support=%d",
        alpha,
        epsilon,
        pushes,
        len(touched),
    )
    return _column_from_dict(pagerank, size), _column_from_dict(residual, size)


def lazy_walk_matrix(graph: Graph) -> scipy.sparse.csr_matrix:
    """Transition matrix W = (I + D^{-1} A) / 2 of the lazy random walk.

    Isolated vertices keep all of their mass (W[u, u] = 1).
    """
    n = graph.number_of_vertices()
    degrees = graph.degree_matrix().diagonal()

    inv_degree = np.zeros(n)
    positive = degrees > 0
    inv_degree[positive] = 1.0 / degrees[positive]

    walk = scipy.sparse.diags(inv_degree) @ graph.adjacency()
    stay = np.where(positive, 0.5, 1.0)
    return (scipy.sparse.diags(stay) + walk / 2).tocsr()


def personalized_pagerank(
    graph: Graph,
    seed_vector: scipy.sparse.spmatrix | np.ndarray,
    alpha: float,
) -> np.ndarray:
    """Exact personalized PageRank pr(alpha, s) on the full graph.

    Solves pr (I - (1 - alpha) W) = alpha s with a sparse direct solver.
    Intended for small graphs and for checking the push method; seed
    entries beyond the last vertex of the graph are ignored.

    Args:
        graph: An in-memory Graph.
        seed_vector: Starting distribution s, a single-column vector.
        alpha: Teleport parameter in (0, 1].

    Returns:
        Dense array of length n.
    """
    _validate_parameters(alpha)
    n = graph.number_of_vertices()
    seed = as_column_vector(seed_vector).tocoo()

    s = np.zeros(n)
    for vertex, value in zip(seed.row, seed.data):
        if vertex < n:
            s[vertex] += value

    system = scipy.sparse.identity(n, format="csc") - (1 - alpha) * lazy_walk_matrix(graph)
    # Row-vector equation x M = alpha s, solved as M^T x^T = alpha s^T.
    solution = scipy.sparse.linalg.spsolve(system.T.tocsc(), alpha * s)
    return np.atleast_1d(np.asarray(solution, dtype=np.float64))
