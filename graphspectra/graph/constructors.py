"""Constructors for standard named graphs."""

import numpy as np
import scipy.sparse

from graphspectra.graph.graph import Graph


def cycle_graph(n: int) -> Graph:
    """Cycle on n vertices, each joined to its two neighbours with weight 1.

    Args:
        n: Number of vertices (at least 3).

    Raises:
        ValueError: If n < 3.
    """
    if n < 3:
        raise ValueError(f"A cycle graph needs at least 3 vertices, got {n}")

    rows = np.repeat(np.arange(n), 2)
    cols = np.empty(2 * n, dtype=np.int64)
    cols[0::2] = (np.arange(n) + 1) % n
    cols[1::2] = (np.arange(n) - 1) % n
    adjacency = scipy.sparse.coo_matrix(
        (np.ones(2 * n), (rows, cols)), shape=(n, n)
    )
    return Graph(adjacency)


def complete_graph(n: int) -> Graph:
    """Complete graph on n vertices with unit weights and no self-loops.

    Raises:
        ValueError: If n < 1.
    """
    if n < 1:
        raise ValueError(f"A complete graph needs at least 1 vertex, got {n}")

    dense = np.ones((n, n)) - np.eye(n)
    return Graph(scipy.sparse.csr_matrix(dense))
