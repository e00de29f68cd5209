"""Local clustering with the ACL algorithm.

[ACL] Andersen, Reid, Fan Chung, and Kevin Lang. "Local graph partitioning
using pagerank vectors." FOCS 2006.

Pipeline: one-hot seed -> approximate PageRank -> divide by degree ->
sweep-set conductance minimization.
"""

import logging

import scipy.sparse

from graphspectra.cluster.pagerank import approximate_pagerank
from graphspectra.cluster.sweep import sweep_set_conductance
from graphspectra.graph.local import LocalGraph

log = logging.getLogger(__name__)

DEFAULT_ERROR = 0.001


def degree_normalise(
    graph: LocalGraph, vec: scipy.sparse.spmatrix
) -> scipy.sparse.csc_matrix:
    """Divide each entry of a sparse column by the degree of its vertex.

    Entries at vertices of degree 0 are dropped.
    """
    coo = scipy.sparse.coo_matrix(vec)
    rows, values = [], []
    for v, value in zip(coo.row, coo.data):
        d = graph.degree(int(v))
        if d > 0:
            rows.append(int(v))
            values.append(value / d)
    return scipy.sparse.csc_matrix(
        (values, (rows, [0] * len(rows))), shape=coo.shape
    )


def local_cluster_acl(
    graph: LocalGraph,
    seed_vertex: int,
    locality: float,
    error: float = DEFAULT_ERROR,
    total_volume: float | None = None,
) -> list[int]:
    """Find a cluster around seed_vertex with the ACL algorithm.

    Args:
        graph: Any LocalGraph.
        seed_vertex: The starting vertex.
        locality: Teleport parameter alpha in (0, 1]. Larger values keep
            the search closer to the seed; alpha = 1 returns the seed alone.
        error: Approximation parameter epsilon of the PageRank push.
        total_volume: Volume of the whole graph, if known. Passing it lets
            the sweep compare against the complement's volume; without it
            the cluster is assumed to be the smaller side.

    Returns:
        Vertex ids of the cluster, in sweep order (the seed region first).
        A seed of degree 0, including one past the last vertex of the
        graph, gives an empty cluster.

    Raises:
        ValueError: If seed_vertex is negative.
    """
    if seed_vertex < 0:
        raise ValueError(f"seed_vertex must be non-negative, got {seed_vertex}")
    seed = scipy.sparse.csc_matrix(
        ([1.0], ([seed_vertex], [0])), shape=(seed_vertex + 1, 1)
    )
    p, _ = approximate_pagerank(graph, seed, locality, error)
    cluster = sweep_set_conductance(
        graph, degree_normalise(graph, p), total_volume
    )

    log.info(
        "ACL cluster around vertex %d: %d vertices (locality=%g, error=%g)",
        seed_vertex,
        len(cluster),
        locality,
        error,
    )
    return cluster


def local_cluster(
    graph: LocalGraph,
    seed_vertex: int,
    target_volume: float,
    total_volume: float | None = None,
) -> list[int]:
    """Default local clustering entry point, tuned by target cluster volume.

    Uses ACL with locality 1 / target_volume (capped at 1) and error
    1 / (10 * target_volume).

    Args:
        graph: Any LocalGraph.
        seed_vertex: The starting vertex.
        target_volume: Rough volume of the cluster to look for.
        total_volume: Volume of the whole graph, if known.

    Raises:
        ValueError: If target_volume is not positive or seed_vertex is
            negative.
    """
    if target_volume <= 0:
        raise ValueError(
            f"target_volume must be positive, got {target_volume}"
        )
    locality = min(1.0, 1.0 / target_volume)
    error = 1.0 / (10 * target_volume)
    return local_cluster_acl(graph, seed_vertex, locality, error, total_volume)
