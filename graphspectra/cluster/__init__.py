"""Local clustering: approximate PageRank, sweep sets and the ACL algorithm."""

from graphspectra.cluster.acl import (
    DEFAULT_ERROR,
    degree_normalise,
    local_cluster,
    local_cluster_acl,
)
from graphspectra.cluster.pagerank import (
    approximate_pagerank,
    as_column_vector,
    lazy_walk_matrix,
    personalized_pagerank,
)
from graphspectra.cluster.sweep import (
    conductance,
    sweep_order,
    sweep_set_conductance,
)

__all__ = [
    "DEFAULT_ERROR",
    "approximate_pagerank",
    "as_column_vector",
    "conductance",
    "degree_normalise",
    "lazy_walk_matrix",
    "local_cluster",
    "local_cluster_acl",
    "personalized_pagerank",
    "sweep_order",
    "sweep_set_conductance",
]
