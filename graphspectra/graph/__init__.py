"""Graph model: sparse adjacency with cached spectral matrices."""

from graphspectra.graph.constructors import complete_graph, cycle_graph
from graphspectra.graph.graph import AsymmetricAdjacencyError, Graph
from graphspectra.graph.local import LocalGraph
from graphspectra.graph.types import Edge
from graphspectra.graph.utility import (
    is_symmetric,
    sprs_mat_inner_indices,
    sprs_mat_outer_starts,
    sprs_mat_values,
)

__all__ = [
    "AsymmetricAdjacencyError",
    "Edge",
    "Graph",
    "LocalGraph",
    "complete_graph",
    "cycle_graph",
    "is_symmetric",
    "sprs_mat_inner_indices",
    "sprs_mat_outer_starts",
    "sprs_mat_values",
]
