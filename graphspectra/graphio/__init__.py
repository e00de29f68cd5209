"""Graph file formats and the on-disk LocalGraph."""

from graphspectra.graphio.formats import (
    GraphFormatError,
    adjacencylist_to_edgelist,
    edgelist_to_adjacencylist,
    load_adjacencylist,
    load_edgelist,
    load_graph,
    parse_adjacencylist_content_line,
    parse_edgelist_content_line,
    save_adjacencylist,
    save_edgelist,
)
from graphspectra.graphio.local import AdjacencyListLocalGraph

__all__ = [
    "AdjacencyListLocalGraph",
    "GraphFormatError",
    "adjacencylist_to_edgelist",
    "edgelist_to_adjacencylist",
    "load_adjacencylist",
    "load_edgelist",
    "load_graph",
    "parse_adjacencylist_content_line",
    "parse_edgelist_content_line",
    "save_adjacencylist",
    "save_edgelist",
]
