"""Reading and writing graphs as edgelist and adjacency-list files.

Edgelist files hold one edge per line in any of the forms

    <u>, <v>, <weight>
    <u>, <v>
    <u> <v> <weight>
    <u> <v>

with a default weight of 1. Each undirected edge is listed once.

Adjacency-list files hold one vertex per line, sorted by vertex id:

    <v>: <u_1> <w_1> <u_2> <w_2> ...

In both formats, blank lines and lines starting with '#' or '//' are
ignored.
"""

import logging
import re
from pathlib import Path
from typing import Iterator

import numpy as np
import scipy.sparse

from graphspectra.graph.graph import Graph
from graphspectra.graph.types import Edge

log = logging.getLogger(__name__)

_EDGELIST_SEPARATOR = re.compile(r"[,\s]+")


class GraphFormatError(ValueError):
    """Raised when a line of a graph file cannot be parsed."""


def is_content_line(line: str) -> bool:
    """False for blank lines and comments, True otherwise."""
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith(("#", "//"))


def parse_edgelist_content_line(line: str) -> Edge:
    """Parse one edgelist line into an Edge.

    Raises:
        GraphFormatError: If the line is not of the form u v [weight].
    """
    tokens = [t for t in _EDGELIST_SEPARATOR.split(line.strip()) if t]
    if len(tokens) not in (2, 3):
        raise GraphFormatError(f"Expected 'u v [weight]', got {line.strip()!r}")
    try:
        u, v = int(tokens[0]), int(tokens[1])
        weight = float(tokens[2]) if len(tokens) == 3 else 1.0
    except ValueError as e:
        raise GraphFormatError(f"Cannot parse edge {line.strip()!r}") from e
    return Edge(u, v, weight)


def parse_adjacencylist_content_line(line: str) -> list[Edge]:
    """Parse one adjacency-list line into the edges leaving its vertex.

    Raises:
        GraphFormatError: If the line is malformed.
    """
    head, sep, tail = line.strip().partition(":")
    if not sep:
        raise GraphFormatError(f"Missing ':' in {line.strip()!r}")
    tokens = tail.split()
    if len(tokens) % 2:
        raise GraphFormatError(
            f"Expected neighbour/weight pairs in {line.strip()!r}"
        )
    try:
        v = int(head)
        return [
            Edge(v, int(tokens[i]), float(tokens[i + 1]))
            for i in range(0, len(tokens), 2)
        ]
    except ValueError as e:
        raise GraphFormatError(f"Cannot parse {line.strip()!r}") from e


def _graph_from_edges(
    rows: list[int],
    cols: list[int],
    weights: list[float],
    min_vertices: int = 0,
) -> Graph:
    n = max(max(rows, default=-1) + 1, max(cols, default=-1) + 1, min_vertices)
    adjacency = scipy.sparse.coo_matrix(
        (np.asarray(weights, dtype=np.float64), (rows, cols)), shape=(n, n)
    )
    return Graph(adjacency)


def _read_content_lines(path: Path) -> Iterator[tuple[int, str]]:
    """Yield (line_number, line) for each content line of a file."""
    with open(path) as f:
        for line_number, line in enumerate(f, start=1):
            if is_content_line(line):
                yield line_number, line


def load_edgelist(path: str | Path) -> Graph:
    """Load a graph from an edgelist file.

    Every line adds the edge in both directions; a self-loop is added once.

    Raises:
        FileNotFoundError: If the file does not exist.
        GraphFormatError: If a line cannot be parsed.
    """
    path = Path(path)
    rows: list[int] = []
    cols: list[int] = []
    weights: list[float] = []

    for line_number, line in _read_content_lines(path):
        try:
            edge = parse_edgelist_content_line(line)
        except GraphFormatError as e:
            raise GraphFormatError(f"{path}:{line_number}: {e}") from e
        rows.append(edge.v1)
        cols.append(edge.v2)
        weights.append(edge.weight)
        if edge.v1 != edge.v2:
            rows.append(edge.v2)
            cols.append(edge.v1)
            weights.append(edge.weight)

    graph = _graph_from_edges(rows, cols, weights)
    log.info(
        "Loaded edgelist %s: n=%d, edges=%d",
        path,
        graph.number_of_vertices(),
        graph.number_of_edges(),
    )
    return graph


def save_edgelist(graph: Graph, path: str | Path) -> Path:
    """Write a graph as an edgelist, each undirected edge once (u <= v)."""
    path = Path(path)
    upper = scipy.sparse.triu(graph.adjacency(), format="coo")
    order = np.lexsort((upper.col, upper.row))

    with open(path, "w") as f:
        f.write("# This file was automatically generated by graphspectra\n")
        f.write("# <source>, <destination>, <weight>\n")
        for i in order:
            f.write(f"{upper.row[i]}, {upper.col[i]}, {float(upper.data[i])!r}\n")

    log.info("Saved edgelist %s (%d edges)", path, upper.nnz)
    return path


def load_adjacencylist(path: str | Path) -> Graph:
    """Load a whole graph from an adjacency-list file into memory.

    Raises:
        FileNotFoundError: If the file does not exist.
        GraphFormatError: If a line cannot be parsed.
        AsymmetricAdjacencyError: If the lists are not symmetric.
    """
    path = Path(path)
    rows: list[int] = []
    cols: list[int] = []
    weights: list[float] = []
    max_vertex = -1

    for line_number, line in _read_content_lines(path):
        try:
            edges = parse_adjacencylist_content_line(line)
            vertex = int(line.partition(":")[0])
        except (GraphFormatError, ValueError) as e:
            raise GraphFormatError(f"{path}:{line_number}: {e}") from e
        max_vertex = max(max_vertex, vertex)
        for edge in edges:
            rows.append(edge.v1)
            cols.append(edge.v2)
            weights.append(edge.weight)

    # A trailing vertex listed with no neighbours still counts.
    graph = _graph_from_edges(rows, cols, weights, max_vertex + 1)
    log.info(
        "Loaded adjacency list %s: n=%d, edges=%d",
        path,
        graph.number_of_vertices(),
        graph.number_of_edges(),
    )
    return graph


def save_adjacencylist(graph: Graph, path: str | Path) -> Path:
    """Write a graph as an adjacency list, one line per vertex.

    Isolated vertices get a bare "v:" line so the vertex count survives a
    round trip through load_adjacencylist.
    """
    path = Path(path)
    with open(path, "w") as f:
        f.write("# This file was automatically generated by graphspectra\n")
        f.write("# <vertex>: <neighbour_1> <weight_1> <neighbour_2> <weight_2> ...\n")
        for v in range(graph.number_of_vertices()):
            pairs = " ".join(f"{e.v2} {e.weight!r}" for e in graph.neighbors(v))
            f.write(f"{v}: {pairs}\n" if pairs else f"{v}:\n")

    log.info("Saved adjacency list %s", path)
    return path


def edgelist_to_adjacencylist(
    edgelist_path: str | Path, adjacencylist_path: str | Path
) -> Path:
    """Convert an edgelist file to an adjacency-list file."""
    return save_adjacencylist(load_edgelist(edgelist_path), adjacencylist_path)


def adjacencylist_to_edgelist(
    adjacencylist_path: str | Path, edgelist_path: str | Path
) -> Path:
    """Convert an adjacency-list file to an edgelist file."""
    return save_edgelist(load_adjacencylist(adjacencylist_path), edgelist_path)


def load_graph(path: str | Path) -> Graph:
    """Load a graph, choosing the format from the file suffix.

    Files ending in .adjlist are read as adjacency lists, anything else as
    an edgelist.
    """
    path = Path(path)
    if path.suffix == ".adjlist":
        return load_adjacencylist(path)
    return load_edgelist(path)
