"""Sweep-set conductance minimization over a sparse vector.

Sorts the support of a vector by decreasing value and scans the nested
prefix sets S_1, S_2, ..., maintaining the cut weight and volume
incrementally. Only degree and neighbour queries are made, so the cost is
proportional to the total degree of the support.
"""

import logging
import math
from typing import Iterable

import numpy as np
import scipy.sparse

from graphspectra.graph.local import LocalGraph

log = logging.getLogger(__name__)


def _denominator(volume: float, total_volume: float | None) -> float:
    if total_volume is None:
        return volume
    return min(volume, total_volume - volume)


def _ratio(cut: float, denominator: float) -> float:
    if denominator <= 0:
        return math.inf
    return cut / denominator


def conductance(
    graph: LocalGraph,
    vertices: Iterable[int],
    total_volume: float | None = None,
) -> float:
    """Conductance of a vertex set: cut(S) / min(vol(S), vol(V \\ S)).

    Args:
        graph: Any LocalGraph.
        vertices: The vertex set S.
        total_volume: Volume of the whole graph. When omitted the
            complement is assumed to be the larger side and the
            denominator is vol(S).

    Returns:
        The conductance, or infinity if the denominator is zero.
    """
    members = set(vertices)
    volume = 0.0
    cut = 0.0
    for v in members:
        volume += graph.degree(v)
        for edge in graph.neighbors(v):
            if edge.v2 not in members:
                cut += edge.weight
    return _ratio(cut, _denominator(volume, total_volume))


def sweep_order(vec: scipy.sparse.spmatrix | np.ndarray) -> list[int]:
    """Support vertices of a vector sorted by decreasing value.

    Ties are broken by increasing vertex id, so the order is deterministic.
    Row and column vectors are both accepted.
    """
    if scipy.sparse.issparse(vec):
        coo = scipy.sparse.coo_matrix(vec)
        coo.sum_duplicates()
        ids = coo.row if coo.shape[1] == 1 else coo.col
        values = coo.data
    else:
        dense = np.asarray(vec, dtype=np.float64).ravel()
        ids = np.flatnonzero(dense)
        values = dense[ids]

    support = [
        (float(value), int(vertex))
        for vertex, value in zip(ids, values)
        if value != 0
    ]
    support.sort(key=lambda item: (-item[0], item[1]))
    return [vertex for _, vertex in support]


def sweep_set_conductance(
    graph: LocalGraph,
    vec: scipy.sparse.spmatrix | np.ndarray,
    total_volume: float | None = None,
) -> list[int]:
    """Find the sweep set of vec with minimum conductance.

    The vector is used as given; normalise it by degree beforehand if
    needed. When several prefixes share the minimum conductance the
    smallest of them is returned.

    The method targets small clusters. If the support of vec holds more
    than half of the graph's volume the result may not be meaningful, and
    a warning is logged when total_volume is supplied.

    Args:
        graph: Any LocalGraph.
        vec: Sparse or dense vector over vertex ids.
        total_volume: Volume of the whole graph, if known. Without it the
            conductance denominator is vol(S).

    Returns:
        Vertex ids of the best prefix, in sweep order. Empty if vec has no
        non-zero entries.
    """
    order = sweep_order(vec)
    if not order:
        return []

    in_set: set[int] = set()
    volume = 0.0
    cut = 0.0
    best_conductance = math.inf
    best_size = 1

    for size, v in enumerate(order, start=1):
        volume += graph.degree(v)
        for edge in graph.neighbors(v):
            if edge.v2 == v:
                continue
            if edge.v2 in in_set:
                cut -= edge.weight
            else:
                cut += edge.weight
        in_set.add(v)

        phi = _ratio(cut, _denominator(volume, total_volume))
        if phi < best_conductance:
            best_conductance = phi
            best_size = size

    if total_volume is not None and volume > total_volume / 2:
        log.warning(
            "Sweep support volume %.4g exceeds half of the total volume "
            "%.4g; the sweep set may not be a meaningful cluster",
            volume,
            total_volume,
        )

    log.debug(
        "Sweep set: %d of %d support vertices, conductance=%.4g",
        best_size,
        len(order),
        best_conductance,
    )
    return order[:best_size]
