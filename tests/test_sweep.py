"""Tests for sweep-set conductance minimization."""

import logging
import math

import numpy as np
import pytest
import scipy.sparse

from graphspectra.cluster import conductance, sweep_order, sweep_set_conductance
from graphspectra.graph import Graph, complete_graph, cycle_graph


def _disjoint_edges(k: int) -> Graph:
    """k disjoint unit edges 0-1, 2-3, ..."""
    rows = list(range(0, 2 * k, 2)) + list(range(1, 2 * k, 2))
    cols = list(range(1, 2 * k, 2)) + list(range(0, 2 * k, 2))
    adjacency = scipy.sparse.coo_matrix(
        (np.ones(2 * k), (rows, cols)), shape=(2 * k, 2 * k)
    )
    return Graph(adjacency)


def _column(values: list[float]) -> scipy.sparse.csc_matrix:
    return scipy.sparse.csc_matrix(np.array(values).reshape(-1, 1))


class TestSweepOrder:
    """Ordering of the support of a vector."""

    def test_decreasing_value(self) -> None:
        assert sweep_order(_column([0.1, 0.5, 0.0, 0.3])) == [1, 3, 0]

    def test_ties_broken_by_vertex_id(self) -> None:
        assert sweep_order(np.array([0.0, 2.0, 1.0, 2.0])) == [1, 3, 2]

    def test_row_vector(self) -> None:
        row = scipy.sparse.csr_matrix(np.array([[0.0, 1.0, 3.0]]))
        assert sweep_order(row) == [2, 1]

    def test_explicit_zeros_skipped(self) -> None:
        column = scipy.sparse.csc_matrix(
            ([0.0, 1.0], ([0, 1], [0, 0])), shape=(2, 1)
        )
        assert sweep_order(column) == [1]


class TestSweepSetConductance:
    """Minimum-conductance prefix of the sweep order."""

    def test_tie_break_with_total_volume(self) -> None:
        """Equal conductance prefixes resolve to the smallest one."""
        g = _disjoint_edges(3)
        vec = _column([1.0] * 6)
        assert sweep_set_conductance(g, vec, g.total_volume()) == [0, 1]

    def test_tie_break_without_total_volume(self) -> None:
        g = _disjoint_edges(2)
        assert sweep_set_conductance(g, _column([1.0] * 4)) == [0, 1]

    def test_finds_clique(self) -> None:
        dense = np.zeros((8, 8))
        dense[:4, :4] = 1 - np.eye(4)
        dense[4:, 4:] = 1 - np.eye(4)
        dense[3, 4] = dense[4, 3] = 1
        g = Graph(dense)
        vec = _column([0.9, 0.8, 0.8, 0.7, 0.2, 0.1, 0.1, 0.1])
        assert sweep_set_conductance(g, vec, g.total_volume()) == [0, 1, 2, 3]

    def test_empty_vector(self) -> None:
        g = cycle_graph(5)
        assert sweep_set_conductance(g, scipy.sparse.csc_matrix((5, 1))) == []

    def test_single_support_vertex(self) -> None:
        g = cycle_graph(5)
        assert sweep_set_conductance(g, _column([0, 0, 1.0, 0, 0])) == [2]

    def test_self_loop_not_cut(self) -> None:
        g = Graph(np.array([[5.0, 1.0], [1.0, 0.0]]))
        assert sweep_set_conductance(g, _column([1.0, 0.5])) == [0, 1]

    def test_large_support_warns(self, caplog) -> None:
        g = _disjoint_edges(2)
        with caplog.at_level(logging.WARNING, logger="graphspectra.cluster.sweep"):
            sweep_set_conductance(g, _column([1.0] * 4), g.total_volume())
        assert "exceeds half of the total volume" in caplog.text

    def test_no_warning_for_small_support(self, caplog) -> None:
        g = _disjoint_edges(3)
        with caplog.at_level(logging.WARNING, logger="graphspectra.cluster.sweep"):
            sweep_set_conductance(g, _column([1.0, 1.0, 0, 0, 0, 0]), 6.0)
        assert caplog.text == ""


class TestConductance:
    """Conductance of explicit vertex sets."""

    def test_half_of_complete_graph(self) -> None:
        g = complete_graph(4)
        # cut 4, vol(S) = vol(V \ S) = 6
        assert conductance(g, [0, 1], g.total_volume()) == pytest.approx(4 / 6)

    def test_without_total_volume_uses_set_volume(self) -> None:
        g = cycle_graph(6)
        assert conductance(g, [0, 1, 2]) == pytest.approx(2 / 6)

    def test_whole_graph_is_infinite(self) -> None:
        g = cycle_graph(4)
        assert conductance(g, range(4), g.total_volume()) == math.inf

    def test_empty_set_is_infinite(self) -> None:
        assert conductance(cycle_graph(4), []) == math.inf
