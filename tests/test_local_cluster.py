"""Tests for ACL local clustering, in memory and on disk."""

from pathlib import Path

import numpy as np
import pytest
import scipy.sparse

from graphspectra.cluster import degree_normalise, local_cluster, local_cluster_acl
from graphspectra.graph import Graph
from graphspectra.graphio import AdjacencyListLocalGraph, save_adjacencylist


@pytest.fixture
def barbell() -> Graph:
    """Two K6 cliques on vertices 0-5 and 6-11 joined by the edge 5-6."""
    dense = np.zeros((12, 12))
    dense[:6, :6] = 1 - np.eye(6)
    dense[6:, 6:] = 1 - np.eye(6)
    dense[5, 6] = dense[6, 5] = 1
    return Graph(dense)


class TestLocalClusterACL:
    """The ACL pipeline: push, degree normalisation, sweep."""

    @pytest.mark.parametrize("seed", [0, 3, 5])
    def test_finds_seed_clique(self, barbell: Graph, seed: int) -> None:
        cluster = local_cluster_acl(barbell, seed, 0.1, 1e-5, barbell.total_volume())
        assert set(cluster) == set(range(6))

    @pytest.mark.parametrize("seed", [7, 11])
    def test_finds_other_clique(self, barbell: Graph, seed: int) -> None:
        cluster = local_cluster_acl(barbell, seed, 0.1, 1e-5, barbell.total_volume())
        assert set(cluster) == set(range(6, 12))

    def test_seed_comes_first(self, barbell: Graph) -> None:
        cluster = local_cluster_acl(barbell, 2, 0.1, 1e-5, barbell.total_volume())
        assert cluster[0] == 2

    def test_locality_one_returns_seed(self, barbell: Graph) -> None:
        assert local_cluster_acl(barbell, 4, 1.0, 1e-3) == [4]

    def test_isolated_seed(self) -> None:
        g = Graph(np.array([[0.0, 1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 0.0]]))
        assert local_cluster_acl(g, 2, 0.1, 1e-3) == []

    def test_seed_past_last_vertex(self, barbell: Graph) -> None:
        assert local_cluster_acl(barbell, 50, 0.1, 1e-3) == []

    @pytest.mark.parametrize("seed", [-1, -12])
    def test_negative_seed(self, barbell: Graph, seed: int) -> None:
        with pytest.raises(ValueError, match="seed_vertex"):
            local_cluster_acl(barbell, seed, 0.1, 1e-3)

    def test_deterministic(self, barbell: Graph) -> None:
        first = local_cluster_acl(barbell, 0, 0.05, 1e-4, barbell.total_volume())
        second = local_cluster_acl(barbell, 0, 0.05, 1e-4, barbell.total_volume())
        assert first == second


class TestLocalCluster:
    """Target-volume entry point."""

    def test_contains_seed(self, barbell: Graph) -> None:
        cluster = local_cluster(barbell, 0, 31, barbell.total_volume())
        assert 0 in cluster

    def test_small_target_volume_returns_seed(self, barbell: Graph) -> None:
        # a target volume of 1 gives locality 1
        assert local_cluster(barbell, 3, 1.0) == [3]

    @pytest.mark.parametrize("target_volume", [0, -10])
    def test_non_positive_target_volume(self, barbell: Graph, target_volume) -> None:
        with pytest.raises(ValueError):
            local_cluster(barbell, 0, target_volume)

    def test_negative_seed(self, barbell: Graph) -> None:
        with pytest.raises(ValueError, match="seed_vertex"):
            local_cluster(barbell, -1, 31)

    def test_seed_past_last_vertex(self, barbell: Graph) -> None:
        assert local_cluster(barbell, 12, 31) == []


class TestDegreeNormalise:
    """Dividing a PageRank vector by vertex degree."""

    def test_divides_by_degree(self, barbell: Graph) -> None:
        vec = scipy.sparse.csc_matrix(([5.0, 6.0], ([0, 5], [0, 0])), shape=(12, 1))
        normalised = degree_normalise(barbell, vec)
        assert normalised[0, 0] == pytest.approx(1.0)
        assert normalised[5, 0] == pytest.approx(1.0)
        assert normalised.shape == (12, 1)

    def test_drops_zero_degree(self, barbell: Graph) -> None:
        vec = scipy.sparse.csc_matrix(([1.0, 1.0], ([0, 20], [0, 0])), shape=(21, 1))
        assert degree_normalise(barbell, vec).nnz == 1


class TestOnDiskClustering:
    """Clustering a graph that is read from an adjacency-list file."""

    def test_matches_in_memory(self, barbell: Graph, tmp_path: Path) -> None:
        path = save_adjacencylist(barbell, tmp_path / "barbell.adjlist")
        on_disk = AdjacencyListLocalGraph(path)
        total = barbell.total_volume()

        expected = local_cluster_acl(barbell, 0, 0.1, 1e-5, total)
        assert local_cluster_acl(on_disk, 0, 0.1, 1e-5, total) == expected

    def test_target_volume_matches_in_memory(
        self, barbell: Graph, tmp_path: Path
    ) -> None:
        path = save_adjacencylist(barbell, tmp_path / "barbell.adjlist")
        on_disk = AdjacencyListLocalGraph(path)
        assert local_cluster(on_disk, 8, 20) == local_cluster(barbell, 8, 20)
