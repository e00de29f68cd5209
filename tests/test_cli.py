"""End-to-end tests for the run_spectral command-line entry point."""

import json
from pathlib import Path

import numpy as np
import pytest

from graphspectra.graph import Graph, cycle_graph
from graphspectra.graphio import load_adjacencylist, load_edgelist, save_edgelist
from run_spectral import build_parser, main


@pytest.fixture
def barbell_edgelist(tmp_path: Path) -> Path:
    """Two K6 cliques on vertices 0-5 and 6-11 joined by the edge 5-6."""
    dense = np.zeros((12, 12))
    dense[:6, :6] = 1 - np.eye(6)
    dense[6:, 6:] = 1 - np.eye(6)
    dense[5, 6] = dense[6, 5] = 1
    return save_edgelist(Graph(dense), tmp_path / "barbell.edgelist")


@pytest.fixture
def cycle_system(tmp_path: Path) -> tuple[Path, Path]:
    """C5 as an edgelist and a right-hand side orthogonal to the constants."""
    graph_path = save_edgelist(cycle_graph(5), tmp_path / "c5.edgelist")
    rhs_path = tmp_path / "b.txt"
    rhs_path.write_text("1\n-1\n0\n0\n0\n")
    return graph_path, rhs_path


def _printed_vector(out: str) -> np.ndarray:
    return np.array([float(line) for line in out.split()])


class TestParser:
    """Argument parsing."""

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_cluster_requires_seed(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["cluster", "g.edgelist"])

    def test_method_choices(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(
                ["solve", "g.edgelist", "--rhs", "b.txt", "--method", "lu"]
            )


class TestConvert:
    """The convert sub-command."""

    def test_convert(self, barbell_edgelist: Path, tmp_path: Path) -> None:
        out = tmp_path / "barbell.adjlist"
        assert main(["convert", str(barbell_edgelist), str(out)]) == 0
        assert load_adjacencylist(out) == load_edgelist(barbell_edgelist)

    def test_convert_missing_input(self, tmp_path: Path) -> None:
        code = main(
            ["convert", str(tmp_path / "missing"), str(tmp_path / "out.adjlist")]
        )
        assert code == 1


class TestCluster:
    """The cluster sub-command."""

    def test_cluster(self, barbell_edgelist: Path, capsys) -> None:
        code = main(
            [
                "cluster",
                str(barbell_edgelist),
                "--seed",
                "0",
                "--locality",
                "0.1",
                "--error",
                "1e-5",
            ]
        )
        assert code == 0
        assert capsys.readouterr().out.strip() == "0 1 2 3 4 5"

    def test_cluster_on_disk(
        self, barbell_edgelist: Path, tmp_path: Path, capsys
    ) -> None:
        adjacencylist = tmp_path / "barbell.adjlist"
        assert main(["convert", str(barbell_edgelist), str(adjacencylist)]) == 0

        code = main(["cluster", str(adjacencylist), "--seed", "7", "--on-disk"])
        assert code == 0
        cluster = [int(v) for v in capsys.readouterr().out.split()]
        assert 7 in cluster
        assert cluster == sorted(cluster)

    def test_cluster_target_volume(self, barbell_edgelist: Path, capsys) -> None:
        code = main(
            ["cluster", str(barbell_edgelist), "--seed", "9", "--target-volume", "1"]
        )
        assert code == 0
        assert capsys.readouterr().out.strip() == "9"

    def test_invalid_locality(self, barbell_edgelist: Path) -> None:
        code = main(
            ["cluster", str(barbell_edgelist), "--seed", "0", "--locality", "2"]
        )
        assert code == 1


class TestSolve:
    """The solve sub-command."""

    @pytest.mark.parametrize("method", ["auto", "jacobi", "gauss-seidel", "exact"])
    def test_solve(self, cycle_system, method, capsys) -> None:
        graph_path, rhs_path = cycle_system
        code = main(
            [
                "solve",
                str(graph_path),
                "--rhs",
                str(rhs_path),
                "--method",
                method,
                "--eps",
                "1e-8",
            ]
        )
        assert code == 0

        x = _printed_vector(capsys.readouterr().out)
        b = np.array([1.0, -1.0, 0.0, 0.0, 0.0])
        residual = np.linalg.norm(cycle_graph(5).laplacian() @ x - b)
        assert residual <= 1e-8

    def test_solve_with_config_file(
        self, cycle_system, tmp_path: Path, capsys
    ) -> None:
        graph_path, rhs_path = cycle_system
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"solver": {"method": "exact"}}))

        code = main(
            [
                "--verbose",
                "solve",
                str(graph_path),
                "--rhs",
                str(rhs_path),
                "--config",
                str(config_path),
            ]
        )
        assert code == 0
        assert len(_printed_vector(capsys.readouterr().out)) == 5

    def test_exhausted_budget_fails(self, cycle_system) -> None:
        graph_path, rhs_path = cycle_system
        code = main(
            [
                "solve",
                str(graph_path),
                "--rhs",
                str(rhs_path),
                "--max-iterations",
                "0",
            ]
        )
        assert code == 1

    def test_mismatched_rhs_fails(self, cycle_system, tmp_path: Path) -> None:
        graph_path, _ = cycle_system
        rhs_path = tmp_path / "short.txt"
        rhs_path.write_text("1\n-1\n")
        code = main(["solve", str(graph_path), "--rhs", str(rhs_path)])
        assert code == 1
