#!/usr/bin/env python3
"""Command-line entry point for graphspectra.

Sub-commands:
    cluster   find a local cluster around a seed vertex
    solve     solve the Laplacian system L x = b of a graph
    convert   convert an edgelist file to an adjacency-list file

Usage:
    python run_spectral.py cluster graph.edgelist --seed 0
    python run_spectral.py cluster graph.adjlist --seed 0 --on-disk --target-volume 50
    python run_spectral.py solve graph.edgelist --rhs b.txt --method gauss-seidel
    python run_spectral.py convert graph.edgelist graph.adjlist
    python run_spectral.py --verbose solve graph.edgelist --rhs b.txt --config cfg.json
"""

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import Generator

import numpy as np

from graphspectra.cluster import local_cluster, local_cluster_acl
from graphspectra.config import (
    DEFAULT_CONFIG,
    SOLVER_METHODS,
    EngineConfig,
    config_hash,
    load_config,
)
from graphspectra.graph import LocalGraph
from graphspectra.graphio import (
    AdjacencyListLocalGraph,
    edgelist_to_adjacencylist,
    load_graph,
)
from graphspectra.solve import solve_laplacian

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that logs a stage with its elapsed time."""
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    log.info("Completed: %s in %.3fs", name, time.monotonic() - t0)


def _resolve_config(args: argparse.Namespace) -> EngineConfig:
    """Load the config file (if any) and apply command-line overrides."""
    config = load_config(args.config) if args.config else DEFAULT_CONFIG

    if args.command == "cluster":
        overrides = {
            key: value
            for key, value in (
                ("locality", args.locality),
                ("error", args.error),
                ("target_volume", args.target_volume),
            )
            if value is not None
        }
        config = replace(config, cluster=replace(config.cluster, **overrides))
    elif args.command == "solve":
        overrides = {
            key: value
            for key, value in (
                ("method", args.method),
                ("eps", args.eps),
                ("max_iterations", args.max_iterations),
            )
            if value is not None
        }
        config = replace(config, solver=replace(config.solver, **overrides))

    log.info("Config hash: %s", config_hash(config))
    return config


def run_cluster(args: argparse.Namespace, config: EngineConfig) -> list[int]:
    """Run local clustering and return the cluster, sorted by vertex id."""
    graph: LocalGraph
    total_volume = None
    with stage_timer("Graph Loading"):
        if args.on_disk:
            graph = AdjacencyListLocalGraph(args.graph)
        else:
            graph = load_graph(args.graph)
            total_volume = graph.total_volume()

    with stage_timer("Local Clustering"):
        if config.cluster.target_volume is not None:
            cluster = local_cluster(
                graph, args.seed, config.cluster.target_volume, total_volume
            )
        else:
            cluster = local_cluster_acl(
                graph,
                args.seed,
                config.cluster.locality,
                config.cluster.error,
                total_volume,
            )
    return sorted(cluster)


def run_solve(args: argparse.Namespace, config: EngineConfig) -> np.ndarray:
    """Solve L x = b for the graph's Laplacian."""
    with stage_timer("Graph Loading"):
        graph = load_graph(args.graph)
        b = np.atleast_1d(np.loadtxt(args.rhs, dtype=np.float64))

    with stage_timer("Laplacian Solve"):
        return solve_laplacian(
            graph,
            b,
            config.solver.eps,
            max_iterations=config.solver.max_iterations,
            method=config.solver.method,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Spectral graph algorithms: local clustering and "
        "Laplacian solvers",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    cluster = subparsers.add_parser(
        "cluster", help="Find a local cluster around a seed vertex"
    )
    cluster.add_argument("graph", type=Path, help="Edgelist or .adjlist file")
    cluster.add_argument("--seed", type=int, required=True, help="Seed vertex")
    cluster.add_argument("--config", type=Path, help="Engine config JSON file")
    cluster.add_argument("--locality", type=float, help="ACL locality (alpha)")
    cluster.add_argument("--error", type=float, help="ACL error (epsilon)")
    cluster.add_argument(
        "--target-volume",
        type=float,
        help="Target cluster volume; overrides --locality and --error",
    )
    cluster.add_argument(
        "--on-disk",
        action="store_true",
        help="Query a sorted .adjlist file locally instead of loading it",
    )

    solve = subparsers.add_parser("solve", help="Solve L x = b")
    solve.add_argument("graph", type=Path, help="Edgelist or .adjlist file")
    solve.add_argument(
        "--rhs", type=Path, required=True, help="Text file with the vector b"
    )
    solve.add_argument("--config", type=Path, help="Engine config JSON file")
    solve.add_argument("--method", choices=SOLVER_METHODS, help="Solver method")
    solve.add_argument("--eps", type=float, help="Residual tolerance")
    solve.add_argument(
        "--max-iterations", type=int, help="Iteration budget for iterative methods"
    )

    convert = subparsers.add_parser(
        "convert", help="Convert an edgelist to an adjacency list"
    )
    convert.add_argument("edgelist", type=Path)
    convert.add_argument("adjacencylist", type=Path)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "convert":
            with stage_timer("Conversion"):
                edgelist_to_adjacencylist(args.edgelist, args.adjacencylist)
            return 0

        config = _resolve_config(args)
        if args.command == "cluster":
            print(" ".join(str(v) for v in run_cluster(args, config)))
        else:
            for value in run_solve(args, config):
                print(repr(float(value)))
    except Exception:
        log.exception("%s failed", args.command)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
