"""Spectral graph algorithms: Laplacians, local clustering and Laplacian solvers."""

from graphspectra.cluster import (
    approximate_pagerank,
    local_cluster,
    local_cluster_acl,
    personalized_pagerank,
    sweep_set_conductance,
)
from graphspectra.graph import (
    AsymmetricAdjacencyError,
    Edge,
    Graph,
    LocalGraph,
    complete_graph,
    cycle_graph,
)
from graphspectra.solve import (
    ConvergenceError,
    gauss_seidel_iteration,
    jacobi_iteration,
    solve_laplacian,
    solve_laplacian_exact_conjugate_gradient,
    solve_laplacian_gauss_seidel,
    solve_laplacian_jacobi,
)

__version__ = "0.1.0"

__all__ = [
    "AsymmetricAdjacencyError",
    "ConvergenceError",
    "Edge",
    "Graph",
    "LocalGraph",
    "approximate_pagerank",
    "complete_graph",
    "cycle_graph",
    "gauss_seidel_iteration",
    "jacobi_iteration",
    "local_cluster",
    "local_cluster_acl",
    "personalized_pagerank",
    "solve_laplacian",
    "solve_laplacian_exact_conjugate_gradient",
    "solve_laplacian_gauss_seidel",
    "solve_laplacian_jacobi",
    "sweep_set_conductance",
]
