"""In-memory undirected graph with lazily computed spectral matrices.

The graph wraps a symmetric CSR adjacency matrix. Degree, Laplacian and
normalised Laplacian matrices are built on first access and cached for the
lifetime of the object. The graph is never mutated after construction, so
the caches never need invalidating.
"""

import logging
from functools import cached_property
from typing import Sequence

import numpy as np
import scipy.sparse

from graphspectra.graph.local import LocalGraph
from graphspectra.graph.types import Edge
from graphspectra.graph.utility import is_symmetric

log = logging.getLogger(__name__)


class AsymmetricAdjacencyError(ValueError):
    """Raised when a graph is constructed from an asymmetric adjacency matrix."""


class Graph(LocalGraph):
    """An undirected weighted graph backed by a sparse adjacency matrix.

    Derived matrices are memoized with ``cached_property``. The first call
    to ``laplacian()`` (and friends) is not safe under concurrent access
    from several threads; once a matrix has been computed, reading it
    concurrently is fine.

    The returned matrices are shared with the graph. Callers must treat
    them as read-only.
    """

    def __init__(self, adjacency: scipy.sparse.spmatrix | np.ndarray) -> None:
        """Build a graph from a symmetric adjacency matrix.

        Args:
            adjacency: Square sparse (or dense) matrix with non-negative
                weights. It is copied into canonical CSR form.

        Raises:
            AsymmetricAdjacencyError: If adjacency[i, j] != adjacency[j, i]
                for some i, j. The check is exact, with no floating-point
                tolerance.
        """
        matrix = scipy.sparse.csr_matrix(adjacency, dtype=np.float64, copy=True)
        matrix.sum_duplicates()

        if not is_symmetric(matrix):
            raise AsymmetricAdjacencyError(
                "Graph adjacency matrix must be symmetric."
            )

        self._adjacency = matrix
        self._n = matrix.shape[0]
        log.debug(
            "Graph created: n=%d, stored entries=%d", self._n, matrix.nnz
        )

    @classmethod
    def from_csr_arrays(
        cls,
        outer_starts: Sequence[int],
        inner_indices: Sequence[int],
        values: Sequence[float],
    ) -> "Graph":
        """Build a graph from raw compressed-sparse-row arrays.

        The number of vertices is len(outer_starts) - 1.

        Args:
            outer_starts: Row start offsets, of length n + 1.
            inner_indices: Column index of every stored entry.
            values: Weight of every stored entry.

        Returns:
            The constructed Graph.
        """
        n = len(outer_starts) - 1
        matrix = scipy.sparse.csr_matrix(
            (
                np.asarray(values, dtype=np.float64),
                np.asarray(inner_indices),
                np.asarray(outer_starts),
            ),
            shape=(n, n),
        )
        return cls(matrix)

    # ── Matrices ──────────────────────────────────────────────────

    def adjacency(self) -> scipy.sparse.csr_matrix:
        """The adjacency matrix of the graph."""
        return self._adjacency

    def degree_matrix(self) -> scipy.sparse.csr_matrix:
        """Diagonal matrix of weighted vertex degrees."""
        return self._degree_matrix

    def laplacian(self) -> scipy.sparse.csr_matrix:
        """The combinatorial Laplacian L = D - A."""
        return self._laplacian

    def normalised_laplacian(self) -> scipy.sparse.csr_matrix:
        """The normalised Laplacian I - D^{-1/2} A D^{-1/2}."""
        return self._normalised_laplacian

    @cached_property
    def _degree_matrix(self) -> scipy.sparse.csr_matrix:
        degrees = self._adjacency @ np.ones(self._n)

        # One stored entry per row, zeros included, so that the degree of
        # vertex v is always data[v].
        matrix = scipy.sparse.csr_matrix(
            (degrees, np.arange(self._n), np.arange(self._n + 1)),
            shape=(self._n, self._n),
        )
        log.debug("Degree matrix initialised (n=%d)", self._n)
        return matrix

    @cached_property
    def _laplacian(self) -> scipy.sparse.csr_matrix:
        laplacian = (self._degree_matrix - self._adjacency).tocsr()
        laplacian.sort_indices()
        log.debug("Laplacian initialised (nnz=%d)", laplacian.nnz)
        return laplacian

    @cached_property
    def _normalised_laplacian(self) -> scipy.sparse.csr_matrix:
        degrees = self._degree_matrix.data

        # Isolated vertices get 0 rather than 1/sqrt(0), leaving their row
        # of the normalised Laplacian equal to the identity row.
        inv_sqrt = np.zeros(self._n)
        positive = degrees > 0
        inv_sqrt[positive] = 1.0 / np.sqrt(degrees[positive])
        sqrt_inv_deg = scipy.sparse.diags(inv_sqrt, format="csr")

        identity = scipy.sparse.identity(self._n, format="csr")
        normalised = (
            identity - sqrt_inv_deg @ self._adjacency @ sqrt_inv_deg
        ).tocsr()
        normalised.sort_indices()
        log.debug(
            "Normalised Laplacian initialised (nnz=%d)", normalised.nnz
        )
        return normalised

    # ── Global properties ─────────────────────────────────────────

    def total_volume(self) -> float:
        """Sum of all vertex degrees (twice the total edge weight)."""
        degrees = self._adjacency @ np.ones(self._n)
        return float(degrees.sum())

    def number_of_vertices(self) -> int:
        return self._n

    def number_of_edges(self) -> int:
        """Number of undirected edges, assuming both directions are stored."""
        return self._adjacency.nnz // 2

    # ── LocalGraph interface ──────────────────────────────────────

    def _in_range(self, v: int) -> bool:
        return 0 <= v < self._n

    def degree(self, v: int) -> float:
        if not self._in_range(v):
            return 0.0
        return float(self._degree_matrix.data[v])

    def degree_unweighted(self, v: int) -> int:
        if not self._in_range(v):
            return 0
        indptr = self._adjacency.indptr
        return int(indptr[v + 1] - indptr[v])

    def neighbors(self, v: int) -> list[Edge]:
        if not self._in_range(v):
            return []
        start, end = self._adjacency.indptr[v], self._adjacency.indptr[v + 1]
        columns = self._adjacency.indices[start:end]
        weights = self._adjacency.data[start:end]
        return [
            Edge(v, int(u), float(w)) for u, w in zip(columns, weights)
        ]

    def neighbors_unweighted(self, v: int) -> list[int]:
        if not self._in_range(v):
            return []
        start, end = self._adjacency.indptr[v], self._adjacency.indptr[v + 1]
        return self._adjacency.indices[start:end].tolist()

    # ── Comparison ────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        """Structural equality of the compressed adjacency representations."""
        if not isinstance(other, Graph):
            return NotImplemented
        a, b = self._adjacency, other._adjacency
        return (
            np.array_equal(a.indptr, b.indptr)
            and np.array_equal(a.indices, b.indices)
            and np.array_equal(a.data, b.data)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Graph(n={self._n}, edges={self.number_of_edges()})"
        )
