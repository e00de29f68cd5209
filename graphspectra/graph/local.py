"""The LocalGraph interface used by local clustering algorithms.

Local algorithms only ever ask two questions of a graph: the degree of a
vertex and its weighted neighbours. Anything that answers them, whether an
in-memory Graph or a file on disk, can be clustered without materializing
the whole graph.
"""

from abc import ABC, abstractmethod

from graphspectra.graph.types import Edge


class LocalGraph(ABC):
    """Abstract base for graphs queried one vertex at a time.

    Implementations must accept any non-negative vertex id, including ids
    the source has never seen: such vertices have degree 0 and no
    neighbours.
    """

    @abstractmethod
    def degree(self, v: int) -> float:
        """Weighted degree of vertex v (sum of incident edge weights)."""

    @abstractmethod
    def degree_unweighted(self, v: int) -> int:
        """Number of neighbours of vertex v."""

    @abstractmethod
    def neighbors(self, v: int) -> list[Edge]:
        """Weighted edges leaving vertex v, as Edge(v, u, weight)."""

    @abstractmethod
    def neighbors_unweighted(self, v: int) -> list[int]:
        """Ids of the neighbours of vertex v."""

    def degrees(self, vertices: list[int]) -> list[float]:
        """Weighted degrees of several vertices at once."""
        return [self.degree(v) for v in vertices]
