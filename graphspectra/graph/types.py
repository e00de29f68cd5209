"""Value types shared by the graph model and the local algorithms."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Edge:
    """A weighted edge between two vertices.

    Returned by neighbour queries: v1 is always the queried vertex and v2
    the neighbour. Equality is component-wise, with exact weight equality.
    """

    v1: int  # source vertex id
    v2: int  # destination vertex id
    weight: float
