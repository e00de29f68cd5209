"""A LocalGraph that reads neighbourhoods from an adjacency-list file on demand.

The file must be sorted by vertex id, as written by ``save_adjacencylist``.
Each query binary-searches the file by byte offset, so the graph is never
loaded into memory. Answers are memoized per vertex in a bounded LRU cache.
"""

import functools
import logging
import os
from pathlib import Path
from typing import BinaryIO

from graphspectra.graph.local import LocalGraph
from graphspectra.graph.types import Edge
from graphspectra.graphio.formats import (
    GraphFormatError,
    is_content_line,
    parse_adjacencylist_content_line,
)

log = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 100_000


def _next_content_line(
    f: BinaryIO, offset: int
) -> tuple[int, int, int, str] | None:
    """Find the first content line starting at or after a byte offset.

    Returns:
        (start, end, vertex, text) of the line, or None at end of file.
    """
    if offset > 0:
        # Finish the line containing offset - 1; if that byte is a newline
        # the file is now positioned exactly at offset.
        f.seek(offset - 1)
        f.readline()
    else:
        f.seek(0)

    while True:
        start = f.tell()
        raw = f.readline()
        if not raw:
            return None
        text = raw.decode("utf-8")
        if is_content_line(text):
            head = text.partition(":")[0]
            try:
                vertex = int(head)
            except ValueError as e:
                raise GraphFormatError(
                    f"Cannot parse vertex id at byte {start}: {text.strip()!r}"
                ) from e
            return start, f.tell(), vertex, text


class AdjacencyListLocalGraph(LocalGraph):
    """LocalGraph backed by a sorted adjacency-list file.

    Vertices missing from the file, including ids past its end, have
    degree 0 and no neighbours.
    """

    def __init__(
        self, path: str | Path, cache_size: int | None = DEFAULT_CACHE_SIZE
    ) -> None:
        """Open an adjacency-list file for local queries.

        Args:
            path: Sorted adjacency-list file.
            cache_size: Number of neighbourhoods kept in memory, least
                recently used first out. None keeps every neighbourhood.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        self.path = Path(path)
        if not self.path.is_file():
            raise FileNotFoundError(f"Adjacency list not found: {self.path}")
        self._size = os.path.getsize(self.path)
        self._edges = functools.lru_cache(maxsize=cache_size)(self._read_edges)

    def _find_line(self, f: BinaryIO, v: int) -> str | None:
        lo, hi = 0, self._size
        while lo < hi:
            mid = (lo + hi) // 2
            found = _next_content_line(f, mid)
            if found is None or found[0] >= hi:
                hi = mid
                continue
            _, end, vertex, text = found
            if vertex == v:
                return text
            if vertex < v:
                lo = end
            else:
                hi = mid
        return None

    def _read_edges(self, v: int) -> list[Edge]:
        edges: list[Edge] = []
        if v >= 0:
            with open(self.path, "rb") as f:
                text = self._find_line(f, v)
            if text is not None:
                edges = parse_adjacencylist_content_line(text)

        log.debug("Read %d neighbours of vertex %d from %s", len(edges), v, self.path)
        return edges

    def degree(self, v: int) -> float:
        return float(sum(e.weight for e in self._edges(v)))

    def degree_unweighted(self, v: int) -> int:
        return len(self._edges(v))

    def neighbors(self, v: int) -> list[Edge]:
        return list(self._edges(v))

    def neighbors_unweighted(self, v: int) -> list[int]:
        return [e.v2 for e in self._edges(v)]
