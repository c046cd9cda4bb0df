"""Graph construction from an edge list, with fail-fast input validation.

Every check runs before any adjacency is built, so a malformed input
never yields a partial graph:
1. Declared vertex count is positive (EmptyGraph)
2. Every endpoint lies in [0, n) (VertexOutOfRange)
3. No edge joins a vertex to itself (SelfLoop)
"""

import logging
from typing import Any

import numpy as np
import scipy.sparse

from parlpa.graph.types import Graph

log = logging.getLogger(__name__)


class GraphConstructionError(ValueError):
    """Base class for input errors detected while building a graph.

    Attributes:
        index: Position of the offending edge in the input, if any.
        edge: The offending (u, v) pair, if any.
        line: Source file line of the offending edge, if known.
    """

    def __init__(
        self,
        message: str,
        index: int | None = None,
        edge: tuple[int, int] | None = None,
        line: int | None = None,
    ) -> None:
        super().__init__(message)
        self.index = index
        self.edge = edge
        self.line = line


class EmptyGraph(GraphConstructionError):
    """Raised when the declared vertex count is zero."""


class VertexOutOfRange(GraphConstructionError):
    """Raised when an edge references a vertex id outside [0, n)."""


class SelfLoop(GraphConstructionError):
    """Raised when an edge has equal endpoints."""


def _as_edge_array(edges: Any) -> np.ndarray:
    arr = np.asarray(edges)
    if arr.size == 0:
        return arr.astype(np.int64).reshape(0, 2)
    if not np.issubdtype(arr.dtype, np.integer):
        raise GraphConstructionError(
            f"edges must hold integer vertex ids, got dtype {arr.dtype}"
        )
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(
            f"edges must have shape (m, 2), got {arr.shape}"
        )
    return arr.astype(np.int64)


def _describe(
    index: int, edge: np.ndarray, line_numbers: np.ndarray | None
) -> tuple[str, tuple[int, int], int | None]:
    pair = (int(edge[0]), int(edge[1]))
    if line_numbers is None:
        return f"edge {index} {pair}", pair, None
    line = int(line_numbers[index])
    return f"edge {index} {pair} (line {line})", pair, line


def build_graph(
    vertex_count: int,
    edges: Any,
    line_numbers: np.ndarray | None = None,
) -> Graph:
    """Build an immutable undirected graph from (u, v) pairs.

    Duplicate edges are kept: each copy adds one neighbour entry to both
    endpoints and counts once towards m.

    Args:
        vertex_count: Declared number of vertices n; ids are [0, n).
        edges: Array-like of shape (m, 2) holding integer vertex ids.
        line_numbers: Optional source line per edge, used in error messages.

    Returns:
        Graph with symmetric CSR adjacency and per-vertex degrees.

    Raises:
        EmptyGraph: If vertex_count is zero.
        VertexOutOfRange: If any endpoint is < 0 or >= vertex_count.
        SelfLoop: If any edge has u == v.
        GraphConstructionError: If edges does not hold integers.
        ValueError: If vertex_count is negative or edges is mis-shaped.
    """
    if vertex_count < 0:
        raise ValueError(f"vertex_count must be >= 0, got {vertex_count}")
    if vertex_count == 0:
        raise EmptyGraph("Graph must declare at least one vertex, got 0")

    arr = _as_edge_array(edges)
    n = int(vertex_count)

    out_of_range = ((arr < 0) | (arr >= n)).any(axis=1)
    if out_of_range.any():
        index = int(np.flatnonzero(out_of_range)[0])
        what, pair, line = _describe(index, arr[index], line_numbers)
        raise VertexOutOfRange(
            f"{what} references a vertex outside [0, {n})",
            index=index,
            edge=pair,
            line=line,
        )

    loops = arr[:, 0] == arr[:, 1]
    if loops.any():
        index = int(np.flatnonzero(loops)[0])
        what, pair, line = _describe(index, arr[index], line_numbers)
        raise SelfLoop(
            f"{what} is a self-loop",
            index=index,
            edge=pair,
            line=line,
        )

    m = arr.shape[0]
    rows = np.concatenate([arr[:, 0], arr[:, 1]])
    cols = np.concatenate([arr[:, 1], arr[:, 0]])
    data = np.ones(2 * m, dtype=np.int64)

    # Duplicate (row, col) entries are summed into multiplicities
    adjacency = scipy.sparse.csr_matrix((data, (rows, cols)), shape=(n, n))
    adjacency.sort_indices()

    degrees = np.bincount(rows, minlength=n).astype(np.int64)

    assert int(degrees.sum()) == 2 * m, (
        f"degree sum {int(degrees.sum())} != 2 * m ({2 * m})"
    )
    assert int(adjacency.sum()) == 2 * m, (
        f"adjacency sum {int(adjacency.sum())} != 2 * m ({2 * m})"
    )

    for array in (degrees, adjacency.data, adjacency.indices, adjacency.indptr):
        array.flags.writeable = False

    log.info(
        "Graph built: n=%d, m=%d, isolated=%d",
        n,
        m,
        int((degrees == 0).sum()),
    )
    return Graph(adjacency=adjacency, degrees=degrees, n=n, m=m)
