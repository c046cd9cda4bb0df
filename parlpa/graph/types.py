"""Graph data structures shared read-only by the engine and the evaluator."""

from dataclasses import dataclass

import numpy as np
import scipy.sparse


@dataclass(frozen=True)
class Graph:
    """Immutable undirected multigraph over dense vertex ids [0, n).

    The adjacency matrix is symmetric; entry (u, v) holds the number of
    input edges joining u and v, so duplicate edges keep their
    multiplicity. The fields are frozen and build_graph marks the degree
    and CSR arrays read-only. Omits slots=True since numpy/scipy objects
    don't interact well with __slots__.
    """

    adjacency: scipy.sparse.csr_matrix  # symmetric (n x n), int64 multiplicities
    degrees: np.ndarray  # int64 array of length n, row sums of adjacency
    n: int  # number of vertices
    m: int  # number of edges, counted with multiplicity

    def vertex_count(self) -> int:
        return self.n

    def edge_count(self) -> int:
        return self.m

    def _check_vertex(self, v: int) -> None:
        if not 0 <= v < self.n:
            raise IndexError(f"vertex {v} outside [0, {self.n})")

    def degree(self, v: int) -> int:
        self._check_vertex(v)
        return int(self.degrees[v])

    def neighbors(self, v: int) -> np.ndarray:
        """Neighbour ids of v in ascending order, repeated by multiplicity."""
        self._check_vertex(v)
        start, stop = self.adjacency.indptr[v], self.adjacency.indptr[v + 1]
        return np.repeat(
            self.adjacency.indices[start:stop],
            self.adjacency.data[start:stop],
        )


@dataclass(frozen=True)
class EdgeList:
    """Raw edge rows read from a file, before graph construction."""

    vertex_count: int  # from the header row
    declared_edges: int  # from the header row; may disagree with len(edges)
    edges: np.ndarray  # int64 array of shape (m, 2)
    line_numbers: np.ndarray  # 1-based source line of each edge row
