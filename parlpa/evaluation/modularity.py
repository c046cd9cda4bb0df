"""Newman-Girvan modularity of a labeling.

Q = sum_c [ l_c / m - (d_c / 2m)^2 ]

where l_c is the number of edges with both endpoints labelled c and d_c is
the total degree of vertices labelled c. Duplicate edges count with their
multiplicity in both terms.
"""

import logging

import numpy as np

from parlpa.graph.types import Graph

log = logging.getLogger(__name__)


def modularity(graph: Graph, labels: np.ndarray) -> float | None:
    """Compute the modularity Q of the partition induced by labels.

    Args:
        graph: Graph the labels were computed on.
        labels: int array of length n; labels[v] is vertex v's community.
            Label values must lie in [0, n).

    Returns:
        Q as a float, or None when the graph has no edges (Q undefined).
    """
    labels = np.asarray(labels, dtype=np.int64)
    if labels.shape != (graph.n,):
        raise ValueError(
            f"labels must have shape ({graph.n},), got {labels.shape}"
        )
    if graph.m == 0:
        log.warning("Modularity undefined for a graph with no edges")
        return None

    coo = graph.adjacency.tocoo()
    row_labels = labels[coo.row]
    internal = row_labels == labels[coo.col]

    # Each internal edge appears twice in the symmetric adjacency
    l_c = np.bincount(
        row_labels[internal],
        weights=coo.data[internal],
        minlength=graph.n,
    ) / 2.0
    d_c = np.bincount(labels, weights=graph.degrees, minlength=graph.n)

    m = float(graph.m)
    q = l_c / m - (d_c / (2.0 * m)) ** 2
    return float(q.sum())
