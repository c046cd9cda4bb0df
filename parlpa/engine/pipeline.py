"""Core entry points: graph in, labels and modularity out."""

import logging
from typing import Any

from parlpa.config.experiment import PropagationConfig
from parlpa.engine.convergence import DEFAULT_ROUND_LIMIT
from parlpa.engine.propagation import PropagationEngine
from parlpa.engine.types import LPAResult
from parlpa.graph.builder import build_graph
from parlpa.graph.types import Graph

log = logging.getLogger(__name__)


def run_detection(
    graph: Graph, config: PropagationConfig | None = None
) -> LPAResult:
    """Run label propagation on an already-built graph."""
    config = config if config is not None else PropagationConfig()
    result = PropagationEngine(graph, config).run()
    log.info(
        "Detection finished: state=%s rounds=%d communities=%d modularity=%s",
        result.state.value,
        result.rounds_executed,
        result.community_count,
        "undefined" if result.modularity is None else f"{result.modularity:.6f}",
    )
    return result


def detect_communities(
    vertex_count: int,
    edges: Any,
    round_limit: int = DEFAULT_ROUND_LIMIT,
    worker_count: int | None = None,
    keep_best: bool = False,
) -> LPAResult:
    """Build a graph from raw edges and detect its communities.

    Args:
        vertex_count: Number of vertices n; ids are [0, n).
        edges: Array-like of (u, v) integer pairs.
        round_limit: Maximum number of rounds.
        worker_count: Worker threads; None uses the CPU count.
        keep_best: Report the highest-modularity round instead of the last.

    Returns:
        LPAResult with labels ordered by vertex id, rounds executed and
        modularity (None when the graph has no edges).

    Raises:
        GraphConstructionError: On empty graphs, out-of-range ids or
            self-loops. No rounds run in that case.
    """
    graph = build_graph(vertex_count, edges)
    config = PropagationConfig(
        round_limit=round_limit,
        worker_count=worker_count,
        keep_best=keep_best,
    )
    return run_detection(graph, config)
