"""Parallel synchronous label propagation.

Each round computes every vertex's new label from a frozen snapshot of
the previous labels:
1. Count neighbour labels with a sparse product A[start:stop] @ L, where
   L is the one-hot (vertex x label) indicator of the current labels
2. Pick the most frequent label per vertex, breaking ties towards the
   smallest label value
3. Isolated vertices (no counts) keep their label

Vertex ranges are disjoint, so workers write to non-overlapping slices of
the scratch buffer and need no locks. A round's result depends only on
the snapshot, never on how vertices are split across workers.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, wait

import numpy as np
import scipy.sparse

from parlpa.config.experiment import PropagationConfig
from parlpa.engine.convergence import ConvergenceDetector, count_changes
from parlpa.engine.types import EngineState, LPAResult, RoundStats
from parlpa.evaluation.communities import community_count
from parlpa.evaluation.modularity import modularity
from parlpa.graph.types import Graph
from parlpa.labels.store import LabelStore

log = logging.getLogger(__name__)


def label_indicator(labels: np.ndarray) -> scipy.sparse.csr_matrix:
    """One-hot (n x n) matrix with a 1 at (v, labels[v])."""
    n = labels.shape[0]
    return scipy.sparse.csr_matrix(
        (np.ones(n, dtype=np.int64), (np.arange(n), labels)),
        shape=(n, n),
    )


def partition_ranges(n: int, workers: int) -> list[tuple[int, int]]:
    """Split [0, n) into at most `workers` contiguous, non-empty ranges."""
    if n < 1 or workers < 1:
        raise ValueError(f"need n >= 1 and workers >= 1, got n={n}, workers={workers}")
    k = min(workers, n)
    bounds = [(i * n) // k for i in range(k + 1)]
    return [(bounds[i], bounds[i + 1]) for i in range(k)]


def _check_ranges(ranges: list[tuple[int, int]], n: int) -> None:
    expected = 0
    for start, stop in ranges:
        if start != expected or stop <= start:
            raise RuntimeError(
                f"vertex ranges must tile [0, {n}) in order, got {ranges}"
            )
        expected = stop
    if expected != n:
        raise RuntimeError(f"vertex ranges cover [0, {expected}), expected [0, {n})")


def propagate_range(
    graph: Graph,
    current: np.ndarray,
    scratch: np.ndarray,
    start: int,
    stop: int,
    indicator: scipy.sparse.csr_matrix | None = None,
) -> int:
    """Compute new labels for vertices [start, stop).

    Reads only `current` and writes only scratch[start:stop].

    Args:
        graph: Graph being partitioned.
        current: Labels at the start of the round.
        scratch: Buffer receiving the new labels.
        start: First vertex of the range.
        stop: One past the last vertex of the range.
        indicator: Precomputed label_indicator(current), shared by all
            ranges of a round. Built on demand if omitted.

    Returns:
        Number of vertices in the range whose label changed.
    """
    if indicator is None:
        indicator = label_indicator(current)

    counts = (graph.adjacency[start:stop] @ indicator).tocsr()
    counts.sum_duplicates()

    scratch[start:stop] = current[start:stop]

    if counts.nnz:
        rows = np.repeat(np.arange(stop - start), np.diff(counts.indptr))
        # Per row: highest count first, then smallest label
        order = np.lexsort((counts.indices, -counts.data, rows))
        sorted_rows = rows[order]
        first = np.ones(order.shape[0], dtype=bool)
        first[1:] = sorted_rows[1:] != sorted_rows[:-1]
        winners = order[first]
        scratch[start + rows[winners]] = counts.indices[winners]

    return count_changes(current, scratch, start, stop)


def propagate_round(
    graph: Graph,
    store: LabelStore,
    executor: ThreadPoolExecutor,
    ranges: list[tuple[int, int]],
) -> int:
    """Run one synchronous round over all ranges, then swap buffers.

    Returns:
        Total number of vertices whose label changed.
    """
    _check_ranges(ranges, graph.n)
    current = store.current
    scratch = store.scratch
    indicator = label_indicator(current)

    futures = [
        executor.submit(
            propagate_range, graph, current, scratch, start, stop, indicator
        )
        for start, stop in ranges
    ]
    # Barrier: no swap until every range is written
    wait(futures)
    changed = sum(f.result() for f in futures)

    store.swap()
    return changed


class PropagationEngine:
    """Drives propagation rounds until convergence or the round limit.

    Owns the label store and the worker pool. Use as a context manager to
    step rounds manually, or call run() directly.

    Usage::

        with PropagationEngine(graph, PropagationConfig(round_limit=10)) as engine:
            while engine.state is EngineState.RUNNING:
                stats = engine.step()
            result = engine.result()
    """

    def __init__(
        self, graph: Graph, config: PropagationConfig | None = None
    ) -> None:
        self.graph = graph
        self.config = config if config is not None else PropagationConfig()
        self.store = LabelStore(graph.n)
        self.store.init()
        self.detector = ConvergenceDetector(self.config.round_limit)
        self.ranges = partition_ranges(graph.n, self.config.resolved_workers())
        self.history: list[RoundStats] = []

        self._executor: ThreadPoolExecutor | None = None
        self._score_rounds = graph.m > 0 and (
            self.config.track_modularity or self.config.keep_best
        )
        self._best_labels: np.ndarray | None = None
        self._best_modularity = -1.0
        self._best_round = 0

    def __enter__(self) -> "PropagationEngine":
        self._executor = ThreadPoolExecutor(
            max_workers=len(self.ranges), thread_name_prefix="lpa-worker"
        )
        log.debug(
            "Worker pool started: %d workers over %d vertices",
            len(self.ranges),
            self.graph.n,
        )
        return self

    def __exit__(self, *exc_info) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    @property
    def state(self) -> EngineState:
        return self.detector.state

    @property
    def rounds(self) -> int:
        return self.detector.rounds

    def step(self) -> RoundStats:
        """Run a single round and update the engine state."""
        if self.state.terminal:
            raise RuntimeError(f"engine already stopped ({self.state.value})")
        if self._executor is None:
            raise RuntimeError("step() called outside the engine context")

        t0 = time.monotonic()
        changed = propagate_round(
            self.graph, self.store, self._executor, self.ranges
        )
        self.detector.observe(changed)
        elapsed = time.monotonic() - t0

        labels = self.store.current
        q = modularity(self.graph, labels) if self._score_rounds else None
        stats = RoundStats(
            round=self.detector.rounds,
            changed=changed,
            communities=community_count(labels),
            modularity=q,
            elapsed=elapsed,
        )
        self.history.append(stats)

        if self.config.keep_best and q is not None and q > self._best_modularity:
            self._best_labels = self.store.snapshot()
            self._best_modularity = q
            self._best_round = stats.round

        log.info(
            "Round %d | changed: %d communities: %d modularity: %s time: %.3fs",
            stats.round,
            stats.changed,
            stats.communities,
            "n/a" if q is None else f"{q:.6f}",
            elapsed,
        )
        return stats

    def result(self) -> LPAResult:
        """Package the reported labeling. Valid once the engine has stopped."""
        if not self.state.terminal:
            raise RuntimeError("result() requested while the engine is running")

        if self.config.keep_best and self._best_labels is not None:
            return LPAResult(
                labels=self._best_labels,
                rounds_executed=self.rounds,
                state=self.state,
                modularity=self._best_modularity,
                best_round=self._best_round,
                history=list(self.history),
            )

        labels = self.store.snapshot()
        last = self.history[-1]
        q = last.modularity if self._score_rounds else modularity(self.graph, labels)
        return LPAResult(
            labels=labels,
            rounds_executed=self.rounds,
            state=self.state,
            modularity=q,
            best_round=self.rounds,
            history=list(self.history),
        )

    def run(self) -> LPAResult:
        """Run rounds until CONVERGED or LIMIT_REACHED."""
        if self._executor is None:
            with self:
                return self.run()

        initial = self.store.current
        log.info(
            "Initial | communities: %d modularity: %s workers: %d",
            community_count(initial),
            "n/a"
            if not self._score_rounds
            else f"{modularity(self.graph, initial):.6f}",
            len(self.ranges),
        )
        while not self.state.terminal:
            self.step()
        return self.result()
