"""Engine state and result data structures."""

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from parlpa.evaluation.communities import community_count


class EngineState(Enum):
    """Propagation engine lifecycle. CONVERGED and LIMIT_REACHED are terminal."""

    RUNNING = "running"
    CONVERGED = "converged"
    LIMIT_REACHED = "limit_reached"

    @property
    def terminal(self) -> bool:
        return self is not EngineState.RUNNING


@dataclass(frozen=True, slots=True)
class RoundStats:
    """Summary of one completed round."""

    round: int  # 1-based round number
    changed: int  # vertices whose label changed this round
    communities: int  # distinct labels after the round
    modularity: float | None  # None if not tracked or undefined
    elapsed: float  # wall-clock seconds spent in the round


@dataclass(frozen=True)
class LPAResult:
    """Final labeling and run metadata.

    Uses frozen=True but omits slots=True since numpy arrays don't
    interact well with __slots__.
    """

    labels: np.ndarray  # int64 array of length n, vertex -> label
    rounds_executed: int
    state: EngineState
    modularity: float | None  # None when the graph has no edges
    best_round: int  # round whose labels are reported (0 = initial labeling)
    history: list[RoundStats] = field(default_factory=list)

    @property
    def community_count(self) -> int:
        return community_count(self.labels)

    def final_labels(self) -> list[tuple[int, int]]:
        """(vertex_id, label) pairs ordered by vertex id."""
        return [(v, int(label)) for v, label in enumerate(self.labels)]
