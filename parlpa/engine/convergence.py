"""Round-boundary termination: semantic convergence or the round limit."""

import logging

import numpy as np

from parlpa.engine.types import EngineState

log = logging.getLogger(__name__)

DEFAULT_ROUND_LIMIT = 20


def count_changes(
    current: np.ndarray,
    nxt: np.ndarray,
    start: int = 0,
    stop: int | None = None,
) -> int:
    """Count positions in [start, stop) where the two buffers differ."""
    if current.shape != nxt.shape:
        raise RuntimeError(
            f"buffer length mismatch: {current.shape} vs {nxt.shape}"
        )
    return int(np.count_nonzero(current[start:stop] != nxt[start:stop]))


class ConvergenceDetector:
    """Tracks rounds and decides when the engine stops.

    A round with zero changes converges even if it is also the last round
    the limit allows.
    """

    def __init__(self, round_limit: int = DEFAULT_ROUND_LIMIT) -> None:
        if round_limit < 1:
            raise ValueError(f"round_limit must be >= 1, got {round_limit}")
        self.round_limit = round_limit
        self._rounds = 0
        self._state = EngineState.RUNNING

    @property
    def rounds(self) -> int:
        return self._rounds

    @property
    def state(self) -> EngineState:
        return self._state

    def observe(self, change_count: int) -> EngineState:
        """Record one finished round and return the resulting state."""
        if self._state.terminal:
            raise RuntimeError(
                f"round observed after termination ({self._state.value})"
            )
        self._rounds += 1

        if change_count == 0:
            self._state = EngineState.CONVERGED
            log.info("Converged after %d rounds", self._rounds)
        elif self._rounds >= self.round_limit:
            self._state = EngineState.LIMIT_REACHED
            log.info(
                "Round limit %d reached with %d vertices still changing",
                self.round_limit,
                change_count,
            )
        return self._state
