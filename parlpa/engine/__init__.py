"""Parallel label propagation engine and convergence detection."""

from parlpa.engine.convergence import (
    DEFAULT_ROUND_LIMIT,
    ConvergenceDetector,
    count_changes,
)
from parlpa.engine.pipeline import detect_communities, run_detection
from parlpa.engine.propagation import (
    PropagationEngine,
    label_indicator,
    partition_ranges,
    propagate_range,
    propagate_round,
)
from parlpa.engine.types import EngineState, LPAResult, RoundStats

__all__ = [
    "DEFAULT_ROUND_LIMIT",
    "ConvergenceDetector",
    "EngineState",
    "LPAResult",
    "PropagationEngine",
    "RoundStats",
    "count_changes",
    "detect_communities",
    "label_indicator",
    "partition_ranges",
    "propagate_range",
    "propagate_round",
    "run_detection",
]
