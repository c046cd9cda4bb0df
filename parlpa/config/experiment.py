"""Run configuration dataclasses, all frozen and slotted for immutability."""

import os
from dataclasses import dataclass, field

DELIMITERS = ("whitespace", "tab", "comma")


@dataclass(frozen=True, slots=True)
class InputConfig:
    """Edge-list file location and format."""

    edge_path: str = ""
    delimiter: str = "whitespace"  # whitespace, tab, or comma
    comment: str = "#"  # lines starting with this character are skipped

    def __post_init__(self) -> None:
        if self.delimiter not in DELIMITERS:
            raise ValueError(
                f"delimiter must be one of {DELIMITERS}, got {self.delimiter!r}"
            )
        if len(self.comment) != 1:
            raise ValueError(
                f"comment must be a single character, got {self.comment!r}"
            )


@dataclass(frozen=True, slots=True)
class PropagationConfig:
    """Label propagation engine parameters."""

    round_limit: int = 20
    worker_count: int | None = None  # None = available hardware parallelism
    keep_best: bool = False  # report the highest-modularity round instead of the last
    track_modularity: bool = True  # score every round, not just the final one

    def __post_init__(self) -> None:
        if self.round_limit < 1:
            raise ValueError(f"round_limit must be >= 1, got {self.round_limit}")
        if self.worker_count is not None and self.worker_count < 1:
            raise ValueError(
                f"worker_count must be >= 1, got {self.worker_count}"
            )

    def resolved_workers(self) -> int:
        """Worker pool size, falling back to the CPU count."""
        if self.worker_count is not None:
            return self.worker_count
        return os.cpu_count() or 1


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Where results are written. None disables that output."""

    labels_path: str | None = None
    summary_path: str | None = None


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Top-level run configuration composing all sub-configs.

    Validation of each section happens in its own __post_init__; this
    level only checks cross-section constraints.
    """

    input: InputConfig = field(default_factory=InputConfig)
    propagation: PropagationConfig = field(default_factory=PropagationConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        labels_path = self.output.labels_path
        if labels_path is not None and labels_path == self.output.summary_path:
            raise ValueError(
                f"labels_path and summary_path must differ, both are {labels_path!r}"
            )
        if labels_path is not None and labels_path == self.input.edge_path:
            raise ValueError(
                f"labels_path ({labels_path!r}) would overwrite the input edge list"
            )
