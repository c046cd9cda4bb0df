"""Label output and run summary schema."""

from parlpa.results.labels import write_labels
from parlpa.results.schema import (
    build_summary,
    generate_run_id,
    load_summary,
    validate_summary,
    write_summary,
)

__all__ = [
    "build_summary",
    "generate_run_id",
    "load_summary",
    "validate_summary",
    "write_labels",
    "write_summary",
]
