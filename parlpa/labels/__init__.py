"""Double-buffered label assignment owned by the propagation engine."""

from parlpa.labels.store import LabelStore, LabelStoreError

__all__ = [
    "LabelStore",
    "LabelStoreError",
]
