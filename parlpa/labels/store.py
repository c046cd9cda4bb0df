"""Double-buffered per-vertex label storage.

During a round, workers read only the current buffer and write only their
own slice of the scratch buffer. swap() is called once all writers have
finished, making the freshly computed labels current.
"""

import numpy as np


class LabelStoreError(RuntimeError):
    """Raised on a broken buffer invariant. Never caused by user input."""


class LabelStore:
    """Two equal-length int64 label arrays addressed by vertex id."""

    def __init__(self, n: int) -> None:
        if n < 1:
            raise LabelStoreError(f"label store needs at least one vertex, got {n}")
        self._current = np.arange(n, dtype=np.int64)
        self._next = np.zeros(n, dtype=np.int64)

    @classmethod
    def from_labels(cls, labels: np.ndarray) -> "LabelStore":
        """Build a store whose current buffer is a copy of labels."""
        labels = np.asarray(labels, dtype=np.int64)
        if labels.ndim != 1:
            raise LabelStoreError(
                f"labels must be one-dimensional, got shape {labels.shape}"
            )
        store = cls(labels.shape[0])
        store._current[:] = labels
        return store

    def __len__(self) -> int:
        return self._current.shape[0]

    def init(self) -> None:
        """Give every vertex its own id as label."""
        self._current[:] = np.arange(len(self), dtype=np.int64)
        self._next[:] = 0

    def read(self, v: int) -> int:
        return int(self._current[v])

    def write(self, v: int, label: int) -> None:
        """Set one vertex's label in the next buffer. See scratch for slices."""
        self._next[v] = label

    @property
    def current(self) -> np.ndarray:
        """Read-only view of the labels at the start of the round."""
        view = self._current.view()
        view.flags.writeable = False
        return view

    @property
    def scratch(self) -> np.ndarray:
        """The writable next buffer, the bulk form of write().

        Propagation workers assign whole ranges through it; each index has
        one writer per round.
        """
        return self._next

    def swap(self) -> None:
        """Exchange buffer roles after a round's barrier."""
        if self._current.shape != self._next.shape:
            raise LabelStoreError(
                f"buffer length mismatch: current {self._current.shape}, "
                f"next {self._next.shape}"
            )
        self._current, self._next = self._next, self._current

    def snapshot(self) -> np.ndarray:
        """Independent copy of the current labels."""
        return self._current.copy()
