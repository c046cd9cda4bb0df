"""Final label output: one `vertex<sep>label` row per vertex."""

import logging
from pathlib import Path

import numpy as np
import pandas as pd

log = logging.getLogger(__name__)

_SEPARATORS = {
    "whitespace": " ",
    "tab": "\t",
    "comma": ",",
}


def write_labels(
    path: str | Path, labels: np.ndarray, delimiter: str = "whitespace"
) -> Path:
    """Write labels ordered by vertex id.

    Args:
        path: Output file; parent directories are created.
        labels: int array of length n, vertex -> label.
        delimiter: One of "whitespace", "tab", "comma".

    Returns:
        The path written.
    """
    if delimiter not in _SEPARATORS:
        raise ValueError(
            f"delimiter must be one of {tuple(_SEPARATORS)}, got {delimiter!r}"
        )
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    labels = np.asarray(labels, dtype=np.int64)
    frame = pd.DataFrame(
        {"vertex": np.arange(labels.shape[0], dtype=np.int64), "label": labels}
    )
    frame.to_csv(
        path,
        sep=_SEPARATORS[delimiter],
        header=False,
        index=False,
        lineterminator="\n",
    )

    log.info("Wrote %d labels to %s", len(frame), path)
    return path
