"""Partition views derived from a final labeling."""

import numpy as np


def community_count(labels: np.ndarray) -> int:
    """Number of distinct labels."""
    return int(np.unique(labels).shape[0])


def communities(labels: np.ndarray) -> dict[int, list[int]]:
    """Group vertex ids by label.

    Returns:
        Dict mapping each label to the ascending list of vertices carrying it.
        Keys are in ascending label order.
    """
    labels = np.asarray(labels, dtype=np.int64)
    order = np.argsort(labels, kind="stable")
    sorted_labels = labels[order]
    uniq, starts = np.unique(sorted_labels, return_index=True)
    groups = np.split(order, starts[1:])
    return {
        int(label): group.tolist()
        for label, group in zip(uniq, groups)
    }
