"""Deterministic config hashing using SHA-256 over sorted JSON."""

import hashlib
import json
from dataclasses import asdict
from typing import Any, Iterable

from parlpa.config.experiment import RunConfig

# Settings that cannot change the resulting labels
_NON_SEMANTIC_FIELDS = (
    "output",
    "description",
    "tags",
    "propagation.worker_count",
)


def _drop_path(d: dict[str, Any], dotted: str) -> None:
    """Delete d[a][b]... for dotted path "a.b"; missing keys are ignored."""
    *parents, leaf = dotted.split(".")
    for key in parents:
        d = d.get(key)
        if not isinstance(d, dict):
            return
    d.pop(leaf, None)


def config_hash(config: Any, exclude_fields: Iterable[str] = ()) -> str:
    """First 16 hex chars of the SHA-256 of a dataclass's canonical JSON.

    Args:
        config: Any dataclass instance (or sub-config).
        exclude_fields: Dotted field paths left out of the hash.
    """
    d = asdict(config)
    for dotted in exclude_fields:
        _drop_path(d, dotted)
    canonical = json.dumps(d, sort_keys=True, ensure_ascii=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def run_config_hash(config: RunConfig) -> str:
    """Hash of the input and algorithm settings of a run.

    Two runs with equal hashes produce the same labels regardless of
    worker count or where their outputs go.
    """
    return config_hash(config, exclude_fields=_NON_SEMANTIC_FIELDS)
