"""Run summary schema validation and writing.

Uses a Python validation function (not jsonschema) to check required
fields, types and per-round history consistency before writing a
summary JSON file.
"""

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from parlpa.config.experiment import RunConfig
from parlpa.config.hashing import run_config_hash
from parlpa.engine.types import EngineState, LPAResult

SCHEMA_VERSION = "1.0"

REQUIRED_TOP_FIELDS = {
    "schema_version",
    "run_id",
    "timestamp",
    "description",
    "tags",
    "config",
    "graph",
    "result",
}

REQUIRED_RESULT_FIELDS = {
    "state",
    "rounds_executed",
    "best_round",
    "modularity",
    "communities",
    "history",
}

REQUIRED_ROUND_FIELDS = {"round", "changed", "communities", "modularity", "elapsed"}

_STATES = {state.value for state in EngineState}


def generate_run_id(config: RunConfig) -> str:
    """Scannable run ID: lpa_l{round_limit}_{config hash}_{YYYYMMDD}_{HHMMSS}."""
    ts = datetime.now(timezone.utc)
    return (
        f"lpa_l{config.propagation.round_limit}"
        f"_{run_config_hash(config)}"
        f"_{ts.strftime('%Y%m%d_%H%M%S')}"
    )


def build_summary(
    result: LPAResult,
    config: RunConfig,
    vertex_count: int,
    edge_count: int,
) -> dict[str, Any]:
    """Assemble the JSON-ready summary of a finished run."""
    return {
        "schema_version": SCHEMA_VERSION,
        "run_id": generate_run_id(config),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "description": config.description,
        "tags": list(config.tags),
        "config": asdict(config),
        "config_hash": run_config_hash(config),
        "graph": {
            "vertices": vertex_count,
            "edges": edge_count,
        },
        "result": {
            "state": result.state.value,
            "rounds_executed": result.rounds_executed,
            "best_round": result.best_round,
            "modularity": result.modularity,
            "communities": result.community_count,
            "history": [asdict(stats) for stats in result.history],
        },
    }


def validate_summary(summary: dict[str, Any]) -> list[str]:
    """Validate a summary dict against the schema.

    Returns a list of error strings. An empty list means the summary is valid.

    Checks:
    - All required top-level and result fields are present
    - timestamp parses as ISO 8601
    - state is a known engine state
    - modularity is a number or null
    - history has one entry per executed round, numbered 1..rounds_executed
    """
    errors: list[str] = []

    missing = REQUIRED_TOP_FIELDS - set(summary.keys())
    if missing:
        errors.append(f"Missing required top-level fields: {sorted(missing)}")

    if "tags" in summary and not isinstance(summary["tags"], list):
        errors.append("tags must be a list")

    if "config" in summary and not isinstance(summary["config"], dict):
        errors.append("config must be a dict")

    if "timestamp" in summary:
        ts = summary["timestamp"]
        if not isinstance(ts, str):
            errors.append("timestamp must be a string")
        else:
            try:
                datetime.fromisoformat(ts)
            except ValueError:
                errors.append("timestamp must be in ISO 8601 format")

    result = summary.get("result")
    if result is None:
        return errors
    if not isinstance(result, dict):
        errors.append("result must be a dict")
        return errors

    missing = REQUIRED_RESULT_FIELDS - set(result.keys())
    if missing:
        errors.append(f"Missing required result fields: {sorted(missing)}")
        return errors

    if result["state"] not in _STATES:
        errors.append(f"result.state must be one of {sorted(_STATES)}")

    q = result["modularity"]
    if q is not None and not isinstance(q, (int, float)):
        errors.append("result.modularity must be a number or null")

    history = result["history"]
    if not isinstance(history, list):
        errors.append("result.history must be a list")
        return errors

    if len(history) != result["rounds_executed"]:
        errors.append(
            f"history length ({len(history)}) != rounds_executed "
            f"({result['rounds_executed']})"
        )
    for i, entry in enumerate(history, start=1):
        missing = REQUIRED_ROUND_FIELDS - set(entry.keys())
        if missing:
            errors.append(f"history[{i - 1}] missing fields: {sorted(missing)}")
        elif entry["round"] != i:
            errors.append(f"history[{i - 1}].round is {entry['round']}, expected {i}")

    return errors


def write_summary(summary: dict[str, Any], path: str | Path) -> Path:
    """Validate and write a summary JSON file.

    Raises:
        ValueError: If the summary fails validation. Nothing is written.
    """
    errors = validate_summary(summary)
    if errors:
        raise ValueError(
            "Summary validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(summary, f, indent=2)
    return path


def load_summary(path: str | Path) -> dict[str, Any]:
    """Load and validate a summary JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the loaded summary fails validation.
    """
    path = Path(path)
    with open(path) as f:
        summary = json.load(f)

    errors = validate_summary(summary)
    if errors:
        raise ValueError(
            f"Summary validation failed for {path}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )
    return summary
