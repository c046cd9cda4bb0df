"""Run configuration system with frozen, hashable, serializable dataclasses."""

from parlpa.config.experiment import (
    DELIMITERS,
    InputConfig,
    OutputConfig,
    PropagationConfig,
    RunConfig,
)
from parlpa.config.defaults import DEFAULT_CONFIG
from parlpa.config.hashing import config_hash, run_config_hash
from parlpa.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
)

__all__ = [
    "DELIMITERS",
    "InputConfig",
    "OutputConfig",
    "PropagationConfig",
    "RunConfig",
    "DEFAULT_CONFIG",
    "config_hash",
    "run_config_hash",
    "config_from_dict",
    "config_from_json",
    "config_to_dict",
    "config_to_json",
]
