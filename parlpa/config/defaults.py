"""Default configuration: single source of truth for default run parameters."""

from parlpa.config.experiment import RunConfig

# All-default values: whitespace-delimited input, 20-round limit,
# one worker per CPU, no output files.
DEFAULT_CONFIG = RunConfig()
