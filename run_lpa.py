#!/usr/bin/env python3
"""Entry point for label propagation community detection.

Chains the pipeline stages into a single command:
load edge list -> build graph -> propagate labels -> score -> store.

Usage:
    python run_lpa.py edges.txt
    python run_lpa.py edges.csv --delimiter comma --limit 50 --output labels.csv
    python run_lpa.py --config run.json --workers 8 --verbose
"""

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import Generator

from dacite import DaciteError

from parlpa.config import (
    DELIMITERS,
    RunConfig,
    config_from_json,
    run_config_hash,
)
from parlpa.engine import run_detection
from parlpa.graph import EdgeListFormatError, GraphConstructionError, load_graph
from parlpa.results import build_summary, write_labels, write_summary

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.3f}s")
    log.info("Completed: %s in %.3fs", name, elapsed)


def build_config(args: argparse.Namespace) -> RunConfig:
    """Merge an optional JSON config file with command-line overrides."""
    config = RunConfig()
    if args.config is not None:
        config = config_from_json(Path(args.config).read_text())

    input_overrides = {}
    if args.edge_path is not None:
        input_overrides["edge_path"] = args.edge_path
    if args.delimiter is not None:
        input_overrides["delimiter"] = args.delimiter

    propagation_overrides = {}
    if args.limit is not None:
        propagation_overrides["round_limit"] = args.limit
    if args.workers is not None:
        propagation_overrides["worker_count"] = args.workers
    if args.keep_best:
        propagation_overrides["keep_best"] = True

    output_overrides = {}
    if args.output is not None:
        output_overrides["labels_path"] = args.output
    if args.summary is not None:
        output_overrides["summary_path"] = args.summary

    return replace(
        config,
        input=replace(config.input, **input_overrides),
        propagation=replace(config.propagation, **propagation_overrides),
        output=replace(config.output, **output_overrides),
    )


def run_pipeline(config: RunConfig) -> int:
    """Execute load -> propagate -> store for a validated config.

    Returns:
        Process exit code.
    """
    pipeline_start = time.monotonic()

    with stage_timer("Load"):
        try:
            graph = load_graph(
                config.input.edge_path,
                delimiter=config.input.delimiter,
                comment=config.input.comment,
            )
        except (EdgeListFormatError, GraphConstructionError) as e:
            log.error("Invalid input: %s", e)
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"vertices: {graph.n}, edges: {graph.m}")

    with stage_timer("Propagate"):
        result = run_detection(graph, config.propagation)

    if config.output.labels_path is not None or config.output.summary_path is not None:
        with stage_timer("Store"):
            if config.output.labels_path is not None:
                write_labels(
                    config.output.labels_path,
                    result.labels,
                    delimiter=config.input.delimiter,
                )
            if config.output.summary_path is not None:
                summary = build_summary(result, config, graph.n, graph.m)
                write_summary(summary, config.output.summary_path)

    q = "undefined" if result.modularity is None else f"{result.modularity:.6f}"
    total_elapsed = time.monotonic() - pipeline_start
    print(f"\n{'=' * 60}")
    print(f"Run complete in {total_elapsed:.3f}s")
    print(f"  State:       {result.state.value}")
    print(f"  Rounds:      {result.rounds_executed}")
    print(f"  Communities: {result.community_count}")
    print(f"  Modularity:  {q}")
    if config.propagation.keep_best:
        print(f"  Best round:  {result.best_round}")
    if config.output.labels_path is not None:
        print(f"  Labels:      {config.output.labels_path}")
    if config.output.summary_path is not None:
        print(f"  Summary:     {config.output.summary_path}")
    print(f"{'=' * 60}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Detect communities with parallel label propagation"
    )
    parser.add_argument(
        "edge_path",
        nargs="?",
        default=None,
        help="Edge-list file: '<#vertices> <#edges>' header then one edge per row",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to run config JSON file (flags override its values)",
    )
    parser.add_argument(
        "-d",
        "--delimiter",
        choices=DELIMITERS,
        default=None,
        help="Field separator of the edge list and label output",
    )
    parser.add_argument(
        "-l",
        "--limit",
        type=int,
        default=None,
        help="Maximum number of propagation rounds (default 20)",
    )
    parser.add_argument(
        "-w",
        "--workers",
        type=int,
        default=None,
        help="Worker threads (default: CPU count)",
    )
    parser.add_argument(
        "--keep-best",
        action="store_true",
        help="Report the round with the highest modularity instead of the last",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Write final labels to this file",
    )
    parser.add_argument(
        "--summary",
        type=str,
        default=None,
        help="Write a JSON run summary to this file",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.config is not None and not Path(args.config).exists():
        print(f"Error: config file not found: {args.config}", file=sys.stderr)
        sys.exit(1)

    try:
        config = build_config(args)
    except (ValueError, DaciteError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    if not config.input.edge_path:
        parser.error("an edge list path is required (positional or via --config)")
    if not Path(config.input.edge_path).exists():
        print(
            f"Error: edge list not found: {config.input.edge_path}", file=sys.stderr
        )
        sys.exit(1)

    print("LPA!")
    print(f"Config hash: {run_config_hash(config)}")

    try:
        code = run_pipeline(config)
    except Exception:
        log.exception("Pipeline failed")
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
