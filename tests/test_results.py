"""Tests for label output and run summary schema."""

import json
import re
from pathlib import Path

import numpy as np
import pytest

from parlpa.config import InputConfig, RunConfig
from parlpa.engine import detect_communities
from parlpa.results import (
    build_summary,
    generate_run_id,
    load_summary,
    validate_summary,
    write_labels,
    write_summary,
)

K4_EDGES = [(0, 1), (1, 2), (2, 3), (3, 0), (0, 2), (1, 3)]


@pytest.fixture
def k4_summary() -> dict:
    result = detect_communities(4, K4_EDGES, worker_count=2)
    config = RunConfig(input=InputConfig(edge_path="k4.txt"), tags=("k4",))
    return build_summary(result, config, vertex_count=4, edge_count=6)


class TestWriteLabels:
    """One row per vertex, ordered by id."""

    @pytest.mark.parametrize(
        "delimiter,sep", [("whitespace", " "), ("tab", "\t"), ("comma", ",")]
    )
    def test_format(self, tmp_path: Path, delimiter: str, sep: str) -> None:
        path = write_labels(tmp_path / "labels.txt", np.array([0, 0, 2]), delimiter)
        lines = path.read_text().splitlines()
        assert lines == [f"0{sep}0", f"1{sep}0", f"2{sep}2"]

    def test_no_header_or_index_column(self, tmp_path: Path) -> None:
        path = write_labels(tmp_path / "labels.txt", np.array([3, 3]), "comma")
        assert path.read_text() == "0,3\n1,3\n"

    def test_creates_parent_dirs(self, tmp_path: Path) -> None:
        path = write_labels(tmp_path / "a" / "b" / "labels.txt", np.array([1, 1]))
        assert path.exists()

    def test_unknown_delimiter(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="delimiter"):
            write_labels(tmp_path / "labels.txt", np.array([0]), "pipe")


class TestSummary:
    """Assembly, validation and round trip of the JSON summary."""

    def test_summary_is_valid(self, k4_summary: dict) -> None:
        assert validate_summary(k4_summary) == []

    def test_summary_contents(self, k4_summary: dict) -> None:
        result = k4_summary["result"]
        assert result["state"] == "converged"
        assert result["rounds_executed"] == 3
        assert result["communities"] == 1
        assert result["modularity"] == 0.0
        assert len(result["history"]) == 3
        assert k4_summary["graph"] == {"vertices": 4, "edges": 6}
        assert k4_summary["tags"] == ["k4"]

    def test_write_and_load(self, tmp_path: Path, k4_summary: dict) -> None:
        path = write_summary(k4_summary, tmp_path / "summary.json")
        loaded = load_summary(path)
        assert loaded["result"] == k4_summary["result"]
        assert loaded["run_id"] == k4_summary["run_id"]

    def test_undefined_modularity_serializes_as_null(self, tmp_path: Path) -> None:
        result = detect_communities(3, [])
        summary = build_summary(result, RunConfig(), vertex_count=3, edge_count=0)
        path = write_summary(summary, tmp_path / "summary.json")
        assert json.loads(path.read_text())["result"]["modularity"] is None

    def test_missing_fields_reported(self, k4_summary: dict) -> None:
        del k4_summary["run_id"]
        errors = validate_summary(k4_summary)
        assert any("run_id" in e for e in errors)

    def test_history_length_checked(self, k4_summary: dict) -> None:
        k4_summary["result"]["history"].pop()
        errors = validate_summary(k4_summary)
        assert any("history length" in e for e in errors)

    def test_unknown_state_reported(self, k4_summary: dict) -> None:
        k4_summary["result"]["state"] = "exploded"
        assert any("state" in e for e in validate_summary(k4_summary))

    def test_invalid_summary_not_written(self, tmp_path: Path, k4_summary: dict) -> None:
        k4_summary["timestamp"] = "yesterday"
        path = tmp_path / "summary.json"
        with pytest.raises(ValueError, match="validation failed"):
            write_summary(k4_summary, path)
        assert not path.exists()

    def test_run_id_format(self) -> None:
        run_id = generate_run_id(RunConfig())
        assert re.match(r"^lpa_l20_[0-9a-f]{16}_\d{8}_\d{6}$", run_id)
