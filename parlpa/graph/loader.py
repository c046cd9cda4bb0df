"""Edge-list file loading.

File format:
    # comment lines start with the comment character and are skipped
    <#vertices> <#edges>        first non-comment row (header)
    <src> <dst>                 one row per undirected edge

Fields are separated by whitespace, a tab, or a comma. Blank lines are
ignored. The header edge count is advisory: the rows actually present
define the graph, and a mismatch is logged.
"""

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from parlpa.graph.builder import build_graph
from parlpa.graph.types import EdgeList, Graph

log = logging.getLogger(__name__)

_SEPARATORS = {
    "whitespace": r"\s+",
    "tab": "\t",
    "comma": ",",
}

# A third column catches rows with too many fields
_COLUMNS = ["src", "dst", "extra"]
_INTEGER = r"\s*[+-]?\d+\s*"


class EdgeListFormatError(ValueError):
    """Raised when an edge-list file cannot be parsed.

    Attributes:
        line: 1-based line number of the offending row, if known.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


def _read_rows(path: str | Path, separator: str, comment: str) -> pd.DataFrame:
    """Read every line as a string row; row label i is file line i + 1.

    Blank and comment lines are dropped after reading so the labels keep
    pointing at the source lines.
    """
    try:
        frame = pd.read_csv(
            path,
            sep=separator,
            header=None,
            names=_COLUMNS,
            index_col=False,
            comment=comment,
            skip_blank_lines=False,
            skipinitialspace=True,
            dtype=str,
        )
    except pd.errors.EmptyDataError:
        raise EdgeListFormatError(
            f"{path}: missing '<#vertices> <#edges>' header"
        ) from None
    except pd.errors.ParserError as exc:
        raise EdgeListFormatError(f"{path}: {exc}") from exc

    frame = frame.replace(r"^\s*$", np.nan, regex=True)
    return frame[frame.notna().any(axis=1)]


def _check_fields(rows: pd.DataFrame, what: str) -> None:
    if rows.empty:
        return
    wrong_count = rows["src"].isna() | rows["dst"].isna() | rows["extra"].notna()
    if wrong_count.any():
        label = wrong_count.idxmax()
        line = int(label) + 1
        fields = rows.loc[label].dropna().tolist()
        raise EdgeListFormatError(
            f"line {line}: {what} must have 2 fields, got {len(fields)}",
            line=line,
        )

    integral = rows[["src", "dst"]].apply(lambda col: col.str.fullmatch(_INTEGER))
    not_integral = ~integral.all(axis=1)
    if not_integral.any():
        label = not_integral.idxmax()
        line = int(label) + 1
        fields = rows.loc[label, ["src", "dst"]].tolist()
        raise EdgeListFormatError(
            f"line {line}: {what} fields must be integers, got {fields}",
            line=line,
        )


def _to_int_array(rows: pd.DataFrame) -> np.ndarray:
    if rows.empty:
        return np.empty((0, 2), dtype=np.int64)
    pairs = rows[["src", "dst"]].apply(lambda col: col.str.strip())
    return pairs.astype(np.int64).to_numpy().reshape(-1, 2)


def load_edge_list(
    path: str | Path,
    delimiter: str = "whitespace",
    comment: str = "#",
) -> EdgeList:
    """Read an edge-list file into raw arrays.

    Args:
        path: File to read.
        delimiter: One of "whitespace", "tab", "comma".
        comment: Single character; lines starting with it are skipped.

    Returns:
        EdgeList with the header counts, edge rows and their line numbers.

    Raises:
        EdgeListFormatError: If the header is missing or a row is malformed.
        ValueError: If delimiter is unknown or comment is not one character.
    """
    if delimiter not in _SEPARATORS:
        raise ValueError(
            f"delimiter must be one of {tuple(_SEPARATORS)}, got {delimiter!r}"
        )
    if len(comment) != 1:
        raise ValueError(f"comment must be a single character, got {comment!r}")

    rows = _read_rows(path, _SEPARATORS[delimiter], comment)
    if rows.empty:
        raise EdgeListFormatError(f"{path}: missing '<#vertices> <#edges>' header")

    header_row, edge_rows = rows.iloc[:1], rows.iloc[1:]
    _check_fields(header_row, "header")
    _check_fields(edge_rows, "edge row")

    vertex_count, declared_edges = (int(x) for x in _to_int_array(header_row)[0])
    if vertex_count < 0 or declared_edges < 0:
        raise EdgeListFormatError(
            f"{path}: header counts must be non-negative, "
            f"got {(vertex_count, declared_edges)}"
        )

    edges = _to_int_array(edge_rows)
    if edges.shape[0] != declared_edges:
        log.warning(
            "%s: header declares %d edges but %d rows were read",
            path,
            declared_edges,
            edges.shape[0],
        )

    log.info(
        "Loaded %s: %d vertices, %d edge rows", path, vertex_count, edges.shape[0]
    )
    return EdgeList(
        vertex_count=vertex_count,
        declared_edges=declared_edges,
        edges=edges,
        line_numbers=edge_rows.index.to_numpy(dtype=np.int64) + 1,
    )


def load_graph(
    path: str | Path,
    delimiter: str = "whitespace",
    comment: str = "#",
) -> Graph:
    """Read an edge-list file and build the graph it describes.

    Construction errors name the source line of the offending edge.
    """
    edge_list = load_edge_list(path, delimiter=delimiter, comment=comment)
    return build_graph(
        edge_list.vertex_count,
        edge_list.edges,
        line_numbers=edge_list.line_numbers,
    )
