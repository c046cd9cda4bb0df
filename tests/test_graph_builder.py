"""Tests for graph construction and its input validation."""

from dataclasses import FrozenInstanceError

import numpy as np
import pytest

from parlpa.graph import (
    EmptyGraph,
    Graph,
    GraphConstructionError,
    SelfLoop,
    VertexOutOfRange,
    build_graph,
)

K4_EDGES = [(0, 1), (1, 2), (2, 3), (3, 0), (0, 2), (1, 3)]


class TestConstruction:
    """Adjacency, degrees and counts of a well-formed graph."""

    def test_counts(self) -> None:
        graph = build_graph(4, K4_EDGES)
        assert isinstance(graph, Graph)
        assert graph.vertex_count() == 4
        assert graph.edge_count() == 6

    def test_degrees_sum_to_twice_edges(self) -> None:
        graph = build_graph(4, K4_EDGES)
        assert [graph.degree(v) for v in range(4)] == [3, 3, 3, 3]
        assert int(graph.degrees.sum()) == 2 * graph.edge_count()

    def test_neighbors_are_symmetric(self) -> None:
        graph = build_graph(3, [(0, 1), (1, 2)])
        assert graph.neighbors(0).tolist() == [1]
        assert graph.neighbors(1).tolist() == [0, 2]
        assert graph.neighbors(2).tolist() == [1]

    def test_adjacency_is_symmetric(self) -> None:
        graph = build_graph(5, [(0, 4), (1, 3), (3, 4)])
        dense = graph.adjacency.toarray()
        assert np.array_equal(dense, dense.T)

    def test_duplicate_edges_keep_multiplicity(self) -> None:
        graph = build_graph(3, [(0, 1), (1, 0), (1, 2)])
        assert graph.edge_count() == 3
        assert graph.degree(0) == 2
        assert graph.degree(1) == 3
        assert graph.neighbors(1).tolist() == [0, 0, 2]
        assert graph.adjacency[0, 1] == 2

    def test_isolated_vertices(self) -> None:
        graph = build_graph(4, [(0, 1)])
        assert graph.degree(2) == 0
        assert graph.degree(3) == 0
        assert graph.neighbors(3).tolist() == []

    def test_no_edges(self) -> None:
        graph = build_graph(3, [])
        assert graph.edge_count() == 0
        assert graph.degrees.tolist() == [0, 0, 0]

    def test_accepts_numpy_edges(self) -> None:
        edges = np.array(K4_EDGES, dtype=np.int32)
        graph = build_graph(4, edges)
        assert graph.edge_count() == 6

    def test_graph_is_frozen(self) -> None:
        graph = build_graph(2, [(0, 1)])
        with pytest.raises(FrozenInstanceError):
            graph.m = 5  # type: ignore[misc]

    def test_graph_arrays_are_read_only(self) -> None:
        graph = build_graph(2, [(0, 1)])
        with pytest.raises(ValueError):
            graph.degrees[0] = 99
        with pytest.raises(ValueError):
            graph.adjacency.data[0] = 5
        with pytest.raises(ValueError):
            graph.adjacency.indices[0] = 0
        with pytest.raises(ValueError):
            graph.adjacency.indptr[1] = 0
        assert graph.degree(0) == 1

    @pytest.mark.parametrize("v", [-1, 3])
    def test_vertex_outside_range(self, v: int) -> None:
        graph = build_graph(3, [(0, 1)])
        with pytest.raises(IndexError, match="outside"):
            graph.degree(v)
        with pytest.raises(IndexError, match="outside"):
            graph.neighbors(v)


class TestConstructionErrors:
    """Malformed inputs fail before any adjacency is built."""

    def test_empty_graph(self) -> None:
        with pytest.raises(EmptyGraph):
            build_graph(0, [])

    def test_negative_vertex_count(self) -> None:
        with pytest.raises(ValueError, match="vertex_count"):
            build_graph(-1, [])

    def test_vertex_out_of_range_high(self) -> None:
        with pytest.raises(VertexOutOfRange) as excinfo:
            build_graph(4, [(0, 1), (4, 1)])
        assert excinfo.value.index == 1
        assert excinfo.value.edge == (4, 1)
        assert "(4, 1)" in str(excinfo.value)

    def test_vertex_out_of_range_negative(self) -> None:
        with pytest.raises(VertexOutOfRange) as excinfo:
            build_graph(4, [(-1, 2)])
        assert excinfo.value.index == 0

    def test_self_loop(self) -> None:
        with pytest.raises(SelfLoop) as excinfo:
            build_graph(4, [(0, 1), (1, 2), (2, 2)])
        assert excinfo.value.index == 2
        assert excinfo.value.edge == (2, 2)

    def test_line_numbers_in_message(self) -> None:
        with pytest.raises(SelfLoop) as excinfo:
            build_graph(3, [(0, 1), (1, 1)], line_numbers=np.array([2, 5]))
        assert excinfo.value.line == 5
        assert "line 5" in str(excinfo.value)

    def test_errors_share_base_class(self) -> None:
        for exc in (EmptyGraph, VertexOutOfRange, SelfLoop):
            assert issubclass(exc, GraphConstructionError)
            assert issubclass(exc, ValueError)

    def test_misshaped_edges(self) -> None:
        with pytest.raises(ValueError, match="shape"):
            build_graph(3, [(0, 1, 2)])

    def test_non_integer_edges(self) -> None:
        with pytest.raises(GraphConstructionError, match="integer"):
            build_graph(3, [(0.9, 1.7)])

    def test_integral_float_edges_rejected(self) -> None:
        with pytest.raises(GraphConstructionError, match="float64"):
            build_graph(3, np.array([[0.0, 1.0]]))
