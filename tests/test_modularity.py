"""Tests for modularity scoring and partition views."""

import numpy as np
import pytest

from parlpa.evaluation import communities, community_count, modularity
from parlpa.graph import build_graph

TWO_TRIANGLES = [(0, 1), (1, 2), (0, 2), (3, 4), (4, 5), (3, 5), (2, 3)]


class TestModularity:
    """Known values and edge cases of Q."""

    def test_single_community_is_exactly_zero(self) -> None:
        graph = build_graph(6, TWO_TRIANGLES)
        assert modularity(graph, np.zeros(6, dtype=np.int64)) == 0.0

    def test_single_community_with_isolated_vertex(self) -> None:
        graph = build_graph(4, [(0, 1), (1, 2)])
        assert modularity(graph, np.full(4, 3)) == 0.0

    def test_two_triangles(self) -> None:
        graph = build_graph(6, TWO_TRIANGLES)
        labels = np.array([0, 0, 0, 3, 3, 3])
        # l = 3 per side, d = 7 per side, m = 7
        assert modularity(graph, labels) == pytest.approx(6 / 7 - 0.5)

    def test_singletons(self) -> None:
        graph = build_graph(4, [(0, 1), (1, 2), (2, 3), (3, 0)])
        # No internal edges; each vertex has degree 2 of 2m = 8
        assert modularity(graph, np.arange(4)) == pytest.approx(-4 * (2 / 8) ** 2)

    def test_label_values_do_not_matter(self) -> None:
        graph = build_graph(6, TWO_TRIANGLES)
        a = modularity(graph, np.array([0, 0, 0, 3, 3, 3]))
        b = modularity(graph, np.array([5, 5, 5, 1, 1, 1]))
        assert a == pytest.approx(b)

    def test_duplicate_edges_counted_with_multiplicity(self) -> None:
        # m = 3: edge (0, 1) twice inside community 0, (1, 2) across
        graph = build_graph(3, [(0, 1), (0, 1), (1, 2)])
        labels = np.array([0, 0, 2])
        # l_0 = 2, d_0 = 2 + 3 = 5, d_2 = 1
        expected = (2 / 3 - (5 / 6) ** 2) - (1 / 6) ** 2
        assert modularity(graph, labels) == pytest.approx(expected)

    def test_undefined_without_edges(self) -> None:
        graph = build_graph(3, [])
        assert modularity(graph, np.arange(3)) is None

    def test_wrong_label_length(self) -> None:
        graph = build_graph(3, [(0, 1)])
        with pytest.raises(ValueError, match="shape"):
            modularity(graph, np.arange(4))


class TestCommunities:
    """Partition induced by a labeling."""

    def test_community_count(self) -> None:
        assert community_count(np.array([2, 2, 0, 5, 0])) == 3

    def test_groups_by_label(self) -> None:
        groups = communities(np.array([2, 2, 0, 5, 0]))
        assert groups == {0: [2, 4], 2: [0, 1], 5: [3]}
        assert list(groups) == [0, 2, 5]
