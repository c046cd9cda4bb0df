"""Immutable graph representation and edge-list loading."""

from parlpa.graph.builder import (
    EmptyGraph,
    GraphConstructionError,
    SelfLoop,
    VertexOutOfRange,
    build_graph,
)
from parlpa.graph.loader import EdgeListFormatError, load_edge_list, load_graph
from parlpa.graph.types import EdgeList, Graph

__all__ = [
    "EdgeList",
    "EdgeListFormatError",
    "EmptyGraph",
    "Graph",
    "GraphConstructionError",
    "SelfLoop",
    "VertexOutOfRange",
    "build_graph",
    "load_edge_list",
    "load_graph",
]
