"""Partition scoring: modularity and community summaries."""

from parlpa.evaluation.communities import communities, community_count
from parlpa.evaluation.modularity import modularity

__all__ = [
    "communities",
    "community_count",
    "modularity",
]
