"""
Explorer layer: query runners with last-initiated-wins state, the walk
explorer that drives them, and the whole-graph overview.
"""

from schema_walker.explorer.overview import SchemaOverview
from schema_walker.explorer.queries import (
    AdjacentRelationshipsQuery,
    LabelOverviewQuery,
    PropertyKeyCountsQuery,
    PropertyValueCountsQuery,
    QueryRunner,
    QueryState,
    ReachableLabelsQuery,
    RelationshipTypeOverviewQuery,
    rank_counts,
)
from schema_walker.explorer.session import CandidateNotReadyError, WalkExplorer

__all__ = [
    "AdjacentRelationshipsQuery",
    "CandidateNotReadyError",
    "LabelOverviewQuery",
    "PropertyKeyCountsQuery",
    "PropertyValueCountsQuery",
    "QueryRunner",
    "QueryState",
    "ReachableLabelsQuery",
    "RelationshipTypeOverviewQuery",
    "SchemaOverview",
    "WalkExplorer",
    "rank_counts",
]
