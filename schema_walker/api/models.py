"""
Pydantic models for API request/response validation.

Walk value types (Walk, Step, RelationshipPick, PropertySelection,
CandidateSelection) are pydantic models already and are used directly.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from schema_walker.explorer.queries import QueryRunner, QueryState, rank_counts
from schema_walker.walk.grouping import GroupedAdjacency
from schema_walker.walk.models import (
    CandidateSelection,
    PropertySelection,
    RelationshipPick,
    Walk,
    WalkStatus,
    to_text,
)


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(description="Error code")
    message: str = Field(description="Human-readable error message")


class QueryStatus(BaseModel):
    """Observable state of one query runner."""

    state: QueryState
    loading: bool = False
    error: str | None = None
    query_used: str = Field(default="", description="Exact Cypher that was executed")

    @classmethod
    def of(cls, runner: QueryRunner[Any]) -> QueryStatus:
        return cls(
            state=runner.state,
            loading=runner.loading,
            error=runner.error,
            query_used=runner.query_used,
        )


JSON_SCALARS = (str, int, float, bool)


def display_key(value: Any) -> Any:
    """JSON-friendly form of a count key.

    Scalars pass through and tuples (list-valued properties) become lists.
    Anything else, such as neo4j.time.Date or spatial points, is shown as
    its text, which for temporal values is the ISO form ("1999-01-02").
    """
    if value is None or isinstance(value, JSON_SCALARS):
        return value
    if isinstance(value, tuple):
        return [display_key(item) for item in value]
    return to_text(value)


class CountItem(BaseModel):
    """A key (label, type, property key or value) and how often it occurs."""

    key: str | int | float | bool | list[Any] | None
    count: int


class CountsResponse(BaseModel):
    """Counts ordered by descending frequency."""

    counts: list[CountItem] = Field(default_factory=list)
    status: QueryStatus

    @classmethod
    def of(cls, runner: QueryRunner[Any]) -> CountsResponse:
        return cls(
            counts=[CountItem(key=display_key(k), count=c) for k, c in rank_counts(runner.result)],
            status=QueryStatus.of(runner),
        )


class LabelCount(BaseModel):
    label: str
    count: int


class AdjacencyGroup(BaseModel):
    """One relationship type with one property combination."""

    relationship_type: str
    properties: list[PropertySelection] = Field(default_factory=list)
    labels: list[LabelCount] = Field(default_factory=list)


class AdjacencyResponse(BaseModel):
    """Relationships around the focal node, split by direction."""

    inbound: list[AdjacencyGroup] = Field(default_factory=list)
    outbound: list[AdjacencyGroup] = Field(default_factory=list)
    status: QueryStatus

    @staticmethod
    def groups(grouped: GroupedAdjacency) -> list[AdjacencyGroup]:
        return [
            AdjacencyGroup(
                relationship_type=rel_type,
                properties=list(filters),
                labels=[LabelCount(label=label, count=count) for label, count in entries],
            )
            for rel_type, by_filters in grouped.items()
            for filters, entries in by_filters.items()
        ]


class WalkResponse(BaseModel):
    """The current walk and the candidate being composed."""

    walk: Walk
    status: WalkStatus
    candidate: CandidateSelection
    warning: str | None = None


class PickRelationshipRequest(BaseModel):
    """Commit the candidate with a relationship as the next step."""

    model_config = ConfigDict(extra="forbid")

    relationship: RelationshipPick
    inbound: bool = Field(default=False, description="True for an incoming relationship")


class SelectLabelRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    label: str = Field(min_length=1)


class PropertyFilterRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    value: str


class QueriesUsedResponse(BaseModel):
    queries: dict[str, str] = Field(default_factory=dict)


class ServerInfoResponse(BaseModel):
    agent: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Overall status: healthy or degraded")
    neo4j: dict[str, Any] = Field(default_factory=dict)
    walk_steps: int = 0
    version: str
