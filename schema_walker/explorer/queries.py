"""
Stateful query runners for the walk read operations.

Each runner compiles its Cypher with the builders in schema_walker.cypher,
runs it through the injected Neo4j client with a bounded timeout and keeps
the observable state the caller renders:

- result:      decoded rows (empty until a request succeeds)
- loading:     a request is in flight
- error:       message of the last failure, verbatim
- query_used:  exact Cypher of the last initiated request ("" when not ready)
- state:       IDLE / NOT_READY / LOADING / READY / FAILED

Requests may overlap when the walk or candidate changes quickly. Every
initiated request takes a new generation number, and a request that
completes after a newer one was initiated is discarded, so the state
always reflects the most recently initiated request.

Failures never propagate out of refresh(): they are logged and stored in
``error``. There are no retries.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

from schema_walker.cypher.builders import (
    LABEL_OVERVIEW_QUERY,
    RELATIONSHIP_TYPE_OVERVIEW_QUERY,
    build_adjacent_relationships_query,
    build_property_key_counts_query,
    build_property_value_counts_query,
    build_reachable_labels_query,
)
from schema_walker.walk.exceptions import RecordDecodeError
from schema_walker.walk.models import AdjacencyRecord, CandidateSelection, Walk

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 30.0


class QueryState(str, Enum):
    """Observable state of a query runner."""

    IDLE = "idle"
    NOT_READY = "not_ready"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


# =============================================================================
# Row decoding helpers
# =============================================================================


def _field(row: Mapping[str, Any], name: str) -> Any:
    try:
        return row[name]
    except (KeyError, TypeError) as e:
        raise RecordDecodeError(f"Result row has no '{name}' field", row=row) from e


def _count(row: Mapping[str, Any]) -> int:
    value = _field(row, "count")
    if isinstance(value, bool) or not isinstance(value, int):
        raise RecordDecodeError(f"Count is not an integer: {value!r}", row=row)
    return value


def _hashable(value: Any) -> Any:
    # List-valued properties come back as lists; tuples can key a dict.
    if isinstance(value, list):
        return tuple(_hashable(v) for v in value)
    return value


def decode_counts(rows: list[dict[str, Any]], key_field: str) -> dict[Any, int]:
    """Decode ``{key_field, count}`` rows into a mapping, keeping row order."""
    return {_hashable(_field(row, key_field)): _count(row) for row in rows}


def decode_adjacency(rows: list[dict[str, Any]]) -> list[AdjacencyRecord]:
    """Decode adjacent-relationship rows.

    Raises:
        RecordDecodeError: If any row's property map is not a mapping or a
            field is missing. No partial result is returned.
    """
    records: list[AdjacencyRecord] = []
    for row in rows:
        props = _field(row, "props")
        if not isinstance(props, Mapping):
            raise RecordDecodeError(
                f"Relationship properties are not a map: {props!r}", row=row
            )
        records.append(
            AdjacencyRecord(
                relationship_type=_field(row, "type"),
                relationship_properties=dict(props),
                start_label=_field(row, "startLabel"),
                end_label=_field(row, "endLabel"),
                is_outbound_from_focus=bool(_field(row, "out")),
                count=_count(row),
            )
        )
    return records


def rank_counts(counts: Mapping[Any, int]) -> list[tuple[Any, int]]:
    """Order counts by descending count, then by key text."""
    return sorted(counts.items(), key=lambda item: (-item[1], str(item[0])))


# =============================================================================
# Base runner
# =============================================================================


class QueryRunner(ABC, Generic[T]):
    """Runs one kind of query and keeps last-initiated-wins state."""

    description: ClassVar[str] = "Query"

    def __init__(
        self,
        client: Any,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize runner.

        Args:
            client: Neo4j client (Neo4jClient or FakeNeo4jClient)
            timeout: Per-query timeout in seconds
        """
        self._client = client
        self._timeout = timeout
        self._generation = 0
        self.result: T = self._empty()
        self.loading = False
        self.error: str | None = None
        self.query_used = ""
        self.state = QueryState.IDLE

    @property
    def generation(self) -> int:
        return self._generation

    @abstractmethod
    def _empty(self) -> T:
        """Result value shown while nothing has been loaded."""

    @abstractmethod
    def _decode(self, rows: list[dict[str, Any]]) -> T:
        """Turn raw rows into the result value."""

    async def _run(self, cypher: str | None) -> T | None:
        """Run ``cypher``, or mark the runner not ready when it is None.

        Returns:
            The decoded result, or None when not ready, failed or superseded
        """
        self._generation += 1
        generation = self._generation
        self.error = None
        self.result = self._empty()

        if cypher is None:
            self.query_used = ""
            self.loading = False
            self.state = QueryState.NOT_READY
            return None

        self.query_used = cypher
        self.loading = True
        self.state = QueryState.LOADING
        query_fields = {"query_description": self.description, "cypher": cypher}
        logger.debug("%s: %s", self.description, cypher, extra=query_fields)

        try:
            rows = await self._client.query(cypher, timeout=self._timeout)
            result = self._decode(rows)
        except Exception as e:
            if generation != self._generation:
                logger.debug("%s: dropping failure of superseded request", self.description)
                return None
            logger.error("%s failed: %s", self.description, e, extra=query_fields)
            self.error = str(e)
            self.loading = False
            self.state = QueryState.FAILED
            return None

        if generation != self._generation:
            logger.debug("%s: dropping result of superseded request", self.description)
            return None

        self.result = result
        self.loading = False
        self.state = QueryState.READY
        return result


# =============================================================================
# Walk runners
# =============================================================================


class AdjacentRelationshipsQuery(QueryRunner[list[AdjacencyRecord]]):
    """Relationships touching nodes that match the candidate at the walk's end."""

    description = "Adjacent relations"

    def _empty(self) -> list[AdjacencyRecord]:
        return []

    def _decode(self, rows: list[dict[str, Any]]) -> list[AdjacencyRecord]:
        return decode_adjacency(rows)

    async def refresh(
        self,
        walk: Walk,
        candidate: CandidateSelection,
    ) -> list[AdjacencyRecord] | None:
        return await self._run(build_adjacent_relationships_query(walk, candidate))


class PropertyKeyCountsQuery(QueryRunner[dict[str, int]]):
    """Property keys of the matching focal nodes and how often each occurs."""

    description = "Prop counts"

    def _empty(self) -> dict[str, int]:
        return {}

    def _decode(self, rows: list[dict[str, Any]]) -> dict[str, int]:
        return decode_counts(rows, "key")

    async def refresh(
        self,
        walk: Walk,
        candidate: CandidateSelection,
    ) -> dict[str, int] | None:
        return await self._run(build_property_key_counts_query(walk, candidate))


class PropertyValueCountsQuery(QueryRunner[dict[Any, int]]):
    """Values of one property on the matching focal nodes, with frequencies.

    Keys are raw driver values and may be None for nodes lacking the
    property.
    """

    description = "Prop value counts"

    def _empty(self) -> dict[Any, int]:
        return {}

    def _decode(self, rows: list[dict[str, Any]]) -> dict[Any, int]:
        return decode_counts(rows, "val")

    async def refresh(
        self,
        walk: Walk,
        candidate: CandidateSelection,
        property_name: str,
    ) -> dict[Any, int] | None:
        return await self._run(
            build_property_value_counts_query(walk, candidate, property_name)
        )


class ReachableLabelsQuery(QueryRunner[dict[str, int]]):
    """Labels reachable through the walk alone, with distinct node counts."""

    description = "Next labels"

    def _empty(self) -> dict[str, int]:
        return {}

    def _decode(self, rows: list[dict[str, Any]]) -> dict[str, int]:
        return decode_counts(rows, "label")

    async def refresh(self, walk: Walk) -> dict[str, int] | None:
        return await self._run(build_reachable_labels_query(walk))


# =============================================================================
# Overview runners
# =============================================================================


class LabelOverviewQuery(QueryRunner[dict[str, int]]):
    """Every label in the graph with its node count."""

    description = "Label overview"

    def _empty(self) -> dict[str, int]:
        return {}

    def _decode(self, rows: list[dict[str, Any]]) -> dict[str, int]:
        return decode_counts(rows, "label")

    async def refresh(self) -> dict[str, int] | None:
        return await self._run(LABEL_OVERVIEW_QUERY)


class RelationshipTypeOverviewQuery(QueryRunner[dict[str, int]]):
    """Every relationship type in the graph with its count."""

    description = "Relationship type overview"

    def _empty(self) -> dict[str, int]:
        return {}

    def _decode(self, rows: list[dict[str, Any]]) -> dict[str, int]:
        return decode_counts(rows, "type")

    async def refresh(self) -> dict[str, int] | None:
        return await self._run(RELATIONSHIP_TYPE_OVERVIEW_QUERY)
