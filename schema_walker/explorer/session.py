"""
Walk explorer: the node-stepper side of a walk.

WalkExplorer owns the candidate selection (the label and property filters
being composed for the next step) and the query runners that describe it.
It hands a finished step to the WalkManager when the user picks a
relationship, then re-derives everything from the new walk.

Flow for one hop:
    1. next_labels lists labels reachable through the walk
    2. select_label() picks the focal label; adjacency and property keys load
    3. add_property_filter() narrows the focal node; both reload
    4. pick_relationship() commits the step; the candidate starts over
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from schema_walker.explorer.queries import (
    DEFAULT_TIMEOUT_SECONDS,
    AdjacentRelationshipsQuery,
    PropertyKeyCountsQuery,
    PropertyValueCountsQuery,
    ReachableLabelsQuery,
)
from schema_walker.walk.exceptions import WalkError
from schema_walker.walk.grouping import GroupedAdjacency, group_by_type, split_by_direction
from schema_walker.walk.manager import WalkManager
from schema_walker.walk.models import (
    CandidateSelection,
    Direction,
    RelationshipPick,
    Step,
    Walk,
)

logger = logging.getLogger(__name__)

ADJACENT_RELATIONS = "Adjacent relations"
PROP_COUNTS = "Prop counts"


class CandidateNotReadyError(WalkError):
    """Raised when a step is committed before a label was selected."""

    pass


def property_values_description(label: str, property_name: str) -> str:
    return f"{label} prop {property_name} vals"


class WalkExplorer:
    """Coordinates the walk, the candidate selection and the query runners.

    Usage:
        explorer = WalkExplorer(client=neo4j_client, manager=WalkManager(store))
        await explorer.start()
        await explorer.select_label("Person")
        await explorer.add_property_filter("age", "30")
        inbound, outbound = explorer.grouped_adjacency()
        await explorer.pick_relationship(RelationshipPick(type_name="KNOWS"), inbound=False)
    """

    def __init__(
        self,
        client: Any,
        manager: WalkManager,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize explorer.

        Args:
            client: Neo4j client (Neo4jClient or FakeNeo4jClient)
            manager: Owner of the walk
            timeout: Per-query timeout in seconds
        """
        self._client = client
        self._manager = manager
        self._timeout = timeout
        self._candidate = CandidateSelection()
        self._queries_used: dict[str, str] = {}
        self._value_queries: dict[str, PropertyValueCountsQuery] = {}

        self.next_labels = ReachableLabelsQuery(client, timeout=timeout)
        self.adjacent = AdjacentRelationshipsQuery(client, timeout=timeout)
        self.property_keys = PropertyKeyCountsQuery(client, timeout=timeout)

    @property
    def walk(self) -> Walk:
        return self._manager.walk

    @property
    def candidate(self) -> CandidateSelection:
        return self._candidate

    @property
    def queries_used(self) -> dict[str, str]:
        """Description -> exact Cypher of the queries behind the current view."""
        return {desc: query for desc, query in self._queries_used.items() if query}

    # =========================================================================
    # Walk changes
    # =========================================================================

    async def start(self) -> None:
        """Load reachable labels for the current walk."""
        await self._walk_changed()

    async def pick_relationship(
        self,
        relationship: RelationshipPick,
        inbound: bool,
    ) -> Step:
        """Commit the candidate and ``relationship`` as the next step.

        Raises:
            CandidateNotReadyError: If no label is selected
        """
        if not self._candidate.is_ready:
            raise CandidateNotReadyError("Select a label before picking a relationship")

        step = Step(
            relationship=relationship,
            direction=Direction.from_inbound(inbound),
            origin_node=self._candidate.to_node_pick(),
        )
        self._manager.append(step)
        await self._walk_changed()
        return step

    async def delete_step(self, index: int) -> Walk:
        """Remove step ``index`` and every later step."""
        walk = self._manager.truncate(index)
        await self._walk_changed()
        return walk

    async def reset(self) -> Walk:
        return await self.delete_step(0)

    async def _walk_changed(self) -> None:
        self._candidate = CandidateSelection()
        self._clear_queries_used()
        labels = await self.next_labels.refresh(self.walk)
        if labels is not None and len(labels) == 1:
            (only_label,) = labels
            logger.debug("Only one reachable label, selecting %s", only_label)
            await self.select_label(only_label)
        else:
            await self._refresh_candidate()

    # =========================================================================
    # Candidate changes
    # =========================================================================

    async def select_label(self, label: str) -> None:
        """Switch the focal label. Existing property filters are dropped."""
        self._candidate = self._candidate.with_label(label)
        self._clear_queries_used()
        await self._refresh_candidate()

    async def add_property_filter(self, name: str, value: Any) -> None:
        self._candidate = self._candidate.with_property(name, value)
        await self._refresh_candidate()

    async def remove_property_filter(self, name: str) -> None:
        self._candidate = self._candidate.without_property(name)
        await self._refresh_candidate()

    async def property_values(self, property_name: str) -> dict[Any, int]:
        """Value frequencies of ``property_name`` on the focal nodes.

        Returns an empty mapping when not ready or on failure; the runner
        returned by value_query() holds the error.
        """
        query = self.value_query(property_name)
        result = await query.refresh(self.walk, self._candidate, property_name)
        self._record_query(
            property_values_description(self._candidate.label, property_name),
            query.query_used,
        )
        return result if result is not None else {}

    def value_query(self, property_name: str) -> PropertyValueCountsQuery:
        if property_name not in self._value_queries:
            self._value_queries[property_name] = PropertyValueCountsQuery(
                self._client, timeout=self._timeout
            )
        return self._value_queries[property_name]

    async def _refresh_candidate(self) -> None:
        walk, candidate = self.walk, self._candidate
        await asyncio.gather(
            self.adjacent.refresh(walk, candidate),
            self.property_keys.refresh(walk, candidate),
        )
        # A newer refresh may have replaced the candidate while we awaited.
        if candidate == self._candidate:
            self._record_query(ADJACENT_RELATIONS, self.adjacent.query_used)
            self._record_query(PROP_COUNTS, self.property_keys.query_used)

    # =========================================================================
    # Views
    # =========================================================================

    def grouped_adjacency(self) -> tuple[GroupedAdjacency, GroupedAdjacency]:
        """Current adjacency rows grouped as (incoming, outgoing)."""
        inbound, outbound = split_by_direction(self.adjacent.result)
        return group_by_type(inbound, inbound=True), group_by_type(outbound, inbound=False)

    def _record_query(self, description: str, query: str) -> None:
        logger.debug("%s: %s", description, query)
        self._queries_used[description] = query

    def _clear_queries_used(self) -> None:
        self._queries_used = {}
        self._value_queries = {}
