"""
Value types for a schema walk.

A walk is an ordered path of schema choices. Every type here is immutable:
mutations return a new value, so callers replace state wholesale and
equality checks are structural.

Serialized form (JSON, via pydantic):
    {"steps": [{"relationship": {"type_name": "KNOWS", "properties": []},
                "direction": "outbound",
                "origin_node": {"label": "Person", "properties": [
                    {"name": "age", "operator": "=", "value": "30"}]}}]}
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Enums
# =============================================================================


class Operator(str, Enum):
    """Comparison used by a property filter. Only equality is supported."""

    EQUALS = "="


class Direction(str, Enum):
    """Direction of a committed hop, relative to the node it starts from."""

    INBOUND = "inbound"
    OUTBOUND = "outbound"

    @classmethod
    def from_inbound(cls, inbound: bool) -> Direction:
        return cls.INBOUND if inbound else cls.OUTBOUND


class WalkStatus(str, Enum):
    """Lifecycle state of a walk. There is no terminal state."""

    EMPTY = "empty"
    IN_PROGRESS = "in_progress"


# =============================================================================
# Value conversion
# =============================================================================


def to_text(value: Any) -> str:
    """Textual form of a driver value, as stored in a PropertySelection.

    Booleans use their Cypher spelling, which the literal encoder emits
    bare. Lists join their items with "," and carry no brackets
    or quotes, so the encoded filter is always a single well-formed literal.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(item) for item in value)
    return str(value)


# =============================================================================
# Walk value types
# =============================================================================


class PropertySelection(BaseModel):
    """A single equality filter on a node or relationship property."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    operator: Operator = Operator.EQUALS
    value: str

    @classmethod
    def from_value(cls, name: str, value: Any) -> PropertySelection:
        """Build a selection from any driver value, storing its textual form."""
        return cls(name=name, value=to_text(value))

    def __str__(self) -> str:
        return f"{self.name} {self.operator.value} {self.value}"


class RelationshipPick(BaseModel):
    """Relationship type and property filters locked in for one hop."""

    model_config = ConfigDict(frozen=True)

    type_name: str = Field(min_length=1)
    properties: tuple[PropertySelection, ...] = ()


class NodePick(BaseModel):
    """Node label and property filters active where a hop originates."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(min_length=1)
    properties: tuple[PropertySelection, ...] = ()


class Step(BaseModel):
    """One committed hop of the walk."""

    model_config = ConfigDict(frozen=True)

    relationship: RelationshipPick
    direction: Direction
    origin_node: NodePick

    @property
    def is_inbound(self) -> bool:
        return self.direction is Direction.INBOUND


class CandidateSelection(BaseModel):
    """Scratch state for the next step being composed.

    An empty label means the selection is incomplete and no focal-node
    query can be built yet.
    """

    model_config = ConfigDict(frozen=True)

    label: str = ""
    properties: tuple[PropertySelection, ...] = ()

    @property
    def is_ready(self) -> bool:
        return self.label != ""

    def with_label(self, label: str) -> CandidateSelection:
        """Switch the label. Filters belong to the old label and are dropped."""
        return CandidateSelection(label=label)

    def with_property(self, name: str, value: Any) -> CandidateSelection:
        selection = PropertySelection.from_value(name, value)
        return self.model_copy(update={"properties": (*self.properties, selection)})

    def without_property(self, name: str) -> CandidateSelection:
        kept = tuple(p for p in self.properties if p.name != name)
        return self.model_copy(update={"properties": kept})

    def to_node_pick(self) -> NodePick:
        return NodePick(label=self.label, properties=self.properties)


class Walk(BaseModel):
    """Ordered path of committed steps from an implicit anonymous start node."""

    model_config = ConfigDict(frozen=True)

    steps: tuple[Step, ...] = ()

    @property
    def status(self) -> WalkStatus:
        return WalkStatus.IN_PROGRESS if self.steps else WalkStatus.EMPTY

    def append(self, step: Step) -> Walk:
        return Walk(steps=(*self.steps, step))

    def truncate(self, from_index: int) -> Walk:
        """Drop the step at ``from_index`` and every step after it.

        Indexes past the end leave the walk unchanged.

        Raises:
            ValueError: If ``from_index`` is negative
        """
        if from_index < 0:
            msg = f"Step index must be non-negative, got {from_index}"
            raise ValueError(msg)
        return Walk(steps=self.steps[:from_index])


# =============================================================================
# Query results
# =============================================================================


@dataclass(frozen=True)
class AdjacencyRecord:
    """One row of the adjacent-relationships query, before grouping.

    Attributes:
        relationship_type: Type of the relationship touching the focal node
        relationship_properties: Property map of that relationship
        start_label: One label of the relationship's start node
        end_label: One label of the relationship's end node
        is_outbound_from_focus: True when the focal node is the start node
        count: Number of distinct relationships for this combination
    """

    relationship_type: str
    relationship_properties: Mapping[str, Any] = field(default_factory=dict)
    start_label: str = ""
    end_label: str = ""
    is_outbound_from_focus: bool = True
    count: int = 0
