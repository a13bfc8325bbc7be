"""
Grouping of adjacent-relationship rows for display.

A relationship type can connect to several labels and carry several
property combinations, and the adjacency query returns one row per
combination. group_by_type nests them:

    type -> property-filter set -> [(label, count), ...]

The property-filter set key is a tuple of PropertySelection sorted by
property name. Relationship property maps come back from the driver in
arbitrary order, so sorting makes equal maps produce equal keys.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from schema_walker.walk.models import AdjacencyRecord, PropertySelection

PropertyFilterKey = tuple[PropertySelection, ...]
GroupedAdjacency = dict[str, dict[PropertyFilterKey, list[tuple[str, int]]]]


def property_filters(properties: Mapping[str, Any]) -> PropertyFilterKey:
    """Build selections from a property map, ordered by property name."""
    return tuple(
        PropertySelection.from_value(name, properties[name])
        for name in sorted(properties)
    )


def group_by_type(
    records: Iterable[AdjacencyRecord],
    inbound: bool,
) -> GroupedAdjacency:
    """Group adjacency rows by relationship type and property-filter set.

    Args:
        records: Rows for one side of the focal node
        inbound: True for incoming relationships; the reported label is then
            the start node's label, otherwise the end node's

    Returns:
        Nested mapping. Every input row yields exactly one (label, count)
        entry; duplicates are kept, counts are never merged.
    """
    grouped: GroupedAdjacency = {}
    for record in records:
        by_filters = grouped.setdefault(record.relationship_type, {})
        key = property_filters(record.relationship_properties)
        label = record.start_label if inbound else record.end_label
        by_filters.setdefault(key, []).append((label, record.count))
    return grouped


def split_by_direction(
    records: Iterable[AdjacencyRecord],
) -> tuple[list[AdjacencyRecord], list[AdjacencyRecord]]:
    """Partition rows into (inbound, outbound) relative to the focal node."""
    inbound: list[AdjacencyRecord] = []
    outbound: list[AdjacencyRecord] = []
    for record in records:
        if record.is_outbound_from_focus:
            outbound.append(record)
        else:
            inbound.append(record)
    return inbound, outbound
