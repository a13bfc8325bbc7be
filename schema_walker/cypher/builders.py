"""
Cypher builders for the walk read operations.

Every builder starts from compile_prefix(walk). The focal-node builders
then add ``(n:`label`{candidate filters})`` and an operation-specific
suffix. Builders return None when their required input is missing, which
callers treat as "not ready" and issue no query.

The overview builders take no walk at all; they describe the whole graph.
"""

from __future__ import annotations

from schema_walker.cypher.prefix import compile_prefix, node_pattern
from schema_walker.walk.models import CandidateSelection, Walk

FOCAL_VARIABLE = "n"

ADJACENT_RELATIONSHIPS_SUFFIX = (
    "-[r]-() "
    "UNWIND labels(startNode(r)) as startLabel "
    "UNWIND labels(endNode(r)) as endLabel "
    "RETURN distinct type(r) as type, properties(r) as props, startLabel, endLabel, "
    "(startNode(r) = n) as out, count(distinct(r)) as count "
    "ORDER BY type ASC;"
)

PROPERTY_KEY_COUNTS_SUFFIX = (
    " WITH distinct(n), keys(n) as keys "
    "UNWIND keys as key "
    "RETURN distinct(key) as key, count(*) as count;"
)

REACHABLE_LABELS_SUFFIX = (
    "(n) UNWIND labels(n) as label "
    "RETURN label, count(distinct(n)) as count;"
)

LABEL_OVERVIEW_QUERY = (
    "MATCH (n) WITH *, LABELS(n) as labels UNWIND labels as label "
    "RETURN distinct(label), count(distinct(n)) as count"
)

RELATIONSHIP_TYPE_OVERVIEW_QUERY = (
    "MATCH ()-[n]-() RETURN DISTINCT type(n) as type, count(*) as count"
)


def focal_prefix(walk: Walk, candidate: CandidateSelection) -> str | None:
    """Walk prefix plus the focal node pattern, or None without a label."""
    if not candidate.is_ready:
        return None
    focal = node_pattern(candidate.label, candidate.properties, variable=FOCAL_VARIABLE)
    return compile_prefix(walk) + focal


def build_adjacent_relationships_query(
    walk: Walk,
    candidate: CandidateSelection,
) -> str | None:
    """Every relationship touching the focal node, with both endpoint labels."""
    prefix = focal_prefix(walk, candidate)
    if prefix is None:
        return None
    return prefix + ADJACENT_RELATIONSHIPS_SUFFIX


def build_property_key_counts_query(
    walk: Walk,
    candidate: CandidateSelection,
) -> str | None:
    """How many distinct focal nodes carry each property key."""
    prefix = focal_prefix(walk, candidate)
    if prefix is None:
        return None
    return prefix + PROPERTY_KEY_COUNTS_SUFFIX


def build_property_value_counts_query(
    walk: Walk,
    candidate: CandidateSelection,
    property_name: str,
) -> str | None:
    """How many distinct focal nodes carry each value of ``property_name``."""
    prefix = focal_prefix(walk, candidate)
    if prefix is None or not property_name:
        return None
    return (
        prefix
        + f" WITH distinct(n) RETURN distinct(n.{property_name}) as val, count(*) as count;"
    )


def build_reachable_labels_query(walk: Walk) -> str:
    """Labels of every node reachable through the walk, ignoring any candidate."""
    return compile_prefix(walk) + REACHABLE_LABELS_SUFFIX
