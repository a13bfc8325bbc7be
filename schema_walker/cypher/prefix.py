"""
Walk path compilation.

Folds the committed steps of a walk into one MATCH prefix. Each step
contributes an anonymous node pattern followed by a relationship pattern;
the caller appends the focal node pattern that closes the path:

    MATCH (:`Person`{age: 30})-[:KNOWS]->(n:`Person`)...
          '------- step 0 --------------''-- focal --'
"""

from __future__ import annotations

from collections.abc import Iterable

from schema_walker.cypher.literals import encode_identifier, encode_properties
from schema_walker.walk.models import PropertySelection, Step, Walk

MATCH_KEYWORD = "MATCH "


def node_pattern(
    label: str,
    properties: Iterable[PropertySelection] = (),
    variable: str = "",
) -> str:
    """Render ``(variable:`label`{props})``."""
    return f"({variable}:{encode_identifier(label)}{encode_properties(properties)})"


def relationship_pattern(step: Step) -> str:
    """Render the hop of ``step`` with its arrow, e.g. ``<-[:OWNS]-``.

    Relationship type names are written bare, not backtick-delimited.
    """
    rel = step.relationship
    body = f"-[:{rel.type_name}{encode_properties(rel.properties)}]-"
    if step.is_inbound:
        return "<" + body
    return body + ">"


def compile_prefix(walk: Walk) -> str:
    """Compile a walk into a MATCH prefix ending just before the focal node.

    An empty walk compiles to the bare ``MATCH `` keyword. The result
    depends only on the walk value, and property order is insertion order.
    """
    parts = [MATCH_KEYWORD]
    for step in walk.steps:
        origin = step.origin_node
        parts.append(node_pattern(origin.label, origin.properties))
        parts.append(relationship_pattern(step))
    return "".join(parts)
