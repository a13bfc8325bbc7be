"""
Cypher generation for schema walks.

- literals: value and identifier encoding
- prefix: walk path compilation
- builders: query text for each walk read operation and the graph overview
"""

from schema_walker.cypher.builders import (
    LABEL_OVERVIEW_QUERY,
    RELATIONSHIP_TYPE_OVERVIEW_QUERY,
    build_adjacent_relationships_query,
    build_property_key_counts_query,
    build_property_value_counts_query,
    build_reachable_labels_query,
)
from schema_walker.cypher.literals import (
    LiteralKind,
    LiteralToken,
    encode_identifier,
    encode_literal,
    encode_properties,
    is_numeric,
)
from schema_walker.cypher.prefix import compile_prefix, node_pattern

__all__ = [
    "LABEL_OVERVIEW_QUERY",
    "RELATIONSHIP_TYPE_OVERVIEW_QUERY",
    "LiteralKind",
    "LiteralToken",
    "build_adjacent_relationships_query",
    "build_property_key_counts_query",
    "build_property_value_counts_query",
    "build_reachable_labels_query",
    "compile_prefix",
    "encode_identifier",
    "encode_literal",
    "encode_properties",
    "is_numeric",
    "node_pattern",
]
