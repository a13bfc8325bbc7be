"""Interactive schema walker for Neo4j property graphs."""

__version__ = "0.1.0"
