# Graph module for Neo4j integration
"""
Graph layer for Neo4j operations including:
- Neo4jClient: Repository pattern client with connection pooling
- FakeNeo4jClient: Scripted in-memory client for tests
- Health checks reporting connectivity and server agent
"""

from schema_walker.graph.exceptions import (
    Neo4jConnectionError,
    Neo4jError,
    Neo4jQueryError,
)
from schema_walker.graph.health import (
    check_neo4j_health,
    check_neo4j_health_detailed,
)
from schema_walker.graph.neo4j_client import (
    FakeNeo4jClient,
    Neo4jClient,
    Neo4jClientProtocol,
)

__all__ = [
    # Exceptions
    "Neo4jError",
    "Neo4jConnectionError",
    "Neo4jQueryError",
    # Client
    "Neo4jClient",
    "Neo4jClientProtocol",
    "FakeNeo4jClient",
    # Health
    "check_neo4j_health",
    "check_neo4j_health_detailed",
]
