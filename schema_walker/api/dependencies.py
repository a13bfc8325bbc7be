"""
Dependency injection for API services.

Provides the service container and the factory that wires a client,
walk store, walk manager, explorer and overview together.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from schema_walker.core.config import Settings
from schema_walker.explorer.overview import SchemaOverview
from schema_walker.explorer.session import WalkExplorer
from schema_walker.graph.neo4j_client import Neo4jClientProtocol
from schema_walker.walk.manager import WalkManager
from schema_walker.walk.store import InMemoryWalkStore, WalkStore


@dataclass
class ServiceConfig:
    """Configuration for services."""

    walk_query_timeout_seconds: float = 30.0
    overview_query_timeout_seconds: float = 3.0
    walk_store_key: str = "walk"

    @classmethod
    def from_settings(cls, settings: Settings) -> ServiceConfig:
        return cls(
            walk_query_timeout_seconds=settings.walk_query_timeout_seconds,
            overview_query_timeout_seconds=settings.overview_query_timeout_seconds,
            walk_store_key=settings.walk_store_key,
        )


@dataclass
class ServiceContainer:
    """Container for all service dependencies."""

    client: Neo4jClientProtocol
    manager: WalkManager
    explorer: WalkExplorer
    overview: SchemaOverview
    config: ServiceConfig = field(default_factory=ServiceConfig)


def build_services(
    client: Any,
    store: WalkStore | None = None,
    config: ServiceConfig | None = None,
) -> ServiceContainer:
    """Wire the walk services around one client.

    Args:
        client: Neo4j client (Neo4jClient or FakeNeo4jClient)
        store: Walk persistence (in-memory if None)
        config: Timeouts and store key

    Returns:
        ServiceContainer sharing one WalkManager between explorer and routes
    """
    cfg = config or ServiceConfig()
    manager = WalkManager(
        store=store if store is not None else InMemoryWalkStore(),
        key=cfg.walk_store_key,
    )
    return ServiceContainer(
        client=client,
        manager=manager,
        explorer=WalkExplorer(client, manager, timeout=cfg.walk_query_timeout_seconds),
        overview=SchemaOverview(client, timeout=cfg.overview_query_timeout_seconds),
        config=cfg,
    )
