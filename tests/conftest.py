"""
Pytest configuration and fixtures for graph-schema-walker tests.
"""

from unittest.mock import MagicMock

import pytest

from schema_walker.core.config import Settings
from schema_walker.graph.neo4j_client import FakeNeo4jClient
from schema_walker.walk.models import (
    Direction,
    NodePick,
    PropertySelection,
    RelationshipPick,
    Step,
    Walk,
)


@pytest.fixture
def settings() -> Settings:
    """Provide test settings."""
    return Settings(
        neo4j_url="bolt://localhost:7687",
        neo4j_user="neo4j",
        neo4j_password="testpassword",
        neo4j_database="neo4j",
        walk_query_timeout_seconds=30.0,
        overview_query_timeout_seconds=3.0,
    )


@pytest.fixture
def mock_settings() -> MagicMock:
    """Create mock settings for Neo4j configuration."""
    settings = MagicMock()
    settings.neo4j_url = "bolt://localhost:7687"
    settings.neo4j_user = "neo4j"
    settings.neo4j_password = "testpassword"
    settings.neo4j_database = "neo4j"
    return settings


@pytest.fixture
def fake_client() -> FakeNeo4jClient:
    """Connected fake client with no scripted responses."""
    return FakeNeo4jClient(connected=True)


@pytest.fixture
def knows_step() -> Step:
    """(:Person)-[:KNOWS]->"""
    return Step(
        relationship=RelationshipPick(type_name="KNOWS"),
        direction=Direction.OUTBOUND,
        origin_node=NodePick(label="Person"),
    )


@pytest.fixture
def works_at_step() -> Step:
    """(:Person{name: 'Ann'})<-[:WORKS_AT{since: 2020}]-"""
    return Step(
        relationship=RelationshipPick(
            type_name="WORKS_AT",
            properties=(PropertySelection(name="since", value="2020"),),
        ),
        direction=Direction.INBOUND,
        origin_node=NodePick(
            label="Person",
            properties=(PropertySelection(name="name", value="Ann"),),
        ),
    )


@pytest.fixture
def two_step_walk(knows_step: Step, works_at_step: Step) -> Walk:
    return Walk(steps=(knows_step, works_at_step))
