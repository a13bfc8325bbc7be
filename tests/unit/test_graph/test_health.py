"""
Unit tests for Neo4j health checks.
"""

from __future__ import annotations

import pytest

from schema_walker.graph.health import check_neo4j_health, check_neo4j_health_detailed
from schema_walker.graph.neo4j_client import FakeNeo4jClient


class TestNeo4jHealthCheck:
    """Tests for Neo4j connectivity and health verification."""

    @pytest.mark.asyncio
    async def test_returns_true_when_connected(self, fake_client: FakeNeo4jClient) -> None:
        """
        GIVEN a connected client
        WHEN check_neo4j_health is called
        THEN it returns True
        """
        assert await check_neo4j_health(fake_client) is True

    @pytest.mark.asyncio
    async def test_returns_false_when_disconnected(self) -> None:
        assert await check_neo4j_health(FakeNeo4jClient()) is False

    @pytest.mark.asyncio
    async def test_returns_false_when_query_fails(self, fake_client: FakeNeo4jClient) -> None:
        fake_client.add_response("RETURN 1", error=RuntimeError("Connection refused"))

        assert await check_neo4j_health(fake_client) is False


class TestNeo4jHealthDetailed:
    @pytest.mark.asyncio
    async def test_healthy_details(self) -> None:
        client = FakeNeo4jClient(agent="Neo4j/5.20.0", connected=True)

        result = await check_neo4j_health_detailed(client)

        assert result["status"] == "healthy"
        assert result["agent"] == "Neo4j/5.20.0"
        assert result["latency_ms"] >= 0

    @pytest.mark.asyncio
    async def test_not_connected(self) -> None:
        result = await check_neo4j_health_detailed(FakeNeo4jClient())

        assert result == {"status": "unhealthy", "url": None, "error": "Not connected"}

    @pytest.mark.asyncio
    async def test_query_failure_reports_error(self, fake_client: FakeNeo4jClient) -> None:
        fake_client.add_response("RETURN 1", error=RuntimeError("Connection refused"))

        result = await check_neo4j_health_detailed(fake_client)

        assert result["status"] == "unhealthy"
        assert "Connection refused" in result["error"]
