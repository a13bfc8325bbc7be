"""
Neo4j health check utilities.

Reports connectivity and the server agent for the schema walker's
status page.
"""

from __future__ import annotations

import time
from typing import Any


async def check_neo4j_health(client: Any) -> bool:
    """
    Check if Neo4j is healthy and reachable.

    Args:
        client: Neo4j client (Neo4jClient or FakeNeo4jClient)

    Returns:
        True if Neo4j answers a trivial query, False otherwise
    """
    if not client.is_connected:
        return False
    try:
        await client.query("RETURN 1 AS ok")
        return True
    except Exception:
        return False


async def check_neo4j_health_detailed(client: Any) -> dict[str, Any]:
    """
    Check Neo4j health with detailed information.

    Args:
        client: Neo4j client (Neo4jClient or FakeNeo4jClient)

    Returns:
        Dictionary with status, url, agent and latency, or the error
    """
    url = getattr(client, "uri", None)
    if not client.is_connected:
        return {"status": "unhealthy", "url": url, "error": "Not connected"}

    start_time = time.time()
    try:
        agent = await client.server_agent()
        await client.query("RETURN 1 AS ok")
        latency_ms = (time.time() - start_time) * 1000
        return {
            "status": "healthy",
            "url": url,
            "agent": agent,
            "latency_ms": round(latency_ms, 2),
        }
    except Exception as e:
        return {
            "status": "unhealthy",
            "url": url,
            "error": str(e),
        }
