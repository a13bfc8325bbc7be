"""
Neo4j client module implementing Repository pattern.

Design follows:
- Repository Pattern: Abstraction over the graph database
- FakeClient for testing: if it's hard to fake, it's probably hard to use
- Connection pooling: Reuse one driver instance per client
- Custom exceptions: Avoid shadowing builtins
- Async context manager: Proper resource management

This module provides:
- Neo4jClient: Real client for production use
- FakeNeo4jClient: In-memory fake with scripted responses for testing
- Both share the same interface (duck typing)

The schema walker only reads from the graph, so every query runs in a
read-access session with a per-query timeout.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from neo4j import READ_ACCESS, AsyncGraphDatabase, Query
from neo4j.exceptions import ServiceUnavailable

from schema_walker.graph.exceptions import (
    Neo4jConnectionError,
    Neo4jQueryError,
)

if TYPE_CHECKING:
    from neo4j import AsyncDriver


@runtime_checkable
class Neo4jClientProtocol(Protocol):
    """Protocol defining the Neo4jClient interface.

    Enables duck typing - any class implementing these methods
    can be used interchangeably (Repository pattern).
    """

    @property
    def is_connected(self) -> bool:
        """Check if client is connected."""
        ...

    async def connect(self) -> None:
        """Connect to Neo4j."""
        ...

    async def close(self) -> None:
        """Close connection."""
        ...

    async def query(
        self,
        cypher: str,
        parameters: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> list[dict[str, Any]]:
        """Execute read query."""
        ...

    async def server_agent(self) -> str:
        """Return the agent string reported by the server."""
        ...


class Neo4jClient:
    """Neo4j client implementing Repository pattern.

    Provides connection pooling by reusing a single driver instance.

    Usage:
        # As async context manager (recommended)
        async with Neo4jClient(settings=settings) as client:
            rows = await client.query("MATCH (n) RETURN n LIMIT 10", timeout=30.0)

        # Manual connection management
        client = Neo4jClient(settings=settings)
        await client.connect()
        rows = await client.query("MATCH (n) RETURN n")
        await client.close()
    """

    def __init__(self, settings: Any) -> None:
        """Initialize client with Settings object.

        Args:
            settings: Settings object with neo4j_url, neo4j_user,
                      neo4j_password, neo4j_database attributes

        Note:
            Driver is NOT created here - uses lazy initialization.
            Call connect() or use as async context manager.
        """
        self._settings = settings
        self._uri = settings.neo4j_url
        self._user = settings.neo4j_user
        self._password = settings.neo4j_password
        self._database = settings.neo4j_database
        self._driver: AsyncDriver | None = None

    @property
    def uri(self) -> str:
        """Get the connection URI."""
        return self._uri

    @property
    def database(self) -> str:
        """Get the database name."""
        return self._database

    @property
    def is_connected(self) -> bool:
        """Check if driver is initialized."""
        return self._driver is not None

    async def connect(self) -> None:
        """Create driver and verify connectivity.

        Raises:
            Neo4jConnectionError: If connection fails.
        """
        try:
            self._driver = AsyncGraphDatabase.driver(
                self._uri,
                auth=(self._user, self._password),
            )
            await self._driver.verify_connectivity()
        except ServiceUnavailable as e:
            self._driver = None
            raise Neo4jConnectionError(
                f"Failed to connect to Neo4j at {self._uri}",
                cause=e,
            ) from e
        except Exception as e:
            self._driver = None
            raise Neo4jConnectionError(
                f"Unexpected error connecting to Neo4j: {e}",
                cause=e,
            ) from e

    async def close(self) -> None:
        """Close the driver connection.

        Safe to call even if not connected (no-op).
        """
        if self._driver is not None:
            await self._driver.close()
            self._driver = None

    async def __aenter__(self) -> Neo4jClient:
        """Async context manager entry - connect to Neo4j."""
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit - close connection."""
        await self.close()

    def _ensure_connected(self) -> None:
        """Raise if not connected.

        Raises:
            Neo4jConnectionError: If driver is not initialized.
        """
        if self._driver is None:
            raise Neo4jConnectionError(
                "Not connected to Neo4j. Call connect() first or use async context manager."
            )

    async def query(
        self,
        cypher: str,
        parameters: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> list[dict[str, Any]]:
        """Execute a read query and return results.

        Args:
            cypher: Cypher query string
            parameters: Optional query parameters
            timeout: Transaction timeout in seconds (server default if None)

        Returns:
            List of records as dictionaries

        Raises:
            Neo4jConnectionError: If not connected
            Neo4jQueryError: If query execution fails or times out
        """
        self._ensure_connected()
        assert self._driver is not None  # For type checker

        try:
            async with self._driver.session(
                database=self._database,
                default_access_mode=READ_ACCESS,
            ) as session:
                result = await session.run(Query(cypher, timeout=timeout), parameters or {})
                return await result.data()
        except Exception as e:
            # The driver's message, unchanged.
            raise Neo4jQueryError(
                str(e),
                query=cypher,
                cause=e,
            ) from e

    async def server_agent(self) -> str:
        """Return the agent string of the connected server (e.g. "Neo4j/5.20.0").

        Raises:
            Neo4jConnectionError: If not connected or the server is unreachable
        """
        self._ensure_connected()
        assert self._driver is not None  # For type checker

        try:
            info = await self._driver.get_server_info()
        except Exception as e:
            raise Neo4jConnectionError(
                f"Could not read server info from {self._uri}: {e}",
                cause=e,
            ) from e
        return info.agent


@dataclass
class ScriptedResponse:
    """A canned answer for every query containing ``match``."""

    match: str
    rows: list[dict[str, Any]] = field(default_factory=list)
    delay: float = 0.0
    error: Exception | None = None


class FakeNeo4jClient:
    """In-memory fake Neo4j client for testing.

    Implements the same interface as Neo4jClient. Responses are scripted
    by substring: the most recently added response whose ``match`` occurs
    in the query wins. Delays let tests reorder completions of overlapping
    requests.

    Usage:
        fake = FakeNeo4jClient()
        fake.add_response("UNWIND labels(n)", [{"label": "Person", "count": 3}])
        async with fake:
            rows = await fake.query("MATCH (n) UNWIND labels(n) as label ...")
    """

    def __init__(self, agent: str = "Neo4j/5.0.0-fake", connected: bool = False) -> None:
        """Initialize fake client with no scripted responses."""
        self._connected = connected
        self._agent = agent
        self._responses: list[ScriptedResponse] = []
        self._default_rows: list[dict[str, Any]] = []
        self._executed: list[tuple[str, float | None]] = []

    @property
    def is_connected(self) -> bool:
        """Check if fake is 'connected'."""
        return self._connected

    async def connect(self) -> None:
        """Simulate connecting (always succeeds)."""
        await asyncio.sleep(0)  # Yield to event loop for true async
        self._connected = True

    async def close(self) -> None:
        """Simulate closing connection."""
        await asyncio.sleep(0)  # Yield to event loop for true async
        self._connected = False

    async def __aenter__(self) -> FakeNeo4jClient:
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    def _ensure_connected(self) -> None:
        """Raise if not 'connected'."""
        if not self._connected:
            raise Neo4jConnectionError("Fake client not connected")

    async def query(
        self,
        cypher: str,
        parameters: dict[str, Any] | None = None,  # noqa: ARG002 - Required for interface compatibility
        timeout: float | None = None,
    ) -> list[dict[str, Any]]:
        """Return the scripted rows for ``cypher``."""
        await asyncio.sleep(0)  # Yield to event loop for true async
        self._ensure_connected()
        self._executed.append((cypher, timeout))

        for response in reversed(self._responses):
            if response.match in cypher:
                if response.delay:
                    await asyncio.sleep(response.delay)
                if response.error is not None:
                    raise Neo4jQueryError(str(response.error), query=cypher, cause=response.error)
                return [dict(row) for row in response.rows]

        return [dict(row) for row in self._default_rows]

    async def server_agent(self) -> str:
        """Return the configured agent string."""
        await asyncio.sleep(0)  # Yield to event loop for true async
        self._ensure_connected()
        return self._agent

    def add_response(
        self,
        match: str,
        rows: list[dict[str, Any]] | None = None,
        delay: float = 0.0,
        error: Exception | None = None,
    ) -> None:
        """Script the answer for queries containing ``match``.

        Args:
            match: Substring of the Cypher text to answer
            rows: Rows to return
            delay: Seconds to wait before answering
            error: If set, the query fails with this error's message
        """
        self._responses.append(ScriptedResponse(match, list(rows or []), delay, error))

    def set_query_results(self, results: list[dict[str, Any]]) -> None:
        """Configure rows returned when no scripted response matches."""
        self._default_rows = list(results)

    def get_executed_queries(self) -> list[str]:
        """Get every query text run so far, in order."""
        return [cypher for cypher, _ in self._executed]

    def get_executed_timeouts(self) -> list[float | None]:
        """Get the timeout passed with every query, in order."""
        return [timeout for _, timeout in self._executed]

    def clear(self) -> None:
        """Clear scripted responses and the execution log."""
        self._responses.clear()
        self._default_rows.clear()
        self._executed.clear()
