"""
Whole-graph schema overview: label counts, relationship type counts and
the server agent string.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from schema_walker.explorer.queries import (
    LabelOverviewQuery,
    RelationshipTypeOverviewQuery,
)

logger = logging.getLogger(__name__)

DEFAULT_OVERVIEW_TIMEOUT_SECONDS = 3.0


class SchemaOverview:
    """Runs the overview queries against one client.

    Usage:
        overview = SchemaOverview(client=neo4j_client, timeout=3.0)
        await overview.refresh()
        overview.labels.result          # {"Person": 120, ...}
        overview.relationship_types.result
    """

    def __init__(
        self,
        client: Any,
        timeout: float = DEFAULT_OVERVIEW_TIMEOUT_SECONDS,
    ) -> None:
        self._client = client
        self.labels = LabelOverviewQuery(client, timeout=timeout)
        self.relationship_types = RelationshipTypeOverviewQuery(client, timeout=timeout)

    async def refresh(self) -> None:
        """Reload both counts concurrently. Failures land in each runner's error."""
        await asyncio.gather(
            self.labels.refresh(),
            self.relationship_types.refresh(),
        )

    async def server_agent(self) -> str | None:
        """Agent string of the server, or None if it cannot be read."""
        try:
            return await self._client.server_agent()
        except Exception as e:
            logger.warning("Could not read server agent: %s", e)
            return None
