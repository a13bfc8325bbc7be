"""
Walk state machine.

WalkManager owns the current Walk value. Every mutation builds a new Walk,
replaces the old one wholesale and persists the snapshot. Persistence is
best effort: store failures are logged and the walk carries on in memory.

States:
    EMPTY        no steps
    IN_PROGRESS  one or more steps

Transitions:
    append(step)        any state -> IN_PROGRESS
    truncate(i)         drops step i and later; truncate(0) -> EMPTY
    restore(...)        replaces the walk if the serialized form decodes
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from schema_walker.walk.exceptions import WalkDecodeError
from schema_walker.walk.models import Step, Walk, WalkStatus
from schema_walker.walk.store import InMemoryWalkStore, WalkStore

logger = logging.getLogger(__name__)

DEFAULT_STORE_KEY = "walk"


def decode_walk(serialized: str) -> Walk:
    """Deserialize a walk snapshot.

    Raises:
        WalkDecodeError: If the text is not a valid walk
    """
    try:
        return Walk.model_validate_json(serialized)
    except ValidationError as e:
        raise WalkDecodeError(f"Could not decode walk: {e}") from e


class WalkManager:
    """Owns the walk and keeps the persisted copy in step with it.

    Usage:
        manager = WalkManager(store=FileWalkStore(".walk-store.json"))
        manager.restore()
        manager.append(step)
        manager.truncate(0)
    """

    def __init__(
        self,
        store: WalkStore | None = None,
        key: str = DEFAULT_STORE_KEY,
    ) -> None:
        """Initialize with an empty walk.

        Args:
            store: Key-value store for the snapshot (in-memory if None)
            key: Store key holding the serialized walk
        """
        self._store = store if store is not None else InMemoryWalkStore()
        self._key = key
        self._walk = Walk()
        self.last_warning: str | None = None

    @property
    def walk(self) -> Walk:
        return self._walk

    @property
    def status(self) -> WalkStatus:
        return self._walk.status

    def append(self, step: Step) -> Walk:
        """Add ``step`` at the tail. Always succeeds."""
        self._replace(self._walk.append(step))
        logger.info(
            "Walk step %d added: %s %s",
            len(self._walk.steps) - 1,
            step.relationship.type_name,
            step.direction.value,
        )
        return self._walk

    def truncate(self, from_index: int) -> Walk:
        """Remove the step at ``from_index`` and every step after it.

        Raises:
            ValueError: If ``from_index`` is negative
        """
        self._replace(self._walk.truncate(from_index))
        logger.info("Walk truncated at step %d, %d steps remain", from_index, len(self._walk.steps))
        return self._walk

    def reset(self) -> Walk:
        return self.truncate(0)

    def snapshot(self) -> str:
        """Serialize the current walk. Has no side effects."""
        return self._walk.model_dump_json()

    def restore(self, serialized: str | None = None) -> bool:
        """Replace the walk with a serialized one.

        Reads the store when ``serialized`` is None. On any read or decode
        failure the current walk is kept and a warning is recorded.

        Returns:
            True if the walk was replaced
        """
        self.last_warning = None
        if serialized is None:
            try:
                serialized = self._store.get(self._key)
            except Exception as e:
                self._warn(f"Could not load walk from store: {e}")
                return False
            if serialized is None:
                return False

        try:
            self._walk = decode_walk(serialized)
        except WalkDecodeError as e:
            self._warn(str(e))
            return False

        logger.info("Walk restored with %d steps", len(self._walk.steps))
        return True

    def _replace(self, walk: Walk) -> None:
        self._walk = walk
        self._persist()

    def _persist(self) -> None:
        try:
            self._store.set(self._key, self.snapshot())
        except Exception as e:
            logger.warning("Could not store walk: %s", e)

    def _warn(self, message: str) -> None:
        self.last_warning = message
        logger.warning(message)
