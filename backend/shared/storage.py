"""Storage abstraction for persistence snapshots.

Snapshots are JSON documents keyed by game id. Durable storage is owned by an
external key-value collaborator that implements ``SnapshotStorage``; the
in-memory implementation below keeps the latest snapshot per key for the
lifetime of the process.
"""

from typing import Protocol

import structlog

logger = structlog.get_logger()


class SnapshotStorage(Protocol):
    """Protocol for persisting snapshot documents."""

    def save_snapshot(self, key: str, content: str) -> None: ...

    def load_snapshot(self, key: str) -> str | None: ...


class InMemorySnapshotStorage:
    """Keeps the most recent snapshot document per key."""

    def __init__(self) -> None:
        self._documents: dict[str, str] = {}

    def save_snapshot(self, key: str, content: str) -> None:
        """Store a snapshot, replacing any previous document under the same key."""
        if not key:
            raise ValueError("Snapshot key must not be empty")
        self._documents[key] = content
        logger.debug("saved snapshot", key=key, size=len(content))

    def load_snapshot(self, key: str) -> str | None:
        return self._documents.get(key)

    def keys(self) -> list[str]:
        return list(self._documents)
