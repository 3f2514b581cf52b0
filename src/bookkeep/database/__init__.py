"""Storage layer for bookkeep application."""

from bookkeep.database.base import SnapshotStore
from bookkeep.database.factories import create_sqlite_store

__all__ = ["SnapshotStore", "create_sqlite_store"]

