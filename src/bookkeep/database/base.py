"""Abstract snapshot storage interface."""

from abc import ABC, abstractmethod
from typing import Optional


class SnapshotStore(ABC):
    """Abstract storage for the serialized ledger snapshot.

    The store only moves opaque payloads; encoding and decoding live in
    :mod:`bookkeep.database.codec`.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the storage backend."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the storage backend."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize storage schema (create tables)."""
        pass

    # Snapshot operations
    @abstractmethod
    def load_snapshot(self) -> Optional[str]:
        """Return the last saved snapshot payload, or None if nothing was saved."""
        pass

    @abstractmethod
    def save_snapshot(self, payload: str) -> None:
        """Replace the saved snapshot payload."""
        pass

    # Account order operations
    @abstractmethod
    def load_account_order(self) -> Optional[str]:
        """Return the saved account order payload, or None if nothing was saved."""
        pass

    @abstractmethod
    def save_account_order(self, payload: str) -> None:
        """Replace the saved account order payload."""
        pass
