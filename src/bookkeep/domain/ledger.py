"""In-memory ledger state with save-on-mutation."""

import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator, Optional, Sequence

from bookkeep.database import codec
from bookkeep.database.base import SnapshotStore
from bookkeep.domain.entities import Account, AccountType, JournalEntry, Snapshot
from bookkeep.domain.errors import DecodeError

logger = logging.getLogger(__name__)

SEED_ACCOUNTS = (
    ("Cash", AccountType.ASSET),
    ("Student Loan", AccountType.LIABILITY),
    ("Net Assets", AccountType.EQUITY),
    ("Food", AccountType.EXPENSE),
    ("Salary", AccountType.REVENUE),
    ("Profit and Loss", AccountType.PROFIT_AND_LOSS),
)


def new_id() -> str:
    """Return a fresh identifier for an account, entry or posting."""
    return uuid.uuid4().hex


def seed_accounts() -> tuple[Account, ...]:
    """Return the starter chart of accounts, one account per type."""
    return tuple(Account(id=new_id(), name=name, type=account_type) for name, account_type in SEED_ACCOUNTS)


def apply_account_order(accounts: Sequence[Account], order: Sequence[str]) -> tuple[Account, ...]:
    """Put accounts listed in ``order`` first, keeping the rest in their original order."""
    by_id = {acc.id: acc for acc in accounts}
    ordered: list[Account] = []
    placed: set[str] = set()
    for account_id in order:
        if account_id in by_id and account_id not in placed:
            ordered.append(by_id[account_id])
            placed.add(account_id)
    ordered.extend(acc for acc in accounts if acc.id not in placed)
    return tuple(ordered)


class ChangeKind(Enum):
    """Which collection a committed mutation touched."""

    ACCOUNTS = "accounts"
    ENTRIES = "entries"
    LOADED = "loaded"


@dataclass(frozen=True)
class ChangeEvent:
    """Notification sent to ledger subscribers after every commit."""

    kind: ChangeKind
    detail: str


class Ledger:
    """Single source of truth for accounts and journal entries.

    Collections are immutable tuples that are swapped as a whole on commit,
    so readers always observe a complete state. Every commit is saved to the
    snapshot store before subscribers are notified.
    """

    def __init__(self, store: Optional[SnapshotStore] = None):
        """Initialize ledger.

        Args:
            store: Snapshot store, or None to keep state in memory only
        """
        self.store = store
        self.lock = threading.RLock()
        self.load_error: Optional[DecodeError] = None
        self._accounts: tuple[Account, ...] = seed_accounts()
        self._entries: tuple[JournalEntry, ...] = ()
        self._subscribers: list[Callable[[ChangeEvent], None]] = []

    @property
    def accounts(self) -> tuple[Account, ...]:
        return self._accounts

    @property
    def entries(self) -> tuple[JournalEntry, ...]:
        return self._entries

    def snapshot(self) -> Snapshot:
        """Return the current state as one Snapshot."""
        with self.lock:
            return Snapshot(accounts=self._accounts, entries=self._entries)

    def next_sequence(self) -> int:
        """Return the creation sequence number for the next entry."""
        with self.lock:
            return max((entry.sequence for entry in self._entries), default=-1) + 1

    def subscribe(self, callback: Callable[[ChangeEvent], None]) -> Callable[[], None]:
        """Register a change callback. Returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @contextmanager
    def writing(self) -> Iterator["Ledger"]:
        """Hold the single-writer lock for a read-validate-commit sequence."""
        with self.lock:
            yield self

    def commit(
        self,
        *,
        accounts: Optional[Sequence[Account]] = None,
        entries: Optional[Sequence[JournalEntry]] = None,
        detail: str = "",
    ) -> None:
        """Replace one or both collections, save, and notify subscribers.

        The new state is saved before it replaces the current one, so a
        failing store leaves the ledger unchanged.
        """
        with self.lock:
            candidate = Snapshot(
                accounts=self._accounts if accounts is None else tuple(accounts),
                entries=self._entries if entries is None else tuple(entries),
            )
            self._write(candidate)
            self._accounts = candidate.accounts
            self._entries = candidate.entries
            if accounts is not None:
                self.save_account_order()
        kind = ChangeKind.ENTRIES if accounts is None else ChangeKind.ACCOUNTS
        logger.info("Committed %s change: %s", kind.value, detail)
        self._notify(ChangeEvent(kind=kind, detail=detail))

    def save(self) -> None:
        """Write the current snapshot to the store."""
        self._write(self.snapshot())

    def _write(self, snapshot: Snapshot) -> None:
        if self.store is None:
            return
        self.store.save_snapshot(codec.encode_snapshot(snapshot))

    def save_account_order(self) -> None:
        """Write the current account order to the store."""
        if self.store is None:
            return
        self.store.save_account_order(codec.encode_account_order([acc.id for acc in self._accounts]))

    def load(self) -> None:
        """Seed state from the store.

        Saves the starter accounts when nothing was saved yet, so their IDs
        stay the same from one run to the next. A corrupt snapshot
        also falls back to the starter accounts; the error is kept in
        ``load_error`` for the application to report.
        """
        if self.store is None:
            return
        with self.lock:
            self.load_error = None
            payload = self.store.load_snapshot()
            if payload is None:
                logger.info("No saved snapshot, saving starter accounts")
                self.save()
                self.save_account_order()
            else:
                try:
                    snapshot = codec.decode_snapshot(payload)
                except DecodeError as e:
                    logger.warning("Could not decode saved snapshot, using starter accounts: %s", e)
                    self.load_error = e
                    self._accounts = seed_accounts()
                    self._entries = ()
                else:
                    self._accounts = snapshot.accounts
                    self._entries = snapshot.entries
            self._apply_saved_order()
        self._notify(ChangeEvent(kind=ChangeKind.LOADED, detail="snapshot loaded"))

    def _apply_saved_order(self) -> None:
        payload = self.store.load_account_order()
        if payload is None:
            return
        try:
            order = codec.decode_account_order(payload)
        except DecodeError as e:
            logger.warning("Ignoring saved account order: %s", e)
            return
        self._accounts = apply_account_order(self._accounts, order)

    def _notify(self, event: ChangeEvent) -> None:
        for callback in list(self._subscribers):
            callback(event)
