"""Journal entry domain service."""

import logging
from datetime import date
from typing import Iterable, Optional, Sequence

from bookkeep.domain.entities import EntrySortKey, JournalEntry, Posting
from bookkeep.domain.errors import (
    BalanceError,
    NotFoundError,
    ValidationError,
    entry_not_found,
    negative_amount,
    non_positive_entry,
)
from bookkeep.domain.ledger import Ledger, new_id

logger = logging.getLogger(__name__)

MIN_ID_PREFIX = 4


def make_posting(account_id: str, amount: int) -> Posting:
    """Build a debit or credit line with a fresh ID."""
    return Posting(id=new_id(), account_id=account_id, amount=amount)


def validate_balance(
    debit_lines: Sequence[Posting],
    credit_lines: Sequence[Posting],
    require_positive: bool = False,
) -> int:
    """Check the double-entry rule for a set of lines.

    Args:
        debit_lines: Debit side
        credit_lines: Credit side
        require_positive: Also require both sides to be non-empty with a total
            above zero, as the entry forms do

    Returns:
        The common total

    Raises:
        ValidationError: If any amount is negative
        BalanceError: If the sides differ, or the total is not positive when
            ``require_positive`` is set
    """
    for line in list(debit_lines) + list(credit_lines):
        if line.amount < 0:
            raise ValidationError(negative_amount(line.amount))

    debit_total = sum(line.amount for line in debit_lines)
    credit_total = sum(line.amount for line in credit_lines)
    if debit_total != credit_total:
        raise BalanceError(debit_total, credit_total)

    if require_positive and (not debit_lines or not credit_lines or debit_total <= 0):
        raise BalanceError(debit_total, credit_total, non_positive_entry(debit_total))

    return debit_total


def sorted_view(entries: Iterable[JournalEntry], sort_key: EntrySortKey) -> list[JournalEntry]:
    """Return entries in the requested order.

    Creation order uses the entry sequence number. Sorting is stable, so
    entries with equal keys keep their relative order.
    """
    entries = list(entries)
    if sort_key == EntrySortKey.ADDED_ASC:
        return sorted(entries, key=lambda entry: entry.sequence)
    if sort_key == EntrySortKey.ADDED_DESC:
        return sorted(entries, key=lambda entry: entry.sequence, reverse=True)
    if sort_key == EntrySortKey.DATE_ASC:
        return sorted(entries, key=lambda entry: entry.date)
    if sort_key == EntrySortKey.DATE_DESC:
        return sorted(entries, key=lambda entry: entry.date, reverse=True)
    raise ValueError(f"Unknown sort key: {sort_key!r}")


class JournalService:
    """Service for managing journal entries."""

    def __init__(self, ledger: Ledger):
        """Initialize journal service.

        Args:
            ledger: Ledger instance
        """
        self.ledger = ledger

    def add_entry(
        self,
        date: date,
        debit_lines: Sequence[Posting],
        credit_lines: Sequence[Posting],
        description: str = "",
        require_positive: bool = False,
    ) -> JournalEntry:
        """Record a new journal entry.

        Args:
            date: Entry date
            debit_lines: Debit side
            credit_lines: Credit side
            description: Free text description
            require_positive: Reject entries whose total is zero

        Returns:
            The stored entry

        Raises:
            BalanceError: If the entry does not balance; nothing is stored
            ValidationError: If an amount is negative; nothing is stored
        """
        try:
            validate_balance(debit_lines, credit_lines, require_positive=require_positive)
        except ValidationError as e:
            logger.debug("Rejected new entry: %s", e)
            raise

        with self.ledger.writing():
            entry = JournalEntry(
                id=new_id(),
                sequence=self.ledger.next_sequence(),
                date=date,
                debit_lines=tuple(debit_lines),
                credit_lines=tuple(credit_lines),
                description=description,
            )
            self.ledger.commit(
                entries=self.ledger.entries + (entry,),
                detail=f"added entry {entry.id}",
            )
        return entry

    def replace_entry(
        self,
        entry_id: str,
        date: date,
        debit_lines: Sequence[Posting],
        credit_lines: Sequence[Posting],
        description: str = "",
        require_positive: bool = False,
    ) -> JournalEntry:
        """Replace an entry as a whole, keeping its ID, sequence and position.

        Raises:
            NotFoundError: If no entry has the given ID
            BalanceError: If the new lines do not balance; nothing changes
            ValidationError: If an amount is negative; nothing changes
        """
        with self.ledger.writing():
            entries = list(self.ledger.entries)
            for index, current in enumerate(entries):
                if current.id == entry_id:
                    break
            else:
                raise NotFoundError(entry_not_found(entry_id))

            try:
                validate_balance(debit_lines, credit_lines, require_positive=require_positive)
            except ValidationError as e:
                logger.debug("Rejected edit of entry %s: %s", entry_id, e)
                raise

            entry = JournalEntry(
                id=current.id,
                sequence=current.sequence,
                date=date,
                debit_lines=tuple(debit_lines),
                credit_lines=tuple(credit_lines),
                description=description,
            )
            entries[index] = entry
            self.ledger.commit(entries=entries, detail=f"replaced entry {entry_id}")
        return entry

    def delete_entry(self, entry_id: str) -> None:
        """Delete an entry. Unknown IDs are ignored."""
        self.delete_entries({entry_id})

    def delete_entries(self, entry_ids: Iterable[str]) -> int:
        """Delete several entries in one commit, skipping unknown IDs.

        Returns:
            Number of entries removed
        """
        ids = set(entry_ids)
        with self.ledger.writing():
            entries = self.ledger.entries
            remaining = tuple(entry for entry in entries if entry.id not in ids)
            removed = len(entries) - len(remaining)
            if removed == 0:
                return 0
            self.ledger.commit(entries=remaining, detail=f"deleted {removed} entries")
        return removed

    def get_entry(self, entry_id: str) -> Optional[JournalEntry]:
        """Get entry by ID, or None if not found."""
        for entry in self.ledger.entries:
            if entry.id == entry_id:
                return entry
        return None

    def find_entry(self, prefix: str) -> JournalEntry:
        """Get the entry whose ID is or starts with ``prefix``.

        Raises:
            NotFoundError: If no entry matches
            ValidationError: If the prefix matches several entries
        """
        exact = self.get_entry(prefix)
        if exact is not None:
            return exact
        if len(prefix) < MIN_ID_PREFIX:
            raise ValidationError(f"Entry ID prefix must be at least {MIN_ID_PREFIX} characters")
        matches = [entry for entry in self.ledger.entries if entry.id.startswith(prefix)]
        if not matches:
            raise NotFoundError(entry_not_found(prefix))
        if len(matches) > 1:
            raise ValidationError(f"Entry ID prefix '{prefix}' is ambiguous")
        return matches[0]

    def list_entries(self) -> list[JournalEntry]:
        """List all entries in store order."""
        return list(self.ledger.entries)

    def filter_by_account(self, account_id: str) -> list[JournalEntry]:
        """List entries with a debit or credit line on the account, in store order."""
        return [entry for entry in self.ledger.entries if account_id in entry.account_ids]
