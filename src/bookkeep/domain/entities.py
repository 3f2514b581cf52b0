"""Domain model entities for bookkeep.

These are pure data classes representing bookkeeping concepts, independent of
how a snapshot is stored. Postings reference accounts by id only; names and
types are always resolved against the live chart of accounts.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class AccountType(Enum):
    """Classification of an account in the chart of accounts."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    EXPENSE = "expense"
    REVENUE = "revenue"
    PROFIT_AND_LOSS = "profit_and_loss"

    @property
    def label(self) -> str:
        """Human readable name of the type."""
        return _ACCOUNT_TYPE_LABELS[self]


_ACCOUNT_TYPE_LABELS = {
    AccountType.ASSET: "Assets",
    AccountType.LIABILITY: "Liabilities",
    AccountType.EQUITY: "Equity",
    AccountType.EXPENSE: "Expenses",
    AccountType.REVENUE: "Revenue",
    AccountType.PROFIT_AND_LOSS: "Profit and Loss",
}

BALANCE_SHEET_TYPES = (AccountType.ASSET, AccountType.LIABILITY, AccountType.EQUITY)
INCOME_STATEMENT_TYPES = (
    AccountType.EXPENSE,
    AccountType.REVENUE,
    AccountType.PROFIT_AND_LOSS,
)


class EntrySortKey(Enum):
    """Supported orderings for journal entry listings."""

    ADDED_ASC = "added-asc"
    ADDED_DESC = "added-desc"
    DATE_ASC = "date-asc"
    DATE_DESC = "date-desc"


@dataclass(frozen=True)
class Account:
    """Account in the chart of accounts."""

    id: str
    name: str
    type: AccountType
    memo: Optional[str] = None
    archived: bool = False

    @property
    def is_active(self) -> bool:
        return not self.archived


@dataclass(frozen=True)
class Posting:
    """One debit or credit line of a journal entry."""

    id: str
    account_id: str
    amount: int


@dataclass(frozen=True)
class JournalEntry:
    """Balanced journal entry.

    ``sequence`` records creation order and is independent of ``id``.
    """

    id: str
    sequence: int
    date: date
    debit_lines: tuple[Posting, ...]
    credit_lines: tuple[Posting, ...]
    description: str = ""

    @property
    def debit_total(self) -> int:
        return sum(line.amount for line in self.debit_lines)

    @property
    def credit_total(self) -> int:
        return sum(line.amount for line in self.credit_lines)

    @property
    def account_ids(self) -> set[str]:
        return {line.account_id for line in self.debit_lines + self.credit_lines}


@dataclass(frozen=True)
class Snapshot:
    """Full persisted state: the chart of accounts plus all journal entries."""

    accounts: tuple[Account, ...] = ()
    entries: tuple[JournalEntry, ...] = ()


@dataclass(frozen=True)
class SummaryRow:
    """Net movement of one account within a summary."""

    account_id: str
    name: str
    amount: int


@dataclass(frozen=True)
class DisplayAmount:
    """Presentation form of a signed summary amount."""

    magnitude: int
    warning: bool


@dataclass(frozen=True)
class StatementSection:
    """One account type section of a balance sheet or income statement."""

    account_type: AccountType
    rows: tuple[SummaryRow, ...]
    total: int


@dataclass
class MonthlySummary:
    """Signed per-account totals for a period, grouped by account type.

    Totals are keyed by account id. ``names`` holds the account names that
    were current when the summary was computed. Postings against accounts
    that no longer exist are collected in ``unresolved``.
    """

    period_start: date
    period_end: date
    totals: dict[AccountType, dict[str, int]] = field(default_factory=dict)
    names: dict[str, str] = field(default_factory=dict)
    unresolved: dict[str, int] = field(default_factory=dict)

    def rows(self, account_type: AccountType) -> tuple[SummaryRow, ...]:
        """Return the rows of one account type sorted by account name."""
        labels = self._labels(account_type)
        rows = [
            SummaryRow(account_id=account_id, name=labels[account_id], amount=amount)
            for account_id, amount in self.totals.get(account_type, {}).items()
        ]
        return tuple(sorted(rows, key=lambda row: row.name))

    def by_name(self) -> dict[AccountType, dict[str, int]]:
        """Project the id-keyed totals to account names.

        Distinct accounts sharing a name are never merged; later ones get the
        start of their id appended to the label.
        """
        projected: dict[AccountType, dict[str, int]] = {}
        for account_type, per_account in self.totals.items():
            labels = self._labels(account_type)
            projected[account_type] = {
                labels[account_id]: amount for account_id, amount in per_account.items()
            }
        return projected

    def _labels(self, account_type: AccountType) -> dict[str, str]:
        labels: dict[str, str] = {}
        seen: set[str] = set()
        for account_id in self.totals.get(account_type, {}):
            name = self.names.get(account_id, account_id)
            if name in seen:
                labels[account_id] = f"{name} ({account_id[:8]})"
            else:
                labels[account_id] = name
                seen.add(name)
        return labels
