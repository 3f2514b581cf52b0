"""Period summary domain service."""

from datetime import date
from typing import Iterable, Sequence

from bookkeep.domain.entities import (
    Account,
    AccountType,
    BALANCE_SHEET_TYPES,
    DisplayAmount,
    INCOME_STATEMENT_TYPES,
    JournalEntry,
    MonthlySummary,
    StatementSection,
)
from bookkeep.domain.ledger import Ledger
from bookkeep.utils.date_parser import month_range

# Account types whose normal balance is a debit (positive net movement)
DEBIT_NORMAL_TYPES = frozenset(
    {AccountType.ASSET, AccountType.EXPENSE, AccountType.PROFIT_AND_LOSS}
)


def summarize(
    entries: Iterable[JournalEntry],
    accounts: Iterable[Account],
    period_start: date,
    period_end: date,
) -> MonthlySummary:
    """Compute signed per-account totals for ``period_start <= date < period_end``.

    Debit lines add to their account and credit lines subtract. Lines whose
    account is not in ``accounts`` are collected in ``unresolved``.
    """
    accounts_by_id = {acc.id: acc for acc in accounts}
    summary = MonthlySummary(period_start=period_start, period_end=period_end)

    def post(account_id: str, amount: int) -> None:
        account = accounts_by_id.get(account_id)
        if account is None:
            summary.unresolved[account_id] = summary.unresolved.get(account_id, 0) + amount
            return
        per_account = summary.totals.setdefault(account.type, {})
        per_account[account_id] = per_account.get(account_id, 0) + amount
        summary.names[account_id] = account.name

    for entry in entries:
        if not (period_start <= entry.date < period_end):
            continue
        for line in entry.debit_lines:
            post(line.account_id, line.amount)
        for line in entry.credit_lines:
            post(line.account_id, -line.amount)

    return summary


def total_for(summary: MonthlySummary, account_type: AccountType) -> int:
    """Sum of all account totals of one type."""
    return sum(summary.totals.get(account_type, {}).values())


def display_amount(account_type: AccountType, amount: int) -> DisplayAmount:
    """Return the magnitude and whether the sign is unusual for the type."""
    if account_type in DEBIT_NORMAL_TYPES:
        warning = amount < 0
    else:
        warning = amount > 0
    return DisplayAmount(magnitude=abs(amount), warning=warning)


def build_statement(
    summary: MonthlySummary, account_types: Sequence[AccountType]
) -> list[StatementSection]:
    """Build statement sections for the given account types, in that order."""
    return [
        StatementSection(
            account_type=account_type,
            rows=summary.rows(account_type),
            total=total_for(summary, account_type),
        )
        for account_type in account_types
    ]


class SummaryService:
    """Service for building monthly summaries from the ledger."""

    def __init__(self, ledger: Ledger):
        """Initialize summary service.

        Args:
            ledger: Ledger instance
        """
        self.ledger = ledger

    def summary_for_period(self, period_start: date, period_end: date) -> MonthlySummary:
        """Summarize the ledger over ``[period_start, period_end)``."""
        # Read both collections from one snapshot so they are consistent
        snapshot = self.ledger.snapshot()
        return summarize(snapshot.entries, snapshot.accounts, period_start, period_end)

    def monthly_summary(self, year: int, month: int) -> MonthlySummary:
        """Summarize one calendar month."""
        start, end = month_range(year, month)
        return self.summary_for_period(start, end)

    def balance_sheet(self, summary: MonthlySummary) -> list[StatementSection]:
        """Asset, liability and equity sections."""
        return build_statement(summary, BALANCE_SHEET_TYPES)

    def income_statement(self, summary: MonthlySummary) -> list[StatementSection]:
        """Expense, revenue and profit and loss sections."""
        return build_statement(summary, INCOME_STATEMENT_TYPES)
