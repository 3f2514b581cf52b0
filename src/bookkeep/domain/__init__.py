"""Domain layer for bookkeep application."""

from bookkeep.domain.ledger import Ledger
from bookkeep.domain.account import AccountService
from bookkeep.domain.journal import JournalService
from bookkeep.domain.summary import SummaryService

__all__ = [
    "Ledger",
    "AccountService",
    "JournalService",
    "SummaryService",
]
