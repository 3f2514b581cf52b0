"""Account registry domain service."""

import logging
from dataclasses import replace
from typing import Optional, Sequence

from bookkeep.domain.entities import Account, AccountType
from bookkeep.domain.errors import DuplicateAccountError, ValidationError, duplicate_account
from bookkeep.domain.ledger import Ledger, apply_account_order, new_id

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, ledger: Ledger):
        """Initialize account service.

        Args:
            ledger: Ledger instance
        """
        self.ledger = ledger

    def add(self, name: str, type: AccountType, memo: Optional[str] = None) -> Account:
        """Create a new account.

        Args:
            name: Account name
            type: Account type
            memo: Optional memo

        Returns:
            The new account

        Raises:
            ValidationError: If the name is empty
            DuplicateAccountError: If an account with the same name and type
                exists, archived or not
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name must not be empty")

        with self.ledger.writing():
            accounts = self.ledger.accounts
            # Check if account with same name and type exists
            for acc in accounts:
                if acc.name == name and acc.type == type:
                    raise DuplicateAccountError(duplicate_account(name, type.label))

            account = Account(id=new_id(), name=name, type=type, memo=memo or None)
            self.ledger.commit(
                accounts=accounts + (account,),
                detail=f"added account '{name}' ({type.value})",
            )
        return account

    def get_account(self, account_id: str) -> Optional[Account]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        for acc in self.ledger.accounts:
            if acc.id == account_id:
                return acc
        return None

    def find_by_name(self, name: str, type: Optional[AccountType] = None) -> list[Account]:
        """Find accounts with the given name, optionally limited to one type."""
        return [
            acc
            for acc in self.ledger.accounts
            if acc.name == name and (type is None or acc.type == type)
        ]

    def list_accounts(self) -> list[Account]:
        """List all accounts in registry order."""
        return list(self.ledger.accounts)

    def list_active(self) -> list[Account]:
        """List accounts that are not archived, in registry order."""
        return [acc for acc in self.ledger.accounts if acc.is_active]

    def list_archived(self) -> list[Account]:
        """List archived accounts, in registry order."""
        return [acc for acc in self.ledger.accounts if acc.archived]

    def update_memo(self, account_id: str, memo: Optional[str]) -> None:
        """Replace an account memo. Unknown IDs are ignored.

        Args:
            account_id: Account ID
            memo: New memo; empty string or None clears it
        """
        self._update(account_id, f"updated memo of {account_id}", memo=memo or None)

    def archive(self, account_id: str) -> None:
        """Archive an account. Unknown IDs and archived accounts are ignored."""
        self._update(account_id, f"archived {account_id}", archived=True)

    def unarchive(self, account_id: str) -> None:
        """Restore an archived account. Unknown IDs and active accounts are ignored."""
        self._update(account_id, f"unarchived {account_id}", archived=False)

    def delete(self, account_id: str) -> None:
        """Delete an account. Unknown IDs are ignored.

        Journal entries that reference the account are left untouched.
        """
        with self.ledger.writing():
            accounts = self.ledger.accounts
            remaining = tuple(acc for acc in accounts if acc.id != account_id)
            if len(remaining) == len(accounts):
                return
            self.ledger.commit(accounts=remaining, detail=f"deleted account {account_id}")

    def reorder(self, new_order: Sequence[str]) -> None:
        """Reorder accounts.

        Accounts listed in ``new_order`` come first in that order; all other
        accounts follow in their previous relative order. Unknown IDs are
        ignored.
        """
        with self.ledger.writing():
            reordered = apply_account_order(self.ledger.accounts, new_order)
            self.ledger.commit(accounts=reordered, detail="reordered accounts")

    def _update(self, account_id: str, detail: str, **changes) -> None:
        with self.ledger.writing():
            accounts = list(self.ledger.accounts)
            for index, acc in enumerate(accounts):
                if acc.id == account_id:
                    updated = replace(acc, **changes)
                    if updated == acc:
                        return
                    accounts[index] = updated
                    self.ledger.commit(accounts=accounts, detail=detail)
                    return
            logger.debug("Account %s not found, nothing to update", account_id)
