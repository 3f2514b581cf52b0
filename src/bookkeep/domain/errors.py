"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class BalanceError(ValidationError):
    """Journal entry whose debit and credit sides do not balance."""

    def __init__(self, debit_total: int, credit_total: int, message: Optional[str] = None):
        self.debit_total = debit_total
        self.credit_total = credit_total
        super().__init__(message or unbalanced_entry(debit_total, credit_total))


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DuplicateAccountError(ConflictError):
    """An account with the same name and type already exists."""


class DecodeError(DomainError):
    """Stored snapshot is corrupt or does not match the expected schema."""


def account_not_found(account_id: str) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def entry_not_found(entry_id: str) -> str:
    """Return message for missing journal entry."""
    return f"Journal entry {entry_id} not found"


def duplicate_account(name: str, type_label: str) -> str:
    """Return message for an account name already used within a type."""
    return f"Account '{name}' already exists in {type_label}"


def unbalanced_entry(debit_total: int, credit_total: int) -> str:
    """Return message for debit and credit totals that differ."""
    return (
        f"Debit total {debit_total:,} does not match credit total {credit_total:,}"
    )


def non_positive_entry(total: int) -> str:
    """Return message for an entry whose balanced total is not positive."""
    return f"Entry total must be greater than zero (got {total:,})"


def negative_amount(amount: int) -> str:
    """Return message for a negative posting amount."""
    return f"Amounts must not be negative (got {amount:,})"
