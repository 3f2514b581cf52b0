"""Utility for resolving account names to IDs."""

from bookkeep.domain.account import AccountService
from bookkeep.domain.entities import Account
from bookkeep.domain.journal import MIN_ID_PREFIX


def resolve_account(
    account_service: AccountService,
    account: str,
    active_only: bool = False,
) -> Account:
    """Resolve an account name, ID or ID prefix to an account.

    Args:
        account_service: AccountService instance
        account: Account name, full ID, or a unique ID prefix of at least
            MIN_ID_PREFIX characters (as shown by ``account list``)
        active_only: If True, archived accounts do not match

    Returns:
        Matching account

    Raises:
        ValueError: If no account or more than one account matches
    """
    candidates = (
        account_service.list_active() if active_only else account_service.list_accounts()
    )

    # IDs take precedence over names
    for acc in candidates:
        if acc.id == account:
            return acc

    matches = [acc for acc in candidates if acc.name == account]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        types = ", ".join(acc.type.value for acc in matches)
        raise ValueError(
            f"Account name '{account}' is ambiguous ({types}); use the account ID"
        )

    if len(account) >= MIN_ID_PREFIX:
        matches = [acc for acc in candidates if acc.id.startswith(account)]
        if len(matches) == 1:
            return matches[0]
        if len(matches) > 1:
            raise ValueError(f"Account ID prefix '{account}' is ambiguous")

    if active_only:
        raise ValueError(f"Active account '{account}' not found")
    raise ValueError(f"Account '{account}' not found")
