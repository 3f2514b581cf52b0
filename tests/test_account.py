"""Tests for the account registry and account commands."""

import pytest
from bookkeep.cli.main import cli
from bookkeep.domain.account import AccountService
from bookkeep.domain.entities import Account, AccountType
from bookkeep.domain.errors import DuplicateAccountError, ValidationError
from bookkeep.domain.ledger import Ledger
from bookkeep.utils.account_resolver import resolve_account


def test_starter_accounts_one_per_type(account_service):
    """Test that an empty store starts with one account of each type."""
    accounts = account_service.list_accounts()

    assert len(accounts) == 6
    assert {acc.type for acc in accounts} == set(AccountType)
    assert all(acc.is_active for acc in accounts)


def test_add_account(account_service):
    """Test adding an account appends it as active."""
    account = account_service.add("Bank", AccountType.ASSET, memo="Checking")

    assert account.name == "Bank"
    assert account.memo == "Checking"
    assert account.archived is False
    assert account_service.list_accounts()[-1] == account


def test_add_account_strips_name(account_service):
    account = account_service.add("  Rent  ", AccountType.EXPENSE)
    assert account.name == "Rent"


def test_add_account_empty_name(account_service):
    with pytest.raises(ValidationError):
        account_service.add("   ", AccountType.ASSET)


def test_add_duplicate_account_rejected(account_service):
    """Test that the same name and type cannot be added twice."""
    before = account_service.list_accounts()

    with pytest.raises(DuplicateAccountError):
        account_service.add("Cash", AccountType.ASSET)

    assert account_service.list_accounts() == before


def test_add_duplicate_of_archived_account_rejected(account_service, accounts):
    """Test that archived accounts still count for uniqueness."""
    account_service.archive(accounts["Cash"].id)

    with pytest.raises(DuplicateAccountError):
        account_service.add("Cash", AccountType.ASSET)


def test_same_name_different_type_allowed(account_service):
    account = account_service.add("Cash", AccountType.EXPENSE)
    assert len(account_service.find_by_name("Cash")) == 2
    assert account_service.find_by_name("Cash", AccountType.EXPENSE) == [account]


def test_update_memo(account_service, accounts):
    account_service.update_memo(accounts["Cash"].id, "Wallet")
    assert account_service.get_account(accounts["Cash"].id).memo == "Wallet"

    account_service.update_memo(accounts["Cash"].id, "")
    assert account_service.get_account(accounts["Cash"].id).memo is None


def test_update_memo_unknown_id_is_noop(account_service):
    before = account_service.list_accounts()
    account_service.update_memo("missing", "Memo")
    assert account_service.list_accounts() == before


def test_archive_and_unarchive(account_service, accounts):
    """Test archiving moves an account between active and archived lists."""
    food = accounts["Food"]

    account_service.archive(food.id)
    assert food.id not in [acc.id for acc in account_service.list_active()]
    assert [acc.id for acc in account_service.list_archived()] == [food.id]

    account_service.unarchive(food.id)
    assert food.id in [acc.id for acc in account_service.list_active()]
    assert account_service.list_archived() == []


def test_archive_is_idempotent(account_service, accounts):
    account_service.archive(accounts["Food"].id)
    once = account_service.list_accounts()

    account_service.archive(accounts["Food"].id)
    assert account_service.list_accounts() == once


def test_unarchive_active_account_is_noop(account_service, accounts):
    before = account_service.list_accounts()
    account_service.unarchive(accounts["Food"].id)
    assert account_service.list_accounts() == before


def test_archive_unknown_id_is_noop(account_service):
    before = account_service.list_accounts()
    account_service.archive("missing")
    account_service.unarchive("missing")
    assert account_service.list_accounts() == before


def test_delete_account_keeps_entries(account_service, journal_service, accounts):
    """Test that deleting an account leaves entries that use it untouched."""
    from datetime import date
    from bookkeep.domain.journal import make_posting

    entry = journal_service.add_entry(
        date(2024, 6, 1),
        [make_posting(accounts["Food"].id, 500)],
        [make_posting(accounts["Cash"].id, 500)],
    )

    account_service.archive(accounts["Food"].id)
    account_service.delete(accounts["Food"].id)

    assert account_service.get_account(accounts["Food"].id) is None
    assert journal_service.get_entry(entry.id) == entry


def test_delete_unknown_account_is_noop(account_service):
    before = account_service.list_accounts()
    account_service.delete("missing")
    assert account_service.list_accounts() == before


def test_reorder_is_stable(account_service):
    """Test reorder puts listed accounts first and keeps the rest in order."""
    ids = [acc.id for acc in account_service.list_accounts()]
    a, b, c, d = ids[:4]

    account_service.reorder([c, a])

    assert [acc.id for acc in account_service.list_accounts()] == [c, a, b, d] + ids[4:]


def test_reorder_ignores_unknown_and_repeated_ids(account_service):
    ids = [acc.id for acc in account_service.list_accounts()]

    account_service.reorder(["missing", ids[2], ids[2]])

    assert [acc.id for acc in account_service.list_accounts()] == [ids[2]] + ids[:2] + ids[3:]


def test_account_changes_are_saved(account_service, accounts, reload):
    """Test that every registry mutation is persisted."""
    bank = account_service.add("Bank", AccountType.ASSET)
    account_service.update_memo(bank.id, "Main account")
    account_service.archive(accounts["Food"].id)
    account_service.reorder([bank.id])

    fresh = reload()

    assert [acc.id for acc in fresh.accounts][0] == bank.id
    assert fresh.accounts[0].memo == "Main account"
    restored_food = next(acc for acc in fresh.accounts if acc.id == accounts["Food"].id)
    assert restored_food.archived is True


# CLI


def test_account_add_command(cli_runner, temp_store):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_store.database_path, "account", "add", "Bank", "--type", "asset"]
    )

    assert result.exit_code == 0
    assert "Added account 'Bank'" in result.output


def test_account_add_duplicate_command(cli_runner, temp_store):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_store.database_path, "account", "add", "Cash", "--type", "asset"]
    )

    assert result.exit_code == 1
    assert "already exists" in result.output.lower()


def test_account_list_command(cli_runner, temp_store):
    result = cli_runner.invoke(cli, ["--db-path", temp_store.database_path, "account", "list"])

    assert result.exit_code == 0
    assert "Cash" in result.output
    assert "Profit and Loss" in result.output


def test_account_archive_then_list_archived(cli_runner, temp_store):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_store.database_path, "account", "archive", "Food"]
    )
    assert result.exit_code == 0

    result = cli_runner.invoke(
        cli, ["--db-path", temp_store.database_path, "account", "list", "--archived"]
    )
    assert result.exit_code == 0
    assert "Food" in result.output
    assert "Cash" not in result.output


def test_account_delete_requires_archive(cli_runner, temp_store):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_store.database_path, "account", "delete", "Food", "--yes"]
    )

    assert result.exit_code == 1
    assert "must be archived" in result.output


def test_account_delete_archived(cli_runner, temp_store, reload):
    cli_runner.invoke(cli, ["--db-path", temp_store.database_path, "account", "archive", "Food"])

    result = cli_runner.invoke(
        cli, ["--db-path", temp_store.database_path, "account", "delete", "Food", "--yes"]
    )

    assert result.exit_code == 0
    assert "Deleted account 'Food'" in result.output
    assert "Food" not in [acc.name for acc in reload().accounts]


def test_account_memo_command(cli_runner, temp_store, reload):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_store.database_path, "account", "memo", "Cash", "Wallet"]
    )

    assert result.exit_code == 0
    cash = next(acc for acc in reload().accounts if acc.name == "Cash")
    assert cash.memo == "Wallet"


def test_account_reorder_command(cli_runner, temp_store, reload):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_store.database_path, "account", "reorder", "Salary", "Food"]
    )

    assert result.exit_code == 0
    names = [acc.name for acc in reload().accounts]
    assert names[:2] == ["Salary", "Food"]
    assert names[2:] == ["Cash", "Student Loan", "Net Assets", "Profit and Loss"]


def test_account_unknown_name(cli_runner, temp_store):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_store.database_path, "account", "archive", "Nope"]
    )

    assert result.exit_code == 1
    assert "not found" in result.output


def _prefix_service():
    ledger = Ledger()
    ledger.commit(
        accounts=[
            Account(id="abcd1111", name="Bank", type=AccountType.ASSET),
            Account(id="abcd2222", name="Bank", type=AccountType.LIABILITY),
            Account(id="ef013333", name="Rent", type=AccountType.EXPENSE, archived=True),
        ]
    )
    return AccountService(ledger)


def test_resolve_account_by_id_prefix():
    service = _prefix_service()

    assert resolve_account(service, "abcd1").type == AccountType.ASSET
    assert resolve_account(service, "ef01").name == "Rent"


def test_resolve_account_ambiguous_id_prefix():
    service = _prefix_service()

    with pytest.raises(ValueError, match="ambiguous"):
        resolve_account(service, "abcd")


def test_resolve_account_short_prefix_not_found():
    service = _prefix_service()

    with pytest.raises(ValueError, match="not found"):
        resolve_account(service, "abc")


def test_resolve_account_prefix_respects_active_only():
    service = _prefix_service()

    with pytest.raises(ValueError, match="Active account 'ef01' not found"):
        resolve_account(service, "ef01", active_only=True)


def test_account_same_name_pair_resolved_by_listed_id(cli_runner, temp_store, reload):
    db = ["--db-path", temp_store.database_path]
    added = cli_runner.invoke(cli, db + ["account", "add", "Cash", "--type", "expense"])
    assert added.exit_code == 0

    ambiguous = cli_runner.invoke(cli, db + ["account", "archive", "Cash"])
    assert ambiguous.exit_code == 1
    assert "ambiguous" in ambiguous.output

    expense_cash = next(
        acc for acc in reload().accounts if acc.name == "Cash" and acc.type == AccountType.EXPENSE
    )
    listing = cli_runner.invoke(cli, db + ["account", "list"])
    assert expense_cash.id[:8] in listing.output

    result = cli_runner.invoke(cli, db + ["account", "archive", expense_cash.id[:8]])

    assert result.exit_code == 0
    archived = {(acc.name, acc.type): acc.archived for acc in reload().accounts}
    assert archived[("Cash", AccountType.EXPENSE)] is True
    assert archived[("Cash", AccountType.ASSET)] is False
