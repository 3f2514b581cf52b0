"""Account management commands."""

import click
from bookkeep.cli.account_resolution import resolve_account_or_exit
from bookkeep.cli.error_handling import handle_domain_error
from bookkeep.domain.account import AccountService
from bookkeep.domain.entities import AccountType
from bookkeep.domain.errors import DomainError

ACCOUNT_TYPE_CHOICES = [account_type.value for account_type in AccountType]


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("add")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    required=True,
    type=click.Choice(ACCOUNT_TYPE_CHOICES, case_sensitive=False),
    help="Account type",
)
@click.option("--memo", help="Optional memo")
@click.pass_context
def add_account(ctx, name: str, account_type: str, memo: str | None):
    """Add an account.

    The same name may be used once per account type.

    Examples:
        bookkeep account add "Bank" --type asset
        bookkeep account add "Rent" --type expense --memo "Apartment"
    """
    service = AccountService(ctx.obj["ledger"])

    try:
        account = service.add(name=name, type=AccountType(account_type.lower()), memo=memo)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Added account '{account.name}' ({account.type.label}, ID: {account.id})")


@account_group.command("list")
@click.option("--archived", is_flag=True, help="Show archived accounts instead of active ones")
@click.option("--all", "show_all", is_flag=True, help="Show active and archived accounts")
@click.pass_context
def list_accounts(ctx, archived: bool, show_all: bool):
    """List accounts in display order."""
    service = AccountService(ctx.obj["ledger"])

    if show_all:
        accounts = service.list_accounts()
    elif archived:
        accounts = service.list_archived()
    else:
        accounts = service.list_active()

    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        status = " [archived]" if acc.archived else ""
        memo = f" | {acc.memo}" if acc.memo else ""
        click.echo(f"{acc.id[:8]} | {acc.name:20s} | {acc.type.label:15s}{status}{memo}")


@account_group.command("memo")
@click.argument("account", metavar="ACCOUNT")
@click.argument("memo", metavar="MEMO")
@click.pass_context
def update_memo(ctx, account: str, memo: str) -> None:
    """Set the memo of an account.

    ACCOUNT can be an account name or ID. Pass an empty MEMO to clear it.

    Examples:
        bookkeep account memo "Cash" "Wallet and coin jar"
        bookkeep account memo "Cash" ""
    """
    service = AccountService(ctx.obj["ledger"])
    account_obj = resolve_account_or_exit(ctx, service, account)

    service.update_memo(account_obj.id, memo)
    if memo:
        click.echo(f"Updated memo of '{account_obj.name}'")
    else:
        click.echo(f"Cleared memo of '{account_obj.name}'")


@account_group.command("archive")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def archive_account(ctx, account: str) -> None:
    """Archive an account.

    Archived accounts are hidden from entry forms but keep their history.
    """
    service = AccountService(ctx.obj["ledger"])
    account_obj = resolve_account_or_exit(ctx, service, account)

    service.archive(account_obj.id)
    click.echo(f"Archived account '{account_obj.name}'")


@account_group.command("unarchive")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def unarchive_account(ctx, account: str) -> None:
    """Restore an archived account."""
    service = AccountService(ctx.obj["ledger"])
    account_obj = resolve_account_or_exit(ctx, service, account)

    service.unarchive(account_obj.id)
    click.echo(f"Restored account '{account_obj.name}'")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an archived account.

    ACCOUNT can be an account name or ID. Only archived accounts can be
    deleted. Journal entries that use the account are kept and show it as
    a deleted account.

    Examples:
        bookkeep account archive "Old Bank"
        bookkeep account delete "Old Bank"
    """
    service = AccountService(ctx.obj["ledger"])
    account_obj = resolve_account_or_exit(ctx, service, account)

    if not account_obj.archived:
        click.echo(
            f"Error: Account '{account_obj.name}' must be archived before it can be deleted.",
            err=True,
        )
        ctx.exit(1)

    # Confirm deletion
    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}'?"
    ):
        click.echo("Deletion cancelled.")
        return

    service.delete(account_obj.id)
    click.echo(f"Deleted account '{account_obj.name}'")


@account_group.command("reorder")
@click.argument("accounts", nargs=-1, required=True, metavar="ACCOUNT...")
@click.pass_context
def reorder_accounts(ctx, accounts: tuple[str, ...]) -> None:
    """Move accounts to the front of the display order.

    The given accounts come first in the given order; all other accounts
    follow in their current order.

    Examples:
        bookkeep account reorder "Salary" "Cash"
    """
    service = AccountService(ctx.obj["ledger"])
    account_ids = [resolve_account_or_exit(ctx, service, acc).id for acc in accounts]

    service.reorder(account_ids)
    click.echo("Reordered accounts:")
    for acc in service.list_accounts():
        click.echo(f"  {acc.name} ({acc.type.label})")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
