"""Journal entry commands."""

import click
from datetime import date
from bookkeep.cli.account_resolution import resolve_account_or_exit
from bookkeep.cli.error_handling import handle_domain_error
from bookkeep.domain.account import AccountService
from bookkeep.domain.entities import EntrySortKey, JournalEntry, Posting
from bookkeep.domain.errors import DomainError
from bookkeep.domain.journal import JournalService, make_posting, sorted_view
from bookkeep.utils.amount_parser import parse_amount
from bookkeep.utils.date_parser import parse_date

SORT_CHOICES = [sort_key.value for sort_key in EntrySortKey]
DELETED_ACCOUNT = "<deleted account>"


def _parse_lines(
    ctx: click.Context, account_service: AccountService, specs: tuple[str, ...], side: str
) -> list[Posting]:
    """Parse ACCOUNT=AMOUNT options into postings against active accounts."""
    lines = []
    for spec in specs:
        account, sep, amount = spec.rpartition("=")
        if not sep or not account.strip():
            click.echo(f"Error: Invalid {side} line '{spec}': expected ACCOUNT=AMOUNT", err=True)
            ctx.exit(1)
        account_obj = resolve_account_or_exit(
            ctx, account_service, account.strip(), active_only=True
        )
        try:
            value = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid {side} amount: {e}", err=True)
            ctx.exit(1)
        lines.append(make_posting(account_obj.id, value))
    return lines


def _parse_entry_date(ctx: click.Context, value: str) -> date:
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def _echo_entry(entry: JournalEntry, names: dict[str, str], verbose: bool) -> None:
    description = entry.description or ""
    click.echo(
        f"{entry.id[:8]} | {entry.date} | {entry.debit_total:>12,} | {description}"
    )
    if verbose:
        for line in entry.debit_lines:
            name = names.get(line.account_id, DELETED_ACCOUNT)
            click.echo(f"    Dr {name:30s} {line.amount:>12,}")
        for line in entry.credit_lines:
            name = names.get(line.account_id, DELETED_ACCOUNT)
            click.echo(f"    Cr {name:30s} {line.amount:>12,}")


@click.group()
def entry_group():
    """Manage journal entries."""
    pass


@entry_group.command("add")
@click.option(
    "--date",
    "entry_date",
    default="today",
    show_default=True,
    help="Entry date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option(
    "--debit",
    "debits",
    multiple=True,
    required=True,
    help="Debit line as ACCOUNT=AMOUNT (repeatable)",
)
@click.option(
    "--credit",
    "credits",
    multiple=True,
    required=True,
    help="Credit line as ACCOUNT=AMOUNT (repeatable)",
)
@click.option("--description", default="", help="Entry description")
@click.pass_context
def add_entry(
    ctx,
    entry_date: str,
    debits: tuple[str, ...],
    credits: tuple[str, ...],
    description: str,
):
    """Record a journal entry.

    Debit and credit totals must match and be greater than zero.

    Examples:
        bookkeep entry add --date 2024-06-15 --debit Cash=1000 --credit Salary=1000
        bookkeep entry add --debit Food=800 --credit Cash=800 --description "Lunch"
    """
    ledger = ctx.obj["ledger"]
    account_service = AccountService(ledger)
    journal_service = JournalService(ledger)

    parsed_date = _parse_entry_date(ctx, entry_date)
    debit_lines = _parse_lines(ctx, account_service, debits, "debit")
    credit_lines = _parse_lines(ctx, account_service, credits, "credit")

    try:
        entry = journal_service.add_entry(
            date=parsed_date,
            debit_lines=debit_lines,
            credit_lines=credit_lines,
            description=description,
            require_positive=True,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Recorded entry {entry.id[:8]}")
    click.echo(f"  Date: {entry.date}")
    click.echo(f"  Total: {entry.debit_total:,}")
    if description:
        click.echo(f"  Description: {description}")


@entry_group.command("edit")
@click.argument("entry_id")
@click.option("--date", "entry_date", help="New entry date (defaults to the current one)")
@click.option(
    "--debit",
    "debits",
    multiple=True,
    required=True,
    help="Debit line as ACCOUNT=AMOUNT (repeatable)",
)
@click.option(
    "--credit",
    "credits",
    multiple=True,
    required=True,
    help="Credit line as ACCOUNT=AMOUNT (repeatable)",
)
@click.option("--description", help="New description (defaults to the current one)")
@click.pass_context
def edit_entry(
    ctx,
    entry_id: str,
    entry_date: str | None,
    debits: tuple[str, ...],
    credits: tuple[str, ...],
    description: str | None,
) -> None:
    """Replace the lines of a journal entry.

    ENTRY_ID can be the full ID or a unique prefix of at least 4 characters.
    All debit and credit lines are replaced.

    Examples:
        bookkeep entry edit 3f2a --debit Cash=1200 --credit Salary=1200
    """
    ledger = ctx.obj["ledger"]
    account_service = AccountService(ledger)
    journal_service = JournalService(ledger)

    try:
        current = journal_service.find_entry(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    parsed_date = current.date if entry_date is None else _parse_entry_date(ctx, entry_date)
    debit_lines = _parse_lines(ctx, account_service, debits, "debit")
    credit_lines = _parse_lines(ctx, account_service, credits, "credit")

    try:
        entry = journal_service.replace_entry(
            current.id,
            date=parsed_date,
            debit_lines=debit_lines,
            credit_lines=credit_lines,
            description=current.description if description is None else description,
            require_positive=True,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Updated entry {entry.id[:8]}")


@entry_group.command("delete")
@click.argument("entry_ids", nargs=-1, required=True, metavar="ENTRY_ID...")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_entries(ctx, entry_ids: tuple[str, ...], yes: bool) -> None:
    """Delete one or more journal entries.

    IDs that match no entry are skipped.

    Examples:
        bookkeep entry delete 3f2a 9b1c
    """
    journal_service = JournalService(ctx.obj["ledger"])

    resolved = set()
    for entry_id in entry_ids:
        try:
            resolved.add(journal_service.find_entry(entry_id).id)
        except DomainError as e:
            click.echo(f"Skipping {entry_id}: {e}", err=True)

    if not resolved:
        click.echo("No matching entries.")
        return

    if not yes and not click.confirm(f"Delete {len(resolved)} entries?"):
        click.echo("Deletion cancelled.")
        return

    removed = journal_service.delete_entries(resolved)
    click.echo(f"Deleted {removed} entr{'y' if removed == 1 else 'ies'}")


@entry_group.command("list")
@click.option("--account", help="Only entries that use this account (name or ID)")
@click.option(
    "--sort",
    "sort_key",
    type=click.Choice(SORT_CHOICES),
    default=EntrySortKey.ADDED_ASC.value,
    show_default=True,
    help="Sort order",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debit and credit lines")
@click.pass_context
def list_entries(ctx, account: str | None, sort_key: str, verbose: bool) -> None:
    """List journal entries."""
    ledger = ctx.obj["ledger"]
    account_service = AccountService(ledger)
    journal_service = JournalService(ledger)

    if account is not None:
        account_obj = resolve_account_or_exit(ctx, account_service, account)
        entries = journal_service.filter_by_account(account_obj.id)
    else:
        entries = journal_service.list_entries()

    if not entries:
        click.echo("No entries found.")
        return

    names = {acc.id: acc.name for acc in account_service.list_accounts()}

    click.echo(f"\n{'ID':8s} | {'Date':10s} | {'Amount':>12s} | Description")
    click.echo("-" * 80)
    for entry in sorted_view(entries, EntrySortKey(sort_key)):
        _echo_entry(entry, names, verbose)


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
