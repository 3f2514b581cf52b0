"""Summary commands."""

import click
from datetime import date
from bookkeep.domain.entities import StatementSection
from bookkeep.domain.summary import SummaryService, display_amount
from bookkeep.utils.date_parser import parse_month

STATEMENT_CHOICES = ["balance-sheet", "income-statement", "all"]


def _format_amount(section: StatementSection, amount: int) -> str:
    shown = display_amount(section.account_type, amount)
    marker = " !" if shown.warning else "  "
    return f"{shown.magnitude:>15,}{marker}"


def _display_statement(title: str, sections: list[StatementSection]) -> None:
    click.echo(f"\n{title}")
    click.echo("=" * 60)
    for section in sections:
        click.echo(f"\n{section.account_type.label}")
        click.echo("-" * 60)
        for row in section.rows:
            click.echo(f"  {row.name:<39} {_format_amount(section, row.amount)}")
        click.echo(f"  {'Total':<39} {_format_amount(section, section.total)}")


@click.command("summary")
@click.option("--month", help="Month to summarize (YYYY-MM)")
@click.option("--this-month", is_flag=True, help="Summarize the current month")
@click.option("--last-month", is_flag=True, help="Summarize the previous month")
@click.option(
    "--statement",
    type=click.Choice(STATEMENT_CHOICES),
    default="all",
    show_default=True,
    help="Which statement to show",
)
@click.pass_context
def summary(ctx, month: str | None, this_month: bool, last_month: bool, statement: str):
    """Show the monthly balance sheet and income statement.

    Amounts are shown without sign; '!' marks an amount whose sign is
    unusual for its account type (for example a negative cash balance).
    Defaults to the current month.
    """
    period_count = sum([month is not None, this_month, last_month])
    if period_count > 1:
        click.echo(
            "Error: Only one of --month, --this-month or --last-month can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if last_month:
        month = "last month"
    elif month is None:
        month = "this month"

    try:
        year, month_number = parse_month(month)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    service = SummaryService(ctx.obj["ledger"])
    monthly = service.monthly_summary(year, month_number)

    period = date(year, month_number, 1).strftime("%Y-%m")
    if statement in ("balance-sheet", "all"):
        _display_statement(f"Balance Sheet {period}", service.balance_sheet(monthly))
    if statement in ("income-statement", "all"):
        _display_statement(f"Income Statement {period}", service.income_statement(monthly))

    if monthly.unresolved:
        click.echo("\nDeleted accounts")
        click.echo("-" * 60)
        for account_id, amount in monthly.unresolved.items():
            click.echo(f"  {account_id[:8]:<39} {amount:>15,}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
