"""Main CLI entry point."""

import logging

import click
from bookkeep.database.factories import create_sqlite_store
from bookkeep.domain.ledger import Ledger

# Import and register all commands at module level
from bookkeep.cli.commands import account, entry, summary


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BOOKKEEP_DB_PATH environment variable)",
    envvar="BOOKKEEP_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Bookkeep - Personal double-entry bookkeeping.

    Keep a chart of accounts, record balanced journal entries and review
    monthly balance sheets and income statements.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)

    # Load the ledger only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_store(database_path=db_path)
        store.connect()
        store.initialize_schema()
        ctx.call_on_close(store.disconnect)

        ledger = Ledger(store)
        ledger.load()
        if ledger.load_error is not None:
            click.echo(
                f"Warning: saved data could not be read ({ledger.load_error}). "
                "Starting from the default accounts.",
                err=True,
            )
        ctx.obj["ledger"] = ledger


# Register all commands
account.register_commands(cli)
entry.register_commands(cli)
summary.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
