"""Reporting of rejected ledger operations on the command line."""

import logging

import click

from bookkeep.domain.errors import DomainError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Print why the ledger rejected a change and exit with status 1.

    Nothing was saved when this is reached; the ledger only commits after
    validation passes.
    """
    logger.debug("Rejected by ledger: %r", error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
