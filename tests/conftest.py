"""Shared pytest fixtures for bookkeep tests."""

import tempfile
import os
import pytest

from bookkeep.database.factories import create_sqlite_store
from bookkeep.domain.ledger import Ledger
from bookkeep.domain.account import AccountService
from bookkeep.domain.journal import JournalService
from bookkeep.domain.summary import SummaryService


@pytest.fixture
def temp_store():
    """Create a temporary snapshot store for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create store
    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    # Cleanup
    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def ledger(temp_store):
    """Create a Ledger loaded from an empty store (starter accounts only)."""
    ledger = Ledger(temp_store)
    ledger.load()
    return ledger


@pytest.fixture
def account_service(ledger):
    """Create an AccountService over the test ledger."""
    return AccountService(ledger)


@pytest.fixture
def journal_service(ledger):
    """Create a JournalService over the test ledger."""
    return JournalService(ledger)


@pytest.fixture
def summary_service(ledger):
    """Create a SummaryService over the test ledger."""
    return SummaryService(ledger)


@pytest.fixture
def accounts(account_service):
    """Map starter account names to their accounts."""
    return {acc.name: acc for acc in account_service.list_accounts()}


@pytest.fixture
def reload(temp_store):
    """Return a function that loads a fresh Ledger from the test store."""

    def _reload():
        fresh = Ledger(temp_store)
        fresh.load()
        return fresh

    return _reload


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
