"""Construction of the snapshot store used by the CLI."""

import os
from pathlib import Path
from typing import Optional

from bookkeep.database.sqlalchemy_db import SQLAlchemySnapshotStore

DB_PATH_ENV = "BOOKKEEP_DB_PATH"
DEFAULT_DB_DIR = ".bookkeep"
DEFAULT_DB_NAME = "bookkeep.db"


def default_database_path() -> Path:
    """Return ~/.bookkeep/bookkeep.db, creating the directory if needed."""
    db_dir = Path.home() / DEFAULT_DB_DIR
    db_dir.mkdir(exist_ok=True)
    return db_dir / DEFAULT_DB_NAME


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemySnapshotStore:
    """Create the store that holds the ledger snapshot and account order.

    The file is chosen from ``database_path``, then the BOOKKEEP_DB_PATH
    environment variable, then the default under the home directory. The
    ``stored_values`` table is created on first use.
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV) or str(default_database_path())
    return SQLAlchemySnapshotStore(f"sqlite:///{database_path}")
