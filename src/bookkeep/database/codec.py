"""Codec functions to convert between domain entities and stored records.

A snapshot is stored as one JSON document with two fields, ``accounts`` and
``journalEntries``. The account display order is stored separately as a
JSON list of account ids.
"""

import json
from datetime import date
from typing import Any

from bookkeep.domain.entities import (
    Account,
    AccountType,
    JournalEntry,
    Posting,
    Snapshot,
)
from bookkeep.domain.errors import DecodeError


def account_to_record(account: Account) -> dict[str, Any]:
    """Convert domain Account entity to a stored record."""
    return {
        "id": account.id,
        "name": account.name,
        "type": account.type.value,
        "memo": account.memo,
        "isArchived": account.archived,
    }


def posting_to_record(posting: Posting) -> dict[str, Any]:
    """Convert domain Posting entity to a stored record."""
    return {
        "id": posting.id,
        "accountId": posting.account_id,
        "amount": posting.amount,
    }


def entry_to_record(entry: JournalEntry) -> dict[str, Any]:
    """Convert domain JournalEntry entity to a stored record."""
    return {
        "id": entry.id,
        "sequence": entry.sequence,
        "date": entry.date.isoformat(),
        "debitAccounts": [posting_to_record(line) for line in entry.debit_lines],
        "creditAccounts": [posting_to_record(line) for line in entry.credit_lines],
        "description": entry.description,
    }


def snapshot_to_record(snapshot: Snapshot) -> dict[str, Any]:
    """Convert a Snapshot to its stored record."""
    return {
        "accounts": [account_to_record(acc) for acc in snapshot.accounts],
        "journalEntries": [entry_to_record(entry) for entry in snapshot.entries],
    }


def encode_snapshot(snapshot: Snapshot) -> str:
    """Serialize a snapshot to a JSON payload."""
    return json.dumps(snapshot_to_record(snapshot), ensure_ascii=False)


def _require(record: Any, key: str, kind: type, where: str) -> Any:
    if not isinstance(record, dict):
        raise DecodeError(f"{where}: expected an object")
    if key not in record:
        raise DecodeError(f"{where}: missing field '{key}'")
    value = record[key]
    # bool is an int subclass and is never a valid amount
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise DecodeError(f"{where}: field '{key}' has invalid type")
    return value


def account_from_record(record: Any) -> Account:
    """Convert a stored record to a domain Account entity."""
    where = "account"
    raw_type = _require(record, "type", str, where)
    try:
        account_type = AccountType(raw_type)
    except ValueError:
        raise DecodeError(f"{where}: unknown account type '{raw_type}'")
    memo = record.get("memo")
    if memo is not None and not isinstance(memo, str):
        raise DecodeError(f"{where}: field 'memo' has invalid type")
    archived = record.get("isArchived", False)
    if not isinstance(archived, bool):
        raise DecodeError(f"{where}: field 'isArchived' has invalid type")
    return Account(
        id=_require(record, "id", str, where),
        name=_require(record, "name", str, where),
        type=account_type,
        memo=memo,
        archived=archived,
    )


def posting_from_record(record: Any) -> Posting:
    """Convert a stored record to a domain Posting entity."""
    where = "posting"
    return Posting(
        id=_require(record, "id", str, where),
        account_id=_require(record, "accountId", str, where),
        amount=_require(record, "amount", int, where),
    )


def entry_from_record(record: Any, position: int) -> JournalEntry:
    """Convert a stored record to a domain JournalEntry entity.

    Records written before sequences existed are numbered by ``position``.
    """
    where = "journal entry"
    raw_date = _require(record, "date", str, where)
    try:
        entry_date = date.fromisoformat(raw_date)
    except ValueError:
        raise DecodeError(f"{where}: invalid date '{raw_date}'")
    sequence = record.get("sequence", position)
    if isinstance(sequence, bool) or not isinstance(sequence, int):
        raise DecodeError(f"{where}: field 'sequence' has invalid type")
    debit_records = _require(record, "debitAccounts", list, where)
    credit_records = _require(record, "creditAccounts", list, where)
    description = record.get("description", "")
    if not isinstance(description, str):
        raise DecodeError(f"{where}: field 'description' has invalid type")
    return JournalEntry(
        id=_require(record, "id", str, where),
        sequence=sequence,
        date=entry_date,
        debit_lines=tuple(posting_from_record(line) for line in debit_records),
        credit_lines=tuple(posting_from_record(line) for line in credit_records),
        description=description,
    )


def snapshot_from_record(record: Any) -> Snapshot:
    """Convert a stored record to a Snapshot."""
    account_records = _require(record, "accounts", list, "snapshot")
    entry_records = _require(record, "journalEntries", list, "snapshot")
    return Snapshot(
        accounts=tuple(account_from_record(acc) for acc in account_records),
        entries=tuple(
            entry_from_record(entry, position)
            for position, entry in enumerate(entry_records)
        ),
    )


def decode_snapshot(payload: str) -> Snapshot:
    """Deserialize a JSON payload into a Snapshot.

    Raises:
        DecodeError: If the payload is not valid JSON or does not match the schema
    """
    try:
        record = json.loads(payload)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Snapshot is not valid JSON: {e}")
    return snapshot_from_record(record)


def encode_account_order(account_ids: list[str]) -> str:
    """Serialize the account display order."""
    return json.dumps(list(account_ids))


def decode_account_order(payload: str) -> list[str]:
    """Deserialize the account display order.

    Raises:
        DecodeError: If the payload is not a JSON list of strings
    """
    try:
        order = json.loads(payload)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Account order is not valid JSON: {e}")
    if not isinstance(order, list) or not all(isinstance(item, str) for item in order):
        raise DecodeError("Account order must be a list of account ids")
    return order
