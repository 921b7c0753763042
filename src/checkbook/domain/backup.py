"""Whole-database JSON backup and restore."""

import json
import logging
from datetime import date
from typing import Any

from checkbook.database.base import Database
from checkbook.domain.errors import ValidationError
from checkbook.utils.amount_parser import parse_amount_or_zero
from checkbook.utils.date_parser import parse_statement_date

logger = logging.getLogger(__name__)


def _is_record_id(value: Any) -> bool:
    """Ids in a backup are JSON numbers or strings."""
    return isinstance(value, (int, str)) and not isinstance(value, bool)


def backup_filename(today: date) -> str:
    """Return the default backup file name for a given day."""
    return f"checkbook_backup_{today.isoformat()}.json"


class BackupService:
    """Service for exporting and restoring all accounts and transactions."""

    def __init__(self, db: Database):
        self.db = db

    def export_json(self) -> str:
        """Serialize every account and transaction.

        Returns:
            JSON document with ``accounts`` and ``transactions`` lists
        """
        accounts = [{"id": acc.id, "name": acc.name} for acc in self.db.list_accounts()]
        transactions = [
            {
                "id": txn.id,
                "accountId": txn.account_id,
                "date": txn.date.isoformat(),
                "code": txn.code,
                "description": txn.description,
                "deposit": str(txn.deposit),
                "withdrawal": str(txn.withdrawal),
                "reconciled": txn.reconciled,
            }
            for txn in self.db.list_transactions()
        ]
        return json.dumps({"accounts": accounts, "transactions": transactions}, indent=2)

    def restore_json(self, text: str) -> tuple[int, int]:
        """Replace all data with the contents of a backup.

        The document is validated completely before anything is cleared.
        Records get new IDs; transaction account references are remapped
        to the new account IDs.

        Args:
            text: JSON document produced by ``export_json``

        Returns:
            Tuple of (accounts restored, transactions restored)

        Raises:
            ValidationError: If the document is not a valid backup
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid file format: {e}") from e
        if (
            not isinstance(data, dict)
            or not isinstance(data.get("accounts"), list)
            or not isinstance(data.get("transactions"), list)
        ):
            raise ValidationError("Invalid file format")

        accounts = [self._read_account(raw) for raw in data["accounts"]]
        known_ids = set()
        names = set()
        for old_id, name in accounts:
            if old_id in known_ids:
                raise ValidationError(f"Duplicate account id {old_id!r}")
            if name in names:
                raise ValidationError(f"Duplicate account name '{name}'")
            known_ids.add(old_id)
            names.add(name)
        transactions = [self._read_transaction(raw, known_ids) for raw in data["transactions"]]

        self.db.clear("transactions")
        self.db.clear("accounts")

        id_map = {}
        for old_id, name in accounts:
            id_map[old_id] = self.db.create_account(name=name)
        for fields in transactions:
            fields["account_id"] = id_map[fields["account_id"]]
            self.db.add_transaction(**fields)

        logger.info(
            "Restored %d account(s) and %d transaction(s)", len(accounts), len(transactions)
        )
        return len(accounts), len(transactions)

    @staticmethod
    def _read_account(raw: Any) -> tuple[Any, str]:
        if not isinstance(raw, dict) or "id" not in raw or not raw.get("name"):
            raise ValidationError(f"Invalid account record: {raw!r}")
        if not _is_record_id(raw["id"]):
            raise ValidationError(f"Invalid account id: {raw['id']!r}")
        return raw["id"], str(raw["name"])

    @staticmethod
    def _read_transaction(raw: Any, known_ids: set) -> dict[str, Any]:
        if not isinstance(raw, dict):
            raise ValidationError(f"Invalid transaction record: {raw!r}")
        account_id = raw.get("accountId")
        if not _is_record_id(account_id) or account_id not in known_ids:
            raise ValidationError(
                f"Transaction references unknown account {account_id!r}"
            )
        try:
            txn_date = parse_statement_date(str(raw.get("date", "")))
        except ValueError as e:
            raise ValidationError(f"Invalid transaction record: {e}") from e

        reconciled = raw.get("reconciled", False)
        if isinstance(reconciled, str):
            reconciled = reconciled.lower() == "true"

        return {
            "account_id": raw["accountId"],
            "date": txn_date,
            "code": str(raw.get("code") or ""),
            "description": str(raw.get("description") or ""),
            "deposit": abs(parse_amount_or_zero(str(raw.get("deposit", "")))),
            "withdrawal": abs(parse_amount_or_zero(str(raw.get("withdrawal", "")))),
            "reconciled": bool(reconciled),
        }
