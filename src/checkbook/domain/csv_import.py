"""CSV import domain service.

Importing is split in two steps. ``plan`` parses a bank export and matches
it against the account's ledger without touching the store, so the result
can be shown to the user. ``execute`` then writes a confirmed plan.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Optional

from checkbook.database.base import Database
from checkbook.domain.csv_profiles import (
    DEFAULT_REGISTRY,
    ProfileRegistry,
    parse_csv_text,
)
from checkbook.domain.entities import ImportPlan, ImportResult, Transaction
from checkbook.domain.errors import (
    NotFoundError,
    StoreOperationError,
    account_not_found,
)
from checkbook.domain.reconcile import match_transactions

logger = logging.getLogger(__name__)


class CSVImportService:
    """Service for importing and reconciling bank CSV files."""

    def __init__(self, db: Database, registry: ProfileRegistry = DEFAULT_REGISTRY):
        """Initialize CSV import service.

        Args:
            db: Database instance
            registry: Format profiles used to recognize files
        """
        self.db = db
        self.registry = registry

    def plan(
        self,
        raw_text: str,
        account_id: int,
        existing: Optional[Iterable[Transaction]] = None,
    ) -> ImportPlan:
        """Build an import plan without writing anything.

        Args:
            raw_text: Contents of the CSV file
            account_id: Account to import into
            existing: Candidate transactions to reconcile against; defaults to
                every transaction of the account, reconciled or not

        Returns:
            ImportPlan with transactions to mark reconciled and records to add

        Raises:
            NotFoundError: If the account doesn't exist
            EmptyFileError: If the file holds no usable rows
            UnrecognizedFormatError: If the header matches no known format
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        parsed = parse_csv_text(raw_text, account_id, registry=self.registry)

        if existing is None:
            existing = self.db.list_transactions(account_id=account_id)
        result = match_transactions(parsed.records, existing)

        logger.info(
            "Planned import of %d row(s) as '%s': %d to reconcile, %d to add",
            len(parsed.records),
            parsed.profile.name,
            len(result.to_update),
            len(result.to_add),
        )
        return ImportPlan(
            account_id=account_id,
            format_name=parsed.profile.name,
            to_update=result.to_update,
            to_add=result.to_add,
            skipped=parsed.skipped,
        )

    def plan_file(self, csv_file_path: str, account_id: int) -> ImportPlan:
        """Read a CSV file and build an import plan for it.

        Raises:
            FileNotFoundError: If the CSV file doesn't exist
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")
        text = csv_path.read_text(encoding="utf-8-sig")
        return self.plan(text, account_id)

    def execute(
        self, plan: ImportPlan, reconcile_new: bool = False, sync_mode: bool = False
    ) -> ImportResult:
        """Write a confirmed plan to the store.

        In sync mode only the new records are inserted and existing
        transactions are left as they are. Otherwise matched transactions
        are saved as reconciled first, then the new records are inserted,
        marked reconciled when ``reconcile_new`` is set.

        Writes are applied one by one; if one fails, the ones before it stay
        applied.

        Args:
            plan: Plan returned by ``plan``
            reconcile_new: Mark inserted records as reconciled
            sync_mode: Insert new records only

        Returns:
            ImportResult with the number of updated and added transactions

        Raises:
            StoreOperationError: If a store write fails
        """
        to_update = [] if sync_mode else plan.to_update
        to_add = plan.to_add
        if reconcile_new and not sync_mode:
            to_add = [replace(record, reconciled=True) for record in to_add]

        updated = 0
        added = 0
        try:
            for txn in to_update:
                self.db.put_transaction(txn)
                updated += 1
            for record in to_add:
                self.db.add_transaction(
                    account_id=record.account_id,
                    date=record.date,
                    code=record.code,
                    description=record.description,
                    deposit=record.deposit,
                    withdrawal=record.withdrawal,
                    reconciled=record.reconciled,
                )
                added += 1
        except StoreOperationError:
            logger.error(
                "Import stopped after %d update(s) and %d addition(s)", updated, added
            )
            raise
        except ValueError as e:
            logger.error(
                "Import stopped after %d update(s) and %d addition(s)", updated, added
            )
            raise StoreOperationError(str(e)) from e

        logger.info("Import complete: %d updated, %d added", updated, added)
        return ImportResult(updated=updated, added=added)
