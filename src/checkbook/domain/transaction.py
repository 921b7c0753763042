"""Transaction domain service."""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from checkbook.database.base import Database
from checkbook.domain.entities import Transaction as TransactionEntity
from checkbook.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    transaction_not_found,
)

logger = logging.getLogger(__name__)


def _check_amount(name: str, value: Decimal) -> None:
    if value < 0:
        raise ValidationError(f"{name.capitalize()} must not be negative")


class TransactionService:
    """Service for managing ledger transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        account_id: int,
        date: date,
        description: str = "",
        code: str = "",
        deposit: Decimal = Decimal("0"),
        withdrawal: Decimal = Decimal("0"),
        reconciled: bool = False,
    ) -> int:
        """Create a transaction.

        Args:
            account_id: Account ID
            date: Transaction date
            description: Payee or memo text
            code: Check number or source tag
            deposit: Amount credited (non-negative)
            withdrawal: Amount debited (non-negative)
            reconciled: Whether the transaction is already cleared

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If account doesn't exist
            ValidationError: If an amount is negative
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        _check_amount("deposit", deposit)
        _check_amount("withdrawal", withdrawal)

        return self.db.add_transaction(
            account_id=account_id,
            date=date,
            code=code,
            description=description,
            deposit=deposit,
            withdrawal=withdrawal,
            reconciled=reconciled,
        )

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> TransactionEntity:
        """Get transaction by ID or raise NotFoundError."""
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_transaction(
        self,
        transaction_id: int,
        date: Optional[date] = None,
        code: Optional[str] = None,
        description: Optional[str] = None,
        deposit: Optional[Decimal] = None,
        withdrawal: Optional[Decimal] = None,
        reconciled: Optional[bool] = None,
    ) -> TransactionEntity:
        """Update the provided transaction fields.

        Returns:
            The updated transaction

        Raises:
            NotFoundError: If transaction doesn't exist
            ValidationError: If an amount is negative
        """
        txn = self.require_transaction(transaction_id)

        changes = {
            "date": date,
            "code": code,
            "description": description,
            "deposit": deposit,
            "withdrawal": withdrawal,
            "reconciled": reconciled,
        }
        changes = {field: value for field, value in changes.items() if value is not None}
        for field in ("deposit", "withdrawal"):
            if field in changes:
                _check_amount(field, changes[field])

        updated = replace(txn, **changes)
        self.db.put_transaction(updated)
        return updated

    def toggle_reconciled(self, transaction_id: int) -> TransactionEntity:
        """Flip the reconciled flag of a transaction.

        Returns:
            The updated transaction
        """
        txn = self.require_transaction(transaction_id)
        return self.update_transaction(transaction_id, reconciled=not txn.reconciled)

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        self.require_transaction(transaction_id)
        self.db.delete_transaction(transaction_id)

    def list_transactions(self, account_id: int) -> list[TransactionEntity]:
        """List an account's transactions ordered by date.

        Raises:
            NotFoundError: If account doesn't exist
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        return self.db.list_transactions(account_id=account_id)

    def find_purgeable(self, account_id: int, cutoff: date) -> list[TransactionEntity]:
        """Return reconciled transactions dated on or before the cutoff."""
        return [
            txn
            for txn in self.list_transactions(account_id)
            if txn.reconciled and txn.date <= cutoff
        ]

    def purge_reconciled(self, account_id: int, cutoff: date) -> int:
        """Delete reconciled transactions dated on or before the cutoff.

        Args:
            account_id: Account to purge
            cutoff: Last date (inclusive) to purge

        Returns:
            Number of transactions deleted
        """
        purgeable = self.find_purgeable(account_id, cutoff)
        for txn in purgeable:
            self.db.delete_transaction(txn.id)
        logger.info(
            "Purged %d reconciled transaction(s) on or before %s from account %d",
            len(purgeable),
            cutoff,
            account_id,
        )
        return len(purgeable)
