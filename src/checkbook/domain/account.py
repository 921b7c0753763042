"""Account domain service."""

import logging
from typing import Optional

from checkbook.database.base import Database
from checkbook.domain.entities import Account as AccountEntity
from checkbook.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
    duplicate_account_name,
)

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, name: str) -> int:
        """Create a new account.

        Args:
            name: Account name

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is blank
            ConflictError: If account name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Please enter an account name.")

        for acc in self.db.list_accounts():
            if acc.name == name:
                raise ConflictError(duplicate_account_name(name))

        return self.db.create_account(name=name)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID or raise NotFoundError."""
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts."""
        return self.db.list_accounts()

    def rename_account(self, account_id: int, name: str) -> None:
        """Rename an account.

        Raises:
            NotFoundError: If account not found
            ConflictError: If another account already uses the name
        """
        self.require_account(account_id)
        name = name.strip()
        if not name:
            raise ValidationError("Please enter an account name.")

        for acc in self.db.list_accounts():
            if acc.id != account_id and acc.name == name:
                raise ConflictError(duplicate_account_name(name))

        self.db.update_account_name(account_id=account_id, name=name)

    def delete_account(self, account_id: int) -> int:
        """Delete an account together with all of its transactions.

        Transactions are removed one at a time before the account record.
        A store failure part way leaves the account and its remaining
        transactions in place.

        Args:
            account_id: Account ID to delete

        Returns:
            Number of transactions deleted

        Raises:
            NotFoundError: If account not found
        """
        self.require_account(account_id)

        transactions = self.db.list_transactions(account_id=account_id)
        for txn in transactions:
            self.db.delete_transaction(txn.id)
        self.db.delete_account(account_id)

        logger.info(
            "Deleted account %d and %d transaction(s)", account_id, len(transactions)
        )
        return len(transactions)
