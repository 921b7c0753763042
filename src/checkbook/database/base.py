"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly; the domain package imports this module
from checkbook.domain.entities import Account, Transaction

COLLECTIONS = ("accounts", "transactions")


class Database(ABC):
    """Abstract record store for checkbook.

    Each call is applied on its own; no atomicity is provided across
    several calls.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts in creation order."""
        pass

    @abstractmethod
    def update_account_name(self, account_id: int, name: str) -> None:
        """Rename an account."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account record. Its transactions are left untouched."""
        pass

    @abstractmethod
    def count_accounts(self) -> int:
        """Count all accounts."""
        pass

    # Transaction operations
    @abstractmethod
    def add_transaction(
        self,
        account_id: int,
        date: date,
        code: str = "",
        description: str = "",
        deposit: Decimal = Decimal("0"),
        withdrawal: Decimal = Decimal("0"),
        reconciled: bool = False,
    ) -> int:
        """Insert a transaction. Returns the assigned transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def put_transaction(self, transaction: Transaction) -> None:
        """Overwrite the stored transaction that has the same ID."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(self, account_id: Optional[int] = None) -> list[Transaction]:
        """List transactions ordered by date then ID, optionally for one account."""
        pass

    @abstractmethod
    def count_transactions(self, account_id: Optional[int] = None) -> int:
        """Count transactions, optionally for one account."""
        pass

    @abstractmethod
    def clear(self, collection: str) -> None:
        """Delete every record in ``accounts`` or ``transactions``."""
        pass

    # Settings operations
    @abstractmethod
    def get_setting(self, key: str) -> Optional[str]:
        """Get a stored setting value."""
        pass

    @abstractmethod
    def set_setting(self, key: str, value: str) -> None:
        """Store a setting value, replacing any existing one."""
        pass

    @abstractmethod
    def delete_setting(self, key: str) -> None:
        """Remove a setting if present."""
        pass
