"""Domain model entities for checkbook.

These are pure data classes representing business concepts, independent of
database schema. Services return new instances rather than mutating them.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Account:
    """Checkbook account domain entity."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Ledger transaction domain entity."""

    id: int
    account_id: int
    date: date
    code: str
    description: str
    deposit: Decimal
    withdrawal: Decimal
    reconciled: bool

    @property
    def signed_amount(self) -> Decimal:
        """Deposit minus withdrawal."""
        return self.deposit - self.withdrawal

    @property
    def match_amount(self) -> Decimal:
        """Amount used as the reconciliation key.

        A positive deposit wins; otherwise the negated withdrawal is used.
        """
        return self.deposit if self.deposit > 0 else -self.withdrawal


@dataclass(frozen=True)
class ParsedRecord:
    """Transaction parsed from a bank CSV row, not yet stored."""

    account_id: int
    date: date
    code: str
    description: str
    deposit: Decimal
    withdrawal: Decimal
    reconciled: bool = False

    @property
    def signed_amount(self) -> Decimal:
        return self.deposit - self.withdrawal

    @property
    def match_amount(self) -> Decimal:
        return self.deposit if self.deposit > 0 else -self.withdrawal


@dataclass(frozen=True)
class MatchResult:
    """Partition produced by the reconciliation matcher."""

    to_update: list[Transaction]
    to_add: list[ParsedRecord]


@dataclass(frozen=True)
class ImportPlan:
    """Computed, not-yet-committed result of a CSV import."""

    account_id: int
    format_name: str
    to_update: list[Transaction]
    to_add: list[ParsedRecord]
    skipped: list[str] = field(default_factory=list)

    @property
    def summary(self) -> str:
        """Human-readable counts for the confirmation prompt."""
        text = (
            f"Reconcile {len(self.to_update)} and add {len(self.to_add)} "
            f"new transaction{'s' if len(self.to_add) != 1 else ''}"
        )
        if self.skipped:
            text += f" ({len(self.skipped)} row{'s' if len(self.skipped) != 1 else ''} skipped)"
        return text


@dataclass(frozen=True)
class ImportResult:
    """Counts of records written by an executed import plan."""

    updated: int
    added: int


@dataclass(frozen=True)
class LedgerRow:
    """A transaction paired with the running balance after it."""

    transaction: Transaction
    balance: Decimal


@dataclass(frozen=True)
class TransactionFilters:
    """View filters for the ledger register."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: str = ""
    reconciled: str = "all"
    amount: Optional[Decimal] = None
    sort_order: str = "oldest"

    RECONCILED_CHOICES = ("all", "reconciled", "unreconciled")
    SORT_CHOICES = ("oldest", "newest")

    def is_default(self) -> bool:
        return self == TransactionFilters()
