"""Ledger session: the current account and view filters.

Both are remembered between runs through the database's settings store.
"""

import json
import logging
from decimal import Decimal
from typing import Optional

from checkbook.database.base import Database
from checkbook.domain.entities import TransactionFilters
from checkbook.domain.errors import NotFoundError, ValidationError, account_not_found
from checkbook.utils.date_parser import parse_statement_date

logger = logging.getLogger(__name__)

LAST_ACCOUNT_KEY = "last_account_id"
FILTERS_KEY = "filters"


def filters_to_json(filters: TransactionFilters) -> str:
    """Serialize filters for the settings store."""
    return json.dumps(
        {
            "startDate": filters.start_date.isoformat() if filters.start_date else "",
            "endDate": filters.end_date.isoformat() if filters.end_date else "",
            "description": filters.description,
            "reconciled": filters.reconciled,
            "amount": str(filters.amount) if filters.amount is not None else "",
            "sortOrder": filters.sort_order,
        }
    )


def filters_from_json(text: str) -> TransactionFilters:
    """Deserialize stored filters.

    Raises:
        ValueError: If the stored value is not valid
    """
    data = json.loads(text)
    return make_filters(
        start_date=parse_statement_date(data["startDate"]) if data.get("startDate") else None,
        end_date=parse_statement_date(data["endDate"]) if data.get("endDate") else None,
        description=data.get("description", ""),
        reconciled=data.get("reconciled", "all"),
        amount=Decimal(data["amount"]) if data.get("amount") else None,
        sort_order=data.get("sortOrder", "oldest"),
    )


def make_filters(**kwargs) -> TransactionFilters:
    """Build filters, validating the choice fields.

    Raises:
        ValidationError: If ``reconciled`` or ``sort_order`` is not a known choice
    """
    filters = TransactionFilters(**kwargs)
    if filters.reconciled not in TransactionFilters.RECONCILED_CHOICES:
        raise ValidationError(
            f"Invalid reconciled filter '{filters.reconciled}'. "
            f"Must be one of: {', '.join(TransactionFilters.RECONCILED_CHOICES)}"
        )
    if filters.sort_order not in TransactionFilters.SORT_CHOICES:
        raise ValidationError(
            f"Invalid sort order '{filters.sort_order}'. "
            f"Must be one of: {', '.join(TransactionFilters.SORT_CHOICES)}"
        )
    return filters


class LedgerSession:
    """Current account selection and filter settings for one user."""

    def __init__(self, db: Database):
        self.db = db
        self.current_account_id: Optional[int] = None
        self.filters = TransactionFilters()

    def load(self) -> "LedgerSession":
        """Restore the last account and filters from settings.

        Falls back to the first account when the remembered one is gone.
        Unreadable stored filters are discarded.
        """
        self.current_account_id = self._resolve_account()
        if self.current_account_id is not None:
            self.db.set_setting(LAST_ACCOUNT_KEY, str(self.current_account_id))

        stored = self.db.get_setting(FILTERS_KEY)
        if stored:
            try:
                self.filters = filters_from_json(stored)
            except (ValueError, KeyError, ArithmeticError) as e:
                logger.warning("Discarding stored filters: %s", e)
                self.db.delete_setting(FILTERS_KEY)
                self.filters = TransactionFilters()
        return self

    def _resolve_account(self) -> Optional[int]:
        stored = self.db.get_setting(LAST_ACCOUNT_KEY)
        if stored and stored.isdigit() and self.db.get_account(int(stored)) is not None:
            return int(stored)
        accounts = self.db.list_accounts()
        return accounts[0].id if accounts else None

    def select_account(self, account_id: int) -> None:
        """Make an account current and remember it.

        Raises:
            NotFoundError: If account doesn't exist
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        self.current_account_id = account_id
        self.db.set_setting(LAST_ACCOUNT_KEY, str(account_id))

    def forget_account(self) -> None:
        """Clear the current account, e.g. after it was deleted."""
        self.current_account_id = None
        self.db.delete_setting(LAST_ACCOUNT_KEY)

    def set_filters(self, filters: TransactionFilters) -> None:
        """Replace and remember the view filters."""
        self.filters = filters
        self.db.set_setting(FILTERS_KEY, filters_to_json(filters))

    def clear_filters(self) -> None:
        """Reset filters to their defaults and forget the stored ones."""
        self.filters = TransactionFilters()
        self.db.delete_setting(FILTERS_KEY)
