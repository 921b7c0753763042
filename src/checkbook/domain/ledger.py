"""Ledger register: filtering and running balances."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from checkbook.domain.entities import LedgerRow, Transaction, TransactionFilters


@dataclass(frozen=True)
class Register:
    """Filtered transactions in display order with their balances."""

    rows: list[LedgerRow]
    balance: Decimal


def matches_filters(txn: Transaction, filters: TransactionFilters) -> bool:
    """Check a transaction against the view filters."""
    if filters.start_date and txn.date < filters.start_date:
        return False
    if filters.end_date and txn.date > filters.end_date:
        return False
    if filters.description and filters.description.lower() not in txn.description.lower():
        return False
    if filters.reconciled != "all":
        if txn.reconciled != (filters.reconciled == "reconciled"):
            return False
    if filters.amount is not None:
        if filters.amount not in (txn.deposit, txn.withdrawal):
            return False
    return True


def running_balances(transactions: Iterable[Transaction]) -> list[LedgerRow]:
    """Pair transactions with their cumulative balance.

    Transactions are sorted ascending by date (ties keep their given order)
    and each signed amount is added to the previous balance.
    """
    balance = Decimal("0")
    rows = []
    for txn in sorted(transactions, key=lambda t: t.date):
        balance += txn.signed_amount
        rows.append(LedgerRow(transaction=txn, balance=balance))
    return rows


def build_register(
    transactions: Iterable[Transaction], filters: TransactionFilters = TransactionFilters()
) -> Register:
    """Filter transactions, compute balances, and order rows for display.

    Balances always accumulate oldest first; ``filters.sort_order`` only
    changes the order rows are returned in.
    """
    rows = running_balances(t for t in transactions if matches_filters(t, filters))
    final_balance = rows[-1].balance if rows else Decimal("0")
    if filters.sort_order == "newest":
        rows = sorted(rows, key=lambda r: r.transaction.date, reverse=True)
    return Register(rows=rows, balance=final_balance)
