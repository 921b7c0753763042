"""Mapper functions to convert between domain models and SQLAlchemy models."""

from decimal import Decimal

from checkbook.domain import entities as domain
from checkbook.database.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        created_at=orm_account.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        date=orm_transaction.date,
        code=orm_transaction.code or "",
        description=orm_transaction.description or "",
        deposit=Decimal(orm_transaction.deposit or 0),
        withdrawal=Decimal(orm_transaction.withdrawal or 0),
        reconciled=bool(orm_transaction.reconciled),
    )


def apply_transaction(orm_transaction: ORMTransaction, txn: domain.Transaction) -> None:
    """Copy domain Transaction fields onto an existing SQLAlchemy row (id excluded)."""
    orm_transaction.account_id = txn.account_id
    orm_transaction.date = txn.date
    orm_transaction.code = txn.code
    orm_transaction.description = txn.description
    orm_transaction.deposit = txn.deposit
    orm_transaction.withdrawal = txn.withdrawal
    orm_transaction.reconciled = txn.reconciled
