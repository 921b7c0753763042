"""Tests for domain entities."""

from dataclasses import FrozenInstanceError, replace
from datetime import date
from decimal import Decimal

import pytest
from conftest import make_record, make_transaction

from checkbook.domain.entities import ImportPlan, TransactionFilters


def test_signed_amount():
    assert make_transaction(1, date(2024, 1, 1), "-12.50").signed_amount == Decimal("-12.50")
    assert make_record(date(2024, 1, 1), "3.00").signed_amount == Decimal("3.00")


def test_match_amount_prefers_deposit():
    txn = make_transaction(1, date(2024, 1, 1), "0")
    both = replace(txn, deposit=Decimal("5"), withdrawal=Decimal("2"))
    assert both.match_amount == Decimal("5")
    assert make_transaction(2, date(2024, 1, 1), "-2").match_amount == Decimal("-2")


def test_entities_are_frozen():
    txn = make_transaction(1, date(2024, 1, 1), "1")
    with pytest.raises(FrozenInstanceError):
        txn.reconciled = True


def test_import_plan_summary():
    records = [make_record(date(2024, 1, 1), "1"), make_record(date(2024, 1, 2), "2")]
    plan = ImportPlan(
        account_id=1,
        format_name="Signed amount",
        to_update=[make_transaction(1, date(2024, 1, 1), "5")],
        to_add=records,
    )
    assert plan.summary == "Reconcile 1 and add 2 new transactions"

    with_skips = ImportPlan(1, "Signed amount", [], [], skipped=["Row 2: bad", "Row 3: bad"])
    assert with_skips.summary == "Reconcile 0 and add 0 new transactions (2 rows skipped)"


def test_default_filters():
    assert TransactionFilters().is_default()
    assert not TransactionFilters(description="rent").is_default()
