"""Tests for the reconciliation matcher."""

from datetime import date
from decimal import Decimal

from conftest import make_record, make_transaction

from checkbook.domain.reconcile import is_match, match_transactions


class TestIsMatch:
    """Tests for the single-pair matching rule."""

    def test_same_day_same_amount(self):
        assert is_match(
            make_record(date(2024, 3, 10), "-20.00"),
            make_transaction(1, date(2024, 3, 10), "-20.00"),
        )

    def test_one_day_apart_matches(self):
        record = make_record(date(2024, 3, 10), "-20.00")
        assert is_match(record, make_transaction(1, date(2024, 3, 11), "-20.00"))
        assert is_match(record, make_transaction(2, date(2024, 3, 9), "-20.00"))

    def test_two_days_apart_does_not_match(self):
        record = make_record(date(2024, 3, 10), "-20.00")
        assert not is_match(record, make_transaction(1, date(2024, 3, 12), "-20.00"))

    def test_day_window_crosses_month_boundary(self):
        record = make_record(date(2024, 3, 1), "-20.00")
        assert is_match(record, make_transaction(1, date(2024, 2, 29), "-20.00"))

    def test_sub_cent_difference_matches(self):
        record = make_record(date(2024, 3, 10), "-20.004")
        assert is_match(record, make_transaction(1, date(2024, 3, 10), "-20.00"))

    def test_one_cent_difference_does_not_match(self):
        record = make_record(date(2024, 3, 10), "-20.01")
        assert not is_match(record, make_transaction(1, date(2024, 3, 10), "-20.00"))

    def test_sign_matters(self):
        record = make_record(date(2024, 3, 10), "20.00")
        assert not is_match(record, make_transaction(1, date(2024, 3, 10), "-20.00"))


class TestMatchTransactions:
    """Tests for greedy pairing of records against the ledger."""

    def test_unmatched_record_is_added(self):
        record = make_record(date(2024, 3, 10), "-20.00")
        result = match_transactions([record], [make_transaction(1, date(2024, 3, 12), "-20.00")])
        assert result.to_update == []
        assert result.to_add == [record]

    def test_match_is_returned_reconciled(self):
        existing = make_transaction(1, date(2024, 3, 11), "-20.00")
        result = match_transactions([make_record(date(2024, 3, 10), "-20.00")], [existing])

        assert len(result.to_update) == 1
        assert result.to_update[0].id == 1
        assert result.to_update[0].reconciled is True
        assert result.to_add == []

    def test_first_candidate_in_pool_order_wins(self):
        first = make_transaction(5, date(2024, 3, 11), "-20.00")
        second = make_transaction(2, date(2024, 3, 10), "-20.00")
        result = match_transactions([make_record(date(2024, 3, 10), "-20.00")], [first, second])
        assert [t.id for t in result.to_update] == [5]

    def test_each_transaction_consumed_once(self):
        existing = [make_transaction(1, date(2024, 3, 10), "-20.00")]
        records = [
            make_record(date(2024, 3, 10), "-20.00"),
            make_record(date(2024, 3, 10), "-20.00"),
        ]
        result = match_transactions(records, existing)
        assert len(result.to_update) == 1
        assert result.to_add == [records[1]]

    def test_two_candidates_two_records(self):
        existing = [
            make_transaction(1, date(2024, 3, 10), "-20.00"),
            make_transaction(2, date(2024, 3, 10), "-20.00"),
        ]
        records = [
            make_record(date(2024, 3, 10), "-20.00"),
            make_record(date(2024, 3, 10), "-20.00"),
        ]
        result = match_transactions(records, existing)
        assert [t.id for t in result.to_update] == [1, 2]
        assert result.to_add == []

    def test_reconciled_match_is_consumed_but_not_updated(self):
        existing = [
            make_transaction(1, date(2024, 3, 10), "-20.00", reconciled=True),
            make_transaction(2, date(2024, 3, 10), "-20.00"),
        ]
        result = match_transactions([make_record(date(2024, 3, 10), "-20.00")], existing)
        assert result.to_update == []
        assert result.to_add == []

    def test_inputs_are_not_modified(self):
        existing = [make_transaction(1, date(2024, 3, 10), "-20.00")]
        records = [make_record(date(2024, 3, 10), "-20.00")]
        match_transactions(records, existing)

        assert len(existing) == 1
        assert existing[0].reconciled is False
        assert len(records) == 1

    def test_deposit_matches_deposit(self):
        existing = [make_transaction(1, date(2024, 3, 10), "1500.00")]
        result = match_transactions([make_record(date(2024, 3, 10), "1500.00")], existing)
        assert result.to_update[0].deposit == Decimal("1500.00")

    def test_empty_inputs(self):
        result = match_transactions([], [])
        assert result.to_update == []
        assert result.to_add == []
