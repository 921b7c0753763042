"""Reconciliation matcher for imported bank records."""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Iterable

from checkbook.domain.entities import MatchResult, ParsedRecord, Transaction

logger = logging.getLogger(__name__)

AMOUNT_TOLERANCE = Decimal("0.01")
DAY_TOLERANCE = 1


def is_match(record: ParsedRecord, existing: Transaction) -> bool:
    """Check whether an existing transaction matches an imported record.

    Amounts must differ by less than one cent and dates by at most one
    calendar day.
    """
    amount_diff = abs(record.match_amount - existing.match_amount)
    day_diff = abs((record.date - existing.date).days)
    return amount_diff < AMOUNT_TOLERANCE and day_diff <= DAY_TOLERANCE


def match_transactions(
    records: Iterable[ParsedRecord], existing: Iterable[Transaction]
) -> MatchResult:
    """Pair imported records with existing ledger transactions.

    Records are processed in order. Each one takes the first transaction in
    the remaining pool that matches it, and that transaction leaves the pool.
    A matched transaction that is not yet reconciled is returned in
    ``to_update`` as a reconciled copy; one that is already reconciled is
    consumed without being returned. Records with no match go to ``to_add``.

    Neither input collection nor its elements are modified.

    Args:
        records: Parsed CSV records in file order
        existing: All existing transactions for the account, in pool order

    Returns:
        MatchResult with transactions to update and records to add
    """
    pool = list(existing)
    to_update = []
    to_add = []

    for record in records:
        index = next((i for i, txn in enumerate(pool) if is_match(record, txn)), None)
        if index is None:
            to_add.append(record)
            continue

        matched = pool.pop(index)
        if matched.reconciled:
            logger.debug(
                "Record dated %s matched already reconciled transaction %d",
                record.date,
                matched.id,
            )
        else:
            to_update.append(replace(matched, reconciled=True))

    return MatchResult(to_update=to_update, to_add=to_add)
