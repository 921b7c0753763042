"""Bank CSV format profiles and the transaction parser.

Each supported export layout is a ``FormatKind``. A ``Profile`` pairs a kind
with the header signature that identifies it; the row mapping for a kind is
looked up in ``_MAPPERS``. Profiles are tried in registration order and the
first whose signature appears in the file's header line wins.
"""

import enum
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Iterable

from checkbook.domain.csv_tokenizer import split_lines, tokenize_line
from checkbook.domain.entities import ParsedRecord
from checkbook.domain.errors import (
    EmptyFileError,
    MalformedRowError,
    UnrecognizedFormatError,
)
from checkbook.utils.amount_parser import parse_amount_or_zero
from checkbook.utils.date_parser import parse_statement_date

logger = logging.getLogger(__name__)

EXPORT_HEADER = '"Date","Code","Description","Deposit","Withdrawal","Reconciled"'

ZERO = Decimal("0")


class FormatKind(enum.Enum):
    """Supported CSV column layouts."""

    CREDIT_DEBIT = "credit-debit"
    SIGNED_AMOUNT = "signed-amount"
    POSTED_CHECK = "posted-check"
    CHECKBOOK_EXPORT = "checkbook-export"


@dataclass(frozen=True)
class Profile:
    """A named CSV layout identified by a header signature."""

    name: str
    kind: FormatKind
    header_signature: str

    def matches(self, header: str) -> bool:
        return self.header_signature in header

    def parse(self, fields: list[str], account_id: int) -> ParsedRecord:
        """Map tokenized fields to a parsed record.

        Raises:
            MalformedRowError: If the row's date cannot be parsed
        """
        return _MAPPERS[self.kind](_Row(fields), account_id)


class _Row:
    """Positional field access that treats missing columns as empty."""

    def __init__(self, fields: list[str]):
        self.fields = fields

    def __getitem__(self, index: int) -> str:
        if index < len(self.fields):
            return self.fields[index]
        return ""

    def date(self, index: int):
        try:
            return parse_statement_date(self[index])
        except ValueError as e:
            raise MalformedRowError(str(e)) from e

    def amount(self, index: int) -> Decimal:
        return parse_amount_or_zero(self[index])


def _split_signed(amount: Decimal) -> tuple[Decimal, Decimal]:
    """Return (deposit, withdrawal) for a signed amount."""
    if amount > 0:
        return amount, ZERO
    if amount < 0:
        return ZERO, -amount
    return ZERO, ZERO


def _map_credit_debit(row: _Row, account_id: int) -> ParsedRecord:
    return ParsedRecord(
        account_id=account_id,
        date=row.date(1),
        code="",
        description=row[3],
        deposit=row.amount(6),
        withdrawal=abs(row.amount(7)),
    )


def _map_signed_amount(row: _Row, account_id: int) -> ParsedRecord:
    deposit, withdrawal = _split_signed(row.amount(4))
    return ParsedRecord(
        account_id=account_id,
        date=row.date(0),
        code="",
        description=row[1],
        deposit=deposit,
        withdrawal=withdrawal,
    )


def _map_posted_check(row: _Row, account_id: int) -> ParsedRecord:
    return ParsedRecord(
        account_id=account_id,
        date=row.date(0),
        code=row[1],
        description=row[2],
        deposit=row.amount(4),
        withdrawal=abs(row.amount(3)),
    )


def _map_checkbook_export(row: _Row, account_id: int) -> ParsedRecord:
    return ParsedRecord(
        account_id=account_id,
        date=row.date(0),
        code=row[1],
        description=row[2],
        deposit=row.amount(3),
        withdrawal=row.amount(4),
        reconciled=row[5].lower() == "true",
    )


_MAPPERS: dict[FormatKind, Callable[[_Row, int], ParsedRecord]] = {
    FormatKind.CREDIT_DEBIT: _map_credit_debit,
    FormatKind.SIGNED_AMOUNT: _map_signed_amount,
    FormatKind.POSTED_CHECK: _map_posted_check,
    FormatKind.CHECKBOOK_EXPORT: _map_checkbook_export,
}


class ProfileRegistry:
    """Ordered collection of format profiles."""

    def __init__(self, profiles: Iterable[Profile] = ()):
        self._profiles: list[Profile] = []
        for profile in profiles:
            self.register(profile)

    def register(self, profile: Profile) -> None:
        """Append a profile; it is tried after all existing ones.

        Raises:
            ValueError: If a profile with the same name is registered
        """
        if any(p.name == profile.name for p in self._profiles):
            raise ValueError(f"Profile '{profile.name}' is already registered")
        self._profiles.append(profile)

    @property
    def profiles(self) -> list[Profile]:
        return list(self._profiles)

    def detect(self, header: str) -> Profile:
        """Return the first profile whose signature appears in the header.

        Raises:
            UnrecognizedFormatError: If no profile matches
        """
        for profile in self._profiles:
            if profile.matches(header):
                return profile
        raise UnrecognizedFormatError(header)


DEFAULT_REGISTRY = ProfileRegistry(
    [
        Profile(
            name="Credit/Debit columns",
            kind=FormatKind.CREDIT_DEBIT,
            header_signature="Account,Date,Pending?,Description,Category,Check,Credit,Debit",
        ),
        Profile(
            name="Signed amount",
            kind=FormatKind.SIGNED_AMOUNT,
            header_signature="Date,Description,Original Description,Category,Amount,Status",
        ),
        Profile(
            name="Posted date with check number",
            kind=FormatKind.POSTED_CHECK,
            header_signature="Posted Date,Check Number,Description,Debit,Credit",
        ),
        Profile(
            name="Checkbook export",
            kind=FormatKind.CHECKBOOK_EXPORT,
            header_signature=EXPORT_HEADER,
        ),
    ]
)


@dataclass(frozen=True)
class ParseResult:
    """Records parsed from a CSV file plus rows that were skipped."""

    profile: Profile
    records: list[ParsedRecord]
    skipped: list[str]


def parse_csv_text(
    text: str, account_id: int, registry: ProfileRegistry = DEFAULT_REGISTRY
) -> ParseResult:
    """Parse a bank CSV export into records for an account.

    The first non-empty line selects the profile; each following line is
    one record. Rows whose date cannot be read are skipped and reported
    in ``ParseResult.skipped``.

    Args:
        text: Raw CSV text
        account_id: Account the records are imported into
        registry: Profiles to select from

    Returns:
        ParseResult with the selected profile, records, and skipped rows

    Raises:
        EmptyFileError: If there is no data row or no row could be parsed
        UnrecognizedFormatError: If the header matches no profile
    """
    lines = split_lines(text.lstrip("\ufeff"))
    if len(lines) < 2:
        raise EmptyFileError()

    header = lines[0].strip()
    profile = registry.detect(header)
    logger.debug("Detected CSV profile '%s'", profile.name)

    records = []
    skipped = []
    for row_num, line in enumerate(lines[1:], start=2):
        try:
            records.append(profile.parse(tokenize_line(line), account_id))
        except MalformedRowError as e:
            logger.warning("Skipping row %d: %s", row_num, e)
            skipped.append(f"Row {row_num}: {e}")

    if not records:
        raise EmptyFileError()

    return ParseResult(profile=profile, records=records, skipped=skipped)
