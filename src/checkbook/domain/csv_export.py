"""CSV export of an account's ledger in the re-importable checkbook format."""

from checkbook.database.base import Database
from checkbook.domain.csv_profiles import EXPORT_HEADER
from checkbook.domain.csv_tokenizer import quote_field, render_line
from checkbook.domain.entities import Transaction
from checkbook.domain.errors import NotFoundError, account_not_found


def render_transaction(txn: Transaction) -> str:
    """Render one transaction as an export row."""
    return ",".join(
        [
            txn.date.isoformat(),
            render_line([txn.code], quote_all=False),
            quote_field(txn.description),
            f"{txn.deposit:.2f}",
            f"{txn.withdrawal:.2f}",
            "true" if txn.reconciled else "false",
        ]
    )


class CSVExportService:
    """Service for exporting transactions to CSV."""

    def __init__(self, db: Database):
        self.db = db

    def export_csv(self, account_id: int) -> str:
        """Export an account's transactions, oldest first.

        Returns:
            CSV text with a header line and one line per transaction

        Raises:
            NotFoundError: If account doesn't exist
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        lines = [EXPORT_HEADER]
        lines.extend(
            render_transaction(txn) for txn in self.db.list_transactions(account_id=account_id)
        )
        return "\n".join(lines) + "\n"
