"""Tests for CSV export, JSON backup and restore."""

import json
from datetime import date
from decimal import Decimal

import pytest
from checkbook.cli.main import cli
from checkbook.domain.backup import BackupService, backup_filename
from checkbook.domain.csv_export import CSVExportService, render_transaction
from checkbook.domain.csv_profiles import EXPORT_HEADER
from checkbook.domain.errors import NotFoundError, ValidationError
from conftest import make_transaction


class TestCSVExport:
    """Tests for the re-importable CSV export."""

    def test_export_layout(self, temp_db, sample_account, sample_transactions):
        text = CSVExportService(temp_db).export_csv(sample_account.id)
        lines = text.splitlines()

        assert lines[0] == EXPORT_HEADER
        assert lines[1] == '2024-03-01,,"Paycheck",1500.00,0.00,false'
        assert lines[2] == '2024-03-11,1042,"Hardware store",0.00,20.00,false'
        assert lines[3] == '2024-03-15,,"Groceries",0.00,64.37,true'
        assert text.endswith("\n")

    def test_quotes_and_commas_are_escaped(self):
        txn = make_transaction(1, date(2024, 1, 2), "-3.50", description='Joe\'s "Diner", Main St')
        assert render_transaction(txn) == '2024-01-02,,"Joe\'s ""Diner"", Main St",0.00,3.50,false'

    def test_unknown_account(self, temp_db):
        with pytest.raises(NotFoundError):
            CSVExportService(temp_db).export_csv(5)

    def test_export_imports_into_empty_account(
        self, temp_db, account_service, import_service, sample_account, sample_transactions
    ):
        text = CSVExportService(temp_db).export_csv(sample_account.id)
        copy_id = account_service.create_account("Copy")

        plan = import_service.plan(text, copy_id)
        import_service.execute(plan)

        original = temp_db.list_transactions(account_id=sample_account.id)
        copied = temp_db.list_transactions(account_id=copy_id)
        strip = lambda t: (t.date, t.code, t.description, t.deposit, t.withdrawal, t.reconciled)
        assert [strip(t) for t in copied] == [strip(t) for t in original]

    def test_export_reconciles_against_itself(
        self, temp_db, import_service, sample_account, sample_transactions
    ):
        text = CSVExportService(temp_db).export_csv(sample_account.id)
        plan = import_service.plan(text, sample_account.id)
        assert plan.to_add == []
        assert len(plan.to_update) == 2


class TestBackup:
    """Tests for whole-database JSON backup and restore."""

    def test_backup_filename(self):
        assert backup_filename(date(2024, 5, 6)) == "checkbook_backup_2024-05-06.json"

    def test_export_json(self, temp_db, sample_account, sample_transactions):
        data = json.loads(BackupService(temp_db).export_json())

        assert data["accounts"] == [{"id": sample_account.id, "name": "Test Account"}]
        assert len(data["transactions"]) == 3
        groceries = data["transactions"][2]
        assert groceries["accountId"] == sample_account.id
        assert groceries["date"] == "2024-03-15"
        assert Decimal(groceries["withdrawal"]) == Decimal("64.37")
        assert groceries["reconciled"] is True

    def test_restore_remaps_ids(self, temp_db, sample_account, sample_transactions, fixtures_dir):
        text = (fixtures_dir / "backup.json").read_text(encoding="utf-8")

        counts = BackupService(temp_db).restore_json(text)

        assert counts == (2, 3)
        checking, savings = temp_db.list_accounts()
        assert (checking.name, savings.name) == ("Checking", "Savings")
        checking_txns = temp_db.list_transactions(account_id=checking.id)
        assert [t.description for t in checking_txns] == ["Paycheck", "Rent"]
        assert checking_txns[0].reconciled is True
        assert checking_txns[1].withdrawal == Decimal("900")
        (transfer,) = temp_db.list_transactions(account_id=savings.id)
        assert transfer.deposit == Decimal("200.00")
        assert transfer.withdrawal == Decimal("0")
        assert transfer.reconciled is False

    def test_backup_restore_cycle(self, temp_db, sample_account, sample_transactions):
        service = BackupService(temp_db)
        before = temp_db.list_transactions()

        service.restore_json(service.export_json())

        after = temp_db.list_transactions()
        strip = lambda t: (t.date, t.code, t.description, t.deposit, t.withdrawal, t.reconciled)
        assert [strip(t) for t in after] == [strip(t) for t in before]

    @pytest.mark.parametrize(
        "text",
        [
            "not json",
            "[]",
            '{"accounts": []}',
            '{"accounts": [{"id": 1}], "transactions": []}',
            '{"accounts": [{"id": 1, "name": "A"}], "transactions": [{"accountId": 2, "date": "2024-01-01"}]}',
            '{"accounts": [{"id": 1, "name": "A"}], "transactions": [{"accountId": 1, "date": "soon"}]}',
            '{"accounts": [{"id": [1], "name": "A"}], "transactions": []}',
            '{"accounts": [{"id": 1, "name": "A"}], "transactions": [{"accountId": {"id": 1}, "date": "2024-01-01"}]}',
            '{"accounts": [{"id": 1, "name": "A"}, {"id": 1, "name": "B"}], "transactions": []}',
        ],
    )
    def test_invalid_backup_leaves_data(self, temp_db, sample_account, sample_transactions, text):
        with pytest.raises(ValidationError):
            BackupService(temp_db).restore_json(text)
        assert temp_db.count_accounts() == 1
        assert temp_db.count_transactions() == 3

    def test_duplicate_account_names_rejected_before_clearing(self, temp_db, sample_account, sample_transactions):
        text = json.dumps(
            {
                "accounts": [{"id": 1, "name": "Checking"}, {"id": 2, "name": "Checking"}],
                "transactions": [],
            }
        )

        with pytest.raises(ValidationError, match="Duplicate account name 'Checking'"):
            BackupService(temp_db).restore_json(text)

        assert temp_db.count_accounts() == 1
        assert temp_db.count_transactions() == 3


def test_export_command_stdout(cli_runner, temp_db, sample_transactions):
    """Export prints CSV for the current account."""
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "export"])

    assert result.exit_code == 0
    assert result.output.startswith(EXPORT_HEADER)
    assert '"Hardware store"' in result.output


def test_export_command_to_file(cli_runner, temp_db, sample_transactions, tmp_path):
    """Export writes to the given file."""
    out = tmp_path / "ledger.csv"
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "export", "--output", str(out)]
    )

    assert result.exit_code == 0
    assert f"Exported to {out}" in result.output
    assert out.read_text(encoding="utf-8").count("\n") == 4


def test_backup_and_restore_commands(cli_runner, temp_db, sample_transactions, tmp_path):
    """Backup then restore through the CLI."""
    out = tmp_path / "backup.json"
    backup = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "backup", "--output", str(out)]
    )
    assert backup.exit_code == 0
    assert f"Backup written to {out}" in backup.output

    cancelled = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "restore", str(out)], input="n\n"
    )
    assert "Restore cancelled." in cancelled.output

    restored = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "restore", str(out), "--yes"])
    assert restored.exit_code == 0
    assert "Restored 1 account(s) and 3 transaction(s)" in restored.output


def test_restore_command_rejects_bad_file(cli_runner, temp_db, sample_account, tmp_path):
    """An invalid backup exits with an error."""
    bad = tmp_path / "bad.json"
    bad.write_text("{}", encoding="utf-8")

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "restore", str(bad), "-y"])

    assert result.exit_code == 1
    assert "Invalid file format" in result.output


def test_restore_command_rejects_unhashable_ids(cli_runner, temp_db, sample_account, tmp_path):
    """Ids that are not numbers or strings give an error, not a traceback."""
    bad = tmp_path / "bad_ids.json"
    bad.write_text('{"accounts": [{"id": {"x": 1}, "name": "A"}], "transactions": []}', encoding="utf-8")

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "restore", str(bad), "-y"])

    assert result.exit_code == 1
    assert "Invalid account id" in result.output
    temp_db.disconnect()
    assert temp_db.count_accounts() == 1
