import json
from unittest.mock import patch

import pytest

import migrate_layout


@pytest.fixture
def mock_sheets(settings):
    with patch("migrate_layout.get_settings", return_value=settings), \
            patch("migrate_layout.setup_logging"), \
            patch("migrate_layout.GoogleSheetsService") as mock_service:
        yield mock_service.return_value


def _legacy_sheet(mock_sheets):
    mock_sheets.read_range.side_effect = [
        [["Name", "Phone", "Next Call Date", "Status", "Last Called", "Follow-Ups", "Follow-Up Dates", "Call Time"]],
        [["Asha", "1", "12 Jan", "Called", "12 Jan", "1", "12 Jan", "14:05"], ["Ravi", "2"]],
    ]


def test_upgrade_header():
    header = migrate_layout.upgrade_header(["Name", "Phone", "Next", "Status", "Last", "FU", "FU Dates", "Time"])
    assert header[5] == "Remarks"
    assert header[6:] == ["FU", "FU Dates", "Time"]


def test_migration_writes_canonical_block(mock_sheets):
    _legacy_sheet(mock_sheets)

    assert migrate_layout.main([]) == 0

    target, rows = mock_sheets.write_range.call_args.args
    assert target == "leads!A1:I3"
    assert rows[0][5] == "Remarks"
    assert rows[1] == ["Asha", "1", "12 Jan", "Called", "12 Jan", "", "1", "12 Jan", "14:05"]
    assert rows[2] == ["Ravi", "2", "", "", "", "", "", "", ""]


def test_migration_dry_run(mock_sheets, capsys):
    _legacy_sheet(mock_sheets)

    assert migrate_layout.main(["--dry-run"]) == 0

    mock_sheets.write_range.assert_not_called()
    printed = json.loads(capsys.readouterr().out)
    assert len(printed) == 3


def test_migration_reports_failure(mock_sheets):
    mock_sheets.read_range.side_effect = migrate_layout.SheetsAPIError("boom")
    assert migrate_layout.main([]) == 1
