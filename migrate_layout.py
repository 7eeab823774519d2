#!/usr/bin/env python3
"""
migrate_layout.py

Upgrade a leads tab from the old 8-column layout (no Remarks column) to the
9-column layout the API reads:

    Name | Phone | Next Call Date | Status | Last Called | Remarks | Follow-Ups | Follow-Up Dates | Call Time

The header row and the legacy data block (--source-range, default A2:H) are
read, an empty Remarks cell is inserted at column F of every row, and the
result is written back over A1:I. Use --dry-run to print the rows instead.
"""

import argparse
import json
import logging
import sys
from typing import List

from leadsheet.config import get_settings
from leadsheet.core.constants import FIRST_COLUMN, HEADER_ROWS, LAST_COLUMN, LEGACY_LAST_COLUMN
from leadsheet.core.logging import setup_logging
from leadsheet.models.lead import LEGACY_REMARKS_POSITION, upgrade_legacy_row
from leadsheet.services.google_sheets import GoogleSheetsService, SheetsAPIError, SheetsCredentialsError, a1_range
from leadsheet.services.lead_store import sheet_row

logger = logging.getLogger("leadsheet.migrate_layout")


def upgrade_rows(rows: List[List[str]]) -> List[List[str]]:
    return [upgrade_legacy_row(row) for row in rows]


def upgrade_header(header: List[str]) -> List[str]:
    cells = upgrade_legacy_row(header)
    cells[LEGACY_REMARKS_POSITION] = "Remarks"
    return cells


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Upgrade the leads tab to the 9-column layout")
    parser.add_argument("--source-range", default=f"A{sheet_row(0)}:{LEGACY_LAST_COLUMN}",
                        help="legacy data block, without tab name")
    parser.add_argument("--dry-run", action="store_true", help="print upgraded rows instead of writing")
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)
    tab = settings.LEADS_SHEET_NAME

    try:
        sheets = GoogleSheetsService(settings)
        header = sheets.read_range(a1_range(tab, FIRST_COLUMN, HEADER_ROWS, LEGACY_LAST_COLUMN, HEADER_ROWS))
        rows = sheets.read_range(f"{tab}!{args.source_range}")

        upgraded = [upgrade_header(header[0])] if header else []
        upgraded += upgrade_rows(rows)
        logger.info("Upgraded %d legacy rows", len(rows))

        if args.dry_run:
            json.dump(upgraded, sys.stdout, indent=2)
            sys.stdout.write("\n")
            return 0

        if upgraded:
            first_row = HEADER_ROWS if header else sheet_row(0)
            target = a1_range(tab, FIRST_COLUMN, first_row, LAST_COLUMN, first_row + len(upgraded) - 1)
            sheets.write_range(target, upgraded)
            logger.info("Wrote upgraded rows to %s", target)
        return 0
    except (SheetsCredentialsError, SheetsAPIError, ValueError) as e:
        logger.error("Layout migration failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
