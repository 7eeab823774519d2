import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from leadsheet.config import Settings
from leadsheet.core.constants import FIRST_COLUMN, HEADER_ROWS, LAST_COLUMN
from leadsheet.models.lead import COLUMNS, column_letter, column_position
from leadsheet.services.google_sheets import GoogleSheetsService, a1_range

logger = logging.getLogger(__name__)


class RowNotFoundError(Exception):
    """Raised when a lead index points at an empty or missing row."""


def sheet_row(index: int) -> int:
    """1-based sheet row number of the data row at ``index``."""
    if index < 0:
        raise RowNotFoundError(f"No lead at index {index}")
    return index + HEADER_ROWS + 1


class LeadStore(ABC):
    """Row storage for leads, addressed by zero-based data row index."""

    @abstractmethod
    async def read_rows(self) -> List[List[str]]:
        ...

    @abstractmethod
    async def read_row(self, index: int) -> List[str]:
        ...

    @abstractmethod
    async def write_row(self, index: int, first_column: str, values: Sequence[str]) -> None:
        """Overwrite ``len(values)`` cells of a row starting at ``first_column``."""

    async def is_healthy(self) -> bool:
        return True


class SheetsLeadStore(LeadStore):
    def __init__(self, settings: Settings, sheets: Optional[GoogleSheetsService] = None):
        self.sheet_name = settings.LEADS_SHEET_NAME
        self.sheets = sheets if sheets is not None else GoogleSheetsService(settings)

    async def read_rows(self) -> List[List[str]]:
        range_spec = a1_range(self.sheet_name, FIRST_COLUMN, sheet_row(0), LAST_COLUMN)
        return await asyncio.to_thread(self.sheets.read_range, range_spec)

    async def read_row(self, index: int) -> List[str]:
        row_number = sheet_row(index)
        range_spec = a1_range(self.sheet_name, FIRST_COLUMN, row_number, LAST_COLUMN, row_number)
        rows = await asyncio.to_thread(self.sheets.read_range, range_spec)
        if not rows:
            raise RowNotFoundError(f"No lead at index {index} (sheet row {row_number})")
        return rows[0]

    async def write_row(self, index: int, first_column: str, values: Sequence[str]) -> None:
        row_number = sheet_row(index)
        last_column = column_letter(column_position(first_column) + len(values) - 1)
        range_spec = a1_range(self.sheet_name, first_column, row_number, last_column, row_number)
        await asyncio.to_thread(self.sheets.write_range, range_spec, [list(values)])
        logger.info("Updated lead %s at %s", index, range_spec)

    async def is_healthy(self) -> bool:
        return await asyncio.to_thread(self.sheets.is_healthy)


class InMemoryLeadStore(LeadStore):
    """Keeps rows in a list; used by the tests and for running without Google."""

    def __init__(self, rows: Optional[List[List[str]]] = None):
        self.rows = [list(row) for row in rows or []]

    async def read_rows(self) -> List[List[str]]:
        return [list(row) for row in self.rows]

    async def read_row(self, index: int) -> List[str]:
        if index < 0 or index >= len(self.rows) or not any(self.rows[index]):
            raise RowNotFoundError(f"No lead at index {index}")
        return list(self.rows[index])

    async def write_row(self, index: int, first_column: str, values: Sequence[str]) -> None:
        sheet_row(index)
        start = column_position(first_column)
        end = start + len(values)
        if end > len(COLUMNS):
            raise ValueError(f"Write of {len(values)} cells from {first_column} overflows the row")
        while len(self.rows) <= index:
            self.rows.append([])
        row = self.rows[index]
        row.extend([""] * (end - len(row)))
        row[start:end] = list(values)
