import logging
from typing import List, Sequence

from pydantic import BaseModel, Field

from leadsheet.core.constants import FIRST_COLUMN, LAST_COLUMN

logger = logging.getLogger(__name__)

# Canonical layout, one entry per column starting at A.
COLUMNS = [
    "name",             # A  Name
    "phone",            # B  Phone
    "next_call_date",   # C  Next Call Date
    "status",           # D  Status
    "last_called",      # E  Last Called
    "remarks",          # F  Remarks
    "follow_ups",       # G  Follow-Ups
    "follow_up_dates",  # H  Follow-Up Dates
    "call_time",        # I  Call Time
]

# The older sheets have no Remarks column; F is inserted when upgrading.
LEGACY_REMARKS_POSITION = COLUMNS.index("remarks")
LEGACY_WIDTH = len(COLUMNS) - 1


class Lead(BaseModel):
    """A lead as stored in one row of the leads tab."""
    index: int = Field(..., description="Zero-based position among the data rows")
    name: str = Field("", description="Lead's name")
    phone: str = Field("", description="Lead's phone number")
    next_call_date: str = Field("", alias="nextCallDate", description="Date label of the next planned call")
    status: str = Field("", description="Current lead status")
    last_called: str = Field("", alias="lastCalled", description="Date label of the last call")
    remarks: str = Field("", description="Dated remarks separated by |")
    follow_ups: int = Field(0, alias="followUps", description="Number of follow-up dates")
    follow_up_dates: str = Field("", alias="followUpDates", description="Comma separated follow-up date labels")
    call_time: str = Field("", alias="callTime", description="Time label of the last call")

    class Config:
        populate_by_name = True


def column_letter(position: int) -> str:
    return chr(ord(FIRST_COLUMN) + position)


def column_position(letter: str) -> int:
    position = ord(letter.upper()) - ord(FIRST_COLUMN)
    if not 0 <= position < len(COLUMNS):
        raise ValueError(f"Column {letter} is outside the leads layout")
    return position


def column_of(field: str) -> str:
    """Column letter holding a Lead field, e.g. ``status`` -> ``D``."""
    return column_letter(COLUMNS.index(field))


def _parse_count(value: str) -> int:
    try:
        return int(str(value).strip() or 0)
    except ValueError:
        logger.warning("Non-numeric follow-up count %r treated as 0", value)
        return 0


def to_lead(row: Sequence[str], index: int) -> Lead:
    """Map a raw sheet row onto a Lead; missing trailing cells become empty."""
    cells = list(row) + [""] * (len(COLUMNS) - len(row))
    data = {field: (cells[pos] if cells[pos] is not None else "") for pos, field in enumerate(COLUMNS)}
    data["follow_ups"] = _parse_count(data["follow_ups"])
    return Lead(index=index, **data)


def to_row(lead: Lead, first_column: str = FIRST_COLUMN, last_column: str = LAST_COLUMN) -> List[str]:
    """Cells for the contiguous column span first_column..last_column of a lead."""
    start, end = column_position(first_column), column_position(last_column)
    if start > end:
        raise ValueError(f"Empty column span {first_column}:{last_column}")
    return [str(getattr(lead, field)) for field in COLUMNS[start:end + 1]]


def upgrade_legacy_row(row: Sequence[str]) -> List[str]:
    """Convert an 8-column legacy row (no Remarks) into the canonical layout."""
    cells = list(row) + [""] * (LEGACY_WIDTH - len(row))
    if len(cells) > LEGACY_WIDTH:
        raise ValueError(f"Legacy rows have at most {LEGACY_WIDTH} cells, got {len(cells)}")
    return cells[:LEGACY_REMARKS_POSITION] + [""] + cells[LEGACY_REMARKS_POSITION:]
