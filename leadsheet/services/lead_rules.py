"""Business rules applied to a lead before it is written back to the sheet.

All functions are pure: they take the current lead (or remarks string) and a
point in time and return the new values, leaving the write to the caller.
"""
import re
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from leadsheet.core.constants import (
    CALLED_STATUS,
    FOLLOW_UP_SEPARATOR,
    REMARK_SEPARATOR,
    REMARK_TEXT_SEPARATOR,
)
from leadsheet.models.lead import Lead
from leadsheet.utils.date_utils import short_date, short_time

_REMARK_SEGMENT = re.compile(r"^(?P<date>.+?) -(?: (?P<text>.*))?$", re.DOTALL)


@dataclass
class RemarkEntry:
    date: Optional[str]
    text: str

    def render(self) -> str:
        if self.date is None:
            return self.text
        return f"{self.date} - {self.text}"


def split_follow_up_dates(value: str) -> List[str]:
    """Split the follow-up cell into labels, dropping blanks and repeats."""
    labels: List[str] = []
    for label in value.split(FOLLOW_UP_SEPARATOR):
        label = label.strip()
        if label and label not in labels:
            labels.append(label)
    return labels


def register_call(lead: Lead, now: datetime) -> Lead:
    """Record a call made at ``now``.

    Today's label is added to the follow-up dates once per day, so calling
    twice on the same day leaves the dates and the count unchanged.
    """
    today = short_date(now)
    dates = split_follow_up_dates(lead.follow_up_dates)
    if today not in dates:
        dates.append(today)

    return lead.model_copy(update={
        "status": CALLED_STATUS,
        "last_called": today,
        "follow_ups": len(dates),
        "follow_up_dates": FOLLOW_UP_SEPARATOR.join(dates),
        "call_time": short_time(now),
    })


def parse_remarks(remarks: str) -> List[RemarkEntry]:
    entries: List[RemarkEntry] = []
    for segment in remarks.split(REMARK_SEPARATOR):
        segment = segment.strip()
        if not segment:
            continue
        match = _REMARK_SEGMENT.match(segment)
        if match:
            entries.append(RemarkEntry(date=match.group("date").strip(), text=(match.group("text") or "").strip()))
        else:
            # Free text typed straight into the sheet; keep it as is.
            entries.append(RemarkEntry(date=None, text=segment))
    return entries


def render_remarks(entries: List[RemarkEntry]) -> str:
    return f" {REMARK_SEPARATOR} ".join(entry.render() for entry in entries)


def merge_remark(remarks: str, remark: str, date_label: str) -> str:
    """Add ``remark`` under ``date_label``.

    A remark for a day that already has an entry is joined to it with "/";
    otherwise a new "<date> - <remark>" segment is appended.
    """
    entries = parse_remarks(remarks)
    for entry in entries:
        if entry.date == date_label:
            entry.text = f"{entry.text}{REMARK_TEXT_SEPARATOR}{remark}" if entry.text else remark
            break
    else:
        entries.append(RemarkEntry(date=date_label, text=remark))
    return render_remarks(entries)


def add_remark(lead: Lead, remark: str, now: datetime) -> Lead:
    return lead.model_copy(update={"remarks": merge_remark(lead.remarks, remark.strip(), short_date(now))})
