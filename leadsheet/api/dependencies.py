from datetime import datetime
from typing import Callable

from fastapi import Request

from leadsheet.services.lead_store import LeadStore
from leadsheet.utils.date_utils import now_in_timezone

Clock = Callable[[], datetime]


def get_lead_store(request: Request) -> LeadStore:
    """The store created at startup (or passed to create_app)."""
    return request.app.state.lead_store


def get_clock(request: Request) -> Clock:
    """Current time in the configured timezone; overridden in tests."""
    timezone = request.app.state.settings.TIMEZONE
    return lambda: now_in_timezone(timezone)
