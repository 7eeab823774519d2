from datetime import datetime

import pytest
import pytz
from fastapi.testclient import TestClient

from leadsheet.api.dependencies import get_clock
from leadsheet.config import Settings
from leadsheet.main import create_app
from leadsheet.services.lead_store import InMemoryLeadStore

FROZEN_NOW = datetime(2025, 1, 12, 14, 5, tzinfo=pytz.UTC)


@pytest.fixture
def settings():
    return Settings(
        GOOGLE_CREDENTIALS_FILE="missing-credentials.json",
        SHEET_ID="1234567890abcdefghij",
        LEADS_SHEET_NAME="leads",
    )


@pytest.fixture
def lead_rows():
    return [
        ["Asha", "9990000001", "12 Jan", "Pending", "", "", "0", "", ""],
        ["Ravi", "9990000002", "13 Jan", "Interested", "10 Jan", "10 Jan - sent brochure", "1", "10 Jan", "11:30"],
        ["Meena", "9990000003", "12 Jan", "Pending"],
    ]


@pytest.fixture
def store(lead_rows):
    return InMemoryLeadStore(lead_rows)


@pytest.fixture
def clock():
    """Mutable clock so a test can move to another day."""
    state = {"now": FROZEN_NOW}
    return state


@pytest.fixture
def client(settings, store, clock):
    app = create_app(settings, store)
    app.dependency_overrides[get_clock] = lambda: (lambda: clock["now"])
    with TestClient(app) as test_client:
        yield test_client
