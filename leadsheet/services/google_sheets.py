import json
import logging
import time
from typing import Any, List, Optional

from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from leadsheet.config import Settings
from leadsheet.core.constants import SHEETS_SCOPES, VALUE_INPUT_OPTION
from leadsheet.core.metrics import SHEETS_API_CALLS, SHEETS_API_DURATION

logger = logging.getLogger(__name__)


class SheetsCredentialsError(Exception):
    """Raised when the service-account credential file cannot be loaded."""


class SheetsAPIError(Exception):
    """Raised when a read or write against the Sheets API fails."""


def a1_range(
    sheet_name: str,
    first_column: str,
    first_row: int,
    last_column: Optional[str] = None,
    last_row: Optional[int] = None,
) -> str:
    """Build an A1 range such as ``leads!A2:I`` or ``leads!D5:I5``."""
    start = f"{first_column}{first_row}"
    if last_column is None:
        return f"{sheet_name}!{start}"
    end = f"{last_column}{last_row if last_row is not None else ''}"
    return f"{sheet_name}!{start}:{end}"


class GoogleSheetsService:
    def __init__(self, settings: Settings, client: Any = None):
        self.sheet_id = settings.SHEET_ID
        self.client = client if client is not None else self._build_client(settings.GOOGLE_CREDENTIALS_FILE)
        logger.info("Google Sheets service initialized successfully")

    @staticmethod
    def _build_client(credentials_file: str) -> Any:
        try:
            creds = Credentials.from_service_account_file(credentials_file, scopes=SHEETS_SCOPES)
        except FileNotFoundError as e:
            raise SheetsCredentialsError(f"Credential file not found: {credentials_file}") from e
        except (json.JSONDecodeError, ValueError, GoogleAuthError) as e:
            raise SheetsCredentialsError(f"Invalid credential file {credentials_file}: {e}") from e
        return build("sheets", "v4", credentials=creds, cache_discovery=False)

    def _execute(self, operation: str, request: Any) -> Any:
        start = time.time()
        try:
            resp = request.execute()
        except HttpError as e:
            SHEETS_API_CALLS.labels(operation=operation, outcome="error").inc()
            logger.error("Google API error during %s: %s", operation, e)
            raise SheetsAPIError(f"Sheets {operation} failed: {e}") from e
        except Exception as e:
            SHEETS_API_CALLS.labels(operation=operation, outcome="error").inc()
            logger.error("Transport error during %s: %s", operation, e)
            raise SheetsAPIError(f"Sheets {operation} failed: {e}") from e
        finally:
            SHEETS_API_DURATION.labels(operation=operation).observe(time.time() - start)
        SHEETS_API_CALLS.labels(operation=operation, outcome="success").inc()
        return resp

    def read_range(self, range_spec: str) -> List[List[str]]:
        """Read a range; rows come back ragged, with trailing empty cells dropped."""
        request = (
            self.client.spreadsheets()
                .values()
                .get(spreadsheetId=self.sheet_id, range=range_spec)
        )
        resp = self._execute("read", request)
        return resp.get("values", [])

    def write_range(self, range_spec: str, rows: List[List[str]]) -> bool:
        request = (
            self.client.spreadsheets()
                .values()
                .update(
                    spreadsheetId=self.sheet_id,
                    range=range_spec,
                    valueInputOption=VALUE_INPUT_OPTION,
                    body={"values": rows},
                )
        )
        resp = self._execute("write", request)
        logger.debug("Wrote %s cells to %s", resp.get("updatedCells", 0), range_spec)
        return True

    def is_healthy(self) -> bool:
        """Check that the spreadsheet is reachable with the loaded credentials."""
        try:
            self._execute("metadata", self.client.spreadsheets().get(spreadsheetId=self.sheet_id))
            return True
        except SheetsAPIError as e:
            logger.error(f"Google Sheets health check failed: {e}")
            return False
