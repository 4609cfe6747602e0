"""
Google Sheets access for DailyBrief.

Reads the schedule sheet and appends the next day's row.
"""

import logging

from googleapiclient.errors import HttpError

from .errors import FetchError
from .oauth import build_service

logger = logging.getLogger(__name__)


class SheetsClient:
    """Client for reading and appending rows in one spreadsheet."""

    def __init__(self, credentials, spreadsheet_id: str, timeout: int = 60):
        """Initialize the Sheets client.

        Args:
            credentials: OAuth 2.0 credentials object
            spreadsheet_id: ID of the spreadsheet holding the schedule
            timeout: Socket timeout in seconds for API calls

        Raises:
            ValueError: If the spreadsheet ID is empty.
        """
        if not spreadsheet_id:
            raise ValueError("Spreadsheet ID not set. Set SPREADSHEET_ID in .env.")

        self.credentials = credentials
        self.spreadsheet_id = spreadsheet_id
        self.timeout = timeout
        self._service = None

    @property
    def service(self):
        """Lazily initialize and return the Sheets service."""
        if self._service is None:
            self._service = build_service("sheets", "v4", self.credentials, self.timeout)
        return self._service

    def get_rows(self, cell_range: str) -> list[list[str]]:
        """Read all rows in a range.

        Args:
            cell_range: A1 range such as "Grafik!A:Z"

        Returns:
            List of rows (lists of cell strings); empty if the range holds no data

        Raises:
            FetchError: If the API call fails
        """
        try:
            result = self.service.spreadsheets().values().get(
                spreadsheetId=self.spreadsheet_id,
                range=cell_range,
            ).execute()
        except (HttpError, OSError) as e:
            raise FetchError("sheets", f"could not read {cell_range}: {e}") from e

        rows = result.get("values", [])
        if not rows:
            logger.info("No data found in range %s", cell_range)
        return rows

    def append_row(self, sheet_name: str, cells: list[str]) -> None:
        """Append one row below the last filled row of a sheet.

        Args:
            sheet_name: Name of the sheet tab
            cells: Cell values, left to right

        Raises:
            FetchError: If the API call fails
        """
        try:
            self.service.spreadsheets().values().append(
                spreadsheetId=self.spreadsheet_id,
                range=f"{sheet_name}!A:A",
                valueInputOption="USER_ENTERED",
                insertDataOption="INSERT_ROWS",
                body={"values": [list(cells)]},
            ).execute()
        except (HttpError, OSError) as e:
            raise FetchError("append", f"could not append row to {sheet_name}: {e}") from e

        logger.info("Appended row %s to sheet %s", cells, sheet_name)
