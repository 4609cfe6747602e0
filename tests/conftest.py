"""
Shared pytest fixtures for DailyBrief tests.
"""

from datetime import date

import pytest

from dailybrief.config import Settings


@pytest.fixture
def settings(tmp_path):
    """Settings with a local summary log under a temporary directory."""
    return Settings(
        spreadsheet_id="sheet-id-12345",
        sheet_name="Grafik",
        recipient_email="szef@example.com",
        anthropic_api_key="test-api-key-12345",
        google_client_id="client-id",
        google_client_secret="client-secret",
        google_refresh_token="refresh-token",
        local_output_dir=str(tmp_path),
    )


@pytest.fixture
def target_day():
    """A Wednesday."""
    return date(2025, 6, 25)


@pytest.fixture
def sample_rows():
    """Sheet content with a header row and a few days of tasks."""
    return [
        ["", "Ann", "Bob", "Łucja"],
        ["2025-06-24", "Zmywanie", "Zakupy", "Pranie"],
        ["2025-06-25", "Pieczenie z Bob", "Sen", "Odkurzanie"],
        ["N/A", "Coś", "Coś", "Coś"],
        [],
        ["", "Bez daty"],
        ["2025-06-25", "Drugi wiersz", "Ignorowany", ""],
    ]


@pytest.fixture
def env_vars():
    """A complete set of required environment variables."""
    return {
        "SPREADSHEET_ID": "sheet-id-12345",
        "SHEET_NAME": "Grafik",
        "RECIPIENT_EMAIL": "szef@example.com",
        "ANTHROPIC_API_KEY": "test-api-key-12345",
        "GOOGLE_CLIENT_ID": "client-id",
        "GOOGLE_CLIENT_SECRET": "client-secret",
        "GOOGLE_REFRESH_TOKEN": "refresh-token",
        "GOOGLE_DRIVE_FOLDER_ID": "folder-id",
    }
