"""
Configuration management for DailyBrief.

Handles environment variables, API keys, and model configuration. Settings are
read once into a Settings object which is then passed to the pipeline and the
service clients.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from dotenv import load_dotenv

from .errors import ConfigurationError

# Load environment variables from .env file (looks in repo root)
load_dotenv(Path(__file__).parent.parent / ".env")

# Path to model configuration file (at repository root, parent of package)
CONFIG_PATH = Path(__file__).parent.parent / "config.yaml"

# Default model to use if not specified in config
DEFAULT_MODEL = "claude-haiku-4-5-20251001"

DEFAULT_SUMMARY_FILE_NAME = "daily_summaries.json"
DEFAULT_TIMEZONE = "Europe/Warsaw"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Variables without which a run cannot start
REQUIRED_VARIABLES = (
    "SPREADSHEET_ID",
    "SHEET_NAME",
    "RECIPIENT_EMAIL",
    "ANTHROPIC_API_KEY",
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "GOOGLE_REFRESH_TOKEN",
)


@dataclass(frozen=True)
class Settings:
    """Everything a run needs from the environment."""

    spreadsheet_id: str
    sheet_name: str
    recipient_email: str
    anthropic_api_key: str
    google_client_id: str
    google_client_secret: str
    google_refresh_token: str
    drive_folder_id: str | None = None
    local_output_dir: str | None = None
    summary_file_name: str = DEFAULT_SUMMARY_FILE_NAME
    timezone: str = DEFAULT_TIMEZONE
    day_offset: int = 0
    http_timeout: int = 60
    port: int = 8080
    log_level: str = "INFO"

    @property
    def sheet_range(self) -> str:
        """Range covering the whole sheet, e.g. "Grafik!A:Z"."""
        return f"{self.sheet_name}!A:Z"


def _int_setting(env, name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


def load_settings(env=None) -> Settings:
    """Build Settings from environment variables.

    Args:
        env: Mapping to read from (defaults to os.environ)

    Returns:
        Populated Settings

    Raises:
        ConfigurationError: If required variables are missing or values are invalid.
            All missing variables are reported at once.
    """
    if env is None:
        env = os.environ

    missing = [name for name in REQUIRED_VARIABLES if not env.get(name)]

    drive_folder_id = env.get("GOOGLE_DRIVE_FOLDER_ID") or None
    local_output_dir = env.get("LOCAL_OUTPUT_DIR") or None
    if not drive_folder_id and not local_output_dir:
        missing.append("GOOGLE_DRIVE_FOLDER_ID or LOCAL_OUTPUT_DIR")

    if missing:
        raise ConfigurationError(
            "Missing required environment variables: " + ", ".join(missing),
            missing=missing,
        )

    timezone = env.get("TIMEZONE") or DEFAULT_TIMEZONE
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigurationError(f"Unknown TIMEZONE {timezone!r}")

    log_level = (env.get("LOG_LEVEL") or "INFO").upper()
    if log_level not in LOG_LEVELS:
        raise ConfigurationError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    return Settings(
        spreadsheet_id=env["SPREADSHEET_ID"],
        sheet_name=env["SHEET_NAME"],
        recipient_email=env["RECIPIENT_EMAIL"],
        anthropic_api_key=env["ANTHROPIC_API_KEY"],
        google_client_id=env["GOOGLE_CLIENT_ID"],
        google_client_secret=env["GOOGLE_CLIENT_SECRET"],
        google_refresh_token=env["GOOGLE_REFRESH_TOKEN"],
        drive_folder_id=drive_folder_id,
        local_output_dir=local_output_dir,
        summary_file_name=env.get("SUMMARY_FILE_NAME") or DEFAULT_SUMMARY_FILE_NAME,
        timezone=timezone,
        day_offset=_int_setting(env, "DAY_OFFSET", 0),
        http_timeout=_int_setting(env, "HTTP_TIMEOUT", 60),
        port=_int_setting(env, "PORT", 8080),
        log_level=log_level,
    )


def load_model_config() -> dict:
    """Load model configuration from YAML file.

    Returns:
        Dictionary of configuration parameters
    """
    if not CONFIG_PATH.exists():
        return {}

    with open(CONFIG_PATH) as f:
        config = yaml.safe_load(f)

    return config or {}
