"""
OAuth 2.0 credentials for the Google APIs used by DailyBrief.

The server never runs an interactive flow: it rebuilds user credentials from
a long-lived refresh token kept in the environment. The refresh token itself
is obtained once, locally, with run_local_authorization.
"""

import logging

import httplib2
from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_httplib2 import AuthorizedHttp
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from .errors import FetchError

logger = logging.getLogger(__name__)

# Sheets read/append, Drive for the summary log, Gmail send
SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
    "https://www.googleapis.com/auth/gmail.send",
]
AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URI = "https://oauth2.googleapis.com/token"


def credentials_from_settings(settings) -> Credentials:
    """Build refreshed user credentials from the configured refresh token.

    Args:
        settings: Settings with google_client_id, google_client_secret and
            google_refresh_token

    Returns:
        Credentials holding a fresh access token

    Raises:
        FetchError: If Google rejects the refresh token
    """
    credentials = Credentials(
        token=None,
        refresh_token=settings.google_refresh_token,
        token_uri=TOKEN_URI,
        client_id=settings.google_client_id,
        client_secret=settings.google_client_secret,
        scopes=SCOPES,
    )

    try:
        credentials.refresh(Request())
    except RefreshError as e:
        raise FetchError(
            "auth",
            f"could not refresh access token ({e}); regenerate GOOGLE_REFRESH_TOKEN "
            "with `dailybrief authorize`",
        ) from e

    logger.info("Google access token refreshed")
    return credentials


def run_local_authorization(client_id: str, client_secret: str, port: int = 0) -> Credentials:
    """Run the browser consent flow on this machine.

    Args:
        client_id: Google OAuth client ID (desktop app type)
        client_secret: Google OAuth client secret
        port: Local port for the redirect listener (0 picks a free one)

    Returns:
        Credentials including a refresh token
    """
    flow = InstalledAppFlow.from_client_config(
        {
            "installed": {
                "client_id": client_id,
                "client_secret": client_secret,
                "auth_uri": AUTH_URI,
                "token_uri": TOKEN_URI,
                "redirect_uris": ["http://localhost"],
            }
        },
        scopes=SCOPES,
    )

    return flow.run_local_server(
        port=port,
        access_type="offline",  # Request refresh token
        prompt="consent",  # Force consent screen to ensure refresh token
    )


def build_service(api: str, version: str, credentials, timeout: int = 60):
    """Build a Google API service whose requests time out after `timeout` seconds."""
    http = AuthorizedHttp(credentials, http=httplib2.Http(timeout=timeout))
    return build(api, version, http=http, cache_discovery=False)
