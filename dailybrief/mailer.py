"""
Email delivery through the Gmail API.
"""

import base64
import logging
from email.header import Header
from email.mime.text import MIMEText

from googleapiclient.errors import HttpError

from .errors import FetchError
from .oauth import build_service

logger = logging.getLogger(__name__)


def build_message(recipient: str, subject: str, body: str) -> dict:
    """Build a Gmail API message body for a plain-text UTF-8 email.

    Returns:
        Dict with the base64url-encoded RFC 2822 message under "raw"
    """
    message = MIMEText(body, "plain", "utf-8")
    message["To"] = recipient
    message["Subject"] = Header(subject, "utf-8")
    raw = base64.urlsafe_b64encode(message.as_bytes()).decode("ascii")
    return {"raw": raw}


class GmailSender:
    """Sends mail as the authenticated user."""

    def __init__(self, credentials, timeout: int = 60):
        self.credentials = credentials
        self.timeout = timeout
        self._service = None

    @property
    def service(self):
        """Lazily initialize and return the Gmail service."""
        if self._service is None:
            self._service = build_service("gmail", "v1", self.credentials, self.timeout)
        return self._service

    def send(self, recipient: str, subject: str, body: str) -> str:
        """Send a plain-text email.

        Args:
            recipient: Recipient address
            subject: Subject line (may contain non-ASCII characters)
            body: Plain-text body

        Returns:
            The Gmail message ID

        Raises:
            FetchError: If Gmail rejects the message
        """
        try:
            result = self.service.users().messages().send(
                userId="me",
                body=build_message(recipient, subject, body),
            ).execute()
        except (HttpError, OSError) as e:
            raise FetchError("mail", f"could not send email to {recipient}: {e}") from e

        message_id = result.get("id")
        logger.info("Email sent to %s (message id %s)", recipient, message_id)
        return message_id
