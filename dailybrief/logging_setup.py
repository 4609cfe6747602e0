"""
Logging setup shared by the CLI and the HTTP server.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr with a timestamped format.

    Calling this again only changes the level.
    """
    root = logging.getLogger()
    root.setLevel(level)

    if not any(getattr(h, "_dailybrief", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._dailybrief = True
        root.addHandler(handler)
