"""
Exception types raised by DailyBrief.

Parse problems are not exceptions here: unparsable cells are skipped or come
back as NotApplicable. Only configuration gaps and failing external calls
abort a run.
"""


class DailyBriefError(Exception):
    """Base exception for DailyBrief errors."""
    pass


class ConfigurationError(DailyBriefError):
    """A required setting is missing or malformed."""

    def __init__(self, message: str, missing: list[str] | None = None):
        super().__init__(message)
        self.missing = missing or []


class FetchError(DailyBriefError):
    """An external service call (sheets, storage, model, mail) failed."""

    def __init__(self, step: str, message: str):
        super().__init__(f"{step}: {message}")
        self.step = step


class RunInProgressError(DailyBriefError):
    """Another run is already holding the run lock."""
    pass
