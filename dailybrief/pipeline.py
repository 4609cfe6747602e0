"""
The daily run: sheet -> today's tasks -> redacted summary -> log and email.

Steps:
    1. Read the schedule sheet
    2. Keep the row for the target date and map tasks to people
    3. Replace names with placeholders
    4. Ask the model for a summary
    5. Put the names back
    6. Append the summary to the log
    7. Email the summary
    8. Append the next day's row to the sheet

Steps 3-7 are skipped when the sheet has no tasks for the day; step 8 runs
either way.
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, timedelta

from .anonymize import anonymize, deanonymize
from .dates import format_date, parse_date, same_day, target_date
from .errors import RunInProgressError
from .mailer import GmailSender
from .models import SummaryEntry
from .oauth import credentials_from_settings
from .rows import filter_rows, map_tasks
from .sheets import SheetsClient
from .store import append_summary, make_store
from .summarize import summarize_tasks

logger = logging.getLogger(__name__)

STATUS_SENT = "sent"
STATUS_NO_TASKS = "no_tasks"
STATUS_EMPTY_SHEET = "empty_sheet"

MESSAGES = {
    STATUS_SENT: "Zadania wykonane pomyślnie!",
    STATUS_NO_TASKS: "Brak danych zadań dla bieżącego dnia.",
    STATUS_EMPTY_SHEET: "Arkusz jest pusty.",
}


@dataclass
class RunResult:
    status: str
    message: str
    date: str | None = None
    summary: str | None = None


class RunLock:
    """Allows one run at a time within this process.

    Overlapping runs would race on the summary log's load/save cycle, so a
    second caller is turned away instead of waiting.
    """

    def __init__(self):
        self._lock = threading.Lock()

    @contextmanager
    def hold(self):
        if not self._lock.acquire(blocking=False):
            raise RunInProgressError("A run is already in progress")
        try:
            yield
        finally:
            self._lock.release()

    @property
    def locked(self) -> bool:
        return self._lock.locked()


def email_subject(day_of_week: str | None, day: str | None) -> str:
    return f"Dzienne podsumowanie zadań na {day_of_week}, {day}"


def has_row_for(rows: list[list[str]], day: date) -> bool:
    """Check whether any data row is already dated on the given day."""
    for row in rows[1:]:
        if row and row[0]:
            parsed = parse_date(row[0])
            if parsed and same_day(parsed, day):
                return True
    return False


def run_daily_tasks(
    settings,
    *,
    sheets,
    store,
    summarizer,
    mailer,
    today: date | None = None,
) -> RunResult:
    """Run one full pass of the daily summary job.

    Args:
        settings: Settings for this process
        sheets: Object with get_rows(range) and append_row(sheet_name, cells)
        store: Summary store with load_all() and save_all(entries)
        summarizer: Callable taking an anonymized AssignmentRecord, returning text
        mailer: Object with send(recipient, subject, body)
        today: Target date override (defaults to today in settings.timezone
            shifted by settings.day_offset)

    Returns:
        RunResult describing what happened

    Raises:
        FetchError: If any external call fails; the remaining steps are skipped
    """
    if today is None:
        today = target_date(settings.timezone, settings.day_offset)

    logger.info("Reading %s from spreadsheet %s", settings.sheet_range, settings.spreadsheet_id)
    rows = sheets.get_rows(settings.sheet_range)

    if not rows:
        logger.info("Sheet is empty; nothing to summarize")
        result = RunResult(STATUS_EMPTY_SHEET, MESSAGES[STATUS_EMPTY_SHEET], date=format_date(today))
    else:
        logger.info("Fetched %d row(s)", len(rows))
        record = map_tasks(filter_rows(rows, today))

        if record.is_empty:
            logger.info("No tasks for %s; skipping summary and email", format_date(today))
            result = RunResult(STATUS_NO_TASKS, MESSAGES[STATUS_NO_TASKS], date=format_date(today))
        else:
            result = _summarize_and_send(settings, record, store, summarizer, mailer)

    next_day = format_date(today, 1)
    if has_row_for(rows, today + timedelta(days=1)):
        logger.info("Row for %s already exists; not appending", next_day)
    else:
        sheets.append_row(settings.sheet_name, [next_day])

    return result


def _summarize_and_send(settings, record, store, summarizer, mailer) -> RunResult:
    logger.info("Tasks for %s (%s): %d person(s)", record.date, record.day_of_week, len(record.tasks_by_person))

    anonymized = anonymize(record)
    logger.info("Anonymized record: %s", anonymized.anonymized_record.to_dict())
    logger.debug("Placeholder map: %s", anonymized.placeholder_to_original)

    raw_summary = summarizer(anonymized.anonymized_record)
    logger.info("Summary from model (anonymized): %s", raw_summary)

    summary = deanonymize(raw_summary, anonymized.placeholder_to_original)
    logger.debug("Final summary: %s", summary)

    append_summary(store, SummaryEntry(date=record.date, day_of_week=record.day_of_week, summary=summary))

    mailer.send(settings.recipient_email, email_subject(record.day_of_week, record.date), summary)

    return RunResult(STATUS_SENT, MESSAGES[STATUS_SENT], date=record.date, summary=summary)


def run_with_google(settings, today: date | None = None) -> RunResult:
    """Run the job against the real Google and Anthropic services."""
    credentials = credentials_from_settings(settings)
    logger.info("Google API authorization successful")

    return run_daily_tasks(
        settings,
        sheets=SheetsClient(credentials, settings.spreadsheet_id, timeout=settings.http_timeout),
        store=make_store(settings, credentials),
        summarizer=lambda record: summarize_tasks(record, settings.anthropic_api_key),
        mailer=GmailSender(credentials, timeout=settings.http_timeout),
        today=today,
    )
