"""
Selecting today's row from the sheet and turning it into an assignment record.

The sheet layout is one header row of person names followed by one row per
day: column 0 holds the date, column i holds the task of the person named in
header column i.
"""

import logging
from datetime import date

from .dates import format_date, parse_date, same_day, weekday_name
from .models import AssignmentRecord

logger = logging.getLogger(__name__)


def filter_rows(rows: list[list[str]], target: date) -> list[list[str]]:
    """Keep the header and the data rows dated on the target day.

    Args:
        rows: All rows read from the sheet, header first
        target: Day to keep

    Returns:
        The header row followed by matching data rows in their original order,
        or an empty list when the sheet has no rows at all
    """
    if not rows:
        return []

    header = rows[0]
    kept = []

    for row in rows[1:]:
        if not row or not row[0]:
            continue

        parsed = parse_date(row[0])
        if not parsed:
            logger.debug("Skipping row with unparsable date cell (%s)", parsed.reason)
            continue

        if same_day(parsed, target):
            kept.append(row)

    logger.info("Found %d row(s) for %s", len(kept), format_date(target))
    return [header, *kept]


def map_tasks(filtered: list[list[str]]) -> AssignmentRecord:
    """Map the first matching data row onto the names in the header.

    Only the first data row is used; further rows for the same day are ignored.
    A person is included only when both the header name and the task cell are
    non-empty. If a name repeats in the header, the rightmost column wins.

    Args:
        filtered: Output of filter_rows

    Returns:
        AssignmentRecord, empty (all None) when there is no data row
    """
    if not filtered or len(filtered) < 2:
        logger.warning("No data row to map; expected a header and at least one task row")
        return AssignmentRecord()

    header, task_row = filtered[0], filtered[1]
    record = AssignmentRecord()

    parsed = parse_date(task_row[0]) if task_row else None
    if parsed:
        record.date = format_date(parsed)
        record.day_of_week = weekday_name(parsed)
    else:
        logger.warning("Task row has no usable date; building tasks without it")

    for i in range(1, len(header)):
        person = header[i]
        task = task_row[i] if i < len(task_row) else None
        if person and task:
            record.tasks_by_person[person] = task

    return record
