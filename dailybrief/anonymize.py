"""
Name redaction before text leaves for the language model, and restoration after.

Each person name found in the header is swapped for a numbered placeholder
(``pracownik_1``, ``pracownik_2``, ...) both as a dictionary key and wherever
it appears inside task descriptions. The model is asked to keep the
placeholders intact but may reformat them, so restoration matches them
loosely.
"""

import logging
import re
from dataclasses import dataclass

from .models import AnonymizationResult, AssignmentRecord

logger = logging.getLogger(__name__)

PLACEHOLDER_PREFIX = "pracownik"


def make_placeholder(number: int) -> str:
    return f"{PLACEHOLDER_PREFIX}_{number}"


def anonymize(record: AssignmentRecord) -> AnonymizationResult:
    """Replace person names with placeholders in keys and task text.

    Placeholders are numbered from 1 in header order. Every known name is then
    replaced, case-insensitively and not inside a longer word, in every task
    description, so colleagues mentioned inside someone else's task are
    redacted too. Names that are not column headers have no placeholder and
    are left as they are.

    Args:
        record: The day's assignments

    Returns:
        AnonymizationResult with the redacted record and placeholder -> name map
    """
    original_to_placeholder: dict[str, str] = {}
    placeholder_to_original: dict[str, str] = {}

    for name in record.tasks_by_person:
        if name not in original_to_placeholder:
            placeholder = make_placeholder(len(original_to_placeholder) + 1)
            original_to_placeholder[name] = placeholder
            placeholder_to_original[placeholder] = name

    name_patterns = [
        (re.compile(rf"(?<!\w){re.escape(name)}(?!\w)", re.IGNORECASE), placeholder)
        for name, placeholder in original_to_placeholder.items()
    ]

    tasks: dict[str, str] = {}
    for name, description in record.tasks_by_person.items():
        for pattern, placeholder in name_patterns:
            description = pattern.sub(placeholder, description)
        tasks[original_to_placeholder[name]] = description

    anonymized = AssignmentRecord(
        date=record.date,
        day_of_week=record.day_of_week,
        tasks_by_person=tasks,
    )
    return AnonymizationResult(
        anonymized_record=anonymized,
        placeholder_to_original=placeholder_to_original,
    )


@dataclass(frozen=True)
class ExactPlaceholder:
    """Match the placeholder text itself, case-insensitively, as a whole word."""

    token: str

    def pattern(self) -> re.Pattern:
        return re.compile(rf"\b{re.escape(self.token)}\b", re.IGNORECASE)


@dataclass(frozen=True)
class TolerantPlaceholder:
    """Match ``base_number`` also when the model wrote ``Base number``.

    The first letter may change case and the underscore may become a single
    space.
    """

    base: str
    number: str

    def pattern(self) -> re.Pattern:
        first = self.base[:1]
        return re.compile(
            rf"\b[{re.escape(first.lower())}{re.escape(first.upper())}]"
            rf"{re.escape(self.base[1:])}[_ ]{re.escape(self.number)}\b",
            re.IGNORECASE,
        )


def placeholder_matcher(placeholder: str) -> ExactPlaceholder | TolerantPlaceholder:
    """Choose how a placeholder is looked for in model output.

    Args:
        placeholder: A placeholder such as "pracownik_1"

    Returns:
        TolerantPlaceholder when the placeholder splits on "_" into exactly two
        non-empty parts, ExactPlaceholder otherwise
    """
    parts = placeholder.split("_")
    if len(parts) == 2 and all(parts):
        return TolerantPlaceholder(base=parts[0], number=parts[1])
    return ExactPlaceholder(token=placeholder)


def deanonymize(text: str, placeholder_to_original: dict[str, str]) -> str:
    """Put the original names back into model output.

    Placeholders are processed one at a time in mapping order, each in a
    single pass. Text inserted for one placeholder is only seen by the
    patterns of placeholders processed after it.

    Args:
        text: Summary text containing placeholders
        placeholder_to_original: Mapping from AnonymizationResult

    Returns:
        The text with every recognized placeholder replaced by its name
    """
    for placeholder, original in placeholder_to_original.items():
        pattern = placeholder_matcher(placeholder).pattern()
        text, count = pattern.subn(lambda _match, name=original: name, text)
        if count == 0:
            logger.debug("Placeholder %s not found in summary", placeholder)
    return text
