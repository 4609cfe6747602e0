"""
Data structures passed between the DailyBrief pipeline stages.

All of these live for a single run only, except SummaryEntry which is
appended to the persistent summary log.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NotApplicable:
    """Marker returned in place of a value that legitimately could not be produced.

    It is falsy, so ``if value:`` works like a None check, but it carries a
    reason and can be told apart from a real empty result.
    """

    reason: str = ""

    def __bool__(self) -> bool:
        return False


@dataclass
class AssignmentRecord:
    """Tasks for one day, keyed by person name in header column order."""

    date: str | None = None
    day_of_week: str | None = None
    tasks_by_person: dict[str, str] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.tasks_by_person

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "dayOfWeek": self.day_of_week,
            "tasksByPerson": dict(self.tasks_by_person),
        }


@dataclass
class AnonymizationResult:
    anonymized_record: AssignmentRecord
    placeholder_to_original: dict[str, str]


@dataclass
class SummaryEntry:
    """One persisted daily summary."""

    date: str | None
    day_of_week: str | None
    summary: str

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "dayOfWeek": self.day_of_week,
            "summary": self.summary,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SummaryEntry":
        return cls(
            date=data.get("date"),
            day_of_week=data.get("dayOfWeek"),
            summary=data.get("summary", ""),
        )
