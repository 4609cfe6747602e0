"""
DailyBrief - Daily Task Assignment Summaries

Reads today's task assignments from a Google Sheet, summarizes them with
Claude via LangChain without disclosing anyone's name, and emails the
summary through Gmail.
"""

# Configuration
from .config import (
    Settings,
    load_settings,
    load_model_config,
    CONFIG_PATH,
    DEFAULT_MODEL,
)

# Errors
from .errors import (
    DailyBriefError,
    ConfigurationError,
    FetchError,
    RunInProgressError,
)

# Data model
from .models import (
    AssignmentRecord,
    AnonymizationResult,
    SummaryEntry,
    NotApplicable,
)

# Core logic
from .dates import format_date, parse_date, same_day, weekday_name, target_date
from .rows import filter_rows, map_tasks
from .anonymize import (
    anonymize,
    deanonymize,
    placeholder_matcher,
    ExactPlaceholder,
    TolerantPlaceholder,
)

# Pipeline
from .pipeline import run_daily_tasks, run_with_google, RunResult, RunLock

# CLI entry point
from .cli import main

__version__ = "0.1.0"

__all__ = [
    # Main entry point
    "main",
    # Pipeline
    "run_daily_tasks",
    "run_with_google",
    "RunResult",
    "RunLock",
    # Core functions
    "format_date",
    "parse_date",
    "same_day",
    "weekday_name",
    "target_date",
    "filter_rows",
    "map_tasks",
    "anonymize",
    "deanonymize",
    "placeholder_matcher",
    "ExactPlaceholder",
    "TolerantPlaceholder",
    # Data model
    "AssignmentRecord",
    "AnonymizationResult",
    "SummaryEntry",
    "NotApplicable",
    # Errors
    "DailyBriefError",
    "ConfigurationError",
    "FetchError",
    "RunInProgressError",
    # Configuration
    "Settings",
    "load_settings",
    "load_model_config",
    "CONFIG_PATH",
    "DEFAULT_MODEL",
]
