"""
Validation and normalization of decoded schedules.

Handles:
- Calendar validation of dates (with lenient fallback parsing)
- Local weekday recomputation in the configured language
- HH:MM time normalization
- Chronological ordering
"""

import logging
import re
from datetime import date

from dateutil import parser as date_parser

# Handle both package imports and standalone imports
try:
    from ...models import ParsedSchedule, ShiftEntry
except ImportError:
    from models import ParsedSchedule, ShiftEntry

from ..exceptions import MalformedResponseError

logger = logging.getLogger(__name__)


LANGUAGE_NAMES = {"en": "English", "de": "German"}

WEEKDAY_NAMES = {
    "en": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"],
    "de": ["Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag", "Samstag", "Sonntag"],
}

NO_MATCH_MESSAGES = {
    "en": {
        "named": "No shifts found for {name}.",
        "anonymous": "No shifts found in the document.",
    },
    "de": {
        "named": "Keine Schichten für {name} gefunden.",
        "anonymous": "Keine Schichten im Dokument gefunden.",
    },
}

ABSENCE_SENTINELS = ("-", "")

_TIME_RE = re.compile(
    r"^(?P<hours>\d{1,2})"
    r"(?:\s*[:.h]?\s*(?P<minutes>\d{2})(?:\s*:\s*(?P<seconds>\d{2}))?)?"
    r"\s*(?:(?P<meridiem>[ap])\.?\s*m\.?|uhr|h)?$",
    re.IGNORECASE,
)


def no_match_message(language: str, employee_filter: str | None = None) -> str:
    """Localized message used when the service reports no matching shifts."""
    messages = NO_MATCH_MESSAGES.get(language, NO_MATCH_MESSAGES["en"])
    if employee_filter:
        return messages["named"].format(name=employee_filter)
    return messages["anonymous"]


def weekday_name(value: date, language: str = "en") -> str:
    """Return the weekday name of ``value`` in ``language``."""
    return WEEKDAY_NAMES[language][value.weekday()]


def parse_shift_date(value: str) -> date:
    """
    Parse a shift date.

    ISO format is tried first; anything else goes through dateutil with
    day-first ordering (schedules are European).

    Raises:
        MalformedResponseError: If the value is not a valid calendar date.
    """
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass

    if not value or not any(ch.isdigit() for ch in value):
        raise MalformedResponseError(f"Invalid shift date: {value!r}")

    try:
        return date_parser.parse(value, dayfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise MalformedResponseError(f"Invalid shift date: {value!r}") from e


def normalize_time(value: str) -> str:
    """
    Normalize a wall-clock time to HH:MM.

    Absence sentinels ("-" or empty) are returned unchanged; "24:00" is
    allowed as an end-of-day marker. Seconds are dropped and 12-hour
    times ("8am", "4:30 pm") are converted to the 24-hour clock.

    Raises:
        MalformedResponseError: If the value is not a valid time.
    """
    stripped = value.strip()
    if stripped in ABSENCE_SENTINELS:
        return stripped

    match = _TIME_RE.match(stripped)
    if not match:
        raise MalformedResponseError(f"Invalid shift time: {value!r}")

    meridiem = (match.group("meridiem") or "").lower()
    if match.group("minutes") is None and not meridiem:
        raise MalformedResponseError(f"Invalid shift time: {value!r}")

    hours = int(match.group("hours"))
    minutes = int(match.group("minutes") or 0)
    seconds = int(match.group("seconds") or 0)
    if meridiem:
        # 12-hour clock: 12am is midnight, 12pm is noon
        if not 1 <= hours <= 12:
            raise MalformedResponseError(f"Invalid shift time: {value!r}")
        hours = hours % 12 + (12 if meridiem == "p" else 0)

    if (
        minutes > 59
        or seconds > 59
        or hours > 24
        or (hours == 24 and (minutes or seconds))
    ):
        raise MalformedResponseError(f"Invalid shift time: {value!r}")
    return f"{hours:02d}:{minutes:02d}"


def _normalize_entry(
    entry: ShiftEntry, language: str, warnings: list[str]
) -> tuple[date, ShiftEntry]:
    parsed = parse_shift_date(entry.date)
    iso = parsed.isoformat()
    if iso != entry.date:
        warnings.append(f"Date {entry.date!r} normalized to {iso}")

    weekday = weekday_name(parsed, language)
    if entry.weekday.strip().lower() != weekday.lower():
        warnings.append(
            f"Weekday for {iso} corrected from {entry.weekday!r} to {weekday!r}"
        )

    start_time = normalize_time(entry.start_time)
    end_time = normalize_time(entry.end_time)

    return parsed, entry.model_copy(
        update={
            "date": iso,
            "weekday": weekday,
            "start_time": start_time,
            "end_time": end_time,
        }
    )


def normalize_schedule(schedule: ParsedSchedule, language: str = "en") -> ParsedSchedule:
    """
    Validate and normalize a decoded schedule.

    Args:
        schedule: Schedule as decoded from the service response.
        language: Language for recomputed weekday names.

    Returns:
        A new schedule with ISO dates, locally computed weekdays, HH:MM
        times, chronological order and the corrections listed in
        ``warnings``.

    Raises:
        MalformedResponseError: If a date or time cannot be interpreted.
    """
    warnings: list[str] = list(schedule.warnings)
    normalized: list[tuple[date, ShiftEntry]] = [
        _normalize_entry(entry, language, warnings) for entry in schedule.shifts
    ]
    # Stable sort keeps document order for entries on the same day
    normalized.sort(key=lambda item: item[0])

    for warning in warnings:
        logger.warning("Schedule validation: %s", warning)

    return schedule.model_copy(
        update={
            "shifts": [entry for _, entry in normalized],
            "warnings": warnings,
        }
    )
