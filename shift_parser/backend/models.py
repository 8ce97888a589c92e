"""
Pydantic models for the shift schedule extraction pipeline.

Defines strict types for extracted shift entries, the aggregate schedule,
extraction profiles and the API responses.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_EMPLOYEE_FILTER_LENGTH = 200


class ShiftType(str, Enum):
    """Category of a schedule row."""

    SHIFT = "shift"
    FREE = "free"
    VACATION = "vacation"
    SICK = "sick"


class ShiftEntry(BaseModel):
    """
    One row of an extracted schedule.

    Attributes:
        date: Calendar date in ISO format (YYYY-MM-DD).
        weekday: Weekday name for ``date`` in the configured language.
        start_time: Start as HH:MM (24h), or "-"/"" for an absence.
        end_time: End as HH:MM (24h), or "-"/"" for an absence.
        duration: Optional human-readable duration.
        notes: Optional free text.
        type: Row category, defaults to a regular shift.
    """

    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(..., description="ISO date", examples=["2024-03-04"])
    weekday: str = Field(..., description="Weekday name", examples=["Monday"])
    start_time: str = Field(..., alias="startTime", examples=["08:00", "-"])
    end_time: str = Field(..., alias="endTime", examples=["16:00", "-"])
    duration: str | None = Field(default=None, examples=["8 hours"])
    notes: str | None = None
    type: ShiftType = ShiftType.SHIFT

    @field_validator("duration", "notes", mode="before")
    @classmethod
    def stringify_optional_text(cls, v: Any) -> Any:
        """Accept numeric durations such as ``8`` or ``7.5``."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Any:
        """Treat a null or differently-cased tag as the canonical value."""
        if v is None or v == "":
            return ShiftType.SHIFT
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def is_absence(self) -> bool:
        return self.type != ShiftType.SHIFT


class ParsedSchedule(BaseModel):
    """
    Aggregate result of one extraction.

    This model matches the JSON structure requested from the service:
    {
        "employeeName": str | null,
        "shifts": [ShiftEntry, ...],
        "error": str | null
    }
    """

    model_config = ConfigDict(populate_by_name=True)

    employee_name: str | None = Field(default=None, alias="employeeName")
    shifts: list[ShiftEntry] = Field(
        ...,
        description="Shift entries in chronological order",
    )
    error: str | None = Field(
        default=None,
        description="Set by the service when no matching records exist",
    )
    warnings: list[str] = Field(
        default_factory=list,
        description="Corrections made by the local validation pass",
    )


class AbsenceCodes(BaseModel):
    """Cell markers the service must recognise as absences."""

    vacation: list[str] = Field(
        default_factory=lambda: ["U", "UL", "Urlaub", "Vacation"],
    )
    sick: list[str] = Field(
        default_factory=lambda: ["K", "AU", "krank", "Sick"],
    )
    day_off: list[str] = Field(
        default_factory=lambda: ["-", "/", "X", "frei", "Free"],
    )


class ExtractionProfile(BaseModel):
    """
    Configuration for one extraction request.

    Attributes:
        language: Language for weekday names and messages ("en" or "de").
        absence_codes: Markers mapped to vacation, sick leave and days off.
        employee_filter: Optional employee name to restrict extraction to.
    """

    language: str = Field(default="en", pattern="^(en|de)$")
    absence_codes: AbsenceCodes = Field(default_factory=AbsenceCodes)
    employee_filter: str | None = Field(default=None, max_length=MAX_EMPLOYEE_FILTER_LENGTH)

    @field_validator("employee_filter")
    @classmethod
    def blank_filter_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


# =============================================================================
# API Responses
# =============================================================================


class ScheduleStatus(str, Enum):
    """State of the single schedule slot."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    NO_MATCH = "no_match"
    ERROR = "error"


class ScheduleView(BaseModel):
    """What the presentation layer shows for the current session."""

    model_config = ConfigDict(populate_by_name=True)

    status: ScheduleStatus
    filename: str | None = None
    schedule: ParsedSchedule | None = None
    message: str | None = None


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(default="healthy")
    version: str = Field(default="1.0.0")
    message: str = Field(default="Shift Schedule Extraction API is running")
