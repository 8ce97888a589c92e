"""Tests for Pydantic models."""

import pytest
from pydantic import ValidationError

from shift_parser.backend.models import (
    ExtractionProfile,
    ParsedSchedule,
    ShiftEntry,
    ShiftType,
)


class TestShiftEntry:
    """Tests for ShiftEntry model."""

    def test_valid_entry_from_wire_names(self):
        """Test creating an entry from the camelCase wire format."""
        entry = ShiftEntry.model_validate(
            {
                "date": "2024-03-04",
                "weekday": "Monday",
                "startTime": "08:00",
                "endTime": "16:00",
            }
        )
        assert entry.start_time == "08:00"
        assert entry.end_time == "16:00"
        assert entry.type == ShiftType.SHIFT  # Default
        assert entry.is_absence is False

    def test_entry_accepts_python_names(self):
        """Test that snake_case field names are accepted too."""
        entry = ShiftEntry(
            date="2024-03-04", weekday="Monday", start_time="-", end_time="-", type="sick"
        )
        assert entry.type == ShiftType.SICK
        assert entry.is_absence is True

    def test_missing_date_rejected(self):
        """Test that an entry without a date is rejected."""
        with pytest.raises(ValidationError):
            ShiftEntry.model_validate(
                {"weekday": "Monday", "startTime": "08:00", "endTime": "16:00"}
            )

    def test_null_times_rejected(self):
        """Test that null times are not coerced into sentinels."""
        with pytest.raises(ValidationError):
            ShiftEntry.model_validate(
                {"date": "2024-03-04", "weekday": "Monday", "startTime": None, "endTime": "16:00"}
            )

    def test_type_normalization(self):
        """Test that null and capitalized type tags are normalized."""
        base = {"date": "2024-03-04", "weekday": "Monday", "startTime": "-", "endTime": "-"}
        assert ShiftEntry.model_validate({**base, "type": None}).type == ShiftType.SHIFT
        assert ShiftEntry.model_validate({**base, "type": "Vacation"}).type == ShiftType.VACATION

    def test_unknown_type_rejected(self):
        """Test that an unknown category is rejected."""
        with pytest.raises(ValidationError):
            ShiftEntry.model_validate(
                {
                    "date": "2024-03-04",
                    "weekday": "Monday",
                    "startTime": "-",
                    "endTime": "-",
                    "type": "holiday",
                }
            )

    def test_numeric_duration_stringified(self):
        """Test that numeric durations are accepted as text."""
        entry = ShiftEntry.model_validate(
            {
                "date": "2024-03-04",
                "weekday": "Monday",
                "startTime": "08:00",
                "endTime": "16:00",
                "duration": 8,
            }
        )
        assert entry.duration == "8"

    def test_serializes_with_wire_names(self):
        """Test that dumping by alias restores the camelCase names."""
        entry = ShiftEntry(date="2024-03-04", weekday="Monday", start_time="08:00", end_time="16:00")
        data = entry.model_dump(by_alias=True)
        assert data["startTime"] == "08:00"
        assert "start_time" not in data


class TestParsedSchedule:
    """Tests for ParsedSchedule model."""

    def test_shifts_required(self):
        """Test that a schedule without shifts is rejected."""
        with pytest.raises(ValidationError):
            ParsedSchedule.model_validate({"employeeName": "A. Smith"})

    def test_empty_shifts_allowed(self):
        """Test that an empty shifts list is a valid schedule."""
        schedule = ParsedSchedule.model_validate(
            {"shifts": [], "error": "No shifts found for Max Mustermann"}
        )
        assert schedule.shifts == []
        assert schedule.error == "No shifts found for Max Mustermann"
        assert schedule.employee_name is None
        assert schedule.warnings == []


class TestExtractionProfile:
    """Tests for ExtractionProfile model."""

    def test_defaults(self):
        """Test default language and absence codes."""
        profile = ExtractionProfile()
        assert profile.language == "en"
        assert "Urlaub" in profile.absence_codes.vacation
        assert "AU" in profile.absence_codes.sick
        assert "frei" in profile.absence_codes.day_off
        assert profile.employee_filter is None

    def test_unsupported_language_rejected(self):
        """Test that only supported languages are accepted."""
        with pytest.raises(ValidationError):
            ExtractionProfile(language="fr")

    def test_blank_filter_is_none(self):
        """Test that a whitespace-only filter means no filter."""
        assert ExtractionProfile(employee_filter="   ").employee_filter is None
        assert ExtractionProfile(employee_filter=" Max ").employee_filter == "Max"
