"""
Single-slot schedule session.

Holds the currently displayed schedule and the in-flight flag, and turns
every pipeline failure into one user-visible message.
"""

import logging

# Handle both package imports and standalone imports
try:
    from ..models import ParsedSchedule, ScheduleStatus, ScheduleView
except ImportError:
    from models import ParsedSchedule, ScheduleStatus, ScheduleView

from .ai import ScheduleExtractor, get_schedule_extractor
from .exceptions import (
    ExtractionInProgressError,
    NoMatchCondition,
    ScheduleExtractionError,
)

logger = logging.getLogger(__name__)


class ScheduleSession:
    """
    The "current schedule" slot of one user.

    A successful extraction replaces the slot entirely; a new file
    selection or any failure empties it. Only one extraction may be
    outstanding at a time.
    """

    def __init__(self, extractor: ScheduleExtractor | None = None):
        self._extractor = extractor
        self.schedule: ParsedSchedule | None = None
        self.message: str | None = None
        self.filename: str | None = None
        self.status = ScheduleStatus.IDLE
        self.in_flight = False

    @property
    def extractor(self) -> ScheduleExtractor:
        if self._extractor is None:
            self._extractor = get_schedule_extractor()
        return self._extractor

    def select_file(self, filename: str | None) -> None:
        """Discard the current result when a new file is chosen."""
        self.schedule = None
        self.message = None
        self.filename = filename
        self.status = ScheduleStatus.IDLE

    def clear(self) -> None:
        self.select_file(None)

    def view(self) -> ScheduleView:
        """Snapshot of the session for the presentation layer."""
        return ScheduleView(
            status=self.status,
            filename=self.filename,
            schedule=self.schedule,
            message=self.message,
        )

    async def parse(
        self,
        document: bytes,
        filename: str,
        employee_filter: str | None = None,
        content_type: str | None = None,
    ) -> ScheduleView:
        """
        Run one extraction and store its outcome.

        Raises:
            ExtractionInProgressError: If another extraction is outstanding.
        """
        if self.in_flight:
            raise ExtractionInProgressError("A schedule is already being parsed")

        self.in_flight = True
        self.select_file(filename)
        self.status = ScheduleStatus.LOADING

        try:
            schedule = await self.extractor.extract(
                document,
                filename,
                employee_filter=employee_filter,
                content_type=content_type,
            )
        except NoMatchCondition as e:
            self.status = ScheduleStatus.NO_MATCH
            self.message = str(e)
        except ScheduleExtractionError as e:
            logger.error("Error parsing schedule '%s': %s", filename, e)
            self.status = ScheduleStatus.ERROR
            self.message = str(e) or "Failed to parse PDF. Please try again."
        except Exception:
            logger.exception("Unexpected error parsing schedule '%s'", filename)
            self.status = ScheduleStatus.ERROR
            self.message = "Failed to parse PDF. Please try again."
            raise
        else:
            self.schedule = schedule
            self.status = ScheduleStatus.READY
        finally:
            self.in_flight = False

        return self.view()


# Singleton instance for convenience
_session: ScheduleSession | None = None


def get_schedule_session() -> ScheduleSession:
    """Get or create the schedule session singleton."""
    global _session
    if _session is None:
        _session = ScheduleSession()
    return _session
