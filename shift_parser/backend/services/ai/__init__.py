"""
AI service package for shift schedule extraction.

This package provides the extraction pipeline split into:
- prompts: Request construction (system instruction, directive, payload)
- client: The single network call to the completion service
- decoding: JSON unwrapping of the free-text completion
- validation: Local date/weekday/time normalization

The ScheduleExtractor class wires these steps together.
"""

import logging
from typing import Any

from pydantic import ValidationError

# Handle both package imports and standalone imports
try:
    from ...config import get_settings
    from ...models import ExtractionProfile, ParsedSchedule, ShiftEntry, ShiftType
except ImportError:
    from config import get_settings
    from models import ExtractionProfile, ParsedSchedule, ShiftEntry, ShiftType

from ..document_service import get_document_service
from ..exceptions import InvalidInputError, NoMatchCondition
from .client import ExtractionClient
from .decoding import decode_completion, extract_json_text
from .prompts import build_extraction_request, build_system_prompt
from .validation import no_match_message, normalize_schedule

logger = logging.getLogger(__name__)

__all__ = [
    "ScheduleExtractor",
    "ExtractionClient",
    "build_extraction_request",
    "build_system_prompt",
    "decode_completion",
    "extract_json_text",
    "normalize_schedule",
    "get_schedule_extractor",
    "extract",
]


class ScheduleExtractor:
    """
    Pipeline turning a PDF schedule into a ParsedSchedule.

    file → encode → request → completion service → decode → normalize.
    Falls back to mock data when no service credential is configured.
    """

    def __init__(
        self,
        api_key: str | None = None,
        customer_id: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        profile: ExtractionProfile | None = None,
        use_mock: bool = False,
        client: Any = None,
    ):
        """
        Initialize the extractor.

        Args:
            api_key: Service credential. If None, read from settings.
            customer_id: Service account id. If None, read from settings.
            model: Model identifier. If None, read from settings.
            base_url: Service base URL. If None, read from settings.
            timeout: Network bound in seconds. If None, read from settings.
            profile: Default extraction profile (language, absence codes).
            use_mock: If True, return mock data instead of calling the service.
            client: OpenAI-compatible async client to use instead of building one.
        """
        settings = get_settings()

        self.api_key = api_key if api_key is not None else settings.extraction_api_key
        self.customer_id = (
            customer_id if customer_id is not None else settings.extraction_customer_id
        )
        self.model = model or settings.extraction_model
        self.base_url = base_url or settings.extraction_base_url
        self.timeout = timeout if timeout is not None else settings.extraction_timeout
        self.profile = profile or ExtractionProfile(language=settings.schedule_language)
        self.use_mock = use_mock or (client is None and not self.api_key)
        self._raw_client = client
        self._client: ExtractionClient | None = None

        if self.use_mock:
            logger.warning(
                "Schedule extractor running in MOCK MODE. Set EXTRACTION_API_KEY in .env for real extraction."
            )

    @property
    def client(self) -> ExtractionClient:
        """Lazy-load the extraction client."""
        if self._client is None:
            self._client = ExtractionClient(
                api_key=self.api_key,
                customer_id=self.customer_id,
                base_url=self.base_url,
                timeout=self.timeout,
                client=self._raw_client,
            )
        return self._client

    def profile_for(self, employee_filter: str | None = None) -> ExtractionProfile:
        """Copy of the default profile with the given name filter applied."""
        try:
            return ExtractionProfile.model_validate(
                {**self.profile.model_dump(), "employee_filter": employee_filter}
            )
        except ValidationError as e:
            raise InvalidInputError(f"Invalid employee filter: {e}") from e

    def build_request(
        self, document: bytes, filename: str, employee_filter: str | None = None
    ) -> dict[str, Any]:
        """Encode ``document`` and build the request payload for it."""
        document_uri = get_document_service().encode(document)
        return build_extraction_request(
            document_uri, filename, self.profile_for(employee_filter), self.model
        )

    async def extract(
        self,
        document: bytes,
        filename: str,
        employee_filter: str | None = None,
        content_type: str | None = None,
    ) -> ParsedSchedule:
        """
        Extract the shift schedule from a PDF document.

        Args:
            document: PDF content.
            filename: Original filename, sent along with the document.
            employee_filter: Only extract shifts of this employee.
            content_type: Declared media type of the upload, if known.

        Returns:
            The normalized schedule with at least one shift.

        Raises:
            NoMatchCondition: If the schedule is empty.
            ScheduleExtractionError: For every other failure (see exceptions).
        """
        get_document_service().ensure_pdf(document, filename=filename, content_type=content_type)
        profile = self.profile_for(employee_filter)

        logger.info(
            "Extracting schedule from '%s' (%d bytes, filter=%s)",
            filename,
            len(document),
            profile.employee_filter or "-",
        )

        if self.use_mock:
            schedule = self._get_mock_schedule(profile)
        else:
            payload = self.build_request(document, filename, profile.employee_filter)
            content = await self.client.complete(payload)
            schedule = decode_completion(content)

        schedule = normalize_schedule(schedule, profile.language)

        if not schedule.shifts:
            message = schedule.error or no_match_message(
                profile.language, profile.employee_filter
            )
            logger.info("No matching shifts in '%s': %s", filename, message)
            raise NoMatchCondition(message, schedule=schedule)

        logger.info("Extracted %d shift(s) from '%s'", len(schedule.shifts), filename)
        return schedule

    def _get_mock_schedule(self, profile: ExtractionProfile) -> ParsedSchedule:
        """Return a mock schedule for development."""
        shifts = [
            ShiftEntry(
                date="2024-03-04",
                weekday="Monday",
                start_time="08:00",
                end_time="16:00",
                duration="8 hours",
            ),
            ShiftEntry(
                date="2024-03-05",
                weekday="Tuesday",
                start_time="14:00",
                end_time="22:00",
                duration="8 hours",
                notes="Late shift",
            ),
            ShiftEntry(
                date="2024-03-06",
                weekday="Wednesday",
                start_time="-",
                end_time="-",
                type=ShiftType.VACATION,
            ),
        ]
        return ParsedSchedule(
            employee_name=profile.employee_filter or "Mock Employee",
            shifts=shifts,
            warnings=[
                "DEVELOPMENT MODE: Using mock data. Set EXTRACTION_API_KEY for real extraction."
            ],
        )


# =============================================================================
# Singleton Factory
# =============================================================================

_schedule_extractor: ScheduleExtractor | None = None


def get_schedule_extractor() -> ScheduleExtractor:
    """Get or create the schedule extractor singleton."""
    global _schedule_extractor
    if _schedule_extractor is None:
        _schedule_extractor = ScheduleExtractor()
    return _schedule_extractor


async def extract(
    document_bytes: bytes, filename: str, employee_filter: str | None = None
) -> ParsedSchedule:
    """Run the extraction pipeline with the default extractor."""
    return await get_schedule_extractor().extract(
        document_bytes, filename, employee_filter=employee_filter
    )
