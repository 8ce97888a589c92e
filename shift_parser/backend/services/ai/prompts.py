"""
Request construction for the schedule extraction service.

Builds the system instruction, the user directive and the chat-completion
payload from an ExtractionProfile. One configurable template serves every
language and name filter.
"""

import json
import logging
from typing import Any

# Handle both package imports and standalone imports
try:
    from ...models import AbsenceCodes, ExtractionProfile
except ImportError:
    from models import AbsenceCodes, ExtractionProfile

from .validation import LANGUAGE_NAMES, WEEKDAY_NAMES

logger = logging.getLogger(__name__)


# =============================================================================
# Extraction System Prompt
# =============================================================================

EXTRACTION_SYSTEM_PROMPT = """You are a shift schedule extraction assistant. Analyze the provided PDF document and extract shift information for the user.

## Instructions:

1. Extract all shift entries with dates, times, and any relevant details.
2. Calculate the weekday for each date from the calendar and write it in {language_name}: {weekday_list}.
3. Organize shifts chronologically by date.
4. Include shift start time, end time, and duration if available.
5. Extract any notes or special information about shifts.
6. Be thorough and extract all shift information from the document, even if it spans multiple pages.

## Normalization Rules:

- Dates MUST be written as YYYY-MM-DD. If the document omits the year, use the year stated in the document header.
- Times MUST be written as HH:MM in 24-hour format (e.g. "8.00", "8:00 Uhr" and "8am" all become "08:00"; "4pm" becomes "16:00").
- For absences set "startTime" and "endTime" to "-" and leave "duration" empty.

## Absence Codes:
{absence_rules}
{filter_rules}
## Response Format:
Return ONLY a JSON object in the following format:
{response_format}"""


RESPONSE_FORMAT_EXAMPLE = {
    "employeeName": "Name if found in document",
    "shifts": [
        {
            "date": "YYYY-MM-DD",
            "weekday": "<weekday>",
            "startTime": "HH:MM",
            "endTime": "HH:MM",
            "duration": "X hours",
            "notes": "Any special notes",
            "type": "shift | free | vacation | sick",
        }
    ],
}

USER_DIRECTIVE = (
    "Please extract and organize all shift information from this PDF document. "
    "Make sure to include the weekday for each date."
)

USER_DIRECTIVE_FILTERED = (
    "Please extract and organize the shift information of the requested employee "
    "from this PDF document. Make sure to include the weekday for each date."
)


# =============================================================================
# Prompt Builders
# =============================================================================


def _format_codes(codes: list[str]) -> str:
    return ", ".join(json.dumps(code, ensure_ascii=False) for code in codes)


def _build_absence_rules(codes: AbsenceCodes) -> str:
    """Enumerate every recognised absence marker."""
    lines = []
    if codes.vacation:
        lines.append(
            f'- Cells containing exactly one of {_format_codes(codes.vacation)} mean vacation: use type "vacation".'
        )
    if codes.sick:
        lines.append(
            f'- Cells containing exactly one of {_format_codes(codes.sick)} mean sick leave: use type "sick".'
        )
    day_off = _format_codes(codes.day_off) if codes.day_off else None
    if day_off:
        lines.append(
            f'- Empty cells and cells containing exactly one of {day_off} mean a day off: use type "free".'
        )
    else:
        lines.append('- Empty cells mean a day off: use type "free".')
    lines.append('- Every other entry with working times is a regular shift: use type "shift".')
    lines.append("- Do not treat any other marker as an absence.")
    return "\n".join(lines)


def _build_filter_rules(employee_filter: str | None) -> str:
    """
    Build the name-filter directives.

    Each directive embeds the literal filter exactly once: the match
    directive, the exclusion directive and the no-match directive.
    """
    if not employee_filter:
        return ""

    name = f'"{employee_filter}"'
    no_match = json.dumps(
        {"employeeName": None, "shifts": [], "error": "No shifts found for the requested employee"}
    )
    return f"""
## Employee Filter:

- Only extract shifts for the employee {name}. Match names case-insensitively and accept partial matches (e.g. only the last name, or initials with the last name).
- Exclude all records of every other person. The result must not contain a single shift of an employee other than {name}.
- If no employee matching {name} appears in the document, do not fail and do not omit any field: return exactly {no_match}
- Set "employeeName" to the name as it is written in the document.
"""


def build_system_prompt(profile: ExtractionProfile) -> str:
    """
    Build the system instruction for a profile.

    Args:
        profile: Language, absence codes and optional name filter.

    Returns:
        The system-role instruction text.
    """
    return EXTRACTION_SYSTEM_PROMPT.format(
        language_name=LANGUAGE_NAMES[profile.language],
        weekday_list=", ".join(WEEKDAY_NAMES[profile.language]),
        absence_rules=_build_absence_rules(profile.absence_codes),
        filter_rules=_build_filter_rules(profile.employee_filter),
        response_format=json.dumps(RESPONSE_FORMAT_EXAMPLE, indent=2),
    )


def build_user_directive(profile: ExtractionProfile) -> str:
    """Short natural-language directive sent alongside the document."""
    return USER_DIRECTIVE_FILTERED if profile.employee_filter else USER_DIRECTIVE


def build_extraction_request(
    document_uri: str,
    filename: str,
    profile: ExtractionProfile,
    model: str,
) -> dict[str, Any]:
    """
    Build the chat-completion payload.

    The payload carries only the model identifier and the messages; no
    other generation parameters are set.

    Args:
        document_uri: Encoded document (data URI).
        filename: Original filename of the document.
        profile: Extraction profile.
        model: Model identifier understood by the service.

    Returns:
        Request body as a dictionary.
    """
    logger.debug(
        "Building extraction request for '%s' (language=%s, filter=%s)",
        filename,
        profile.language,
        "yes" if profile.employee_filter else "no",
    )
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": build_system_prompt(profile)},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": build_user_directive(profile)},
                    {
                        "type": "file",
                        "file": {"filename": filename, "file_data": document_uri},
                    },
                ],
            },
        ],
    }
