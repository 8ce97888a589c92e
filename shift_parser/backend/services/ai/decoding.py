"""
Decoding of free-text completions into ParsedSchedule objects.

The service answers with text that embeds a JSON object, optionally
wrapped in a fenced code block.
"""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

# Handle both package imports and standalone imports
try:
    from ...models import ParsedSchedule
except ImportError:
    from models import ParsedSchedule

from ..exceptions import EmptyResponseError, MalformedResponseError

logger = logging.getLogger(__name__)

FENCED_BLOCK_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


def extract_json_text(content: str | None) -> str:
    """
    Locate the JSON text inside a completion.

    Returns the body of the first fenced block, or the whole trimmed text
    when no fence is present.

    Raises:
        EmptyResponseError: If the completion is empty.
    """
    if content is None or not content.strip():
        raise EmptyResponseError("No response from the extraction service")

    match = FENCED_BLOCK_RE.search(content)
    if match:
        return match.group(1).strip()
    return content.strip()


def _loads_object(text: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        # Fall back to the outermost braces (prose around an unfenced object)
        start, end = text.find("{"), text.rfind("}")
        if start == -1 or end <= start:
            raise MalformedResponseError("No JSON object found in the extraction response")
        try:
            data = json.loads(text[start : end + 1])
        except json.JSONDecodeError as e:
            raise MalformedResponseError(
                f"Invalid JSON in extraction response: {e}"
            ) from e

    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(data).__name__}"
        )
    return data


def decode_completion(content: str | None) -> ParsedSchedule:
    """
    Decode a completion into a ParsedSchedule.

    Only the shape is checked here: ``shifts`` must be a list and every
    entry must carry date, weekday, startTime and endTime as strings.

    Args:
        content: Raw ``choices[0].message.content`` text.

    Returns:
        The decoded schedule.

    Raises:
        EmptyResponseError: If the completion is empty.
        MalformedResponseError: If no valid schedule object can be decoded.
    """
    text = extract_json_text(content)
    data = _loads_object(text)

    if not isinstance(data.get("shifts"), list):
        logger.error("Extraction response without shifts list: %s", text[:500])
        raise MalformedResponseError("Extraction response has no 'shifts' list")

    # Never accept warnings from the remote side
    data.pop("warnings", None)

    try:
        schedule = ParsedSchedule.model_validate(data)
    except ValidationError as e:
        logger.error("Malformed schedule in extraction response: %s", e)
        raise MalformedResponseError(f"Malformed schedule in extraction response: {e}") from e

    logger.info(
        "Decoded schedule: %d shift(s), employee=%s",
        len(schedule.shifts),
        schedule.employee_name or "-",
    )
    return schedule
