"""
HTTP client for the remote completion endpoint.

Wraps the OpenAI-compatible chat completions API of the extraction
service. One attempt per call, bounded by a total timeout.
"""

import asyncio
import logging
from http import HTTPStatus
from typing import Any

import openai

from ..exceptions import ExtractionTimeoutError, ServiceError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300.0


def _status_description(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Unknown Status"


class ExtractionClient:
    """
    Stateless client for the extraction service.

    The caller is responsible for serializing calls against the same
    document; the client itself is safe to reuse across calls.
    """

    def __init__(
        self,
        api_key: str | None,
        customer_id: str | None,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: Any = None,
    ):
        """
        Initialize the extraction client.

        Args:
            api_key: Bearer credential for the service.
            customer_id: Account identifier sent as the ``customerId`` header.
            base_url: Service base URL (``/chat/completions`` is appended).
            timeout: Total wait bound in seconds.
            client: Pre-built OpenAI-compatible async client (used by tests).
        """
        self.base_url = base_url
        self.timeout = timeout

        if client is not None:
            self._client = client
            return

        if not api_key:
            raise ServiceError(
                "Extraction service credential not provided. Set EXTRACTION_API_KEY."
            )
        if not customer_id:
            raise ServiceError(
                "Extraction service account not provided. Set EXTRACTION_CUSTOMER_ID."
            )

        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            default_headers={"customerId": customer_id},
        )

    async def complete(self, payload: dict[str, Any]) -> str | None:
        """
        Send a chat-completion payload and return the completion text.

        Args:
            payload: Request body with ``model`` and ``messages``.

        Returns:
            ``choices[0].message.content``, or None when the service sent
            no choice.

        Raises:
            ExtractionTimeoutError: If no response arrives within the bound.
            ServiceError: On a non-success status or a transport failure.
        """
        logger.info("Sending extraction request to %s (model=%s)", self.base_url, payload.get("model"))

        try:
            # The SDK timeout applies per connect/read step; wait_for bounds the whole call
            response = await asyncio.wait_for(
                self._client.chat.completions.create(**payload, timeout=self.timeout),
                timeout=self.timeout,
            )
        except (openai.APITimeoutError, asyncio.TimeoutError) as e:
            logger.error("Extraction service timed out after %gs", self.timeout)
            raise ExtractionTimeoutError(
                f"The extraction service did not respond within {self.timeout:g} seconds"
            ) from e
        except openai.APIStatusError as e:
            description = _status_description(e.status_code)
            logger.error("Extraction service returned %d %s", e.status_code, description)
            raise ServiceError(
                f"Failed to parse PDF: {description}", status_code=e.status_code
            ) from e
        except openai.APIConnectionError as e:
            logger.error("Could not reach extraction service: %s", e)
            raise ServiceError(f"Could not reach the extraction service: {e}") from e
        except openai.APIError as e:
            logger.error("Extraction service error: %s", e)
            raise ServiceError(f"Extraction service error: {e}") from e

        if not response.choices:
            return None
        message = response.choices[0].message
        return message.content if message is not None else None
