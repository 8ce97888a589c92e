"""Pytest configuration and fixtures."""

import asyncio
import json
from types import SimpleNamespace
from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient

from shift_parser.backend.main import app
from shift_parser.backend.services.ai import ScheduleExtractor
from shift_parser.backend.services.session import ScheduleSession, get_schedule_session


class FakeCompletions:
    """Stand-in for ``client.chat.completions`` of the OpenAI SDK."""

    def __init__(
        self,
        content: str | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ):
        self.content = content
        self.error = error
        self.delay = delay
        self.calls: list[dict[str, Any]] = []

    async def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(role="assistant", content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(index=0, message=message)])


class FakeAsyncClient:
    """Minimal async OpenAI-compatible client."""

    def __init__(
        self,
        content: str | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
    ):
        self.chat = SimpleNamespace(completions=FakeCompletions(content, error, delay))

    @property
    def calls(self) -> list[dict[str, Any]]:
        return self.chat.completions.calls


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """
    Create a minimal valid PDF for testing.

    Only the header matters: the document is never rendered locally.
    """
    return b"""%PDF-1.4
1 0 obj
<< /Type /Catalog /Pages 2 0 R >>
endobj
2 0 obj
<< /Type /Pages /Kids [3 0 R] /Count 1 >>
endobj
3 0 obj
<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] >>
endobj
trailer
<< /Size 4 /Root 1 0 R >>
%%EOF"""


@pytest.fixture
def invalid_file_bytes() -> bytes:
    """Create invalid (non-PDF) file bytes for testing."""
    return b"This is not a PDF file"


@pytest.fixture
def schedule_json() -> str:
    """A service reply carrying one shift."""
    return json.dumps(
        {
            "employeeName": "A. Smith",
            "shifts": [
                {
                    "date": "2024-03-04",
                    "weekday": "Monday",
                    "startTime": "08:00",
                    "endTime": "16:00",
                }
            ],
        }
    )


@pytest.fixture
def make_extractor():
    """Factory for extractors backed by a fake service client."""

    def _make(
        content: str | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
        **kwargs: Any,
    ) -> ScheduleExtractor:
        fake = FakeAsyncClient(content=content, error=error, delay=delay)
        extractor = ScheduleExtractor(
            api_key="test-key",
            customer_id="cus_test",
            model="test-model",
            client=fake,
            **kwargs,
        )
        extractor.fake = fake
        return extractor

    return _make


@pytest.fixture
def session() -> ScheduleSession:
    """A session running in mock mode."""
    return ScheduleSession(extractor=ScheduleExtractor(api_key="", use_mock=True))


@pytest.fixture
def client(session: ScheduleSession) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    app.dependency_overrides[get_schedule_session] = lambda: session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
