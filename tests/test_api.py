"""Tests for FastAPI endpoints."""

from fastapi.testclient import TestClient

from shift_parser.backend.services.session import ScheduleSession


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_root_endpoint(self, client: TestClient):
        """Test root endpoint returns health status."""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data

    def test_health_endpoint(self, client: TestClient):
        """Test /health endpoint returns health status."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestParseScheduleEndpoint:
    """Tests for POST /schedule/parse endpoint."""

    def test_rejects_non_pdf(self, client: TestClient):
        """Test that non-PDF files are rejected."""
        response = client.post(
            "/schedule/parse",
            files={"file": ("test.txt", b"not a pdf", "text/plain")},
        )
        assert response.status_code == 400
        assert "PDF" in response.json()["detail"]

    def test_rejects_empty_file(self, client: TestClient):
        """Test that empty files are rejected."""
        response = client.post(
            "/schedule/parse",
            files={"file": ("test.pdf", b"", "application/pdf")},
        )
        assert response.status_code == 400
        assert "Empty" in response.json()["detail"]

    def test_rejects_invalid_pdf(self, client: TestClient, invalid_file_bytes: bytes):
        """Test that content without a PDF header is rejected."""
        response = client.post(
            "/schedule/parse",
            files={"file": ("test.pdf", invalid_file_bytes, "application/pdf")},
        )
        assert response.status_code == 400

    def test_rejects_overlong_employee_name(
        self, client: TestClient, session: ScheduleSession, sample_pdf_bytes: bytes
    ):
        """Test that an over-long filter is a client error, not a server error."""
        response = client.post(
            "/schedule/parse",
            files={"file": ("plan.pdf", sample_pdf_bytes, "application/pdf")},
            data={"employee_name": "A" * 201},
        )
        assert response.status_code == 422
        assert session.in_flight is False

    def test_parse_in_mock_mode(self, client: TestClient, sample_pdf_bytes: bytes):
        """Test a full parse with the mock extractor."""
        response = client.post(
            "/schedule/parse",
            files={"file": ("plan.pdf", sample_pdf_bytes, "application/pdf")},
            data={"employee_name": "Max Mustermann"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["filename"] == "plan.pdf"
        assert data["schedule"]["employeeName"] == "Max Mustermann"
        first = data["schedule"]["shifts"][0]
        assert first["date"] == "2024-03-04"
        assert first["startTime"] == "08:00"

    def test_in_flight_request_conflicts(
        self, client: TestClient, session: ScheduleSession, sample_pdf_bytes: bytes
    ):
        """Test that a trigger while another is outstanding is refused."""
        session.in_flight = True
        response = client.post(
            "/schedule/parse",
            files={"file": ("plan.pdf", sample_pdf_bytes, "application/pdf")},
        )
        assert response.status_code == 409

    def test_no_match_view(self, make_extractor, sample_pdf_bytes: bytes):
        """Test that a no-match outcome is returned as a normal view."""
        from shift_parser.backend.main import app
        from shift_parser.backend.services.session import get_schedule_session

        session = ScheduleSession(extractor=make_extractor(content='{"shifts": []}'))
        app.dependency_overrides[get_schedule_session] = lambda: session
        try:
            with TestClient(app) as test_client:
                response = test_client.post(
                    "/schedule/parse",
                    files={"file": ("plan.pdf", sample_pdf_bytes, "application/pdf")},
                    data={"employee_name": "Erika"},
                )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "no_match"
        assert data["schedule"] is None
        assert data["message"] == "No shifts found for Erika."


class TestScheduleSlotEndpoints:
    """Tests for GET and DELETE /schedule."""

    def test_get_initial_view(self, client: TestClient):
        """Test the slot is idle before any upload."""
        response = client.get("/schedule")
        assert response.status_code == 200
        assert response.json()["status"] == "idle"

    def test_clear_after_parse(self, client: TestClient, sample_pdf_bytes: bytes):
        """Test that clearing discards the parsed schedule."""
        client.post(
            "/schedule/parse",
            files={"file": ("plan.pdf", sample_pdf_bytes, "application/pdf")},
        )
        assert client.get("/schedule").json()["status"] == "ready"

        response = client.delete("/schedule")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "idle"
        assert data["schedule"] is None
