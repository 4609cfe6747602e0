"""
Tests for dailybrief.server module.
"""

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from dailybrief.errors import ConfigurationError, FetchError
from dailybrief.pipeline import RunResult
from dailybrief.server import LIVENESS_MESSAGE, create_app


@pytest.fixture
def runner():
    return MagicMock(return_value=RunResult("sent", "Zadania wykonane pomyślnie!", date="2025-06-25"))


@pytest.fixture
def client(settings, runner):
    return TestClient(create_app(settings=settings, runner=runner))


class TestRoot:
    """Tests for the liveness endpoint."""

    def test_returns_plain_text(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.text == LIVENESS_MESSAGE
        assert response.headers["content-type"].startswith("text/plain")


class TestRun:
    """Tests for POST /run."""

    def test_success(self, client, runner, settings):
        response = client.post("/run")

        assert response.status_code == 200
        assert response.json() == {"status": "success", "message": "Zadania wykonane pomyślnie!"}
        runner.assert_called_once_with(settings)

    def test_failure_returns_500(self, client, runner):
        runner.side_effect = FetchError("sheets", "could not read Grafik!A:Z")

        response = client.post("/run")

        assert response.status_code == 500
        assert response.json() == {"status": "error", "message": "sheets: could not read Grafik!A:Z"}

    def test_overlapping_run_returns_409(self, settings, runner):
        app = create_app(settings=settings, runner=runner)
        client = TestClient(app)

        with app.state.run_lock.hold():
            response = client.post("/run")

        assert response.status_code == 409
        assert response.json()["status"] == "error"
        runner.assert_not_called()

    def test_lock_released_after_failure(self, client, runner):
        runner.side_effect = RuntimeError("boom")
        assert client.post("/run").status_code == 500

        runner.side_effect = None
        assert client.post("/run").status_code == 200

    def test_configuration_error_reported(self, runner):
        """Missing settings should not stop the server, only fail runs."""
        error = ConfigurationError("Missing required environment variables: SPREADSHEET_ID")
        with patch("dailybrief.server.load_settings", side_effect=error):
            app = create_app(runner=runner)
        client = TestClient(app)

        assert client.get("/").status_code == 200

        response = client.post("/run")
        assert response.status_code == 500
        assert "SPREADSHEET_ID" in response.json()["message"]
        runner.assert_not_called()

    def test_get_not_allowed(self, client):
        assert client.get("/run").status_code == 405
