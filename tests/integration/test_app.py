"""Application-level behaviour: health, error envelopes and logging setup."""

import pytest
from fastapi.testclient import TestClient

from storefront.http import create_app
from storefront.utils.logging import configure_logging, current_env, get_log_level


@pytest.fixture()
def app():
    return create_app()


class TestHealth:
    def test_reports_ok(self, app):
        response = TestClient(app).get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["domain"] == "storefront"


class TestErrorEnvelopes:
    def test_malformed_body_is_validation(self, app):
        response = TestClient(app).post("/auth/login", json={"email": "asha@example.com"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation"
        assert any("password" in key for key in body["details"])

    def test_unexpected_error_is_internal(self, app):
        @app.get("/boom")
        async def boom():
            raise RuntimeError("database on fire")

        response = TestClient(app, raise_server_exceptions=False).get("/boom")
        assert response.status_code == 500
        assert response.json() == {"error": "Internal", "message": "Internal server error"}


class TestLogging:
    def test_test_environment_is_quiet(self):
        assert current_env() == "test"
        assert get_log_level() == "WARNING"

    def test_file_logging(self, tmp_path):
        configure_logging(log_dir=str(tmp_path), json_output=True)
        try:
            assert (tmp_path / "storefront.log").exists()
            assert (tmp_path / "storefront_error.log").exists()
        finally:
            configure_logging()
