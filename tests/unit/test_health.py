"""
Tests for health check endpoints.
"""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from account_insights.main import app

client = TestClient(app)


def test_healthz_endpoint():
    """Test the basic health check endpoint."""
    response = client.get("/healthz")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == "account-insights"


def test_healthz_sets_request_id_header():
    response = client.get("/healthz", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_readyz_endpoint_all_checks_healthy():
    """Test readiness endpoint when the pool is healthy and config is complete."""
    with (
        patch(
            "account_insights.routes.health.db_health_check",
            AsyncMock(return_value={"healthy": True, "pool_stats": {"pool_size": 2}}),
        ),
        patch("account_insights.routes.health.settings.GENAI_API_KEY", "test-key"),
    ):
        response = client.get("/readyz")

    assert response.status_code == 200
    data = response.json()
    assert data["overall_ok"] is True
    assert data["checks"]["database"]["ok"] is True
    assert data["checks"]["database"]["pool_stats"] == {"pool_size": 2}
    assert data["checks"]["configuration"]["ok"] is True


def test_readyz_endpoint_database_unhealthy():
    """Test readiness endpoint when the pool reports unhealthy."""
    with (
        patch(
            "account_insights.routes.health.db_health_check",
            AsyncMock(return_value={"healthy": False, "error": "Pool not initialized"}),
        ),
        patch("account_insights.routes.health.settings.GENAI_API_KEY", "test-key"),
    ):
        response = client.get("/readyz")

    data = response.json()
    assert data["overall_ok"] is False
    assert data["checks"]["database"]["ok"] is False
    assert data["checks"]["database"]["error"] == "Pool not initialized"


def test_readyz_endpoint_database_exception():
    with (
        patch(
            "account_insights.routes.health.db_health_check",
            AsyncMock(side_effect=ConnectionError("refused")),
        ),
        patch("account_insights.routes.health.settings.GENAI_API_KEY", "test-key"),
    ):
        response = client.get("/readyz")

    data = response.json()
    assert data["overall_ok"] is False
    assert "ConnectionError" in data["checks"]["database"]["error"]


def test_readyz_endpoint_missing_api_key():
    """Test readiness endpoint when the generative AI key is not configured."""
    with (
        patch(
            "account_insights.routes.health.db_health_check",
            AsyncMock(return_value={"healthy": True}),
        ),
        patch("account_insights.routes.health.settings.GENAI_API_KEY", None),
    ):
        response = client.get("/readyz")

    data = response.json()
    assert data["overall_ok"] is False
    assert data["checks"]["configuration"]["issues"] == ["GENAI_API_KEY not set"]
