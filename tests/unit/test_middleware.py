"""Tests for CORS, security headers, and rate limiting middleware."""

import time
from unittest.mock import patch

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from starlette.requests import Request

from registry_api.api.middleware import RateLimitMiddleware, SecurityHeadersMiddleware, get_client_ip, setup_cors
from registry_api.core.config import Settings


def _create_test_app() -> FastAPI:
    """Create a minimal FastAPI app for middleware testing."""
    app = FastAPI()

    @app.get("/records")
    async def records() -> dict:
        return {"ok": True}

    @app.get("/api/v1/health")
    async def health() -> dict:
        return {"status": "healthy"}

    @app.get("/denied")
    async def denied() -> dict:
        raise HTTPException(
            status_code=403,
            detail="Access denied: city_mismatch",
            headers={"X-Access-Reason": "city_mismatch"},
        )

    return app


class TestSecurityHeadersMiddleware:
    """Tests for SecurityHeadersMiddleware."""

    @pytest.fixture
    def client(self) -> TestClient:
        app = _create_test_app()
        app.add_middleware(SecurityHeadersMiddleware)
        return TestClient(app)

    def test_security_headers_present(self, client: TestClient) -> None:
        response = client.get("/records")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Referrer-Policy"] == "no-referrer"
        assert "max-age=31536000" in response.headers["Strict-Transport-Security"]

    def test_responses_are_not_cacheable(self, client: TestClient) -> None:
        assert client.get("/records").headers["Cache-Control"] == "no-store"

    def test_headers_added_to_error_responses(self, client: TestClient) -> None:
        response = client.get("/denied")
        assert response.status_code == 403
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-Access-Reason"] == "city_mismatch"


class TestCors:
    """Tests for setup_cors."""

    def test_access_reason_exposed(self) -> None:
        app = _create_test_app()
        setup_cors(
            app,
            Settings(
                database_url="sqlite+aiosqlite:///:memory:",
                jwt_secret_key="test-secret-key-not-for-production",
                cors_origins="https://registry.example.ph",
            ),
        )
        client = TestClient(app)
        response = client.get("/denied", headers={"Origin": "https://registry.example.ph"})
        assert response.headers["access-control-allow-origin"] == "https://registry.example.ph"
        assert "X-Access-Reason" in response.headers["access-control-expose-headers"]


class TestRateLimitMiddleware:
    """Tests for RateLimitMiddleware."""

    @pytest.fixture
    def client(self) -> TestClient:
        app = _create_test_app()
        app.add_middleware(RateLimitMiddleware, requests_per_minute=5)
        return TestClient(app)

    def test_requests_within_limit_succeed(self, client: TestClient) -> None:
        for _ in range(5):
            assert client.get("/records").status_code == 200

    def test_request_over_limit_returns_429(self, client: TestClient) -> None:
        for _ in range(5):
            client.get("/records")

        response = client.get("/records")
        assert response.status_code == 429
        assert response.json() == {"detail": "Rate limit exceeded"}
        assert int(response.headers["Retry-After"]) >= 1

    def test_health_is_exempt(self, client: TestClient) -> None:
        for _ in range(10):
            assert client.get("/api/v1/health").status_code == 200
        assert client.get("/records").status_code == 200

    def test_rate_limit_window_expires(self) -> None:
        """Old requests outside the 60s window are cleaned up."""
        app = _create_test_app()
        app.add_middleware(RateLimitMiddleware, requests_per_minute=2)
        client = TestClient(app)

        base_time = time.time()

        with patch("registry_api.api.middleware.time.time", return_value=base_time):
            assert client.get("/records").status_code == 200
            assert client.get("/records").status_code == 200
            assert client.get("/records").status_code == 429

        with patch("registry_api.api.middleware.time.time", return_value=base_time + 61):
            assert client.get("/records").status_code == 200

    def test_different_proxy_ips_have_separate_limits(self) -> None:
        app = _create_test_app()
        app.add_middleware(RateLimitMiddleware, requests_per_minute=2)
        client = TestClient(app)

        for _ in range(2):
            assert client.get("/records", headers={"CF-Connecting-IP": "203.0.113.1"}).status_code == 200
        assert client.get("/records", headers={"CF-Connecting-IP": "203.0.113.1"}).status_code == 429
        assert client.get("/records", headers={"CF-Connecting-IP": "203.0.113.2"}).status_code == 200


def _make_request(headers: dict[str, str] | None = None, client_host: str | None = "127.0.0.1") -> Request:
    """Build a minimal Starlette Request with given headers and client address."""
    scope: dict = {
        "type": "http",
        "method": "GET",
        "path": "/records",
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
    }
    if client_host is not None:
        scope["client"] = (client_host, 0)
    return Request(scope)


class TestGetClientIp:
    """Tests for the get_client_ip helper function."""

    def test_cf_connecting_ip_takes_priority(self) -> None:
        request = _make_request(
            headers={
                "CF-Connecting-IP": "203.0.113.1",
                "X-Forwarded-For": "198.51.100.1, 10.0.0.1",
                "X-Real-IP": "192.0.2.1",
            }
        )
        assert get_client_ip(request) == "203.0.113.1"

    def test_x_forwarded_for_uses_leftmost_ip(self) -> None:
        request = _make_request(headers={"X-Forwarded-For": "203.0.113.1, 10.0.0.1, 10.0.0.2"})
        assert get_client_ip(request) == "203.0.113.1"

    def test_falls_back_to_client_host(self) -> None:
        assert get_client_ip(_make_request(client_host="10.0.0.1")) == "10.0.0.1"

    def test_returns_unknown_when_no_client(self) -> None:
        assert get_client_ip(_make_request(headers={}, client_host=None)) == "unknown"

    def test_empty_trusted_list_ignores_headers(self) -> None:
        request = _make_request(headers={"X-Real-IP": "203.0.113.1"}, client_host="10.0.0.1")
        assert get_client_ip(request, []) == "10.0.0.1"

    def test_empty_header_value_skipped(self) -> None:
        request = _make_request(headers={"CF-Connecting-IP": "  ", "X-Real-IP": "203.0.113.1"})
        assert get_client_ip(request) == "203.0.113.1"


class TestRateLimitBookkeeping:
    """Per-client state is dropped once its window has passed."""

    def test_idle_clients_are_forgotten(self) -> None:
        middleware = RateLimitMiddleware(_create_test_app(), requests_per_minute=2)
        client = TestClient(middleware)
        base_time = time.time()

        with patch("registry_api.api.middleware.time.time", return_value=base_time):
            for ip in ("203.0.113.1", "203.0.113.2", "203.0.113.3"):
                assert client.get("/records", headers={"CF-Connecting-IP": ip}).status_code == 200
        assert set(middleware._hits) == {"203.0.113.1", "203.0.113.2", "203.0.113.3"}

        with patch("registry_api.api.middleware.time.time", return_value=base_time + 61):
            assert client.get("/records", headers={"CF-Connecting-IP": "203.0.113.9"}).status_code == 200
        assert set(middleware._hits) == {"203.0.113.9"}
