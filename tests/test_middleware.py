"""Tests for security middleware — headers, request IDs, rate limiting.

Learn: The app under test has no Redis, so the rate limiter passes
everything through; a small in-memory stand-in exercises the limit.
"""

import pytest


@pytest.mark.asyncio
async def test_security_headers_on_health(client):
    r = await client.get("/api/health")
    assert r.status_code == 200
    assert r.headers["X-Content-Type-Options"] == "nosniff"
    assert r.headers["X-Frame-Options"] == "DENY"
    assert r.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"
    assert "Cache-Control" not in r.headers


@pytest.mark.asyncio
async def test_auth_responses_not_cached(client, email):
    r = await client.post(
        "/api/auth/login", json={"email": email, "password": "secret1"}
    )
    assert r.headers["Cache-Control"] == "no-store"


@pytest.mark.asyncio
async def test_security_headers_on_error_responses(client):
    r = await client.get("/api/auth/me")
    assert r.status_code == 401
    assert r.headers["X-Frame-Options"] == "DENY"


@pytest.mark.asyncio
async def test_request_id_generated(client):
    r1 = await client.get("/api/health")
    r2 = await client.get("/api/health")
    assert "X-Request-ID" in r1.headers
    assert r1.headers["X-Request-ID"] != r2.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_request_id_propagated(client):
    custom_id = "test-trace-12345"
    r = await client.get("/api/health", headers={"X-Request-ID": custom_id})
    assert r.headers["X-Request-ID"] == custom_id


@pytest.mark.asyncio
async def test_no_hsts_on_http(client):
    r = await client.get("/api/health")
    assert "Strict-Transport-Security" not in r.headers


@pytest.mark.asyncio
async def test_no_rate_limit_headers_without_redis(client):
    r = await client.get("/api/health")
    assert "X-RateLimit-Limit" not in r.headers


class FakeRedis:
    """Just enough of redis.asyncio.Redis for the rate limiter."""

    def __init__(self):
        self.counts = {}

    async def incr(self, key):
        self.counts[key] = self.counts.get(key, 0) + 1
        return self.counts[key]

    async def expire(self, key, seconds):
        return True

    async def ping(self):
        return True


@pytest.mark.asyncio
async def test_login_rate_limited(app, client, settings, email):
    app.state.redis = FakeRedis()

    for _ in range(settings.rate_limit_auth_rpm):
        r = await client.post(
            "/api/auth/login", json={"email": email, "password": "secret1"}
        )
        assert r.status_code == 404
        assert r.headers["X-RateLimit-Limit"] == str(settings.rate_limit_auth_rpm)

    r = await client.post(
        "/api/auth/login", json={"email": email, "password": "secret1"}
    )
    assert r.status_code == 429
    assert r.headers["Retry-After"] == "60"
    assert "message" in r.json()

    # Other routes use the general bucket
    r = await client.get("/api/health")
    assert r.status_code == 200
    assert r.headers["X-RateLimit-Limit"] == str(settings.rate_limit_rpm)


@pytest.mark.asyncio
async def test_cors_allows_frontend_origin(client):
    r = await client.options(
        "/api/auth/login",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert r.status_code == 200
    assert r.headers["access-control-allow-origin"] == "http://localhost:5173"
