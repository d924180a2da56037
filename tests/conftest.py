"""Test fixtures — a fresh app and in-memory database per test.

Learn: Each test builds its own app from explicit Settings:
- database_url points at in-memory SQLite (aiosqlite + StaticPool), so
  the whole schema vanishes when the test's engine is disposed
- bcrypt_rounds=4 keeps hashing fast; production uses 12
- no Redis: rate limiting is skipped because app.state.redis is None

httpx's ASGITransport doesn't run the lifespan, so the fixture creates
the tables itself.
"""

import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from trackmyspend.config import Settings
from trackmyspend.main import create_app


@pytest.fixture()
def settings():
    return Settings(
        database_url="sqlite+aiosqlite://",
        jwt_secret="test-secret-do-not-use",
        bcrypt_rounds=4,
        environment="test",
    )


@pytest_asyncio.fixture()
async def app(settings):
    app = create_app(settings)
    await app.state.db.create_all()
    try:
        yield app
    finally:
        await app.state.db.dispose()


@pytest_asyncio.fixture()
async def db_session(app):
    """A session on the same database the app's requests use."""
    async with app.state.db.session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def email():
    return f"user-{uuid.uuid4().hex[:8]}@example.com"


async def register_and_login(client, email: str, password: str = "secret1") -> dict:
    """Register a user and return the login response body."""
    r = await client.post(
        "/api/auth/register", json={"email": email, "password": password}
    )
    assert r.status_code == 201, r.text
    r = await client.post(
        "/api/auth/login", json={"email": email, "password": password}
    )
    assert r.status_code == 200, r.text
    return r.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
