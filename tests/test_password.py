"""Password hashing tests."""

import pytest

from trackmyspend.auth.password import (
    hash_password,
    hash_password_async,
    verify_password,
    verify_password_async,
)


def test_hash_is_salted_bcrypt():
    h1 = hash_password("secret1", rounds=4)
    h2 = hash_password("secret1", rounds=4)
    assert h1.startswith("$2b$04$")
    assert h1 != h2  # random salt per hash
    assert "secret1" not in h1


def test_default_cost_factor_is_12():
    assert hash_password("secret1").startswith("$2b$12$")


def test_verify_roundtrip():
    h = hash_password("correct horse", rounds=4)
    assert verify_password("correct horse", h)
    assert not verify_password("wrong horse", h)


def test_verify_malformed_hash_is_false():
    assert not verify_password("secret1", "not-a-bcrypt-hash")
    assert not verify_password("secret1", "")


@pytest.mark.asyncio
async def test_async_wrappers():
    h = await hash_password_async("secret1", rounds=4)
    assert await verify_password_async("secret1", h)
    assert not await verify_password_async("secret2", h)
