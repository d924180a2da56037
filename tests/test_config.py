"""Settings tests."""

import pytest
from pydantic import ValidationError

from trackmyspend.config import DEFAULT_JWT_SECRET, Settings


def test_defaults():
    s = Settings(environment="development")
    assert s.jwt_algorithm == "HS256"
    assert s.token_expire_days == 7
    assert s.bcrypt_rounds == 12
    assert s.password_min_length == 6


def test_production_requires_real_secret():
    with pytest.raises(ValidationError, match="TRACKMYSPEND_JWT_SECRET"):
        Settings(environment="production", jwt_secret=DEFAULT_JWT_SECRET)


def test_production_with_secret():
    s = Settings(environment="production", jwt_secret="a-long-random-value")
    assert not s.is_development


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("TRACKMYSPEND_TOKEN_EXPIRE_DAYS", "3")
    assert Settings().token_expire_days == 3
