"""Token issue/verify tests — no HTTP, no database."""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from trackmyspend.auth.dependencies import extract_bearer_token, identity_from_token
from trackmyspend.auth.jwt import TokenError, create_access_token, verify_token
from trackmyspend.config import Settings
from trackmyspend.errors import UnauthorizedError


def test_token_carries_user_id_and_email(settings):
    user_id = str(uuid.uuid4())
    token = create_access_token(user_id, "a@x.com", settings)

    payload = verify_token(token, settings)
    assert payload["sub"] == user_id
    assert payload["email"] == "a@x.com"


def test_token_expires_after_seven_days(settings):
    token = create_access_token(str(uuid.uuid4()), "a@x.com", settings)
    payload = jwt.decode(token, options={"verify_signature": False})

    lifetime = payload["exp"] - payload["iat"]
    assert lifetime == int(timedelta(days=7).total_seconds())


def test_expired_token_rejected(settings):
    token = create_access_token(
        str(uuid.uuid4()), "a@x.com", settings, expires_delta=timedelta(seconds=-5)
    )
    with pytest.raises(TokenError, match="expired"):
        verify_token(token, settings)


def test_wrong_secret_rejected(settings):
    token = create_access_token(str(uuid.uuid4()), "a@x.com", settings)
    other = Settings(
        database_url=settings.database_url,
        jwt_secret="a-different-secret",
        environment="test",
    )
    with pytest.raises(TokenError, match="Invalid token"):
        verify_token(token, other)


def test_garbage_token_rejected(settings):
    with pytest.raises(TokenError):
        verify_token("not.a.jwt", settings)


def test_empty_token_rejected(settings):
    with pytest.raises(TokenError, match="No token provided"):
        verify_token("", settings)


def test_token_without_subject_rejected(settings):
    token = jwt.encode(
        {"email": "a@x.com", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )
    with pytest.raises(TokenError):
        verify_token(token, settings)


# ─── Identity resolution ────────────────────────────────


def test_identity_from_valid_token(settings):
    user_id = str(uuid.uuid4())
    identity = identity_from_token(
        create_access_token(user_id, "a@x.com", settings), settings
    )
    assert identity.user_id == user_id
    assert identity.email == "a@x.com"


def test_identity_from_expired_token(settings):
    token = create_access_token(
        str(uuid.uuid4()), "a@x.com", settings, expires_delta=timedelta(seconds=-5)
    )
    with pytest.raises(UnauthorizedError) as exc:
        identity_from_token(token, settings)
    assert exc.value.status_code == 401
    assert exc.value.message == "Token has expired"


def test_identity_rejects_non_uuid_subject(settings):
    token = create_access_token("not-a-uuid", "a@x.com", settings)
    with pytest.raises(UnauthorizedError, match="Invalid token"):
        identity_from_token(token, settings)


@pytest.mark.parametrize(
    "header,message",
    [
        (None, "No token provided"),
        ("", "No token provided"),
        ("Bearer", "Invalid token"),
        ("Bearer   ", "Invalid token"),
        ("Basic dXNlcjpwYXNz", "Invalid token"),
    ],
)
def test_extract_bearer_token_rejects(header, message):
    with pytest.raises(UnauthorizedError) as exc:
        extract_bearer_token(header)
    assert exc.value.message == message


def test_extract_bearer_token():
    assert extract_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"
    assert extract_bearer_token("bearer abc") == "abc"
