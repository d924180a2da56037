"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers to extract
and validate the current user identity from the request.

Only one mechanism: `Authorization: Bearer <jwt>`. Anything else on a
protected route short-circuits with 401 before the handler runs.
"""

import uuid
from typing import Optional

import structlog
from fastapi import Depends, Header, Request

from trackmyspend.auth.jwt import TokenError, verify_token
from trackmyspend.config import Settings
from trackmyspend.errors import UnauthorizedError


class CurrentIdentity:
    """Represents the authenticated user making the request.

    Learn: Built from the token claims alone — no database lookup. A token
    for a since-deleted user still resolves here; handlers that load the
    user report 404 in that case.
    """

    def __init__(self, user_id: str, email: Optional[str] = None):
        self.user_id = user_id
        self.email = email

    def __repr__(self) -> str:
        return f"CurrentIdentity(user_id={self.user_id!r}, email={self.email!r})"


def get_settings(request: Request) -> Settings:
    """FastAPI dependency — the Settings instance the app was built with."""
    return request.app.state.settings


def identity_from_token(token: str, settings: Settings) -> CurrentIdentity:
    """Verify a bearer token and resolve it to an identity.

    Raises UnauthorizedError for missing, malformed, expired, or
    badly signed tokens.
    """
    try:
        payload = verify_token(token, settings)
    except TokenError as e:
        message = str(e)
        if message.startswith("Invalid token"):
            message = "Invalid token"
        raise UnauthorizedError(message)

    try:
        user_id = str(uuid.UUID(str(payload["sub"])))
    except ValueError:
        raise UnauthorizedError("Invalid token")
    return CurrentIdentity(user_id=user_id, email=payload.get("email"))


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an `Authorization: Bearer <token>` header value."""
    if not authorization:
        raise UnauthorizedError("No token provided")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError("Invalid token")
    return token.strip()


async def get_current_user(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> CurrentIdentity:
    """Extract current identity (required — 401 if no valid token).

    Learn: This is the session guard. Used for every protected route;
    the resolved user id is also bound to the structlog context so all
    log lines for the request carry it.
    """
    token = extract_bearer_token(authorization)
    identity = identity_from_token(token, settings)
    structlog.contextvars.bind_contextvars(user_id=identity.user_id)
    return identity
