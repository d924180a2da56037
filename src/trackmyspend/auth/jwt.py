"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. The
server keeps no session table: a token signed with the shared secret
and not yet expired is the whole proof of identity.

Claims: sub (user id), email, iat, exp. One token type, 7-day lifetime
by default. No refresh tokens and no key rotation.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from trackmyspend.config import Settings


class TokenError(Exception):
    """Raised when token verification fails."""


def create_access_token(
    user_id: str,
    email: str,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed access token for a user."""
    now = datetime.now(timezone.utc)
    expires = now + (expires_delta or timedelta(days=settings.token_expire_days))
    payload = {
        "sub": user_id,
        "email": email,
        "exp": expires,
        "iat": now,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: Settings) -> dict:
    """Verify and decode a JWT token.

    Returns the payload dict on success.
    Raises TokenError on failure.
    """
    if not token:
        raise TokenError("No token provided")
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise TokenError(f"Invalid token: {e}")
    return payload
