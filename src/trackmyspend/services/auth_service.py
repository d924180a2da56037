"""Auth service — registration, login, password change, token verification.

Learn: Service layer separates business logic from HTTP routing.
API routes call services, services call the database. Every failure is
raised as one of the AppError kinds in trackmyspend.errors; the route
layer never builds error responses itself.
"""

import uuid

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from trackmyspend.auth.dependencies import CurrentIdentity, identity_from_token
from trackmyspend.auth.jwt import create_access_token
from trackmyspend.auth.password import hash_password_async, verify_password_async
from trackmyspend.config import Settings
from trackmyspend.db.models import User
from trackmyspend.errors import (
    ConflictError,
    NotFoundError,
    OldPasswordMismatchError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)

logger = structlog.get_logger()


class AuthService:
    """Business logic for user credentials and tokens."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    # ─── Lookups ────────────────────────────────────────

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def get_user(self, user_id: str | uuid.UUID) -> User:
        """Load a user by id or raise NotFoundError."""
        try:
            key = user_id if isinstance(user_id, uuid.UUID) else uuid.UUID(user_id)
        except ValueError:
            raise NotFoundError("User not found")
        user = await self.db.get(User, key)
        if not user:
            raise NotFoundError("User not found")
        return user

    # ─── Register ───────────────────────────────────────

    async def register(self, email: str | None, password: str | None) -> User:
        """Create a new account.

        Learn: The existence check gives a friendly error in the common
        case; the UNIQUE constraint on users.email catches the race where
        two registrations for the same email pass the check together.
        """
        if not email or not password:
            raise ValidationError("Email and password are required")
        self._check_password_length(
            password, "Password must be at least {n} characters long"
        )

        if await self.find_by_email(email):
            raise ConflictError("User already exists")

        user = User(
            email=email,
            password_hash=await hash_password_async(
                password, self.settings.bcrypt_rounds
            ),
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("User already exists")
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("auth.register_failed")
            raise ServerError("Server error during registration")

        logger.info("auth.registered", user_id=str(user.id))
        return user

    # ─── Login ──────────────────────────────────────────

    async def login(self, email: str | None, password: str | None) -> tuple[str, User]:
        """Check credentials and issue a bearer token.

        Unknown email → 404, wrong password → 401. Nothing is persisted.
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        try:
            user = await self.find_by_email(email)
        except SQLAlchemyError:
            logger.exception("auth.login_lookup_failed")
            raise ServerError("Server error during login")
        if not user:
            raise NotFoundError("User not registered")

        if not await verify_password_async(password, user.password_hash):
            logger.info("auth.login_failed", user_id=str(user.id))
            raise UnauthorizedError("Invalid credentials")

        token = create_access_token(str(user.id), user.email, self.settings)
        logger.info("auth.login", user_id=str(user.id))
        return token, user

    # ─── Change password ────────────────────────────────

    async def change_password(
        self,
        user_id: str | uuid.UUID,
        old_password: str | None,
        new_password: str | None,
    ) -> None:
        if not old_password or not new_password:
            raise ValidationError("Old password and new password are required")
        self._check_password_length(
            new_password, "New password must be at least {n} characters long"
        )

        user = await self.get_user(user_id)
        uid = str(user.id)
        if not await verify_password_async(old_password, user.password_hash):
            raise OldPasswordMismatchError("Old password is incorrect")

        user.password_hash = await hash_password_async(
            new_password, self.settings.bcrypt_rounds
        )
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("auth.change_password_failed", user_id=uid)
            raise ServerError("Server error during password change")

        logger.info("auth.password_changed", user_id=uid)

    # ─── Tokens ─────────────────────────────────────────

    def verify_token(self, token: str | None) -> CurrentIdentity:
        """Resolve a bearer token to the identity it was issued for."""
        if not token:
            raise UnauthorizedError("No token provided")
        return identity_from_token(token, self.settings)

    def _check_password_length(self, password: str, template: str) -> None:
        n = self.settings.password_min_length
        if len(password) < n:
            raise ValidationError(template.format(n=n))
