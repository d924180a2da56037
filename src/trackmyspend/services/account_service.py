"""Account erasure — delete a user and everything they own.

Learn: Transactions, budgets, and reminders all carry user_id. Deleting
an account removes those rows first, then the user row, and commits
once. Because it is one database transaction, a failure part-way
through leaves every table untouched instead of orphaning half the
data; the caller only sees a generic 500.
"""

import uuid

import structlog
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from trackmyspend.auth.password import verify_password_async
from trackmyspend.config import Settings
from trackmyspend.db.models import OWNED_MODELS
from trackmyspend.errors import ServerError, UnauthorizedError, ValidationError
from trackmyspend.services.auth_service import AuthService

logger = structlog.get_logger()


class AccountEraser:
    """Cascading account deletion."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings
        self.auth = AuthService(db, settings)

    async def delete_account(
        self, user_id: str | uuid.UUID, password: str | None
    ) -> dict[str, int]:
        """Delete the user and all owned records after re-checking the password.

        Returns the number of rows removed per table.
        """
        if not password:
            raise ValidationError("Password is required to delete account")

        user = await self.auth.get_user(user_id)
        if not await verify_password_async(password, user.password_hash):
            raise UnauthorizedError("Incorrect password")

        removed: dict[str, int] = {}
        try:
            for model in OWNED_MODELS:
                result = await self.db.execute(
                    delete(model).where(model.user_id == user.id)
                )
                removed[model.__tablename__] = result.rowcount
            await self.db.delete(user)
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("account.delete_failed", user_id=str(user_id))
            raise ServerError("Server error during account deletion")

        logger.info("account.deleted", user_id=str(user_id), **removed)
        return removed
