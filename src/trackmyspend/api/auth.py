"""Auth API — registration, login, password change, account deletion.

Learn: Routes for the account lifecycle:
- POST /auth/register → create a new user account
- POST /auth/login → email/password → bearer token + public user info
- POST /auth/change-password → replace the password (token required)
- DELETE /auth/account → delete user and all their data (token required)
- GET /auth/me → current user info (token required)

Handlers stay thin: decode the body, call a service, shape the
response. Errors raised by services are rendered by the app-level
AppError handler as {"message": ...}.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from trackmyspend.auth.dependencies import (
    CurrentIdentity,
    get_current_user,
    get_settings,
)
from trackmyspend.config import Settings
from trackmyspend.db.engine import get_db
from trackmyspend.schemas.auth import (
    ChangePasswordRequest,
    DeleteAccountRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    UserPublic,
    UserRead,
)
from trackmyspend.services.account_service import AccountEraser
from trackmyspend.services.auth_service import AuthService

router = APIRouter(prefix="/auth")


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(db, settings)


def get_account_eraser(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AccountEraser:
    return AccountEraser(db, settings)


# ─── Register ────────────────────────────────────────────


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(
    body: Optional[RegisterRequest] = None,
    service: AuthService = Depends(get_auth_service),
):
    """Create a new user account. Returns no user data."""
    body = body or RegisterRequest()
    await service.register(body.email, body.password)
    return MessageResponse(message="User registered successfully")


# ─── Login ───────────────────────────────────────────────


@router.post("/login", response_model=LoginResponse)
async def login(
    body: Optional[LoginRequest] = None,
    service: AuthService = Depends(get_auth_service),
):
    """Login with email and password → bearer token."""
    body = body or LoginRequest()
    token, user = await service.login(body.email, body.password)
    return LoginResponse(token=token, user=UserPublic.model_validate(user))


# ─── Change password ────────────────────────────────────


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    body: Optional[ChangePasswordRequest] = None,
    identity: CurrentIdentity = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    body = body or ChangePasswordRequest()
    await service.change_password(
        identity.user_id, body.old_password, body.new_password
    )
    return MessageResponse(message="Password changed successfully")


# ─── Delete account ─────────────────────────────────────


@router.delete("/account", response_model=MessageResponse)
async def delete_account(
    body: Optional[DeleteAccountRequest] = None,
    identity: CurrentIdentity = Depends(get_current_user),
    eraser: AccountEraser = Depends(get_account_eraser),
):
    """Delete the account and every transaction, budget, and reminder it owns."""
    body = body or DeleteAccountRequest()
    await eraser.delete_account(identity.user_id, body.password)
    return MessageResponse(message="Account and all data deleted successfully")


# ─── Current user ───────────────────────────────────────


@router.get("/me", response_model=UserRead)
async def get_me(
    identity: CurrentIdentity = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    """Get the current authenticated user's info."""
    return await service.get_user(identity.user_id)
