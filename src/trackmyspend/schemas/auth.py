"""Pydantic schemas for the auth routes.

Learn: Request fields are Optional so a missing field reaches the
service, which reports it with a readable message ("Email and password
are required") instead of pydantic's generic 422 body. Wrong types
(e.g. a number for email) still fail at the boundary and are mapped to
400 by the app's validation handler.

Bodies use the frontend's camelCase names; aliases keep the Python
attributes snake_case.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    old_password: Optional[str] = Field(None, alias="oldPassword")
    new_password: Optional[str] = Field(None, alias="newPassword")

    model_config = ConfigDict(populate_by_name=True)


class DeleteAccountRequest(BaseModel):
    password: Optional[str] = None


class UserPublic(BaseModel):
    """The only user fields ever returned by login."""
    id: uuid.UUID
    email: str

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    token: str
    user: UserPublic


class UserRead(BaseModel):
    id: uuid.UUID
    email: str
    created_at: Optional[datetime] = Field(None, serialization_alias="createdAt")

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    message: str
