"""Pydantic schemas for the users domain."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class UserCreate(BaseModel):
    username: str = Field(min_length=3, max_length=30)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class UserOut(BaseModel):
    """Public view of a user, embedded in project and version payloads."""

    id: int
    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserDetail(UserOut):
    created_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    token: str
    user: UserOut


class MeResponse(BaseModel):
    user: UserDetail


class TokenData(BaseModel):
    id: Optional[int] = None


__all__ = [
    "UserCreate",
    "UserLogin",
    "UserOut",
    "UserDetail",
    "AuthResponse",
    "MeResponse",
    "TokenData",
]
