"""Pydantic schemas for authentication endpoints."""

import re
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field, ValidationInfo, field_validator

_REPEATED_CHARACTER = re.compile(r"^(.)\1+$")


def _normalize_email(value: object) -> object:
    return value.strip().lower() if isinstance(value, str) else value


Email = Annotated[EmailStr, BeforeValidator(_normalize_email)]


def check_password_strength(value: str) -> str:
    """Length over composition rules: 12 to 64 characters, not a single repeated character."""
    if len(value) < 12:
        raise ValueError("Password must be at least 12 characters long")
    if len(value) > 64:
        raise ValueError("Password must not exceed 64 characters")
    if _REPEATED_CHARACTER.match(value):
        raise ValueError("Password is too simple (avoid repeating characters)")
    return value


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: Email
    password: str
    confirm_password: str = Field(alias="confirmPassword")

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        return check_password_strength(value)

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        if "password" in info.data and value != info.data["password"]:
            raise ValueError("Passwords do not match")
        return value


class LoginRequest(BaseModel):
    email: Email
    # Not held to the current strength rules so older passwords keep working.
    password: str


class ForgotPasswordRequest(BaseModel):
    email: Email


class ResetPasswordRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    verification_code: str = Field(alias="verificationCode", min_length=1)
    new_password: str = Field(alias="newPassword")
    confirm_new_password: str = Field(alias="confirmNewPassword")

    @field_validator("new_password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        return check_password_strength(value)

    @field_validator("confirm_new_password")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        if "new_password" in info.data and value != info.data["new_password"]:
            raise ValueError("Passwords do not match")
        return value


class MessageResponse(BaseModel):
    message: str
