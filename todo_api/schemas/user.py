import re
from datetime import datetime
from typing import Optional
import uuid

from pydantic import BaseModel, field_validator

from .base import APIModel

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')
PASSWORD_MIN_LENGTH = 6


def clean_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Please add a valid email")
    return value


def clean_full_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("Please add a name")
    # Validate that full_name is not an email address
    if EMAIL_PATTERN.match(value):
        raise ValueError("Full name cannot be an email address")
    return value


class UserCreate(APIModel):
    email: str
    password: str
    full_name: str

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        return clean_email(value)

    @field_validator("full_name")
    @classmethod
    def check_full_name(cls, value):
        return clean_full_name(value)

    @field_validator("password")
    @classmethod
    def check_password(cls, value):
        if len(value) < PASSWORD_MIN_LENGTH:
            raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
        return value


class UserLogin(APIModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value):
        return value.strip().lower()


class UserUpdate(APIModel):
    email: Optional[str] = None
    full_name: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, value):
        if value is None:
            raise ValueError("email cannot be null")
        return clean_email(value)

    @field_validator("full_name")
    @classmethod
    def check_full_name(cls, value):
        if value is None:
            raise ValueError("full_name cannot be null")
        return clean_full_name(value)


class UserRead(APIModel):
    id: uuid.UUID
    email: str
    full_name: str
    created_at: datetime
    updated_at: datetime


class UserResponse(BaseModel):
    success: bool = True
    data: UserRead


class AuthResponse(BaseModel):
    success: bool = True
    access_token: str
    token_type: str = "bearer"
    data: UserRead
