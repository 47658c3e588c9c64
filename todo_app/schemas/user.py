from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator

BCRYPT_MAX_BYTES = 72
PASSWORD_MIN_LENGTH = 8
EMAIL_MAX_LENGTH = 255


def check_password(v: Optional[str]) -> str:
    """Enforce the minimum length and bcrypt's 72-byte limit when UTF-8 encoded.

    Raise a validation error so the API returns a 422 with a clear message.
    """
    if v is None:
        raise ValueError("The password field is required.")
    if len(v) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"The password field must be at least {PASSWORD_MIN_LENGTH} characters.")
    if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError("password too long: must be at most 72 bytes when UTF-8 encoded")
    return v


def check_confirmation(v, info: ValidationInfo):
    # password failed its own checks; that error is already reported
    if "password" not in info.data:
        return v
    if v != info.data["password"]:
        raise ValueError("The password field confirmation does not match.")
    return v


def check_email_length(v):
    if v is not None and len(v) > EMAIL_MAX_LENGTH:
        raise ValueError(f"The email field must not be greater than {EMAIL_MAX_LENGTH} characters.")
    return v


class UserCreate(BaseModel):
    name: str = Field(..., max_length=255)
    email: EmailStr
    password: str
    password_confirmation: str

    @field_validator("name", mode="before")
    @classmethod
    def name_required(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("The name field is required.")
        return v

    @field_validator("email")
    @classmethod
    def email_length(cls, v):
        return check_email_length(v)

    @field_validator("password")
    @classmethod
    def password_rules(cls, v):
        return check_password(v)

    @field_validator("password_confirmation")
    @classmethod
    def password_confirmed(cls, v, info: ValidationInfo):
        return check_confirmation(v, info)


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserUpdate(BaseModel):
    """Profile changes; any subset of the fields may be sent."""

    name: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    password_confirmation: Optional[str] = None

    @field_validator("name", "email", mode="before")
    @classmethod
    def not_blank(cls, v, info: ValidationInfo):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError(f"The {info.field_name} field is required.")
        return v

    @field_validator("email")
    @classmethod
    def email_length(cls, v):
        return check_email_length(v)

    @field_validator("password")
    @classmethod
    def password_rules(cls, v):
        return check_password(v)

    @field_validator("password_confirmation")
    @classmethod
    def password_confirmed(cls, v, info: ValidationInfo):
        return check_confirmation(v, info)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude={"password_confirmation"})


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: EmailStr
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    user: UserOut
    token: str
