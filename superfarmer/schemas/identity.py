"""User, role and auth schemas."""

from typing import Optional

from pydantic import Field, field_validator

from superfarmer.schemas.common import CamelModel, TimestampedOut

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RoleCreate(CamelModel):
    name: str = Field(min_length=1, max_length=50)


class RoleOut(TimestampedOut):
    id: int
    name: str


class UserCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(pattern=_EMAIL_PATTERN, max_length=255)
    password: str = Field(min_length=6, max_length=128)
    phone: Optional[str] = Field(default=None, max_length=50)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: str) -> str:
        return v.lower()


class UserUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, pattern=_EMAIL_PATTERN, max_length=255)
    password: Optional[str] = Field(default=None, min_length=6, max_length=128)
    phone: Optional[str] = Field(default=None, max_length=50)

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v


class UserOut(TimestampedOut):
    id: str
    name: str
    email: str
    role_id: int
    phone: Optional[str] = None


class LoginRequest(CamelModel):
    email: str
    password: str


class LoginOut(CamelModel):
    user: UserOut
    token: str


class OTPSendRequest(CamelModel):
    email: str


class OTPVerifyRequest(CamelModel):
    email: str
    otp: str = Field(min_length=6, max_length=6)
