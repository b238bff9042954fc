import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from anthropometric.authz import Role

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: str) -> str:
    email = (value or "").strip().lower()
    if not _EMAIL_RE.match(email):
        raise ValueError("email invalid")
    return email


class ProfileFields(BaseModel):
    gender: Optional[str] = None
    age: Optional[int] = Field(None, ge=0, le=130)
    country: Optional[str] = None
    sport: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("age", mode="before")
    @classmethod
    def blank_age_is_none(cls, v):
        # forms send "" for an untouched number input
        if isinstance(v, str) and not v.strip():
            return None
        return v


class Credentials(BaseModel):
    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return normalize_email(v)


class RegisterRequest(Credentials, ProfileFields):
    name: str = Field(min_length=1)
    role: Role = Role.ATHLETE


class LoginRequest(Credentials):
    pass


class AthleteCreate(Credentials, ProfileFields):
    name: str = Field(min_length=1)


class AthleteUpdate(ProfileFields):
    name: Optional[str] = None


class UserOut(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    email: str
    name: Optional[str] = None
    role: Role
    gender: Optional[str] = None
    age: Optional[int] = None
    country: Optional[str] = None
    sport: Optional[str] = None
    phone: Optional[str] = None
    createdAt: Optional[datetime] = None


class AuthResponse(BaseModel):
    token: str
    user: UserOut
