import re
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, ConfigDict, Field, field_validator

PHONE_RE = re.compile(r"^[+]?[(]?[0-9]{3}[)]?[-\s.]?[0-9]{3}[-\s.]?[0-9]{4,6}$")


def _past_birth_date(v: Optional[date]) -> Optional[date]:
    if v is not None and v > date.today():
        raise ValueError("Birth date cannot be in the future")
    return v


class UserSchema(BaseModel):
    id: int
    email: EmailStr
    first_name: str
    last_name: str
    is_admin: bool
    department_id: Optional[int] = None
    paid_leave_days_remaining: int
    last_leave_balance_update: Optional[datetime] = None
    birth_date: Optional[date] = None
    bio: Optional[str] = None
    phone_number: Optional[str] = None
    profile_picture: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)

class BalanceSchema(BaseModel):
    email: EmailStr
    paid_leave_days_remaining: int
    last_leave_balance_update: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)

class BirthdaySchema(BaseModel):
    id: int
    full_name: str
    profile_picture: Optional[str] = None
    birth_date: date
    birthday: date

class UserCreate(BaseModel):
    email: EmailStr
    first_name: str = Field(min_length=2, max_length=64)
    last_name: str = Field(min_length=2, max_length=64)
    password: str = Field(min_length=6)
    department_id: Optional[int] = None
    birth_date: Optional[date] = None
    model_config = ConfigDict(extra="forbid")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("birth_date")
    @classmethod
    def birth_date_in_past(cls, v):
        return _past_birth_date(v)

class UserProfileUpdate(BaseModel):
    """
    Fields an employee may change on their own profile. Email, password and
    role are not part of it; sending them is a 422.
    """
    first_name: Optional[str] = Field(default=None, min_length=2, max_length=64)
    last_name: Optional[str] = Field(default=None, min_length=2, max_length=64)
    birth_date: Optional[date] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    phone_number: Optional[str] = None
    department_id: Optional[int] = None
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    @field_validator("first_name", "last_name")
    @classmethod
    def names_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("Name cannot be empty")
        return v

    @field_validator("birth_date")
    @classmethod
    def birth_date_in_past(cls, v):
        return _past_birth_date(v)

    @field_validator("phone_number")
    @classmethod
    def valid_phone(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not PHONE_RE.match(v):
            raise ValueError("Please enter a valid phone number")
        return v
