"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from estategate.domain.entities import Role


class UserRead(BaseModel):
    id: int
    role: Role
    estate_id: int | None
    name: str
    email: str
    phone: str | None = None
    apartment_number: str | None = None
    apartment_type: str | None = None
    must_change_password: bool
    last_login: datetime | None = None
    created_at: datetime | None = None
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class MemberCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=30)
    apartment_number: str | None = Field(default=None, max_length=30)
    apartment_type: str | None = Field(default=None, max_length=50)


class MemberUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=30)
    apartment_number: str | None = Field(default=None, max_length=30)
    apartment_type: str | None = Field(default=None, max_length=50)
    is_active: bool | None = None

    model_config = ConfigDict(extra="forbid")


class ProfileUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=30)
    apartment_number: str | None = Field(default=None, max_length=30)
    apartment_type: str | None = Field(default=None, max_length=50)

    model_config = ConfigDict(extra="forbid")
