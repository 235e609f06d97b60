"""Estate schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from .user import UserRead


class EstateDataIn(BaseModel):
    name: str = Field(..., max_length=150)
    address: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    expiry_date: date | None = None


class EstateProvisionRequest(BaseModel):
    # Both optional so a missing field is reported as ``{"error": ...}``.
    estate_data: EstateDataIn | None = None
    admin_email: str | None = None


class EstateRead(BaseModel):
    id: int
    name: str
    address: str | None = None
    city: str | None = None
    state: str | None = None
    expiry_date: date | None = None
    owner_id: int | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    residents_count: int | None = None
    guards_count: int | None = None

    model_config = ConfigDict(from_attributes=True)


class EstateProvisionResponse(BaseModel):
    success: bool
    estate: EstateRead
    admin: UserRead


class EstateListResponse(BaseModel):
    data: list[EstateRead]
    count: int


class EstateUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=150)
    address: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    expiry_date: date | None = None
    is_active: bool | None = None

    model_config = ConfigDict(extra="forbid")
