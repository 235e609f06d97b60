"""Schemas for demo requests."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class DemoRequestCreate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=150)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=30)
    organisation: str | None = Field(default=None, max_length=150)
    residents: int | None = Field(default=None, ge=0)
    tablets: int | None = Field(default=None, ge=0)
    notes: str | None = Field(default=None, max_length=2000)
    source: str | None = Field(default=None, max_length=50)


class DemoRequestRead(BaseModel):
    id: int
    full_name: str
    email: str
    phone: str | None = None
    organisation: str | None = None
    residents: int
    tablets: int
    notes: str | None = None
    source: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class DemoRequestListResponse(BaseModel):
    data: list[DemoRequestRead]
    count: int


class DemoRequestCount(BaseModel):
    count: int
