"""Schemas for resident requests."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ResidencyRequestCreate(BaseModel):
    request_type: str
    title: str = Field(..., max_length=150)
    details: str = Field(..., max_length=2000)
    priority: str = "medium"


class ResidencyRequestResolve(BaseModel):
    status: str
    resolution_note: str | None = Field(default=None, max_length=1000)


class ResidencyRequestRead(BaseModel):
    id: int
    estate_id: int
    resident_id: int
    request_type: str
    title: str
    details: str
    priority: str
    status: str
    resolution_note: str | None = None
    created_at: datetime | None = None
    resolved_at: datetime | None = None
    resolved_by: int | None = None
    resident_name: str | None = None
    apartment_number: str | None = None

    model_config = ConfigDict(from_attributes=True)
