"""Schemas for the visitor entry log."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class VisitorLogRead(BaseModel):
    id: int
    invitation_id: int
    guard_id: int
    estate_id: int
    visitor_name: str
    visitor_phone: str
    verification_method: str
    status: str
    created_at: datetime | None = None
    purpose: str | None = None
    guard_name: str | None = None

    model_config = ConfigDict(from_attributes=True)
