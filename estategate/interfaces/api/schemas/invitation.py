"""Schemas for visitor invitations and gate verification."""

from __future__ import annotations

from datetime import date, datetime, time

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from estategate.domain.entities import InvitationStatus

from .visitor_log import VisitorLogRead


class InvitationCreate(BaseModel):
    """Visitor details submitted by a resident.

    ``resident_id`` and ``estate_id`` default to the caller's own.
    """

    visitor_name: str = Field(..., max_length=100)
    visitor_phone: str = Field(..., max_length=30)
    visitor_email: EmailStr | None = None
    purpose: str = Field(..., max_length=100)
    visit_date: date
    visit_time: time
    resident_id: int | None = None
    estate_id: int | None = None


class InvitationRead(BaseModel):
    id: int
    reference: str | None
    resident_id: int
    estate_id: int
    visitor_name: str
    visitor_phone: str
    visitor_email: str | None = None
    purpose: str
    visit_date: date
    visit_time: time
    code: str | None = Field(
        default=None, description="Only disclosed to the resident who issued the invitation"
    )
    status: InvitationStatus
    expires_at: datetime
    created_at: datetime | None = None
    used_at: datetime | None = None
    used_by: int | None = None
    cancelled_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class VerificationRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=32)


class VerificationResponse(BaseModel):
    invitation: InvitationRead
    visitor_log: VisitorLogRead
    resident_name: str | None = None
    apartment_number: str | None = None
    estate_name: str | None = None
