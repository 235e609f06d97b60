"""Domain entity for the visitor entry audit trail."""

from dataclasses import dataclass
from datetime import datetime

VERIFICATION_METHOD_OTP = "otp"
VERIFICATION_METHOD_QR = "qr"
VISITOR_LOG_STATUS_ENTERED = "entered"


@dataclass(frozen=True)
class VisitorLogEntry:
    """Immutable record of a completed visitor entry."""

    id: int | None
    invitation_id: int
    guard_id: int
    estate_id: int
    visitor_name: str
    visitor_phone: str
    verification_method: str = VERIFICATION_METHOD_OTP
    status: str = VISITOR_LOG_STATUS_ENTERED
    created_at: datetime | None = None
    purpose: str | None = None
    guard_name: str | None = None


__all__ = [
    "VERIFICATION_METHOD_OTP",
    "VERIFICATION_METHOD_QR",
    "VISITOR_LOG_STATUS_ENTERED",
    "VisitorLogEntry",
]
