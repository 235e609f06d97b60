"""SQLAlchemy model for visitor invitations."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, Integer, String, Time

from estategate.infrastructure.database import Base
from estategate.utils import storage_now


class InvitationModel(Base):
    """Database representation of a visitor invitation."""

    __tablename__ = "visitor_invite"
    __table_args__ = (
        Index("ix_visitor_invite_estate_code_status", "estate_id", "code", "status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    reference = Column(String(20), nullable=True, unique=True)
    resident_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    estate_id = Column(Integer, ForeignKey("estate.id"), nullable=False, index=True)
    visitor_name = Column(String(100), nullable=False)
    visitor_phone = Column(String(30), nullable=False)
    visitor_email = Column(String(120), nullable=True)
    purpose = Column(String(100), nullable=False)
    visit_date = Column(Date, nullable=False)
    visit_time = Column(Time, nullable=False)
    code = Column(String(12), nullable=False)
    status = Column(String(20), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=storage_now)
    expires_at = Column(DateTime, nullable=False)
    used_at = Column(DateTime, nullable=True)
    used_by = Column(Integer, ForeignKey("user.id"), nullable=True)
    cancelled_at = Column(DateTime, nullable=True)


__all__ = ["InvitationModel"]
