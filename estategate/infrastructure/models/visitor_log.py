"""SQLAlchemy model for the append-only visitor entry log."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from estategate.infrastructure.database import Base
from estategate.utils import storage_now


class VisitorLogModel(Base):
    """Database representation of a completed visitor entry."""

    __tablename__ = "visitor_log"

    id = Column(Integer, primary_key=True, index=True)
    invitation_id = Column(
        Integer, ForeignKey("visitor_invite.id"), nullable=False, index=True
    )
    guard_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    estate_id = Column(Integer, ForeignKey("estate.id"), nullable=False, index=True)
    visitor_name = Column(String(100), nullable=False)
    visitor_phone = Column(String(30), nullable=False)
    verification_method = Column(String(10), nullable=False)
    status = Column(String(20), nullable=False)
    created_at = Column(DateTime, nullable=False, default=storage_now)


__all__ = ["VisitorLogModel"]
