"""SQLAlchemy model for resident requests."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from estategate.infrastructure.database import Base
from estategate.utils import storage_now


class ResidencyRequestModel(Base):
    """Database representation of a request raised by a resident."""

    __tablename__ = "residency_request"

    id = Column(Integer, primary_key=True, index=True)
    estate_id = Column(Integer, ForeignKey("estate.id"), nullable=False, index=True)
    resident_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    request_type = Column(String(40), nullable=False)
    title = Column(String(120), nullable=False)
    details = Column(Text, nullable=False)
    priority = Column(String(10), nullable=False, default="medium")
    status = Column(String(20), nullable=False, default="open")
    resolution_note = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=storage_now)
    resolved_at = Column(DateTime, nullable=True)
    resolved_by = Column(Integer, nullable=True)

    resident = relationship("UserModel", foreign_keys=[resident_id], lazy="joined")


__all__ = ["ResidencyRequestModel"]
