"""SQLAlchemy model for demo requests."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from estategate.infrastructure.database import Base
from estategate.utils import storage_now


class DemoRequestModel(Base):
    """Database representation of a demo request from the landing page."""

    __tablename__ = "demo_request"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(150), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(30), nullable=True)
    organisation = Column(String(150), nullable=True)
    residents = Column(Integer, nullable=False, default=30)
    tablets = Column(Integer, nullable=False, default=1)
    notes = Column(Text, nullable=True)
    source = Column(String(50), nullable=False, default="unknown")
    created_at = Column(DateTime, nullable=False, default=storage_now, index=True)


__all__ = ["DemoRequestModel"]
