"""SQLAlchemy model for estates."""

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String

from estategate.infrastructure.database import Base
from estategate.utils import storage_now


class EstateModel(Base):
    """Database representation of a residential estate."""

    __tablename__ = "estate"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False, index=True)
    address = Column(String(255), nullable=True)
    city = Column(String(80), nullable=True)
    state = Column(String(80), nullable=True)
    expiry_date = Column(Date, nullable=True)
    owner_id = Column(Integer, nullable=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=storage_now)
    updated_at = Column(DateTime, nullable=True, onupdate=storage_now)


__all__ = ["EstateModel"]
