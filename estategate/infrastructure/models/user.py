"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from estategate.infrastructure.database import Base
from estategate.utils import storage_now


class UserModel(Base):
    """Database representation of residents, guards, admins and platform staff."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    role = Column(String(20), nullable=False, index=True)
    estate_id = Column(Integer, ForeignKey("estate.id"), nullable=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    phone = Column(String(30), nullable=True)
    apartment_number = Column(String(30), nullable=True)
    apartment_type = Column(String(50), nullable=True)
    password = Column(String(255), nullable=False)
    must_change_password = Column(Boolean, nullable=False, default=False)
    session_version = Column(Integer, nullable=False, default=0)
    last_login = Column(DateTime, nullable=True)
    created_by = Column(Integer, nullable=True)
    created_at = Column(DateTime, nullable=False, default=storage_now)
    updated_by = Column(Integer, nullable=True)
    updated_at = Column(DateTime, nullable=True, onupdate=storage_now)
    is_active = Column(Boolean, nullable=False, default=True)
    deleted = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    deleted_by = Column(Integer, nullable=True)
    deleted_at = Column(DateTime, nullable=True)

    estate = relationship("EstateModel", foreign_keys=[estate_id], lazy="joined")


__all__ = ["UserModel"]
