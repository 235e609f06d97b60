"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, Integer, String, Text

from estategate.infrastructure.database import Base
from estategate.utils import storage_now


class NotificationModel(Base):
    """A message for one user. ``read_at`` stays null until it is read."""

    __tablename__ = "notification"
    __table_args__ = (Index("ix_notification_user_unread", "user_id", "read_at"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    event_type = Column(String(50), nullable=False)
    title = Column(String(150), nullable=False)
    message = Column(Text, nullable=False)
    payload = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False, default=storage_now)
    read_at = Column(DateTime, nullable=True)


__all__ = ["NotificationModel"]
