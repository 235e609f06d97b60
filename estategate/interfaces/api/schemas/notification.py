"""Notification schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationRead(BaseModel):
    id: int
    event_type: str = Field(..., description="invite_created, invite_used, unlock_request, ...")
    title: str
    message: str
    payload: dict[str, Any] = Field(default_factory=dict)
    is_read: bool = False
    created_at: datetime
    read_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class MarkAllReadResponse(BaseModel):
    """Number of notifications that changed from unread to read."""

    updated: int


__all__ = ["MarkAllReadResponse", "NotificationRead"]
