"""Domain entity for requests residents raise with their estate admin."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

REQUEST_TYPE_MAINTENANCE = "maintenance_request"
REQUEST_TYPE_CUSTOM = "custom_request"
REQUEST_TYPE_RESIDENCY_CHANGE = "residency_change_request"
REQUEST_TYPE_UNLOCK = "unlock_request"

REQUEST_TYPES = frozenset(
    {
        REQUEST_TYPE_MAINTENANCE,
        REQUEST_TYPE_CUSTOM,
        REQUEST_TYPE_RESIDENCY_CHANGE,
        REQUEST_TYPE_UNLOCK,
    }
)

REQUEST_PRIORITIES = ("low", "medium", "high")

REQUEST_STATUS_OPEN = "open"
REQUEST_STATUS_APPROVED = "approved"
REQUEST_STATUS_REJECTED = "rejected"
REQUEST_STATUS_RESOLVED = "resolved"

RESOLUTION_STATUSES = frozenset(
    {REQUEST_STATUS_APPROVED, REQUEST_STATUS_REJECTED, REQUEST_STATUS_RESOLVED}
)


@dataclass
class ResidencyRequest:
    """Maintenance, residency change or unlock request raised by a resident."""

    id: int | None
    estate_id: int
    resident_id: int
    request_type: str
    title: str
    details: str
    priority: str = "medium"
    status: str = REQUEST_STATUS_OPEN
    resolution_note: str | None = None
    created_at: datetime | None = None
    resolved_at: datetime | None = None
    resolved_by: int | None = None
    resident_name: str | None = None
    apartment_number: str | None = None


__all__ = [
    "REQUEST_PRIORITIES",
    "REQUEST_STATUS_APPROVED",
    "REQUEST_STATUS_OPEN",
    "REQUEST_STATUS_REJECTED",
    "REQUEST_STATUS_RESOLVED",
    "REQUEST_TYPES",
    "REQUEST_TYPE_CUSTOM",
    "REQUEST_TYPE_MAINTENANCE",
    "REQUEST_TYPE_RESIDENCY_CHANGE",
    "REQUEST_TYPE_UNLOCK",
    "RESOLUTION_STATUSES",
    "ResidencyRequest",
]
