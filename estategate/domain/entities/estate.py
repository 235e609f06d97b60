"""Domain entity representing a residential estate."""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass
class Estate:
    """Tenant boundary that scopes residents, guards and admins."""

    id: int | None
    name: str
    address: str | None = None
    city: str | None = None
    state: str | None = None
    expiry_date: date | None = None
    owner_id: int | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
    residents_count: int | None = None
    guards_count: int | None = None


__all__ = ["Estate"]
