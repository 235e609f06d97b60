"""Domain entity for demo requests sent from the public landing page."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

MIN_DEMO_RESIDENTS = 30
MIN_DEMO_TABLETS = 1
DEFAULT_DEMO_SOURCE = "unknown"


@dataclass
class DemoRequest:
    """Prospective customer asking platform staff for a product demo."""

    id: int | None
    full_name: str
    email: str
    phone: str | None = None
    organisation: str | None = None
    residents: int = MIN_DEMO_RESIDENTS
    tablets: int = MIN_DEMO_TABLETS
    notes: str | None = None
    source: str = DEFAULT_DEMO_SOURCE
    created_at: datetime | None = None


__all__ = [
    "DEFAULT_DEMO_SOURCE",
    "DemoRequest",
    "MIN_DEMO_RESIDENTS",
    "MIN_DEMO_TABLETS",
]
