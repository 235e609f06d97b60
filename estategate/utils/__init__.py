"""Utility helpers for reusable functionality."""

from .datetime import (
    get_app_timezone,
    now_in_app_timezone,
    storage_now,
    to_app_time,
    to_storage_time,
)

__all__ = [
    "get_app_timezone",
    "now_in_app_timezone",
    "storage_now",
    "to_app_time",
    "to_storage_time",
]
