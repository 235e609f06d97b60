"""Use cases for the visitor entry log."""

from .list_visitor_logs import list_visitor_logs

__all__ = ["list_visitor_logs"]
