"""Use cases for resident requests."""

from .manage_requests import list_requests, resolve_request
from .submit_request import submit_request

__all__ = ["list_requests", "resolve_request", "submit_request"]
