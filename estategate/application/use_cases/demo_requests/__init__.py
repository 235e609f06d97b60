"""Use cases for demo requests from the public landing page."""

from .manage_demo_requests import count_demo_requests, list_demo_requests, submit_demo_request

__all__ = ["count_demo_requests", "list_demo_requests", "submit_demo_request"]
