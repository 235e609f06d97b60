"""Delivery mechanisms exposing the use cases."""
