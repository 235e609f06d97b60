"""Estate Gate package initializer.

Visitor management for residential estates: residents invite visitors with
one-time codes, guards verify entry and admins manage their estate.
"""
