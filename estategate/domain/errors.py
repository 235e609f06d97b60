"""Error taxonomy shared by the use cases and the HTTP layer."""

from __future__ import annotations

INVALID_OR_EXPIRED = "invalid_or_expired"
INVALID_OR_EXPIRED_MESSAGE = "Invalid or expired code"


class DomainError(Exception):
    """Base class for failures the API reports to its callers."""

    default_message = "Request could not be completed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(DomainError, ValueError):
    """Missing or malformed input."""

    default_message = "Invalid input"


class NotAuthorized(DomainError):
    """Role or ownership mismatch. Always reported as a generic denial."""

    default_message = "Not authorized"


class NotFound(DomainError):
    """The requested record does not exist or is outside the caller's scope."""

    default_message = "Not found"


class InvalidOrExpiredCode(NotFound):
    """No redeemable invitation matches the submitted code.

    The message never reveals whether the code existed.
    """

    reason = INVALID_OR_EXPIRED
    default_message = INVALID_OR_EXPIRED_MESSAGE


class ConflictError(DomainError):
    """A concurrent operation won. Reported like ``InvalidOrExpiredCode``."""

    reason = INVALID_OR_EXPIRED
    default_message = INVALID_OR_EXPIRED_MESSAGE


class PersistenceError(DomainError):
    """Storage or network failure; the caller may retry."""

    default_message = "Service temporarily unavailable, please try again"


__all__ = [
    "INVALID_OR_EXPIRED",
    "INVALID_OR_EXPIRED_MESSAGE",
    "ConflictError",
    "DomainError",
    "InvalidOrExpiredCode",
    "NotAuthorized",
    "NotFound",
    "PersistenceError",
    "ValidationError",
]
