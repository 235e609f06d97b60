"""Use cases for the visitor invitation lifecycle."""

from .approve_invitation import approve_invitation
from .cancel_invitation import cancel_invitation
from .codes import MAX_CODE_ATTEMPTS, allocate_code
from .create_invitation import create_invitation
from .list_invitations import get_invitation, list_invitations
from .validators import validate_visitor_details
from .verify_invitation import VerificationResult, verify_invitation

__all__ = [
    "MAX_CODE_ATTEMPTS",
    "VerificationResult",
    "allocate_code",
    "approve_invitation",
    "cancel_invitation",
    "create_invitation",
    "get_invitation",
    "list_invitations",
    "validate_visitor_details",
    "verify_invitation",
]
