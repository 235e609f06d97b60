"""Use cases for managing users."""

from .change_password import change_password
from .create_platform_user import create_platform_user
from .members import create_member, delete_member, list_members, update_member
from .sign_in import SignInResult, SignInStatus, sign_in
from .sign_out import sign_out
from .update_profile import update_profile

__all__ = [
    "SignInResult",
    "SignInStatus",
    "change_password",
    "create_platform_user",
    "create_member",
    "delete_member",
    "list_members",
    "sign_in",
    "sign_out",
    "update_member",
    "update_profile",
]
