"""Domain entities exposed by the application."""

from .demo_request import (
    DEFAULT_DEMO_SOURCE,
    MIN_DEMO_RESIDENTS,
    MIN_DEMO_TABLETS,
    DemoRequest,
)
from .estate import Estate
from .invitation import (
    ACTIVE_STATUSES,
    Invitation,
    InvitationStatus,
    VisitorDetails,
    can_transition,
    format_reference,
)
from .notification import (
    NOTIFICATION_CUSTOM_REQUEST,
    NOTIFICATION_INVITE_CANCELLED,
    NOTIFICATION_INVITE_CREATED,
    NOTIFICATION_INVITE_USED,
    NOTIFICATION_MAINTENANCE_REQUEST,
    NOTIFICATION_PROFILE_UPDATED,
    NOTIFICATION_REQUEST_RESOLVED,
    NOTIFICATION_RESIDENCY_CHANGE_REQUEST,
    NOTIFICATION_UNLOCK_APPROVED,
    NOTIFICATION_UNLOCK_REQUEST,
    Notification,
)
from .residency_request import (
    REQUEST_PRIORITIES,
    REQUEST_STATUS_OPEN,
    REQUEST_TYPES,
    REQUEST_TYPE_UNLOCK,
    RESOLUTION_STATUSES,
    ResidencyRequest,
)
from .role import ESTATE_ROLES, PLATFORM_ROLES, Role
from .user import SessionContext, User
from .visitor_log import (
    VERIFICATION_METHOD_OTP,
    VISITOR_LOG_STATUS_ENTERED,
    VisitorLogEntry,
)

__all__ = [
    "ACTIVE_STATUSES",
    "DEFAULT_DEMO_SOURCE",
    "DemoRequest",
    "ESTATE_ROLES",
    "Estate",
    "Invitation",
    "InvitationStatus",
    "MIN_DEMO_RESIDENTS",
    "MIN_DEMO_TABLETS",
    "NOTIFICATION_CUSTOM_REQUEST",
    "NOTIFICATION_INVITE_CANCELLED",
    "NOTIFICATION_INVITE_CREATED",
    "NOTIFICATION_INVITE_USED",
    "NOTIFICATION_MAINTENANCE_REQUEST",
    "NOTIFICATION_PROFILE_UPDATED",
    "NOTIFICATION_REQUEST_RESOLVED",
    "NOTIFICATION_RESIDENCY_CHANGE_REQUEST",
    "NOTIFICATION_UNLOCK_APPROVED",
    "NOTIFICATION_UNLOCK_REQUEST",
    "Notification",
    "PLATFORM_ROLES",
    "REQUEST_PRIORITIES",
    "REQUEST_STATUS_OPEN",
    "REQUEST_TYPES",
    "REQUEST_TYPE_UNLOCK",
    "RESOLUTION_STATUSES",
    "ResidencyRequest",
    "Role",
    "SessionContext",
    "User",
    "VERIFICATION_METHOD_OTP",
    "VISITOR_LOG_STATUS_ENTERED",
    "VisitorDetails",
    "VisitorLogEntry",
    "can_transition",
    "format_reference",
]
