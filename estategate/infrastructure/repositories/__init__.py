"""Repository implementations for infrastructure layer."""

from .demo_request_repository import DemoRequestRepository
from .estate_repository import EstateFilters, EstateRepository
from .invitation_repository import InvitationRepository
from .notification_repository import NotificationRepository
from .residency_request_repository import ResidencyRequestRepository
from .user_repository import UserRepository
from .visitor_log_repository import VisitorLogRepository

__all__ = [
    "DemoRequestRepository",
    "EstateFilters",
    "EstateRepository",
    "InvitationRepository",
    "NotificationRepository",
    "ResidencyRequestRepository",
    "UserRepository",
    "VisitorLogRepository",
]
