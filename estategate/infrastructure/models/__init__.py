"""ORM models used by the application infrastructure."""

from .demo_request import DemoRequestModel
from .estate import EstateModel
from .invitation import InvitationModel
from .notification import NotificationModel
from .residency_request import ResidencyRequestModel
from .user import UserModel
from .visitor_log import VisitorLogModel

__all__ = [
    "DemoRequestModel",
    "EstateModel",
    "InvitationModel",
    "NotificationModel",
    "ResidencyRequestModel",
    "UserModel",
    "VisitorLogModel",
]
