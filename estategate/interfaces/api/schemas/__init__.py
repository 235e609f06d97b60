from .auth import ChangePasswordRequest, MessageResponse, Token
from .demo_request import (
    DemoRequestCount,
    DemoRequestCreate,
    DemoRequestListResponse,
    DemoRequestRead,
)
from .estate import (
    EstateDataIn,
    EstateListResponse,
    EstateProvisionRequest,
    EstateProvisionResponse,
    EstateRead,
    EstateUpdate,
)
from .invitation import (
    InvitationCreate,
    InvitationRead,
    VerificationRequest,
    VerificationResponse,
)
from .notification import MarkAllReadResponse, NotificationRead
from .residency_request import (
    ResidencyRequestCreate,
    ResidencyRequestRead,
    ResidencyRequestResolve,
)
from .user import MemberCreate, MemberUpdate, ProfileUpdate, UserRead
from .visitor_log import VisitorLogRead

__all__ = [
    "ChangePasswordRequest",
    "DemoRequestCount",
    "DemoRequestCreate",
    "DemoRequestListResponse",
    "DemoRequestRead",
    "EstateDataIn",
    "EstateListResponse",
    "EstateProvisionRequest",
    "EstateProvisionResponse",
    "EstateRead",
    "EstateUpdate",
    "InvitationCreate",
    "InvitationRead",
    "MarkAllReadResponse",
    "MemberCreate",
    "MemberUpdate",
    "MessageResponse",
    "NotificationRead",
    "ProfileUpdate",
    "ResidencyRequestCreate",
    "ResidencyRequestRead",
    "ResidencyRequestResolve",
    "Token",
    "UserRead",
    "VerificationRequest",
    "VerificationResponse",
    "VisitorLogRead",
]
