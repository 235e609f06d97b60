"""Notifications emitted by the invitation lifecycle and resident requests."""

from __future__ import annotations

from sqlalchemy.orm import Session

from estategate.domain.entities import (
    NOTIFICATION_INVITE_CANCELLED,
    NOTIFICATION_INVITE_CREATED,
    NOTIFICATION_INVITE_USED,
    NOTIFICATION_PROFILE_UPDATED,
    NOTIFICATION_REQUEST_RESOLVED,
    NOTIFICATION_UNLOCK_APPROVED,
    REQUEST_TYPE_UNLOCK,
    Invitation,
    ResidencyRequest,
    User,
    VisitorLogEntry,
)
from estategate.domain.entities.residency_request import REQUEST_STATUS_APPROVED

from .relay import notify, notify_estate_admins


def notify_invitation_created(session: Session, *, invitation: Invitation) -> None:
    """Confirm to the resident that the invitation and its code are ready."""

    notify(
        session,
        user_id=invitation.resident_id,
        event_type=NOTIFICATION_INVITE_CREATED,
        title="Visitor invited",
        message=(
            f"Invitation {invitation.reference} for {invitation.visitor_name} is ready. "
            f"Share code {invitation.code} with your visitor."
        ),
        payload={
            "invitation_id": invitation.id,
            "reference": invitation.reference,
            "status": invitation.status.value,
            "expires_at": invitation.expires_at.isoformat(),
        },
    )


def notify_invitation_used(
    session: Session, *, invitation: Invitation, entry: VisitorLogEntry
) -> None:
    """Tell the resident their visitor has been let in."""

    notify(
        session,
        user_id=invitation.resident_id,
        event_type=NOTIFICATION_INVITE_USED,
        title="Visitor arrived",
        message=f"{invitation.visitor_name} was verified at the gate.",
        payload={
            "invitation_id": invitation.id,
            "reference": invitation.reference,
            "visitor_log_id": entry.id,
            "guard_id": entry.guard_id,
        },
    )


def notify_invitation_cancelled(session: Session, *, invitation: Invitation) -> None:
    notify(
        session,
        user_id=invitation.resident_id,
        event_type=NOTIFICATION_INVITE_CANCELLED,
        title="Invitation cancelled",
        message=f"Invitation {invitation.reference} for {invitation.visitor_name} was cancelled.",
        payload={"invitation_id": invitation.id, "reference": invitation.reference},
    )


def notify_request_submitted(
    session: Session, *, request: ResidencyRequest, resident: User
) -> None:
    """Forward a resident request to the estate admins."""

    notify_estate_admins(
        session,
        request.estate_id,
        event_type=request.request_type,
        title=request.title,
        message=f"{resident.name} submitted a request: {request.title} - {request.details}",
        payload={
            "request_id": request.id,
            "resident_id": resident.id,
            "title": request.title,
            "details": request.details,
            "priority": request.priority,
        },
    )


def notify_request_resolved(session: Session, *, request: ResidencyRequest) -> None:
    """Tell the resident how their request was handled."""

    if request.request_type == REQUEST_TYPE_UNLOCK and request.status == REQUEST_STATUS_APPROVED:
        event_type = NOTIFICATION_UNLOCK_APPROVED
        title = "Field Unlocked"
    else:
        event_type = NOTIFICATION_REQUEST_RESOLVED
        title = "Request updated"
    message = f"Your request '{request.title}' was marked {request.status}."
    if request.resolution_note:
        message = f"{message} {request.resolution_note}"
    notify(
        session,
        user_id=request.resident_id,
        event_type=event_type,
        title=title,
        message=message,
        payload={"request_id": request.id, "status": request.status},
    )


def notify_profile_updated(
    session: Session, *, user: User, changed_fields: list[str]
) -> None:
    if user.estate_id is None:
        return
    notify_estate_admins(
        session,
        user.estate_id,
        event_type=NOTIFICATION_PROFILE_UPDATED,
        title="Profile updated",
        message=f"{user.name} updated their {', '.join(changed_fields)}.",
        payload={"user_id": user.id, "fields": changed_fields},
    )


__all__ = [
    "notify_invitation_cancelled",
    "notify_invitation_created",
    "notify_invitation_used",
    "notify_profile_updated",
    "notify_request_resolved",
    "notify_request_submitted",
]
