"""Scoped reads of invitations."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from estategate.domain.entities import Invitation, InvitationStatus, SessionContext
from estategate.domain.errors import NotFound
from estategate.domain.policies import (
    Action,
    Resource,
    can_access_invitation,
    ensure_can,
    row_scope,
)
from estategate.infrastructure.repositories import InvitationRepository

logger = logging.getLogger(__name__)


def list_invitations(
    session: Session,
    *,
    context: SessionContext,
    status: InvitationStatus | None = None,
    skip: int = 0,
    limit: int | None = 100,
) -> Sequence[Invitation]:
    """Return the invitations visible to the caller, newest first."""

    ensure_can(context, Action.READ, Resource.INVITATION)
    invitations = InvitationRepository(session).list(
        row_scope(context, Resource.INVITATION), status=status, skip=skip, limit=limit
    )
    visible = [item for item in invitations if can_access_invitation(context, item)]
    if len(visible) != len(invitations):
        logger.warning(
            "Dropped %s out-of-scope invitations for user %s",
            len(invitations) - len(visible),
            context.user_id,
        )
    return visible


def get_invitation(
    session: Session, *, context: SessionContext, invitation_id: int
) -> Invitation:
    ensure_can(context, Action.READ, Resource.INVITATION)
    invitation = InvitationRepository(session).get(invitation_id)
    if invitation is None or not can_access_invitation(context, invitation):
        raise NotFound("Invitation not found")
    return invitation


__all__ = ["get_invitation", "list_invitations"]
