"""Use case for ending every session of a user."""

import logging

from sqlalchemy.orm import Session

from estategate.domain.entities import SessionContext
from estategate.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)


def sign_out(session: Session, *, context: SessionContext) -> None:
    """Revoke all outstanding tokens of the caller."""

    version = UserRepository(session).bump_session_version(context.user_id)
    logger.info("User %s signed out (session version %s)", context.user_id, version)
