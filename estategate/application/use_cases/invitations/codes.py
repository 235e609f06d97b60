"""Allocation of invitation codes that are unique among live invitations."""

from __future__ import annotations

import logging
from datetime import datetime

from estategate.domain.errors import PersistenceError
from estategate.infrastructure.repositories import InvitationRepository
from estategate.infrastructure.security import generate_otp_code, normalize_otp_code

logger = logging.getLogger(__name__)

MAX_CODE_ATTEMPTS = 5


def allocate_code(
    repository: InvitationRepository, *, estate_id: int, now: datetime
) -> str:
    """Draw codes until one is not held by another live invitation of the estate."""

    for attempt in range(1, MAX_CODE_ATTEMPTS + 1):
        code = normalize_otp_code(generate_otp_code())
        if not repository.code_in_use(code, estate_id=estate_id, now=now):
            return code
        logger.warning(
            "Invitation code collision in estate %s (attempt %s/%s)",
            estate_id,
            attempt,
            MAX_CODE_ATTEMPTS,
        )
    raise PersistenceError("Could not allocate a unique invitation code, please try again")


__all__ = ["MAX_CODE_ATTEMPTS", "allocate_code"]
