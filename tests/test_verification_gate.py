"""Tests for redeeming invitation codes at the gate."""

from __future__ import annotations

from datetime import datetime, time, timedelta
from zoneinfo import ZoneInfo

import pytest
from sqlalchemy.exc import OperationalError

from estategate.application.use_cases.invitations import (
    create_invitation,
    get_invitation,
    verify_invitation,
)
from estategate.domain.entities import InvitationStatus, Role, VisitorDetails
from estategate.domain.errors import (
    ConflictError,
    InvalidOrExpiredCode,
    NotAuthorized,
    PersistenceError,
    ValidationError,
)
from estategate.infrastructure.repositories import (
    InvitationRepository,
    NotificationRepository,
    VisitorLogRepository,
)

LAGOS = ZoneInfo("Africa/Lagos")
NOW = datetime(2030, 1, 1, 9, 0, tzinfo=LAGOS)


@pytest.fixture()
def invitation(session, estate_members, context_for):
    resident = estate_members["resident"]
    return create_invitation(
        session,
        context=context_for(resident),
        resident_id=resident.id,
        estate_id=resident.estate_id,
        details=VisitorDetails(
            name="Jane Doe",
            phone="+2348000000",
            purpose="Delivery",
            visit_date=(NOW + timedelta(days=1)).date(),
            visit_time=time(10, 0),
        ),
        now=NOW,
    )


def test_guard_verifies_code_and_logs_entry(session, estate_members, context_for, invitation):
    guard = estate_members["guard"]
    verified_at = NOW + timedelta(hours=1)

    result = verify_invitation(
        session, context=context_for(guard), code=invitation.code, now=verified_at
    )

    assert result.invitation.status is InvitationStatus.USED
    assert result.invitation.used_by == guard.id
    assert result.invitation.used_at == verified_at
    assert result.entry.guard_id == guard.id
    assert result.entry.invitation_id == invitation.id
    assert result.entry.verification_method == "otp"
    assert result.entry.status == "entered"
    assert result.resident_name == "Ada Obi"
    assert result.apartment_number == "B12"
    assert result.estate_name == "Palm Grove Estate"
    assert VisitorLogRepository(session).count_for_invitation(invitation.id) == 1


def test_verification_notifies_the_resident(session, estate_members, context_for, invitation):
    verify_invitation(
        session, context=context_for(estate_members["guard"]), code=invitation.code, now=NOW
    )

    notifications = NotificationRepository(session).list_for_user(
        estate_members["resident"].id
    )
    assert notifications[0].event_type == "invite_used"


def test_code_is_matched_after_normalization(session, estate_members, context_for, invitation):
    spaced = f" {invitation.code[:3]}-{invitation.code[3:]} "

    result = verify_invitation(
        session, context=context_for(estate_members["guard"]), code=spaced, now=NOW
    )

    assert result.invitation.id == invitation.id


def test_second_submission_of_same_code_fails(session, estate_members, context_for, invitation):
    context = context_for(estate_members["guard"])
    verify_invitation(session, context=context, code=invitation.code, now=NOW)

    with pytest.raises(InvalidOrExpiredCode) as excinfo:
        verify_invitation(session, context=context, code=invitation.code, now=NOW)

    assert excinfo.value.reason == "invalid_or_expired"
    assert excinfo.value.message == "Invalid or expired code"
    assert VisitorLogRepository(session).count_for_invitation(invitation.id) == 1


def test_unknown_code_fails_with_uniform_message(session, estate_members, context_for, invitation):
    with pytest.raises(InvalidOrExpiredCode) as excinfo:
        verify_invitation(
            session, context=context_for(estate_members["guard"]), code="000000X", now=NOW
        )

    assert excinfo.value.message == "Invalid or expired code"


def test_expiry_boundary_is_expired(session, estate_members, context_for, invitation):
    context = context_for(estate_members["guard"])

    with pytest.raises(InvalidOrExpiredCode):
        verify_invitation(session, context=context, code=invitation.code, now=invitation.expires_at)

    result = verify_invitation(
        session,
        context=context,
        code=invitation.code,
        now=invitation.expires_at - timedelta(seconds=1),
    )
    assert result.invitation.status is InvitationStatus.USED


def test_guard_of_another_estate_cannot_redeem(
    session, estate_members, make_estate, make_user, context_for, invitation
):
    other = make_estate("Other Estate")
    outsider = make_user(Role.GUARD, estate_id=other.id)

    with pytest.raises(InvalidOrExpiredCode):
        verify_invitation(session, context=context_for(outsider), code=invitation.code, now=NOW)

    assert get_invitation(
        session, context=context_for(estate_members["admin"]), invitation_id=invitation.id
    ).status is InvitationStatus.APPROVED


def test_admin_may_verify(session, estate_members, context_for, invitation):
    admin = estate_members["admin"]

    result = verify_invitation(session, context=context_for(admin), code=invitation.code, now=NOW)

    assert result.entry.guard_id == admin.id


def test_resident_may_not_verify(session, estate_members, context_for, invitation):
    with pytest.raises(NotAuthorized):
        verify_invitation(
            session,
            context=context_for(estate_members["resident"]),
            code=invitation.code,
            now=NOW,
        )


def test_blank_code_is_a_validation_error(session, estate_members, context_for):
    with pytest.raises(ValidationError):
        verify_invitation(session, context=context_for(estate_members["guard"]), code=" - ")


def test_losing_a_race_reports_conflict_and_logs_once(
    monkeypatch, session, estate_members, context_for, invitation
):
    """Both guards see the approved row; only the conditional update decides."""

    context = context_for(estate_members["guard"])
    stale = InvitationRepository(session).find_active_by_code(
        invitation.code, estate_id=invitation.estate_id, now=NOW
    )
    verify_invitation(session, context=context, code=invitation.code, now=NOW)

    monkeypatch.setattr(
        InvitationRepository, "find_active_by_code", lambda self, *args, **kwargs: stale
    )
    with pytest.raises(ConflictError) as excinfo:
        verify_invitation(session, context=context, code=invitation.code, now=NOW)

    assert excinfo.value.message == "Invalid or expired code"
    assert VisitorLogRepository(session).count_for_invitation(invitation.id) == 1


def test_ambiguous_code_fails_closed(
    monkeypatch, session, estate_members, context_for, invitation, caplog
):
    duplicate = InvitationRepository(session).find_active_by_code(
        invitation.code, estate_id=invitation.estate_id, now=NOW
    )
    monkeypatch.setattr(
        InvitationRepository,
        "find_active_by_code",
        lambda self, *args, **kwargs: list(duplicate) * 2,
    )

    with caplog.at_level("WARNING"):
        with pytest.raises(InvalidOrExpiredCode):
            verify_invitation(
                session, context=context_for(estate_members["guard"]), code=invitation.code, now=NOW
            )

    assert "refusing entry" in caplog.text
    assert VisitorLogRepository(session).count_for_invitation(invitation.id) == 0


def test_log_write_failure_rolls_back_consumption(
    monkeypatch, session, estate_members, context_for, invitation
):
    def failing_create(self, entry, *, commit=True):
        raise OperationalError("INSERT INTO visitor_log", {}, Exception("disk I/O error"))

    monkeypatch.setattr(VisitorLogRepository, "create", failing_create)

    with pytest.raises(PersistenceError):
        verify_invitation(
            session, context=context_for(estate_members["guard"]), code=invitation.code, now=NOW
        )

    monkeypatch.undo()
    session.expire_all()
    assert InvitationRepository(session).get(invitation.id).status is InvitationStatus.APPROVED
