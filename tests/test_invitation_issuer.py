"""Tests for issuing, cancelling and approving invitations."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

import pytest

from estategate.application.use_cases.invitations import (
    MAX_CODE_ATTEMPTS,
    approve_invitation,
    cancel_invitation,
    create_invitation,
    get_invitation,
    list_invitations,
    verify_invitation,
)
from estategate.application.use_cases.users.validators import normalize_phone
from estategate.config import reset_settings_cache
from estategate.domain.entities import InvitationStatus, Role, VisitorDetails
from estategate.domain.errors import (
    InvalidOrExpiredCode,
    NotAuthorized,
    NotFound,
    PersistenceError,
    ValidationError,
)
from estategate.infrastructure.repositories import NotificationRepository

LAGOS = ZoneInfo("Africa/Lagos")
NOW = datetime(2030, 1, 1, 9, 0, tzinfo=LAGOS)


def _details(**overrides) -> VisitorDetails:
    values = dict(
        name="Jane Doe",
        phone="+2348000000",
        purpose="Delivery",
        visit_date=(NOW + timedelta(days=1)).date(),
        visit_time=time(10, 30),
    )
    values.update(overrides)
    return VisitorDetails(**values)


def _issue(session, context, user, **overrides):
    return create_invitation(
        session,
        context=context,
        resident_id=user.id,
        estate_id=user.estate_id,
        details=_details(**overrides),
        now=NOW,
    )


def test_resident_creates_approved_invitation(session, estate_members, context_for):
    resident = estate_members["resident"]

    invitation = _issue(session, context_for(resident), resident)

    assert invitation.status is InvitationStatus.APPROVED
    assert len(invitation.code) == 6 and invitation.code.isdigit()
    assert invitation.expires_at == NOW + timedelta(hours=24)
    assert invitation.reference == f"INV{invitation.id:03d}"
    assert invitation.visitor_name == "Jane Doe"


def test_creation_notifies_the_resident(session, estate_members, context_for):
    resident = estate_members["resident"]

    invitation = _issue(session, context_for(resident), resident)

    notifications = NotificationRepository(session).list_for_user(resident.id)
    assert [n.event_type for n in notifications] == ["invite_created"]
    assert notifications[0].payload["invitation_id"] == invitation.id


def test_details_are_stripped(session, estate_members, context_for):
    resident = estate_members["resident"]

    invitation = _issue(
        session, context_for(resident), resident, name="  Jane Doe ", email=" jane@example.com "
    )

    assert invitation.visitor_name == "Jane Doe"
    assert invitation.visitor_email == "jane@example.com"


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "   "},
        {"phone": ""},
        {"purpose": ""},
        {"visit_date": None},
        {"visit_time": None},
        {"phone": "call me"},
        {"email": "not-an-email"},
        {"visit_date": date(2029, 12, 31)},
    ],
)
def test_invalid_details_are_rejected(session, estate_members, context_for, overrides):
    resident = estate_members["resident"]

    with pytest.raises(ValidationError):
        _issue(session, context_for(resident), resident, **overrides)

    assert list_invitations(session, context=context_for(resident)) == []


@pytest.mark.parametrize("phone", ["call me", "+12", "0803 123 4567 ext 9"])
def test_visitor_and_member_phones_follow_one_rule(session, estate_members, context_for, phone):
    resident = estate_members["resident"]

    with pytest.raises(ValidationError):
        normalize_phone(phone)
    with pytest.raises(ValidationError):
        _issue(session, context_for(resident), resident, phone=phone)


def test_resident_cannot_invite_for_someone_else(
    session, estate_members, make_user, context_for
):
    resident = estate_members["resident"]
    neighbour = make_user(Role.RESIDENT, estate_id=resident.estate_id)

    with pytest.raises(NotAuthorized):
        create_invitation(
            session,
            context=context_for(resident),
            resident_id=neighbour.id,
            estate_id=resident.estate_id,
            details=_details(),
            now=NOW,
        )


def test_resident_cannot_invite_into_another_estate(
    session, estate_members, make_estate, context_for
):
    resident = estate_members["resident"]
    other = make_estate("Other Estate")

    with pytest.raises(NotAuthorized):
        create_invitation(
            session,
            context=context_for(resident),
            resident_id=resident.id,
            estate_id=other.id,
            details=_details(),
            now=NOW,
        )


def test_guard_cannot_create_invitations(session, estate_members, context_for):
    guard = estate_members["guard"]

    with pytest.raises(NotAuthorized):
        _issue(session, context_for(guard), guard)


def test_code_collision_is_redrawn(monkeypatch, session, estate_members, context_for):
    resident = estate_members["resident"]
    context = context_for(resident)
    codes = iter(["111111", "111111", "222222"])
    monkeypatch.setattr(
        "estategate.application.use_cases.invitations.codes.generate_otp_code",
        lambda: next(codes),
    )

    first = _issue(session, context, resident)
    second = _issue(session, context, resident)

    assert first.code == "111111"
    assert second.code == "222222"


def test_code_allocation_gives_up_after_repeated_collisions(
    monkeypatch, session, estate_members, context_for
):
    resident = estate_members["resident"]
    context = context_for(resident)
    monkeypatch.setattr(
        "estategate.application.use_cases.invitations.codes.generate_otp_code",
        lambda: "333333",
    )
    _issue(session, context, resident)

    with pytest.raises(PersistenceError):
        _issue(session, context, resident)

    assert len(list_invitations(session, context=context)) == 1
    assert MAX_CODE_ATTEMPTS == 5


def test_invitations_start_pending_without_auto_approval(
    monkeypatch, session, estate_members, context_for
):
    monkeypatch.setenv("AUTO_APPROVE_INVITATIONS", "false")
    reset_settings_cache()
    resident = estate_members["resident"]
    admin = estate_members["admin"]
    guard = estate_members["guard"]

    invitation = _issue(session, context_for(resident), resident)
    assert invitation.status is InvitationStatus.PENDING

    with pytest.raises(InvalidOrExpiredCode):
        verify_invitation(session, context=context_for(guard), code=invitation.code, now=NOW)

    later = NOW + timedelta(hours=2)
    approved = approve_invitation(
        session, context=context_for(admin), invitation_id=invitation.id, now=later
    )
    assert approved.status is InvitationStatus.APPROVED
    assert approved.expires_at == later + timedelta(hours=24)

    with pytest.raises(ValidationError):
        approve_invitation(
            session, context=context_for(admin), invitation_id=invitation.id, now=later
        )


def test_lowercase_alphabet_codes_still_verify(monkeypatch, session, estate_members, context_for):
    monkeypatch.setenv("OTP_ALPHABET", "abcdefgh")
    reset_settings_cache()
    resident = estate_members["resident"]

    invitation = _issue(session, context_for(resident), resident)
    assert set(invitation.code) <= set("ABCDEFGH")

    result = verify_invitation(
        session,
        context=context_for(estate_members["guard"]),
        code=invitation.code.lower(),
        now=NOW,
    )
    assert result.invitation.status is InvitationStatus.USED


def test_only_admins_approve(session, estate_members, context_for):
    resident = estate_members["resident"]
    invitation = _issue(session, context_for(resident), resident)

    with pytest.raises(NotAuthorized):
        approve_invitation(
            session, context=context_for(estate_members["guard"]), invitation_id=invitation.id
        )


def test_cancel_expires_invitation_and_blocks_verification(
    session, estate_members, context_for
):
    resident = estate_members["resident"]
    invitation = _issue(session, context_for(resident), resident)

    cancelled = cancel_invitation(
        session, context=context_for(resident), invitation_id=invitation.id, now=NOW
    )

    assert cancelled.status is InvitationStatus.EXPIRED
    assert cancelled.cancelled_at == NOW
    with pytest.raises(InvalidOrExpiredCode):
        verify_invitation(
            session, context=context_for(estate_members["guard"]), code=invitation.code, now=NOW
        )
    events = [n.event_type for n in NotificationRepository(session).list_for_user(resident.id)]
    assert "invite_cancelled" in events


def test_cancel_rules(session, estate_members, make_user, context_for):
    resident = estate_members["resident"]
    neighbour = make_user(Role.RESIDENT, estate_id=resident.estate_id)
    invitation = _issue(session, context_for(resident), resident)

    with pytest.raises(NotAuthorized):
        cancel_invitation(
            session, context=context_for(neighbour), invitation_id=invitation.id, now=NOW
        )
    with pytest.raises(NotFound):
        cancel_invitation(session, context=context_for(resident), invitation_id=999, now=NOW)

    cancel_invitation(session, context=context_for(resident), invitation_id=invitation.id, now=NOW)
    with pytest.raises(ValidationError):
        cancel_invitation(
            session, context=context_for(resident), invitation_id=invitation.id, now=NOW
        )


def test_listing_is_scoped(session, estate_members, make_estate, make_user, context_for):
    resident = estate_members["resident"]
    other_estate = make_estate("Other Estate")
    outsider = make_user(Role.RESIDENT, estate_id=other_estate.id)
    outsider_guard = make_user(Role.GUARD, estate_id=other_estate.id)
    mine = _issue(session, context_for(resident), resident)
    theirs = _issue(session, context_for(outsider), outsider)

    assert [i.id for i in list_invitations(session, context=context_for(resident))] == [mine.id]
    assert [
        i.id for i in list_invitations(session, context=context_for(estate_members["guard"]))
    ] == [mine.id]
    assert [i.id for i in list_invitations(session, context=context_for(outsider_guard))] == [
        theirs.id
    ]
    with pytest.raises(NotFound):
        get_invitation(session, context=context_for(resident), invitation_id=theirs.id)


def test_super_admin_sees_only_owned_estates(
    session, make_estate, make_user, context_for
):
    owner = make_user(Role.SUPER_ADMIN)
    developer = make_user(Role.DEVELOPER)
    owned = make_estate("Owned", owner_id=owner.id)
    foreign = make_estate("Foreign")
    owned_resident = make_user(Role.RESIDENT, estate_id=owned.id)
    foreign_resident = make_user(Role.RESIDENT, estate_id=foreign.id)
    kept = _issue(session, context_for(owned_resident), owned_resident)
    _issue(session, context_for(foreign_resident), foreign_resident)

    assert [i.id for i in list_invitations(session, context=context_for(owner))] == [kept.id]
    assert len(list_invitations(session, context=context_for(developer))) == 2
