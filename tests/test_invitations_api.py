"""Integration tests for the invitation lifecycle over HTTP."""

from __future__ import annotations

from datetime import timedelta

from sqlalchemy.exc import OperationalError

from estategate.interfaces.api.routes import notifications as notifications_routes
from estategate.utils import now_in_app_timezone


def _payload(**overrides):
    payload = {
        "visitor_name": "Jane Doe",
        "visitor_phone": "+2348000000",
        "purpose": "Delivery",
        "visit_date": (now_in_app_timezone() + timedelta(days=1)).date().isoformat(),
        "visit_time": "10:30:00",
    }
    payload.update(overrides)
    return payload


def test_invite_verify_and_reuse(client, estate_members, login):
    resident_headers = login(estate_members["resident"].email)
    guard_headers = login(estate_members["guard"].email)

    created = client.post("/invitations/", json=_payload(), headers=resident_headers)
    assert created.status_code == 201, created.text
    invitation = created.json()
    assert invitation["status"] == "approved"
    assert len(invitation["code"]) == 6

    verified = client.post(
        "/verification/", json={"code": invitation["code"]}, headers=guard_headers
    )
    assert verified.status_code == 200, verified.text
    body = verified.json()
    assert body["invitation"]["status"] == "used"
    assert body["invitation"]["code"] is None
    assert body["visitor_log"]["guard_id"] == estate_members["guard"].id
    assert body["resident_name"] == "Ada Obi"
    assert body["estate_name"] == "Palm Grove Estate"

    reused = client.post(
        "/verification/", json={"code": invitation["code"]}, headers=guard_headers
    )
    assert reused.status_code == 400
    assert reused.json()["detail"] == {
        "reason": "invalid_or_expired",
        "message": "Invalid or expired code",
    }

    logs = client.get("/visitor-logs/", headers=guard_headers)
    assert logs.status_code == 200
    assert len(logs.json()) == 1
    assert logs.json()[0]["purpose"] == "Delivery"
    assert logs.json()[0]["guard_name"] == "Musa Bello"


def test_resident_cannot_verify(client, estate_members, login):
    headers = login(estate_members["resident"].email)

    response = client.post("/verification/", json={"code": "123456"}, headers=headers)

    assert response.status_code == 403
    assert response.json()["detail"] == "Not authorized"


def test_guard_cannot_invite(client, estate_members, login):
    headers = login(estate_members["guard"].email)

    response = client.post("/invitations/", json=_payload(), headers=headers)

    assert response.status_code == 403


def test_inviting_on_behalf_of_another_resident_is_denied(client, estate_members, login):
    headers = login(estate_members["resident"].email)

    response = client.post(
        "/invitations/",
        json=_payload(resident_id=estate_members["guard"].id),
        headers=headers,
    )

    assert response.status_code == 403


def test_blank_visitor_name_is_a_bad_request(client, estate_members, login):
    headers = login(estate_members["resident"].email)

    response = client.post("/invitations/", json=_payload(visitor_name="  "), headers=headers)

    assert response.status_code == 400


def test_cancel_then_verify_fails(client, estate_members, login):
    resident_headers = login(estate_members["resident"].email)
    guard_headers = login(estate_members["guard"].email)
    invitation = client.post("/invitations/", json=_payload(), headers=resident_headers).json()

    cancelled = client.post(f"/invitations/{invitation['id']}/cancel", headers=resident_headers)
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "expired"

    response = client.post(
        "/verification/", json={"code": invitation["code"]}, headers=guard_headers
    )
    assert response.status_code == 400
    assert response.json()["detail"]["reason"] == "invalid_or_expired"


def test_listing_hides_codes_from_staff(client, estate_members, login):
    resident_headers = login(estate_members["resident"].email)
    admin_headers = login(estate_members["admin"].email)
    invitation = client.post("/invitations/", json=_payload(), headers=resident_headers).json()

    own = client.get("/invitations/", headers=resident_headers).json()
    staff = client.get("/invitations/", headers=admin_headers).json()
    detail = client.get(f"/invitations/{invitation['id']}", headers=admin_headers)

    assert own[0]["code"] == invitation["code"]
    assert staff[0]["id"] == invitation["id"]
    assert staff[0]["code"] is None
    assert detail.status_code == 200


def test_notifications_endpoints(client, estate_members, login):
    resident_headers = login(estate_members["resident"].email)
    client.post("/invitations/", json=_payload(), headers=resident_headers)

    listed = client.get("/notifications/", headers=resident_headers)
    assert listed.status_code == 200
    notification = listed.json()[0]
    assert notification["event_type"] == "invite_created"

    for _ in range(2):
        marked = client.post(
            f"/notifications/{notification['id']}/read", headers=resident_headers
        )
        assert marked.status_code == 200
        assert marked.json()["read_at"] is not None

    other = client.post(
        f"/notifications/{notification['id']}/read",
        headers=login(estate_members["guard"].email),
    )
    assert other.status_code == 404

    assert client.post("/notifications/read-all", headers=resident_headers).json() == {
        "updated": 0
    }


def test_notification_socket_streams_snapshot(client, estate_members, login):
    resident = estate_members["resident"]
    headers = login(resident.email)
    client.post("/invitations/", json=_payload(), headers=headers)
    token = headers["Authorization"].split(" ", 1)[1]

    with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
        snapshot = websocket.receive_json()
        assert snapshot["type"] == "snapshot"
        assert [item["event_type"] for item in snapshot["data"]] == ["invite_created"]

        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

        websocket.send_json({"type": "ack", "ids": [snapshot["data"][0]["id"]]})
        assert websocket.receive_json() == {"type": "ack", "updated": 1}

        websocket.send_json({"type": "refresh"})
        assert websocket.receive_json() == {"type": "snapshot", "data": []}


def test_failed_manual_refresh_keeps_the_socket_open(
    client, estate_members, login, monkeypatch, caplog
):
    load_unread = notifications_routes._load_unread
    calls = []

    def flaky_load(user_id):
        calls.append(user_id)
        if len(calls) > 1:
            raise OperationalError("SELECT", {}, Exception("database is locked"))
        return load_unread(user_id)

    monkeypatch.setattr(notifications_routes, "_load_unread", flaky_load)
    headers = login(estate_members["resident"].email)
    token = headers["Authorization"].split(" ", 1)[1]

    with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
        assert websocket.receive_json()["type"] == "snapshot"

        websocket.send_json({"type": "refresh"})
        assert websocket.receive_json() == {"type": "error", "reason": "refresh_failed"}

        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

    assert "Manual notification refresh failed" in caplog.text
