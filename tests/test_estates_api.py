"""Integration tests for estate provisioning and search."""

from __future__ import annotations

from estategate.domain.entities import Role
from estategate.infrastructure.repositories import UserRepository
from estategate.utils import now_in_app_timezone


def test_super_admin_provisions_estate_with_admin(client, session, make_user, login, monkeypatch):
    owner = make_user(Role.SUPER_ADMIN)
    sent = []
    monkeypatch.setattr(
        "estategate.interfaces.api.routes_helpers.send_temporary_password_email",
        lambda email, password: sent.append((email, password)) or True,
    )

    response = client.post(
        "/estates/provision",
        json={
            "estate_data": {"name": "Lekki Gardens", "city": "Lagos", "state": "Lagos"},
            "admin_email": "Estate.Manager@example.com",
        },
        headers=login(owner.email),
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["success"] is True
    assert body["estate"]["name"] == "Lekki Gardens"
    assert body["estate"]["owner_id"] == owner.id
    assert body["admin"]["role"] == "admin"
    assert body["admin"]["email"] == "estate.manager@example.com"
    assert body["admin"]["estate_id"] == body["estate"]["id"]
    assert body["admin"]["must_change_password"] is True

    assert sent and sent[0][0] == "estate.manager@example.com"
    admin_headers = login("estate.manager@example.com", sent[0][1])
    me = client.get("/users/me", headers=admin_headers).json()
    assert me["name"] == "Estate Manager"


def test_provisioning_errors_use_error_body(client, make_user, estate_members, login):
    headers = login(make_user(Role.DEVELOPER).email)

    missing = client.post(
        "/estates/provision", json={"estate_data": {"name": "X"}}, headers=headers
    )
    assert missing.status_code == 400
    assert missing.json() == {
        "error": "Estate data and admin email are required in the request body."
    }

    duplicate = client.post(
        "/estates/provision",
        json={
            "estate_data": {"name": "Another"},
            "admin_email": estate_members["admin"].email,
        },
        headers=headers,
    )
    assert duplicate.status_code == 400
    assert "already registered" in duplicate.json()["error"]


def test_estate_admin_cannot_provision(client, estate_members, login):
    response = client.post(
        "/estates/provision",
        json={"estate_data": {"name": "Rogue"}, "admin_email": "rogue@example.com"},
        headers=login(estate_members["admin"].email),
    )

    assert response.status_code == 403


def test_provisioning_does_not_leave_partial_estate(
    client, session, make_user, login, monkeypatch
):
    from sqlalchemy.exc import OperationalError

    developer = make_user(Role.DEVELOPER)
    headers = login(developer.email)

    def failing_create(self, user):
        raise OperationalError("INSERT INTO user", {}, Exception("disk full"))

    monkeypatch.setattr(UserRepository, "create", failing_create)
    response = client.post(
        "/estates/provision",
        json={"estate_data": {"name": "Half Built"}, "admin_email": "half@example.com"},
        headers=headers,
    )
    monkeypatch.undo()

    assert response.status_code == 400
    listed = client.get("/estates/", headers=headers).json()
    assert listed == {"data": [], "count": 0}


def test_search_is_scoped_and_filtered(client, make_estate, make_user, login):
    owner = make_user(Role.SUPER_ADMIN)
    developer = make_user(Role.DEVELOPER)
    make_estate("Banana Island", owner_id=owner.id)
    make_estate("Victoria Court", owner_id=owner.id)
    make_estate("Abuja Heights")

    owner_view = client.get("/estates/", headers=login(owner.email)).json()
    assert owner_view["count"] == 2

    developer_headers = login(developer.email)
    everything = client.get("/estates/", headers=developer_headers).json()
    assert everything["count"] == 3

    searched = client.get(
        "/estates/", params={"search": "island"}, headers=developer_headers
    ).json()
    assert [estate["name"] for estate in searched["data"]] == ["Banana Island"]

    paged = client.get(
        "/estates/", params={"page": 2, "page_size": 2}, headers=developer_headers
    ).json()
    assert paged["count"] == 3
    assert len(paged["data"]) == 1


def test_platform_listing_counts_members(client, session, make_estate, make_user, login):
    developer = make_user(Role.DEVELOPER)
    busy = make_estate("Banana Island")
    empty = make_estate("Abuja Heights")
    make_user(Role.RESIDENT, estate_id=busy.id)
    leaving = make_user(Role.RESIDENT, estate_id=busy.id)
    make_user(Role.GUARD, estate_id=busy.id)
    admin = make_user(Role.ADMIN, estate_id=busy.id)
    UserRepository(session).delete(leaving.id, now=now_in_app_timezone())

    listed = client.get("/estates/", headers=login(developer.email)).json()
    counts = {
        estate["name"]: (estate["residents_count"], estate["guards_count"])
        for estate in listed["data"]
    }
    assert counts == {busy.name: (1, 1), empty.name: (0, 0)}

    own_view = client.get("/estates/", headers=login(admin.email)).json()
    assert own_view["data"][0]["residents_count"] is None


def test_update_estate(client, make_estate, make_user, login):
    owner = make_user(Role.SUPER_ADMIN)
    estate = make_estate("Old Name", owner_id=owner.id)
    foreign = make_estate("Foreign")
    headers = login(owner.email)

    response = client.patch(
        f"/estates/{estate.id}",
        json={"name": "New Name", "expiry_date": "2031-01-31"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["name"] == "New Name"
    assert response.json()["expiry_date"] == "2031-01-31"

    assert client.patch(
        f"/estates/{foreign.id}", json={"name": "Mine now"}, headers=headers
    ).status_code == 404
