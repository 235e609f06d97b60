"""Integration tests for demo requests from the landing page."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from estategate.application.use_cases.demo_requests import submit_demo_request
from estategate.domain.entities import Role
from estategate.domain.errors import PersistenceError, ValidationError
from estategate.infrastructure.repositories import DemoRequestRepository


def _payload(**overrides):
    payload = {
        "full_name": "Kemi Adeyemi",
        "email": "kemi@example.com",
        "phone": "+2348012345678",
        "organisation": "Lekki Gardens",
        "residents": 120,
        "tablets": 2,
        "notes": "Interested in the bundle",
        "source": "pricing",
    }
    payload.update(overrides)
    return payload


def test_anyone_can_request_a_demo(client):
    response = client.post("/demo-requests/", json=_payload())

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["full_name"] == "Kemi Adeyemi"
    assert body["residents"] == 120
    assert body["tablets"] == 2
    assert body["source"] == "pricing"


def test_small_requests_are_raised_to_the_smallest_plan(session):
    request = submit_demo_request(
        session,
        full_name="  Kemi Adeyemi ",
        email="KEMI@example.com",
        residents=5,
        tablets=0,
        notes="   ",
    )

    assert request.full_name == "Kemi Adeyemi"
    assert request.email == "kemi@example.com"
    assert (request.residents, request.tablets) == (30, 1)
    assert request.notes is None
    assert request.source == "unknown"


@pytest.mark.parametrize("overrides", [{"full_name": "   "}, {"phone": "call me"}])
def test_invalid_demo_requests_are_rejected(session, overrides):
    values = dict(full_name="Kemi Adeyemi", email="kemi@example.com")
    values.update(overrides)

    with pytest.raises(ValidationError):
        submit_demo_request(session, **values)

    assert DemoRequestRepository(session).count() == 0


def test_storage_failure_is_reported(monkeypatch, session):
    def failing_create(self, request):
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr(DemoRequestRepository, "create", failing_create)

    with pytest.raises(PersistenceError):
        submit_demo_request(session, full_name="Kemi Adeyemi", email="kemi@example.com")


def test_platform_staff_page_through_requests(client, make_user, login):
    for number in range(3):
        client.post(
            "/demo-requests/",
            json=_payload(full_name=f"Prospect {number}", email=f"p{number}@example.com"),
        )
    headers = login(make_user(Role.SUPER_ADMIN).email)

    first = client.get("/demo-requests/", params={"page": 1, "limit": 2}, headers=headers)
    assert first.status_code == 200
    assert first.json()["count"] == 3
    assert [item["full_name"] for item in first.json()["data"]] == ["Prospect 2", "Prospect 1"]

    second = client.get("/demo-requests/", params={"page": 2, "limit": 2}, headers=headers)
    assert [item["full_name"] for item in second.json()["data"]] == ["Prospect 0"]

    total = client.get("/demo-requests/count", headers=headers)
    assert total.json() == {"count": 3}


def test_estate_members_cannot_read_demo_requests(client, estate_members, login):
    headers = login(estate_members["admin"].email)

    assert client.get("/demo-requests/", headers=headers).status_code == 403
    assert client.get("/demo-requests/count", headers=headers).status_code == 403


def test_listing_requires_a_token(client):
    assert client.get("/demo-requests/").status_code == 401
