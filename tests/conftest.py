"""Shared fixtures: a throwaway SQLite database and account factories."""

from __future__ import annotations

import itertools
import os
import tempfile
from functools import lru_cache
from pathlib import Path

TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="estategate-tests-")) / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["APP_TIMEZONE"] = "Africa/Lagos"
os.environ["AUTO_APPROVE_INVITATIONS"] = "true"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

import pytest

from estategate.config import reset_settings_cache

reset_settings_cache()

from estategate.domain.entities import Estate, Role, SessionContext, User
from estategate.infrastructure import database
from estategate.infrastructure.repositories import EstateRepository, UserRepository
from estategate.infrastructure.security import get_password_hash

PASSWORD = "Secret123!"


@lru_cache
def _password_hash() -> str:
    return get_password_hash(PASSWORD)


@pytest.fixture(autouse=True)
def setup_database():
    """Recreate every table before each test."""

    from estategate.infrastructure import models  # noqa: F401

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.Base.metadata.create_all(bind=database.engine)
    yield
    reset_settings_cache()


@pytest.fixture()
def session():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_estate(session):
    def factory(name: str = "Palm Grove Estate", *, owner_id: int | None = None) -> Estate:
        return EstateRepository(session).create(
            Estate(id=None, name=name, city="Lagos", state="Lagos", owner_id=owner_id)
        )

    return factory


@pytest.fixture()
def make_user(session):
    counter = itertools.count(1)

    def factory(
        role: Role,
        *,
        estate_id: int | None = None,
        name: str | None = None,
        email: str | None = None,
        apartment_number: str | None = None,
        must_change_password: bool = False,
    ) -> User:
        number = next(counter)
        return UserRepository(session).create(
            User(
                id=None,
                role=role,
                estate_id=estate_id,
                name=name or f"{role.value.title()} {number}",
                email=email or f"{role.value}{number}@example.com",
                password=_password_hash(),
                apartment_number=apartment_number,
                must_change_password=must_change_password,
            )
        )

    return factory


@pytest.fixture()
def context_for(session):
    """Build the per-request identity of ``user`` as the API would."""

    def factory(user: User) -> SessionContext:
        owned: frozenset[int] = frozenset()
        if user.role is Role.SUPER_ADMIN:
            owned = EstateRepository(session).list_ids_by_owner(user.id)
        return SessionContext.for_user(user, owned_estate_ids=owned)

    return factory


@pytest.fixture()
def estate_members(make_estate, make_user):
    """An estate with one resident, one guard and one admin."""

    estate = make_estate()
    return {
        "estate": estate,
        "resident": make_user(
            Role.RESIDENT, estate_id=estate.id, name="Ada Obi", apartment_number="B12"
        ),
        "guard": make_user(Role.GUARD, estate_id=estate.id, name="Musa Bello"),
        "admin": make_user(Role.ADMIN, estate_id=estate.id, name="Grace Eze"),
    }


@pytest.fixture()
def client():
    from fastapi.testclient import TestClient

    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture()
def login(client):
    def factory(email: str, password: str = PASSWORD) -> dict[str, str]:
        response = client.post("/auth/token", data={"username": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return factory
