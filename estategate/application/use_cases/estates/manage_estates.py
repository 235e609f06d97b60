"""Search and maintenance of estates by platform staff."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import replace

from sqlalchemy.orm import Session

from estategate.domain.entities import Estate, Role, SessionContext
from estategate.domain.errors import NotFound, ValidationError
from estategate.domain.policies import (
    Action,
    Resource,
    can_access_estate,
    ensure_can,
    row_scope,
)
from estategate.infrastructure.repositories import (
    EstateFilters,
    EstateRepository,
    UserRepository,
)

EDITABLE_FIELDS = frozenset({"name", "address", "city", "state", "expiry_date", "is_active"})


def list_estates(
    session: Session,
    *,
    context: SessionContext,
    filters: EstateFilters | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[Sequence[Estate], int]:
    """Return one page of the estates visible to the caller and the total.

    Platform staff also get the number of residents and guards of each estate.
    """

    ensure_can(context, Action.READ, Resource.ESTATE)
    estates, total = EstateRepository(session).search(
        row_scope(context, Resource.ESTATE), filters or EstateFilters(), skip=skip, limit=limit
    )
    visible = [estate for estate in estates if can_access_estate(context, estate.id)]
    if context.role.is_platform_staff:
        visible = _with_member_counts(session, visible)
    return visible, total


def _with_member_counts(session: Session, estates: Sequence[Estate]) -> list[Estate]:
    counts = UserRepository(session).count_by_estate(estate.id for estate in estates)
    return [
        replace(
            estate,
            residents_count=counts.get(estate.id, {}).get(Role.RESIDENT, 0),
            guards_count=counts.get(estate.id, {}).get(Role.GUARD, 0),
        )
        for estate in estates
    ]


def get_estate(session: Session, *, context: SessionContext, estate_id: int) -> Estate:
    ensure_can(context, Action.READ, Resource.ESTATE)
    estate = EstateRepository(session).get(estate_id)
    if estate is None or not can_access_estate(context, estate.id):
        raise NotFound("Estate not found")
    return estate


def update_estate(
    session: Session,
    *,
    context: SessionContext,
    estate_id: int,
    changes: Mapping[str, object],
) -> Estate:
    """Apply ``changes`` to the estate. Unknown fields raise ``ValidationError``."""

    ensure_can(context, Action.UPDATE, Resource.ESTATE)
    repository = EstateRepository(session)
    estate = repository.get(estate_id)
    if estate is None or not can_access_estate(context, estate.id):
        raise NotFound("Estate not found")

    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Fields cannot be changed: {', '.join(sorted(unknown))}")
    values = dict(changes)
    if "name" in values:
        name = (values["name"] or "").strip()
        if not name:
            raise ValidationError("Estate name is required")
        values["name"] = name
    if values.get("is_active") is None:
        values.pop("is_active", None)
    if not values:
        return estate
    return repository.update(replace(estate, **values))


__all__ = ["EDITABLE_FIELDS", "get_estate", "list_estates", "update_estate"]
