"""Persistence layer for estates."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, time

from sqlalchemy import or_
from sqlalchemy.orm import Session

from estategate.domain.entities import Estate
from estategate.domain.policies import RowScope
from estategate.infrastructure.models import EstateModel
from estategate.utils import to_app_time


@dataclass(frozen=True)
class EstateFilters:
    """Search criteria accepted by :meth:`EstateRepository.search`."""

    search: str | None = None
    registered_from: date | None = None
    registered_to: date | None = None
    expires_from: date | None = None
    expires_to: date | None = None


class EstateRepository:
    """Provide CRUD operations for :class:`Estate` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, estate_id: int) -> Estate | None:
        model = self.session.get(EstateModel, estate_id)
        return self._to_entity(model) if model else None

    def create(self, estate: Estate, *, commit: bool = True) -> Estate:
        model = EstateModel()
        self._apply_entity_to_model(model, estate)
        model.owner_id = estate.owner_id
        self.session.add(model)
        if commit:
            self.session.commit()
        else:
            self.session.flush()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, estate: Estate) -> Estate:
        model = self.session.get(EstateModel, estate.id)
        if model is None:
            msg = f"Estate with id {estate.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, estate)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_ids_by_owner(self, owner_id: int) -> frozenset[int]:
        rows = (
            self.session.query(EstateModel.id)
            .filter(EstateModel.owner_id == owner_id)
            .all()
        )
        return frozenset(estate_id for (estate_id,) in rows)

    def search(
        self,
        scope: RowScope,
        filters: EstateFilters,
        *,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[Sequence[Estate], int]:
        """Return one page of estates matching ``filters`` and the total count."""

        if scope.is_empty:
            return [], 0
        query = self.session.query(EstateModel)
        if scope.estate_id is not None:
            query = query.filter(EstateModel.id == scope.estate_id)
        elif not scope.unrestricted:
            query = query.filter(EstateModel.id.in_(sorted(scope.estate_ids or ())))

        if filters.search:
            pattern = f"%{filters.search.strip()}%"
            query = query.filter(
                or_(
                    EstateModel.name.ilike(pattern),
                    EstateModel.city.ilike(pattern),
                    EstateModel.state.ilike(pattern),
                )
            )
        if filters.registered_from:
            query = query.filter(
                EstateModel.created_at >= datetime.combine(filters.registered_from, time.min)
            )
        if filters.registered_to:
            query = query.filter(
                EstateModel.created_at <= datetime.combine(filters.registered_to, time.max)
            )
        if filters.expires_from:
            query = query.filter(EstateModel.expiry_date >= filters.expires_from)
        if filters.expires_to:
            query = query.filter(EstateModel.expiry_date <= filters.expires_to)

        total = query.count()
        models = (
            query.order_by(EstateModel.created_at.desc(), EstateModel.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models], total

    @staticmethod
    def _apply_entity_to_model(model: EstateModel, estate: Estate) -> None:
        model.name = estate.name
        model.address = estate.address
        model.city = estate.city
        model.state = estate.state
        model.expiry_date = estate.expiry_date
        model.is_active = estate.is_active

    @staticmethod
    def _to_entity(model: EstateModel) -> Estate:
        return Estate(
            id=model.id,
            name=model.name,
            address=model.address,
            city=model.city,
            state=model.state,
            expiry_date=model.expiry_date,
            owner_id=model.owner_id,
            is_active=model.is_active,
            created_at=to_app_time(model.created_at),
            updated_at=to_app_time(model.updated_at),
        )


__all__ = ["EstateFilters", "EstateRepository"]
