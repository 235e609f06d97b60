"""Persistence helpers for demo requests."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from estategate.domain.entities import DemoRequest
from estategate.infrastructure.models import DemoRequestModel
from estategate.utils import to_app_time, to_storage_time


class DemoRequestRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, request: DemoRequest) -> DemoRequest:
        model = DemoRequestModel(
            full_name=request.full_name,
            email=request.email,
            phone=request.phone,
            organisation=request.organisation,
            residents=request.residents,
            tablets=request.tablets,
            notes=request.notes,
            source=request.source,
        )
        if request.created_at is not None:
            model.created_at = to_storage_time(request.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def page(self, *, skip: int = 0, limit: int = 10) -> tuple[Sequence[DemoRequest], int]:
        """Return one page of requests, newest first, and the exact total."""

        query = self.session.query(DemoRequestModel)
        total = query.count()
        models = (
            query.order_by(DemoRequestModel.created_at.desc(), DemoRequestModel.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models], total

    def count(self) -> int:
        return self.session.query(DemoRequestModel).count()

    @staticmethod
    def _to_entity(model: DemoRequestModel) -> DemoRequest:
        return DemoRequest(
            id=model.id,
            full_name=model.full_name,
            email=model.email,
            phone=model.phone,
            organisation=model.organisation,
            residents=model.residents,
            tablets=model.tablets,
            notes=model.notes,
            source=model.source,
            created_at=to_app_time(model.created_at),
        )


__all__ = ["DemoRequestRepository"]
