"""Persistence helpers for resident requests."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from estategate.domain.entities import ResidencyRequest
from estategate.domain.policies import RowScope
from estategate.infrastructure.models import ResidencyRequestModel
from estategate.utils import to_app_time, to_storage_time


class ResidencyRequestRepository:
    """Provide CRUD operations for :class:`ResidencyRequest` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, request_id: int) -> ResidencyRequest | None:
        model = self.session.get(ResidencyRequestModel, request_id)
        return self._to_entity(model) if model else None

    def create(self, request: ResidencyRequest) -> ResidencyRequest:
        model = ResidencyRequestModel(
            estate_id=request.estate_id,
            resident_id=request.resident_id,
            request_type=request.request_type,
            title=request.title,
            details=request.details,
            priority=request.priority,
            status=request.status,
        )
        if request.created_at is not None:
            model.created_at = to_storage_time(request.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def resolve(self, request: ResidencyRequest) -> ResidencyRequest:
        model = self.session.get(ResidencyRequestModel, request.id)
        if model is None:
            msg = f"Request with id {request.id} not found"
            raise ValueError(msg)
        model.status = request.status
        model.resolution_note = request.resolution_note
        model.resolved_at = to_storage_time(request.resolved_at)
        model.resolved_by = request.resolved_by
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list(
        self,
        scope: RowScope,
        *,
        status: str | None = None,
        skip: int = 0,
        limit: int | None = 100,
    ) -> Sequence[ResidencyRequest]:
        if scope.is_empty:
            return []
        query = self.session.query(ResidencyRequestModel)
        if scope.resident_id is not None:
            query = query.filter(ResidencyRequestModel.resident_id == scope.resident_id)
        elif scope.estate_id is not None:
            query = query.filter(ResidencyRequestModel.estate_id == scope.estate_id)
        elif not scope.unrestricted:
            query = query.filter(
                ResidencyRequestModel.estate_id.in_(sorted(scope.estate_ids or ()))
            )
        if status:
            query = query.filter(ResidencyRequestModel.status == status)
        query = query.order_by(
            ResidencyRequestModel.created_at.desc(), ResidencyRequestModel.id.desc()
        ).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: ResidencyRequestModel) -> ResidencyRequest:
        resident = model.resident
        return ResidencyRequest(
            id=model.id,
            estate_id=model.estate_id,
            resident_id=model.resident_id,
            request_type=model.request_type,
            title=model.title,
            details=model.details,
            priority=model.priority,
            status=model.status,
            resolution_note=model.resolution_note,
            created_at=to_app_time(model.created_at),
            resolved_at=to_app_time(model.resolved_at),
            resolved_by=model.resolved_by,
            resident_name=resident.name if resident is not None else None,
            apartment_number=resident.apartment_number if resident is not None else None,
        )


__all__ = ["ResidencyRequestRepository"]
