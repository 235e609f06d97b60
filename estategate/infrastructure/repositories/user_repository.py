"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from estategate.domain.entities import Role, User
from estategate.infrastructure.models import UserModel
from estategate.utils import to_app_time, to_storage_time


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_by_estate(
        self,
        estate_id: int,
        *,
        role: Role | None = None,
        skip: int = 0,
        limit: int | None = 100,
    ) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .filter(UserModel.deleted.is_(False))
            .filter(UserModel.estate_id == estate_id)
        )
        if role is not None:
            query = query.filter(UserModel.role == role.value)
        query = query.order_by(UserModel.created_at.desc(), UserModel.id.desc()).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_by_estate(self, estate_ids: Iterable[int]) -> dict[int, dict[Role, int]]:
        """Return live member counts per role for each of ``estate_ids``."""

        ids = sorted(set(estate_ids))
        if not ids:
            return {}
        rows = (
            self.session.query(UserModel.estate_id, UserModel.role, func.count(UserModel.id))
            .filter(UserModel.deleted.is_(False))
            .filter(UserModel.estate_id.in_(ids))
            .group_by(UserModel.estate_id, UserModel.role)
            .all()
        )
        counts: dict[int, dict[Role, int]] = {estate_id: {} for estate_id in ids}
        for estate_id, role, total in rows:
            counts[estate_id][Role(role)] = total
        return counts

    def get(self, user_id: int, *, include_deleted: bool = False) -> User | None:
        model = self._get_model(include_deleted=include_deleted, id=user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(UserModel.deleted.is_(False))
            .filter(func.lower(UserModel.email) == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def email_taken(self, email: str) -> bool:
        """Return whether any account, deleted ones included, holds ``email``."""

        query = self.session.query(UserModel.id).filter(
            func.lower(UserModel.email) == email.strip().lower()
        )
        return self.session.query(query.exists()).scalar()

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self._get_model(id=user.id)
        if not model:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(
        self, user_id: int, *, deleted_by: int | None = None, now: datetime
    ) -> None:
        model = self._get_model(id=user_id)
        if not model:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)

        naive_now = to_storage_time(now)
        model.deleted = True
        model.deleted_by = deleted_by
        model.deleted_at = naive_now
        model.is_active = False
        model.updated_by = deleted_by
        model.updated_at = naive_now
        # Outstanding tokens stop validating once the version moves.
        model.session_version = (model.session_version or 0) + 1
        self.session.add(model)
        self.session.commit()

    def bump_session_version(self, user_id: int) -> int:
        """Invalidate every token issued to ``user_id``; return the new version."""

        model = self._get_model(id=user_id)
        if not model:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        model.session_version = (model.session_version or 0) + 1
        self.session.add(model)
        self.session.commit()
        return model.session_version

    def list_ids_by_role(self, role: Role, *, estate_id: int | None = None) -> list[int]:
        query = (
            self.session.query(UserModel.id)
            .filter(UserModel.deleted.is_(False))
            .filter(UserModel.is_active.is_(True))
            .filter(UserModel.role == role.value)
        )
        if estate_id is not None:
            query = query.filter(UserModel.estate_id == estate_id)
        return [user_id for (user_id,) in query.order_by(UserModel.id).all()]

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            role=Role.parse(model.role),
            estate_id=model.estate_id,
            name=model.name,
            email=model.email,
            password=model.password,
            phone=model.phone,
            apartment_number=model.apartment_number,
            apartment_type=model.apartment_type,
            must_change_password=model.must_change_password,
            session_version=model.session_version or 0,
            last_login=to_app_time(model.last_login),
            created_by=model.created_by,
            created_at=to_app_time(model.created_at),
            updated_by=model.updated_by,
            updated_at=to_app_time(model.updated_at),
            is_active=model.is_active,
            deleted=model.deleted,
            deleted_by=model.deleted_by,
            deleted_at=to_app_time(model.deleted_at),
        )

    def _get_model(self, include_deleted: bool = False, **filters) -> UserModel | None:
        query = self.session.query(UserModel)
        if not include_deleted:
            query = query.filter(UserModel.deleted.is_(False))
        return query.filter_by(**filters).first()

    @staticmethod
    def _apply_entity_to_model(
        model: UserModel, user: User, *, include_creation_fields: bool
    ) -> None:
        if include_creation_fields:
            model.created_by = user.created_by
            if user.created_at is not None:
                model.created_at = to_storage_time(user.created_at)
        model.role = user.role.value
        model.estate_id = user.estate_id
        model.name = user.name
        model.email = user.email
        model.phone = user.phone
        model.apartment_number = user.apartment_number
        model.apartment_type = user.apartment_type
        model.password = user.password
        model.must_change_password = user.must_change_password
        model.session_version = user.session_version
        model.last_login = to_storage_time(user.last_login)
        if not include_creation_fields:
            model.updated_by = user.updated_by
            model.updated_at = to_storage_time(user.updated_at)
        model.is_active = user.is_active
        model.deleted = user.deleted
        model.deleted_by = user.deleted_by
        model.deleted_at = to_storage_time(user.deleted_at)


__all__ = ["UserRepository"]
