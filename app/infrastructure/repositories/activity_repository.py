"""Persistence layer for activities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from app.domain.entities import Activity
from app.infrastructure.models import ActivityModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class ActivityRepository:
    """Provide CRUD operations for activities, honouring soft deletion."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        *,
        owner_id: int | None = None,
        status: str | None = None,
        area: str | None = None,
        include_deleted: bool = False,
    ) -> Sequence[Activity]:
        query = self.session.query(ActivityModel)
        if not include_deleted:
            query = query.filter(ActivityModel.deleted_at.is_(None))
        if owner_id is not None:
            query = query.filter(ActivityModel.user_id == owner_id)
        if status:
            query = query.filter(ActivityModel.status == status)
        if area:
            query = query.filter(ActivityModel.area == area)
        query = query.order_by(desc(ActivityModel.created_at), desc(ActivityModel.id))
        return [self._to_entity(model) for model in query.all()]

    def list_active_keys(
        self, owner_id: int, *, exclude_id: int | None = None
    ) -> list[tuple[int, str, str]]:
        """Return ``(id, title, area)`` for every active activity of ``owner_id``."""

        query = (
            self.session.query(ActivityModel.id, ActivityModel.title, ActivityModel.area)
            .filter(ActivityModel.user_id == owner_id)
            .filter(ActivityModel.deleted_at.is_(None))
        )
        if exclude_id is not None:
            query = query.filter(ActivityModel.id != exclude_id)
        return [(row_id, title, area) for row_id, title, area in query.all()]

    def find_active_by_title_and_area(
        self,
        owner_id: int,
        title: str,
        area: str,
        *,
        exclude_id: int | None = None,
    ) -> Activity | None:
        """Case-insensitive lookup performed by the database itself."""

        query = (
            self.session.query(ActivityModel)
            .filter(ActivityModel.user_id == owner_id)
            .filter(ActivityModel.deleted_at.is_(None))
            .filter(func.lower(ActivityModel.title) == title.lower())
            .filter(func.lower(ActivityModel.area) == area.lower())
        )
        if exclude_id is not None:
            query = query.filter(ActivityModel.id != exclude_id)
        model = query.first()
        return self._to_entity(model) if model else None

    def get(self, activity_id: int, *, include_deleted: bool = False) -> Activity | None:
        model = self._get_model(activity_id, include_deleted=include_deleted)
        return self._to_entity(model) if model else None

    def count(self, *, owner_id: int | None = None, include_deleted: bool = True) -> int:
        query = self.session.query(func.count(ActivityModel.id))
        if owner_id is not None:
            query = query.filter(ActivityModel.user_id == owner_id)
        if not include_deleted:
            query = query.filter(ActivityModel.deleted_at.is_(None))
        return int(query.scalar() or 0)

    def count_by(self, column_name: str, *, owner_id: int) -> dict[object, int]:
        """Return active activity counts grouped by ``column_name``."""

        column = getattr(ActivityModel, column_name)
        rows = (
            self.session.query(column, func.count(ActivityModel.id))
            .filter(ActivityModel.user_id == owner_id)
            .filter(ActivityModel.deleted_at.is_(None))
            .group_by(column)
            .all()
        )
        return {key: int(total) for key, total in rows}

    def create(self, activity: Activity) -> Activity:
        model = ActivityModel()
        self._apply_entity_to_model(model, activity)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, activity: Activity) -> Activity:
        model = self._get_model(activity.id)
        if not model:
            msg = f"Activity with id {activity.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, activity)
        model.updated_at = ensure_app_naive_datetime(now_in_app_timezone())
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def soft_delete(self, activity_id: int) -> Activity:
        """Stamp ``deleted_at`` on the activity and return the updated row."""

        model = self._get_model(activity_id, include_deleted=True)
        if not model:
            msg = f"Activity with id {activity_id} not found"
            raise ValueError(msg)
        if model.deleted_at is None:
            now = ensure_app_naive_datetime(now_in_app_timezone())
            model.deleted_at = now
            model.updated_at = now
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(
        self, activity_id: int | None, *, include_deleted: bool = False
    ) -> ActivityModel | None:
        query = self.session.query(ActivityModel).filter(ActivityModel.id == activity_id)
        if not include_deleted:
            query = query.filter(ActivityModel.deleted_at.is_(None))
        return query.first()

    @staticmethod
    def _to_entity(model: ActivityModel) -> Activity:
        return Activity(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            area=model.area,
            priority=model.priority,
            status=model.status,
            description=model.description,
            responsible=model.responsible,
            deadline=model.deadline,
            location=model.location,
            how=model.how,
            cost=model.cost,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            deleted_at=ensure_app_timezone(model.deleted_at),
        )

    @staticmethod
    def _apply_entity_to_model(model: ActivityModel, activity: Activity) -> None:
        model.user_id = activity.user_id
        model.title = activity.title
        model.area = activity.area
        model.priority = activity.priority
        model.status = activity.status
        model.description = activity.description
        model.responsible = activity.responsible
        model.deadline = activity.deadline
        model.location = activity.location
        model.how = activity.how
        model.cost = activity.cost
        if activity.created_at is not None:
            model.created_at = ensure_app_naive_datetime(activity.created_at)
        model.deleted_at = ensure_app_naive_datetime(activity.deleted_at)


__all__ = ["ActivityRepository"]
