from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from core.models import Task, TaskDependency
from infra.db.models import TaskDependencyORM, TaskORM


def to_db_datetime(value: Optional[datetime]) -> Optional[datetime]:
    # stored as UTC; SQLite keeps no offset
    if value is None:
        return None
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_db_datetime(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def task_to_orm(task: Task) -> TaskORM:
    return TaskORM(
        id=task.id,
        user_story_id=task.user_story_id,
        sprint_id=task.sprint_id,
        title=task.title,
        description=task.description,
        estimated_hours=task.estimated_hours,
        start_date=to_db_datetime(task.start_date),
        due_date=to_db_datetime(task.due_date),
        status=task.status,
    )


def task_from_orm(obj: TaskORM) -> Task:
    return Task(
        id=obj.id,
        user_story_id=obj.user_story_id,
        sprint_id=obj.sprint_id,
        title=obj.title,
        description=obj.description,
        estimated_hours=obj.estimated_hours,
        start_date=from_db_datetime(obj.start_date),
        due_date=from_db_datetime(obj.due_date),
        status=obj.status,
    )


def dependency_to_orm(dependency: TaskDependency) -> TaskDependencyORM:
    return TaskDependencyORM(
        id=dependency.id,
        task_id=dependency.task_id,
        depends_on_id=dependency.depends_on_id,
        type=dependency.type,
        lag_days=dependency.lag_days,
    )


def dependency_from_orm(obj: TaskDependencyORM) -> TaskDependency:
    return TaskDependency(
        id=obj.id,
        task_id=obj.task_id,
        depends_on_id=obj.depends_on_id,
        type=obj.type,
        lag_days=obj.lag_days,
    )


__all__ = [
    "to_db_datetime",
    "from_db_datetime",
    "task_to_orm",
    "task_from_orm",
    "dependency_to_orm",
    "dependency_from_orm",
]
