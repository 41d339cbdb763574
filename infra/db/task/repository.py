from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.interfaces import DependencyRepository, TaskRepository
from core.models import Task, TaskDependency
from infra.db.models import EpicORM, TaskDependencyORM, TaskORM, UserStoryORM
from infra.db.task.mapper import (
    dependency_from_orm,
    dependency_to_orm,
    task_from_orm,
    task_to_orm,
)


def _project_task_ids(project_id: str):
    return (
        select(TaskORM.id)
        .join(UserStoryORM, TaskORM.user_story_id == UserStoryORM.id)
        .join(EpicORM, UserStoryORM.epic_id == EpicORM.id)
        .where(EpicORM.project_id == project_id)
    )


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, task: Task) -> None:
        self.session.add(task_to_orm(task))

    def update(self, task: Task) -> None:
        self.session.merge(task_to_orm(task))

    def get(self, task_id: str) -> Optional[Task]:
        obj = self.session.get(TaskORM, task_id)
        return task_from_orm(obj) if obj else None

    def list_by_project(self, project_id: str) -> List[Task]:
        stmt = select(TaskORM).where(TaskORM.id.in_(_project_task_ids(project_id)))
        rows = self.session.execute(stmt).scalars().all()
        return [task_from_orm(row) for row in rows]


class SqlAlchemyDependencyRepository(DependencyRepository):
    def __init__(self, session: Session):
        self.session = session

    def add(self, dependency: TaskDependency) -> None:
        self.session.add(dependency_to_orm(dependency))

    def get(self, dependency_id: str) -> Optional[TaskDependency]:
        obj = self.session.get(TaskDependencyORM, dependency_id)
        return dependency_from_orm(obj) if obj else None

    def delete(self, dependency_id: str) -> None:
        self.session.query(TaskDependencyORM).filter_by(id=dependency_id).delete()

    def list_by_task(self, task_id: str) -> List[TaskDependency]:
        stmt = (
            select(TaskDependencyORM)
            .where(TaskDependencyORM.task_id == task_id)
            .order_by(TaskDependencyORM.depends_on_id, TaskDependencyORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [dependency_from_orm(row) for row in rows]

    def list_by_project(self, project_id: str) -> List[TaskDependency]:
        task_ids_subq = _project_task_ids(project_id)
        stmt = select(TaskDependencyORM).where(
            TaskDependencyORM.task_id.in_(task_ids_subq),
            TaskDependencyORM.depends_on_id.in_(task_ids_subq),
        )
        rows = self.session.execute(stmt).scalars().all()
        return [dependency_from_orm(row) for row in rows]

    def list_depends_on_ids(self, task_id: str) -> List[str]:
        stmt = select(TaskDependencyORM.depends_on_id).where(TaskDependencyORM.task_id == task_id)
        return list(self.session.execute(stmt).scalars().all())


__all__ = [
    "SqlAlchemyTaskRepository",
    "SqlAlchemyDependencyRepository",
]
