from __future__ import annotations

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.interfaces import RoadmapRepository
from core.models import Epic, Project, Sprint, Task, UserStory
from infra.db.models import EpicORM, SprintORM, TaskORM, UserStoryORM
from infra.db.roadmap.mapper import (
    epic_from_orm,
    epic_to_orm,
    project_to_orm,
    sprint_from_orm,
    sprint_to_orm,
    story_from_orm,
    story_to_orm,
)
from infra.db.task.mapper import task_from_orm


class SqlAlchemyRoadmapRepository(RoadmapRepository):
    def __init__(self, session: Session):
        self.session = session

    def add_project(self, project: Project) -> None:
        self.session.add(project_to_orm(project))

    def add_sprint(self, sprint: Sprint) -> None:
        self.session.add(sprint_to_orm(sprint))

    def add_epic(self, epic: Epic) -> None:
        self.session.add(epic_to_orm(epic))

    def add_story(self, story: UserStory) -> None:
        self.session.add(story_to_orm(story))

    def list_epics(self, project_id: str) -> List[Epic]:
        stmt = (
            select(EpicORM)
            .where(EpicORM.project_id == project_id)
            .order_by(EpicORM.priority.desc())
        )
        rows = self.session.execute(stmt).scalars().all()
        return [epic_from_orm(row) for row in rows]

    def list_stories(self, epic_ids: List[str]) -> List[UserStory]:
        if not epic_ids:
            return []
        stmt = select(UserStoryORM).where(UserStoryORM.epic_id.in_(epic_ids))
        rows = self.session.execute(stmt).scalars().all()
        return [story_from_orm(row) for row in rows]

    def list_tasks_for_stories(self, story_ids: List[str]) -> List[Task]:
        if not story_ids:
            return []
        stmt = (
            select(TaskORM)
            .where(TaskORM.user_story_id.in_(story_ids))
            .order_by(TaskORM.start_date.is_(None), TaskORM.start_date, TaskORM.title, TaskORM.id)
        )
        rows = self.session.execute(stmt).scalars().all()
        return [task_from_orm(row) for row in rows]

    def list_sprints(self, project_id: str) -> List[Sprint]:
        stmt = select(SprintORM).where(SprintORM.project_id == project_id)
        rows = self.session.execute(stmt).scalars().all()
        return [sprint_from_orm(row) for row in rows]


__all__ = ["SqlAlchemyRoadmapRepository"]
