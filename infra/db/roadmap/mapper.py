from __future__ import annotations

from core.models import Epic, Project, Sprint, UserStory
from infra.db.models import EpicORM, ProjectORM, SprintORM, UserStoryORM
from infra.db.task.mapper import from_db_datetime, to_db_datetime


def project_to_orm(project: Project) -> ProjectORM:
    return ProjectORM(id=project.id, name=project.name, description=project.description)


def sprint_to_orm(sprint: Sprint) -> SprintORM:
    return SprintORM(
        id=sprint.id,
        project_id=sprint.project_id,
        name=sprint.name,
        start_date=to_db_datetime(sprint.start_date),
        end_date=to_db_datetime(sprint.end_date),
        status=sprint.status,
    )


def sprint_from_orm(obj: SprintORM) -> Sprint:
    return Sprint(
        id=obj.id,
        project_id=obj.project_id,
        name=obj.name,
        start_date=from_db_datetime(obj.start_date),
        end_date=from_db_datetime(obj.end_date),
        status=obj.status,
    )


def epic_to_orm(epic: Epic) -> EpicORM:
    return EpicORM(
        id=epic.id,
        project_id=epic.project_id,
        title=epic.title,
        description=epic.description,
        status=epic.status,
        priority=epic.priority,
    )


def epic_from_orm(obj: EpicORM) -> Epic:
    return Epic(
        id=obj.id,
        project_id=obj.project_id,
        title=obj.title,
        description=obj.description,
        status=obj.status,
        priority=obj.priority,
    )


def story_to_orm(story: UserStory) -> UserStoryORM:
    return UserStoryORM(
        id=story.id,
        epic_id=story.epic_id,
        title=story.title,
        status=story.status,
        sprint_id=story.sprint_id,
    )


def story_from_orm(obj: UserStoryORM) -> UserStory:
    return UserStory(
        id=obj.id,
        epic_id=obj.epic_id,
        title=obj.title,
        status=obj.status,
        sprint_id=obj.sprint_id,
    )


__all__ = [
    "project_to_orm",
    "sprint_to_orm",
    "sprint_from_orm",
    "epic_to_orm",
    "epic_from_orm",
    "story_to_orm",
    "story_from_orm",
]
