from __future__ import annotations

from core.domain import (
    DependencyType,
    Epic,
    EpicStatus,
    Project,
    Sprint,
    SprintStatus,
    StoryStatus,
    Task,
    TaskDependency,
    TaskStatus,
    UserStory,
    generate_id,
)

__all__ = [
    "generate_id",
    "TaskStatus",
    "StoryStatus",
    "EpicStatus",
    "SprintStatus",
    "DependencyType",
    "Project",
    "Sprint",
    "Epic",
    "UserStory",
    "Task",
    "TaskDependency",
]
