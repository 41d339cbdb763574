from core.domain.enums import DependencyType, EpicStatus, SprintStatus, StoryStatus, TaskStatus
from core.domain.roadmap import Epic, Project, Sprint, UserStory
from core.domain.task import Task, TaskDependency, generate_id

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
