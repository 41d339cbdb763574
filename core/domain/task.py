from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import uuid4

from core.domain.enums import DependencyType, TaskStatus


def generate_id() -> str:
    return str(uuid4())


@dataclass
class Task:
    id: str
    title: str
    description: str = ""
    estimated_hours: Optional[float] = 0.0
    start_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    status: TaskStatus = TaskStatus.TODO
    user_story_id: Optional[str] = None
    sprint_id: Optional[str] = None

    @property
    def is_cancelled(self) -> bool:
        return self.status == TaskStatus.CANCELLED

    @staticmethod
    def create(title: str, description: str = "", **extra) -> "Task":
        return Task(
            id=generate_id(),
            title=title,
            description=description,
            **extra,
        )


@dataclass
class TaskDependency:
    """`task_id` depends on `depends_on_id`."""
    id: str
    task_id: str
    depends_on_id: str
    type: DependencyType = DependencyType.FINISH_TO_START
    lag_days: int = 0

    @staticmethod
    def create(
        task_id: str,
        depends_on_id: str,
        type: DependencyType = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
    ) -> "TaskDependency":
        return TaskDependency(
            id=generate_id(),
            task_id=task_id,
            depends_on_id=depends_on_id,
            type=type,
            lag_days=lag_days,
        )


__all__ = ["generate_id", "Task", "TaskDependency"]
