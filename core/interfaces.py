from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from core.models import Epic, Sprint, Task, TaskDependency, UserStory


class TaskRepository(ABC):
    @abstractmethod
    def add(self, task: Task) -> None: ...

    @abstractmethod
    def get(self, task_id: str) -> Optional[Task]: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[Task]: ...


class DependencyRepository(ABC):
    @abstractmethod
    def add(self, dependency: TaskDependency) -> None: ...

    @abstractmethod
    def get(self, dependency_id: str) -> Optional[TaskDependency]: ...

    @abstractmethod
    def delete(self, dependency_id: str) -> None: ...

    @abstractmethod
    def list_by_task(self, task_id: str) -> List[TaskDependency]: ...

    @abstractmethod
    def list_by_project(self, project_id: str) -> List[TaskDependency]: ...

    @abstractmethod
    def list_depends_on_ids(self, task_id: str) -> List[str]: ...


class RoadmapRepository(ABC):
    @abstractmethod
    def list_epics(self, project_id: str) -> List[Epic]: ...

    @abstractmethod
    def list_stories(self, epic_ids: List[str]) -> List[UserStory]: ...

    @abstractmethod
    def list_tasks_for_stories(self, story_ids: List[str]) -> List[Task]: ...

    @abstractmethod
    def list_sprints(self, project_id: str) -> List[Sprint]: ...


__all__ = ["TaskRepository", "DependencyRepository", "RoadmapRepository"]
