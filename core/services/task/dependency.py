from __future__ import annotations

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from core.interfaces import DependencyRepository, TaskRepository
from core.models import DependencyType, TaskDependency
from core.services.common.base import ServiceBase
from core.services.scheduling.cycle_guard import find_cycle_path

logger = logging.getLogger(__name__)


def _as_dependency_type(value) -> DependencyType:
    if isinstance(value, DependencyType):
        return value
    try:
        return DependencyType((value or DependencyType.FINISH_TO_START.value))
    except ValueError as exc:
        raise ValidationError(
            f"Unsupported dependency type: {value!r}",
            code="DEPENDENCY_TYPE_INVALID",
        ) from exc


def _as_lag_days(value) -> int:
    if value in (None, ""):
        return 0
    if isinstance(value, bool):
        raise ValidationError("lag_days must be an integer.", code="DEPENDENCY_LAG_INVALID")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError("lag_days must be an integer.", code="DEPENDENCY_LAG_INVALID") from exc


class TaskDependencyService(ServiceBase):
    """Creates and removes dependency edges; nothing is persisted that would close a loop."""

    def __init__(
        self,
        session: Session,
        task_repo: TaskRepository,
        dependency_repo: DependencyRepository,
    ):
        super().__init__(session)
        self._task_repo: TaskRepository = task_repo
        self._dependency_repo: DependencyRepository = dependency_repo

    def would_create_cycle(self, task_id: str, depends_on_id: str) -> bool:
        return self._cycle_path(task_id, depends_on_id) is not None

    def add_dependency(
        self,
        task_id: str,
        depends_on_id: str,
        dependency_type: DependencyType | str = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
    ) -> TaskDependency:
        if not depends_on_id:
            raise ValidationError("depends_on_id is required.", code="DEPENDENCY_TARGET_REQUIRED")
        dependency_type = _as_dependency_type(dependency_type)
        lag_days = _as_lag_days(lag_days)

        task = self._task_repo.get(task_id)
        if not task:
            raise NotFoundError(f"Task id '{task_id}' does not exist.", code="TASK_NOT_FOUND")
        depends_on = self._task_repo.get(depends_on_id)
        if not depends_on:
            raise NotFoundError(f"Task id '{depends_on_id}' does not exist.", code="TASK_NOT_FOUND")

        cycle = self._cycle_path(task_id, depends_on_id)
        if cycle:
            titles = {task.id: task.title, depends_on.id: depends_on.title}
            cycle_text = " -> ".join(self._title_for(step, titles) for step in cycle)
            logger.info("Rejected dependency %s -> %s: cycle %s", task_id, depends_on_id, cycle_text)
            raise BusinessRuleError(
                f"This dependency would create a circular dependency.\nCycle path: {cycle_text}",
                code="DEPENDENCY_CYCLE",
            )

        if any(dep.depends_on_id == depends_on_id for dep in self._dependency_repo.list_by_task(task_id)):
            raise BusinessRuleError("Dependency already exists.", code="DEPENDENCY_DUPLICATE")

        dep = TaskDependency.create(task_id, depends_on_id, dependency_type, lag_days)
        self._dependency_repo.add(dep)
        try:
            self.commit()
        except IntegrityError as exc:
            raise BusinessRuleError("Dependency already exists.", code="DEPENDENCY_DUPLICATE") from exc
        logger.info(
            "Created dependency %s: %s depends on %s (%s, lag %sd)",
            dep.id,
            task_id,
            depends_on_id,
            dependency_type.value,
            lag_days,
        )
        domain_events.dependencies_changed.emit(task_id)
        return dep

    def remove_dependency(self, dependency_id: str) -> None:
        dep = self._dependency_repo.get(dependency_id)
        if not dep:
            raise NotFoundError("Dependency not found.", code="DEPENDENCY_NOT_FOUND")
        self._dependency_repo.delete(dependency_id)
        self.commit()
        logger.info("Removed dependency %s", dependency_id)
        domain_events.dependencies_changed.emit(dep.task_id)

    def list_dependencies(self, task_id: str) -> List[TaskDependency]:
        return self._dependency_repo.list_by_task(task_id)

    def _cycle_path(self, task_id: str, depends_on_id: str) -> list[str] | None:
        return find_cycle_path(self._dependency_repo.list_depends_on_ids, task_id, depends_on_id)

    def _title_for(self, task_id: str, known: dict[str, str]) -> str:
        if task_id not in known:
            task = self._task_repo.get(task_id)
            known[task_id] = task.title if task else task_id
        return known[task_id]


__all__ = ["TaskDependencyService"]
