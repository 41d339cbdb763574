# core/services/scheduling/engine.py
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional, Union

from core.events.domain_events import domain_events
from core.exceptions import CycleDetectedError
from core.interfaces import DependencyRepository, TaskRepository
from core.models import Task, TaskDependency
from core.services.scheduling.date_compute import to_millis
from core.services.scheduling.graph import build_project_graph, topological_order
from core.services.scheduling.models import CriticalPathResult
from core.services.scheduling.passes import run_backward_pass, run_forward_pass
from core.services.scheduling.results import DEFAULT_SLACK_TOLERANCE_MS, build_schedule_result

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SchedulingOptions:
    slack_tolerance_ms: int = DEFAULT_SLACK_TOLERANCE_MS
    max_graph_nodes: Optional[int] = None
    apply_lag_days: bool = False


def compute_critical_path(
    tasks: Iterable[Task],
    dependencies: Iterable[TaskDependency],
    *,
    now: Union[datetime, int],
    options: Optional[SchedulingOptions] = None,
) -> CriticalPathResult:
    """
    Single CPM pass over a snapshot of tasks and dependency edges.

    `now` anchors root tasks that carry no start date; pass a fixed value for
    reproducible results. Raises CycleDetectedError if the edges contain a loop.
    """
    options = options or SchedulingOptions()
    now_ms = now if isinstance(now, int) else to_millis(now)

    graph = build_project_graph(tasks, dependencies)
    order = topological_order(graph, max_nodes=options.max_graph_nodes)
    project_end = run_forward_pass(graph, order, now_ms, apply_lag=options.apply_lag_days)
    run_backward_pass(graph, order, project_end, apply_lag=options.apply_lag_days)
    return build_schedule_result(graph, project_end, tolerance_ms=options.slack_tolerance_ms)


class CriticalPathEngine:
    """
    Loads a project snapshot through the repositories and runs the CPM pass.
    Derived dates are returned, never written back.
    """

    def __init__(
        self,
        task_repo: TaskRepository,
        dependency_repo: DependencyRepository,
        options: Optional[SchedulingOptions] = None,
        clock: Optional[Clock] = None,
    ):
        self._task_repo: TaskRepository = task_repo
        self._dependency_repo: DependencyRepository = dependency_repo
        self._options: SchedulingOptions = options or SchedulingOptions()
        self._clock: Clock = clock or _utc_now

    def calculate_for_project(self, project_id: str) -> CriticalPathResult:
        tasks = self._task_repo.list_by_project(project_id)
        deps = self._dependency_repo.list_by_project(project_id)

        started = time.perf_counter()
        try:
            result = compute_critical_path(
                tasks,
                deps,
                now=self._clock(),
                options=self._options,
            )
        except CycleDetectedError as exc:
            logger.error("Critical path failed for project %s: %s", project_id, exc)
            domain_events.schedule_failed.emit((project_id, exc))
            raise

        logger.info(
            "Critical path for project %s: %s task(s), %s critical, duration %sms in %.1fms",
            project_id,
            len(result.schedule),
            len(result.critical_path),
            result.total_duration,
            (time.perf_counter() - started) * 1000.0,
        )
        return result


__all__ = ["Clock", "SchedulingOptions", "compute_critical_path", "CriticalPathEngine"]
