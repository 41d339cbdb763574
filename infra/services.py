from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.services.roadmap import RoadmapService
from core.services.scheduling import Clock, CriticalPathEngine, SchedulingOptions
from core.services.task import TaskDependencyService
from infra.db.repositories import (
    SqlAlchemyDependencyRepository,
    SqlAlchemyRoadmapRepository,
    SqlAlchemyTaskRepository,
)
from infra.operational_support import OperationalSupport, bind_trace_id
from infra.settings import SchedulerSettings, load_settings


def scheduling_options_from(settings: SchedulerSettings) -> SchedulingOptions:
    return SchedulingOptions(
        slack_tolerance_ms=settings.slack_tolerance_ms,
        max_graph_nodes=settings.max_graph_nodes,
        apply_lag_days=settings.apply_lag_days,
    )


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    settings: SchedulerSettings
    support: OperationalSupport
    task_repo: SqlAlchemyTaskRepository
    dependency_repo: SqlAlchemyDependencyRepository
    roadmap_repo: SqlAlchemyRoadmapRepository
    dependency_service: TaskDependencyService
    critical_path_engine: CriticalPathEngine
    roadmap_service: RoadmapService

    def critical_path_payload(self, project_id: str, trace_id: str | None = None) -> dict[str, Any]:
        """Critical path in its wire shape, computed under a bound trace id."""
        with bind_trace_id(trace_id):
            return self.critical_path_engine.calculate_for_project(project_id).to_dict()

    def close(self) -> None:
        domain_events.schedule_failed.disconnect(self.support.record_schedule_failure)

    def as_dict(self) -> dict[str, Any]:
        return {
            "session": self.session,
            "settings": self.settings,
            "support": self.support,
            "task_repo": self.task_repo,
            "dependency_repo": self.dependency_repo,
            "roadmap_repo": self.roadmap_repo,
            "dependency_service": self.dependency_service,
            "critical_path_engine": self.critical_path_engine,
            "roadmap_service": self.roadmap_service,
        }


def build_service_graph(
    session: Session,
    settings: Optional[SchedulerSettings] = None,
    clock: Optional[Clock] = None,
    support: Optional[OperationalSupport] = None,
) -> ServiceGraph:
    settings = settings or load_settings()
    support = support or OperationalSupport(settings.resolved_log_dir() / "support-events.jsonl")

    task_repo = SqlAlchemyTaskRepository(session)
    dependency_repo = SqlAlchemyDependencyRepository(session)
    roadmap_repo = SqlAlchemyRoadmapRepository(session)

    dependency_service = TaskDependencyService(session, task_repo, dependency_repo)
    critical_path_engine = CriticalPathEngine(
        task_repo,
        dependency_repo,
        options=scheduling_options_from(settings),
        clock=clock,
    )
    roadmap_service = RoadmapService(roadmap_repo, dependency_repo)

    domain_events.schedule_failed.connect(support.record_schedule_failure)

    return ServiceGraph(
        session=session,
        settings=settings,
        support=support,
        task_repo=task_repo,
        dependency_repo=dependency_repo,
        roadmap_repo=roadmap_repo,
        dependency_service=dependency_service,
        critical_path_engine=critical_path_engine,
        roadmap_service=roadmap_service,
    )


__all__ = ["ServiceGraph", "build_service_graph", "scheduling_options_from"]
