from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from core.interfaces import DependencyRepository, RoadmapRepository
from core.models import SprintStatus, TaskDependency
from core.services.roadmap.projector import EpicTimeline, build_roadmap

logger = logging.getLogger(__name__)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class RoadmapService:
    def __init__(
        self,
        roadmap_repo: RoadmapRepository,
        dependency_repo: DependencyRepository,
    ):
        self._roadmap_repo: RoadmapRepository = roadmap_repo
        self._dependency_repo: DependencyRepository = dependency_repo

    def get_roadmap(self, project_id: str) -> List[EpicTimeline]:
        epics = self._roadmap_repo.list_epics(project_id)
        stories = self._roadmap_repo.list_stories([e.id for e in epics])
        tasks = self._roadmap_repo.list_tasks_for_stories([s.id for s in stories])
        sprints = self._roadmap_repo.list_sprints(project_id)
        roadmap = build_roadmap(epics, stories, tasks, sprints)
        logger.info("Roadmap for project %s: %s epic(s)", project_id, len(roadmap))
        return roadmap

    def get_gantt_rows(self, project_id: str, sprint_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Task rows (with their dependency edges) and sprint ranges for a Gantt view.
        Cancelled tasks and sprints are left out. A row carries every edge its task
        owns, including edges to tasks outside the project.
        """
        epics = self._roadmap_repo.list_epics(project_id)
        stories = self._roadmap_repo.list_stories([e.id for e in epics])
        tasks = [
            t
            for t in self._roadmap_repo.list_tasks_for_stories([s.id for s in stories])
            if not t.is_cancelled and (sprint_id is None or t.sprint_id == sprint_id)
        ]

        deps_by_task: Dict[str, List[TaskDependency]] = {
            t.id: self._dependency_repo.list_by_task(t.id) for t in tasks
        }

        rows = [
            {
                "id": t.id,
                "title": t.title,
                "startDate": _iso(t.start_date),
                "dueDate": _iso(t.due_date),
                "status": t.status.value,
                "userStoryId": t.user_story_id,
                "sprintId": t.sprint_id,
                "dependencies": [
                    {
                        "id": d.id,
                        "dependsOnId": d.depends_on_id,
                        "type": d.type.value,
                        "lagDays": d.lag_days,
                    }
                    for d in deps_by_task.get(t.id, [])
                ],
            }
            for t in tasks
        ]
        sprints = [
            {
                "id": s.id,
                "name": s.name,
                "startDate": _iso(s.start_date),
                "endDate": _iso(s.end_date),
                "status": s.status.value,
            }
            for s in self._roadmap_repo.list_sprints(project_id)
            if s.status != SprintStatus.CANCELLED
        ]
        return {"tasks": rows, "sprints": sprints}


__all__ = ["RoadmapService"]
