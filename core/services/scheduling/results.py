from __future__ import annotations

from typing import Dict, List

from core.services.scheduling.graph import ProjectGraph
from core.services.scheduling.models import CriticalPathEntry, CriticalPathResult

DEFAULT_SLACK_TOLERANCE_MS = 1000


def build_schedule_result(
    graph: ProjectGraph,
    project_end: int,
    tolerance_ms: int = DEFAULT_SLACK_TOLERANCE_MS,
) -> CriticalPathResult:
    if not graph.nodes:
        return CriticalPathResult(critical_path=[], total_duration=0)

    schedule: Dict[str, CriticalPathEntry] = {}
    for task_id, node in graph.nodes.items():
        schedule[task_id] = CriticalPathEntry(
            id=task_id,
            title=node.title,
            early_start=node.early_start,
            early_finish=node.early_finish,
            late_start=node.late_start,
            late_finish=node.late_finish,
            slack=node.slack,
            is_critical=node.slack == 0 or abs(node.slack) < tolerance_ms,
        )

    # sorted() is stable, so equal early starts keep input order
    critical: List[CriticalPathEntry] = sorted(
        (entry for entry in schedule.values() if entry.is_critical),
        key=lambda entry: entry.early_start,
    )
    project_start = min(entry.early_start for entry in schedule.values())

    return CriticalPathResult(
        critical_path=critical,
        total_duration=project_end - project_start,
        project_start=project_start,
        project_end=project_end,
        schedule=schedule,
    )


__all__ = ["DEFAULT_SLACK_TOLERANCE_MS", "build_schedule_result"]
