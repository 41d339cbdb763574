from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from core.models import Task
from core.services.scheduling.date_compute import to_iso


@dataclass
class TaskNode:
    task: Task
    duration_ms: int
    start_ms: Optional[int] = None
    dependencies: List[str] = field(default_factory=list)
    lag_ms_by_dependency: Dict[str, int] = field(default_factory=dict)

    early_start: Optional[int] = None
    early_finish: Optional[int] = None
    late_start: Optional[int] = None
    late_finish: Optional[int] = None
    slack: Optional[int] = None

    @property
    def id(self) -> str:
        return self.task.id

    @property
    def title(self) -> str:
        return self.task.title


@dataclass
class CriticalPathEntry:
    id: str
    title: str
    early_start: int
    early_finish: int
    late_start: int
    late_finish: int
    slack: int
    is_critical: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "earlyStart": to_iso(self.early_start),
            "earlyFinish": to_iso(self.early_finish),
            "slack": self.slack,
        }


@dataclass
class CriticalPathResult:
    critical_path: List[CriticalPathEntry]
    total_duration: int
    project_start: Optional[int] = None
    project_end: Optional[int] = None
    schedule: Dict[str, CriticalPathEntry] = field(default_factory=dict)

    @property
    def critical_ids(self) -> List[str]:
        return [entry.id for entry in self.critical_path]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "criticalPath": [entry.to_dict() for entry in self.critical_path],
            "totalDuration": self.total_duration,
        }


__all__ = ["TaskNode", "CriticalPathEntry", "CriticalPathResult"]
