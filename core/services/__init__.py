from .roadmap import RoadmapService
from .scheduling import CriticalPathEngine, CriticalPathResult, SchedulingOptions
from .task import TaskDependencyService

__all__ = [
    "CriticalPathEngine",
    "CriticalPathResult",
    "SchedulingOptions",
    "RoadmapService",
    "TaskDependencyService",
]
