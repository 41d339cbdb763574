from .cycle_guard import build_dependency_index, find_cycle_path, would_create_cycle
from .engine import Clock, CriticalPathEngine, SchedulingOptions, compute_critical_path
from .graph import ProjectGraph, build_project_graph, topological_order
from .models import CriticalPathEntry, CriticalPathResult, TaskNode
from .passes import run_backward_pass, run_forward_pass
from .results import build_schedule_result

__all__ = [
    "Clock",
    "CriticalPathEngine",
    "SchedulingOptions",
    "compute_critical_path",
    "ProjectGraph",
    "build_project_graph",
    "topological_order",
    "build_dependency_index",
    "find_cycle_path",
    "would_create_cycle",
    "run_forward_pass",
    "run_backward_pass",
    "build_schedule_result",
    "TaskNode",
    "CriticalPathEntry",
    "CriticalPathResult",
]
