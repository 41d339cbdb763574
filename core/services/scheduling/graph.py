from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from core.exceptions import CycleDetectedError, ScheduleLimitError
from core.models import Task, TaskDependency
from core.services.scheduling.date_compute import duration_millis, lag_millis, to_millis
from core.services.scheduling.models import TaskNode

logger = logging.getLogger(__name__)

_UNVISITED = 0
_IN_PROGRESS = 1
_DONE = 2


@dataclass
class ProjectGraph:
    """
    Ephemeral dependency graph for one scheduling call.

    `nodes[id].dependencies` are the tasks a node waits on; `dependents` is the
    reverse index (depends_on_id -> ids of tasks that wait on it).
    """
    nodes: Dict[str, TaskNode] = field(default_factory=dict)
    dependents: Dict[str, List[str]] = field(default_factory=dict)
    dropped_edges: int = 0

    def __len__(self) -> int:
        return len(self.nodes)

    def dependents_of(self, task_id: str) -> List[str]:
        return self.dependents.get(task_id, [])

    def roots(self) -> List[str]:
        return [task_id for task_id, node in self.nodes.items() if not node.dependencies]

    def leaves(self) -> List[str]:
        return [task_id for task_id in self.nodes if not self.dependents.get(task_id)]


def _node_from_task(task: Task) -> TaskNode:
    start_ms = to_millis(task.start_date)
    if start_ms is not None:
        start_ms = max(0, start_ms)
    return TaskNode(
        task=task,
        duration_ms=duration_millis(task.estimated_hours),
        start_ms=start_ms,
    )


def build_project_graph(
    tasks: Iterable[Task],
    dependencies: Iterable[TaskDependency],
) -> ProjectGraph:
    graph = ProjectGraph()
    for task in tasks:
        if task.is_cancelled:
            continue
        graph.nodes[task.id] = _node_from_task(task)

    for dep in dependencies:
        node = graph.nodes.get(dep.task_id)
        if node is None or dep.depends_on_id not in graph.nodes:
            graph.dropped_edges += 1
            continue
        if dep.depends_on_id in node.lag_ms_by_dependency:
            continue
        node.dependencies.append(dep.depends_on_id)
        node.lag_ms_by_dependency[dep.depends_on_id] = lag_millis(dep.lag_days)
        graph.dependents.setdefault(dep.depends_on_id, []).append(dep.task_id)

    if graph.dropped_edges:
        logger.debug("Dropped %s dangling dependency edge(s)", graph.dropped_edges)
    return graph


def topological_order(graph: ProjectGraph, max_nodes: Optional[int] = None) -> List[str]:
    """
    Dependencies-first order over all nodes.

    Iterative DFS with a three-state marker; reaching a node that is still in
    progress means the graph has a cycle.
    """
    if max_nodes is not None and len(graph.nodes) > max_nodes:
        raise ScheduleLimitError(
            f"Cannot schedule project: {len(graph.nodes)} tasks exceed the limit of {max_nodes}."
        )

    state: Dict[str, int] = {task_id: _UNVISITED for task_id in graph.nodes}
    order: List[str] = []

    for root_id in graph.nodes:
        if state[root_id] != _UNVISITED:
            continue
        state[root_id] = _IN_PROGRESS
        path: List[str] = [root_id]
        stack = [(root_id, iter(graph.nodes[root_id].dependencies))]
        while stack:
            task_id, pending = stack[-1]
            next_id = next(pending, None)
            if next_id is None:
                stack.pop()
                path.pop()
                state[task_id] = _DONE
                order.append(task_id)
                continue
            next_state = state[next_id]
            if next_state == _DONE:
                continue
            if next_state == _IN_PROGRESS:
                cycle = path[path.index(next_id):] + [next_id]
                raise CycleDetectedError(
                    "Cannot schedule project: circular dependency detected ("
                    + " -> ".join(cycle)
                    + ").",
                    cycle=cycle,
                )
            state[next_id] = _IN_PROGRESS
            path.append(next_id)
            stack.append((next_id, iter(graph.nodes[next_id].dependencies)))

    return order


__all__ = ["ProjectGraph", "build_project_graph", "topological_order"]
