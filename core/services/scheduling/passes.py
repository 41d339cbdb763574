from __future__ import annotations

from typing import List

from core.services.scheduling.graph import ProjectGraph


def run_forward_pass(
    graph: ProjectGraph,
    topo_order: List[str],
    now_ms: int,
    apply_lag: bool = False,
) -> int:
    """
    Earliest start/finish per node. Returns the project end (max early finish),
    0 for an empty graph.
    """
    nodes = graph.nodes
    for task_id in topo_order:
        node = nodes[task_id]
        if node.dependencies:
            candidates = []
            for dep_id in node.dependencies:
                finish = nodes[dep_id].early_finish
                if apply_lag:
                    finish += node.lag_ms_by_dependency.get(dep_id, 0)
                candidates.append(finish)
            est = max(candidates)
        elif node.start_ms is not None:
            est = node.start_ms
        else:
            est = now_ms
        node.early_start = est
        node.early_finish = est + node.duration_ms

    if not nodes:
        return 0
    return max(node.early_finish for node in nodes.values())


def run_backward_pass(
    graph: ProjectGraph,
    topo_order: List[str],
    project_end: int,
    apply_lag: bool = False,
) -> None:
    nodes = graph.nodes
    for task_id in reversed(topo_order):
        node = nodes[task_id]
        dependents = graph.dependents_of(task_id)
        if not dependents:
            lft = project_end
        else:
            candidates = []
            for succ_id in dependents:
                succ = nodes[succ_id]
                start = succ.late_start
                if apply_lag:
                    start -= succ.lag_ms_by_dependency.get(task_id, 0)
                candidates.append(start)
            lft = min(candidates)
        node.late_finish = lft
        node.late_start = lft - node.duration_ms
        node.slack = node.late_start - node.early_start


__all__ = ["run_forward_pass", "run_backward_pass"]
