from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Mapping, Optional, Union

from core.models import TaskDependency

DependsOnLookup = Union[Mapping[str, Iterable[str]], Callable[[str], Iterable[str]]]


def build_dependency_index(dependencies: Iterable[TaskDependency]) -> Dict[str, List[str]]:
    index: Dict[str, List[str]] = {}
    for dep in dependencies:
        index.setdefault(dep.task_id, []).append(dep.depends_on_id)
    return index


def _as_callable(depends_on: DependsOnLookup) -> Callable[[str], Iterable[str]]:
    if callable(depends_on):
        return depends_on
    return lambda task_id: depends_on.get(task_id, ())


def find_cycle_path(
    depends_on: DependsOnLookup,
    dependent_id: str,
    dependency_id: str,
) -> Optional[List[str]]:
    """
    Path that the edge `dependent_id -> dependency_id` would close, or None.

    The returned list starts and ends with `dependent_id`, e.g. for
    A -> B when B already depends on A: ["A", "B", "A"].
    """
    if dependent_id == dependency_id:
        return [dependent_id, dependent_id]

    lookup = _as_callable(depends_on)
    parent: Dict[str, Optional[str]] = {dependency_id: None}
    stack: List[str] = [dependency_id]
    while stack:
        current = stack.pop()
        if current == dependent_id:
            chain: List[str] = []
            node: Optional[str] = current
            while node is not None:
                chain.append(node)
                node = parent[node]
            chain.reverse()
            return [dependent_id, *chain]
        for upstream in lookup(current):
            if upstream in parent:
                continue
            parent[upstream] = current
            stack.append(upstream)
    return None


def would_create_cycle(
    depends_on: DependsOnLookup,
    dependent_id: str,
    dependency_id: str,
) -> bool:
    return find_cycle_path(depends_on, dependent_id, dependency_id) is not None


__all__ = [
    "DependsOnLookup",
    "build_dependency_index",
    "find_cycle_path",
    "would_create_cycle",
]
