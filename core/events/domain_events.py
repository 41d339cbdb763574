"""Track dependency edits and scheduling failures for interested listeners."""
from __future__ import annotations

from core.events.signal import Signal


class DomainEvents:
    def __init__(self) -> None:
        self.dependencies_changed: Signal[str] = Signal()   # task_id
        self.schedule_failed: Signal[tuple] = Signal()      # (project_id, exception)


# SINGLE global instance
domain_events = DomainEvents()
