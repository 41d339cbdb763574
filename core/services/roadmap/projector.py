from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from core.models import (
    Epic,
    EpicStatus,
    Sprint,
    StoryStatus,
    Task,
    UserStory,
)


@dataclass
class EpicTimeline:
    id: str
    title: str
    description: str
    status: EpicStatus
    priority: int
    estimated_start: Optional[datetime]
    estimated_end: Optional[datetime]
    story_count: int
    completed_stories: int

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority,
            "estimatedStart": self.estimated_start.isoformat() if self.estimated_start else None,
            "estimatedEnd": self.estimated_end.isoformat() if self.estimated_end else None,
            "storyCount": self.story_count,
            "completedStories": self.completed_stories,
        }


def _as_utc(value: datetime) -> datetime:
    # naive values are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def project_epic_bounds(
    epic: Epic,
    stories: Iterable[UserStory],
    tasks: Iterable[Task],
    sprints_by_id: Dict[str, Sprint],
) -> EpicTimeline:
    """
    Min start / max end over the epic's task dates and its stories' sprint ranges.
    A task without a due date ends at its start date.
    """
    stories = [s for s in stories if s.status != StoryStatus.CANCELLED]
    story_ids = {s.id for s in stories}

    starts: List[datetime] = []
    ends: List[datetime] = []
    for task in tasks:
        if task.is_cancelled or task.user_story_id not in story_ids:
            continue
        if task.start_date is None and task.due_date is None:
            continue
        if task.start_date is not None:
            starts.append(_as_utc(task.start_date))
        end = task.due_date or task.start_date
        ends.append(_as_utc(end))

    for story in stories:
        sprint = sprints_by_id.get(story.sprint_id) if story.sprint_id else None
        if sprint is None:
            continue
        if sprint.start_date is not None:
            starts.append(_as_utc(sprint.start_date))
        if sprint.end_date is not None:
            ends.append(_as_utc(sprint.end_date))

    return EpicTimeline(
        id=epic.id,
        title=epic.title,
        description=epic.description,
        status=epic.status,
        priority=epic.priority,
        estimated_start=min(starts) if starts else None,
        estimated_end=max(ends) if ends else None,
        story_count=len(stories),
        completed_stories=sum(1 for s in stories if s.status == StoryStatus.COMPLETED),
    )


def build_roadmap(
    epics: Iterable[Epic],
    stories: Iterable[UserStory],
    tasks: Iterable[Task],
    sprints: Iterable[Sprint],
) -> List[EpicTimeline]:
    stories_by_epic: Dict[str, List[UserStory]] = {}
    for story in stories:
        stories_by_epic.setdefault(story.epic_id, []).append(story)
    tasks = list(tasks)
    sprints_by_id = {s.id: s for s in sprints}

    active = [e for e in epics if e.status != EpicStatus.CANCELLED]
    active.sort(key=lambda e: e.priority, reverse=True)
    return [
        project_epic_bounds(epic, stories_by_epic.get(epic.id, []), tasks, sprints_by_id)
        for epic in active
    ]


__all__ = ["EpicTimeline", "project_epic_bounds", "build_roadmap"]
