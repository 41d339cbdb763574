from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.enums import EpicStatus, SprintStatus, StoryStatus
from core.domain.task import generate_id


@dataclass
class Project:
    id: str
    name: str
    description: str = ""

    @staticmethod
    def create(name: str, description: str = "") -> "Project":
        return Project(id=generate_id(), name=name, description=description)


@dataclass
class Sprint:
    id: str
    project_id: str
    name: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: SprintStatus = SprintStatus.PLANNING

    @staticmethod
    def create(project_id: str, name: str, **extra) -> "Sprint":
        return Sprint(id=generate_id(), project_id=project_id, name=name, **extra)


@dataclass
class Epic:
    id: str
    project_id: str
    title: str
    description: str = ""
    status: EpicStatus = EpicStatus.DRAFT
    priority: int = 0

    @staticmethod
    def create(project_id: str, title: str, description: str = "", **extra) -> "Epic":
        return Epic(
            id=generate_id(),
            project_id=project_id,
            title=title,
            description=description,
            **extra,
        )


@dataclass
class UserStory:
    id: str
    epic_id: str
    title: str
    status: StoryStatus = StoryStatus.DRAFT
    sprint_id: Optional[str] = None

    @staticmethod
    def create(epic_id: str, title: str, **extra) -> "UserStory":
        return UserStory(id=generate_id(), epic_id=epic_id, title=title, **extra)


__all__ = ["Project", "Sprint", "Epic", "UserStory"]
