# infra/db/models.py
from __future__ import annotations
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    DateTime,
    Enum as SAEnum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from infra.db.base import Base
from core.models import (
    DependencyType,
    EpicStatus,
    SprintStatus,
    StoryStatus,
    TaskStatus,
)


class ProjectORM(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")


class SprintORM(Base):
    __tablename__ = "sprints"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    start_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[SprintStatus] = mapped_column(
        SAEnum(SprintStatus), default=SprintStatus.PLANNING, nullable=False
    )
Index("idx_sprints_project_id", SprintORM.project_id)


class EpicORM(Base):
    __tablename__ = "epics"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
    status: Mapped[EpicStatus] = mapped_column(
        SAEnum(EpicStatus), default=EpicStatus.DRAFT, nullable=False
    )
    priority: Mapped[int] = mapped_column(Integer, default=0)
Index("idx_epics_project_id", EpicORM.project_id)


class UserStoryORM(Base):
    __tablename__ = "user_stories"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    epic_id: Mapped[str] = mapped_column(String, ForeignKey("epics.id", ondelete="CASCADE"), nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[StoryStatus] = mapped_column(
        SAEnum(StoryStatus), default=StoryStatus.DRAFT, nullable=False
    )
    sprint_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("sprints.id", ondelete="SET NULL"), nullable=True
    )
Index("idx_user_stories_epic_id", UserStoryORM.epic_id)


class TaskORM(Base):
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    user_story_id: Mapped[Optional[str]] = mapped_column(
        String,
        ForeignKey("user_stories.id", ondelete="CASCADE"),
        nullable=True,
    )
    sprint_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("sprints.id", ondelete="SET NULL"), nullable=True
    )
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
    estimated_hours: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    start_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    due_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[TaskStatus] = mapped_column(
        SAEnum(TaskStatus), default=TaskStatus.TODO, nullable=False
    )
Index("idx_tasks_user_story_id", TaskORM.user_story_id)


class TaskDependencyORM(Base):
    __tablename__ = "task_dependencies"
    __table_args__ = (
        UniqueConstraint("task_id", "depends_on_id", name="uq_task_dependency_pair"),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True)
    task_id: Mapped[str] = mapped_column(String, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False)
    depends_on_id: Mapped[str] = mapped_column(String, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False)
    type: Mapped[DependencyType] = mapped_column(
        SAEnum(DependencyType), default=DependencyType.FINISH_TO_START, nullable=False
    )
    lag_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
Index("idx_dep_task", TaskDependencyORM.task_id)
Index("idx_dep_depends_on", TaskDependencyORM.depends_on_id)
