# tests/conftest.py
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from infra.db.base import Base
import infra.db.models  # noqa
from infra.operational_support import OperationalSupport
from infra.services import build_service_graph
from infra.settings import SchedulerSettings

from core.models import Epic, Project, Task, UserStory


FIXED_NOW = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def settings(tmp_path):
    return SchedulerSettings(log_dir=str(tmp_path / "logs"))


@pytest.fixture
def services(session, settings, tmp_path):
    # Recreate what the app wiring does, but with the test session and a frozen clock
    support = OperationalSupport(events_path=tmp_path / "support-events.jsonl")
    graph = build_service_graph(
        session,
        settings=settings,
        clock=lambda: FIXED_NOW,
        support=support,
    )
    try:
        yield graph.as_dict()
    finally:
        graph.close()


@pytest.fixture
def make_project(services):
    """
    Seed a project with one epic and one story, then return a helper that adds
    tasks under that story.
    """
    session = services["session"]
    roadmap_repo = services["roadmap_repo"]
    task_repo = services["task_repo"]

    project = Project.create("CPM Test", "Testing CPM")
    epic = Epic.create(project.id, "Epic")
    story = UserStory.create(epic.id, "Story")
    roadmap_repo.add_project(project)
    session.flush()
    roadmap_repo.add_epic(epic)
    session.flush()
    roadmap_repo.add_story(story)
    session.commit()

    def _add_task(title: str, **extra) -> Task:
        extra.setdefault("user_story_id", story.id)
        task = Task.create(title, **extra)
        task_repo.add(task)
        session.commit()
        return task

    _add_task.project_id = project.id
    _add_task.story_id = story.id
    return _add_task
