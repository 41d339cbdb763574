from datetime import datetime, timezone

from core.models import (
    Epic,
    EpicStatus,
    Project,
    Sprint,
    SprintStatus,
    StoryStatus,
    Task,
    TaskStatus,
    UserStory,
)
from core.services.roadmap import build_roadmap, project_epic_bounds


def _dt(day: int) -> datetime:
    return datetime(2024, 5, day, 9, 0, tzinfo=timezone.utc)


def test_epic_bounds_cover_tasks_and_sprints():
    epic = Epic(id="e1", project_id="p1", title="Checkout")
    sprint = Sprint(id="s1", project_id="p1", name="Sprint 1", start_date=_dt(1), end_date=_dt(14))
    stories = [
        UserStory(id="u1", epic_id="e1", title="Cart", sprint_id="s1"),
        UserStory(id="u2", epic_id="e1", title="Pay", status=StoryStatus.COMPLETED),
    ]
    tasks = [
        Task(id="t1", title="API", user_story_id="u2", start_date=_dt(3), due_date=_dt(20)),
        Task(id="t2", title="Docs", user_story_id="u2", start_date=_dt(22)),
    ]

    timeline = project_epic_bounds(epic, stories, tasks, {"s1": sprint})

    assert timeline.estimated_start == _dt(1)
    assert timeline.estimated_end == _dt(22)
    assert timeline.story_count == 2
    assert timeline.completed_stories == 1


def test_epic_bounds_skip_cancelled_work_and_undated_tasks():
    epic = Epic(id="e1", project_id="p1", title="Search")
    stories = [
        UserStory(id="u1", epic_id="e1", title="Index"),
        UserStory(id="u2", epic_id="e1", title="Dropped", status=StoryStatus.CANCELLED),
    ]
    tasks = [
        Task(id="t1", title="Crawler", user_story_id="u1", start_date=_dt(5), due_date=_dt(6)),
        Task(id="t2", title="Scrapped", user_story_id="u1", start_date=_dt(1), status=TaskStatus.CANCELLED),
        Task(id="t3", title="Orphaned", user_story_id="u2", due_date=_dt(30)),
        Task(id="t4", title="Unplanned", user_story_id="u1"),
    ]

    timeline = project_epic_bounds(epic, stories, tasks, {})

    assert timeline.estimated_start == _dt(5)
    assert timeline.estimated_end == _dt(6)
    assert timeline.story_count == 1


def test_epic_without_dates_has_no_bounds():
    epic = Epic(id="e1", project_id="p1", title="Someday")

    timeline = project_epic_bounds(epic, [], [], {})

    assert timeline.estimated_start is None
    assert timeline.estimated_end is None
    assert timeline.to_dict()["estimatedStart"] is None


def test_naive_and_aware_dates_are_compared_as_utc():
    epic = Epic(id="e1", project_id="p1", title="Mixed")
    stories = [UserStory(id="u1", epic_id="e1", title="Story")]
    tasks = [
        Task(id="t1", title="Naive", user_story_id="u1", start_date=datetime(2024, 5, 2, 9, 0)),
        Task(id="t2", title="Aware", user_story_id="u1", start_date=_dt(4)),
    ]

    timeline = project_epic_bounds(epic, stories, tasks, {})

    assert timeline.estimated_start == _dt(2)
    assert timeline.estimated_end == _dt(4)


def test_build_roadmap_orders_by_priority_and_drops_cancelled_epics():
    epics = [
        Epic(id="low", project_id="p1", title="Low", priority=1),
        Epic(id="gone", project_id="p1", title="Gone", priority=9, status=EpicStatus.CANCELLED),
        Epic(id="high", project_id="p1", title="High", priority=5),
    ]

    roadmap = build_roadmap(epics, [], [], [])

    assert [t.id for t in roadmap] == ["high", "low"]


def _seed_roadmap(services):
    session = services["session"]
    roadmap_repo = services["roadmap_repo"]
    task_repo = services["task_repo"]

    project = Project.create("Shop")
    sprint = Sprint.create(project.id, "Sprint 1", start_date=_dt(1), end_date=_dt(14), status=SprintStatus.ACTIVE)
    old_sprint = Sprint.create(project.id, "Abandoned", status=SprintStatus.CANCELLED)
    epic = Epic.create(project.id, "Checkout", "Pay for things", priority=3)
    story = UserStory.create(epic.id, "Cart", sprint_id=sprint.id, status=StoryStatus.IN_PROGRESS)
    roadmap_repo.add_project(project)
    session.flush()
    roadmap_repo.add_sprint(sprint)
    roadmap_repo.add_sprint(old_sprint)
    roadmap_repo.add_epic(epic)
    session.flush()
    roadmap_repo.add_story(story)
    session.flush()

    api = Task.create("API", user_story_id=story.id, sprint_id=sprint.id, start_date=_dt(2), due_date=_dt(18))
    ui = Task.create("UI", user_story_id=story.id, start_date=_dt(3))
    dropped = Task.create("Dropped", user_story_id=story.id, status=TaskStatus.CANCELLED)
    for task in (api, ui, dropped):
        task_repo.add(task)
    session.commit()
    return project, sprint, api, ui


def test_roadmap_service_projects_epics_from_database(services):
    project, sprint, api, ui = _seed_roadmap(services)

    roadmap = services["roadmap_service"].get_roadmap(project.id)

    assert len(roadmap) == 1
    payload = roadmap[0].to_dict()
    assert payload["title"] == "Checkout"
    assert payload["status"] == "DRAFT"
    assert payload["estimatedStart"] == _dt(1).isoformat()
    assert payload["estimatedEnd"] == _dt(18).isoformat()
    assert payload["storyCount"] == 1
    assert payload["completedStories"] == 0


def test_gantt_rows_include_dependencies_and_active_sprints(services):
    project, sprint, api, ui = _seed_roadmap(services)
    services["dependency_service"].add_dependency(ui.id, api.id, "FINISH_TO_START", lag_days=1)

    rows = services["roadmap_service"].get_gantt_rows(project.id)

    assert {row["title"] for row in rows["tasks"]} == {"API", "UI"}
    ui_row = next(row for row in rows["tasks"] if row["id"] == ui.id)
    assert ui_row["dependencies"] == [
        {
            "id": ui_row["dependencies"][0]["id"],
            "dependsOnId": api.id,
            "type": "FINISH_TO_START",
            "lagDays": 1,
        }
    ]
    assert [s["name"] for s in rows["sprints"]] == ["Sprint 1"]

    sprint_rows = services["roadmap_service"].get_gantt_rows(project.id, sprint_id=sprint.id)
    assert [row["id"] for row in sprint_rows["tasks"]] == [api.id]


def test_gantt_rows_keep_edges_to_tasks_outside_the_project(services):
    project, sprint, api, ui = _seed_roadmap(services)
    task_repo = services["task_repo"]
    vendor = Task.create("Vendor SDK", start_date=_dt(1))
    task_repo.add(vendor)
    services["session"].commit()
    deps = services["dependency_service"]
    deps.add_dependency(ui.id, vendor.id)
    deps.add_dependency(ui.id, api.id)

    rows = services["roadmap_service"].get_gantt_rows(project.id)

    ui_row = next(row for row in rows["tasks"] if row["id"] == ui.id)
    assert sorted(d["dependsOnId"] for d in ui_row["dependencies"]) == sorted([api.id, vendor.id])
    assert vendor.id not in {row["id"] for row in rows["tasks"]}


def test_gantt_rows_are_ordered_by_start_then_title(services):
    project, sprint, api, ui = _seed_roadmap(services)
    task_repo = services["task_repo"]
    for task in (
        Task.create("Undated", user_story_id=api.user_story_id),
        Task.create("Backend", user_story_id=api.user_story_id, start_date=_dt(2)),
    ):
        task_repo.add(task)
    services["session"].commit()

    rows = services["roadmap_service"].get_gantt_rows(project.id)

    assert [row["title"] for row in rows["tasks"]] == ["API", "Backend", "UI", "Undated"]
    assert rows == services["roadmap_service"].get_gantt_rows(project.id)
