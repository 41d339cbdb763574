import logging
from datetime import datetime, timezone

import pytest

from core.exceptions import BusinessRuleError
from core.models import DependencyType, TaskStatus
from core.services.scheduling.date_compute import MILLIS_PER_HOUR, to_millis
from infra.operational_support import TraceIdLogFilter, current_trace_id
from infra.services import ServiceGraph

DAY0 = datetime(2024, 3, 4, 9, 0, tzinfo=timezone.utc)


def test_cpm_forward_backward_basic(services, make_project):
    deps = services["dependency_service"]
    engine = services["critical_path_engine"]

    t1 = make_project("T1", estimated_hours=8, start_date=DAY0)
    t2 = make_project("T2", estimated_hours=16)
    t3 = make_project("T3", estimated_hours=8)
    t4 = make_project("T4", estimated_hours=8)

    deps.add_dependency(t2.id, t1.id)
    deps.add_dependency(t3.id, t1.id)
    deps.add_dependency(t4.id, t2.id)
    deps.add_dependency(t4.id, t3.id)

    result = engine.calculate_for_project(make_project.project_id)

    day0 = to_millis(DAY0)
    info1 = result.schedule[t1.id]
    info2 = result.schedule[t2.id]
    info3 = result.schedule[t3.id]
    info4 = result.schedule[t4.id]

    assert info1.early_start == day0
    assert info1.early_finish == day0 + 8 * MILLIS_PER_HOUR
    assert info2.early_finish == day0 + 24 * MILLIS_PER_HOUR
    assert info3.early_finish == day0 + 16 * MILLIS_PER_HOUR
    assert info4.early_start == day0 + 24 * MILLIS_PER_HOUR

    assert result.critical_ids == [t1.id, t2.id, t4.id]
    assert info3.slack == 8 * MILLIS_PER_HOUR
    assert not info3.is_critical
    assert result.total_duration == 32 * MILLIS_PER_HOUR


def test_cpm_payload_wire_shape(services, make_project):
    deps = services["dependency_service"]

    t1 = make_project("Design", estimated_hours=8, start_date=DAY0)
    t2 = make_project("Build", estimated_hours=4)
    deps.add_dependency(t2.id, t1.id)

    payload = services["critical_path_engine"].calculate_for_project(make_project.project_id).to_dict()

    assert payload["totalDuration"] == 12 * MILLIS_PER_HOUR
    assert payload["criticalPath"] == [
        {
            "id": t1.id,
            "title": "Design",
            "earlyStart": "2024-03-04T09:00:00.000Z",
            "earlyFinish": "2024-03-04T17:00:00.000Z",
            "slack": 0,
        },
        {
            "id": t2.id,
            "title": "Build",
            "earlyStart": "2024-03-04T17:00:00.000Z",
            "earlyFinish": "2024-03-04T21:00:00.000Z",
            "slack": 0,
        },
    ]


def test_cpm_cycle_detection(services, make_project):
    deps = services["dependency_service"]
    engine = services["critical_path_engine"]

    a = make_project("A", estimated_hours=1, start_date=DAY0)
    b = make_project("B", estimated_hours=1)

    # B depends on A
    deps.add_dependency(b.id, a.id, DependencyType.FINISH_TO_START, lag_days=0)

    # A depends on B closes the loop and must be rejected before insertion
    with pytest.raises(BusinessRuleError) as excinfo:
        deps.add_dependency(a.id, b.id, DependencyType.FINISH_TO_START, lag_days=0)
    assert excinfo.value.code == "DEPENDENCY_CYCLE"
    assert "A -> B -> A" in str(excinfo.value)

    stored = services["dependency_repo"].list_by_project(make_project.project_id)
    assert [(d.task_id, d.depends_on_id) for d in stored] == [(b.id, a.id)]

    # CPM still runs since the cycle was blocked
    result = engine.calculate_for_project(make_project.project_id)
    assert a.id in result.schedule and b.id in result.schedule


def test_cpm_empty_project_returns_empty_result(services, make_project):
    result = services["critical_path_engine"].calculate_for_project(make_project.project_id)

    assert result.critical_path == []
    assert result.total_duration == 0
    assert result.to_dict() == {"criticalPath": [], "totalDuration": 0}


def test_cpm_undated_root_uses_injected_clock(services, make_project):
    task = make_project("Floating", estimated_hours=2)

    result = services["critical_path_engine"].calculate_for_project(make_project.project_id)

    entry = result.schedule[task.id]
    assert entry.early_start == to_millis(datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc))
    assert result.total_duration == 2 * MILLIS_PER_HOUR


def test_cpm_ignores_cancelled_tasks_and_their_edges(services, make_project):
    deps = services["dependency_service"]
    t1 = make_project("Kept", estimated_hours=8, start_date=DAY0)
    t2 = make_project("Dropped", estimated_hours=40)
    deps.add_dependency(t2.id, t1.id)

    t2.status = TaskStatus.CANCELLED
    services["task_repo"].update(t2)
    services["session"].commit()

    result = services["critical_path_engine"].calculate_for_project(make_project.project_id)

    assert list(result.schedule) == [t1.id]
    assert result.total_duration == 8 * MILLIS_PER_HOUR


def test_cpm_payload_binds_trace_id(services, make_project, caplog):
    make_project("Solo", estimated_hours=1, start_date=DAY0)
    graph = ServiceGraph(**services)
    trace_filter = TraceIdLogFilter()
    caplog.handler.addFilter(trace_filter)

    try:
        with caplog.at_level(logging.INFO, logger="core.services.scheduling.engine"):
            payload = graph.critical_path_payload(make_project.project_id, trace_id="cpm-test-1")
    finally:
        caplog.handler.removeFilter(trace_filter)

    assert payload["totalDuration"] == MILLIS_PER_HOUR
    records = [r for r in caplog.records if r.name == "core.services.scheduling.engine"]
    assert records
    assert {r.trace_id for r in records} == {"cpm-test-1"}
    assert current_trace_id() is None
