from __future__ import annotations

from pathlib import Path

from infra.services import scheduling_options_from
from infra.settings import SchedulerSettings, get_app_version, load_settings, user_data_dir

_SETTINGS_ENV = (
    "PM_SLACK_TOLERANCE_MS",
    "PM_MAX_GRAPH_NODES",
    "PM_APPLY_LAG_DAYS",
    "PM_DATABASE_URL",
    "PM_LOG_LEVEL",
    "PM_LOG_DIR",
)


def _clear_env(monkeypatch):
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)


def test_load_settings_defaults(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    settings = load_settings()

    assert settings == SchedulerSettings()
    assert settings.slack_tolerance_ms == 1000
    assert settings.max_graph_nodes == 50_000
    assert settings.apply_lag_days is False
    assert settings.resolved_database_url().startswith("sqlite:///")
    assert settings.resolved_database_url().endswith("scrum_cpm.db")


def test_load_settings_reads_environment(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    monkeypatch.setenv("PM_SLACK_TOLERANCE_MS", "250.7")
    monkeypatch.setenv("PM_MAX_GRAPH_NODES", "10")
    monkeypatch.setenv("PM_APPLY_LAG_DAYS", "yes")
    monkeypatch.setenv("PM_DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("PM_LOG_LEVEL", "debug")
    monkeypatch.setenv("PM_LOG_DIR", str(tmp_path))

    settings = load_settings()

    assert settings.slack_tolerance_ms == 250
    assert settings.max_graph_nodes == 10
    assert settings.apply_lag_days is True
    assert settings.resolved_database_url() == "sqlite:///:memory:"
    assert settings.log_level == "DEBUG"
    assert settings.resolved_log_dir() == Path(tmp_path)


def test_load_settings_clamps_out_of_range_values(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("PM_SLACK_TOLERANCE_MS", "-5")
    monkeypatch.setenv("PM_MAX_GRAPH_NODES", "0")
    monkeypatch.setenv("PM_APPLY_LAG_DAYS", "off")

    settings = load_settings()

    assert settings.slack_tolerance_ms == 0
    assert settings.max_graph_nodes == 1
    assert settings.apply_lag_days is False


def test_scheduling_options_follow_settings():
    options = scheduling_options_from(
        SchedulerSettings(slack_tolerance_ms=5, max_graph_nodes=7, apply_lag_days=True)
    )

    assert options.slack_tolerance_ms == 5
    assert options.max_graph_nodes == 7
    assert options.apply_lag_days is True


def test_get_app_version_prefers_env_override(monkeypatch):
    monkeypatch.setenv("PM_APP_VERSION", "9.9.9")
    assert get_app_version() == "9.9.9"


def test_get_app_version_falls_back_to_metadata(monkeypatch):
    monkeypatch.delenv("PM_APP_VERSION", raising=False)
    assert get_app_version()


def test_user_data_dir_honours_xdg_data_home(monkeypatch, tmp_path):
    monkeypatch.setattr("sys.platform", "linux")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    path = user_data_dir()

    assert path == tmp_path / "ScrumTools" / "ScrumCriticalPath"
    assert path.is_dir()
