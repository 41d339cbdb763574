# infra/settings.py
from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DIST_NAME = "scrum-cpm"
APP_DIR_PARTS = ("ScrumTools", "ScrumCriticalPath")
DB_FILENAME = "scrum_cpm.db"
_DEFAULT_APP_VERSION = "0.0.0"


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def _env_str(name: str, default: str) -> str:
    raw = (os.getenv(name) or "").strip()
    return raw or default


def user_data_dir() -> Path:
    """
    Per-user data directory (~/.local/share/ScrumTools/ScrumCriticalPath on
    Linux, the APPDATA and Application Support equivalents elsewhere).
    """
    if sys.platform.startswith("win"):
        base = Path(os.getenv("APPDATA") or Path.home() / "AppData" / "Roaming")
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_DATA_HOME") or Path.home() / ".local" / "share")
    path = base.joinpath(*APP_DIR_PARTS)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        path = Path.home() / f".{APP_DIR_PARTS[-1]}"
        path.mkdir(parents=True, exist_ok=True)
    return path


def get_app_version() -> str:
    env_override = (os.getenv("PM_APP_VERSION") or "").strip()
    if env_override:
        return env_override
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return _DEFAULT_APP_VERSION


@dataclass(frozen=True)
class SchedulerSettings:
    slack_tolerance_ms: int = 1000
    max_graph_nodes: int = 50_000
    apply_lag_days: bool = False
    database_url: str = ""
    log_level: str = "INFO"
    log_dir: str = ""

    def resolved_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite:///{(user_data_dir() / DB_FILENAME).as_posix()}"

    def resolved_log_dir(self) -> Path:
        if self.log_dir:
            return Path(self.log_dir)
        return user_data_dir() / "logs"


def load_settings() -> SchedulerSettings:
    """
    Read scheduler settings from PM_* environment variables.
    Paths are resolved lazily so loading never touches the filesystem.
    """
    tolerance = _env_float("PM_SLACK_TOLERANCE_MS", 1000.0)
    return SchedulerSettings(
        slack_tolerance_ms=max(0, int(tolerance)),
        max_graph_nodes=max(1, _env_int("PM_MAX_GRAPH_NODES", 50_000)),
        apply_lag_days=_env_flag("PM_APPLY_LAG_DAYS", False),
        database_url=_env_str("PM_DATABASE_URL", ""),
        log_level=_env_str("PM_LOG_LEVEL", "INFO").upper(),
        log_dir=_env_str("PM_LOG_DIR", ""),
    )


__all__ = ["SchedulerSettings", "get_app_version", "load_settings", "user_data_dir"]
