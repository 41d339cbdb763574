from __future__ import annotations

import json
import logging
import os
import re
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, Iterator, Mapping

from infra.settings import get_app_version

REDACTED = "<redacted>"
REDACTED_EMAIL = "<redacted-email>"

_TRACE_ID_CTX: ContextVar[str | None] = ContextVar("cpm_trace_id", default=None)

_SENSITIVE_KEY = re.compile(r"password|passwd|token|secret|api_?key|authorization|cookie")
_EMAIL = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
_SECRET_PAIR = re.compile(
    r"(?i)\b(password|passwd|token|secret|api[_-]?key|authorization)\b\s*[:=]\s*([^\s,;]+)"
)
_MAX_DEPTH = 8


def create_trace_id() -> str:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"cpm-{stamp}-{uuid.uuid4().hex[:8]}"


def current_trace_id() -> str | None:
    value = (_TRACE_ID_CTX.get() or "").strip()
    return value or None


@contextmanager
def bind_trace_id(trace_id: str | None = None) -> Iterator[str]:
    """Scope a trace id (generated when not given) to one scheduling request."""
    bound = (trace_id or "").strip() or create_trace_id()
    token = _TRACE_ID_CTX.set(bound)
    try:
        yield bound
    finally:
        _TRACE_ID_CTX.reset(token)


class TraceIdLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = current_trace_id() or "-"
        return True


def redact_text(value: str) -> str:
    text = _EMAIL.sub(REDACTED_EMAIL, str(value or ""))
    return _SECRET_PAIR.sub(lambda m: f"{m.group(1)}={REDACTED}", text)


def redact_value(value: Any, _depth: int = 0) -> Any:
    """JSON-safe copy of `value` with secrets and e-mail addresses masked."""
    if _depth >= _MAX_DEPTH:
        return "<max-depth>"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {
            str(key): REDACTED
            if _SENSITIVE_KEY.search(str(key).lower().replace("-", "_"))
            else redact_value(item, _depth + 1)
            for key, item in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact_value(item, _depth + 1) for item in value]
    return redact_text(str(value))


@dataclass(frozen=True)
class SupportEvent:
    event_type: str
    level: str
    trace_id: str
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    timestamp_utc: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    app_version: str = field(default_factory=get_app_version)
    pid: int = field(default_factory=os.getpid)

    def to_json(self) -> str:
        payload = asdict(self)
        if not payload["data"]:
            del payload["data"]
        return json.dumps(payload, ensure_ascii=True, sort_keys=True)


class OperationalSupport:
    """Appends JSON-lines support events next to the application log."""

    def __init__(self, events_path: str | Path) -> None:
        self._events_path = Path(events_path)
        self._events_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()

    @property
    def events_path(self) -> Path:
        return self._events_path

    def emit_event(
        self,
        *,
        event_type: str,
        message: str,
        level: str = "INFO",
        trace_id: str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> str:
        event = SupportEvent(
            event_type=(event_type or "").strip() or "support.event",
            level=(level or "INFO").strip().upper(),
            trace_id=(trace_id or current_trace_id() or create_trace_id()).strip(),
            message=redact_text(message or ""),
            data=redact_value(dict(data or {})),
        )
        with self._lock, self._events_path.open("a", encoding="utf-8") as handle:
            handle.write(event.to_json() + "\n")
        return event.trace_id

    def record_schedule_failure(self, payload: tuple) -> str:
        """`domain_events.schedule_failed` listener; payload is (project_id, exc)."""
        project_id, exc = payload
        return self.emit_event(
            event_type="schedule.failed",
            level="ERROR",
            message=f"Critical path failed for project {project_id}: {exc}",
            data={
                "project_id": project_id,
                "code": getattr(exc, "code", type(exc).__name__),
                "cycle": list(getattr(exc, "cycle", None) or []),
            },
        )

    def read_events(self, *, trace_id: str | None = None) -> list[dict[str, Any]]:
        wanted = (trace_id or "").strip()
        return [
            event
            for event in self._iter_events()
            if not wanted or str(event.get("trace_id") or "").strip() == wanted
        ]

    def _iter_events(self) -> Iterator[dict[str, Any]]:
        if not self._events_path.exists():
            return
        for line in self._events_path.read_text(encoding="utf-8", errors="ignore").splitlines():
            if not line.strip():
                continue
            try:
                event = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(event, dict):
                yield event


__all__ = [
    "OperationalSupport",
    "REDACTED",
    "REDACTED_EMAIL",
    "SupportEvent",
    "TraceIdLogFilter",
    "bind_trace_id",
    "create_trace_id",
    "current_trace_id",
    "redact_text",
    "redact_value",
]
