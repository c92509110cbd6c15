"""Calculation events: schema, context sanitizing and emit helpers.

Every ``FormulaEngine.calculate`` outcome and every CLI config load is
recorded as a :class:`FormulaEvent`.  Timestamps are UTC ISO-8601 with a
``Z`` suffix.  ``emit()`` never raises into the caller; a failing write is
reported on stderr at most once a minute.
"""

from __future__ import annotations

import math
import sys
import time
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class EventLevel(str, Enum):
    info = "info"
    warning = "warning"
    error = "error"


class EventType(str, Enum):
    formula_evaluated = "formula_evaluated"
    formula_failed = "formula_failed"
    variables_missing = "variables_missing"
    config_loaded = "config_loaded"


# Context keys an event of each type must carry to be attributable.
REQUIRED_CONTEXT: dict[EventType, frozenset[str]] = {
    EventType.formula_evaluated: frozenset({"formula"}),
    EventType.formula_failed: frozenset({"formula"}),
    EventType.variables_missing: frozenset({"formula", "missing"}),
    EventType.config_loaded: frozenset(),
}

_MAX_TEXT = 256
_TRUNCATED = "...[truncated]"


def sanitize_context(context: dict[str, Any]) -> dict[str, Any]:
    """Copy *context* into a form that serializes to strict JSON.

    Strings over 256 characters are cut short, NaN and infinite floats are
    stored as their ``str()`` (``"nan"``, ``"-inf"``), and nested dicts and
    lists are handled recursively.
    """
    return {key: _clean(value) for key, value in context.items()}


def _clean(value: Any) -> Any:
    if isinstance(value, dict):
        return sanitize_context(value)
    if isinstance(value, (list, tuple)):
        return [_clean(item) for item in value]
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, str) and len(value) > _MAX_TEXT:
        return value[:_MAX_TEXT] + _TRUNCATED
    return value


def _utc_now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


class FormulaEvent(BaseModel):
    """One structured log record about a formula or its configuration."""

    schema_version: int = 1
    ts: str = Field(default_factory=_utc_now)
    level: EventLevel
    event_type: EventType
    message: str = ""
    error_code: str | None = None
    context: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def for_formula(
        cls,
        event_type: EventType,
        level: EventLevel,
        message: str,
        *,
        formula: str,
        error_code: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> FormulaEvent:
        """Build an event whose context names the formula it is about."""
        return cls(
            level=level,
            event_type=event_type,
            message=message,
            error_code=error_code,
            context={"formula": formula, **(extra or {})},
        )

    @property
    def formula(self) -> str | None:
        return self.context.get("formula")

    def missing_attribution(self) -> list[str]:
        """Required context keys this event lacks, sorted."""
        required = REQUIRED_CONTEXT.get(self.event_type, frozenset())
        return sorted(required - set(self.context))

    def prepared(self) -> FormulaEvent:
        """Return the copy that gets written to the log.

        The context is sanitized.  An event missing required context keys
        is downgraded to ``warning`` and lists them under
        ``_missing_attribution``.
        """
        context = sanitize_context(self.context)
        missing = self.missing_attribution()
        if not missing:
            return self.model_copy(update={"context": context})
        context["_missing_attribution"] = missing
        return self.model_copy(update={"level": EventLevel.warning, "context": context})


# Module-level sink; ``None`` discards events.
_sink: Any = None  # EventSink | None


def set_project_dir(project_dir: Path | str) -> None:
    """Send later events to ``<project_dir>/logs/events.ndjson``.

    ``logging_enabled: false`` in the project's ``formulacalc.yaml`` keeps
    events discarded; ``logging_fsync`` and ``logging_tail_bytes`` tune
    the sink.
    """
    global _sink
    from formulacalc.formulas.errors import FormulaConfigError
    from formulacalc.logging.sink import EventSink
    from formulacalc.project import load_project_config

    root = Path(project_dir)
    try:
        cfg = load_project_config(root)
    except (FormulaConfigError, OSError):
        _warn("could not read logging options; using defaults")
        cfg = {}

    if not cfg.get("logging_enabled", True):
        _sink = None
        return
    tail = cfg.get("logging_tail_bytes")
    try:
        tail_bytes = int(tail) if tail is not None else None
    except (TypeError, ValueError):
        _warn(f"ignoring logging_tail_bytes={tail!r}")
        tail_bytes = None
    _sink = EventSink(root, fsync=bool(cfg.get("logging_fsync", False)), tail_bytes=tail_bytes)


def reset_sink() -> None:
    """Detach the sink so later events are discarded."""
    global _sink
    _sink = None


_WARN_INTERVAL_SECS = 60.0
_last_warning_at: float | None = None


def _warn(message: str) -> None:
    """Write *message* to stderr unless a warning went out in the last minute."""
    global _last_warning_at
    now = time.monotonic()
    if _last_warning_at is not None and now - _last_warning_at < _WARN_INTERVAL_SECS:
        return
    _last_warning_at = now
    try:
        sys.stderr.write(f"[formulacalc] {message}\n")
    except (OSError, ValueError):
        pass


def emit(event: FormulaEvent) -> None:
    """Append *event* to the project log, if one is configured.

    Never raises; a failed write only produces a rate-limited warning.
    """
    sink = _sink
    if sink is None:
        return
    try:
        sink.write(event.prepared())
    except Exception as exc:
        _warn(f"logging failed: {type(exc).__name__}: {exc}")


def emit_info(
    event_type: EventType,
    message: str,
    context: dict[str, Any] | None = None,
) -> None:
    """Emit an info-level event that is not about a single formula."""
    emit(
        FormulaEvent(
            level=EventLevel.info,
            event_type=event_type,
            message=message,
            context=context or {},
        )
    )
