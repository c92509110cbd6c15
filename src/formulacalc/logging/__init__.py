"""Structured calculation events for formulacalc.

Events are pydantic models appended to a per-project NDJSON file; emitting
never raises into the calculation that produced the event.
"""

from formulacalc.logging.events import (
    EventLevel,
    EventType,
    FormulaEvent,
    emit,
    emit_info,
    reset_sink,
    sanitize_context,
    set_project_dir,
)
from formulacalc.logging.sink import EventSink

__all__ = [
    "EventLevel",
    "EventSink",
    "EventType",
    "FormulaEvent",
    "emit",
    "emit_info",
    "reset_sink",
    "sanitize_context",
    "set_project_dir",
]
