"""Append-only NDJSON store for :class:`FormulaEvent` records.

One JSON object per line in ``<project_dir>/logs/events.ndjson``, keys
sorted.  Appends hold an exclusive ``flock`` and reads a shared one, each
for a single system call; where ``fcntl`` is unavailable no locking is done.
Reads only look at the last ``tail_bytes`` of the file.
"""

from __future__ import annotations

import json
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from formulacalc.logging.events import FormulaEvent

try:
    import fcntl
except ImportError:  # Windows
    fcntl = None  # type: ignore[assignment]

DEFAULT_TAIL_BYTES = 2 * 1024 * 1024
MAX_READ_LIMIT = 2000


@contextmanager
def _flock(fd: int, *, exclusive: bool) -> Iterator[None]:
    if fcntl is None:
        yield
        return
    fcntl.flock(fd, fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH)
    try:
        yield
    finally:
        fcntl.flock(fd, fcntl.LOCK_UN)


class EventSink:
    """Event log of one project directory."""

    def __init__(
        self,
        project_dir: Path | str,
        *,
        fsync: bool = False,
        tail_bytes: int | None = None,
    ) -> None:
        self.path = Path(project_dir) / "logs" / "events.ndjson"
        self.fsync = fsync
        self.tail_bytes = tail_bytes if tail_bytes is not None else DEFAULT_TAIL_BYTES
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def write(self, event: FormulaEvent) -> None:
        """Append *event* as one line."""
        record = json.dumps(event.model_dump(mode="json"), sort_keys=True, default=str)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_APPEND)
        try:
            with _flock(fd, exclusive=True):
                os.write(fd, (record + "\n").encode("utf-8"))
                if self.fsync:
                    os.fsync(fd)
        finally:
            os.close(fd)

    def read_events(
        self,
        *,
        level: str | None = None,
        event_type: str | None = None,
        error_code: str | None = None,
        formula: str | None = None,
        limit: int = 200,
    ) -> list[dict[str, Any]]:
        """Return logged events, newest first.

        Args:
            level: Keep only this level (``info``/``warning``/``error``).
            event_type: Keep only this event type.
            error_code: Keep only events with this error code.
            formula: Keep only events about exactly this formula text.
            limit: Maximum number of events returned (capped at 2000).
        """
        wanted = {"level": level, "event_type": event_type, "error_code": error_code}
        wanted = {key: value for key, value in wanted.items() if value is not None}

        matches: list[dict[str, Any]] = []
        for record in reversed(list(self.iter_records())):
            if any(record.get(key) != value for key, value in wanted.items()):
                continue
            if formula is not None and record.get("context", {}).get("formula") != formula:
                continue
            matches.append(record)
            if len(matches) >= min(limit, MAX_READ_LIMIT):
                break
        return matches

    def iter_records(self) -> Iterator[dict[str, Any]]:
        """Yield parsed records oldest first, skipping lines that are not JSON."""
        for line in self._tail().splitlines():
            if not line.strip():
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(record, dict):
                yield record

    def _tail(self) -> str:
        if not self.path.exists():
            return ""
        with open(self.path, "rb") as f:
            with _flock(f.fileno(), exclusive=False):
                size = os.fstat(f.fileno()).st_size
                start = max(0, size - self.tail_bytes)
                f.seek(start)
                data = f.read()
        if start > 0:
            # first line is probably cut
            data = data.partition(b"\n")[2]
        return data.decode("utf-8", errors="replace")
