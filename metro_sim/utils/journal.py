"""Append-only journal: one human-readable line per simulation event.

Line format: ``<ISO-8601 timestamp>\\t<message>\\n``. Newlines inside a
message are collapsed to ``"; "`` so every event stays on one line.
"""

from __future__ import annotations

import logging
import re
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Iterable

if TYPE_CHECKING:
    from metro_sim.utils.event_log import SimEvent

logger = logging.getLogger(__name__)

_NEWLINES = re.compile(r"\r\n|\r|\n")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_line(message: str, when: datetime) -> str:
    return f"{when.isoformat()}\t{_NEWLINES.sub('; ', message)}\n"


class JournalWriter:
    """Appends event lines to ``<directory>/<filename>``, creating the directory."""

    __slots__ = ("_path", "_clock", "_lock", "_lines")

    def __init__(
        self,
        directory: str | Path,
        filename: str = "metro.log",
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._path = Path(directory) / filename
        self._clock = clock
        self._lock = threading.Lock()
        self._lines = 0
        self._path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Journal writing to %s", self._path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def lines_written(self) -> int:
        return self._lines

    def write(self, message: str) -> None:
        self.write_many([message])

    def write_events(self, events: Iterable[SimEvent]) -> None:
        self.write_many(e.message for e in events)

    def write_many(self, messages: Iterable[str]) -> None:
        now = self._clock()
        lines = [format_line(m, now) for m in messages]
        if not lines:
            return
        with self._lock:
            with self._path.open("a", encoding="utf-8") as fh:
                fh.writelines(lines)
            self._lines += len(lines)
