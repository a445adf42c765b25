"""Tests for the append-only journal writer and the event ring buffer."""

import sys
import os
from datetime import datetime, timezone

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from metro_sim.utils.event_log import EventLog, SimEvent
from metro_sim.utils.journal import JournalWriter, format_line

FIXED = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def _clock() -> datetime:
    return FIXED


class TestFormatLine:
    def test_timestamp_tab_message(self):
        assert format_line("Men fell on first rail", FIXED) == (
            "2024-01-02T03:04:05+00:00\tMen fell on first rail\n"
        )

    def test_newlines_collapsed(self):
        line = format_line("one\ntwo\r\nthree\rfour", FIXED)
        assert line.endswith("\tone; two; three; four\n")
        assert line.count("\n") == 1


class TestJournalWriter:
    def test_creates_directory_and_appends(self, tmp_path):
        target = tmp_path / "logs" / "nested"
        journal = JournalWriter(target, clock=_clock)
        journal.write("first")
        journal.write_events([
            SimEvent(tick=1, category="breakdown", message="Carriage with number 2 was broken"),
            SimEvent(tick=1, category="mining", message="Mining mode enabled"),
        ])
        lines = (target / "metro.log").read_text(encoding="utf-8").splitlines()
        assert lines == [
            "2024-01-02T03:04:05+00:00\tfirst",
            "2024-01-02T03:04:05+00:00\tCarriage with number 2 was broken",
            "2024-01-02T03:04:05+00:00\tMining mode enabled",
        ]
        assert journal.lines_written == 3

    def test_existing_file_is_appended_not_truncated(self, tmp_path):
        (tmp_path / "metro.log").write_text("old line\n", encoding="utf-8")
        JournalWriter(tmp_path, clock=_clock).write("new line")
        content = (tmp_path / "metro.log").read_text(encoding="utf-8")
        assert content.startswith("old line\n")
        assert content.endswith("\tnew line\n")

    def test_empty_batch_writes_nothing(self, tmp_path):
        journal = JournalWriter(tmp_path, filename="x.log", clock=_clock)
        journal.write_events([])
        assert not journal.path.exists()

    def test_default_clock_is_utc_iso(self, tmp_path):
        journal = JournalWriter(tmp_path)
        journal.write("hello")
        stamp, message = journal.path.read_text(encoding="utf-8").rstrip("\n").split("\t")
        assert message == "hello"
        assert datetime.fromisoformat(stamp).tzinfo is not None


class TestEventLog:
    def test_since_tick(self):
        log = EventLog(maxlen=100)
        log.append_many([
            SimEvent(tick=1, category="mining", message="a"),
            SimEvent(tick=2, category="mining", message="b"),
            SimEvent(tick=3, category="mining", message="c"),
        ])
        assert [e.message for e in log.since_tick(2)] == ["b", "c"]

    def test_bounded(self):
        log = EventLog(maxlen=3)
        for i in range(5):
            log.append(SimEvent(tick=i, category="mining", message=str(i)))
        assert len(log) == 3
        assert [e.message for e in log.latest(10)] == ["2", "3", "4"]

    def test_latest_and_clear(self):
        log = EventLog()
        log.append(SimEvent(tick=1, category="repair", message="x", metadata={"ids": [1]}))
        assert log.latest(1)[0].metadata == {"ids": [1]}
        log.clear()
        assert log.since_tick(0) == []
