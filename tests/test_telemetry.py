from __future__ import annotations

import io
import json
import threading

from memorable_ids.telemetry import (
    ConsoleTelemetrySink,
    FanoutTelemetrySink,
    JsonLinesTelemetrySink,
    NullTelemetrySink,
    StructuredTelemetrySink,
)


def make_console() -> tuple[ConsoleTelemetrySink, io.StringIO]:
    buffer = io.StringIO()
    sink = ConsoleTelemetrySink(file=buffer)
    # Stabilize tests by hiding timestamps
    sink._show_ts = False
    return sink, buffer


def test_structured_sink_numbers_events_in_order() -> None:
    sink = StructuredTelemetrySink()
    sink.emit("id.rejected", {"reason": "length", "candidate": "X", "attempt": 1})
    sink.emit("id.rejected", {"reason": "duplicate", "candidate": "Y", "attempt": 2})
    sink.emit("id.generated", {"value": "Z", "attempts": 3})
    events = list(sink.events)
    assert [event.seq for event in events] == [0, 1, 2]
    assert [event.event for event in sink.named("id.rejected")] == ["id.rejected", "id.rejected"]
    assert sink.rejection_counts() == {"length": 1, "duplicate": 1}


def test_structured_sink_is_thread_safe() -> None:
    sink = StructuredTelemetrySink()

    def burst() -> None:
        for index in range(200):
            sink.emit("id.generated", {"value": str(index), "attempts": 1})

    threads = [threading.Thread(target=burst) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(event.seq for event in sink.events) == list(range(800))


def test_bundle_contains_ids_and_events() -> None:
    sink = StructuredTelemetrySink()
    sink.emit("id.generated", {"value": "BlueDuck", "attempts": 1})
    bundle = sink.build_bundle(config={"joiner": ""}, ids=["BlueDuck"], extra={"status": "completed"})
    assert bundle["bundle_type"] == "memorable-ids#events"
    assert bundle["schema_version"] == StructuredTelemetrySink.SCHEMA_VERSION
    assert bundle["ids"] == ["BlueDuck"]
    assert bundle["events"][0]["payload"]["value"] == "BlueDuck"
    assert bundle["extra"] == {"status": "completed"}


def test_fanout_reaches_every_sink() -> None:
    first, second = StructuredTelemetrySink(), StructuredTelemetrySink()
    fanout = FanoutTelemetrySink([first, NullTelemetrySink(), second])
    fanout.emit("id.exhausted", {"attempts": 3, "validated": False})
    assert len(list(first.events)) == 1
    assert len(list(second.events)) == 1


def test_json_lines_sink_writes_one_object_per_event() -> None:
    buffer = io.StringIO()
    sink = JsonLinesTelemetrySink(buffer)
    sink.emit("id.rejected", {"reason": "length", "candidate": "RedFox", "attempt": 1})
    sink.emit("id.exhausted")
    lines = buffer.getvalue().splitlines()
    assert [json.loads(line) for line in lines] == [
        {"event": "id.rejected", "reason": "length", "candidate": "RedFox", "attempt": 1},
        {"event": "id.exhausted"},
    ]


def test_json_lines_sink_defaults_to_stderr(capsys) -> None:
    JsonLinesTelemetrySink().emit("id.generated", {"value": "BlueDuck", "attempts": 2})
    captured = capsys.readouterr()
    assert captured.out == ""
    assert json.loads(captured.err) == {"event": "id.generated", "value": "BlueDuck", "attempts": 2}


def test_console_sink_renders_known_events() -> None:
    sink, buffer = make_console()
    sink.emit("id.rejected", {"reason": "duplicate", "candidate": "RedFox", "attempt": 2})
    sink.emit("id.generated", {"value": "BlueDuck", "attempts": 3})
    sink.emit("id.exhausted", {"attempts": 100, "validated": True})
    text = buffer.getvalue()
    assert "duplicate RedFox #2" in text
    assert "BlueDuck" in text
    assert "exhausted after 100 attempts with validator" in text


def test_console_sink_can_hide_rejections() -> None:
    sink, buffer = make_console()
    sink._show_rejections = False
    sink.emit("id.rejected", {"reason": "length", "candidate": "Long", "attempt": 1})
    assert buffer.getvalue() == ""
