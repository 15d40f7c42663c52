"""Tests for session events and the elapsed-time timer."""

import io
import json
import time

from xlagent.observe.events import EventEmitter, Timer


def test_timer_reads_zero_before_start():
    assert Timer().elapsed_ms == 0


def test_timer_is_readable_inside_block():
    with Timer() as t:
        time.sleep(0.02)
        during = t.elapsed_ms
    assert during >= 10
    assert t.elapsed_ms >= during


def test_timer_freezes_on_exit():
    with Timer() as t:
        pass
    first = t.elapsed_ms
    time.sleep(0.02)
    assert t.elapsed_ms == first


def test_disabled_emitter_writes_nothing():
    stream = io.StringIO()
    EventEmitter(stream=stream).emit("session.start")
    assert stream.getvalue() == ""


def test_seq_counts_per_emitter():
    a_stream, b_stream = io.StringIO(), io.StringIO()
    a = EventEmitter(enabled=True, stream=a_stream)
    b = EventEmitter(enabled=True, stream=b_stream)
    a.emit("session.start")
    b.emit("session.start")
    a.emit("chat.sent", {"message_count": 2})
    a_lines = [json.loads(line) for line in a_stream.getvalue().splitlines()]
    b_lines = [json.loads(line) for line in b_stream.getvalue().splitlines()]
    assert [e["seq"] for e in a_lines] == [1, 2]
    assert [e["seq"] for e in b_lines] == [1]
    assert a_lines[1]["data"] == {"message_count": 2}
    assert a_lines[0]["data"] == {}
