from __future__ import annotations

import logging

import pytest

from fixed_collections import BufferSettings, RingBuffer
from fixed_collections.config import parse_debug_flag
from fixed_collections.tools import debug


def test_describe_reports_raw_bookkeeping() -> None:
    buf: RingBuffer[int] = RingBuffer(4)
    buf.push_back(1)
    buf.push_back(2)
    buf.pop_front()
    buf.push_back(3)
    buf.push_back(4)
    buf.push_back(5)

    state = debug.describe(buf)

    assert state["capacity"] == 4
    assert state["head"] == 1
    assert state["len"] == 4
    assert state["slots"] == [5, 2, 3, 4]
    assert state["occupied"] == [1, 2, 3, 0]


def test_log_state_emits_only_when_debugging(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(debug, "DEBUG_FIXED_COLLECTIONS", False)
    buf = RingBuffer.from_items(["x", "y"])
    with caplog.at_level(logging.INFO, logger="fixed_collections.tools.debug"):
        debug.log_state(buf, level=logging.INFO)
        assert caplog.text == ""
        debug.log_state(buf, settings=BufferSettings(debug=True), level=logging.INFO)
    assert "head=0 len=2" in caplog.text


def test_debug_enabled_honours_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(debug, "DEBUG_FIXED_COLLECTIONS", False)
    assert not debug.debug_enabled()
    assert debug.debug_enabled(BufferSettings(debug=True))


def test_time_block_only_emits_when_enabled(monkeypatch: pytest.MonkeyPatch) -> None:
    messages: list[str] = []

    monkeypatch.setattr(debug, "DEBUG_FIXED_COLLECTIONS", False)
    with debug.time_block("noop", emitter=messages.append):
        pass
    assert messages == []

    monkeypatch.setattr(debug, "DEBUG_FIXED_COLLECTIONS", True)
    with debug.time_block("push", emitter=messages.append):
        RingBuffer(2).push_back(1)
    assert len(messages) == 1
    assert messages[0].startswith("[DEBUG] push took")


def test_time_block_follows_settings_debug_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(debug, "DEBUG_FIXED_COLLECTIONS", False)
    settings = BufferSettings(debug=True)
    messages: list[str] = []

    with debug.time_block("build", settings=settings, emitter=messages.append):
        RingBuffer.from_settings(settings)

    assert len(messages) == 1
    assert messages[0].startswith("[DEBUG] build took")


def test_debug_flag_parsing_strips_and_ignores_case() -> None:
    assert parse_debug_flag(" Yes ")
    assert parse_debug_flag("1")
    assert not parse_debug_flag("off")
    assert not parse_debug_flag(None)


def test_describe_uses_public_accessors() -> None:
    buf: RingBuffer[int] = RingBuffer(3)
    buf.push_front(1)
    snapshot = buf.slots()
    snapshot[0] = 99
    assert buf.head == 2
    assert buf.slots() == [None, None, 1]
    assert debug.describe(buf)["slots"] == [None, None, 1]
