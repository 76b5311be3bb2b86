"""Tests for delayed clipboard clearing."""

import threading
import time

import pytest

from passcryption.clipboard import ClipboardClearScheduler, thread_timer

from conftest import FakeClipboard


@pytest.mark.parametrize("delay", [0, -5, float("nan"), float("inf"), None, "soon"])
def test_non_positive_or_invalid_delay_never_clears(clipboard, manual_timer, delay):
    scheduler = ClipboardClearScheduler(clipboard, timer=manual_timer)
    clipboard.write_text("secret")
    scheduler.schedule_clear("secret", delay)
    assert manual_timer.pending == []
    assert clipboard.read_text() == "secret"


def test_clears_when_value_unchanged(clipboard, manual_timer):
    scheduler = ClipboardClearScheduler(clipboard, timer=manual_timer)
    scheduler.copy("secret", 1)
    assert manual_timer.pending[0][0] == 1.0
    manual_timer.fire_all()
    assert clipboard.read_text() == ""
    assert clipboard.clear_calls == 1


def test_leaves_newer_content_alone(clipboard, manual_timer):
    scheduler = ClipboardClearScheduler(clipboard, timer=manual_timer)
    scheduler.copy("secret", 1)
    clipboard.write_text("something else")
    manual_timer.fire_all()
    assert clipboard.read_text() == "something else"
    assert clipboard.clear_calls == 0


def test_overlapping_schedules_are_independent(clipboard, manual_timer):
    scheduler = ClipboardClearScheduler(clipboard, timer=manual_timer)
    scheduler.copy("first", 5)
    scheduler.copy("second", 10)
    first, second = manual_timer.pending

    first[1]()
    assert clipboard.read_text() == "second"
    second[1]()
    assert clipboard.read_text() == ""


def test_failure_in_callback_is_swallowed(manual_timer):
    class BrokenClipboard(FakeClipboard):
        def read_text(self):
            raise RuntimeError("no clipboard")

    scheduler = ClipboardClearScheduler(BrokenClipboard(), timer=manual_timer)
    scheduler.schedule_clear("secret", 1)
    manual_timer.fire_all()


def test_thread_timer_fires_once():
    fired = threading.Event()
    thread_timer(0.05, fired.set)
    assert fired.wait(2)


def test_default_timer_clears_after_delay():
    clipboard = FakeClipboard()
    scheduler = ClipboardClearScheduler(clipboard)
    scheduler.copy("secret", 0.1)
    assert clipboard.read_text() == "secret"
    deadline = time.monotonic() + 3
    while clipboard.read_text() and time.monotonic() < deadline:
        time.sleep(0.02)
    assert clipboard.read_text() == ""
