"""Tests for the deferred-call schedulers."""

import pytest
from PyQt6.QtTest import QTest

from limber.timer.scheduler import ManualScheduler, QtScheduler


class TestManualScheduler:

    def test_nothing_runs_until_advanced(self):
        clock = ManualScheduler()
        fired = []
        clock.call_later(1.0, lambda: fired.append("a"))
        assert fired == []
        assert clock.pending == 1

    def test_runs_in_due_order(self):
        clock = ManualScheduler()
        fired = []
        clock.call_later(2.0, lambda: fired.append("late"))
        clock.call_later(0.5, lambda: fired.append("early"))
        clock.call_later(2.0, lambda: fired.append("late-2"))
        clock.advance(5)
        assert fired == ["early", "late", "late-2"]

    def test_clock_reports_due_time_inside_callback(self):
        clock = ManualScheduler(start=10.0)
        seen = []
        clock.call_later(1.5, lambda: seen.append(clock.now))
        clock.advance(3)
        assert seen == [11.5]
        assert clock.now == 13.0

    def test_cancelled_call_never_runs(self):
        clock = ManualScheduler()
        fired = []
        handle = clock.call_later(1.0, lambda: fired.append(1))
        handle.cancel()
        handle.cancel()
        clock.advance(10)
        assert fired == []
        assert clock.pending == 0
        assert not handle.active

    def test_call_scheduled_from_callback_runs_within_window(self):
        clock = ManualScheduler()
        fired = []

        def first():
            fired.append(clock.now)
            clock.call_later(1.0, lambda: fired.append(clock.now))

        clock.call_later(1.0, first)
        clock.advance(2)
        assert fired == [1.0, 2.0]

    def test_run_pending_jumps_to_next_call(self):
        clock = ManualScheduler()
        fired = []
        clock.call_later(7.0, lambda: fired.append(1)).cancel()
        clock.call_later(9.0, lambda: fired.append(2))
        assert clock.run_pending() is True
        assert fired == [2]
        assert clock.now == 9.0
        assert clock.run_pending() is False

    def test_cancel_all(self):
        clock = ManualScheduler()
        handles = [clock.call_later(i, lambda: None) for i in range(3)]
        clock.cancel_all()
        assert clock.pending == 0
        assert not any(h.active for h in handles)


@pytest.mark.usefixtures("qapp")
class TestQtScheduler:

    def test_fires_on_event_loop(self):
        scheduler = QtScheduler()
        fired = []
        handle = scheduler.call_later(0.01, lambda: fired.append(1))
        assert handle.active
        QTest.qWait(100)
        assert fired == [1]
        assert not handle.active
        assert scheduler.pending == 0

    def test_cancel_prevents_firing(self):
        scheduler = QtScheduler()
        fired = []
        handle = scheduler.call_later(0.02, lambda: fired.append(1))
        handle.cancel()
        QTest.qWait(100)
        assert fired == []
        assert scheduler.pending == 0

    def test_cancel_all(self):
        scheduler = QtScheduler()
        fired = []
        for _ in range(3):
            scheduler.call_later(0.01, lambda: fired.append(1))
        assert scheduler.pending == 3
        scheduler.cancel_all()
        QTest.qWait(100)
        assert fired == []
