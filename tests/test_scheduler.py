"""Tests for the game-clock timer scheduler."""

from __future__ import annotations

import pytest

from ninja_runner.scheduler import Scheduler


def test_timeout_fires_once():
    scheduler = Scheduler()
    fired = []
    scheduler.set_timeout(50, lambda: fired.append(scheduler.now))

    scheduler.advance(49)
    assert fired == []
    scheduler.advance(1)
    assert fired == [50]
    scheduler.advance(500)
    assert fired == [50]
    assert scheduler.active == 0


def test_interval_catches_up_on_large_step():
    scheduler = Scheduler()
    count = []
    scheduler.set_interval(100, lambda: count.append(1))
    scheduler.advance(350)
    assert len(count) == 3
    assert scheduler.active == 1


def test_fractional_frames_hit_whole_millisecond_intervals():
    scheduler = Scheduler()
    count = []
    scheduler.set_interval(100, lambda: count.append(1))
    for _ in range(6):
        scheduler.advance(1000.0 / 60)
    assert len(count) == 1


def test_cancelled_timer_never_fires():
    scheduler = Scheduler()
    fired = []
    handle = scheduler.set_timeout(10, lambda: fired.append("x"))
    scheduler.cancel(handle)
    scheduler.advance(100)
    assert fired == []
    # Cancelling twice or cancelling None is harmless.
    scheduler.cancel(handle)
    scheduler.cancel(None)


def test_callback_can_cancel_later_timer():
    scheduler = Scheduler()
    fired = []
    later = scheduler.set_timeout(20, lambda: fired.append("later"))
    scheduler.set_timeout(10, lambda: scheduler.cancel(later))
    scheduler.advance(30)
    assert fired == []


def test_callback_can_reschedule():
    scheduler = Scheduler()
    fired = []

    def chain():
        fired.append(scheduler.now)
        if len(fired) < 3:
            scheduler.set_timeout(10, chain)

    scheduler.set_timeout(10, chain)
    scheduler.advance(10)
    scheduler.advance(10)
    assert fired == [10, 20]
    scheduler.advance(100)
    assert fired == [10, 20, 30]
    assert scheduler.active == 0
    assert scheduler.now == 120


def test_chained_timeouts_catch_up_in_one_advance():
    scheduler = Scheduler()
    fired = []

    def chain():
        fired.append(scheduler.now)
        scheduler.set_timeout(25, chain)

    scheduler.set_timeout(10, chain)
    scheduler.advance(100)
    # Each link counts from the due time of the one before it.
    assert fired == [10, 35, 60, 85]
    assert scheduler.now == 100
    assert scheduler.active == 1


def test_fires_in_due_then_creation_order():
    scheduler = Scheduler()
    order = []
    scheduler.set_timeout(20, lambda: order.append("b"))
    scheduler.set_timeout(10, lambda: order.append("a"))
    scheduler.set_timeout(20, lambda: order.append("c"))
    scheduler.advance(20)
    assert order == ["a", "b", "c"]


def test_cancel_all_and_reset():
    scheduler = Scheduler()
    scheduler.set_interval(10, lambda: None)
    scheduler.set_timeout(10, lambda: None)
    scheduler.advance(5)
    scheduler.reset()
    assert scheduler.active == 0
    assert scheduler.now == 0.0


@pytest.mark.parametrize("period", [0, -5])
def test_invalid_interval_rejected(period):
    with pytest.raises(ValueError):
        Scheduler().set_interval(period, lambda: None)


def test_negative_timeout_rejected():
    with pytest.raises(ValueError):
        Scheduler().set_timeout(-1, lambda: None)
