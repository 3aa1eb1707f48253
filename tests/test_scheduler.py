"""ManualScheduler: virtual-clock periodic timers."""
from jump_engine import ManualScheduler


def test_fires_periodically():
    scheduler = ManualScheduler()
    fired = []
    scheduler.start("a", 10, lambda: fired.append(scheduler.now))
    scheduler.advance(35)
    assert fired == [10, 20, 30]
    assert scheduler.now == 35


def test_nothing_fires_before_period():
    scheduler = ManualScheduler()
    fired = []
    scheduler.start("a", 10, lambda: fired.append(1))
    scheduler.advance(9)
    assert fired == []


def test_timers_interleave_in_time_order():
    scheduler = ManualScheduler()
    fired = []
    scheduler.start("slow", 15, lambda: fired.append("slow"))
    scheduler.start("fast", 10, lambda: fired.append("fast"))
    scheduler.advance(30)
    # ties at t=30 fire in registration order
    assert fired == ["fast", "slow", "fast", "slow", "fast"]


def test_cancel_from_callback_stops_other_timer():
    scheduler = ManualScheduler()
    fired = []

    def first():
        fired.append("first")
        scheduler.cancel("second")

    scheduler.start("first", 10, first)
    scheduler.start("second", 10, lambda: fired.append("second"))
    scheduler.advance(50)
    assert fired == ["first"] * 5
    assert not scheduler.is_active("second")


def test_start_is_idempotent_while_active():
    scheduler = ManualScheduler()
    fired = []
    scheduler.start("a", 10, lambda: fired.append(1))
    scheduler.advance(5)
    scheduler.start("a", 10, lambda: fired.append(2))
    scheduler.advance(5)
    assert fired == [1]


def test_cancel_unknown_timer_is_noop():
    scheduler = ManualScheduler()
    scheduler.cancel("missing")
    assert not scheduler.is_active("missing")
