import threading

from src.ui_logic.scheduler import ImmediateScheduler, ManualScheduler, ThreadTimerScheduler


def test_manual_scheduler_fires_in_due_order():
    scheduler = ManualScheduler(clock=lambda: 0.0)
    fired = []
    scheduler.call_later(0.3, lambda: fired.append("late"))
    scheduler.call_later(0.1, lambda: fired.append("early"))

    assert scheduler.time_until_next() == 0.1
    assert scheduler.advance(0.2) == 1
    assert fired == ["early"]
    assert scheduler.advance(0.2) == 1
    assert fired == ["early", "late"]
    assert scheduler.time_until_next() is None


def test_cancelled_call_never_fires():
    scheduler = ManualScheduler(clock=lambda: 0.0)
    fired = []
    call = scheduler.call_later(0.1, lambda: fired.append(1))
    assert call.cancel() is True
    assert call.cancelled
    assert scheduler.pending() == []
    assert scheduler.run_all() == 0
    assert fired == []


def test_cancel_after_fire_reports_false():
    scheduler = ManualScheduler(clock=lambda: 0.0)
    call = scheduler.call_later(0.0, lambda: None)
    scheduler.run_due()
    assert call.fired
    assert call.cancel() is False


def test_manual_scheduler_follows_injected_clock():
    now = [10.0]
    scheduler = ManualScheduler(clock=lambda: now[0])
    fired = []
    scheduler.call_later(1.0, lambda: fired.append(True))
    assert scheduler.run_due() == 0
    now[0] = 11.0
    assert scheduler.run_due() == 1
    assert fired == [True]


def test_immediate_scheduler_runs_synchronously():
    fired = []
    call = ImmediateScheduler().call_later(5.0, lambda: fired.append(True))
    assert fired == [True]
    assert call.fired


def test_thread_timer_scheduler_fires_and_cancels():
    done = threading.Event()
    ThreadTimerScheduler().call_later(0.01, done.set)
    assert done.wait(timeout=5.0)

    never = threading.Event()
    call = ThreadTimerScheduler().call_later(0.5, never.set)
    assert call.cancel() is True
    assert not never.wait(timeout=0.7)
