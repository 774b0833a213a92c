"""
Tests for the interaction controller and its state/validation helpers.

The controller is driven with a ManualScheduler on a frozen clock so the
busy-flag timing is deterministic.
"""

import math
import threading
from unittest.mock import Mock

import pytest

from src.growth_calculator import calculate_growth
from src.ui_logic import (
    ControllerState,
    ImmediateScheduler,
    InteractionController,
    InvalidInput,
    ManualScheduler,
    StateManager,
    ThreadTimerScheduler,
    parse_doubling_time,
)
from src.ui_logic.validation_manager import INVALID_INPUT_MESSAGE, parse_int_prefix


def _controller(delay: float = 0.2):
    scheduler = ManualScheduler(clock=lambda: 0.0)
    return InteractionController(scheduler=scheduler, busy_clear_delay=delay), scheduler


class TestParseDoublingTime:
    @pytest.mark.parametrize("raw", ["0", "-5", "abc", "", "   ", "-0", None, ".5"])
    def test_rejects_non_positive_or_non_numeric(self, raw):
        with pytest.raises(InvalidInput) as excinfo:
            parse_doubling_time(raw)
        assert excinfo.value.message == INVALID_INPUT_MESSAGE
        assert excinfo.value.raw_input == raw

    @pytest.mark.parametrize("raw, expected", [("1", 1), ("20", 20), ("100000", 100000)])
    def test_accepts_positive_integers(self, raw, expected):
        assert parse_doubling_time(raw).doubling_time == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [(" 7 ", 7), ("+5", 5), ("20min", 20), ("3.7", 3), ("12abc", 12), ("0042", 42)],
    )
    def test_uses_leading_integer(self, raw, expected):
        assert parse_int_prefix(raw) == expected

    @pytest.mark.parametrize("raw", ["1" + "0" * 400, "1" * 5000])
    def test_huge_digit_strings_parse_to_infinity(self, raw):
        assert parse_int_prefix(raw) == math.inf
        assert parse_doubling_time(raw).doubling_time == math.inf

    def test_huge_negative_digit_string_rejected(self):
        assert parse_int_prefix("-" + "1" * 400) == -math.inf
        with pytest.raises(InvalidInput) as excinfo:
            parse_doubling_time("-" + "1" * 400)
        assert excinfo.value.context["reason"] == "not_positive"

    def test_leading_zeros_do_not_count_toward_length(self):
        assert parse_int_prefix("0" * 500 + "25") == 25

    @pytest.mark.parametrize("raw", ["٣٠", "２０", "२"])
    def test_non_ascii_digits_rejected(self, raw):
        assert parse_int_prefix(raw) is None
        with pytest.raises(InvalidInput):
            parse_doubling_time(raw)

    def test_invalid_input_is_a_value_error(self):
        assert issubclass(InvalidInput, ValueError)
        err = InvalidInput("x", context={"reason": "not_a_number"})
        assert err.to_dict()["context"] == {"reason": "not_a_number"}


class TestStateManager:
    def test_initial_state_is_empty(self):
        state = StateManager().get_state()
        assert state == ControllerState()
        assert state.params is None
        assert state.result is None
        assert state.is_busy is False
        assert state.error_message is None
        assert not state.has_result

    def test_update_replaces_snapshot_and_notifies(self):
        manager = StateManager()
        seen = []
        manager.add_listener("state_changed", lambda old, new: seen.append((old, new)))
        before = manager.get_state()

        manager.update_state(is_busy=True)

        after = manager.get_state()
        assert after is not before
        assert before.is_busy is False
        assert after.is_busy is True
        assert seen == [(before, after)]

    def test_failing_listener_does_not_break_updates(self):
        manager = StateManager()
        manager.add_listener("state_changed", Mock(side_effect=RuntimeError("boom")))
        manager.update_state(error_message="x")
        assert manager.get_state().error_message == "x"

    def test_remove_listener(self):
        manager = StateManager()
        listener = Mock()
        manager.add_listener("state_changed", listener)
        manager.remove_listener("state_changed", listener)
        manager.remove_listener("state_changed", listener)  # second removal is a no-op
        manager.update_state(is_busy=True)
        listener.assert_not_called()


class TestInteractionController:
    def test_valid_submission_stores_result_and_sets_busy(self):
        controller, scheduler = _controller()
        controller.submit("20")

        assert controller.error_message is None
        assert controller.params.doubling_time == 20
        assert controller.result == calculate_growth(controller.params)
        assert len(controller.result.chart_points) == 8
        assert controller.is_busy is True

        scheduler.advance(0.2)
        assert controller.is_busy is False

    def test_result_available_before_busy_clears(self):
        controller, scheduler = _controller(delay=1.0)
        controller.submit("20")
        assert controller.result is not None
        scheduler.advance(0.5)
        assert controller.is_busy is True
        scheduler.advance(0.5)
        assert controller.is_busy is False

    @pytest.mark.parametrize("raw", ["0", "-5", "abc", ""])
    def test_invalid_submission_keeps_previous_result(self, raw):
        controller, scheduler = _controller()
        controller.submit("20")
        scheduler.advance(1.0)
        result_before = controller.result
        params_before = controller.params

        controller.submit(raw)

        assert controller.error_message == INVALID_INPUT_MESSAGE
        assert controller.result is result_before
        assert controller.params is params_before
        assert controller.is_busy is False

    def test_invalid_submission_does_not_call_calculator(self):
        calculator = Mock(side_effect=calculate_growth)
        controller = InteractionController(scheduler=ManualScheduler(clock=lambda: 0.0), calculator=calculator)
        controller.submit("abc")
        calculator.assert_not_called()
        assert controller.result is None
        assert controller.error_message == INVALID_INPUT_MESSAGE

    def test_invalid_submission_leaves_busy_flag_alone(self):
        controller, scheduler = _controller()
        controller.submit("20")
        controller.submit("nope")
        assert controller.is_busy is True
        scheduler.advance(0.2)
        assert controller.is_busy is False

    def test_valid_submission_clears_previous_error(self):
        controller, _ = _controller()
        controller.submit("-1")
        assert controller.error_message
        controller.submit("15")
        assert controller.error_message is None
        assert controller.params.doubling_time == 15

    def test_new_submission_replaces_result(self):
        controller, scheduler = _controller()
        controller.submit("20")
        first = controller.result
        controller.submit("40")
        scheduler.run_all()

        assert controller.result is not first
        assert controller.params.doubling_time == 40
        assert len(controller.result.chart_points) == 8
        assert controller.result.milestones[1].value == "40 min"
        assert controller.result == calculate_growth(controller.params)

    def test_last_submission_wins_for_busy_flag(self):
        controller, scheduler = _controller(delay=0.2)
        controller.submit("20")
        scheduler.advance(0.1)
        controller.submit("40")  # due at 0.3; the first clear (0.2) is cancelled

        scheduler.advance(0.15)
        assert controller.is_busy is True

        scheduler.advance(0.1)
        assert controller.is_busy is False
        assert scheduler.pending() == []

    def test_stale_clear_is_ignored_even_if_it_fires(self):
        controller, scheduler = _controller()
        controller.submit("20")
        stale = scheduler.pending()[0]
        controller.submit("40")

        # Force the first call through despite cancellation bookkeeping
        stale._cancelled = False
        stale.fire()
        assert controller.is_busy is True

    def test_listeners_see_busy_then_result(self):
        controller, scheduler = _controller()
        events = []
        controller.add_listener(lambda old, new: events.append(new))

        controller.submit("20")
        scheduler.advance(0.2)

        assert [e.is_busy for e in events] == [True, True, False]
        assert events[0].result is None
        assert events[1].result is not None

    def test_immediate_scheduler_clears_busy_synchronously(self):
        controller = InteractionController(scheduler=ImmediateScheduler(), busy_clear_delay=0.0)
        controller.submit("20")
        assert controller.is_busy is False
        assert controller.result is not None

    def test_thread_timer_scheduler_clears_busy(self):
        controller = InteractionController(scheduler=ThreadTimerScheduler(), busy_clear_delay=0.01)
        cleared = threading.Event()
        controller.add_listener(lambda old, new: cleared.set() if old.is_busy and not new.is_busy else None)

        controller.submit("20")
        assert cleared.wait(timeout=5.0)
        assert controller.is_busy is False

    def test_validate_raises_without_touching_state(self):
        controller, _ = _controller()
        with pytest.raises(InvalidInput):
            controller.validate("0")
        assert controller.state == ControllerState()

    @pytest.mark.parametrize("raw", ["1" + "0" * 400, "1" * 5000])
    def test_huge_input_gives_flat_result(self, raw):
        controller, scheduler = _controller()
        controller.submit("20")
        controller.submit(raw)

        assert controller.error_message is None
        assert controller.params.doubling_time == math.inf
        assert all(p.population == 2.0 for p in controller.result.chart_points)
        assert controller.result.milestones[1].value == "∞ min"

        scheduler.run_all()
        assert controller.is_busy is False

    def test_calculator_error_clears_busy_flag(self):
        calculator = Mock(side_effect=RuntimeError("boom"))
        controller = InteractionController(
            scheduler=ManualScheduler(clock=lambda: 0.0), calculator=calculator
        )

        with pytest.raises(RuntimeError):
            controller.submit("20")

        calculator.assert_called_once()
        assert controller.is_busy is False
        assert controller.result is None
        assert controller.params is None
        assert controller.scheduler.pending() == []

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            InteractionController(busy_clear_delay=-1)
