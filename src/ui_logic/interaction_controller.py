"""
Interaction controller for the growth simulator.

Owns the form-submission flow: validate the raw text, run the calculator
synchronously, store the new result in place of the old one, and manage the
transient busy flag. Framework-agnostic; the Streamlit app and the CLI both
drive it through `submit`.
"""

from typing import Callable, Optional
import logging
import threading

from src.growth_calculator import CalculationParams, CalculationResult, calculate_growth
from src.ui_logic.scheduler import ManualScheduler, ScheduledCall, Scheduler
from src.ui_logic.state_manager import ControllerState, StateManager, STATE_CHANGED
from src.ui_logic.validation_manager import InvalidInput, parse_doubling_time

logger = logging.getLogger(__name__)

DEFAULT_BUSY_CLEAR_DELAY = 0.2  # seconds


class InteractionController:
    """
    Accepts doubling-time submissions and exposes result, busy and error state.

    Each accepted submission fully supersedes the previous one: params and
    result are replaced together, and the previous submission's pending busy
    clear is cancelled so it cannot end the newer submission's busy period.
    """

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        busy_clear_delay: float = DEFAULT_BUSY_CLEAR_DELAY,
        state_manager: Optional[StateManager] = None,
        calculator: Callable[[CalculationParams], CalculationResult] = calculate_growth,
    ):
        """Initialize the controller.

        Args:
            scheduler: Runs the deferred busy clear; defaults to a ManualScheduler
            busy_clear_delay: Seconds between a calculation and clearing the busy flag
            state_manager: State holder; a fresh one is created when omitted
            calculator: Function mapping params to a result
        """
        if busy_clear_delay < 0:
            raise ValueError("busy_clear_delay must be non-negative")
        self.scheduler = scheduler or ManualScheduler()
        self.busy_clear_delay = float(busy_clear_delay)
        self.state_manager = state_manager or StateManager()
        self._calculator = calculator
        self._pending_clear: Optional[ScheduledCall] = None
        self._generation = 0
        self._lock = threading.RLock()

    @property
    def state(self) -> ControllerState:
        return self.state_manager.get_state()

    @property
    def result(self) -> Optional[CalculationResult]:
        return self.state.result

    @property
    def params(self) -> Optional[CalculationParams]:
        return self.state.params

    @property
    def is_busy(self) -> bool:
        return self.state.is_busy

    @property
    def error_message(self) -> Optional[str]:
        return self.state.error_message

    def add_listener(self, callback: Callable[[ControllerState, ControllerState], None]) -> None:
        """Subscribe to (old_state, new_state) notifications."""
        self.state_manager.add_listener(STATE_CHANGED, callback)

    def remove_listener(self, callback: Callable[[ControllerState, ControllerState], None]) -> None:
        self.state_manager.remove_listener(STATE_CHANGED, callback)

    def validate(self, raw_input: object) -> CalculationParams:
        """Parse raw form text; raises InvalidInput. Does not touch state."""
        return parse_doubling_time(raw_input)

    def submit(self, raw_input: object) -> None:
        """Handle one form submission.

        Invalid input sets the error message and leaves result, params and
        busy flag untouched. Valid input clears the error, computes the new
        result and schedules the busy flag to clear. If the calculator raises,
        the busy flag is cleared before the exception propagates.
        """
        try:
            params = self.validate(raw_input)
        except InvalidInput as exc:
            logger.warning("Invalid doubling time %r: %s", raw_input, exc.message)
            self.state_manager.update_state(error_message=exc.message)
            return

        with self._lock:
            self._generation += 1
            generation = self._generation
            if self._pending_clear is not None:
                self._pending_clear.cancel()
                self._pending_clear = None

            self.state_manager.update_state(error_message=None, is_busy=True)
            try:
                result = self._calculator(params)
            except Exception:
                logger.exception("Growth calculation failed for doubling time %s", params.doubling_time)
                self.state_manager.update_state(is_busy=False)
                raise
            # params and result are swapped in one update
            self.state_manager.update_state(params=params, result=result)
            logger.info("Calculated growth for doubling time %s min", params.doubling_time)
            logger.debug(
                "Populations: %s",
                ", ".join(f"{p.time_label}={p.population:.3e}" for p in result.chart_points),
            )

            self._pending_clear = self.scheduler.call_later(
                self.busy_clear_delay, lambda: self._clear_busy(generation)
            )

    def _clear_busy(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                logger.debug("Skipping stale busy clear from submission %d", generation)
                return
            self._pending_clear = None
            self.state_manager.update_state(is_busy=False)


__all__ = [
    "DEFAULT_BUSY_CLEAR_DELAY",
    "InteractionController",
]
