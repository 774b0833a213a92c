"""
Framework-agnostic state management for the growth simulator UI.

Holds the controller's state as an immutable snapshot and notifies listeners
whenever a new snapshot replaces the old one. Any UI framework can subscribe
to `"state_changed"` to redraw.
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Callable
import logging

from src.growth_calculator import CalculationParams, CalculationResult

logger = logging.getLogger(__name__)

STATE_CHANGED = "state_changed"


@dataclass(frozen=True)
class ControllerState:
    """Snapshot of the interaction state.

    - params: last successfully validated input, None until the first success
    - result: calculation for `params`; always replaced together with it
    - is_busy: transient "calculating" indicator for the presentation layer
    - error_message: validation message for the last rejected submission
    """
    params: Optional[CalculationParams] = None
    result: Optional[CalculationResult] = None
    is_busy: bool = False
    error_message: Optional[str] = None

    @property
    def has_result(self) -> bool:
        return self.result is not None


class StateManager:
    """
    Holds the current ControllerState and broadcasts replacements.

    Snapshots are never mutated in place; `update_state` builds a new one so
    listeners always receive a consistent (old, new) pair.
    """

    def __init__(self, initial: Optional[ControllerState] = None):
        self._state = initial or ControllerState()
        self._listeners: Dict[str, List[Callable]] = {}

    def get_state(self) -> ControllerState:
        """Get the current state snapshot."""
        return self._state

    def set_state(self, new_state: ControllerState) -> None:
        """Replace the state and notify listeners."""
        old_state = self._state
        self._state = new_state
        self._notify_listeners(STATE_CHANGED, old_state, new_state)

    def update_state(self, **kwargs) -> None:
        """Replace selected fields of the state in one step."""
        self.set_state(replace(self._state, **kwargs))

    def add_listener(self, event: str, callback: Callable) -> None:
        """Add a listener for state change events."""
        if event not in self._listeners:
            self._listeners[event] = []
        self._listeners[event].append(callback)

    def remove_listener(self, event: str, callback: Callable) -> None:
        """Remove a listener for state change events."""
        if event in self._listeners:
            try:
                self._listeners[event].remove(callback)
            except ValueError:
                pass

    def _notify_listeners(self, event: str, *args, **kwargs) -> None:
        if event in self._listeners:
            for callback in list(self._listeners[event]):
                try:
                    callback(*args, **kwargs)
                except Exception as e:
                    logger.error(f"Error in state listener callback: {e}")
