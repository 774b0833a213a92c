"""
Framework-agnostic interaction logic for the growth simulator UI.

Nothing in this package imports a UI framework; Streamlit components and the
CLI runner both sit on top of it.
"""

from .state_manager import ControllerState, StateManager
from .validation_manager import InvalidInput, parse_doubling_time
from .scheduler import ImmediateScheduler, ManualScheduler, Scheduler, ThreadTimerScheduler
from .interaction_controller import InteractionController

__all__ = [
    "ControllerState",
    "StateManager",
    "InvalidInput",
    "parse_doubling_time",
    "Scheduler",
    "ImmediateScheduler",
    "ManualScheduler",
    "ThreadTimerScheduler",
    "InteractionController",
]
