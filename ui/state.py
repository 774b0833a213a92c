from __future__ import annotations

"""
Session wiring for the Streamlit GUI.

Streamlit reruns the whole script on every interaction, so the controller
and its scheduler are created once and kept in `st.session_state`. These
helpers take the session mapping as an argument so they can be exercised
with a plain dict in tests.
"""

from dataclasses import dataclass
from typing import MutableMapping

from src.settings import AppSettings
from src.ui_logic import InteractionController, ManualScheduler

SESSION_KEY = "growth_session"


@dataclass
class GrowthSession:
    """Per-browser-session objects.

    - controller: owns result, busy flag and error message
    - scheduler: fires the deferred busy clear when the app calls `run_due()`
    - settings: settings the session was created with
    """

    controller: InteractionController
    scheduler: ManualScheduler
    settings: AppSettings


def create_session(settings: AppSettings) -> GrowthSession:
    scheduler = ManualScheduler()
    controller = InteractionController(scheduler=scheduler, busy_clear_delay=settings.busy_clear_delay)
    return GrowthSession(controller=controller, scheduler=scheduler, settings=settings)


def get_session(session_state: MutableMapping, settings: AppSettings) -> GrowthSession:
    """Return the session stored in `session_state`, creating it on first use."""
    if SESSION_KEY not in session_state:
        session_state[SESSION_KEY] = create_session(settings)
    return session_state[SESSION_KEY]
