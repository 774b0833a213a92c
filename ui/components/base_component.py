from __future__ import annotations

"""Base component class for the Streamlit UI.

All components inherit from `BaseComponent` and implement `render()`.
Components receive the interaction controller through their constructor
and read or submit through it only, which keeps them thin and testable.
"""

from dataclasses import dataclass

from src.ui_logic import InteractionController


@dataclass
class BaseComponent:
    """Base class for all UI components.

    Attributes:
        controller: Interaction controller holding result, busy and error state
    """

    controller: InteractionController

    def render(self) -> None:
        """Render the component.

        Subclasses must override this method to draw Streamlit widgets.
        """
        raise NotImplementedError("Subclasses must implement render()")
