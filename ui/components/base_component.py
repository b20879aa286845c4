from __future__ import annotations

"""Base component class for the Streamlit UI.

All page sections should inherit from `BaseComponent` and implement the
`render()` method. Components receive the page's `VisitorManager` through
their constructor; they read view state from it and call its operations,
never the HTTP service directly.
"""

from dataclasses import dataclass

from src.ui_logic import VisitorManager


@dataclass
class BaseComponent:
    """Base class for all UI components.

    Attributes:
        manager: Controller owning the visitor list, draft and error state
    """

    manager: VisitorManager

    def render(self) -> None:
        """Render the component.

        Subclasses must override this method to draw Streamlit widgets
        and route user actions to the manager.
        """
        raise NotImplementedError("Subclasses must implement render()")
