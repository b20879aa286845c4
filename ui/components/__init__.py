"""UI components package for the Streamlit application.

Each page section defines a class inheriting from `BaseComponent` with a
`render()` method, plus a `render_*` convenience function used by `ui/app.py`.
"""

from .base_component import BaseComponent  # re-export for convenience

__all__ = [
    "BaseComponent",
]
