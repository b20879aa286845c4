"""
Framework-agnostic business logic for the Visitor Entry System.

Core principles:
- No UI framework imports or dependencies
- All network failures converted to display strings
- Usable from Streamlit, the CLI and tests alike
"""

from .visitor_manager import VisitorManager, VisitorViewState

__all__ = [
    "VisitorManager",
    "VisitorViewState",
]
