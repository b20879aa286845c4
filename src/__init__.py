"""Visitor Entry System source package.

Exports the visitor model and the settings loader for convenient imports.
The Streamlit page lives in the sibling `ui` package.
"""

from .config import Settings, load_settings
from .visitor_model import Visitor, VisitorDraft, format_timestamp

__all__ = [
    "Settings",
    "load_settings",
    "Visitor",
    "VisitorDraft",
    "format_timestamp",
]
