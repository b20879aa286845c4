from __future__ import annotations

"""
Construction helpers for the Streamlit page state.

The page keeps a single `VisitorManager` in `st.session_state`; this module
builds it from settings and derives widget keys. It intentionally avoids
Streamlit imports so it can be exercised directly from tests.
"""

from typing import Optional

import httpx

from src.config import Settings
from src.ui_logic import VisitorManager
from ui.services import VisitorService


SESSION_KEY = "visitor_manager"


def build_manager(settings: Settings, *, transport: Optional[httpx.BaseTransport] = None) -> VisitorManager:
    """Create a manager wired to the configured visitors API."""
    service = VisitorService.from_settings(settings, transport=transport)
    return VisitorManager(service, server_origin=settings.server_origin)


def widget_key(field_name: str, draft_revision: int) -> str:
    """Key for a form input; a new revision forces Streamlit to re-seed the widget."""
    return f"visitor_{field_name}_{draft_revision}"
