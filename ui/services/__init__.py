"""Service layer for the visitor UI.

Services encapsulate network I/O so UI components and the manager remain
thin and focused on presentation and state.
"""

from .visitor_service import VisitorService

__all__ = [
    "VisitorService",
]
