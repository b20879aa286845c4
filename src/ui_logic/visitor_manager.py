"""
Framework-agnostic controller for the visitor list and form.

`VisitorManager` owns all view state (the list, the draft, the edit target,
the error string and the loading flag) and talks to one remote collection
through a service object exposing `list_visitors`, `create_visitor`,
`update_visitor` and `delete_visitor`. The Streamlit page and the CLI both
drive it; neither talks to the service directly.

Every failure is caught here, logged, and converted to a display string.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol
import logging

from src.errors import ServerStatusError, VisitorApiError
from src.visitor_model import FIELD_LABELS, Visitor, VisitorDraft

logger = logging.getLogger(__name__)


ADD_FAILED = "Failed to add visitor. Please try again."
UPDATE_FAILED = "Failed to update visitor. Please try again."
DELETE_FAILED = "Failed to delete visitor. Please try again."


class VisitorClient(Protocol):
    """Operations the manager needs from the remote collection."""

    def list_visitors(self) -> List[Visitor]: ...

    def create_visitor(self, payload: dict) -> Optional[Visitor]: ...

    def update_visitor(self, visitor_id: Any, payload: dict) -> Optional[Visitor]: ...

    def delete_visitor(self, visitor_id: Any) -> None: ...


@dataclass
class VisitorViewState:
    """Everything the page renders.

    `draft_revision` increments whenever the draft is replaced wholesale
    (edit-start, reset after submit, cancel) so widget-based UIs can
    re-seed their inputs.
    """
    visitors: List[Visitor] = field(default_factory=list)
    draft: VisitorDraft = field(default_factory=VisitorDraft)
    editing_id: Optional[Any] = None
    error: Optional[str] = None
    loading: bool = False
    draft_revision: int = 0


class VisitorManager:
    """
    Keeps the local visitor list in sync with the remote collection.

    Create and update always re-fetch the full collection afterwards; delete
    filters the local list without a re-fetch. Only the list load
    distinguishes server-status failures from connectivity failures.
    """

    def __init__(self, client: VisitorClient, *, server_origin: str = "the configured API URL"):
        self._client = client
        self._server_origin = server_origin
        self._state = VisitorViewState()

    def get_state(self) -> VisitorViewState:
        """Get the current view state."""
        return self._state

    @property
    def is_editing(self) -> bool:
        return self._state.editing_id is not None

    @property
    def submit_label(self) -> str:
        return "Update Visitor" if self.is_editing else "Add Visitor"

    # --- List-and-sync ---
    def fetch_visitors(self) -> bool:
        """Replace the local list with the server's collection.

        On failure the list is cleared and a descriptive error is set.
        """
        self._state.loading = True
        self._state.error = None
        try:
            visitors = self._client.list_visitors()
        except ServerStatusError as e:
            logger.error("Error fetching visitors: %s", e)
            self._state.visitors = []
            self._state.error = f"Server error ({e.status_code}): {e.message or 'Unknown error'}"
            return False
        except VisitorApiError as e:
            logger.error("Error fetching visitors: %s", e)
            self._state.visitors = []
            self._state.error = (
                "Could not connect to the server. "
                f"Make sure the backend API is running on {self._server_origin}"
            )
            return False
        finally:
            self._state.loading = False

        self._state.visitors = list(visitors)
        self._state.error = None
        logger.info("Loaded %d visitor(s)", len(self._state.visitors))
        return True

    # --- Draft editing ---
    def set_field(self, name: str, value: str) -> None:
        """Set one draft field by input name (e.g. `checkInTime`)."""
        self._state.draft.set(name, value)

    def start_edit(self, visitor: Visitor) -> None:
        """Copy a record's editable fields into the draft and target its id."""
        self._state.draft = VisitorDraft.from_visitor(visitor)
        self._state.editing_id = visitor.id
        self._state.draft_revision += 1
        logger.debug("Editing visitor %s", visitor.id)

    def cancel_edit(self) -> None:
        """Drop the draft and leave edit mode without touching the server."""
        self._reset_draft()

    def _reset_draft(self) -> None:
        self._state.draft = VisitorDraft()
        self._state.editing_id = None
        self._state.draft_revision += 1

    # --- Mutations ---
    def submit(self) -> bool:
        """Create or update from the draft, then reload the whole list.

        Updates target the current edit target; without one a new record is
        created. The draft and edit target survive a failed request.
        """
        self._state.error = None

        missing = self._state.draft.missing_required()
        if missing:
            labels = ", ".join(FIELD_LABELS[name] for name in missing)
            self._state.error = f"Please fill in: {labels}"
            return False

        payload = self._state.draft.to_payload()
        editing_id = self._state.editing_id
        if editing_id is not None:
            try:
                self._client.update_visitor(editing_id, payload)
            except VisitorApiError as e:
                logger.error("Error updating visitor %s: %s", editing_id, e)
                self._state.error = UPDATE_FAILED
                return False
            logger.info("Updated visitor %s", editing_id)
        else:
            try:
                self._client.create_visitor(payload)
            except VisitorApiError as e:
                logger.error("Error adding visitor: %s", e)
                self._state.error = ADD_FAILED
                return False
            logger.info("Added visitor %r", payload.get("name"))

        self.fetch_visitors()
        self._reset_draft()
        return True

    def delete_visitor(self, visitor_id: Any) -> bool:
        """Delete by id and drop the matching row locally (no re-fetch)."""
        try:
            self._client.delete_visitor(visitor_id)
        except VisitorApiError as e:
            logger.error("Error deleting visitor %s: %s", visitor_id, e)
            self._state.error = DELETE_FAILED
            return False

        self._state.visitors = [v for v in self._state.visitors if v.id != visitor_id]
        self._state.error = None
        logger.info("Deleted visitor %s", visitor_id)
        return True

    def find_visitor(self, visitor_id: Any) -> Optional[Visitor]:
        """Return the loaded record with `visitor_id`, comparing ids as strings."""
        for v in self._state.visitors:
            if str(v.id) == str(visitor_id):
                return v
        return None
