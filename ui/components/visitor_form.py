from __future__ import annotations

import streamlit as st

from .base_component import BaseComponent
from src.visitor_model import EDITABLE_FIELDS, FIELD_LABELS, REQUIRED_FIELDS
from ui.state import widget_key


_PLACEHOLDERS = {
    "checkInTime": "YYYY-MM-DDTHH:MM",
    "checkOutTime": "YYYY-MM-DDTHH:MM",
}


class VisitorForm(BaseComponent):
    """Add/edit form bound to the manager's draft.

    - Inputs are re-seeded from the draft whenever its revision changes
      (edit-start, successful submit, cancel)
    - Submit label switches between "Add Visitor" and "Update Visitor"
    - Cancel leaves edit mode without saving
    """

    def render(self) -> None:
        view = self.manager.get_state()
        rev = view.draft_revision

        if self.manager.is_editing:
            st.caption(f"Editing visitor #{view.editing_id}")

        values: dict[str, str] = {}
        with st.form(key=f"visitor_form_{rev}"):
            cols = st.columns(2)
            for idx, name in enumerate(EDITABLE_FIELDS):
                label = FIELD_LABELS[name]
                if name in REQUIRED_FIELDS:
                    label = f"{label} *"
                with cols[idx % 2]:
                    values[name] = st.text_input(
                        label,
                        value=view.draft.get(name),
                        placeholder=_PLACEHOLDERS.get(name, FIELD_LABELS[name]),
                        key=widget_key(name, rev),
                    )
            submitted = st.form_submit_button(self.manager.submit_label, type="primary")

        if submitted:
            for name, value in values.items():
                self.manager.set_field(name, value)
            self.manager.submit()
            st.rerun()

        if self.manager.is_editing:
            if st.button("Cancel", key=f"visitor_cancel_{rev}"):
                self.manager.cancel_edit()
                st.rerun()


def render_visitor_form(manager) -> None:
    VisitorForm(manager).render()
