from __future__ import annotations

import streamlit as st

from .base_component import BaseComponent
from src.visitor_model import format_timestamp
from ui.utils.helpers import TABLE_COLUMNS, visitors_to_dataframe


class VisitorTable(BaseComponent):
    """Visitor List: one row per record with Edit and Delete actions.

    Edit copies the row into the form; Delete removes it on the server and
    drops the row locally. The current list can be exported as CSV.
    """

    def render(self) -> None:
        st.subheader("Visitor List")
        visitors = self.manager.get_state().visitors

        if not visitors:
            st.info("No visitors recorded yet.")
            return

        widths = [2, 3, 2, 3, 2, 2, 2]
        header = st.columns(widths)
        for col, title in zip(header, TABLE_COLUMNS + ["Actions"]):
            col.markdown(f"**{title}**")

        for v in visitors:
            cols = st.columns(widths)
            cols[0].write(v.name)
            cols[1].write(v.email)
            cols[2].write(v.phone)
            cols[3].write(v.purpose)
            cols[4].write(format_timestamp(v.check_in_time))
            cols[5].write(format_timestamp(v.check_out_time))
            with cols[6]:
                edit_col, delete_col = st.columns(2)
                if edit_col.button("Edit", key=f"visitor_edit_{v.id}"):
                    self.manager.start_edit(v)
                    st.rerun()
                if delete_col.button("Delete", key=f"visitor_delete_{v.id}"):
                    self.manager.delete_visitor(v.id)
                    st.rerun()

        csv = visitors_to_dataframe(visitors, formatted=False).to_csv()
        st.download_button(
            label="Download CSV",
            data=csv,
            file_name="visitors.csv",
            mime="text/csv",
        )


def render_visitor_table(manager) -> None:
    VisitorTable(manager).render()
