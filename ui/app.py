"""
Visitor Entry System UI

Single page: error banner, add/edit form and the visitor list, all driven
by one `VisitorManager` kept in the Streamlit session.
"""

from pathlib import Path
import sys
import streamlit as st

# Ensure project root is on sys.path to enable src imports
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from src.config import load_settings
from src.utils_logging import configure_logging
from src.visitor_model import use_user_locale
from ui.state import SESSION_KEY, build_manager
from ui.components.visitor_form import render_visitor_form
from ui.components.visitor_table import render_visitor_table


st.set_page_config(page_title="Visitor Entry System", page_icon="🛂", layout="wide")


def main() -> None:
    # Initialize manager once per session; creating it is the page mount
    if SESSION_KEY not in st.session_state:
        settings = load_settings()
        configure_logging(settings.log_dir, debug=settings.debug)
        use_user_locale()
        manager = build_manager(settings)
        st.session_state[SESSION_KEY] = manager
        with st.spinner("Loading visitors..."):
            manager.fetch_visitors()
    manager = st.session_state[SESSION_KEY]
    view = manager.get_state()

    st.title("Visitor Entry System")

    if view.error:
        st.error(view.error, icon="❌")

    render_visitor_form(manager)

    st.divider()
    if st.button("Refresh", key="visitor_refresh"):
        manager.fetch_visitors()
        st.rerun()
    render_visitor_table(manager)


if __name__ == "__main__":
    main()
