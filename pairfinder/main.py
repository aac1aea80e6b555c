"""
Main entry point for the Pair Finder application.
Orchestrates the application flow and handles session state.
"""

import streamlit as st

from pairfinder.services.session_service import (
    get_active_tab,
    initialize_session_state,
    set_active_tab,
)
from pairfinder.ui.collaboration import display_collaboration_tab
from pairfinder.ui.data_tools import display_import_data_tab
from pairfinder.ui.pair_report import display_best_pair_tab
from pairfinder.ui.settings import display_settings_tab

TAB_MAPPING = {
    "Data Tools": display_import_data_tab,
    "Best Pair": display_best_pair_tab,
    "Collaboration Matrix": display_collaboration_tab,
    "Configuration": display_settings_tab,
}


def main():
    """Orchestrates the Streamlit application flow."""
    initialize_session_state()

    with st.sidebar:
        _display_sidebar()

    st.title("Pair Finder")
    _route_to_active_tab()


def _display_sidebar():
    """Display the application sidebar with navigation."""
    st.title("Pair Finder")

    index = st.session_state.index
    if index is not None:
        st.caption(f"{len(index)} employees loaded from {st.session_state.source_name}")

    st.markdown("### Navigation")

    if st.button("💾 Data Tools", use_container_width=True):
        set_active_tab("Data Tools")
        st.rerun()

    st.markdown("#### Analysis")
    if st.button("🤝 Best Pair", use_container_width=True):
        set_active_tab("Best Pair")
        st.rerun()

    if st.button("📊 Collaboration Matrix", use_container_width=True):
        set_active_tab("Collaboration Matrix")
        st.rerun()

    st.markdown("#### Tools")
    if st.button("⚙️ Configuration", use_container_width=True):
        set_active_tab("Configuration")
        st.rerun()


def _route_to_active_tab():
    """Route to the active tab based on session state."""
    active_tab = get_active_tab()
    TAB_MAPPING.get(active_tab, display_import_data_tab)()


if __name__ == "__main__":
    main()
