"""
UI component utilities for the pair finder.
"""

import streamlit as st

from pairfinder.services.session_service import get_active_tab


def display_action_bar():
    """Display breadcrumbs for the active tab and loaded data source."""
    active_tab = get_active_tab()
    source_name = st.session_state.get("source_name")
    breadcrumb = f"Pair Finder > {active_tab}"
    if source_name:
        breadcrumb += f" > {source_name}"
    st.markdown(f"**{breadcrumb}**")


def require_index():
    """
    Return the loaded index, or show a hint and return None.

    Used at the top of every tab that needs assignment data.
    """
    index = st.session_state.get("index")
    if index is None:
        st.info("No assignment data loaded. Use Data Tools to upload a file.")
        return None
    return index
