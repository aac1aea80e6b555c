"""
Session management service to handle Streamlit session state.
"""

import streamlit as st

from pairfinder.services.config_service import load_settings
from pairfinder.utils.logger import set_log_level

SAMPLE_DATA_FILE = "data/sample_assignments.csv"


def initialize_session_state():
    """Initialize all session state variables used throughout the application."""
    if "settings" not in st.session_state:
        st.session_state.settings = load_settings()
        set_log_level(st.session_state.settings.get("log_level", "INFO"))

    # Index built by the Data Tools tab; None until a file is loaded
    if "index" not in st.session_state:
        st.session_state.index = None

    if "source_name" not in st.session_state:
        st.session_state.source_name = None

    if "as_of_date" not in st.session_state:
        st.session_state.as_of_date = None

    if "active_tab" not in st.session_state:
        st.session_state.active_tab = "Data Tools"


def store_index(index, source_name: str, as_of_date) -> None:
    """Keep a freshly built index in session state."""
    st.session_state.index = index
    st.session_state.source_name = source_name
    st.session_state.as_of_date = as_of_date


def clear_index() -> None:
    st.session_state.index = None
    st.session_state.source_name = None
    st.session_state.as_of_date = None


def reload_settings() -> None:
    """Re-read settings after they were changed on disk."""
    st.session_state.settings = load_settings()
    set_log_level(st.session_state.settings.get("log_level", "INFO"))


def get_active_tab() -> str:
    """Get the currently active tab from session state."""
    return st.session_state.get("active_tab", "Data Tools")


def set_active_tab(tab_name: str):
    """Set the active tab in session state."""
    st.session_state.active_tab = tab_name
