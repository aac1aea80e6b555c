"""
Settings UI module.

This module provides the UI components for application settings and configuration.
"""

import streamlit as st

from pairfinder.models import DuplicatePolicy
from pairfinder.services.config_service import (
    load_as_of_date,
    load_display_preferences,
    load_duplicate_policy,
    load_open_end_tokens,
    load_reader_settings,
    save_as_of_date,
    save_display_preferences,
    save_duplicate_policy,
    save_reader_settings,
)
from pairfinder.services.session_service import reload_settings
from pairfinder.utils.ui_components import display_action_bar

POLICY_LABELS = {
    DuplicatePolicy.LAST_WRITE_WINS: "Last record wins",
    DuplicatePolicy.FIRST_WRITE_WINS: "First record wins",
    DuplicatePolicy.MERGE: "Merge into one span",
    DuplicatePolicy.REJECT: "Reject the file",
}


def display_settings_tab():
    """Display settings and configuration UI."""
    display_action_bar()
    st.subheader("Application Settings")

    st.info(
        "Changes apply to the next file you load. Reload the data to apply them "
        "to the current assignments."
    )

    settings_tabs = st.tabs(["Import Settings", "Display Preferences"])

    with settings_tabs[0]:
        display_import_settings()

    with settings_tabs[1]:
        display_display_preferences()


def display_import_settings():
    """Display settings that control how assignment files are read."""
    settings = st.session_state.settings

    with st.expander("File Format", expanded=True):
        reader = load_reader_settings(settings)
        col1, col2 = st.columns(2)
        with col1:
            delimiter = st.text_input("Delimiter", value=reader["delimiter"], max_chars=1)
        with col2:
            has_header = st.checkbox("First line is a header", value=reader["has_header"])

        tokens = st.text_input(
            "Open-ended end date markers (comma separated)",
            value=", ".join(load_open_end_tokens(settings)),
        )

        if st.button("Save File Format", key="save_file_format"):
            open_end_tokens = [t.strip() for t in tokens.split(",") if t.strip()]
            save_reader_settings(delimiter or ",", has_header, open_end_tokens)
            reload_settings()
            st.success("File format settings saved.")

    with st.expander("Duplicate Assignments", expanded=True):
        st.caption(
            "What to do when the same employee appears on the same project more than once."
        )
        current = load_duplicate_policy(settings)
        policies = list(POLICY_LABELS)
        policy = st.radio(
            "Duplicate policy",
            options=policies,
            index=policies.index(current),
            format_func=lambda p: POLICY_LABELS[p],
        )
        if st.button("Save Duplicate Policy", key="save_duplicate_policy"):
            save_duplicate_policy(policy)
            reload_settings()
            st.success("Duplicate policy saved.")

    with st.expander("Open-ended Assignments", expanded=True):
        configured = settings.get("as_of_date")
        use_fixed = st.checkbox("Use a fixed date instead of today", value=bool(configured))
        as_of_date = st.date_input(
            "End date for ongoing assignments",
            value=load_as_of_date(settings),
            disabled=not use_fixed,
        )
        if st.button("Save End Date", key="save_as_of_date"):
            save_as_of_date(as_of_date if use_fixed else None)
            reload_settings()
            st.success("End date setting saved.")


def display_display_preferences():
    """Display chart preferences."""
    preferences = load_display_preferences(st.session_state.settings)

    chart_height = st.slider(
        "Chart Height",
        min_value=300,
        max_value=1000,
        value=int(preferences.get("chart_height", 500)),
        step=50,
    )

    if st.button("Save Display Preferences", key="save_display_preferences"):
        preferences["chart_height"] = chart_height
        save_display_preferences(preferences)
        reload_settings()
        st.success("Display preferences saved.")
