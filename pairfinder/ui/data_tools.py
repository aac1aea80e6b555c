"""
Data Tools UI module.

This module provides the UI components for loading assignment data.
"""

import streamlit as st

from pairfinder.exceptions import PairFinderError
from pairfinder.services.config_service import load_as_of_date
from pairfinder.services.ingestion_service import load_index
from pairfinder.services.session_service import (
    SAMPLE_DATA_FILE,
    clear_index,
    store_index,
)
from pairfinder.utils.formatting import index_to_dataframe
from pairfinder.utils.logger import get_logger
from pairfinder.utils.ui_components import display_action_bar

logger = get_logger(__name__)


def display_import_data_tab():
    """Display the data import tab."""
    display_action_bar()
    st.subheader("Data Tools")

    st.info(
        "Load a delimited file with one assignment per line: "
        "EmpID, ProjectID, DateFrom, DateTo. Use NULL as DateTo for ongoing work."
    )

    source = st.radio(
        "Data source",
        options=["Upload file", "Sample data"],
        horizontal=True,
    )

    if source == "Upload file":
        uploaded_file = st.file_uploader("Assignment file", type=["csv", "txt"])
        if uploaded_file is not None and st.button("Load Assignments", type="primary"):
            _load_assignments(uploaded_file, uploaded_file.name)
    else:
        if st.button("Load Sample Data", type="primary"):
            _load_assignments(SAMPLE_DATA_FILE, "sample data")

    if st.session_state.index is not None:
        _display_loaded_index()


def _load_assignments(source, source_name: str) -> None:
    """Build the index from a source and keep it in session state."""
    settings = st.session_state.settings
    as_of_date = load_as_of_date(settings)

    try:
        index = load_index(source, as_of_date, settings)
    except PairFinderError as e:
        logger.exception(f"Failed to load {source_name}")
        clear_index()
        st.error(f"Error loading assignments: {str(e)}")
        return

    store_index(index, source_name, as_of_date)
    st.success(
        f"Loaded {index.project_count()} assignments for {len(index)} employees "
        f"from {source_name}."
    )


def _display_loaded_index() -> None:
    """Show the assignments currently held in session state."""
    index = st.session_state.index
    st.markdown("### Loaded Assignments")
    st.caption(
        f"Open-ended assignments end on {st.session_state.as_of_date.isoformat()}."
    )

    df = index_to_dataframe(index)
    if df.empty:
        st.info("The file contained no assignments.")
        return

    display_df = df.copy()
    display_df["Start"] = display_df["Start"].dt.strftime("%Y-%m-%d")
    display_df["End"] = display_df["End"].dt.strftime("%Y-%m-%d")
    st.dataframe(display_df, use_container_width=True, hide_index=True)

    if st.button("Clear Data", key="clear_index"):
        clear_index()
        st.rerun()
