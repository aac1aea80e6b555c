"""
Best pair UI module.

This module displays the pair of employees who worked together the longest.
"""

import pandas as pd
import plotly.express as px
import streamlit as st

from pairfinder.exceptions import EmptyInputError
from pairfinder.models import EmployeeProjectIndex, PairResult
from pairfinder.services.config_service import load_display_preferences
from pairfinder.services.pair_service import find_best_pair, rank_pairs
from pairfinder.utils.formatting import (
    format_days,
    format_pair_report,
    pair_result_to_dataframe,
)
from pairfinder.utils.ui_components import display_action_bar, require_index


def display_best_pair_tab():
    """Display the best pair and its per-project breakdown."""
    display_action_bar()
    st.subheader("Longest Working Pair")

    index = require_index()
    if index is None:
        return

    try:
        result = find_best_pair(index)
    except EmptyInputError as e:
        st.warning(str(e))
        return

    _display_pair_summary(result)

    if not result.has_overlap:
        st.info(
            "No two employees share any time on a common project. "
            "The first pair in file order is shown."
        )
        return

    chart_height = load_display_preferences(st.session_state.settings).get(
        "chart_height", 500
    )

    tabs = st.tabs(["Project Breakdown", "Timeline", "Top Pairs"])

    with tabs[0]:
        _display_project_breakdown(result, chart_height)

    with tabs[1]:
        _display_shared_timeline(index, result, chart_height)

    with tabs[2]:
        _display_top_pairs(index)

    st.download_button(
        "Download Report",
        data=format_pair_report(result),
        file_name="best_pair.txt",
        mime="text/plain",
    )


def _display_pair_summary(result: PairResult) -> None:
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Employee", result.employee_a)
    with col2:
        st.metric("Employee", result.employee_b)
    with col3:
        st.metric("Days Together", format_days(result.total_days))
    with col4:
        st.metric("Shared Projects", len(result.per_project))


def _display_project_breakdown(result: PairResult, chart_height: int) -> None:
    df = pair_result_to_dataframe(result)
    st.dataframe(df, use_container_width=True, hide_index=True)

    fig = px.bar(
        df,
        x="Project",
        y="Days",
        title="Days Worked Together per Project",
        labels={"Project": "Project", "Days": "Days"},
        height=chart_height,
    )
    fig.update_xaxes(type="category")
    st.plotly_chart(fig, use_container_width=True)


def _display_shared_timeline(
    index: EmployeeProjectIndex, result: PairResult, chart_height: int
) -> None:
    """Gantt chart of both employees' assignments on their shared projects."""
    rows = []
    for item in result.per_project:
        for employee_id in (result.employee_a, result.employee_b):
            date_range = index[employee_id][item.project_id]
            rows.append(
                {
                    "Project": f"Project {item.project_id}",
                    "Employee": employee_id,
                    "Start": pd.to_datetime(date_range.start),
                    "End": pd.to_datetime(date_range.end),
                }
            )

    fig = px.timeline(
        pd.DataFrame(rows),
        x_start="Start",
        x_end="End",
        y="Project",
        color="Employee",
        title="Shared Project Timeline",
        height=chart_height,
    )
    fig.update_layout(barmode="group")
    fig.update_yaxes(autorange="reversed")
    st.plotly_chart(fig, use_container_width=True)


def _display_top_pairs(index: EmployeeProjectIndex) -> None:
    limit = st.slider("Pairs to show", min_value=5, max_value=50, value=10, step=5)
    df = rank_pairs(index, limit=limit)
    if df.empty:
        st.info("No pairs share any time.")
        return
    st.dataframe(df, use_container_width=True, hide_index=True)
