"""
Collaboration matrix UI module.
"""

import plotly.express as px
import streamlit as st

from pairfinder.services.config_service import load_display_preferences
from pairfinder.services.pair_service import build_collaboration_matrix
from pairfinder.utils.ui_components import display_action_bar, require_index


def display_collaboration_tab():
    """Display a heatmap of days worked together for every employee pair."""
    display_action_bar()
    st.subheader("Collaboration Matrix")

    index = require_index()
    if index is None:
        return

    if len(index) < 2:
        st.info("At least two employees are needed to compare pairs.")
        return

    chart_height = load_display_preferences(st.session_state.settings).get(
        "chart_height", 500
    )
    matrix = build_collaboration_matrix(index)

    heatmap = px.imshow(
        matrix.values,
        labels=dict(x="Employee", y="Employee", color="Days Together"),
        x=[str(employee_id) for employee_id in matrix.columns],
        y=[str(employee_id) for employee_id in matrix.index],
        color_continuous_scale="YlGnBu",
        title="Days Worked Together",
        height=chart_height,
        text_auto=True,
    )
    heatmap.update_layout(
        xaxis=dict(type="category"),
        yaxis=dict(type="category"),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=10, r=10, t=40, b=40),
    )
    st.plotly_chart(heatmap, use_container_width=True)

    st.caption("The diagonal is zero; an employee is never paired with themselves.")
