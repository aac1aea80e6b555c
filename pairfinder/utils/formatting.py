"""
Formatting utility functions for the pair finder.

This module renders pair search results as text and tables.
"""

from typing import List

import pandas as pd

from pairfinder.models import EmployeeProjectIndex, PairResult


def format_pair_report(result: PairResult) -> str:
    """
    Format a pair result as a plain-text report.

    The first line is "<employee a>, <employee b>, <total days>", followed by
    one "<project>, <days>" line per shared project.

    Args:
        result: Result of the pair search

    Returns:
        Report text, newline separated
    """
    lines: List[str] = [f"{result.employee_a}, {result.employee_b}, {result.total_days}"]
    for item in result.per_project:
        lines.append(f"{item.project_id}, {item.days}")
    return "\n".join(lines)


def pair_result_to_dataframe(result: PairResult) -> pd.DataFrame:
    """Per-project breakdown as a DataFrame with Project and Days columns."""
    if not result.per_project:
        return pd.DataFrame({"Project": pd.Series(dtype=str), "Days": pd.Series(dtype=int)})

    return pd.DataFrame(
        [{"Project": item.project_id, "Days": item.days} for item in result.per_project]
    )


def format_days(days: int) -> str:
    """Format a day count for display, e.g. "1 day" or "16 days"."""
    return f"{days:,} day" if days == 1 else f"{days:,} days"


def index_to_dataframe(index: EmployeeProjectIndex) -> pd.DataFrame:
    """
    Flatten an employee/project index into one row per assignment.

    Args:
        index: Employee id -> project id -> DateRange

    Returns:
        DataFrame with Employee, Project, Start, End and Duration columns
    """
    rows = [
        {
            "Employee": employee_id,
            "Project": project_id,
            "Start": pd.to_datetime(date_range.start),
            "End": pd.to_datetime(date_range.end),
        }
        for employee_id, projects in index.items()
        for project_id, date_range in projects.items()
    ]

    if not rows:
        return pd.DataFrame(columns=["Employee", "Project", "Start", "End", "Duration"])

    df = pd.DataFrame(rows)
    df["Duration"] = (df["End"] - df["Start"]).dt.days
    return df
