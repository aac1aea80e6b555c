"""
Tests for result formatting.
"""

from datetime import date

from pairfinder.models import DateRange, EmployeeProjectIndex, PairResult, ProjectOverlap
from pairfinder.utils.formatting import (
    format_days,
    format_pair_report,
    index_to_dataframe,
    pair_result_to_dataframe,
)


def test_pair_report_lines():
    result = PairResult(
        "143", "218", 40, (ProjectOverlap("10", 5), ProjectOverlap("12", 35))
    )
    assert format_pair_report(result) == "143, 218, 40\n10, 5\n12, 35"


def test_pair_report_without_projects():
    assert format_pair_report(PairResult("E1", "E2", 0)) == "E1, E2, 0"


def test_pair_result_dataframe():
    df = pair_result_to_dataframe(PairResult("E1", "E2", 16, (ProjectOverlap("P1", 16),)))
    assert df.to_dict("records") == [{"Project": "P1", "Days": 16}]


def test_empty_pair_result_dataframe():
    df = pair_result_to_dataframe(PairResult("E1", "E2", 0))
    assert df.empty
    assert list(df.columns) == ["Project", "Days"]


def test_format_days():
    assert format_days(1) == "1 day"
    assert format_days(16) == "16 days"
    assert format_days(1500) == "1,500 days"


def test_index_to_dataframe():
    index = EmployeeProjectIndex.from_mapping(
        {"E1": {"P1": DateRange(date(2021, 1, 1), date(2021, 1, 31))}}
    )
    df = index_to_dataframe(index)
    assert df[["Employee", "Project", "Duration"]].to_dict("records") == [
        {"Employee": "E1", "Project": "P1", "Duration": 30}
    ]


def test_empty_index_to_dataframe():
    df = index_to_dataframe(EmployeeProjectIndex.from_mapping({}))
    assert df.empty
