from datetime import date

import pytest

from pairfinder.models import DateRange, EmployeeProjectIndex


def dr(start: str, end: str) -> DateRange:
    return DateRange(date.fromisoformat(start), date.fromisoformat(end))


@pytest.fixture
def three_employee_index():
    """E1/E2 and E2/E3 both share 16 days; E1/E3 share 5."""
    return EmployeeProjectIndex.from_mapping(
        {
            "E1": {
                "P1": dr("2021-01-01", "2021-01-31"),
                "P4": dr("2021-06-01", "2021-06-06"),
            },
            "E2": {
                "P1": dr("2021-01-15", "2021-02-15"),
                "P2": dr("2021-03-01", "2021-03-17"),
            },
            "E3": {
                "P2": dr("2021-03-01", "2021-03-31"),
                "P4": dr("2021-06-01", "2021-06-30"),
            },
        }
    )


@pytest.fixture
def settings_file(tmp_path):
    return str(tmp_path / "settings.json")
