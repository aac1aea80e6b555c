"""
Domain models for the pair finder.

This module defines the date range value type, the read-only
employee/project index, and the result of a pair search.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive calendar interval [start, end].

    Inverted ranges (end before start) are allowed and simply never overlap.
    """

    start: date
    end: date

    def overlap_days(self, other: "DateRange") -> int:
        """Whole days shared with another range, clamped at zero."""
        start = max(self.start, other.start)
        end = min(self.end, other.end)
        return max(0, (end - start).days)


class DuplicatePolicy(str, Enum):
    """How ingestion resolves repeated (employee, project) records."""

    LAST_WRITE_WINS = "last_write_wins"
    FIRST_WRITE_WINS = "first_write_wins"
    MERGE = "merge"
    REJECT = "reject"


@dataclass(frozen=True)
class AssignmentRecord:
    """One row of the assignment source. ``date_to`` is None for open-ended work."""

    employee_id: str
    project_id: str
    date_from: date
    date_to: Optional[date]
    line_number: Optional[int] = None


class EmployeeProjectIndex(Mapping):
    """
    Read-only mapping of employee id -> (project id -> DateRange).

    Employees iterate in first-insertion order, as do the projects of each
    employee. The pair search relies on this order for its tie-break.
    """

    __slots__ = ("_employees",)

    def __init__(self, employees: Mapping):
        frozen = {
            employee_id: MappingProxyType(dict(projects))
            for employee_id, projects in employees.items()
        }
        self._employees = MappingProxyType(frozen)

    @classmethod
    def from_mapping(cls, mapping: Mapping) -> "EmployeeProjectIndex":
        """Build an index from a plain nested mapping, copying it."""
        return cls(mapping)

    def __getitem__(self, employee_id: str) -> Mapping:
        return self._employees[employee_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._employees)

    def __len__(self) -> int:
        return len(self._employees)

    def __repr__(self) -> str:
        return f"EmployeeProjectIndex({len(self)} employees)"

    @property
    def employees(self) -> List[str]:
        return list(self._employees)

    def projects_of(self, employee_id: str) -> Mapping:
        return self._employees[employee_id]

    def project_count(self) -> int:
        return sum(len(projects) for projects in self._employees.values())


@dataclass(frozen=True)
class ProjectOverlap:
    project_id: str
    days: int


@dataclass(frozen=True)
class PairResult:
    """Winning pair of employees and the shared projects behind their total."""

    employee_a: str
    employee_b: str
    total_days: int
    per_project: Tuple[ProjectOverlap, ...] = field(default_factory=tuple)

    @property
    def has_overlap(self) -> bool:
        """False when the pair was reported without any shared time."""
        return self.total_days > 0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "employee_a": self.employee_a,
            "employee_b": self.employee_b,
            "total_days": self.total_days,
            "per_project": [
                {"project_id": item.project_id, "days": item.days}
                for item in self.per_project
            ],
        }
