"""
Pair search service for the pair finder.

This module enumerates employee pairs and finds the pair that spent the
most time together on shared projects.
"""

from itertools import combinations
from typing import Iterator, Tuple

import numpy as np
import pandas as pd

from pairfinder.exceptions import EmptyInputError
from pairfinder.models import EmployeeProjectIndex, PairResult
from pairfinder.services.overlap_service import (
    common_duration,
    shared_project_overlaps,
)
from pairfinder.utils.logger import get_logger

logger = get_logger(__name__)


def iter_employee_pairs(index: EmployeeProjectIndex) -> Iterator[Tuple[str, str]]:
    """
    Yield every unordered pair of distinct employees exactly once.

    Pairs follow the index's insertion order: (e0, e1), (e0, e2), ...,
    (e1, e2), ... This order decides which pair wins a tie.
    """
    return combinations(index.employees, 2)


def pair_sort_key(duration: int, position: int) -> Tuple[int, int]:
    """
    Total-order key for a pair: longer duration first, then earlier position.

    Taking the minimum of this key over any partition of the pairs gives the
    same winner as the sequential first-seen scan.
    """
    return (-duration, position)


def find_best_pair(index: EmployeeProjectIndex) -> PairResult:
    """
    Find the pair of employees with the longest common project duration.

    Args:
        index: Employee id -> project id -> DateRange

    Returns:
        PairResult for the winning pair. When no pair shares any time the first
        enumerated pair is reported with a total of 0 and no projects.

    Raises:
        EmptyInputError: If the index holds fewer than two employees
    """
    if len(index) < 2:
        raise EmptyInputError(len(index))

    best_pair = None
    max_duration = 0

    for employee_a, employee_b in iter_employee_pairs(index):
        if best_pair is None:
            best_pair = (employee_a, employee_b)

        duration = common_duration(index[employee_a], index[employee_b])
        # Ties keep the pair seen first.
        if duration > max_duration:
            best_pair = (employee_a, employee_b)
            max_duration = duration

    employee_a, employee_b = best_pair
    per_project = shared_project_overlaps(index[employee_a], index[employee_b])

    logger.info(
        f"Best pair {employee_a}/{employee_b}: {max_duration} days "
        f"across {len(per_project)} projects"
    )

    return PairResult(
        employee_a=employee_a,
        employee_b=employee_b,
        total_days=max_duration,
        per_project=tuple(per_project),
    )


def build_collaboration_matrix(index: EmployeeProjectIndex) -> pd.DataFrame:
    """
    Build a symmetric matrix of common durations between all employees.

    Args:
        index: Employee id -> project id -> DateRange

    Returns:
        DataFrame indexed and labelled by employee id, with zeros on the diagonal
    """
    employees = index.employees
    positions = {employee_id: i for i, employee_id in enumerate(employees)}
    matrix = np.zeros((len(employees), len(employees)), dtype=np.int64)

    for employee_a, employee_b in iter_employee_pairs(index):
        duration = common_duration(index[employee_a], index[employee_b])
        i, j = positions[employee_a], positions[employee_b]
        matrix[i, j] = duration
        matrix[j, i] = duration

    return pd.DataFrame(matrix, index=employees, columns=employees)


def rank_pairs(index: EmployeeProjectIndex, limit: int = 10) -> pd.DataFrame:
    """
    List the pairs with positive common duration, best first.

    Ordering uses ``pair_sort_key`` so the first row always matches
    ``find_best_pair`` when any pair overlaps.
    """
    rows = []
    for position, (employee_a, employee_b) in enumerate(iter_employee_pairs(index)):
        duration = common_duration(index[employee_a], index[employee_b])
        if duration > 0:
            rows.append(
                {
                    "Employee A": employee_a,
                    "Employee B": employee_b,
                    "Days": duration,
                    "_key": pair_sort_key(duration, position),
                }
            )

    if not rows:
        return pd.DataFrame(columns=["Employee A", "Employee B", "Days"])

    rows.sort(key=lambda row: row["_key"])
    df = pd.DataFrame(rows[:limit]).drop(columns=["_key"])
    return df.reset_index(drop=True)
