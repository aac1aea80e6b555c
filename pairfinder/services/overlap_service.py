"""
Overlap service for the pair finder.

Pure computations over date ranges and employee project sets. Nothing in
this module reads the clock, logs or raises.
"""

from typing import List, Mapping

from pairfinder.models import DateRange, ProjectOverlap


def overlap_days(first: DateRange, second: DateRange) -> int:
    """
    Number of whole days two ranges share.

    Args:
        first: First date range
        second: Second date range

    Returns:
        Days between the later start and the earlier end, or 0 when the
        ranges do not intersect
    """
    return first.overlap_days(second)


def _shared_project_ids(
    projects_a: Mapping[str, DateRange], projects_b: Mapping[str, DateRange]
) -> List[str]:
    # Walk the smaller side and look up keys in the larger one.
    if len(projects_b) < len(projects_a):
        smaller, larger = projects_b, projects_a
    else:
        smaller, larger = projects_a, projects_b
    return [project_id for project_id in smaller if project_id in larger]


def common_duration(
    projects_a: Mapping[str, DateRange], projects_b: Mapping[str, DateRange]
) -> int:
    """
    Total days two employees spent on the same projects.

    Args:
        projects_a: Project id -> DateRange for the first employee
        projects_b: Project id -> DateRange for the second employee

    Returns:
        Sum of the per-project overlaps over the projects both employees share
    """
    return sum(
        overlap_days(projects_a[project_id], projects_b[project_id])
        for project_id in _shared_project_ids(projects_a, projects_b)
    )


def shared_project_overlaps(
    projects_a: Mapping[str, DateRange], projects_b: Mapping[str, DateRange]
) -> List[ProjectOverlap]:
    """Per-project overlaps with positive duration, sorted by project id."""
    overlaps = []
    for project_id in _shared_project_ids(projects_a, projects_b):
        days = overlap_days(projects_a[project_id], projects_b[project_id])
        if days > 0:
            overlaps.append(ProjectOverlap(project_id=project_id, days=days))

    return sorted(overlaps, key=lambda item: item.project_id)
