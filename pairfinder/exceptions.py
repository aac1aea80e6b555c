"""
Exceptions raised by the pair finder.

Ingestion and parsing failures surface before any overlap is computed;
the overlap computations themselves never raise.
"""

from typing import Optional


class PairFinderError(Exception):
    """Base class for every error raised by the application."""


class EmptyInputError(PairFinderError):
    """Raised when the index holds fewer than two employees."""

    def __init__(self, employee_count: int):
        self.employee_count = employee_count
        super().__init__(
            f"At least two employees are required to form a pair, got {employee_count}."
        )


class IngestionError(PairFinderError):
    """Raised when the assignment source cannot be read."""


class RecordFormatError(IngestionError):
    """Raised for a row that does not have the expected shape."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"Line {line_number}: {message}"
        super().__init__(message)


class DuplicateRecordError(IngestionError):
    """Raised when duplicates are rejected and an (employee, project) pair repeats."""

    def __init__(self, employee_id: str, project_id: str, line_number: Optional[int] = None):
        self.employee_id = employee_id
        self.project_id = project_id
        self.line_number = line_number
        location = f"Line {line_number}: " if line_number is not None else ""
        super().__init__(
            f"{location}duplicate assignment of employee '{employee_id}' "
            f"to project '{project_id}'."
        )


class DateParseError(PairFinderError, ValueError):
    """Raised when a date string matches none of the supported layouts."""

    def __init__(self, text: str, line_number: Optional[int] = None):
        self.text = text
        self.line_number = line_number
        location = f"Line {line_number}: " if line_number is not None else ""
        super().__init__(f"{location}unrecognised date '{text}'.")
