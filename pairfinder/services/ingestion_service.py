"""
Ingestion service for the pair finder.

Reads assignment files (EmpID, ProjectID, DateFrom, DateTo) and builds the
employee/project index the pair search works on.
"""

import csv
import io
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from pairfinder.exceptions import (
    DuplicateRecordError,
    IngestionError,
    RecordFormatError,
)
from pairfinder.models import (
    AssignmentRecord,
    DateRange,
    DuplicatePolicy,
    EmployeeProjectIndex,
)
from pairfinder.services.config_service import (
    load_date_formats,
    load_duplicate_policy,
    load_open_end_tokens,
    load_reader_settings,
    load_settings,
)
from pairfinder.utils.date_parsing import parse_date
from pairfinder.utils.logger import get_logger

logger = get_logger(__name__)

RECORD_COLUMNS = ["EmpID", "ProjectID", "DateFrom", "DateTo"]


def _read_text(source: Any) -> str:
    """Read a path or an uploaded/file-like object into text."""
    try:
        if hasattr(source, "read"):
            content = source.read()
        else:
            with open(source, "rb") as file:
                content = file.read()
        if isinstance(content, bytes):
            content = content.decode("utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise IngestionError(f"Cannot read assignment data: {e}") from e
    return content


def _field_counts(text: str, delimiter: str) -> List[int]:
    """
    Number of fields on each physical line.

    Counted from the raw text because pandas pads short rows with a fill
    value that differs between releases.
    """
    reader = csv.reader(io.StringIO(text), delimiter=delimiter, skipinitialspace=True)
    return [len(row) for row in reader]


def _read_frame(text: str, delimiter: str, has_header: bool) -> pd.DataFrame:
    try:
        return pd.read_csv(
            io.StringIO(text),
            sep=delimiter,
            header=0 if has_header else None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
            skipinitialspace=True,
            index_col=False,
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame(columns=RECORD_COLUMNS)
    except pd.errors.ParserError as e:
        raise IngestionError(f"Cannot read assignment data: {e}") from e


def _cell(value: Any) -> str:
    if value is None or pd.isna(value):
        return ""
    return str(value).strip()


def read_assignment_records(
    source: Any,
    delimiter: str = ",",
    has_header: bool = False,
    open_end_tokens: Iterable[str] = ("NULL",),
    date_formats: Optional[Iterable[str]] = None,
) -> List[AssignmentRecord]:
    """
    Read assignment records from a delimited file.

    Args:
        source: Path or file-like object holding the delimited data
        delimiter: Field separator
        has_header: Whether the first line is a header row
        open_end_tokens: Values of DateTo meaning the assignment is ongoing
        date_formats: Date layouts to try, in order (see DATE_FORMATS)

    Returns:
        Records in file order

    Raises:
        IngestionError: If the source cannot be read
        RecordFormatError: If a row is missing fields
        DateParseError: If a date cannot be parsed
    """
    text = _read_text(source)
    df = _read_frame(text, delimiter, has_header)
    field_counts = _field_counts(text, delimiter)

    open_tokens = {token.strip().upper() for token in open_end_tokens}
    first_line = 2 if has_header else 1
    records = []

    for offset, row in enumerate(df.itertuples(index=False, name=None)):
        line_number = first_line + offset
        cells = [_cell(value) for value in row[: len(RECORD_COLUMNS)]]
        if not any(cells):
            continue

        field_count = (
            field_counts[line_number - 1] if line_number <= len(field_counts) else 0
        )
        if field_count != len(RECORD_COLUMNS):
            raise RecordFormatError(
                f"expected {len(RECORD_COLUMNS)} fields, found {field_count}",
                line_number=line_number,
            )

        cells += [""] * (len(RECORD_COLUMNS) - len(cells))
        employee_id, project_id, raw_from, raw_to = cells
        if not employee_id or not project_id or not raw_from:
            raise RecordFormatError(
                "employee id, project id and start date are required",
                line_number=line_number,
            )

        date_from = parse_date(raw_from, date_formats, line_number)
        if not raw_to or raw_to.upper() in open_tokens:
            date_to = None
        else:
            date_to = parse_date(raw_to, date_formats, line_number)

        records.append(
            AssignmentRecord(
                employee_id=employee_id,
                project_id=project_id,
                date_from=date_from,
                date_to=date_to,
                line_number=line_number,
            )
        )

    return records


def _resolve_duplicate(
    existing: DateRange,
    incoming: DateRange,
    record: AssignmentRecord,
    policy: DuplicatePolicy,
) -> DateRange:
    if policy is DuplicatePolicy.REJECT:
        raise DuplicateRecordError(
            record.employee_id, record.project_id, record.line_number
        )

    logger.warning(
        f"Duplicate assignment {record.employee_id}/{record.project_id} "
        f"on line {record.line_number} resolved with {policy.value}"
    )
    if policy is DuplicatePolicy.FIRST_WRITE_WINS:
        return existing
    if policy is DuplicatePolicy.MERGE:
        return DateRange(
            start=min(existing.start, incoming.start),
            end=max(existing.end, incoming.end),
        )
    return incoming


def build_index(
    records: Iterable[AssignmentRecord],
    today: date,
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.LAST_WRITE_WINS,
) -> EmployeeProjectIndex:
    """
    Build the employee/project index from assignment records.

    Args:
        records: Records in source order
        today: Date substituted for open-ended assignments
        duplicate_policy: How to resolve a repeated (employee, project) record

    Returns:
        Read-only index in first-appearance order

    Raises:
        DuplicateRecordError: If the policy is REJECT and a pair repeats
    """
    policy = DuplicatePolicy(duplicate_policy)
    employees: Dict[str, Dict[str, DateRange]] = {}
    record_count = 0

    for record in records:
        record_count += 1
        incoming = DateRange(
            start=record.date_from,
            end=record.date_to if record.date_to is not None else today,
        )
        projects = employees.setdefault(record.employee_id, {})
        existing = projects.get(record.project_id)
        if existing is None:
            projects[record.project_id] = incoming
        else:
            projects[record.project_id] = _resolve_duplicate(
                existing, incoming, record, policy
            )

    index = EmployeeProjectIndex.from_mapping(employees)
    logger.info(
        f"Built index from {record_count} records: {len(index)} employees, "
        f"{index.project_count()} assignments"
    )
    return index


def load_index(
    source: Any, today: date, settings: Optional[Dict[str, Any]] = None
) -> EmployeeProjectIndex:
    """Read an assignment file and build its index using the given settings."""
    settings = settings if settings is not None else load_settings()
    reader = load_reader_settings(settings)

    records = read_assignment_records(
        source,
        delimiter=reader["delimiter"],
        has_header=reader["has_header"],
        open_end_tokens=load_open_end_tokens(settings),
        date_formats=load_date_formats(settings),
    )
    return build_index(records, today, load_duplicate_policy(settings))
