"""
Tests for reading assignment files and building the index.
"""

import io
from datetime import date

import pytest

from pairfinder.exceptions import (
    DateParseError,
    DuplicateRecordError,
    IngestionError,
    RecordFormatError,
)
from pairfinder.models import AssignmentRecord, DateRange, DuplicatePolicy
from pairfinder.services.config_service import create_default_settings
from pairfinder.services.ingestion_service import (
    build_index,
    load_index,
    read_assignment_records,
)
from pairfinder.services.pair_service import find_best_pair

TODAY = date(2024, 6, 30)


def csv(text: str) -> io.StringIO:
    return io.StringIO(text)


def record(employee_id, project_id, start, end, line_number=None):
    return AssignmentRecord(
        employee_id=employee_id,
        project_id=project_id,
        date_from=date.fromisoformat(start),
        date_to=date.fromisoformat(end) if end else None,
        line_number=line_number,
    )


class TestReadAssignmentRecords:
    def test_reads_rows_in_order(self):
        records = read_assignment_records(
            csv("143, 12, 2013-11-01, 2014-01-05\n218, 10, 2012-05-16, NULL\n")
        )
        assert records == [
            record("143", "12", "2013-11-01", "2014-01-05", 1),
            record("218", "10", "2012-05-16", None, 2),
        ]

    def test_mixed_date_layouts(self):
        records = read_assignment_records(
            csv("1,A,2013/12/01,15/02/2014\n2,A,03-15-2015,09/30/2016\n")
        )
        assert records[0].date_from == date(2013, 12, 1)
        assert records[0].date_to == date(2014, 2, 15)
        assert records[1].date_from == date(2015, 3, 15)
        assert records[1].date_to == date(2016, 9, 30)

    def test_open_end_tokens_are_case_insensitive(self):
        records = read_assignment_records(
            csv("1,A,2020-01-01,null\n2,A,2020-01-01,\n3,A,2020-01-01,ongoing\n"),
            open_end_tokens=["NULL", "Ongoing"],
        )
        assert [r.date_to for r in records] == [None, None, None]

    def test_header_and_delimiter(self):
        records = read_assignment_records(
            csv("EmpID;ProjectID;DateFrom;DateTo\n1;A;2020-01-01;2020-02-01\n"),
            delimiter=";",
            has_header=True,
        )
        assert records == [record("1", "A", "2020-01-01", "2020-02-01", 2)]

    def test_blank_lines_are_skipped_and_counted(self):
        records = read_assignment_records(
            csv("1,A,2020-01-01,2020-02-01\n\n2,A,2020-01-01,2020-02-01\n")
        )
        assert [r.line_number for r in records] == [1, 3]

    def test_empty_source(self):
        assert read_assignment_records(csv("")) == []

    def test_too_few_columns(self):
        with pytest.raises(RecordFormatError):
            read_assignment_records(csv("1,A,2020-01-01\n2,B,2020-01-01\n"))

    def test_short_row_reports_line(self):
        with pytest.raises(RecordFormatError) as exc_info:
            read_assignment_records(csv("1,A,2020-01-01,NULL\n2,B,2020-01-01\n"))
        assert exc_info.value.line_number == 2

    def test_short_row_after_header_is_not_an_open_end(self):
        with pytest.raises(RecordFormatError) as exc_info:
            read_assignment_records(
                csv("EmpID,ProjectID,DateFrom,DateTo\n1,A,2020-01-01,NULL\n2,B,2020-01-01\n"),
                has_header=True,
            )
        assert exc_info.value.line_number == 3

    def test_long_row_is_rejected(self):
        with pytest.raises(IngestionError):
            read_assignment_records(
                csv("1,A,2020-01-01,NULL\n2,B,2020-01-01,2020-02-01,extra\n")
            )

    def test_reads_uploaded_bytes(self):
        records = read_assignment_records(io.BytesIO(b"1,A,2020-01-01,NULL\n"))
        assert records == [record("1", "A", "2020-01-01", None, 1)]

    def test_missing_employee_id(self):
        with pytest.raises(RecordFormatError) as exc_info:
            read_assignment_records(csv("1,A,2020-01-01,NULL\n,B,2020-01-01,NULL\n"))
        assert exc_info.value.line_number == 2

    def test_unparsable_date_reports_line(self):
        with pytest.raises(DateParseError) as exc_info:
            read_assignment_records(csv("1,A,2020-01-01,NULL\n2,B,someday,NULL\n"))
        assert exc_info.value.line_number == 2
        assert exc_info.value.text == "someday"

    def test_missing_file(self, tmp_path):
        with pytest.raises(IngestionError):
            read_assignment_records(str(tmp_path / "missing.csv"))

    def test_reads_from_path(self, tmp_path):
        path = tmp_path / "assignments.csv"
        path.write_text("1,A,2020-01-01,2020-02-01\n")
        assert len(read_assignment_records(str(path))) == 1


class TestBuildIndex:
    def test_open_end_uses_today(self):
        index = build_index([record("1", "A", "2024-06-01", None)], today=TODAY)
        assert index["1"]["A"] == DateRange(date(2024, 6, 1), TODAY)

    def test_groups_by_employee_in_first_seen_order(self):
        index = build_index(
            [
                record("2", "A", "2020-01-01", "2020-02-01"),
                record("1", "A", "2020-01-01", "2020-02-01"),
                record("2", "B", "2020-01-01", "2020-02-01"),
            ],
            today=TODAY,
        )
        assert index.employees == ["2", "1"]
        assert list(index["2"]) == ["A", "B"]

    def test_last_write_wins_by_default(self):
        index = build_index(
            [
                record("1", "A", "2020-01-01", "2020-02-01"),
                record("1", "B", "2020-01-01", "2020-02-01"),
                record("1", "A", "2021-01-01", "2021-02-01"),
            ],
            today=TODAY,
        )
        assert index["1"]["A"] == DateRange(date(2021, 1, 1), date(2021, 2, 1))
        assert list(index["1"]) == ["A", "B"]

    def test_first_write_wins(self):
        index = build_index(
            [
                record("1", "A", "2020-01-01", "2020-02-01"),
                record("1", "A", "2021-01-01", "2021-02-01"),
            ],
            today=TODAY,
            duplicate_policy=DuplicatePolicy.FIRST_WRITE_WINS,
        )
        assert index["1"]["A"] == DateRange(date(2020, 1, 1), date(2020, 2, 1))

    def test_merge_spans_both_records(self):
        index = build_index(
            [
                record("1", "A", "2020-03-01", "2020-04-01"),
                record("1", "A", "2020-01-01", None),
            ],
            today=TODAY,
            duplicate_policy="merge",
        )
        assert index["1"]["A"] == DateRange(date(2020, 1, 1), TODAY)

    def test_reject(self):
        with pytest.raises(DuplicateRecordError) as exc_info:
            build_index(
                [
                    record("1", "A", "2020-01-01", "2020-02-01", 1),
                    record("1", "A", "2021-01-01", "2021-02-01", 2),
                ],
                today=TODAY,
                duplicate_policy=DuplicatePolicy.REJECT,
            )
        assert exc_info.value.line_number == 2

    def test_same_project_for_different_employees_is_not_duplicate(self):
        index = build_index(
            [
                record("1", "A", "2020-01-01", "2020-02-01"),
                record("2", "A", "2020-01-01", "2020-02-01"),
            ],
            today=TODAY,
            duplicate_policy=DuplicatePolicy.REJECT,
        )
        assert len(index) == 2


class TestLoadIndex:
    def test_end_to_end(self):
        source = csv(
            "143, 12, 2013-11-01, 2014-01-05\n"
            "218, 10, 2012-05-16, NULL\n"
            "143, 10, 2009-01-01, 2011-04-27\n"
            "218, 12, 2013-12-01, 2014-02-15\n"
        )
        index = load_index(source, today=TODAY, settings=create_default_settings())
        result = find_best_pair(index)
        assert (result.employee_a, result.employee_b) == ("143", "218")
        assert result.total_days == 35
        assert [(p.project_id, p.days) for p in result.per_project] == [("12", 35)]

    def test_settings_drive_reader_and_policy(self):
        settings = create_default_settings()
        settings.update(
            {"delimiter": "|", "has_header": True, "duplicate_policy": "reject"}
        )
        source = csv("emp|proj|from|to\n1|A|2020-01-01|NULL\n1|A|2020-01-01|NULL\n")
        with pytest.raises(DuplicateRecordError):
            load_index(source, today=TODAY, settings=settings)
