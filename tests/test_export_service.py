"""
Unit tests for the CSV export.
"""
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from assessdesk.services.export_service import CSV_HEADERS, evaluations_to_csv, format_timestamp


def make_evaluation(**overrides):
    values = dict(
        id=1,
        candidate=SimpleNamespace(name="Sarah Johnson", email="sarah.johnson@email.com", position="Frontend Developer"),
        rubric=SimpleNamespace(name="Technical Interview"),
        overall_score="8.00",
        status="completed",
        evaluator_name="John Doe",
        created_at=datetime(2026, 1, 15, 10, 30, 0),
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def test_header_only_when_empty():
    assert evaluations_to_csv([]) == ",".join(f'"{h}"' for h in CSV_HEADERS)


def test_rows_are_fully_quoted():
    lines = evaluations_to_csv([make_evaluation(), make_evaluation(id=2, status="draft")]).split("\n")

    assert lines[0] == (
        '"Evaluation ID","Candidate Name","Candidate Email","Position","Rubric Name",'
        '"Overall Score","Status","Evaluator","Created At"'
    )
    assert lines[1] == (
        '"1","Sarah Johnson","sarah.johnson@email.com","Frontend Developer","Technical Interview",'
        '"8.00","completed","John Doe","2026-01-15T10:30:00.000Z"'
    )
    assert lines[2].startswith('"2",')
    assert len(lines) == 3


def test_embedded_quotes_are_escaped():
    evaluation = make_evaluation(evaluator_name='Jane "JJ" Doe')
    row = evaluations_to_csv([evaluation]).split("\n")[1]
    assert '"Jane ""JJ"" Doe"' in row


def test_timestamps_are_utc_with_z_suffix():
    assert format_timestamp(datetime(2026, 1, 15, 10, 30, 0, 123456)) == "2026-01-15T10:30:00.123Z"
    offset = timezone(timedelta(hours=2))
    assert format_timestamp(datetime(2026, 1, 15, 12, 30, 0, tzinfo=offset)) == "2026-01-15T10:30:00.000Z"


def test_missing_timestamp_is_blank():
    row = evaluations_to_csv([make_evaluation(created_at=None)]).split("\n")[1]
    assert row.endswith(',"John Doe",""')
