"""
CSV export of evaluations with their candidate and rubric details.
"""
import csv
import io
import logging
from datetime import datetime, timezone
from typing import Iterable, Optional

from assessdesk.db.models.evaluation import Evaluation

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "Evaluation ID",
    "Candidate Name",
    "Candidate Email",
    "Position",
    "Rubric Name",
    "Overall Score",
    "Status",
    "Evaluator",
    "Created At",
]


def format_timestamp(value: Optional[datetime]) -> str:
    """UTC ISO-8601 with milliseconds and a Z suffix. Naive values are stored UTC."""
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def evaluation_row(evaluation: Evaluation) -> list:
    candidate = evaluation.candidate
    rubric = evaluation.rubric
    return [
        evaluation.id,
        candidate.name,
        candidate.email,
        candidate.position,
        rubric.name,
        evaluation.overall_score,
        evaluation.status,
        evaluation.evaluator_name,
        format_timestamp(evaluation.created_at),
    ]


def evaluations_to_csv(evaluations: Iterable[Evaluation]) -> str:
    """
    Render evaluations as CSV text.

    Every field is double-quoted and rows are separated by a bare newline,
    with no newline after the last row.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    count = 0
    for evaluation in evaluations:
        writer.writerow(evaluation_row(evaluation))
        count += 1

    logger.debug(f"Evaluations exported: rows={count}")
    return buffer.getvalue().rstrip("\n")
