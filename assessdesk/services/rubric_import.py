"""
Rubric import from uploaded JSON or CSV files.

JSON files carry a full rubric payload. CSV files describe a flat list of
criteria, one per row, with at least `name` and `description` columns and
an optional `maxScore` column; they become a single "General Criteria"
category.
"""
import csv
import io
import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from assessdesk.schemas.rubric import RubricCreate

logger = logging.getLogger(__name__)

JSON_TYPES = ("application/json", "text/json")
CSV_TYPES = ("text/csv", "application/csv", "application/vnd.ms-excel")

DEFAULT_CRITERION_MAX_SCORE = 10


class RubricImportError(ValueError):
    """The uploaded file cannot be turned into a rubric."""


def _detect_format(content_type: Optional[str], filename: Optional[str]) -> Optional[str]:
    content_type = (content_type or "").split(";")[0].strip().lower()
    if content_type in JSON_TYPES:
        return "json"
    if content_type in CSV_TYPES:
        return "csv"

    name = (filename or "").lower()
    if name.endswith(".json"):
        return "json"
    if name.endswith(".csv"):
        return "csv"
    return None


def _parse_max_score(raw: Optional[str]) -> int:
    try:
        value = int((raw or "").strip())
    except ValueError:
        return DEFAULT_CRITERION_MAX_SCORE
    return value or DEFAULT_CRITERION_MAX_SCORE


def csv_to_rubric_payload(text: str) -> Dict[str, Any]:
    """
    Build a rubric payload from CSV text.

    The first data row also supplies the rubric's name and description.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        raise RubricImportError("CSV file is empty")

    reader = csv.DictReader(io.StringIO("\n".join(lines)))
    headers = [h.strip() for h in (reader.fieldnames or [])]
    if "name" not in headers or "description" not in headers:
        raise RubricImportError("CSV must include 'name' and 'description' columns")

    rows: List[Dict[str, str]] = [
        {(k or "").strip(): (v or "").strip() for k, v in row.items() if k is not None}
        for row in reader
    ]

    criteria = [
        {
            "id": f"criteria-{index}",
            "name": row.get("name") or f"Criterion {index + 1}",
            "maxScore": _parse_max_score(row.get("maxScore")),
            "weight": 1,
        }
        for index, row in enumerate(rows)
    ]
    first = rows[0] if rows else {}

    return {
        "name": first.get("name") or "Imported Rubric",
        "description": first.get("description") or "Imported from CSV",
        "categories": [
            {
                "id": "general",
                "name": "General Criteria",
                "icon": "clipboard",
                "color": "#2E86AB",
                "criteria": criteria,
            }
        ],
        "maxScore": sum(c["maxScore"] for c in criteria),
    }


def parse_rubric_file(content: bytes, content_type: Optional[str], filename: Optional[str] = None) -> RubricCreate:
    """
    Parse an uploaded rubric file into a validated RubricCreate.

    Raises:
        RubricImportError: unsupported type, undecodable content or invalid rubric data
    """
    file_format = _detect_format(content_type, filename)
    if file_format is None:
        raise RubricImportError("Unsupported file type. Please upload JSON or CSV")

    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise RubricImportError("File must be UTF-8 encoded text") from e

    if file_format == "json":
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise RubricImportError(f"Invalid JSON: {e.msg}") from e
    else:
        payload = csv_to_rubric_payload(text)

    try:
        rubric = RubricCreate.model_validate(payload)
    except ValidationError as e:
        raise RubricImportError(f"Invalid rubric data: {e.error_count()} validation error(s)") from e

    logger.debug(f"Rubric file parsed: format={file_format}, filename={filename}, name={rubric.name!r}")
    return rubric
