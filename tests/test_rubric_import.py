"""
Unit tests for rubric file parsing.
"""
import json

import pytest

from assessdesk.services.rubric_import import RubricImportError, parse_rubric_file


CSV_CONTENT = (
    "name,description,maxScore\n"
    "Communication,Speaks clearly,5\n"
    "Teamwork,Works well with others,\n"
    "\n"
)


def test_csv_builds_general_category():
    rubric = parse_rubric_file(CSV_CONTENT.encode(), "text/csv", "rubric.csv")

    assert rubric.name == "Communication"
    assert rubric.description == "Speaks clearly"
    assert len(rubric.categories) == 1

    category = rubric.categories[0]
    assert category.id == "general"
    assert category.name == "General Criteria"
    assert category.icon == "clipboard"
    assert [c.id for c in category.criteria] == ["criteria-0", "criteria-1"]
    assert [c.name for c in category.criteria] == ["Communication", "Teamwork"]
    assert [c.max_score for c in category.criteria] == [5, 10]
    assert all(c.weight == 1 for c in category.criteria)
    assert rubric.max_score == 15


def test_csv_requires_name_and_description_columns():
    with pytest.raises(RubricImportError, match="'name' and 'description'"):
        parse_rubric_file(b"title,maxScore\nA,5\n", "text/csv", "rubric.csv")


def test_csv_with_header_only_uses_defaults():
    rubric = parse_rubric_file(b"name,description\n", "text/csv", "rubric.csv")
    assert rubric.name == "Imported Rubric"
    assert rubric.description == "Imported from CSV"
    assert rubric.categories[0].criteria == []
    assert rubric.max_score == 0


def test_csv_blank_name_gets_numbered_criterion():
    rubric = parse_rubric_file(b"name,description,maxScore\nFirst,Desc,3\n,Other,4\n", "text/csv")
    assert rubric.categories[0].criteria[1].name == "Criterion 2"


def test_json_payload():
    payload = {
        "name": "Behavior Assessment",
        "categories": [
            {
                "id": "teamwork",
                "name": "Teamwork",
                "icon": "users",
                "color": "#2E86AB",
                "criteria": [{"id": "collaboration", "name": "Collaboration", "maxScore": 10, "weight": 1}],
            }
        ],
        "maxScore": 10,
    }
    rubric = parse_rubric_file(json.dumps(payload).encode(), "application/json", "rubric.json")
    assert rubric.name == "Behavior Assessment"
    assert rubric.description is None
    assert rubric.categories[0].criteria[0].max_score == 10


def test_format_falls_back_to_extension():
    rubric = parse_rubric_file(CSV_CONTENT.encode(), "application/octet-stream", "rubric.CSV")
    assert rubric.name == "Communication"


def test_invalid_json():
    with pytest.raises(RubricImportError, match="Invalid JSON"):
        parse_rubric_file(b"{not json", "application/json", "rubric.json")


def test_json_failing_validation():
    with pytest.raises(RubricImportError, match="Invalid rubric data"):
        parse_rubric_file(b'{"name": "x"}', "application/json", "rubric.json")


def test_unsupported_type():
    with pytest.raises(RubricImportError, match="Unsupported file type"):
        parse_rubric_file(b"hello", "text/plain", "rubric.txt")
