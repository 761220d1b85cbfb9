"""
Integration tests for evaluation endpoints.
"""
import json

import pytest


@pytest.fixture
def evaluation_payload(rubric, candidate):
    return {
        "candidateId": candidate["id"],
        "rubricId": rubric["id"],
        "scores": {"a": 8, "b": 7},
        "notes": "Solid fundamentals",
        "evaluatorName": "John Doe",
        "status": "completed",
    }


def test_create_evaluation_computes_overall_score(client, evaluation_payload):
    response = client.post("/api/evaluations", json=evaluation_payload)

    assert response.status_code == 201
    data = response.json()
    assert data["overallScore"] == "7.50"
    assert data["scores"] == {"a": 8, "b": 7}
    assert data["status"] == "completed"
    assert data["evaluatorName"] == "John Doe"
    assert data["notes"] == "Solid fundamentals"
    assert "updatedAt" in data


def test_create_evaluation_defaults_to_draft(client, evaluation_payload):
    del evaluation_payload["status"]
    response = client.post("/api/evaluations", json=evaluation_payload)
    assert response.json()["status"] == "draft"


def test_client_overall_score_is_replaced(client, evaluation_payload):
    evaluation_payload["overallScore"] = "9.99"
    response = client.post("/api/evaluations", json=evaluation_payload)
    assert response.json()["overallScore"] == "7.50"


def test_partial_scores_count_missing_as_zero(client, evaluation_payload):
    evaluation_payload["scores"] = {"a": 10}
    response = client.post("/api/evaluations", json=evaluation_payload)
    assert response.json()["overallScore"] == "5.00"


def test_unknown_score_keys_are_stored_but_ignored(client, evaluation_payload):
    evaluation_payload["scores"] = {"a": 8, "b": 7, "legacy": 3}
    response = client.post("/api/evaluations", json=evaluation_payload)

    assert response.status_code == 201
    assert response.json()["overallScore"] == "7.50"
    assert response.json()["scores"]["legacy"] == 3


def test_unknown_candidate_is_rejected(client, evaluation_payload):
    evaluation_payload["candidateId"] = 999
    response = client.post("/api/evaluations", json=evaluation_payload)

    assert response.status_code == 400
    assert response.json()["detail"] == "Candidate 999 not found"


def test_unknown_rubric_is_rejected(client, evaluation_payload):
    evaluation_payload["rubricId"] = 999
    response = client.post("/api/evaluations", json=evaluation_payload)

    assert response.status_code == 400
    assert response.json()["detail"] == "Rubric 999 not found"


def test_score_above_max_is_rejected(client, evaluation_payload):
    evaluation_payload["scores"] = {"a": 11}
    response = client.post("/api/evaluations", json=evaluation_payload)
    assert response.status_code == 400


def test_negative_score_is_rejected(client, evaluation_payload):
    evaluation_payload["scores"] = {"a": -1}
    response = client.post("/api/evaluations", json=evaluation_payload)
    assert response.status_code == 422


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_score_is_rejected(client, evaluation_payload, value):
    """NaN and Infinity are valid JSON to the parser but never a score."""
    evaluation_payload["scores"] = {"a": value, "b": 7}
    response = client.post(
        "/api/evaluations",
        content=json.dumps(evaluation_payload),
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422
    assert client.get("/api/evaluations").json() == []
    assert client.get("/api/dashboard/stats").status_code == 200
    assert client.get("/api/reports/summary").status_code == 200


def test_non_finite_score_is_rejected_on_update(client, evaluation_payload):
    created = client.post("/api/evaluations", json=evaluation_payload).json()

    response = client.put(
        f"/api/evaluations/{created['id']}",
        content=json.dumps({"scores": {"a": float("nan")}}),
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422
    assert client.get(f"/api/evaluations/{created['id']}").json()["overallScore"] == "7.50"


def test_invalid_status_is_rejected(client, evaluation_payload):
    evaluation_payload["status"] = "archived"
    response = client.post("/api/evaluations", json=evaluation_payload)
    assert response.status_code == 422


def test_get_evaluation_with_details(client, evaluation_payload, candidate, rubric):
    created = client.post("/api/evaluations", json=evaluation_payload).json()

    response = client.get(f"/api/evaluations/{created['id']}")

    assert response.status_code == 200
    data = response.json()
    assert data["candidate"]["name"] == candidate["name"]
    assert data["rubric"]["id"] == rubric["id"]
    assert data["rubric"]["categories"][0]["criteria"][0]["maxScore"] == 10


def test_list_evaluations(client, evaluation_payload):
    client.post("/api/evaluations", json=evaluation_payload)
    client.post("/api/evaluations", json=evaluation_payload)

    response = client.get("/api/evaluations")

    assert response.status_code == 200
    assert len(response.json()) == 2
    assert all("candidate" in e and "rubric" in e for e in response.json())


def test_get_missing_evaluation(client):
    response = client.get("/api/evaluations/999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Evaluation not found"


def test_status_moves_both_ways(client, evaluation_payload):
    """draft -> completed -> draft, only by explicit updates."""
    evaluation_payload["status"] = "draft"
    created = client.post("/api/evaluations", json=evaluation_payload).json()

    completed = client.put(f"/api/evaluations/{created['id']}", json={"status": "completed"})
    assert completed.status_code == 200
    assert completed.json()["status"] == "completed"
    assert completed.json()["overallScore"] == "7.50"

    reopened = client.put(f"/api/evaluations/{created['id']}", json={"status": "draft"})
    assert reopened.json()["status"] == "draft"


def test_completed_evaluation_stays_editable(client, evaluation_payload):
    created = client.post("/api/evaluations", json=evaluation_payload).json()

    response = client.put(f"/api/evaluations/{created['id']}", json={"scores": {"a": 10, "b": 10}})

    assert response.status_code == 200
    assert response.json()["overallScore"] == "10.00"
    assert response.json()["status"] == "completed"


def test_update_notes_keeps_score(client, evaluation_payload):
    created = client.post("/api/evaluations", json=evaluation_payload).json()

    response = client.put(f"/api/evaluations/{created['id']}", json={"notes": "Follow up", "overallScore": "1.00"})

    assert response.json()["notes"] == "Follow up"
    assert response.json()["overallScore"] == "7.50"


def test_update_to_unknown_rubric_is_rejected(client, evaluation_payload):
    created = client.post("/api/evaluations", json=evaluation_payload).json()

    response = client.put(f"/api/evaluations/{created['id']}", json={"rubricId": 999})

    assert response.status_code == 400
    assert client.get(f"/api/evaluations/{created['id']}").json()["rubricId"] == evaluation_payload["rubricId"]


def test_update_missing_evaluation(client):
    response = client.put("/api/evaluations/999", json={"status": "completed"})
    assert response.status_code == 404


def test_delete_evaluation(client, evaluation_payload):
    created = client.post("/api/evaluations", json=evaluation_payload).json()

    assert client.delete(f"/api/evaluations/{created['id']}").status_code == 204
    assert client.get(f"/api/evaluations/{created['id']}").status_code == 404
    assert client.delete(f"/api/evaluations/{created['id']}").status_code == 404
