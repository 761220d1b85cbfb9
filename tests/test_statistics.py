"""
Unit tests for dashboard and report statistics.
"""
from types import SimpleNamespace

from assessdesk.schemas.dashboard import DashboardStats
from assessdesk.services.statistics import (
    candidate_average,
    candidate_rankings,
    dashboard_stats,
    recommendation,
    report_summary,
    score_band,
    score_distribution,
)


def evaluation(candidate_id, overall_score, status="completed"):
    return SimpleNamespace(candidate_id=candidate_id, overall_score=overall_score, status=status)


def test_dashboard_stats_empty():
    stats = dashboard_stats([])
    assert stats == DashboardStats(active_assessments=0, candidates_evaluated=0, average_score=0, pass_rate=0)


def test_dashboard_stats_scenario():
    """Two completed (8.0, 8.5) for distinct candidates plus one draft."""
    stats = dashboard_stats([
        evaluation(1, "8.0"),
        evaluation(2, "8.5"),
        evaluation(3, "2.00", status="draft"),
    ])
    assert stats.active_assessments == 1
    assert stats.candidates_evaluated == 2
    assert stats.average_score == 8.3
    assert stats.pass_rate == 100


def test_dashboard_stats_serializes_camel_case():
    data = dashboard_stats([evaluation(1, "7.00")]).model_dump(by_alias=True)
    assert data == {"activeAssessments": 0, "candidatesEvaluated": 1, "averageScore": 7.0, "passRate": 100}


def test_candidates_evaluated_counts_distinct_completed_only():
    stats = dashboard_stats([
        evaluation(1, "6.00"),
        evaluation(1, "9.00"),
        evaluation(2, "5.00", status="draft"),
    ])
    assert stats.candidates_evaluated == 1
    assert stats.active_assessments == 1


def test_drafts_do_not_affect_average_or_pass_rate():
    stats = dashboard_stats([
        evaluation(1, "4.00"),
        evaluation(2, "10.00", status="draft"),
    ])
    assert stats.average_score == 4.0
    assert stats.pass_rate == 0


def test_pass_rate_rounds_half_up():
    """1 of 8 passing is 12.5%, reported as 13."""
    evaluations = [evaluation(i, "7.00" if i == 0 else "3.00") for i in range(8)]
    assert dashboard_stats(evaluations).pass_rate == 13


def test_pass_threshold_is_inclusive():
    stats = dashboard_stats([evaluation(1, "7.00"), evaluation(2, "6.99")])
    assert stats.pass_rate == 50


def test_only_drafts():
    stats = dashboard_stats([evaluation(1, "9.00", status="draft")])
    assert stats.average_score == 0
    assert stats.pass_rate == 0
    assert stats.candidates_evaluated == 0


def test_candidate_average_none_without_completed():
    assert candidate_average([]) is None
    assert candidate_average([evaluation(1, "8.00", status="draft")]) is None


def test_candidate_average_zero_is_a_score():
    """Scoring zero is different from never being evaluated."""
    assert candidate_average([evaluation(1, "0.00")]) == 0.0


def test_candidate_average_rounds_to_one_decimal():
    assert candidate_average([evaluation(1, "8.00"), evaluation(1, "8.50")]) == 8.3
    assert candidate_average([evaluation(1, "7.33"), evaluation(1, "1.00", status="draft")]) == 7.3


def test_recommendation_thresholds():
    assert recommendation("7.00") == "passed"
    assert recommendation(9.5) == "passed"
    assert recommendation("6.99") == "review"
    assert recommendation("5.00") == "review"
    assert recommendation("4.99") == "rejected"


def test_score_band_thresholds():
    assert score_band("9.00") == "excellent"
    assert score_band("8.99") == "good"
    assert score_band("7.00") == "good"
    assert score_band("6.99") == "average"
    assert score_band("5.00") == "average"
    assert score_band("4.99") == "poor"


def test_score_distribution_ignores_drafts():
    distribution = score_distribution([
        evaluation(1, "9.50"),
        evaluation(2, "7.50"),
        evaluation(3, "5.50"),
        evaluation(4, "1.00"),
        evaluation(5, "9.90", status="draft"),
    ])
    assert distribution.model_dump() == {"excellent": 1, "good": 1, "average": 1, "poor": 1}


def test_candidate_rankings_sorted_and_filtered():
    alice = SimpleNamespace(id=1, name="Alice", email="alice@email.com", position="Backend")
    bob = SimpleNamespace(id=2, name="Bob", email="bob@email.com", position="Frontend")
    carol = SimpleNamespace(id=3, name="Carol", email="carol@email.com", position="DevOps")

    rankings = candidate_rankings([(alice, 5.5), (bob, None), (carol, 8.0)])

    assert [r.candidate_id for r in rankings] == [3, 1]
    assert [r.recommendation for r in rankings] == ["passed", "review"]


def test_report_summary():
    alice = SimpleNamespace(id=1, name="Alice", email="alice@email.com", position="Backend")
    evaluations = [evaluation(1, "9.00"), evaluation(1, "3.00", status="draft")]

    summary = report_summary(evaluations, [(alice, 9.0)])

    assert summary.total_evaluations == 2
    assert summary.completed_evaluations == 1
    assert summary.draft_evaluations == 1
    assert summary.average_score == 9.0
    assert summary.pass_rate == 100
    assert summary.distribution.excellent == 1
    assert summary.rankings[0].recommendation == "passed"
