"""
Dashboard and report statistics over the full evaluation set.

Pure folds over evaluation-like objects (anything with `status`,
`overall_score` and `candidate_id`). Only `completed` evaluations count
toward scores; drafts only feed the active-assessment count.
"""
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from assessdesk.schemas.dashboard import (
    CandidateRanking,
    DashboardStats,
    ReportSummary,
    ScoreDistribution,
)
from assessdesk.services.scoring import round_half_up

STATUS_DRAFT = "draft"
STATUS_COMPLETED = "completed"

# Fixed business thresholds on the 0-10 scale
PASS_THRESHOLD = Decimal(7)
REVIEW_THRESHOLD = Decimal(5)
EXCELLENT_THRESHOLD = Decimal(9)


def _score(evaluation: Any) -> Decimal:
    return Decimal(str(evaluation.overall_score))


def completed_only(evaluations: Iterable[Any]) -> List[Any]:
    return [e for e in evaluations if e.status == STATUS_COMPLETED]


def _mean(values: Sequence[Decimal]) -> Optional[Decimal]:
    if not values:
        return None
    return sum(values, Decimal(0)) / len(values)


def recommendation(score: Any) -> str:
    """passed (>= 7), review (5 to < 7) or rejected (< 5)."""
    value = Decimal(str(score))
    if value >= PASS_THRESHOLD:
        return "passed"
    if value >= REVIEW_THRESHOLD:
        return "review"
    return "rejected"


def score_band(score: Any) -> str:
    """excellent (>= 9), good (7 to < 9), average (5 to < 7) or poor (< 5)."""
    value = Decimal(str(score))
    if value >= EXCELLENT_THRESHOLD:
        return "excellent"
    if value >= PASS_THRESHOLD:
        return "good"
    if value >= REVIEW_THRESHOLD:
        return "average"
    return "poor"


def _average_and_pass_rate(completed: Sequence[Any]) -> Tuple[float, int]:
    scores = [_score(e) for e in completed]
    average = _mean(scores)
    if average is None:
        return 0.0, 0
    passed = sum(1 for s in scores if s >= PASS_THRESHOLD)
    pass_rate = round_half_up(Decimal(passed) / len(scores) * 100, 0)
    return float(round_half_up(average, 1)), int(pass_rate)


def dashboard_stats(evaluations: Iterable[Any]) -> DashboardStats:
    """
    Compute the dashboard metrics.

    - active_assessments: draft evaluations
    - candidates_evaluated: distinct candidates among completed evaluations
    - average_score: mean completed overall score, 1 decimal
    - pass_rate: percent of completed evaluations scoring >= 7, integer
    """
    evaluations = list(evaluations)
    completed = completed_only(evaluations)
    average, pass_rate = _average_and_pass_rate(completed)

    return DashboardStats(
        active_assessments=sum(1 for e in evaluations if e.status == STATUS_DRAFT),
        candidates_evaluated=len({e.candidate_id for e in completed}),
        average_score=average,
        pass_rate=pass_rate,
    )


def candidate_average(evaluations: Iterable[Any]) -> Optional[float]:
    """
    Mean overall score of a candidate's completed evaluations, 1 decimal.

    Returns None when there is no completed evaluation, so "never evaluated"
    is not confused with a real score of 0.
    """
    average = _mean([_score(e) for e in completed_only(evaluations)])
    if average is None:
        return None
    return float(round_half_up(average, 1))


def score_distribution(evaluations: Iterable[Any]) -> ScoreDistribution:
    counts: Dict[str, int] = {"excellent": 0, "good": 0, "average": 0, "poor": 0}
    for evaluation in completed_only(evaluations):
        counts[score_band(_score(evaluation))] += 1
    return ScoreDistribution(**counts)


def candidate_rankings(candidates: Iterable[Tuple[Any, Optional[float]]]) -> List[CandidateRanking]:
    """
    Rank (candidate, average) pairs by average, best first.

    Candidates without an average are left out. Ties keep input order.
    """
    ranked = [(c, avg) for c, avg in candidates if avg is not None]
    ranked.sort(key=lambda pair: pair[1], reverse=True)
    return [
        CandidateRanking(
            candidate_id=c.id,
            name=c.name,
            email=c.email,
            position=c.position,
            average_score=avg,
            recommendation=recommendation(avg),
        )
        for c, avg in ranked
    ]


def report_summary(
    evaluations: Iterable[Any],
    candidates: Iterable[Tuple[Any, Optional[float]]],
) -> ReportSummary:
    """Everything the reports view shows, in one pass per figure."""
    evaluations = list(evaluations)
    completed = completed_only(evaluations)
    average, pass_rate = _average_and_pass_rate(completed)

    return ReportSummary(
        total_evaluations=len(evaluations),
        completed_evaluations=len(completed),
        draft_evaluations=sum(1 for e in evaluations if e.status == STATUS_DRAFT),
        average_score=average,
        pass_rate=pass_rate,
        distribution=score_distribution(completed),
        rankings=candidate_rankings(candidates),
    )
