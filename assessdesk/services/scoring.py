"""
Score aggregation for a single evaluation.

Turns a rubric (categories -> criteria) and a sparse map of per-criterion
scores into a 0-10 overall score and a completion percentage. Everything
here is pure: no I/O, no state, same inputs always give the same output.

Criterion `weight` is carried by the data model but is not applied; every
criterion counts through its raw score relative to its max score.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Mapping, Optional, Union

Number = Union[int, float, Decimal, str]

SCORE_SCALE = Decimal(10)


class InvalidScoreError(ValueError):
    """A score is outside its criterion's range."""


def round_half_up(value: Number, digits: int = 2) -> Decimal:
    """
    Round half away from zero to a fixed number of fractional digits.

    This is the only rounding rule used for overall scores, averages and
    pass rates, so dashboard figures and per-evaluation figures reconcile.
    """
    quantum = Decimal(1).scaleb(-digits)
    return _to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)


def _to_decimal(value: Optional[Number]) -> Decimal:
    if value is None:
        return Decimal(0)
    if isinstance(value, Decimal):
        return value
    # str() first so 0.1 stays 0.1 instead of its binary expansion
    return Decimal(str(value))


def flatten_criteria(rubric: Any) -> List[Any]:
    """Criteria in category order, then criterion order within each category."""
    categories = getattr(rubric, "categories", None) or []
    return [criterion for category in categories for criterion in (category.criteria or [])]


def compute_overall_score(rubric: Any, scores: Optional[Mapping[str, Number]]) -> Decimal:
    """
    Overall score on a 0-10 scale.

    Unscored criteria contribute 0 but stay in the denominator. Score keys
    that are not criteria of the rubric are ignored. A rubric without
    criteria (or whose max scores sum to 0) scores 0.
    """
    scores = scores or {}
    criteria = flatten_criteria(rubric)

    total_possible = sum((_to_decimal(c.max_score) for c in criteria), Decimal(0))
    total_actual = sum((_to_decimal(scores.get(c.id, 0)) for c in criteria), Decimal(0))

    if total_possible <= 0:
        return Decimal(0)
    return total_actual / total_possible * SCORE_SCALE


def format_score(value: Number) -> str:
    """Fixed-point string with exactly two decimals, e.g. "8.50"."""
    return str(round_half_up(value, 2))


def overall_score_string(rubric: Any, scores: Optional[Mapping[str, Number]]) -> str:
    """The overall score as persisted on an evaluation."""
    return format_score(compute_overall_score(rubric, scores))


def compute_progress(rubric: Any, scores: Optional[Mapping[str, Number]]) -> float:
    """Percentage (0-100) of the rubric's criteria that have a score entry."""
    scores = scores or {}
    criteria = flatten_criteria(rubric)
    if not criteria:
        return 0.0
    scored = sum(1 for c in criteria if c.id in scores)
    return scored / len(criteria) * 100


def criterion_limits(rubric: Any) -> Dict[str, int]:
    """Criterion id -> max score, used to validate incoming scores."""
    return {c.id: c.max_score for c in flatten_criteria(rubric)}


def check_score_limits(rubric: Any, scores: Optional[Mapping[str, Number]]) -> None:
    """Raise InvalidScoreError when a score is above its criterion's max score."""
    limits = criterion_limits(rubric)
    for criterion_id, value in (scores or {}).items():
        limit = limits.get(criterion_id)
        if limit is not None and _to_decimal(value) > limit:
            raise InvalidScoreError(
                f"Score {value} for '{criterion_id}' exceeds its max score of {limit}"
            )
