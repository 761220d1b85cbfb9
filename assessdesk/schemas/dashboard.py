"""
Pydantic schemas for dashboard and report endpoints.
"""
from typing import List
from pydantic import Field

from assessdesk.schemas.common import CamelModel


class DashboardStats(CamelModel):
    """Fleet-wide metrics derived from all evaluations."""
    active_assessments: int = Field(0, description="Number of draft evaluations")
    candidates_evaluated: int = Field(0, description="Distinct candidates with a completed evaluation")
    average_score: float = Field(0, description="Mean completed overall score, 1 decimal")
    pass_rate: int = Field(0, description="Percent of completed evaluations scoring 7 or more")

    class Config:
        json_schema_extra = {
            "example": {
                "activeAssessments": 1,
                "candidatesEvaluated": 2,
                "averageScore": 8.3,
                "passRate": 100
            }
        }


class ScoreDistribution(CamelModel):
    """Completed evaluations per score band."""
    excellent: int = 0
    good: int = 0
    average: int = 0
    poor: int = 0


class CandidateRanking(CamelModel):
    candidate_id: int
    name: str
    email: str
    position: str
    average_score: float
    recommendation: str = Field(..., description="passed, review or rejected")


class ReportSummary(CamelModel):
    """Aggregate figures for the reports view."""
    total_evaluations: int = 0
    completed_evaluations: int = 0
    draft_evaluations: int = 0
    average_score: float = 0
    pass_rate: int = 0
    distribution: ScoreDistribution = Field(default_factory=ScoreDistribution)
    rankings: List[CandidateRanking] = Field(default_factory=list)
