"""
Pydantic schemas for evaluation endpoints.
"""
from typing import Dict, List, Optional
from datetime import datetime
from pydantic import Field

from assessdesk.schemas.common import CamelModel, CriterionScore
from assessdesk.schemas.candidate import CandidateResponse
from assessdesk.schemas.rubric import RubricResponse

STATUS_PATTERN = "^(draft|completed)$"


class EvaluationCreate(CamelModel):
    """
    Schema for saving an evaluation.

    `overallScore` is accepted for compatibility but the server always
    recomputes it from the rubric and scores.
    """
    candidate_id: int = Field(..., description="Candidate being evaluated")
    rubric_id: int = Field(..., description="Rubric used for scoring")
    scores: Dict[str, CriterionScore] = Field(default_factory=dict, description="Criterion ID -> score")
    overall_score: Optional[str] = Field(None, description="Client-computed overall score (advisory)")
    notes: Optional[str] = Field(None, description="Evaluator notes")
    evaluator_name: str = Field(..., min_length=1, max_length=200, description="Who performed the evaluation")
    status: str = Field("draft", pattern=STATUS_PATTERN, description="draft or completed")

    class Config:
        json_schema_extra = {
            "example": {
                "candidateId": 1,
                "rubricId": 1,
                "scores": {"problem-solving": 8, "code-quality": 7},
                "notes": "Strong fundamentals",
                "evaluatorName": "John Doe",
                "status": "completed"
            }
        }


class EvaluationUpdate(CamelModel):
    """Schema for partially updating an evaluation. Status may move either way."""
    candidate_id: Optional[int] = None
    rubric_id: Optional[int] = None
    scores: Optional[Dict[str, CriterionScore]] = None
    overall_score: Optional[str] = None
    notes: Optional[str] = None
    evaluator_name: Optional[str] = Field(None, min_length=1, max_length=200)
    status: Optional[str] = Field(None, pattern=STATUS_PATTERN)


class EvaluationResponse(CamelModel):
    """Schema for evaluation response."""
    id: int
    candidate_id: int
    rubric_id: int
    scores: Dict[str, float]
    overall_score: str
    notes: Optional[str] = None
    evaluator_name: str
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EvaluationWithDetailsResponse(EvaluationResponse):
    """Evaluation joined with its candidate and rubric."""
    candidate: CandidateResponse
    rubric: RubricResponse


class CandidateWithEvaluationsResponse(CandidateResponse):
    """Candidate with every evaluation and the average of the completed ones."""
    evaluations: List[EvaluationWithDetailsResponse] = Field(default_factory=list)
    average_score: Optional[float] = Field(None, description="Mean completed score, null if never evaluated")
