"""
Pydantic schemas for rubric endpoints.
"""
from typing import Dict, List, Optional
from datetime import datetime
from pydantic import Field, field_validator

from assessdesk.schemas.common import CamelModel, CriterionScore


class RubricCriterion(CamelModel):
    """Smallest scored unit within a rubric."""
    id: str = Field(..., min_length=1, description="Criterion ID, unique within the rubric")
    name: str = Field(..., min_length=1, description="Criterion name")
    max_score: int = Field(..., gt=0, description="Maximum score for this criterion")
    weight: float = Field(1, gt=0, description="Relative weight (display only, not applied to the overall score)")


class RubricCategory(CamelModel):
    """Display group of criteria."""
    id: str = Field(..., min_length=1, description="Category ID, unique within the rubric")
    name: str = Field(..., min_length=1, description="Category name")
    icon: str = Field("clipboard", description="Icon tag")
    color: str = Field("#2E86AB", description="Color tag")
    criteria: List[RubricCriterion] = Field(default_factory=list, description="Ordered criteria")


def _check_unique_ids(categories: Optional[List[RubricCategory]]) -> Optional[List[RubricCategory]]:
    if categories is None:
        return categories
    category_ids = [category.id for category in categories]
    if len(category_ids) != len(set(category_ids)):
        raise ValueError("Category ids must be unique within a rubric")
    criterion_ids = [criterion.id for category in categories for criterion in category.criteria]
    if len(criterion_ids) != len(set(criterion_ids)):
        raise ValueError("Criterion ids must be unique within a rubric")
    return categories


class RubricCreate(CamelModel):
    """Schema for creating a rubric. `maxScore` is derived from the criteria when omitted."""
    name: str = Field(..., min_length=1, max_length=255, description="Rubric name")
    description: Optional[str] = Field(None, description="Rubric description")
    categories: List[RubricCategory] = Field(..., description="Ordered categories")
    max_score: Optional[int] = Field(None, ge=0, description="Maximum total score")

    @field_validator("categories")
    @classmethod
    def validate_unique_ids(cls, v):
        return _check_unique_ids(v)

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Technical Interview",
                "description": "Comprehensive technical assessment for software engineers",
                "categories": [
                    {
                        "id": "coding",
                        "name": "Coding Skills",
                        "icon": "code",
                        "color": "#2E86AB",
                        "criteria": [
                            {"id": "problem-solving", "name": "Problem Solving", "maxScore": 10, "weight": 1},
                            {"id": "code-quality", "name": "Code Quality", "maxScore": 10, "weight": 1}
                        ]
                    }
                ],
                "maxScore": 20
            }
        }


class RubricUpdate(CamelModel):
    """Schema for partially updating a rubric."""
    name: Optional[str] = Field(None, min_length=1, max_length=255, description="Rubric name")
    description: Optional[str] = Field(None, description="Rubric description")
    categories: Optional[List[RubricCategory]] = Field(None, description="Ordered categories")
    max_score: Optional[int] = Field(None, ge=0, description="Maximum total score")

    @field_validator("categories")
    @classmethod
    def validate_unique_ids(cls, v):
        return _check_unique_ids(v)


class RubricResponse(CamelModel):
    """Schema for rubric response."""
    id: int = Field(..., description="Rubric ID")
    name: str
    description: Optional[str] = None
    categories: List[RubricCategory]
    max_score: int
    created_at: datetime

    class Config:
        from_attributes = True


class ScorePreviewRequest(CamelModel):
    """Scores entered so far for a rubric."""
    scores: Dict[str, CriterionScore] = Field(default_factory=dict, description="Criterion ID -> score")


class ScorePreviewResponse(CamelModel):
    """Live feedback while an evaluation is being filled in."""
    overall_score: str = Field(..., description="Overall score on a 0-10 scale, 2 decimals")
    progress: float = Field(..., description="Percentage of criteria scored")


class RubricDefinition(CamelModel):
    """Just the scoring structure of a rubric, read from a stored row."""
    categories: List[RubricCategory] = Field(default_factory=list)

    class Config:
        from_attributes = True
