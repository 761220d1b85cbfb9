"""
Demo data for a fresh database: two rubrics, four candidates and two
completed evaluations.
"""
import logging

from sqlalchemy.orm import Session

from assessdesk.db.models.rubric import Rubric
from assessdesk.schemas.candidate import CandidateCreate
from assessdesk.schemas.evaluation import EvaluationCreate
from assessdesk.schemas.rubric import RubricCreate
from assessdesk.services.repository import (
    CandidateRepository,
    EvaluationRepository,
    RubricRepository,
)

logger = logging.getLogger(__name__)

DEMO_RUBRICS = [
    {
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
                    {"id": "code-quality", "name": "Code Quality", "maxScore": 10, "weight": 1},
                ],
            },
            {
                "id": "logic",
                "name": "Logical Reasoning",
                "icon": "brain",
                "color": "#A23B72",
                "criteria": [
                    {"id": "analytical-thinking", "name": "Analytical Thinking", "maxScore": 10, "weight": 1},
                ],
            },
            {
                "id": "communication",
                "name": "Communication",
                "icon": "comments",
                "color": "#28A745",
                "criteria": [
                    {"id": "clarity", "name": "Clarity & Articulation", "maxScore": 10, "weight": 1},
                ],
            },
        ],
        "maxScore": 40,
    },
    {
        "name": "Behavior Assessment",
        "description": "Evaluates soft skills and team fit",
        "categories": [
            {
                "id": "teamwork",
                "name": "Teamwork",
                "icon": "users",
                "color": "#2E86AB",
                "criteria": [
                    {"id": "collaboration", "name": "Collaboration", "maxScore": 10, "weight": 1},
                    {"id": "leadership", "name": "Leadership", "maxScore": 10, "weight": 1},
                ],
            },
            {
                "id": "adaptability",
                "name": "Adaptability",
                "icon": "refresh",
                "color": "#A23B72",
                "criteria": [
                    {"id": "flexibility", "name": "Flexibility", "maxScore": 10, "weight": 1},
                ],
            },
        ],
        "maxScore": 30,
    },
]

DEMO_CANDIDATES = [
    {"name": "Sarah Johnson", "email": "sarah.johnson@email.com", "position": "Frontend Developer"},
    {"name": "Michael Chen", "email": "michael.chen@email.com", "position": "Backend Developer"},
    {"name": "Emily Rodriguez", "email": "emily.rodriguez@email.com", "position": "Full Stack Developer"},
    {"name": "David Kim", "email": "david.kim@email.com", "position": "DevOps Engineer"},
]

# (candidate index, rubric index, scores)
DEMO_EVALUATIONS = [
    (0, 0, {"problem-solving": 8, "code-quality": 7, "analytical-thinking": 8, "clarity": 9}),
    (1, 0, {"problem-solving": 9, "code-quality": 9, "analytical-thinking": 9, "clarity": 7}),
]


def seed_demo_data(db: Session) -> bool:
    """
    Insert demo records if the database has no rubrics yet.

    Returns True if anything was inserted.
    """
    if db.query(Rubric).count() > 0:
        logger.debug("Seed skipped: rubrics already present")
        return False

    rubric_repo = RubricRepository(db)
    candidate_repo = CandidateRepository(db)
    evaluation_repo = EvaluationRepository(db)

    rubrics = [rubric_repo.create(RubricCreate.model_validate(r)) for r in DEMO_RUBRICS]
    candidates = [candidate_repo.create(CandidateCreate.model_validate(c)) for c in DEMO_CANDIDATES]

    for candidate_index, rubric_index, scores in DEMO_EVALUATIONS:
        evaluation_repo.create(EvaluationCreate(
            candidate_id=candidates[candidate_index].id,
            rubric_id=rubrics[rubric_index].id,
            scores=scores,
            evaluator_name="John Doe",
            status="completed",
        ))

    logger.info(
        f"Demo data seeded: rubrics={len(rubrics)}, candidates={len(candidates)}, "
        f"evaluations={len(DEMO_EVALUATIONS)}"
    )
    return True
