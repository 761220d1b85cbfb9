"""
Database models module.

Imports every model so they are registered with Base.metadata before table creation
and migration autogeneration.
"""
from assessdesk.db.models.rubric import Rubric
from assessdesk.db.models.candidate import Candidate
from assessdesk.db.models.evaluation import Evaluation

__all__ = [
    "Rubric",
    "Candidate",
    "Evaluation",
]
