"""
Evaluation model - one candidate scored against one rubric.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from assessdesk.db.base import Base


class Evaluation(Base):
    """
    Per-criterion scores plus the derived overall score.

    `scores` maps criterion id -> numeric score and is sparse: a missing key
    means the criterion has not been scored yet.
    """
    __tablename__ = "evaluations"

    id = Column(Integer, primary_key=True, index=True)
    candidate_id = Column(Integer, ForeignKey("candidates.id"), nullable=False, index=True)
    rubric_id = Column(Integer, ForeignKey("rubrics.id"), nullable=False, index=True)

    scores = Column(JSON, nullable=False, default=dict)
    overall_score = Column(String(8), nullable=False)  # "8.50", always 2 decimals
    notes = Column(Text, nullable=True)
    evaluator_name = Column(String, nullable=False)
    status = Column(String, nullable=False, default="draft", index=True)  # "draft", "completed"

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    candidate = relationship("Candidate", back_populates="evaluations")
    rubric = relationship("Rubric", back_populates="evaluations")

    __table_args__ = (
        Index('idx_evaluation_candidate_status', 'candidate_id', 'status'),
    )

    def __repr__(self):
        return f"<Evaluation(id={self.id}, candidate_id={self.candidate_id}, status='{self.status}')>"
