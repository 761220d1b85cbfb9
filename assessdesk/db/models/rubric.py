"""
Rubric model - a reusable scoring template.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from assessdesk.db.base import Base


class Rubric(Base):
    """
    Scoring template made of categories of criteria.

    `categories` is stored as JSON in wire shape:
    [{"id", "name", "icon", "color", "criteria": [{"id", "name", "maxScore", "weight"}]}]
    """
    __tablename__ = "rubrics"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    categories = Column(JSON, nullable=False, default=list)
    max_score = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    evaluations = relationship("Evaluation", back_populates="rubric")

    def __repr__(self):
        return f"<Rubric(id={self.id}, name='{self.name}')>"
