from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from assessdesk.db.base import Base


class Candidate(Base):
    __tablename__ = "candidates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)  # not unique
    position = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    evaluations = relationship("Evaluation", back_populates="candidate", order_by="Evaluation.id")

    def __repr__(self):
        return f"<Candidate(id={self.id}, name='{self.name}')>"
