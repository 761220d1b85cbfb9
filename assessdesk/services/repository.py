"""
Repositories for rubrics, candidates and evaluations.

Each repository wraps a SQLAlchemy session and exposes list/get/create/
update/delete. Ids come from the database. Every mutating call commits on
success and rolls back before re-raising on failure.

References between entities are enforced here: an evaluation must point at
an existing candidate and rubric, and a candidate or rubric cannot be
deleted while evaluations still reference it.
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy.orm import Session, joinedload, selectinload
from sqlalchemy.sql import func

from assessdesk.db.models.candidate import Candidate
from assessdesk.db.models.evaluation import Evaluation
from assessdesk.db.models.rubric import Rubric
from assessdesk.schemas.candidate import CandidateCreate, CandidateUpdate
from assessdesk.schemas.evaluation import EvaluationCreate, EvaluationUpdate
from assessdesk.schemas.rubric import RubricCategory, RubricCreate, RubricDefinition, RubricUpdate
from assessdesk.services.scoring import check_score_limits, overall_score_string
from assessdesk.services.statistics import candidate_average

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Base class for repository rule violations."""


class MissingReferenceError(RepositoryError):
    """An evaluation points at a candidate or rubric that does not exist."""


class ReferenceInUseError(RepositoryError):
    """A candidate or rubric is still referenced by evaluations."""


def _serialize_categories(categories: List[RubricCategory]) -> List[Dict[str, Any]]:
    return [category.model_dump(by_alias=True) for category in categories]


def derive_max_score(categories: List[RubricCategory]) -> int:
    """Sum of every criterion's max score."""
    return sum(criterion.max_score for category in categories for criterion in category.criteria)


class _BaseRepository:
    model: Any = None

    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[Any]:
        return self.db.query(self.model).order_by(self.model.id).all()

    def get(self, entity_id: int) -> Optional[Any]:
        return self.db.query(self.model).filter(self.model.id == entity_id).first()

    def _save(self, instance: Any) -> Any:
        try:
            self.db.add(instance)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(instance)
        return instance

    def _remove(self, instance: Any) -> None:
        try:
            self.db.delete(instance)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise


class RubricRepository(_BaseRepository):
    model = Rubric

    def create(self, data: RubricCreate) -> Rubric:
        max_score = data.max_score
        if max_score is None:
            max_score = derive_max_score(data.categories)

        rubric = self._save(Rubric(
            name=data.name,
            description=data.description,
            categories=_serialize_categories(data.categories),
            max_score=max_score,
        ))
        logger.info(f"Rubric created: rubric_id={rubric.id}, max_score={rubric.max_score}")
        return rubric

    def update(self, rubric_id: int, data: RubricUpdate) -> Optional[Rubric]:
        rubric = self.get(rubric_id)
        if not rubric:
            return None

        update_data = data.model_dump(exclude_unset=True)
        # Required columns cannot be cleared
        for field in ("name", "categories"):
            if field in update_data and update_data[field] is None:
                update_data.pop(field)

        if "categories" in update_data:
            update_data["categories"] = _serialize_categories(data.categories)
            if update_data.get("max_score") is None:
                update_data["max_score"] = derive_max_score(data.categories)
        elif "max_score" in update_data and update_data["max_score"] is None:
            update_data["max_score"] = derive_max_score(RubricDefinition.model_validate(rubric).categories)

        for field, value in update_data.items():
            setattr(rubric, field, value)

        rubric = self._save(rubric)
        logger.info(f"Rubric updated: rubric_id={rubric.id}, fields={sorted(update_data)}")
        return rubric

    def delete(self, rubric_id: int) -> bool:
        rubric = self.get(rubric_id)
        if not rubric:
            return False

        in_use = self.db.query(Evaluation).filter(Evaluation.rubric_id == rubric_id).count()
        if in_use:
            raise ReferenceInUseError(f"Rubric {rubric_id} is used by {in_use} evaluation(s)")

        self._remove(rubric)
        logger.info(f"Rubric deleted: rubric_id={rubric_id}")
        return True


class CandidateRepository(_BaseRepository):
    model = Candidate

    def create(self, data: CandidateCreate) -> Candidate:
        candidate = self._save(Candidate(
            name=data.name,
            email=str(data.email),
            position=data.position,
        ))
        logger.info(f"Candidate created: candidate_id={candidate.id}")
        return candidate

    def update(self, candidate_id: int, data: CandidateUpdate) -> Optional[Candidate]:
        candidate = self.get(candidate_id)
        if not candidate:
            return None

        update_data = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        if "email" in update_data:
            update_data["email"] = str(update_data["email"])

        for field, value in update_data.items():
            setattr(candidate, field, value)

        candidate = self._save(candidate)
        logger.info(f"Candidate updated: candidate_id={candidate.id}, fields={sorted(update_data)}")
        return candidate

    def delete(self, candidate_id: int) -> bool:
        candidate = self.get(candidate_id)
        if not candidate:
            return False

        in_use = self.db.query(Evaluation).filter(Evaluation.candidate_id == candidate_id).count()
        if in_use:
            raise ReferenceInUseError(f"Candidate {candidate_id} has {in_use} evaluation(s)")

        self._remove(candidate)
        logger.info(f"Candidate deleted: candidate_id={candidate_id}")
        return True

    def list_with_evaluations(self) -> List[Tuple[Candidate, Optional[float]]]:
        """Every candidate with its evaluations loaded and its completed-score average."""
        candidates = (
            self.db.query(Candidate)
            .options(selectinload(Candidate.evaluations).joinedload(Evaluation.rubric))
            .order_by(Candidate.id)
            .all()
        )
        return [(candidate, candidate_average(candidate.evaluations)) for candidate in candidates]


class EvaluationRepository(_BaseRepository):
    model = Evaluation

    def _details_query(self):
        return self.db.query(Evaluation).options(
            joinedload(Evaluation.candidate),
            joinedload(Evaluation.rubric),
        )

    def list_with_details(self) -> List[Evaluation]:
        return self._details_query().order_by(Evaluation.id).all()

    def get_with_details(self, evaluation_id: int) -> Optional[Evaluation]:
        return self._details_query().filter(Evaluation.id == evaluation_id).first()

    def list_for_candidate(self, candidate_id: int) -> List[Evaluation]:
        return (
            self._details_query()
            .filter(Evaluation.candidate_id == candidate_id)
            .order_by(Evaluation.id)
            .all()
        )

    def _require_candidate(self, candidate_id: int) -> Candidate:
        candidate = CandidateRepository(self.db).get(candidate_id)
        if not candidate:
            raise MissingReferenceError(f"Candidate {candidate_id} not found")
        return candidate

    def _require_rubric(self, rubric_id: int) -> Rubric:
        rubric = RubricRepository(self.db).get(rubric_id)
        if not rubric:
            raise MissingReferenceError(f"Rubric {rubric_id} not found")
        return rubric

    def _score(self, rubric: Rubric, scores: Mapping[str, float], client_score: Optional[str]) -> str:
        definition = RubricDefinition.model_validate(rubric)
        check_score_limits(definition, scores)
        overall = overall_score_string(definition, scores)
        if client_score is not None and not _same_score(client_score, overall):
            logger.warning(
                f"Client overall score ignored: rubric_id={rubric.id}, "
                f"client={client_score!r}, computed={overall}"
            )
        return overall

    def create(self, data: EvaluationCreate) -> Evaluation:
        self._require_candidate(data.candidate_id)
        rubric = self._require_rubric(data.rubric_id)

        evaluation = self._save(Evaluation(
            candidate_id=data.candidate_id,
            rubric_id=data.rubric_id,
            scores=dict(data.scores),
            overall_score=self._score(rubric, data.scores, data.overall_score),
            notes=data.notes,
            evaluator_name=data.evaluator_name,
            status=data.status,
        ))
        logger.info(
            f"Evaluation created: evaluation_id={evaluation.id}, candidate_id={evaluation.candidate_id}, "
            f"rubric_id={evaluation.rubric_id}, status={evaluation.status}, overall={evaluation.overall_score}"
        )
        return evaluation

    def update(self, evaluation_id: int, data: EvaluationUpdate) -> Optional[Evaluation]:
        evaluation = self.get(evaluation_id)
        if not evaluation:
            return None

        update_data = data.model_dump(exclude_unset=True)
        client_score = update_data.pop("overall_score", None)
        for field in ("candidate_id", "rubric_id", "scores", "evaluator_name", "status"):
            if field in update_data and update_data[field] is None:
                update_data.pop(field)

        if "candidate_id" in update_data:
            self._require_candidate(update_data["candidate_id"])

        if "rubric_id" in update_data or "scores" in update_data:
            rubric = self._require_rubric(update_data.get("rubric_id", evaluation.rubric_id))
            scores = update_data.get("scores", evaluation.scores or {})
            update_data["overall_score"] = self._score(rubric, scores, client_score)
        elif client_score is not None and not _same_score(client_score, evaluation.overall_score):
            logger.warning(
                f"Client overall score ignored: evaluation_id={evaluation_id}, client={client_score!r}"
            )

        for field, value in update_data.items():
            setattr(evaluation, field, value)
        evaluation.updated_at = func.now()

        evaluation = self._save(evaluation)
        logger.info(
            f"Evaluation updated: evaluation_id={evaluation.id}, fields={sorted(update_data)}, "
            f"status={evaluation.status}"
        )
        return evaluation

    def delete(self, evaluation_id: int) -> bool:
        evaluation = self.get(evaluation_id)
        if not evaluation:
            return False

        self._remove(evaluation)
        logger.info(f"Evaluation deleted: evaluation_id={evaluation_id}")
        return True


def _same_score(client_score: str, computed: str) -> bool:
    try:
        return Decimal(str(client_score)) == Decimal(computed)
    except InvalidOperation:
        return False
