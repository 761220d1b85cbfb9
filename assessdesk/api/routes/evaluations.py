"""
Evaluation endpoints.

The overall score is always computed here from the rubric and the
submitted scores; any `overallScore` sent by the client is advisory.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from assessdesk.db.session import get_db
from assessdesk.schemas.evaluation import (
    EvaluationCreate,
    EvaluationUpdate,
    EvaluationResponse,
    EvaluationWithDetailsResponse,
)
from assessdesk.services.repository import EvaluationRepository, MissingReferenceError
from assessdesk.services.scoring import InvalidScoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/evaluations", tags=["Evaluations"])


def _not_found():
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Evaluation not found"
    )


@router.get("", status_code=status.HTTP_200_OK, response_model=List[EvaluationWithDetailsResponse])
def list_evaluations(db: Session = Depends(get_db)):
    try:
        evaluations = EvaluationRepository(db).list_with_details()
        logger.debug(f"Evaluations listed: total={len(evaluations)}")
        return [EvaluationWithDetailsResponse.model_validate(e) for e in evaluations]
    except Exception as e:
        logger.error(f"Failed to fetch evaluations: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch evaluations"
        )


@router.get("/{evaluation_id}", status_code=status.HTTP_200_OK, response_model=EvaluationWithDetailsResponse)
def get_evaluation(evaluation_id: int, db: Session = Depends(get_db)):
    try:
        evaluation = EvaluationRepository(db).get_with_details(evaluation_id)
        if not evaluation:
            raise _not_found()
        return EvaluationWithDetailsResponse.model_validate(evaluation)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch evaluation: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch evaluation"
        )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=EvaluationResponse)
def create_evaluation(evaluation_data: EvaluationCreate, db: Session = Depends(get_db)):
    """
    Save an evaluation as draft or completed.

    Returns 400 when the candidate or rubric does not exist or a score is
    above its criterion's max score.
    """
    try:
        evaluation = EvaluationRepository(db).create(evaluation_data)
        return EvaluationResponse.model_validate(evaluation)
    except (MissingReferenceError, InvalidScoreError) as e:
        logger.warning(f"Evaluation rejected: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Failed to create evaluation: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create evaluation"
        )


@router.put("/{evaluation_id}", status_code=status.HTTP_200_OK, response_model=EvaluationResponse)
def update_evaluation(evaluation_id: int, evaluation_data: EvaluationUpdate, db: Session = Depends(get_db)):
    """
    Update only the provided fields.

    Status can be set to draft or completed at any time; completed
    evaluations stay editable.
    """
    try:
        evaluation = EvaluationRepository(db).update(evaluation_id, evaluation_data)
        if not evaluation:
            raise _not_found()
        return EvaluationResponse.model_validate(evaluation)
    except HTTPException:
        raise
    except (MissingReferenceError, InvalidScoreError) as e:
        logger.warning(f"Evaluation update rejected: evaluation_id={evaluation_id}, reason={e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Failed to update evaluation: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update evaluation"
        )


@router.delete("/{evaluation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_evaluation(evaluation_id: int, db: Session = Depends(get_db)):
    try:
        if not EvaluationRepository(db).delete(evaluation_id):
            raise _not_found()
        return None
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete evaluation: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete evaluation"
        )
