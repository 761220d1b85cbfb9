"""
Candidate endpoints.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from assessdesk.db.session import get_db
from assessdesk.schemas.candidate import CandidateCreate, CandidateUpdate, CandidateResponse
from assessdesk.schemas.evaluation import CandidateWithEvaluationsResponse, EvaluationWithDetailsResponse
from assessdesk.services.repository import CandidateRepository, EvaluationRepository, ReferenceInUseError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/candidates", tags=["Candidates"])


def _not_found():
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Candidate not found"
    )


@router.get("", status_code=status.HTTP_200_OK, response_model=List[CandidateWithEvaluationsResponse])
def list_candidates(db: Session = Depends(get_db)):
    """
    List candidates with their evaluations.

    `averageScore` covers completed evaluations only and is null for a
    candidate who has none.
    """
    try:
        results = []
        for candidate, average in CandidateRepository(db).list_with_evaluations():
            response = CandidateWithEvaluationsResponse.model_validate(candidate)
            response.average_score = average
            results.append(response)
        logger.debug(f"Candidates listed: total={len(results)}")
        return results
    except Exception as e:
        logger.error(f"Failed to fetch candidates: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch candidates"
        )


@router.get("/{candidate_id}", status_code=status.HTTP_200_OK, response_model=CandidateResponse)
def get_candidate(candidate_id: int, db: Session = Depends(get_db)):
    try:
        candidate = CandidateRepository(db).get(candidate_id)
        if not candidate:
            raise _not_found()
        return CandidateResponse.model_validate(candidate)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch candidate: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch candidate"
        )


@router.get(
    "/{candidate_id}/evaluations",
    status_code=status.HTTP_200_OK,
    response_model=List[EvaluationWithDetailsResponse],
)
def list_candidate_evaluations(candidate_id: int, db: Session = Depends(get_db)):
    try:
        if not CandidateRepository(db).get(candidate_id):
            raise _not_found()
        evaluations = EvaluationRepository(db).list_for_candidate(candidate_id)
        return [EvaluationWithDetailsResponse.model_validate(e) for e in evaluations]
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch candidate evaluations: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch candidate evaluations"
        )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CandidateResponse)
def create_candidate(candidate_data: CandidateCreate, db: Session = Depends(get_db)):
    try:
        candidate = CandidateRepository(db).create(candidate_data)
        return CandidateResponse.model_validate(candidate)
    except Exception as e:
        logger.error(f"Failed to create candidate: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create candidate"
        )


@router.put("/{candidate_id}", status_code=status.HTTP_200_OK, response_model=CandidateResponse)
def update_candidate(candidate_id: int, candidate_data: CandidateUpdate, db: Session = Depends(get_db)):
    try:
        candidate = CandidateRepository(db).update(candidate_id, candidate_data)
        if not candidate:
            raise _not_found()
        return CandidateResponse.model_validate(candidate)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update candidate: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update candidate"
        )


@router.delete("/{candidate_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_candidate(candidate_id: int, db: Session = Depends(get_db)):
    """Delete a candidate. Refused with 409 while the candidate has evaluations."""
    try:
        if not CandidateRepository(db).delete(candidate_id):
            raise _not_found()
        return None
    except HTTPException:
        raise
    except ReferenceInUseError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Failed to delete candidate: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete candidate"
        )
