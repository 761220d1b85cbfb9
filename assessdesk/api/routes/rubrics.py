"""
Rubric endpoints.

CRUD for scoring templates, file import, and a live score preview used
while an evaluation is being filled in.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File
from sqlalchemy.orm import Session

from assessdesk.db.session import get_db
from assessdesk.schemas.rubric import (
    RubricCreate,
    RubricUpdate,
    RubricResponse,
    RubricDefinition,
    ScorePreviewRequest,
    ScorePreviewResponse,
)
from assessdesk.services.repository import RubricRepository, ReferenceInUseError
from assessdesk.services.rubric_import import parse_rubric_file, RubricImportError
from assessdesk.services.scoring import (
    InvalidScoreError,
    check_score_limits,
    compute_progress,
    overall_score_string,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rubrics", tags=["Rubrics"])


def _not_found():
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Rubric not found"
    )


@router.get("", status_code=status.HTTP_200_OK, response_model=List[RubricResponse])
def list_rubrics(db: Session = Depends(get_db)):
    """List all rubrics in creation order."""
    try:
        rubrics = RubricRepository(db).list()
        logger.debug(f"Rubrics listed: total={len(rubrics)}")
        return [RubricResponse.model_validate(r) for r in rubrics]
    except Exception as e:
        logger.error(f"Failed to fetch rubrics: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch rubrics"
        )


@router.get("/{rubric_id}", status_code=status.HTTP_200_OK, response_model=RubricResponse)
def get_rubric(rubric_id: int, db: Session = Depends(get_db)):
    try:
        rubric = RubricRepository(db).get(rubric_id)
        if not rubric:
            raise _not_found()
        return RubricResponse.model_validate(rubric)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch rubric: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch rubric"
        )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=RubricResponse)
def create_rubric(rubric_data: RubricCreate, db: Session = Depends(get_db)):
    """
    Create a rubric.

    `maxScore` defaults to the sum of the criteria's max scores.
    """
    try:
        rubric = RubricRepository(db).create(rubric_data)
        return RubricResponse.model_validate(rubric)
    except Exception as e:
        logger.error(f"Failed to create rubric: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create rubric"
        )


@router.post("/import", status_code=status.HTTP_201_CREATED, response_model=RubricResponse)
async def import_rubric(file: UploadFile = File(...), db: Session = Depends(get_db)):
    """
    Import a rubric from an uploaded JSON or CSV file.

    CSV files need `name` and `description` columns and may carry `maxScore`;
    each row becomes one criterion.
    """
    try:
        content = await file.read()
        rubric_data = parse_rubric_file(content, file.content_type, file.filename)
        rubric = RubricRepository(db).create(rubric_data)
        logger.info(f"Rubric imported: rubric_id={rubric.id}, filename={file.filename}")
        return RubricResponse.model_validate(rubric)
    except RubricImportError as e:
        logger.warning(f"Rubric import rejected: filename={file.filename}, reason={e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Failed to import rubric: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to import rubric"
        )
    finally:
        await file.close()


@router.put("/{rubric_id}", status_code=status.HTTP_200_OK, response_model=RubricResponse)
def update_rubric(rubric_id: int, rubric_data: RubricUpdate, db: Session = Depends(get_db)):
    """
    Update only the provided fields of a rubric.

    Existing evaluations keep the overall score they were saved with.
    """
    try:
        rubric = RubricRepository(db).update(rubric_id, rubric_data)
        if not rubric:
            raise _not_found()
        return RubricResponse.model_validate(rubric)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update rubric: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update rubric"
        )


@router.delete("/{rubric_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_rubric(rubric_id: int, db: Session = Depends(get_db)):
    """Delete a rubric. Refused with 409 while evaluations use it."""
    try:
        if not RubricRepository(db).delete(rubric_id):
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
        logger.error(f"Failed to delete rubric: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete rubric"
        )


@router.post("/{rubric_id}/preview", status_code=status.HTTP_200_OK, response_model=ScorePreviewResponse)
def preview_score(rubric_id: int, preview: ScorePreviewRequest, db: Session = Depends(get_db)):
    """
    Overall score and completion percentage for scores entered so far. Nothing is saved.

    Scores are checked against criterion max scores the same way saving an
    evaluation checks them, so a 400 here means the evaluation would be rejected too.
    """
    try:
        rubric = RubricRepository(db).get(rubric_id)
        if not rubric:
            raise _not_found()

        definition = RubricDefinition.model_validate(rubric)
        check_score_limits(definition, preview.scores)
        return ScorePreviewResponse(
            overall_score=overall_score_string(definition, preview.scores),
            progress=compute_progress(definition, preview.scores),
        )
    except HTTPException:
        raise
    except InvalidScoreError as e:
        logger.warning(f"Score preview rejected: rubric_id={rubric_id}, reason={e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        logger.error(f"Failed to preview score: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to preview score"
        )
