# adpc/api/v1/endpoints/submissions.py
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from adpc.api.deps.api_key import require_api_key
from adpc.core.errors import NotFoundError, ProcessingError, ValidationError
from adpc.db.session import get_db
from adpc.schemas.submissions import ResultOut, SubmissionIn, SubmissionOut
from adpc.services.submissions import get_result, submit

router = APIRouter(tags=["submissions"], dependencies=[Depends(require_api_key)])


@router.post("/submissions", response_model=SubmissionOut)
def create_submission(
    payload: SubmissionIn,
    request: Request,
    db: Session = Depends(get_db),
):
    request.state.audit_body = payload.model_dump(mode="json")
    try:
        outcome = submit(db, payload.user_id, payload.responses, payload.version)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.as_dict())
    except ProcessingError as e:
        raise HTTPException(
            status_code=500,
            detail={"error": "processing_failed", "detail": str(e.cause)},
        )

    return SubmissionOut(
        submission_id=outcome.submission_id,
        result={
            "scores": outcome.scores,
            "primary_profile": outcome.primary_profile,
            "explanations": outcome.explanations,
        },
    )


@router.get("/results/{submission_id}", response_model=ResultOut)
def read_result(
    submission_id: UUID,
    db: Session = Depends(get_db),
):
    try:
        result = get_result(db, submission_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Resultado no encontrado")
    return ResultOut.model_validate(result)
