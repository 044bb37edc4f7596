# adpc/services/submissions.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from adpc.core.config import SUBMISSION_STATUS_PROCESSED, settings
from adpc.core.errors import NotFoundError, ProcessingError, ValidationError
from adpc.models.submission import Result, Submission, SubmissionResponse
from adpc.services.scoring import compute_scores
from adpc.services.validation import validate_responses

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionOutcome:
    submission_id: UUID
    scores: dict[str, int]
    primary_profile: str
    explanations: dict[str, Any]


def create_submission(
    db: Session,
    *,
    user_id: str,
    version: str,
    status: str,
    responses: Sequence[Any],
) -> Submission:
    submission = Submission(user_id=user_id, version=version, status=status)
    submission.responses = [
        SubmissionResponse(question_id=r.question_id, option_id=r.option_id)
        for r in responses
    ]
    db.add(submission)
    db.flush()
    return submission


def create_result(
    db: Session,
    *,
    submission_id: UUID,
    scores: dict[str, int],
    primary_profile: str,
    explanations: Optional[dict[str, Any]] = None,
) -> Result:
    result = Result(
        submission_id=submission_id,
        scores=scores,
        primary_profile=primary_profile,
        explanations=explanations,
        pdf_url=None,
    )
    db.add(result)
    db.flush()
    return result


def submit(
    db: Session,
    user_id: Optional[str],
    responses: Optional[Sequence[Any]],
    version: Optional[str] = None,
) -> SubmissionOutcome:
    """
    Valida, persiste submission + respuestas, puntúa y persiste el resultado
    en una sola transacción. No es idempotente: cada llamada es una evaluación.
    """
    try:
        scored = validate_responses(db, user_id, responses, version)
    except ValidationError as exc:
        # cierra la transacción de lectura; no se escribió nada
        db.rollback()
        logger.info("Submission rejected: %s", exc.kind, extra={"detail": exc.detail})
        raise

    try:
        submission = create_submission(
            db,
            user_id=str(user_id),
            version=version or settings.DEFAULT_VERSION,
            status=SUBMISSION_STATUS_PROCESSED,
            responses=responses,
        )
        submission_id = submission.id
        outcome = compute_scores(scored)
        create_result(
            db,
            submission_id=submission_id,
            scores=outcome.scores,
            primary_profile=outcome.primary_profile,
            explanations=dict(outcome.scores),
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Submission processing failed")
        raise ProcessingError(exc) from exc

    logger.info(
        "Submission %s processed (profile=%s)", submission_id, outcome.primary_profile,
        extra={"submission_id": str(submission_id)},
    )
    return SubmissionOutcome(
        submission_id=submission_id,
        scores=outcome.scores,
        primary_profile=outcome.primary_profile,
        explanations=dict(outcome.scores),
    )


def get_result(db: Session, submission_id: UUID) -> Result:
    stmt = (
        select(Result)
        .options(selectinload(Result.submission).selectinload(Submission.responses))
        .where(Result.submission_id == submission_id)
    )
    result = db.scalars(stmt).first()
    if result is None:
        raise NotFoundError("result", str(submission_id))
    return result
