# adpc/api/v1/endpoints/questions.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from adpc.api.deps.api_key import require_api_key
from adpc.core.config import get_settings
from adpc.db.session import get_db
from adpc.schemas.questions import QuestionnaireOut, QuestionOut
from adpc.services.questionnaire import list_questions

router = APIRouter(tags=["questions"], dependencies=[Depends(require_api_key)])


@router.get("/questions", response_model=QuestionnaireOut)
def listar_preguntas(
    version: str | None = Query(None, description="Versión del cuestionario (por defecto la configurada)"),
    db: Session = Depends(get_db),
):
    version = version or get_settings().DEFAULT_VERSION
    questions = list_questions(db, version)
    return QuestionnaireOut(
        version=version,
        questions=[QuestionOut.model_validate(q) for q in questions],
    )
