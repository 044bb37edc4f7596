# adpc/services/validation.py
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Optional, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from adpc.core.config import UNKNOWN_DIMENSION
from adpc.core.errors import ValidationError
from adpc.services.questionnaire import find_options_by_ids, find_questions_by_ids


@dataclass(frozen=True)
class ScoredResponse:
    """Respuesta validada y enriquecida con los datos necesarios para puntuar."""
    question_id: UUID
    option_id: UUID
    dimension: str              # dimensión resuelta de la opción elegida
    weight: float
    question_dimension: str
    min_weight: float           # peso mínimo entre las opciones de la pregunta
    max_weight: float


@dataclass(frozen=True)
class _OptionMeta:
    question_id: UUID
    weight: float
    dimension: str


def validate_responses(
    db: Session,
    user_id: Optional[str],
    responses: Optional[Sequence[Any]],
    version: Optional[str] = None,
) -> list[ScoredResponse]:
    """
    Valida un lote de respuestas (objetos con `question_id` y `option_id`)
    contra el cuestionario. Solo lectura: no escribe nada.
    """
    if not responses:
        raise ValidationError("empty_responses")
    if user_id is None or not str(user_id).strip():
        raise ValidationError("missing_user")

    q_ids = [r.question_id for r in responses]
    repeated = [str(qid) for qid, n in Counter(q_ids).items() if n > 1]
    if repeated:
        raise ValidationError("duplicate_question", repeated)

    # La existencia se comprueba por id; la versión no filtra
    questions = find_questions_by_ids(db, q_ids)
    found = {q.id: q for q in questions}
    missing = [str(qid) for qid in q_ids if qid not in found]
    if missing:
        raise ValidationError("question_not_found", missing)

    option_meta: dict[UUID, _OptionMeta] = {}
    bounds: dict[UUID, tuple[float, float]] = {}
    for q in questions:
        weights = [float(o.weight or 0) for o in q.options]
        bounds[q.id] = (min(weights), max(weights)) if weights else (0.0, 0.0)
        for opt in q.options:
            option_meta[opt.id] = _OptionMeta(
                question_id=q.id,
                weight=float(opt.weight or 0),
                dimension=opt.dimension or q.dimension or UNKNOWN_DIMENSION,
            )

    # Opciones que no son de las preguntas del lote: existen en otra pregunta o no existen
    unresolved = [r.option_id for r in responses if r.option_id not in option_meta]
    foreign = {o.id: o.question_id for o in find_options_by_ids(db, unresolved)}

    scored: list[ScoredResponse] = []
    for r in responses:
        meta = option_meta.get(r.option_id)
        if meta is None and r.option_id not in foreign:
            raise ValidationError("option_not_found", str(r.option_id))
        if meta is None or meta.question_id != r.question_id:
            raise ValidationError(
                "option_question_mismatch",
                {"option_id": str(r.option_id), "question_id": str(r.question_id)},
            )
        q = found[r.question_id]
        lo, hi = bounds[q.id]
        scored.append(ScoredResponse(
            question_id=r.question_id,
            option_id=r.option_id,
            dimension=meta.dimension,
            weight=meta.weight,
            question_dimension=q.dimension or UNKNOWN_DIMENSION,
            min_weight=lo,
            max_weight=hi,
        ))
    return scored
