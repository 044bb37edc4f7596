# adpc/services/questionnaire.py
from __future__ import annotations

from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from adpc.models.questionnaire import Option, Question


def find_questions_by_ids(db: Session, ids: Iterable[UUID], version: Optional[str] = None) -> list[Question]:
    """
    Carga las preguntas (con sus opciones) cuyo id está en `ids`.
    Solo filtra por versión si se indica explícitamente.
    """
    ids = list(set(ids))
    if not ids:
        return []
    stmt = select(Question).options(selectinload(Question.options)).where(Question.id.in_(ids))
    if version is not None:
        stmt = stmt.where(Question.version == version)
    return list(db.scalars(stmt).all())


def list_questions(db: Session, version: str) -> list[Question]:
    stmt = (
        select(Question)
        .options(selectinload(Question.options))
        .where(Question.version == version)
        .order_by(Question.code.asc())
    )
    return list(db.scalars(stmt).all())


def find_options_by_ids(db: Session, ids: Iterable[UUID]) -> list[Option]:
    ids = list(set(ids))
    if not ids:
        return []
    return list(db.scalars(select(Option).where(Option.id.in_(ids))).all())
