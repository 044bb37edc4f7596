#!/usr/bin/env python3
# adpc/db/seed.py
"""
Carga/actualiza el cuestionario ADPC desde un JSON:

    {"version": "v1", "questions": [{"code", "text", "dimension",
        "options": [{"code", "text", "weight", "dimension"?}]}]}

Uso: python -m adpc.db.seed [ruta.json]
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

from sqlalchemy.orm import Session

from adpc.core.config import ROOT_DIR, get_settings
from adpc.core.logging import setup_logging
from adpc.db.session import Database
from adpc.models.questionnaire import Option, Question

DEFAULT_DATA_PATH = ROOT_DIR / "data" / "adpc.v1.json"

logger = logging.getLogger(__name__)


def load_questionnaire(path: Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def seed_questionnaire(db: Session, data: dict[str, Any]) -> int:
    """
    Upsert de preguntas por (code, version) y de opciones por (question_id, code).
    Devuelve el número de preguntas procesadas. Hace commit al final.
    """
    version = data["version"]
    count = 0
    for q in data.get("questions", []):
        question = (
            db.query(Question)
            .filter(Question.code == q["code"], Question.version == version)
            .first()
        )
        if question is None:
            question = Question(code=q["code"], version=version, text=q["text"], dimension=q["dimension"])
            db.add(question)
            db.flush()
        else:
            question.text = q["text"]
            question.dimension = q["dimension"]

        existing = {o.code: o for o in question.options}
        for opt in q.get("options", []):
            option = existing.get(opt["code"])
            if option is None:
                question.options.append(Option(
                    code=opt["code"],
                    text=opt["text"],
                    weight=opt["weight"],
                    dimension=opt.get("dimension"),
                ))
            else:
                option.text = opt["text"]
                option.weight = opt["weight"]
                option.dimension = opt.get("dimension")
        count += 1

    db.commit()
    return count


def main(argv: list[str] | None = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)

    path = Path(argv[0]) if argv else DEFAULT_DATA_PATH
    data = load_questionnaire(path)
    logger.info("Seeding ADPC questionnaire version %s from %s", data["version"], path)

    database = Database(settings.db_url)
    try:
        with database.session() as db:
            n = seed_questionnaire(db, data)
    finally:
        database.dispose()
    logger.info("Seed finished: %d questions", n)


if __name__ == "__main__":
    main()
