# tests/conftest.py

"""
Pytest Fixtures - base SQLite en memoria, cuestionario sembrado y TestClient.

Cuestionario de prueba (versión v1):
- Q1 DOMINANCIA:   A=0, B=10
- Q2 INFLUENCIA:   A=0, B=5, C=10
- Q3 ESTABILIDADE: A=-5, B=5
- Q4 CONFORMIDADE: A=0, B=10
- Q5 ESTABILIDADE: A=0, B=10 (B cuenta para INFLUENCIA)
"""

import copy
import os

os.environ["API_KEY"] = "test-key"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from adpc.db.base import Base
from adpc.db.seed import seed_questionnaire
from adpc.db.session import Database
from adpc.main import create_app
from adpc.models.questionnaire import Question
from adpc.schemas.submissions import ResponseIn


QUESTIONNAIRE = {
    "version": "v1",
    "questions": [
        {"code": "Q1", "text": "Decido rápido", "dimension": "DOMINANCIA", "options": [
            {"code": "A", "text": "Nunca", "weight": 0},
            {"code": "B", "text": "Sempre", "weight": 10},
        ]},
        {"code": "Q2", "text": "Gosto de falar em público", "dimension": "INFLUENCIA", "options": [
            {"code": "A", "text": "Não", "weight": 0},
            {"code": "B", "text": "Às vezes", "weight": 5},
            {"code": "C", "text": "Sim", "weight": 10},
        ]},
        {"code": "Q3", "text": "Prefiro rotina", "dimension": "ESTABILIDADE", "options": [
            {"code": "A", "text": "Não", "weight": -5},
            {"code": "B", "text": "Sim", "weight": 5},
        ]},
        {"code": "Q4", "text": "Sigo procedimentos", "dimension": "CONFORMIDADE", "options": [
            {"code": "A", "text": "Raramente", "weight": 0},
            {"code": "B", "text": "Sempre", "weight": 10},
        ]},
        {"code": "Q5", "text": "Em grupo eu", "dimension": "ESTABILIDADE", "options": [
            {"code": "A", "text": "Observo", "weight": 0},
            {"code": "B", "text": "Animo o grupo", "weight": 10, "dimension": "INFLUENCIA"},
        ]},
    ],
}


@pytest.fixture
def questionnaire_data():
    return copy.deepcopy(QUESTIONNAIRE)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================

@pytest.fixture
def engine():
    """SQLite en memoria compartido entre hilos (TestClient usa otro hilo)."""
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def database(engine):
    return Database(engine=engine)


@pytest.fixture
def db(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def questions(db):
    """Siembra el cuestionario y devuelve {code: Question} con opciones cargadas."""
    seed_questionnaire(db, QUESTIONNAIRE)
    rows = db.query(Question).filter(Question.version == "v1").all()
    return {q.code: q for q in rows}


@pytest.fixture
def answer(questions):
    """answer("Q1", "B") -> ResponseIn con los ids reales."""
    def _answer(question_code: str, option_code: str) -> ResponseIn:
        q = questions[question_code]
        opt = next(o for o in q.options if o.code == option_code)
        return ResponseIn(question_id=q.id, option_id=opt.id)
    return _answer


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture
def client(database):
    app = create_app(database=database)
    with TestClient(app) as test_client:
        test_client.headers.update({"X-API-Key": "test-key"})
        yield test_client
