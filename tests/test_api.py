# tests/test_api.py

"""
API Endpoint Tests - submissions, results, questions, users, auth y auditoría
"""

import uuid

from fastapi import status
from sqlalchemy.exc import OperationalError

from adpc.models.audit import AuditLog
from adpc.models.submission import Submission
from adpc.services import submissions


def _body(user_id, *answers):
    return {
        "user_id": user_id,
        "responses": [
            {"question_id": str(a.question_id), "option_id": str(a.option_id)} for a in answers
        ],
    }


class TestAuth:

    def test_missing_api_key(self, client):
        response = client.get("/api/v1/questions", headers={"X-API-Key": ""})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_wrong_api_key(self, client):
        response = client.get("/api/v1/questions", headers={"X-API-Key": "nope"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_health_is_public(self, client):
        assert client.get("/health", headers={"X-API-Key": ""}).status_code == status.HTTP_200_OK
        assert client.get("/api/v1/healthz", headers={"X-API-Key": ""}).json() == {"status": "ok"}

    def test_health_carries_request_id(self, client):
        response = client.get("/health")
        data = response.json()
        assert data["status"] == "ok"
        assert data["meta"]["request_id"] == response.headers["X-Request-Id"]

    def test_health_db(self, client):
        assert client.get("/api/v1/health/db").json() == {"db": "ok"}


class TestQuestionsEndpoint:

    def test_lists_questions_without_weights(self, client, questions):
        response = client.get("/api/v1/questions")
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["version"] == "v1"
        assert [q["code"] for q in data["questions"]] == ["Q1", "Q2", "Q3", "Q4", "Q5"]
        q2 = data["questions"][1]
        assert [o["code"] for o in q2["options"]] == ["A", "B", "C"]
        for q in data["questions"]:
            for opt in q["options"]:
                assert "weight" not in opt

    def test_unknown_version_is_empty(self, client, questions):
        data = client.get("/api/v1/questions", params={"version": "v2"}).json()
        assert data == {"version": "v2", "questions": []}


class TestSubmissionsEndpoint:

    def test_submit_and_read_result(self, client, answer):
        response = client.post("/api/v1/submissions", json=_body("u1", answer("Q1", "B")))
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["result"]["scores"] == {
            "DOMINANCIA": 100, "INFLUENCIA": 0, "ESTABILIDADE": 0, "CONFORMIDADE": 0,
        }
        assert data["result"]["primary_profile"] == "DOMINANCIA"
        assert data["result"]["explanations"] == data["result"]["scores"]

        first = client.get(f"/api/v1/results/{data['submission_id']}")
        second = client.get(f"/api/v1/results/{data['submission_id']}")
        assert first.status_code == status.HTTP_200_OK
        assert first.json() == second.json()

        result = first.json()
        assert result["submission_id"] == data["submission_id"]
        assert result["pdf_url"] is None
        assert result["submission"]["user_id"] == "u1"
        assert result["submission"]["status"] == "PROCESSED"
        assert result["submission"]["version"] == "v1"
        assert len(result["submission"]["responses"]) == 1

    def test_submit_twice_creates_two_submissions(self, client, answer, db):
        body = _body("u1", answer("Q2", "B"))
        a = client.post("/api/v1/submissions", json=body).json()
        b = client.post("/api/v1/submissions", json=body).json()
        assert a["submission_id"] != b["submission_id"]
        assert db.query(Submission).count() == 2

    def test_empty_responses(self, client, db):
        response = client.post("/api/v1/submissions", json={"user_id": "u1", "responses": []})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["detail"] == {"error": "empty_responses", "detail": None}
        assert db.query(Submission).count() == 0

    def test_missing_user(self, client, answer):
        body = _body(None, answer("Q1", "A"))
        response = client.post("/api/v1/submissions", json=body)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["detail"]["error"] == "missing_user"

    def test_duplicate_question(self, client, answer, db):
        response = client.post("/api/v1/submissions", json=_body("u1", answer("Q1", "A"), answer("Q1", "B")))
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["detail"]["error"] == "duplicate_question"
        assert db.query(Submission).count() == 0

    def test_unknown_question(self, client, questions):
        ghost = str(uuid.uuid4())
        body = {"user_id": "u1", "responses": [{"question_id": ghost, "option_id": str(uuid.uuid4())}]}
        response = client.post("/api/v1/submissions", json=body)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["detail"] == {"error": "question_not_found", "detail": [ghost]}

    def test_option_from_another_question(self, client, answer, questions, db):
        wrong = answer("Q1", "B").model_copy(update={"question_id": questions["Q2"].id})
        response = client.post("/api/v1/submissions", json=_body("u1", wrong))
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["detail"] == {
            "error": "option_question_mismatch",
            "detail": {"option_id": str(wrong.option_id), "question_id": str(questions["Q2"].id)},
        }
        assert db.query(Submission).count() == 0

    def test_unknown_option(self, client, questions):
        ghost = str(uuid.uuid4())
        body = {"user_id": "u1", "responses": [{"question_id": str(questions["Q1"].id), "option_id": ghost}]}
        response = client.post("/api/v1/submissions", json=body)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["detail"] == {"error": "option_not_found", "detail": ghost}

    def test_malformed_ids_rejected_at_boundary(self, client):
        body = {"user_id": "u1", "responses": [{"question_id": "Q1", "option_id": "B"}]}
        response = client.post("/api/v1/submissions", json=body)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_storage_failure_returns_500(self, client, answer, db, monkeypatch):
        def broken_create_result(*args, **kwargs):
            raise OperationalError("INSERT INTO adpc_results", {}, Exception("database is down"))

        monkeypatch.setattr(submissions, "create_result", broken_create_result)

        response = client.post("/api/v1/submissions", json=_body("u1", answer("Q1", "B")))
        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["detail"]["error"] == "processing_failed"
        assert db.query(Submission).count() == 0

    def test_result_not_found(self, client):
        response = client.get(f"/api/v1/results/{uuid.uuid4()}")
        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestUsersEndpoint:

    def test_upsert_by_email(self, client):
        created = client.post("/api/v1/users", json={"email": "Ana@Example.com", "name": "Ana"})
        assert created.status_code == status.HTTP_200_OK
        assert created.json()["email"] == "ana@example.com"

        updated = client.post("/api/v1/users", json={"email": "ana@example.com", "name": "Ana Souza"})
        assert updated.json()["id"] == created.json()["id"]
        assert updated.json()["name"] == "Ana Souza"

    def test_email_required(self, client):
        response = client.post("/api/v1/users", json={"name": "Sem email"})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestAuditMiddleware:

    def test_request_id_header_and_audit_row(self, client, answer, db):
        response = client.post("/api/v1/submissions", json=_body("u1", answer("Q3", "B")))
        request_id = response.headers["X-Request-Id"]

        log = db.query(AuditLog).filter(AuditLog.request_id == request_id).one()
        assert log.action == "POST /api/v1/submissions"
        assert log.status_code == status.HTTP_200_OK
        assert log.payload["body"]["user_id"] == "u1"
        assert log.payload["body"]["responses"][0]["option_id"] == str(answer("Q3", "B").option_id)

    def test_user_body_is_audited(self, client, db):
        response = client.post("/api/v1/users", json={"email": "bia@example.com", "name": "Bia"})
        log = db.query(AuditLog).filter(AuditLog.request_id == response.headers["X-Request-Id"]).one()
        assert log.payload["body"] == {"email": "bia@example.com", "name": "Bia"}

    def test_get_requests_audit_without_body(self, client, db):
        response = client.get("/api/v1/questions")
        log = db.query(AuditLog).filter(AuditLog.request_id == response.headers["X-Request-Id"]).one()
        assert log.payload["body"] is None

    def test_health_not_audited(self, client, db):
        client.get("/health")
        assert db.query(AuditLog).count() == 0
