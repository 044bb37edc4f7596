# adpc/models/submission.py
import uuid

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, UniqueConstraint, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from adpc.db.base_class import Base

# JSONB en Postgres, JSON genérico en el resto (SQLite en tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


class Submission(Base):
    __tablename__ = "adpc_submissions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String, nullable=False, index=True)   # referencia externa, sin FK
    version = Column(String, nullable=False)
    status = Column(String, nullable=False)                # PROCESSED
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    responses = relationship("SubmissionResponse", back_populates="submission", cascade="all, delete-orphan")
    result = relationship("Result", back_populates="submission", uselist=False)


class SubmissionResponse(Base):
    __tablename__ = "adpc_responses"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    submission_id = Column(Uuid(as_uuid=True), ForeignKey("adpc_submissions.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = Column(Uuid(as_uuid=True), ForeignKey("adpc_questions.id"), nullable=False, index=True)
    option_id = Column(Uuid(as_uuid=True), ForeignKey("adpc_options.id"), nullable=False)

    __table_args__ = (
        UniqueConstraint("submission_id", "question_id", name="uq_adpc_response_submission_question"),
    )

    submission = relationship("Submission", back_populates="responses")


class Result(Base):
    __tablename__ = "adpc_results"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    submission_id = Column(Uuid(as_uuid=True), ForeignKey("adpc_submissions.id", ondelete="CASCADE"), nullable=False, unique=True)
    scores = Column(JSONType, nullable=False)
    primary_profile = Column(String, nullable=False)
    explanations = Column(JSONType, nullable=True)
    pdf_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    submission = relationship("Submission", back_populates="result")
