# adpc/models/questionnaire.py
import uuid

from sqlalchemy import Column, Float, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from adpc.db.base_class import Base


class Question(Base):
    __tablename__ = "adpc_questions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    code = Column(String, nullable=False)         # Q01..Qnn
    text = Column(Text, nullable=False)
    dimension = Column(String, nullable=False, index=True)
    version = Column(String, nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("code", "version", name="uq_adpc_question_code_version"),
    )

    options = relationship(
        "Option",
        back_populates="question",
        cascade="all, delete-orphan",
        order_by="Option.code",
    )


class Option(Base):
    __tablename__ = "adpc_options"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    question_id = Column(Uuid(as_uuid=True), ForeignKey("adpc_questions.id", ondelete="CASCADE"), nullable=False, index=True)
    code = Column(String, nullable=False)         # A, B, C...
    text = Column(Text, nullable=False)
    weight = Column(Float, nullable=False, default=0)
    dimension = Column(String, nullable=True)     # NULL => dimensión de la pregunta

    __table_args__ = (
        UniqueConstraint("question_id", "code", name="uq_adpc_option_question_code"),
    )

    question = relationship("Question", back_populates="options")
