from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# ---------- Entradas ----------

class ResponseIn(BaseModel):
    question_id: UUID
    option_id: UUID


class SubmissionIn(BaseModel):
    # user_id y responses se validan en el motor para devolver errores tipados
    user_id: Optional[str] = None
    version: Optional[str] = None
    responses: List[ResponseIn] = Field(default_factory=list)


# ---------- Salidas ----------

class ResultPayloadOut(BaseModel):
    scores: dict[str, int]
    primary_profile: str
    explanations: dict[str, Any]


class SubmissionOut(BaseModel):
    submission_id: UUID
    result: ResultPayloadOut


class ResponseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    question_id: UUID
    option_id: UUID


class SubmissionMetaOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    version: str
    status: str
    created_at: Optional[datetime] = None
    responses: List[ResponseOut] = Field(default_factory=list)


class ResultOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    submission_id: UUID
    scores: dict[str, int]
    primary_profile: str
    explanations: Optional[dict[str, Any]] = None
    pdf_url: Optional[str] = None
    created_at: Optional[datetime] = None
    submission: SubmissionMetaOut
