from __future__ import annotations

from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class OptionOut(BaseModel):
    # sin weight: los pesos no se exponen al cliente
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    text: str


class QuestionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    text: str
    dimension: str
    options: List[OptionOut]


class QuestionnaireOut(BaseModel):
    version: str
    questions: List[QuestionOut]
