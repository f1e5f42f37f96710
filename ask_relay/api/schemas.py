from __future__ import annotations

from pydantic import BaseModel, StrictStr


class AskRequest(BaseModel):
    # Blank questions are rejected by the relay, not here, so both paths
    # share the same error detail.
    question: StrictStr


class AskResponse(BaseModel):
    question: str
    answer: str


class ErrorResponse(BaseModel):
    detail: str


class HealthResponse(BaseModel):
    ok: bool = True


class KnowledgeDocument(BaseModel):
    name: str
    text: str
