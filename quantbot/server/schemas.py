from __future__ import annotations

from pydantic import BaseModel, Field


class WebhookRequest(BaseModel):
    call_id: str = Field(min_length=1)
    utterance: str


class WebhookResponse(BaseModel):
    response: str


class StartCallResponse(BaseModel):
    call_id: str
    message: str


class HealthResponse(BaseModel):
    status: str
    version: str
    sessions: int
