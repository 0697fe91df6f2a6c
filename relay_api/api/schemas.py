from typing import Optional

from pydantic import BaseModel


class ChatRequest(BaseModel):
    """Request schema for the chat endpoint."""

    # Optional at the schema level so that a missing message is reported as
    # such instead of as a generic validation failure.
    message: Optional[str] = None


class ChatResponse(BaseModel):
    """Response schema for the chat endpoint."""

    response: str


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "ok"
