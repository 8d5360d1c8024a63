"""AI assistant chat schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

MAX_MESSAGE_LENGTH = 4000


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)
    category: str = Field(default="general", min_length=1, max_length=64)


class ChatResponse(BaseModel):
    response: str
    timestamp: datetime


class ChatLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    prompt: str
    response: str
    category: str
    rating: int | None
    timestamp: datetime
