from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel


class ChatRequest(BaseModel):
    query: str
    user_id: int = 0


class ChatResponseBody(BaseModel):
    text: str
    source: str = "bookbot"
    timestamp: datetime


class ChatResponse(BaseModel):
    response: ChatResponseBody


class HealthResponse(BaseModel):
    status: str = "ok"
    books: int = 0
