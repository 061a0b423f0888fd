from __future__ import annotations
from typing import Optional, Literal, Dict, Any
from pydantic import BaseModel, Field


Role = Literal["user", "assistant"]


class HistoryMessage(BaseModel):
    role: Role = Field(default="user")
    content: str = ""


class StoredMessage(HistoryMessage):
    id: int
    user_id: int
    deleted: int = 0
    created_at: str
    trashed_at: Optional[str] = None


class ToolResult(BaseModel):
    """Text produced by a structured book operation plus whether it belongs in history."""

    text: str
    save_to_history: bool = True


class Decision(BaseModel):
    """What the decision oracle wants done with a user turn.

    Either ``function_name`` is set (with its ``arguments``) or ``text`` holds
    a direct conversational answer. Both may be set when the model also
    emitted text alongside the call.
    """

    text: Optional[str] = None
    function_name: Optional[str] = None
    arguments: Dict[str, Any] = Field(default_factory=dict)

    @property
    def is_function_call(self) -> bool:
        return self.function_name is not None


class SessionState(BaseModel):
    reset_pending: bool = False

