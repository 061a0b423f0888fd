from __future__ import annotations
from typing import Dict, Hashable

from ..models.schemas import SessionState


class SessionStore:
    """Explicit per-session state. Only the reset flow sets ``reset_pending``.

    Sessions are only held while a reset is pending; anything else reads as
    the default state.
    """

    def __init__(self):
        self._states: Dict[Hashable, SessionState] = {}

    def get(self, session_id: Hashable) -> SessionState:
        return self._states.get(session_id) or SessionState()

    def mark_reset(self, session_id: Hashable) -> None:
        self._states[session_id] = SessionState(reset_pending=True)

    def consume_reset(self, session_id: Hashable) -> bool:
        state = self._states.pop(session_id, None)
        return state is not None and state.reset_pending
